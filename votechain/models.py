"""
VOTECHAIN v1.0 — Ledger Data Model.

Immutable vote and block records, plus the outcome and policy enums
shared by the ledger and the election facade.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class VoteOutcome(str, Enum):
    """Result of submitting a vote."""

    RECORDED = "recorded"
    UNREGISTERED_VOTER = "unregistered_voter"
    DUPLICATE_VOTE = "duplicate_vote"
    UNKNOWN_CANDIDATE = "unknown_candidate"
    HASH_ENCODING_FAILURE = "hash_encoding_failure"

    @property
    def accepted(self) -> bool:
        return self is VoteOutcome.RECORDED


class DuplicatePolicy(str, Enum):
    """How far back the ledger looks for a previous vote by the same voter."""

    FULL_CHAIN = "full"  # every block since genesis
    LAST_BLOCK = "last"  # only the most recent block


@dataclass(frozen=True)
class Vote:
    voter_id: int
    candidate: str

    def to_dict(self) -> dict[str, Any]:
        return {"voter_id": self.voter_id, "candidate": self.candidate}


@dataclass(frozen=True)
class Block:
    """One append-only record: a link to the previous digest and its votes."""

    previous_digest: str
    digest: str
    votes: tuple[Vote, ...] = field(default_factory=tuple)

    @property
    def is_genesis(self) -> bool:
        return not self.votes and self.previous_digest == ""

    def to_dict(self) -> dict[str, Any]:
        """Snapshot for display and audit."""
        return {
            "previous_digest": self.previous_digest,
            "digest": self.digest,
            "votes": [v.to_dict() for v in self.votes],
        }
