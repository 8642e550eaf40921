"""
VOTECHAIN v1.0 — Custom Exceptions.

Typed error hierarchy for vote rejections. The ledger raises these;
the election facade turns them into reported outcomes.
"""

from __future__ import annotations

from votechain.models import VoteOutcome


class VotechainError(Exception):
    """Base exception for all VOTECHAIN errors."""


class VoteRejected(VotechainError):
    """A vote was refused and the ledger was left unchanged."""

    outcome: VoteOutcome

    def __init__(self, voter_id, candidate, message: str | None = None):
        self.voter_id = voter_id
        self.candidate = candidate
        super().__init__(message or self.describe())

    def describe(self) -> str:
        return f"vote by {self.voter_id!r} for {self.candidate!r} rejected"


class UnregisteredVoter(VoteRejected):
    """Raised when the voter ID was never registered."""

    outcome = VoteOutcome.UNREGISTERED_VOTER

    def describe(self) -> str:
        return f"Invalid voter ID: {self.voter_id}"


class DuplicateVote(VoteRejected):
    """Raised when the voter already has a vote on the chain."""

    outcome = VoteOutcome.DUPLICATE_VOTE

    def describe(self) -> str:
        return f"Voter {self.voter_id} has already cast a vote"


class UnknownCandidate(VoteRejected):
    """Raised when the candidate is not on the roster."""

    outcome = VoteOutcome.UNKNOWN_CANDIDATE

    def describe(self) -> str:
        return f"Candidate {self.candidate} does not exist"


class HashEncodingFailure(VoteRejected):
    """Raised when a block's content cannot be serialized for hashing."""

    outcome = VoteOutcome.HASH_ENCODING_FAILURE

    def describe(self) -> str:
        return f"Cannot encode vote by {self.voter_id!r} for {self.candidate!r}"


class RosterSealed(VotechainError):
    """Raised when a candidate is declared after voting has started."""


class RegistrySealed(VotechainError):
    """Raised when a voter is registered after voting has started."""


class ScenarioError(VotechainError):
    """Raised when a scenario file cannot be loaded or validated."""
