"""
VOTECHAIN v1.0 — Election.

Public entry point that wires a voter registry, a candidate roster and
a vote ledger together. Rejections raised by the ledger are reported
back as ``VoteOutcome`` values instead of propagating.
"""

from __future__ import annotations

import logging
from typing import Any

from votechain.exceptions import VoteRejected
from votechain.ledger import VoteLedger
from votechain.models import DuplicatePolicy, VoteOutcome
from votechain.registry import VoterRegistry
from votechain.roster import CandidateRoster
from votechain.tally import ElectionResult, compute_results

logger = logging.getLogger("votechain.election")


class Election:
    """One election run: its own registry, roster and ledger."""

    def __init__(self, policy: DuplicatePolicy | str | None = None):
        self.registry = VoterRegistry()
        self.roster = CandidateRoster()
        self.ledger = VoteLedger(self.registry, self.roster, policy=policy)

    def register_voter(self, voter_id: int) -> bool:
        return self.registry.register(voter_id)

    def declare_candidate(self, name: str) -> bool:
        return self.roster.declare(name)

    def cast_vote(self, voter_id: int, candidate: str) -> VoteOutcome:
        """Submit a vote and report what happened to it."""
        try:
            self.ledger.append(voter_id, candidate)
        except VoteRejected as e:
            logger.debug("Rejected: %s", e)
            return e.outcome
        return VoteOutcome.RECORDED

    def get_results(self) -> ElectionResult:
        return compute_results(self.ledger)

    def get_chain(self) -> list[dict[str, Any]]:
        return [block.to_dict() for block in self.ledger]

    def verify_chain(self) -> bool:
        return self.ledger.verify_chain()

    def audit(self) -> dict[str, Any]:
        return self.ledger.audit()

    def roster_counts(self) -> dict[str, int]:
        """Running counters kept by the roster (not used for results)."""
        return self.roster.counts()
