"""
VOTECHAIN v1.0 — Immutable Vote Ledger.

Append-only sequence of blocks linked by SHA-256 digests. Owns the
validation pipeline that gates every append, duplicate-vote detection
and integrity verification of the whole chain.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from typing import Any

from votechain import config
from votechain.canonical import compute_block_digest, compute_digest
from votechain.exceptions import (
    DuplicateVote,
    HashEncodingFailure,
    UnknownCandidate,
    UnregisteredVoter,
)
from votechain.models import Block, DuplicatePolicy, Vote
from votechain.registry import VoterRegistry
from votechain.roster import CandidateRoster

logger = logging.getLogger("votechain.ledger")


def _recompute(block: Block) -> str | None:
    """Digest a stored block; None if its content no longer encodes."""
    try:
        return compute_block_digest(block)
    except HashEncodingFailure:
        return None


class VoteLedger:
    """
    Hash-chained vote ledger.

    Every non-genesis block holds exactly one vote and satisfies:
        block[i].previous_digest == block[i-1].digest
        block[i].digest == H(block[i])
    """

    GENESIS_DIGEST = config.GENESIS_DIGEST

    def __init__(
        self,
        registry: VoterRegistry,
        roster: CandidateRoster,
        policy: DuplicatePolicy | str | None = None,
    ):
        self.registry = registry
        self.roster = roster
        self.policy = DuplicatePolicy(policy or config.DUPLICATE_POLICY)
        self._blocks: list[Block] = [
            Block(previous_digest="", digest=self.GENESIS_DIGEST, votes=())
        ]
        self._lock = threading.Lock()

    # ─── Read access ─────────────────────────────────────────────

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)

    @property
    def genesis(self) -> Block:
        return self._blocks[0]

    @property
    def last_block(self) -> Block:
        return self._blocks[-1]

    @property
    def head_digest(self) -> str:
        return self._blocks[-1].digest

    def __len__(self) -> int:
        return len(self._blocks)

    def __getitem__(self, index: int) -> Block:
        return self._blocks[index]

    def __iter__(self) -> Iterator[Block]:
        return iter(tuple(self._blocks))

    def has_voted(self, voter_id: int) -> bool:
        """Duplicate check according to the ledger's policy."""
        if self.policy is DuplicatePolicy.LAST_BLOCK:
            scanned = self._blocks[-1:] if len(self._blocks) > 1 else []
        else:
            scanned = self._blocks[1:]
        return any(v.voter_id == voter_id for block in scanned for v in block.votes)

    # ─── Append ──────────────────────────────────────────────────

    def append(self, voter_id: int, candidate: str) -> int:
        """Validate and seal a vote into a new block.

        Checks run in a fixed order and the first failure wins:
        registration, duplicate, candidate. Nothing is modified unless
        the block is fully built and hashed.

        Returns:
            Index of the new block.

        Raises:
            UnregisteredVoter, DuplicateVote, UnknownCandidate,
            HashEncodingFailure
        """
        with self._lock:
            if not self.registry.is_registered(voter_id):
                logger.warning("Invalid voter ID: %s", voter_id)
                raise UnregisteredVoter(voter_id, candidate)

            if self.has_voted(voter_id):
                logger.warning("Voter %s has already cast a vote.", voter_id)
                raise DuplicateVote(voter_id, candidate)

            if not self.roster.is_valid(candidate):
                logger.warning("Candidate %s does not exist.", candidate)
                raise UnknownCandidate(voter_id, candidate)

            vote = Vote(voter_id=voter_id, candidate=candidate)
            previous_digest = self.head_digest
            votes = (vote,)
            digest = compute_digest(vote, votes, previous_digest)

            self._blocks.append(
                Block(previous_digest=previous_digest, digest=digest, votes=votes)
            )
            self.registry.seal()
            self.roster.seal()
            self.roster.increment(candidate)
            index = len(self._blocks) - 1

        logger.info(
            f"Vote cast by Voter {voter_id} for {candidate} is recorded "
            f"(block {index}, hash {digest[:8]}...)"
        )
        return index

    # ─── Verification ────────────────────────────────────────────

    def verify_chain(self) -> bool:
        """Recompute every digest and link. False at the first mismatch."""
        genesis = self._blocks[0]
        if genesis.votes or genesis.previous_digest != "" or genesis.digest != self.GENESIS_DIGEST:
            logger.error("Genesis block has been altered")
            return False

        for i in range(1, len(self._blocks)):
            block = self._blocks[i]
            if len(block.votes) != 1:
                logger.error("Block %d holds %d votes", i, len(block.votes))
                return False
            if block.previous_digest != self._blocks[i - 1].digest:
                logger.error("Chain break at block %d", i)
                return False
            if _recompute(block) != block.digest:
                logger.error("Digest mismatch at block %d", i)
                return False
        return True

    def audit(self) -> dict[str, Any]:
        """
        Walk the whole chain and collect every violation.
        """
        violations = []

        genesis = self._blocks[0]
        if genesis.votes or genesis.previous_digest != "" or genesis.digest != self.GENESIS_DIGEST:
            violations.append({"block": 0, "type": "GENESIS_TAMPERED"})

        expected_prev = genesis.digest
        for i, block in enumerate(self._blocks[1:], start=1):
            if len(block.votes) != 1:
                violations.append({
                    "block": i,
                    "type": "MALFORMED_BLOCK",
                    "votes": len(block.votes),
                })
                expected_prev = block.digest
                continue

            if block.previous_digest != expected_prev:
                violations.append({
                    "block": i,
                    "type": "CHAIN_BREAK",
                    "expected_prev": expected_prev,
                    "actual_prev": block.previous_digest,
                })

            actual = _recompute(block)
            if actual != block.digest:
                violations.append({
                    "block": i,
                    "type": "DATA_TAMPERING",
                    "expected_hash": block.digest,
                    "actual_hash": actual,
                })

            expected_prev = block.digest

        if violations:
            logger.error("Ledger audit found %d violation(s)", len(violations))

        return {
            "valid": len(violations) == 0,
            "violations": violations,
            "blocks_checked": len(self._blocks),
        }
