"""
VOTECHAIN v1.0 — Tally Engine.

Re-derives per-candidate totals by walking the chain (never from the
roster counters) and resolves the winner, a tie or no winner at all.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from votechain.models import Block

WINNER = "winner"
TIE = "tie"
NO_WINNER = "no_winner"


@dataclass(frozen=True)
class ElectionResult:
    """Totals in first-vote order plus the resolved outcome."""

    counts: dict[str, int] = field(default_factory=dict)
    winner: str | None = None
    tied: tuple[str, ...] = ()

    @property
    def is_tie(self) -> bool:
        return len(self.tied) > 1

    @property
    def has_winner(self) -> bool:
        return self.winner is not None

    @property
    def status(self) -> str:
        if self.is_tie:
            return TIE
        if self.has_winner:
            return WINNER
        return NO_WINNER

    @property
    def total_votes(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "counts": dict(self.counts),
            "winner": self.winner,
            "tied": list(self.tied),
            "status": self.status,
            "total_votes": self.total_votes,
        }


def count_votes(blocks: Iterable[Block]) -> dict[str, int]:
    """Count every vote's candidate, skipping the genesis block."""
    counts: dict[str, int] = {}
    for i, block in enumerate(blocks):
        if i == 0:
            continue
        for vote in block.votes:
            counts[vote.candidate] = counts.get(vote.candidate, 0) + 1
    return counts


def resolve_winner(counts: dict[str, int]) -> ElectionResult:
    """Find the tie-set at the maximum count.

    The maximum starts at 0, so an empty mapping (or one where nobody
    received a vote) yields no winner rather than a tie.
    """
    max_votes = 0
    tie_set: list[str] = []
    for candidate, votes in counts.items():
        if votes > max_votes:
            max_votes = votes
            tie_set = [candidate]
        elif votes == max_votes and votes > 0:
            tie_set.append(candidate)

    if len(tie_set) == 1:
        return ElectionResult(counts=dict(counts), winner=tie_set[0], tied=())
    return ElectionResult(counts=dict(counts), winner=None, tied=tuple(tie_set))


def compute_results(ledger: Iterable[Block]) -> ElectionResult:
    """Tally a ledger (any iterable of blocks whose first item is genesis)."""
    return resolve_winner(count_votes(ledger))
