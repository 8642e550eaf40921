"""
VOTECHAIN v1.0 — Candidate Roster.

Fixed set of candidate names with running counters. The counters are
kept for observability only; final results are always re-derived from
the ledger.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from votechain.exceptions import RosterSealed, UnknownCandidate

logger = logging.getLogger("votechain.roster")


class CandidateRoster:
    """Insertion-ordered candidates. Membership freezes once voting starts."""

    def __init__(self, names: Iterable[str] = ()):
        self._counts: dict[str, int] = {}
        self._sealed = False
        for name in names:
            self.declare(name)

    def declare(self, name: str) -> bool:
        """Add a candidate with a zero count.

        Returns False if the candidate was already declared.

        Raises:
            RosterSealed: if voting has already started.
            ValueError: if the name is empty.
        """
        if self._sealed:
            raise RosterSealed(f"Cannot declare {name!r}: voting has started")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Candidate name must be a non-empty string")
        if name in self._counts:
            logger.warning("Candidate %s has already been declared.", name)
            return False
        self._counts[name] = 0
        logger.debug("Candidate %s declared.", name)
        return True

    def is_valid(self, name) -> bool:
        return name in self._counts

    __contains__ = is_valid

    def increment(self, name: str) -> int:
        if name not in self._counts:
            raise UnknownCandidate(None, name)
        self._counts[name] += 1
        return self._counts[name]

    def seal(self) -> None:
        """Freeze membership. Called by the ledger on the first append."""
        if not self._sealed:
            logger.debug("Roster sealed with %d candidates.", len(self._counts))
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._counts)

    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self._counts)
