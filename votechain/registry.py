"""
VOTECHAIN v1.0 — Voter Registry.

Set of eligible voter IDs. Populated during setup, read-only while
votes are being cast.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from votechain.exceptions import RegistrySealed

logger = logging.getLogger("votechain.registry")


def _check_voter_id(voter_id) -> int:
    if isinstance(voter_id, bool) or not isinstance(voter_id, int):
        raise TypeError(f"Voter ID must be an integer, got {type(voter_id).__name__}")
    return voter_id


class VoterRegistry:
    """Eligible voters, keyed by integer ID."""

    def __init__(self, voter_ids: Iterable[int] = ()):
        self._voters: set[int] = set()
        self._sealed = False
        for voter_id in voter_ids:
            self.register(voter_id)

    def register(self, voter_id: int) -> bool:
        """Add a voter. Returns False (and changes nothing) if already present.

        Raises:
            RegistrySealed: if voting has already started.
        """
        voter_id = _check_voter_id(voter_id)
        if self._sealed:
            raise RegistrySealed(f"Cannot register voter {voter_id}: voting has started")
        if voter_id in self._voters:
            logger.warning("Voter %d has already registered.", voter_id)
            return False
        self._voters.add(voter_id)
        logger.debug("Voter %d registered.", voter_id)
        return True

    def is_registered(self, voter_id) -> bool:
        return voter_id in self._voters

    __contains__ = is_registered

    def seal(self) -> None:
        """Freeze membership. Called by the ledger on the first append."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __len__(self) -> int:
        return len(self._voters)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._voters))
