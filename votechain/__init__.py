"""
VOTECHAIN — Hash-Chained Election Ledger.

Append-only vote ledger with SHA-256 block linking, integrity
verification and tally computation. Single process, in memory.
"""

__version__ = "1.0.0"

from votechain.election import Election
from votechain.ledger import VoteLedger
from votechain.models import Block, DuplicatePolicy, Vote, VoteOutcome
from votechain.tally import ElectionResult, compute_results

__all__ = [
    "Block",
    "DuplicatePolicy",
    "Election",
    "ElectionResult",
    "Vote",
    "VoteLedger",
    "VoteOutcome",
    "__version__",
    "compute_results",
]
