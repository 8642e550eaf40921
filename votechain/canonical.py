"""VOTECHAIN v1.0 — Canonical Hash Construction.

Deterministic byte encoding of block content and the SHA-256 digest
that links one block to the next.

Hash input layout (all fields concatenated, no separators):
    1. new vote:        voter_id as int64 little-endian, candidate as UTF-8
    2. block votes:     same encoding for every vote held by the block
    3. previous digest: hex string as UTF-8

Fields are not length-prefixed, so the layout is reproducible across
implementations but not collision-hardened against adversarial names.
"""

from __future__ import annotations

import hashlib
import json
import struct
from collections.abc import Iterable
from typing import Any

from votechain.config import HASH_ALGORITHM
from votechain.exceptions import HashEncodingFailure
from votechain.models import Block, Vote

_VOTER_ID = struct.Struct("<q")


# ─── Canonical JSON ───────────────────────────────────────────────


def canonical_json(obj: Any) -> str:
    """Deterministic JSON: sorted keys, no whitespace, ASCII-safe.

    Used for exporting chains and reports, never for digests.
    """
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"),
        ensure_ascii=True, default=str,
    )


# ─── Byte Encoding ────────────────────────────────────────────────


def encode_vote(vote: Vote) -> bytes:
    """Encode a single vote as ``int64-le(voter_id) || utf8(candidate)``.

    Raises:
        HashEncodingFailure: if the ID is not a 64-bit integer or the
            candidate name is not encodable.
    """
    voter_id = vote.voter_id
    if isinstance(voter_id, bool) or not isinstance(voter_id, int):
        raise HashEncodingFailure(voter_id, vote.candidate)
    try:
        return _VOTER_ID.pack(voter_id) + vote.candidate.encode("utf-8")
    except (struct.error, UnicodeEncodeError, AttributeError) as e:
        raise HashEncodingFailure(
            voter_id, vote.candidate,
            f"Error converting vote {voter_id!r}/{vote.candidate!r} to bytes: {e}",
        ) from e


def encode_block_payload(vote: Vote, votes: Iterable[Vote], previous_digest: str) -> bytes:
    """Build the exact byte string that gets hashed for a new block."""
    parts = [encode_vote(vote)]
    parts.extend(encode_vote(v) for v in votes)
    try:
        parts.append(previous_digest.encode("utf-8"))
    except (UnicodeEncodeError, AttributeError) as e:
        raise HashEncodingFailure(
            vote.voter_id, vote.candidate,
            f"Error converting previous digest to bytes: {e}",
        ) from e
    return b"".join(parts)


# ─── Digest ───────────────────────────────────────────────────────


def compute_digest(vote: Vote, votes: Iterable[Vote], previous_digest: str) -> str:
    """SHA-256 hex digest of the canonical payload."""
    payload = encode_block_payload(vote, votes, previous_digest)
    return hashlib.new(HASH_ALGORITHM, payload).hexdigest()


def compute_block_digest(block: Block) -> str:
    """Recompute the digest a stored block should carry.

    The block's first vote plays the role of the newly cast vote, as it
    did when the block was appended.
    """
    if not block.votes:
        raise ValueError("Only vote-carrying blocks have a computed digest")
    return compute_digest(block.votes[0], block.votes, block.previous_digest)
