"""
VOTECHAIN v1.0 — Configuration.
Shared settings for the ledger engine and the demo CLI.
"""

import os

# Hash Chain Configuration
GENESIS_DIGEST = ""
HASH_ALGORITHM = "sha256"

# Ledger Configuration
# VOTECHAIN_DUPLICATE_POLICY: "full" (default, scan the whole chain) | "last"
DUPLICATE_POLICY = os.environ.get("VOTECHAIN_DUPLICATE_POLICY", "full")

# Logging
LOG_LEVEL = os.environ.get("VOTECHAIN_LOG_LEVEL", "WARNING")


def reload() -> None:
    """Re-read environment-driven settings."""
    global DUPLICATE_POLICY, LOG_LEVEL
    DUPLICATE_POLICY = os.environ.get("VOTECHAIN_DUPLICATE_POLICY", "full")
    LOG_LEVEL = os.environ.get("VOTECHAIN_LOG_LEVEL", "WARNING")
