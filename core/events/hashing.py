"""
Ticketing Event Journal — Hash Computation
============================================
Computes event_hash using SHA-256.

Formula:
    event_hash = SHA256(canonical_json(body) + previous_event_hash)

Rules:
- Canonical JSON: sorted keys, no whitespace variability
- No salt, no randomness — determinism is mandatory
- First entry uses GENESIS_HASH as previous_event_hash
- Same input ALWAYS produces same output

This module ONLY computes. It does not verify or persist.
"""

import hashlib
import json
from typing import Any


GENESIS_HASH = "GENESIS"


def canonical_serialize(body: Any) -> str:
    """
    Produce a deterministic JSON string.

    Keys sorted at all levels, compact separators, ASCII only,
    str() for UUIDs and other non-JSON types.
    """
    return json.dumps(
        body,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
        default=str,
    )


def compute_event_hash(body: Any, previous_event_hash: str) -> str:
    """
    Compute SHA-256 hash for a journal entry.

    Returns:
        64-character lowercase hex SHA-256 digest.
    """
    canonical = canonical_serialize(body)
    hash_input = canonical + previous_event_hash
    return hashlib.sha256(hash_input.encode("utf-8")).hexdigest()
