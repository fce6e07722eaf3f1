# src/cache/fingerprint.py - v3
"""Content fingerprinting.

SHA-256 over the exact bytes read from the blob source, rendered as
lowercase hex. Cache writes and the reveal decision both compare these
strings, so the function must stay deterministic.
"""

from __future__ import annotations

import hashlib


def compute_fingerprint(data: bytes) -> str:
    """Return the lowercase hex SHA-256 digest of raw content bytes."""
    return hashlib.sha256(data).hexdigest()
