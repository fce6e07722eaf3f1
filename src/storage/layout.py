# src/storage/layout.py - v2
"""Blob key layout: where the content for (kind, version) lives.

    <root>/<kind>/<version>.json
"""

from __future__ import annotations

BLOB_SUFFIX = ".json"


def blob_key(kind: str, version: str) -> str:
    """Relative key for a (kind, version) pair, e.g. 'core/1.0.0.json'."""
    return f"{kind}/{version}{BLOB_SUFFIX}"
