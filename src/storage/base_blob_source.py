# src/storage/base_blob_source.py - v1
"""Abstract blob source interface.

A read-only key-value capability: get(kind, version) -> bytes, raising
NotFoundError when there is no entry. One attempt per call, no retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseBlobSource(ABC):
    """Unified interface for content storage backends."""

    @abstractmethod
    async def get(self, kind: str, version: str) -> bytes:
        """Return raw content bytes for (kind, version).

        Raises:
            NotFoundError: If the source has no entry for the key.
        """

    @abstractmethod
    def describe(self, kind: str, version: str) -> str:
        """Human-readable location of the key, for logs."""
