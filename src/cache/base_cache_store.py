# src/cache/base_cache_store.py - v2
"""Abstract cache store interface.

Records are keyed by (kind, version) and are write-once: a store never
updates or deletes a record it holds. The uniqueness of the key is enforced
by the backend itself (primary key, SET NX, exclusive create), which is what
makes concurrent first writes safe.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from filevault.core.models import CacheRecord


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @abstractmethod
    async def find_by_key(self, kind: str, version: str) -> CacheRecord | None:
        """Return the record for (kind, version), or None if there is none."""

    @abstractmethod
    async def insert_if_absent(self, record: CacheRecord) -> None:
        """Persist a new record.

        Raises:
            KeyConflictError: If a record for the same key already exists.
        """

    @abstractmethod
    async def list_records(self) -> list[CacheRecord]:
        """List all stored records."""

    def close(self) -> None:
        """Release backend resources. No-op by default."""
