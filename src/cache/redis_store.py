# src/cache/redis_store.py - v2
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Suitable for multi-instance deployments sharing one cache. Writes use
SET NX so only the first writer for a key succeeds.
"""

from __future__ import annotations

import logging

from filevault.cache.base_cache_store import BaseCacheStore
from filevault.core.errors import KeyConflictError
from filevault.core.models import CacheRecord

logger = logging.getLogger(__name__)

_KEY_PREFIX = "filevault:record:"
_INDEX_KEY = "filevault:record:__index__"


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store for shared deployments."""

    def __init__(self, redis_url: str) -> None:
        try:
            import redis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = redis.Redis.from_url(redis_url, decode_responses=True)

    async def find_by_key(self, kind: str, version: str) -> CacheRecord | None:
        """Retrieve the record for (kind, version)."""
        data = self._client.get(_record_key(kind, version))
        if data is None:
            return None
        return CacheRecord.model_validate_json(data)

    async def insert_if_absent(self, record: CacheRecord) -> None:
        """SET NX the record; a falsy reply means the key already exists."""
        key = _record_key(record.kind, record.version)
        created = self._client.set(key, record.model_dump_json(), nx=True)
        if not created:
            raise KeyConflictError(record.kind, record.version)
        # Maintain a set of all record keys for list_records
        self._client.sadd(_INDEX_KEY, key)

    async def list_records(self) -> list[CacheRecord]:
        """List all stored records."""
        records: list[CacheRecord] = []
        for key in sorted(self._client.smembers(_INDEX_KEY)):
            data = self._client.get(key)
            if data is None:
                continue
            try:
                records.append(CacheRecord.model_validate_json(data))
            except ValueError as e:
                logger.warning("Skipping unreadable cache entry %s: %s", key, e)
        records.sort(key=lambda r: r.stored_at)
        return records

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()


def _record_key(kind: str, version: str) -> str:
    return f"{_KEY_PREFIX}{kind}/{version}"
