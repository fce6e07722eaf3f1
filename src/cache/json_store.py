# src/cache/json_store.py - v3
"""JSON file-based cache store (CACHE_BACKEND=json).

One file per record under CACHE_ROOT. Entries are published atomically
and a second writer for the same key fails instead of overwriting.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
from pathlib import Path

from filevault.cache.base_cache_store import BaseCacheStore
from filevault.core.errors import KeyConflictError
from filevault.core.models import CacheRecord

logger = logging.getLogger(__name__)


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using JSON files."""

    def __init__(self, cache_root: Path | str) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    async def find_by_key(self, kind: str, version: str) -> CacheRecord | None:
        """Retrieve the record for (kind, version)."""
        path = self._entry_path(kind, version)
        if not path.exists():
            return None
        data = json.loads(path.read_text(encoding="utf-8"))
        return CacheRecord(**data)

    async def insert_if_absent(self, record: CacheRecord) -> None:
        """Publish the record file; fails if it already exists.

        The record is written to a temp file in the cache root, then
        hard-linked to its entry path. The link fails if the entry exists,
        and readers never see a partially written entry.
        """
        path = self._entry_path(record.kind, record.version)
        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=".part-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(record.model_dump_json(indent=2))
                fh.flush()
                os.fsync(fh.fileno())
            try:
                os.link(tmp_name, path)
            except FileExistsError as e:
                raise KeyConflictError(record.kind, record.version) from e
        finally:
            os.unlink(tmp_name)

    async def list_records(self) -> list[CacheRecord]:
        """List all stored records. Unreadable files are skipped."""
        records: list[CacheRecord] = []
        for path in sorted(self._root.glob("*.json")):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                records.append(CacheRecord(**data))
            except Exception as e:
                logger.warning("Skipping unreadable cache file %s: %s", path.name, e)
        records.sort(key=lambda r: r.stored_at)
        return records

    def _entry_path(self, kind: str, version: str) -> Path:
        """Return the file path for a key.

        The name is a digest of the key so arbitrary kind/version strings
        map to safe, distinct file names.
        """
        digest = hashlib.sha256(f"{kind}\0{version}".encode("utf-8")).hexdigest()
        return self._root / f"{digest}.json"
