# src/cache/sqlite_store.py - v2
"""SQLite-based cache store (CACHE_BACKEND=sqlite, default).

Uses stdlib sqlite3. The (type, version) primary key rejects a second
insert for the same key, which surfaces as KeyConflictError.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from filevault.cache.base_cache_store import BaseCacheStore
from filevault.core.errors import KeyConflictError
from filevault.core.models import CacheRecord

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS file_data (
    type TEXT NOT NULL,
    version TEXT NOT NULL,
    hash TEXT NOT NULL,
    content TEXT NOT NULL,
    processed_at TEXT NOT NULL,
    PRIMARY KEY (type, version)
);
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store."""

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self._db_path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        logger.info("Cache schema ready at %s", self._db_path)

    async def find_by_key(self, kind: str, version: str) -> CacheRecord | None:
        """Retrieve the record for (kind, version)."""
        cursor = self._conn.execute(
            "SELECT type, version, content, hash, processed_at"
            " FROM file_data WHERE type = ? AND version = ?",
            (kind, version),
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return _row_to_record(row)

    async def insert_if_absent(self, record: CacheRecord) -> None:
        """Insert a record; the primary key rejects duplicates."""
        try:
            self._conn.execute(
                """INSERT INTO file_data (type, version, hash, content, processed_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    record.kind,
                    record.version,
                    record.fingerprint,
                    record.content,
                    record.stored_at.isoformat(),
                ),
            )
            self._conn.commit()
        except sqlite3.IntegrityError as e:
            self._conn.rollback()
            raise KeyConflictError(record.kind, record.version) from e

    async def list_records(self) -> list[CacheRecord]:
        """List all stored records, oldest first."""
        cursor = self._conn.execute(
            "SELECT type, version, content, hash, processed_at"
            " FROM file_data ORDER BY processed_at, type, version"
        )
        return [_row_to_record(row) for row in cursor.fetchall()]

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()


def _row_to_record(row: tuple) -> CacheRecord:
    kind, version, content, fingerprint, processed_at = row
    return CacheRecord(
        kind=kind,
        version=version,
        content=content,
        fingerprint=fingerprint,
        stored_at=datetime.fromisoformat(processed_at),
    )
