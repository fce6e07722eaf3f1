# tests/unit/cache/test_unit_postgres_store.py - v1
"""Tests for cache/postgres_store.py: mocked connection pool."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from filevault.core.errors import KeyConflictError
from filevault.core.models import CacheRecord

UniqueViolation = type("UniqueViolation", (Exception,), {})


def _make_record(**overrides) -> CacheRecord:
    defaults = dict(
        kind="core",
        version="1.0.0",
        content="{}",
        fingerprint="c" * 64,
        stored_at=datetime(2026, 2, 16, tzinfo=timezone.utc),
    )
    defaults.update(overrides)
    return CacheRecord(**defaults)


class FakeConnection:
    """Minimal psycopg connection over a dict keyed by (type, version)."""

    def __init__(self, rows: dict[tuple[str, str], tuple]):
        self._rows = rows
        self.statements: list[str] = []

    def execute(self, sql, params=()):
        self.statements.append(sql)
        result = MagicMock()
        if sql.lstrip().startswith("INSERT"):
            kind, version, fingerprint, content, stored_at = params
            if (kind, version) in self._rows:
                raise UniqueViolation("duplicate key value violates unique constraint")
            self._rows[(kind, version)] = (kind, version, content, fingerprint, stored_at)
        elif "WHERE" in sql:
            result.fetchone.return_value = self._rows.get(tuple(params))
        else:
            result.fetchall.return_value = list(self._rows.values())
        return result


@pytest.fixture
def store():
    rows: dict[tuple[str, str], tuple] = {}
    conn = FakeConnection(rows)

    @contextmanager
    def connection():
        yield conn

    pool = MagicMock()
    pool.connection = connection

    with patch("filevault.cache.postgres_store.PostgresCacheStore.__init__", return_value=None):
        from filevault.cache.postgres_store import PostgresCacheStore
        s = PostgresCacheStore.__new__(PostgresCacheStore)
        s._pool = pool
        s._unique_violation = UniqueViolation
    s.conn = conn
    return s


class TestPostgresCacheStore:
    def test_import_error_without_psycopg(self):
        import sys
        saved = sys.modules.get("psycopg")
        sys.modules["psycopg"] = None  # type: ignore[assignment]
        try:
            from filevault.cache.postgres_store import PostgresCacheStore
            with pytest.raises(ImportError, match="psycopg"):
                PostgresCacheStore(dsn="postgresql://localhost/filevault")
        finally:
            if saved is not None:
                sys.modules["psycopg"] = saved
            else:
                sys.modules.pop("psycopg", None)

    @pytest.mark.asyncio
    async def test_insert_and_find(self, store):
        await store.insert_if_absent(_make_record())
        result = await store.find_by_key("core", "1.0.0")
        assert result is not None
        assert result.fingerprint == "c" * 64

    @pytest.mark.asyncio
    async def test_find_missing(self, store):
        assert await store.find_by_key("core", "1.0.0") is None

    @pytest.mark.asyncio
    async def test_unique_violation_is_key_conflict(self, store):
        await store.insert_if_absent(_make_record())
        with pytest.raises(KeyConflictError):
            await store.insert_if_absent(_make_record())

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, store):
        def boom(sql, params=()):
            raise RuntimeError("connection lost")

        store.conn.execute = boom
        with pytest.raises(RuntimeError, match="connection lost"):
            await store.insert_if_absent(_make_record())

    @pytest.mark.asyncio
    async def test_list_records(self, store):
        await store.insert_if_absent(_make_record())
        await store.insert_if_absent(_make_record(version="2.0.0"))
        records = await store.list_records()
        assert sorted(r.version for r in records) == ["1.0.0", "2.0.0"]
