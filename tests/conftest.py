# tests/conftest.py - v2
"""Shared test fixtures for all unit and integration tests.

Provides a populated blob root, temp cache locations and a resolver wired
to a SQLite store. No external services are required.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from filevault.cache.sqlite_store import SqliteCacheStore
from filevault.resolver.engine import FileResolver
from filevault.storage.local_source import LocalBlobSource

CORE_CONTENT = b'{\n  "type": "core",\n  "version": "1.0.0",\n  "maxPlayers": 4\n}\n'
CORE_HASH = hashlib.sha256(CORE_CONTENT).hexdigest()


# === FIXTURES: Blob source ===


@pytest.fixture
def core_content() -> bytes:
    return CORE_CONTENT


@pytest.fixture
def core_hash() -> str:
    return CORE_HASH


@pytest.fixture
def blob_root(tmp_path: Path) -> Path:
    """Blob tree with core/1.0.0.json and core/2.0.0.json."""
    root = tmp_path / "sample_files"
    (root / "core").mkdir(parents=True)
    (root / "core" / "1.0.0.json").write_bytes(CORE_CONTENT)
    (root / "core" / "2.0.0.json").write_bytes(b'{"type": "core", "version": "2.0.0"}')
    return root


@pytest.fixture
def blob_source(blob_root: Path) -> LocalBlobSource:
    return LocalBlobSource(root=blob_root)


# === FIXTURES: Cache ===


@pytest.fixture
def tmp_cache_dir(tmp_path: Path) -> Path:
    cache = tmp_path / "cache"
    cache.mkdir()
    return cache


@pytest.fixture
def sqlite_store(tmp_cache_dir: Path):
    store = SqliteCacheStore(db_path=tmp_cache_dir / "test_cache.db")
    yield store
    store.close()


@pytest.fixture
def resolver(blob_source: LocalBlobSource, sqlite_store: SqliteCacheStore) -> FileResolver:
    return FileResolver(source=blob_source, store=sqlite_store)
