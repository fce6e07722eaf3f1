# src/resolver/engine.py - v1
"""Resolution-and-cache engine.

For each request:
  1. Read content from the blob source (NotFoundError if absent)
  2. Fingerprint the bytes, always, even when a record exists
  3. Look up the (kind, version) record
  4. No record: insert one. Record present: skip, records are write-once
  5. Reveal content and fingerprint if no record existed before this
     request or the client hash equals the computed fingerprint;
     otherwise answer with the "null" sentinel

The reveal rule compares the client hash with the freshly computed
fingerprint, not the stored one. The two only differ if the blob changed
after the record was written.

A lost insert race (another request stored the key between our lookup and
our insert) is detected by the store's unique key and handled as if the
record had been found in step 3.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from filevault.cache.base_cache_store import BaseCacheStore
from filevault.cache.fingerprint import compute_fingerprint
from filevault.core.errors import (
    FileVaultError,
    InternalError,
    KeyConflictError,
)
from filevault.core.models import CacheRecord, FileRequest, FileResponse
from filevault.storage.base_blob_source import BaseBlobSource

logger = logging.getLogger(__name__)


class FileResolver:
    """Resolve (kind, version) requests against a blob source and a cache store."""

    def __init__(self, source: BaseBlobSource, store: BaseCacheStore) -> None:
        self._source = source
        self._store = store

    @property
    def store(self) -> BaseCacheStore:
        return self._store

    async def resolve(self, request: FileRequest) -> FileResponse:
        """Resolve a normalized request into a response descriptor.

        Raises:
            NotFoundError: The blob source has no content for the key.
            InternalError: The blob source or cache store failed.
        """
        kind, version = request.kind, request.version

        raw = await self._read(kind, version)
        fingerprint = compute_fingerprint(raw)
        logger.info("Calculated hash: %s", fingerprint)

        existing = await self._find(kind, version)
        if existing is not None:
            logger.info("Record exists for %s/%s, skipping save", kind, version)
            prior_record = True
        else:
            prior_record = not await self._save(kind, version, raw, fingerprint)

        if not prior_record or request.client_hash == fingerprint:
            logger.info("Disclosing content for %s/%s", kind, version)
            return FileResponse(
                kind=kind,
                version=version,
                fingerprint=fingerprint,
                content=_decode(raw),
            )

        logger.info(
            "Client hash does not match for existing record %s/%s, suppressing",
            kind, version,
        )
        return FileResponse(kind=kind, version=version)

    async def _read(self, kind: str, version: str) -> bytes:
        try:
            raw = await self._source.get(kind, version)
        except FileVaultError:
            logger.error("No content at %s", self._source.describe(kind, version))
            raise
        except Exception as e:
            logger.error("Error reading %s: %s", self._source.describe(kind, version), e)
            raise InternalError() from e
        logger.info("Read %d bytes from %s", len(raw), self._source.describe(kind, version))
        return raw

    async def _find(self, kind: str, version: str) -> CacheRecord | None:
        try:
            return await self._store.find_by_key(kind, version)
        except Exception as e:
            logger.error("Error querying cache for %s/%s: %s", kind, version, e)
            raise InternalError() from e

    async def _save(
        self, kind: str, version: str, raw: bytes, fingerprint: str
    ) -> bool:
        """Insert the first record for a key.

        Returns:
            True if this request wrote the record, False if another request
            won the race and the record now exists.
        """
        record = CacheRecord(
            kind=kind,
            version=version,
            content=_decode(raw),
            fingerprint=fingerprint,
            stored_at=datetime.now(timezone.utc),
        )
        try:
            await self._store.insert_if_absent(record)
        except KeyConflictError:
            logger.info("Lost insert race for %s/%s, re-reading record", kind, version)
            if await self._find(kind, version) is None:
                logger.error("Record for %s/%s missing after key conflict", kind, version)
                raise InternalError() from None
            return False
        except Exception as e:
            logger.error("Error saving record for %s/%s: %s", kind, version, e)
            raise InternalError() from e
        logger.info("Saved record for %s/%s", kind, version)
        return True


def _decode(raw: bytes) -> str:
    """Content is served and stored as text; invalid UTF-8 is replaced."""
    return raw.decode("utf-8", errors="replace")
