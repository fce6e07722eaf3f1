# src/storage/local_source.py - v4
"""Local filesystem blob source (default backend).

Reads <root>/<kind>/<version>.json. Any key the filesystem cannot map to a
readable file is reported as not found: keys that resolve outside the root
(e.g. a kind of '..'), names the OS rejects (embedded NUL, over-long
components), directories and unreadable files.
"""

from __future__ import annotations

from pathlib import Path

from filevault.core.errors import NotFoundError
from filevault.storage.base_blob_source import BaseBlobSource
from filevault.storage.layout import blob_key


class LocalBlobSource(BaseBlobSource):
    """Read blobs from a directory tree."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root).expanduser().resolve()

    def _resolve(self, kind: str, version: str) -> Path:
        return (self._root / blob_key(kind, version)).resolve()

    async def get(self, kind: str, version: str) -> bytes:
        """Read the file for (kind, version)."""
        try:
            path = self._resolve(kind, version)
            if not path.is_relative_to(self._root) or not path.is_file():
                raise NotFoundError()
            return path.read_bytes()
        except (ValueError, OSError) as e:
            raise NotFoundError() from e

    def describe(self, kind: str, version: str) -> str:
        return str(self._root / blob_key(kind, version))
