# src/core/errors.py - v1
"""Error taxonomy for file resolution.

Every failure a request can hit is one of four kinds. Backends raise
NotFoundError and KeyConflictError directly; anything else they raise is
wrapped into InternalError by the resolver. Translation to transport status
codes happens in filevault.api.rpc and nowhere else.
"""

from __future__ import annotations

from enum import Enum

FILE_NOT_FOUND = "file not found"
INTERNAL_SERVER_ERROR = "internal server error"


class ErrorKind(str, Enum):
    MALFORMED_INPUT = "malformed_input"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"
    KEY_CONFLICT = "key_conflict"


class FileVaultError(Exception):
    """Base class for request-scoped failures."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MalformedInputError(FileVaultError):
    """Payload could not be decoded into a request."""

    kind = ErrorKind.MALFORMED_INPUT


class NotFoundError(FileVaultError):
    """Blob source has no content for the requested key."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = FILE_NOT_FOUND) -> None:
        super().__init__(message)


class InternalError(FileVaultError):
    """Store or source failure. The message never carries backend detail."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str = INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)


class KeyConflictError(FileVaultError):
    """A record for (kind, version) already exists. Recovered, never surfaced."""

    kind = ErrorKind.KEY_CONFLICT

    def __init__(self, kind: str, version: str) -> None:
        super().__init__(f"record already exists for {kind}/{version}")
        self.record_kind = kind
        self.record_version = version
