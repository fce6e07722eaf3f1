# src/logging/context.py - v2
"""Request-scoped logging context: request_id, kind and version.

Set once per RPC invocation; the formatters read it back so every record
emitted while serving a request carries the key it is about.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_kind: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "kind", default=None
)
_version: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "version", default=None
)


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    request_id: str | None = None
    kind: str | None = None
    version: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    return LogContext(
        request_id=_request_id.get(),
        kind=_kind.get(),
        version=_version.get(),
    )


def set_request_context(
    request_id: str, kind: str | None = None, version: str | None = None
) -> None:
    """Set request-level context (called once per RPC invocation)."""
    _request_id.set(request_id)
    _kind.set(kind)
    _version.set(version)


def set_key_context(kind: str, version: str) -> None:
    """Attach the normalized key once the payload has been decoded."""
    _kind.set(kind)
    _version.set(version)


def clear_context() -> None:
    _request_id.set(None)
    _kind.set(None)
    _version.set(None)
