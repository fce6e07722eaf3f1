# src/api/rpc.py - v1
"""RPC registry and error-to-status translation.

This is the only place the error taxonomy becomes transport codes. Codes
follow gRPC numbering; http_status gives the matching HTTP status for
HTTP-fronted deployments.
"""

from __future__ import annotations

import functools
import logging
from enum import IntEnum
from typing import Awaitable, Callable

from filevault.api.facade import PROCESS_FILE_PAYLOAD, process_file_payload
from filevault.cache.base_cache_store import BaseCacheStore
from filevault.config.settings import Settings
from filevault.core.errors import INTERNAL_SERVER_ERROR, ErrorKind, FileVaultError
from filevault.storage.base_blob_source import BaseBlobSource

logger = logging.getLogger(__name__)

RpcHandler = Callable[[str], Awaitable[str]]


class StatusCode(IntEnum):
    OK = 0
    INVALID_ARGUMENT = 3
    NOT_FOUND = 5
    UNIMPLEMENTED = 12
    INTERNAL = 13

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    StatusCode.OK: 200,
    StatusCode.INVALID_ARGUMENT: 400,
    StatusCode.NOT_FOUND: 404,
    StatusCode.UNIMPLEMENTED: 501,
    StatusCode.INTERNAL: 500,
}

_STATUS_BY_KIND = {
    ErrorKind.MALFORMED_INPUT: StatusCode.INVALID_ARGUMENT,
    ErrorKind.NOT_FOUND: StatusCode.NOT_FOUND,
    ErrorKind.INTERNAL: StatusCode.INTERNAL,
    # Conflicts are recovered inside the resolver; reaching here is a bug.
    ErrorKind.KEY_CONFLICT: StatusCode.INTERNAL,
}


class RpcError(Exception):
    """Error returned to the RPC caller: a message and a status code."""

    def __init__(self, message: str, code: StatusCode) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"RpcError(code={self.code.name}, message={self.message!r})"


def to_rpc_error(error: FileVaultError) -> RpcError:
    """Translate a taxonomy error into the caller-facing RpcError."""
    code = _STATUS_BY_KIND[error.kind]
    if code is StatusCode.INTERNAL:
        return RpcError(INTERNAL_SERVER_ERROR, code)
    return RpcError(error.message, code)


class RpcRegistry:
    """Named RPC handlers plus the resources they hold."""

    def __init__(self) -> None:
        self._handlers: dict[str, RpcHandler] = {}
        self._stores: list[BaseCacheStore] = []

    @property
    def names(self) -> list[str]:
        return sorted(self._handlers)

    def register(self, name: str, handler: RpcHandler) -> None:
        if name in self._handlers:
            raise ValueError(f"RPC already registered: {name!r}")
        self._handlers[name] = handler
        logger.debug("Registered RPC %s", name)

    def attach_store(self, store: BaseCacheStore) -> None:
        """Keep a store so close() releases it."""
        self._stores.append(store)

    async def call(self, name: str, payload: str) -> str:
        """Invoke a handler.

        Raises:
            RpcError: For unknown names and any failure inside the handler.
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise RpcError(f"RPC function not found: {name}", StatusCode.UNIMPLEMENTED)
        try:
            return await handler(payload)
        except FileVaultError as e:
            rpc_error = to_rpc_error(e)
            logger.warning("RPC %s failed: %s (%s)", name, e.message, rpc_error.code.name)
            raise rpc_error from e
        except Exception as e:
            logger.exception("RPC %s failed unexpectedly", name)
            raise RpcError(INTERNAL_SERVER_ERROR, StatusCode.INTERNAL) from e

    def close(self) -> None:
        for store in self._stores:
            store.close()
        self._stores.clear()


def init_module(
    settings: Settings | None = None,
    source: BaseBlobSource | None = None,
    store: BaseCacheStore | None = None,
) -> RpcRegistry:
    """Build the resolver and register process_file_payload.

    Creating the cache store bootstraps its schema; this runs once per
    process. Pre-built source/store instances take precedence over
    settings, which is how tests inject collaborators.
    """
    from filevault.cache.cache_factory import create_cache_store
    from filevault.resolver.engine import FileResolver
    from filevault.storage.source_factory import create_blob_source

    logger.info("Initializing module")
    settings = settings or Settings()
    if source is None:
        source = create_blob_source(settings)
    if store is None:
        store = create_cache_store(settings)

    resolver = FileResolver(source=source, store=store)
    registry = RpcRegistry()
    registry.attach_store(store)
    registry.register(
        PROCESS_FILE_PAYLOAD,
        functools.partial(process_file_payload, resolver=resolver),
    )
    logger.info("Module initialized successfully")
    return registry
