# src/api/facade.py - v2
"""Public API facade: the process_file_payload procedure.

Usage:
    from filevault.api.facade import process_file_payload
    body = await process_file_payload('{"type": "core"}', resolver)
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from filevault.core.normalizer import parse_request
from filevault.logging.context import clear_context, set_key_context, set_request_context

if TYPE_CHECKING:
    from filevault.resolver.engine import FileResolver

logger = logging.getLogger(__name__)

PROCESS_FILE_PAYLOAD = "process_file_payload"


async def process_file_payload(payload: str, resolver: FileResolver) -> str:
    """Resolve a file request payload and return the response payload.

    Args:
        payload: JSON object with optional "type", "version" and "hash".
        resolver: Engine bound to a blob source and cache store.

    Returns:
        JSON object with "type", "version", "hash" and "content".

    Raises:
        MalformedInputError: Payload could not be decoded.
        NotFoundError: No content for the requested key.
        InternalError: Blob source or cache store failure.
    """
    set_request_context(_generate_request_id())
    try:
        logger.info("Processing payload: %s", payload)
        request = parse_request(payload)
        set_key_context(request.kind, request.version)
        logger.info(
            "Payload values set: type=%s, version=%s, hash=%s",
            request.kind, request.version, request.client_hash,
        )

        response = await resolver.resolve(request)
        body = response.to_wire()
        logger.info(
            "Response prepared: type=%s, version=%s, disclosed=%s",
            response.kind, response.version, response.disclosed,
        )
        return body
    finally:
        clear_context()


def _generate_request_id() -> str:
    return uuid.uuid4().hex[:12]
