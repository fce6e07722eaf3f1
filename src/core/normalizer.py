# src/core/normalizer.py - v1
"""Request normalization: raw payload string to FileRequest.

Missing, null and empty fields fall back to core / 1.0.0 / "null".
Unknown fields are ignored. kind and version are not validated beyond
being strings; they are used verbatim as key components.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from filevault.core.errors import MalformedInputError
from filevault.core.models import FileRequest


def parse_request(payload: str | bytes | None) -> FileRequest:
    """Decode and normalize a request payload.

    Args:
        payload: JSON document, typically an object with optional
            "type", "version" and "hash" string fields.

    Returns:
        Fully populated FileRequest.

    Raises:
        MalformedInputError: If the payload is not JSON, not an object,
            or a known field has a non-string value.
    """
    if payload is None:
        raise MalformedInputError("payload is missing")

    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedInputError(str(e)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedInputError(
            f"payload must be a JSON object, got {type(data).__name__}"
        )

    try:
        return FileRequest.model_validate(data)
    except ValidationError as e:
        raise MalformedInputError(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    """Render pydantic errors using wire field names."""
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "payload"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
