# src/core/models.py - v3
"""Core domain models: FileRequest, CacheRecord, FileResponse.

Field names are Python-side; the wire names (type, version, hash, content)
are carried as aliases. Requests validate from wire names only, so a
payload field named "kind" or "client_hash" is an unknown field.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

DEFAULT_KIND = "core"
DEFAULT_VERSION = "1.0.0"
NULL_SENTINEL = "null"


class FileRequest(BaseModel):
    """Normalized request descriptor. All fields are non-empty after validation."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    kind: StrictStr | None = Field(default=DEFAULT_KIND, validation_alias="type")
    version: StrictStr | None = DEFAULT_VERSION
    client_hash: StrictStr | None = Field(default=NULL_SENTINEL, validation_alias="hash")

    @field_validator("kind", mode="after")
    @classmethod
    def _default_kind(cls, v: str | None) -> str:
        return v or DEFAULT_KIND

    @field_validator("version", mode="after")
    @classmethod
    def _default_version(cls, v: str | None) -> str:
        return v or DEFAULT_VERSION

    @field_validator("client_hash", mode="after")
    @classmethod
    def _default_hash(cls, v: str | None) -> str:
        return v or NULL_SENTINEL


class CacheRecord(BaseModel):
    """Persisted, write-once mapping of (kind, version) to content."""

    model_config = ConfigDict(frozen=True)

    kind: str
    version: str
    content: str
    fingerprint: str
    stored_at: datetime


class FileResponse(BaseModel):
    """Per-request response descriptor."""

    model_config = ConfigDict(populate_by_name=True)

    kind: str = Field(serialization_alias="type")
    version: str
    fingerprint: str = Field(default=NULL_SENTINEL, serialization_alias="hash")
    content: str = NULL_SENTINEL

    @property
    def disclosed(self) -> bool:
        return self.fingerprint != NULL_SENTINEL

    def to_wire(self) -> str:
        """Serialize with wire field names: type, version, hash, content."""
        return self.model_dump_json(by_alias=True)
