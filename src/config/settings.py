# src/config/settings.py - v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for deployment-specific settings: where blobs are
read from, which cache backend persists records, and how logging is set up.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Blob source ===
    blob_backend: Literal["local", "s3"] = "local"
    blob_root: Path = Path("./data/sample_files")
    blob_s3_bucket: str = ""
    blob_s3_prefix: str = "sample_files/"
    blob_s3_region: str = ""
    blob_s3_endpoint_url: str = ""

    # === Cache ===
    cache_backend: Literal["sqlite", "json", "redis", "postgres"] = "sqlite"
    cache_root: Path = Path("~/.filevault/cache")
    cache_redis_url: str = ""
    cache_postgres_dsn: str = ""
    cache_postgres_pool_size: int = 5

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: str = ""
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("log_retention", "cache_postgres_pool_size")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("value must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate that each selected backend has what it needs."""
        errors: list[str] = []

        if self.blob_backend == "s3" and not self.blob_s3_bucket:
            errors.append("BLOB_S3_BUCKET must be set when BLOB_BACKEND=s3")

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_REDIS_URL must be set when CACHE_BACKEND=redis")

        if self.cache_backend == "postgres" and not self.cache_postgres_dsn:
            errors.append(
                "CACHE_POSTGRES_DSN must be set when CACHE_BACKEND=postgres"
            )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def sqlite_path(self) -> Path:
        """Location of the SQLite database under CACHE_ROOT."""
        return self.cache_root.expanduser() / "filevault_cache.db"


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or one-off runs).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
