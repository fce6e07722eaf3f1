# src/storage/source_factory.py - v3
"""Factory: instantiate the blob source from configuration."""

from __future__ import annotations

from filevault.config.settings import Settings
from filevault.storage.base_blob_source import BaseBlobSource
from filevault.storage.local_source import LocalBlobSource


def create_blob_source(settings: Settings) -> BaseBlobSource:
    """Create the blob source selected by BLOB_BACKEND.

    Raises:
        ValueError: If the backend is not supported or misconfigured.
    """
    if settings.blob_backend == "local":
        return LocalBlobSource(root=settings.blob_root)

    if settings.blob_backend == "s3":
        from filevault.storage.s3_source import S3BlobSource
        if not settings.blob_s3_bucket:
            raise ValueError(
                "BLOB_S3_BUCKET must be set when BLOB_BACKEND=s3"
            )
        return S3BlobSource(
            bucket=settings.blob_s3_bucket,
            prefix=settings.blob_s3_prefix,
            region=settings.blob_s3_region or None,
            endpoint_url=settings.blob_s3_endpoint_url or None,
        )

    raise ValueError(f"Unsupported blob backend: {settings.blob_backend!r}")
