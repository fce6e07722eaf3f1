# src/storage/s3_source.py - v2
"""S3-compatible blob source (BLOB_BACKEND=s3).

Supports AWS S3, MinIO, and other S3-compatible storage.
Requires 'boto3' package: pip install boto3.
"""

from __future__ import annotations

import logging

from filevault.core.errors import NotFoundError
from filevault.storage.base_blob_source import BaseBlobSource
from filevault.storage.layout import blob_key

logger = logging.getLogger(__name__)

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


class S3BlobSource(BaseBlobSource):
    """Read blobs from S3-compatible object storage."""

    def __init__(
        self,
        bucket: str,
        prefix: str = "sample_files/",
        region: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        """Initialize S3 source.

        Args:
            bucket: S3 bucket name.
            prefix: Key prefix for all objects (e.g. "sample_files/").
            region: AWS region (optional, uses boto3 default if not set).
            endpoint_url: Custom endpoint for MinIO/compatible storage.
        """
        try:
            import boto3
        except ImportError as e:
            raise ImportError(
                "boto3 package required for S3 source: pip install boto3"
            ) from e

        kwargs: dict = {}
        if region:
            kwargs["region_name"] = region
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url

        self._s3 = boto3.client("s3", **kwargs)
        self._bucket = bucket
        self._prefix = prefix.rstrip("/") + "/" if prefix else ""

    def _full_key(self, kind: str, version: str) -> str:
        return f"{self._prefix}{blob_key(kind, version)}"

    async def get(self, kind: str, version: str) -> bytes:
        """Read the object for (kind, version)."""
        key = self._full_key(kind, version)
        try:
            response = self._s3.get_object(Bucket=self._bucket, Key=key)
        except self._s3.exceptions.NoSuchKey as e:
            raise NotFoundError() from e
        except self._s3.exceptions.ClientError as e:
            code = str(getattr(e, "response", {}).get("Error", {}).get("Code", ""))
            if code in _MISSING_CODES:
                raise NotFoundError() from e
            raise
        body = response["Body"].read()
        logger.debug("S3 read: s3://%s/%s (%d bytes)", self._bucket, key, len(body))
        return body

    def describe(self, kind: str, version: str) -> str:
        return f"s3://{self._bucket}/{self._full_key(kind, version)}"
