# tests/unit/storage/test_unit_source_factory.py - v1
"""Tests for storage/source_factory.py."""

from __future__ import annotations

from unittest.mock import patch

from filevault.config.settings import Settings
from filevault.storage.local_source import LocalBlobSource
from filevault.storage.source_factory import create_blob_source


class TestCreateBlobSource:
    def test_local(self, tmp_path):
        s = Settings(_env_file=None, blob_root=tmp_path)
        assert isinstance(create_blob_source(s), LocalBlobSource)

    def test_s3(self):
        s = Settings(
            _env_file=None,
            blob_backend="s3",
            blob_s3_bucket="files",
            blob_s3_endpoint_url="http://minio:9000",
        )
        with patch("filevault.storage.s3_source.S3BlobSource.__init__", return_value=None) as init:
            create_blob_source(s)
        init.assert_called_once_with(
            bucket="files",
            prefix="sample_files/",
            region=None,
            endpoint_url="http://minio:9000",
        )
