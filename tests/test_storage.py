"""
Tests for MockStorage.
"""
from __future__ import annotations

import pytest

from mock_gcs import MockBucket, MockStorage, Settings


class TestBucket:
    """Test bucket() resolution."""

    def test_creates_bucket(self, storage):
        bucket = storage.bucket("my-bucket")

        assert isinstance(bucket, MockBucket)
        assert bucket.name == "my-bucket"
        assert bucket.storage is storage

    def test_same_bucket_for_same_name(self, storage):
        assert storage.bucket("my-bucket") is storage.bucket("my-bucket")

    def test_different_names_are_different_buckets(self, storage):
        assert storage.bucket("a") is not storage.bucket("b")
        assert set(storage.buckets) == {"a", "b"}

    @pytest.mark.asyncio
    async def test_storages_are_isolated(self):
        first = MockStorage()
        second = MockStorage()
        await first.bucket("shared-name").put("file.txt", "data")

        assert await second.bucket("shared-name").file("file.txt").exists() is False

    def test_default_settings(self):
        assert MockStorage().settings == Settings()

    @pytest.mark.asyncio
    async def test_custom_settings_reach_files(self):
        storage = MockStorage(settings=Settings(signed_url_endpoint="http://localhost:4443/"))
        file = storage.bucket("b").file("f.txt", force_exists=True)

        url = await file.get_signed_url(action="read", expires="2030-01-01")

        assert url == "http://localhost:4443/b/f.txt?X-Goog-Algorithm=MOCKED"


class TestFileFromUri:
    """Test file_from_uri()."""

    @pytest.mark.asyncio
    async def test_resolves_existing_file(self, storage):
        file = await storage.bucket("data").put("dir/file.json", "{}")

        assert storage.file_from_uri("gs://data/dir/file.json") is file

    def test_round_trips_cloud_storage_uri(self, storage):
        file = storage.bucket("data").file("x/y.txt")

        assert storage.file_from_uri(file.cloud_storage_uri.href) is file

    def test_malformed_uri_raises(self, storage):
        with pytest.raises(ValueError):
            storage.file_from_uri("s3://data/file.json")
