"""Root pytest configuration for mock-gcs tests."""
import pytest

from mock_gcs import MockStorage, Settings


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Keep developer environment settings out of the tests."""
    monkeypatch.delenv("MOCK_GCS_SIGNED_URL_ENDPOINT", raising=False)
    monkeypatch.delenv("MOCK_GCS_SIGNED_URL_ALGORITHM", raising=False)


@pytest.fixture
def settings():
    """Standard test settings."""
    return Settings()


@pytest.fixture
def storage(settings):
    """Fresh, isolated storage for every test."""
    return MockStorage(settings=settings)


@pytest.fixture
def bucket(storage):
    """Standard test bucket."""
    return storage.bucket("test-bucket")


@pytest.fixture
def file(bucket):
    """File that already exists, with empty contents."""
    return bucket.file("test-file.txt", force_exists=True)
