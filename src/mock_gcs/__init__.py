"""
mock-gcs: in-memory test double for Google Cloud Storage.

Entry point is MockStorage; buckets and files are obtained from it the same
way as from the real client.
"""
from .bucket import MockBucket
from .errors import (
    InvalidDestination,
    MockStorageError,
    NotFound,
    NotMockable,
    UnsupportedDestinationType,
)
from .file import MockFile
from .settings import Settings, create_settings_from_env
from .storage import MockStorage

__all__ = [
    "MockStorage",
    "MockBucket",
    "MockFile",
    "Settings",
    "create_settings_from_env",
    "MockStorageError",
    "NotFound",
    "InvalidDestination",
    "UnsupportedDestinationType",
    "NotMockable",
]
