"""
In-memory Cloud Storage client.

MockStorage is the entry point: it creates buckets on first access and
keeps them for its whole lifetime.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

from .bucket import MockBucket
from .file import MockFile
from .settings import Settings
from .uri import parse_gs_uri

__all__ = ["MockStorage"]

logger = logging.getLogger(__name__)


class MockStorage:
    """
    In-memory stand-in for the Cloud Storage client.

    This is a test double; not for production use.
    Each instance is an isolated storage: nothing is shared between two
    MockStorage objects.
    """

    def __init__(self, *, settings: Optional[Settings] = None) -> None:
        self.settings = settings if settings is not None else Settings()
        self.buckets: Dict[str, MockBucket] = {}

    def bucket(self, name: str) -> MockBucket:
        """Get the bucket ``name``, creating it on first access."""
        if name not in self.buckets:
            self.buckets[name] = MockBucket(self, name)
            logger.debug(f"Bucket created: {name}")

        return self.buckets[name]

    def file_from_uri(self, uri: str) -> MockFile:
        """
        Get a file handle from a ``gs://bucket/name`` URI.

        Raises:
            ValueError: If the URI is malformed
        """
        parsed = parse_gs_uri(uri)
        return self.bucket(parsed.bucket).file(parsed.name)
