"""
Mock storage error classes.

Provides the taxonomy of errors raised by the in-memory storage double.
Errors a test enqueues with ``mock_error_once`` are not part of this
hierarchy: they are raised verbatim, exactly as they were enqueued.
"""
from __future__ import annotations


class MockStorageError(Exception):
    """
    Base class for all errors raised by the storage double itself.
    """
    pass


class NotFound(MockStorageError):
    """
    Object does not exist in its bucket.

    Raised when:
    - delete, download, set_metadata, get_metadata or get_signed_url is
      called on a file handle that is not a member of its bucket
    - create_read_stream is called on such a handle
    - copy is called on an absent source
    """

    def __init__(self, bucket: str, name: str):
        super().__init__(f"No such object: {bucket}/{name}")
        self.bucket = bucket
        self.name = name


class InvalidDestination(MockStorageError):
    """
    Copy destination cannot be classified.

    Raised when copy() receives something that is neither an object name,
    a bucket-like handle nor a file-like handle.
    """
    pass


class UnsupportedDestinationType(MockStorageError):
    """
    Upload destination given as a rich handle instead of an object name.

    The real client accepts a File for ``destination``; the double only
    supports plain strings.
    """
    pass


class NotMockable(MockStorageError):
    """
    Fault injection requested for an operation that has no fault queue.
    """

    def __init__(self, method: str, mockable: tuple[str, ...]):
        super().__init__(
            f"Method '{method}' is not mockable, use one of these: {', '.join(mockable)}"
        )
        self.method = method


__all__ = [
    "MockStorageError",
    "NotFound",
    "InvalidDestination",
    "UnsupportedDestinationType",
    "NotMockable",
]
