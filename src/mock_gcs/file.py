"""
In-memory Cloud Storage object.

A MockFile is a handle on one object name inside a bucket. The handle can
exist without the object existing: existence is whether the name is a
member of the bucket's ``files`` mapping, checked on every call.
"""
from __future__ import annotations

import copy
import logging
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any, Optional, Tuple, Union

from .base import Metadata
from .errors import InvalidDestination, NotFound
from .faults import FaultQueues, MockableMethod
from .localfs import PathLike, write_sink_bytes
from .streams import MockReadStream, MockWriteStream
from .uri import CloudStorageURI

if TYPE_CHECKING:
    from .bucket import MockBucket
    from .storage import MockStorage

__all__ = ["MockFile", "SIGNED_URL_ACTIONS"]

logger = logging.getLogger(__name__)

SIGNED_URL_ACTIONS = ("read", "write", "delete", "resumable")
SIGNED_URL_VERSIONS = ("v2", "v4")

Data = Union[bytes, bytearray, memoryview, str]
Expires = Union[datetime, date, timedelta, int, float, str]


def default_metadata() -> Metadata:
    return {"metadata": {}}


def _to_bytes(data: Data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"data must be str or bytes-like, got {type(data).__name__}")


def _validate_expires(expires: Expires) -> None:
    if expires is None:
        raise ValueError("expires is required")
    if isinstance(expires, bool):
        raise ValueError(f"Invalid expires value: {expires!r}")
    if isinstance(expires, (datetime, date, timedelta)):
        return
    if isinstance(expires, (int, float)):
        if expires < 0:
            raise ValueError(f"expires must be non-negative, got {expires}")
        return
    if isinstance(expires, str):
        try:
            datetime.fromisoformat(expires)
            return
        except ValueError:
            pass
        try:
            datetime.strptime(expires, "%m-%d-%Y")
            return
        except ValueError:
            raise ValueError(f"Invalid expires date: {expires!r}") from None
    raise ValueError(f"Invalid expires type: {type(expires).__name__}")


class MockFile:
    """
    In-memory stand-in for a Cloud Storage File.

    This is a test double; not for production use.
    Every operation listed in ``MockableMethod`` first consumes one entry of
    its fault queue (see mock_error_once) before running.
    """

    def __init__(self, bucket: MockBucket, name: str) -> None:
        self.name = name
        self.bucket = bucket
        self.parent = bucket
        self.storage: MockStorage = bucket.storage
        self.contents: bytes = b""
        self.metadata: Metadata = default_metadata()
        self._faults = FaultQueues()

    def __repr__(self) -> str:
        return f"MockFile(bucket={self.bucket.name!r}, name={self.name!r})"

    @property
    def cloud_storage_uri(self) -> CloudStorageURI:
        return CloudStorageURI(bucket=self.bucket.name, name=self.name)

    # Fault injection (administrative API)

    def mock_error_once(self, method: MockableMethod, error: BaseException) -> MockFile:
        """
        Make the next call to ``method`` raise ``error``, then behave normally.

        Errors enqueued for the same method are raised in FIFO order, one per
        call.

        Args:
            method: Name of the operation to fail
            error: Exception object raised as-is

        Returns:
            This file, for chaining

        Raises:
            NotMockable: If ``method`` has no fault queue
        """
        self._faults.push_error(method, error)
        return self

    def mock_reset(self, method: Optional[MockableMethod] = None) -> MockFile:
        """Drop pending errors for ``method``, or for every method."""
        self._faults.reset(method)
        return self

    # Membership

    def _is_member(self) -> bool:
        return self.name in self.bucket.files

    def _must_exist(self) -> None:
        if not self._is_member():
            raise NotFound(self.bucket.name, self.name)

    def _mark_as_exists(self) -> None:
        if not self._is_member():
            self.bucket._add_member(self)

    # State changes shared with MockBucket.put(), which skips fault injection

    def _write(self, data: Data, metadata: Optional[Metadata] = None) -> None:
        contents = _to_bytes(data)
        new_metadata = copy.deepcopy(metadata) if metadata is not None else None

        self._mark_as_exists()
        if new_metadata is not None:
            self.metadata = new_metadata
        self.contents = contents

    def _merge_metadata(self, metadata: Metadata) -> Metadata:
        custom = {
            **(self.metadata.get("metadata") or {}),
            **(metadata.get("metadata") or {}),
        }
        merged = {**self.metadata, **copy.deepcopy(metadata), "metadata": copy.deepcopy(custom)}
        self.metadata = merged
        return copy.deepcopy(merged)

    # Mockable operations

    async def exists(self) -> bool:
        self._faults.raise_next("exists")

        return self._is_member()

    async def delete(self) -> None:
        """
        Remove the object from its bucket.

        Raises:
            NotFound: If the object does not exist
        """
        self._faults.raise_next("delete")

        self._must_exist()
        self.bucket._remove_member(self.name)

    async def download(self, destination: Optional[PathLike] = None) -> bytes:
        """
        Return the object's contents.

        Args:
            destination: Optional local path that also receives the bytes
                (overwritten if present)

        Returns:
            Object contents as bytes

        Raises:
            NotFound: If the object does not exist
            OSError: If writing ``destination`` fails
        """
        self._faults.raise_next("download")

        self._must_exist()

        if destination is not None:
            write_sink_bytes(destination, self.contents)

        return self.contents

    async def save(self, data: Data, metadata: Optional[Metadata] = None) -> None:
        """
        Replace the object's contents, creating the object if needed.

        Unlike set_metadata(), a given ``metadata`` replaces the whole
        metadata structure; nothing from the previous metadata survives.

        Args:
            data: New contents; str is UTF-8 encoded
            metadata: Optional full replacement metadata

        Raises:
            TypeError: If data is neither str nor bytes-like
        """
        self._faults.raise_next("save")

        self._write(data, metadata)

    async def set_metadata(self, metadata: Metadata) -> Metadata:
        """
        Merge ``metadata`` into the object's metadata.

        Top-level keys are overwritten; the nested custom ``metadata``
        mapping is merged key by key, keeping old keys not mentioned.

        Returns:
            The merged metadata

        Raises:
            NotFound: If the object does not exist
        """
        self._faults.raise_next("set_metadata")

        self._must_exist()

        return self._merge_metadata(metadata)

    async def get_metadata(self) -> Metadata:
        self._faults.raise_next("get_metadata")

        self._must_exist()

        return copy.deepcopy(self.metadata)

    async def get_signed_url(self, *, action: str, expires: Expires, version: str = "v4") -> str:
        """
        Return a synthetic signed URL for the object.

        The URL has the shape
        ``<endpoint>/<bucket>/<name>?X-Goog-Algorithm=<algorithm>``;
        ``action``, ``expires`` and ``version`` are validated but do not
        appear in it.

        Raises:
            NotFound: If the object does not exist
            ValueError: If the signing config is invalid
        """
        self._faults.raise_next("get_signed_url")

        self._must_exist()

        if action not in SIGNED_URL_ACTIONS:
            raise ValueError(f"Invalid action: {action!r}, expected one of {', '.join(SIGNED_URL_ACTIONS)}")
        if version not in SIGNED_URL_VERSIONS:
            raise ValueError(f"Invalid version: {version!r}, expected one of {', '.join(SIGNED_URL_VERSIONS)}")
        _validate_expires(expires)

        settings = self.storage.settings
        return (
            f"{settings.signed_url_base()}/{self.bucket.name}/{self.name}"
            f"?X-Goog-Algorithm={settings.signed_url_algorithm}"
        )

    # Streams (no fault queue)

    def create_write_stream(self) -> MockWriteStream:
        """
        Open a buffering sink whose close() replaces the object's contents.

        The object starts existing immediately, before anything is written.
        """
        self._mark_as_exists()

        def finish(contents: bytes) -> None:
            self.contents = contents

        return MockWriteStream(finish)

    def create_read_stream(self) -> MockReadStream:
        """
        Open a single-pass source over the current contents.

        Raises:
            NotFound: If the object does not exist
        """
        self._must_exist()

        return MockReadStream(self.contents)

    async def copy(
        self,
        destination: Union[str, MockBucket, MockFile],
        *,
        metadata: Optional[Metadata] = None,
    ) -> Tuple[MockFile, Metadata]:
        """
        Copy this object to another name and/or bucket.

        Args:
            destination: Object name in this bucket, a bucket (same object
                name) or a file handle (its bucket and name)
            metadata: Optional metadata shallow-merged over the source's

        Returns:
            The destination file and the metadata stored on it

        Raises:
            InvalidDestination: If destination cannot be classified
            NotFound: If this object does not exist
        """
        target_bucket, target_name = self._resolve_destination(destination)

        contents = await self.download()
        source_metadata = await self.get_metadata()

        # Shallow merge; custom metadata is not merged key by key here
        new_metadata = {**source_metadata, **(metadata or {})}

        new_file = target_bucket.file(target_name)
        await new_file.save(contents, new_metadata)
        logger.debug(f"Copied {self.cloud_storage_uri} to {new_file.cloud_storage_uri}")

        return new_file, new_metadata

    def _resolve_destination(self, destination: Any) -> Tuple[MockBucket, str]:
        if isinstance(destination, str):
            return self.bucket, destination
        if hasattr(destination, "name") and callable(getattr(destination, "file", None)):
            # Has file(): bucket-like
            return destination, self.name
        if hasattr(destination, "name") and hasattr(destination, "bucket"):
            return destination.bucket, destination.name
        raise InvalidDestination(f"Invalid destination type: {type(destination).__name__}")
