"""
Structural interfaces of the storage double.

These protocols describe the surface client code relies on, so code can be
typed against them and receive either the double or an adapter over a real
client.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from .localfs import PathLike
from .uri import CloudStorageURI

Metadata = Dict[str, Any]

__all__ = ["Metadata", "StorageLike", "BucketLike", "FileLike"]


@runtime_checkable
class FileLike(Protocol):
    """Protocol for a single stored object."""

    name: str
    metadata: Metadata

    @property
    def cloud_storage_uri(self) -> CloudStorageURI: ...

    async def exists(self) -> bool: ...

    async def delete(self) -> None: ...

    async def download(self, destination: Optional[PathLike] = None) -> bytes: ...

    async def save(self, data: Any, metadata: Optional[Metadata] = None) -> None: ...

    async def set_metadata(self, metadata: Metadata) -> Metadata: ...

    async def get_metadata(self) -> Metadata: ...

    async def get_signed_url(self, *, action: str, expires: Any, version: str = "v4") -> str: ...

    def create_write_stream(self) -> Any: ...

    def create_read_stream(self) -> Any: ...


@runtime_checkable
class BucketLike(Protocol):
    """Protocol for a bucket of objects."""

    name: str

    @property
    def cloud_storage_uri(self) -> CloudStorageURI: ...

    def file(self, name: str) -> FileLike: ...

    async def upload(
        self,
        path: PathLike,
        *,
        destination: Optional[str] = None,
        metadata: Optional[Metadata] = None,
    ) -> Tuple[FileLike, Metadata]: ...

    async def get_files(self, prefix: str = "") -> List[FileLike]: ...

    async def delete_files(self, prefix: str = "") -> None: ...


@runtime_checkable
class StorageLike(Protocol):
    """Protocol for the storage service client."""

    def bucket(self, name: str) -> BucketLike: ...
