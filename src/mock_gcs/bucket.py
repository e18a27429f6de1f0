"""
In-memory Cloud Storage bucket.

Owns the membership mapping of its objects. A name present in ``files``
is an existing object; everything else is at most a cached handle.
"""
from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .base import Metadata
from .errors import UnsupportedDestinationType
from .file import Data, MockFile, default_metadata
from .localfs import PathLike, read_source_bytes
from .uri import CloudStorageURI

if TYPE_CHECKING:
    from .storage import MockStorage

__all__ = ["MockBucket"]

logger = logging.getLogger(__name__)


class MockBucket:
    """
    In-memory stand-in for a Cloud Storage Bucket.

    This is a test double; not for production use.
    ``files`` preserves insertion order, which is the listing order.
    """

    def __init__(self, storage: MockStorage, name: str) -> None:
        self.name = name
        self.storage = storage
        self.files: Dict[str, MockFile] = {}
        self._handles: Dict[str, MockFile] = {}

    def __repr__(self) -> str:
        return f"MockBucket(name={self.name!r})"

    @property
    def cloud_storage_uri(self) -> CloudStorageURI:
        return CloudStorageURI(bucket=self.name)

    def _add_member(self, file: MockFile) -> None:
        self.files[file.name] = file
        self._handles[file.name] = file
        logger.debug(f"Object created: {file.cloud_storage_uri}")

    def _remove_member(self, name: str) -> None:
        file = self.files.pop(name)
        # A recreated object starts from default state
        file.contents = b""
        file.metadata = default_metadata()
        logger.debug(f"Object deleted: {self.cloud_storage_uri}/{name}")

    def file(self, name: str, *, force_exists: bool = False) -> MockFile:
        """
        Get a handle on the object ``name``.

        Returns the existing object or the previously returned handle for
        that name; otherwise creates a handle that does not exist yet.

        Args:
            name: Object name
            force_exists: Make the object exist right away, with empty
                contents unless it already existed

        Returns:
            MockFile handle
        """
        file = self.files.get(name) or self._handles.get(name)
        if file is None:
            file = MockFile(self, name)
            self._handles[name] = file

        if force_exists and name not in self.files:
            self._add_member(file)

        return file

    async def put(
        self,
        name: str,
        contents: Optional[Data] = None,
        metadata: Optional[Metadata] = None,
    ) -> MockFile:
        """
        Create or replace the object ``name`` (test setup helper).

        The object is always replaced by a fresh one, so previous contents,
        metadata and pending injected errors are dropped. Bypasses fault
        injection.

        Args:
            name: Object name
            contents: Optional contents, saved as by MockFile.save()
            metadata: Optional metadata, merged as by MockFile.set_metadata()

        Returns:
            The new MockFile
        """
        file = MockFile(self, name)
        self._add_member(file)

        if contents is not None:
            file._write(contents)
        if metadata is not None:
            file._merge_metadata(metadata)

        return file

    async def upload(
        self,
        path: PathLike,
        *,
        destination: Optional[str] = None,
        metadata: Optional[Metadata] = None,
    ) -> Tuple[MockFile, Metadata]:
        """
        Upload a local file into the bucket.

        Args:
            path: Local file to read
            destination: Object name; defaults to the base name of ``path``
            metadata: Optional metadata merged over the defaults

        Returns:
            The uploaded file and its metadata

        Raises:
            UnsupportedDestinationType: If destination is not a string
            FileNotFoundError: If path does not exist
        """
        if destination is not None and not isinstance(destination, str):
            raise UnsupportedDestinationType(
                f"Type {type(destination).__name__} for `destination` is not supported, use str instead"
            )

        name = destination or Path(path).name
        contents = read_source_bytes(path)
        file = await self.put(name, contents, metadata)

        return file, copy.deepcopy(file.metadata)

    async def get_files(self, prefix: str = "") -> List[MockFile]:
        """List existing objects whose name starts with ``prefix``."""
        return [file for name, file in self.files.items() if name.startswith(prefix)]

    async def delete_files(self, prefix: str = "") -> None:
        """Delete existing objects whose name starts with ``prefix``."""
        for name in [name for name in self.files if name.startswith(prefix)]:
            self._remove_member(name)
