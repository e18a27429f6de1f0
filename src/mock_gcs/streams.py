"""
Stream objects returned by MockFile.create_write_stream() and
MockFile.create_read_stream().

Both are small file-like objects: the write stream buffers everything and
hands the bytes to a commit callback on close(); the read stream is a
single-pass source over a snapshot of the object's contents.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional, Union

__all__ = ["MockWriteStream", "MockReadStream"]

logger = logging.getLogger(__name__)

Writable = Union[bytes, bytearray, memoryview, str]


class MockWriteStream:
    """
    Buffering writable sink.

    Bytes written are kept in memory until close(); only a normal close
    calls ``on_finish`` with the whole buffer. abort(), or leaving a
    ``with`` block through an exception, discards the buffer.
    """

    def __init__(self, on_finish: Callable[[bytes], None]) -> None:
        self._buffer = bytearray()
        self._on_finish = on_finish
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def writable(self) -> bool:
        return not self._closed

    def write(self, data: Writable) -> int:
        if self._closed:
            raise ValueError("write to closed stream")
        if isinstance(data, str):
            chunk = data.encode("utf-8")
        else:
            chunk = bytes(data)
        self._buffer.extend(chunk)
        return len(chunk)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        contents = bytes(self._buffer)
        self._buffer.clear()
        logger.debug(f"Write stream finished with {len(contents)} bytes")
        self._on_finish(contents)

    def abort(self) -> None:
        """Close without committing the buffered bytes."""
        if self._closed:
            return
        self._closed = True
        self._buffer.clear()
        logger.debug("Write stream aborted")

    def __enter__(self) -> MockWriteStream:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()


class MockReadStream:
    """
    Single-pass readable source.

    Iterating (sync or async) yields the whole contents as one chunk, then
    ends. read() consumes from the same cursor. Empty contents end
    immediately without yielding a chunk.
    """

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def readable(self) -> bool:
        return not self._closed

    def read(self, size: Optional[int] = -1) -> bytes:
        if self._closed:
            raise ValueError("read from closed stream")
        if size is None or size < 0:
            end = len(self._data)
        else:
            end = min(self._pos + size, len(self._data))
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def close(self) -> None:
        self._closed = True

    def __iter__(self) -> Iterator[bytes]:
        return self

    def __next__(self) -> bytes:
        if self._closed or self._pos >= len(self._data):
            raise StopIteration
        return self.read()

    def __aiter__(self) -> MockReadStream:
        return self

    async def __anext__(self) -> bytes:
        if self._closed or self._pos >= len(self._data):
            raise StopAsyncIteration
        return self.read()

    def __enter__(self) -> MockReadStream:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
