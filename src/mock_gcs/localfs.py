"""
Local filesystem collaborators.

The byte source used by MockBucket.upload() and the byte sink used by
MockFile.download(destination=...).
"""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Union

__all__ = ["PathLike", "read_source_bytes", "write_sink_bytes"]

PathLike = Union[str, os.PathLike]


def read_source_bytes(path: PathLike) -> bytes:
    """
    Read every byte of a local file.

    Raises:
        FileNotFoundError: If path does not exist
        OSError: For other I/O errors
    """
    return Path(path).read_bytes()


def write_sink_bytes(path: PathLike, data: bytes) -> None:
    """
    Write bytes to a local file, replacing it if present.

    The write is atomic (temp file + rename) so a failed download never
    leaves a truncated file behind.

    Raises:
        OSError: If file operations fail
    """
    target_path = Path(path)
    target_path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(prefix=".mock-gcs.tmp.", dir=target_path.parent)
    temp_path = Path(temp_path)

    try:
        with os.fdopen(fd, "wb") as out:
            out.write(data)
            out.flush()
            os.fsync(out.fileno())
        os.replace(temp_path, target_path)
    except Exception:
        # Clean up temp file on any error
        try:
            temp_path.unlink()
        except FileNotFoundError:
            pass
        raise
