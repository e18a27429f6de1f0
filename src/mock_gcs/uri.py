"""
Cloud Storage resource identifiers.

Builds and parses ``gs://bucket`` and ``gs://bucket/object`` URIs exposed
by buckets and files as the ``cloud_storage_uri`` property.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

__all__ = ["CloudStorageURI", "parse_gs_uri"]

SCHEME = "gs"


@dataclass(frozen=True)
class CloudStorageURI:
    """
    Identifier of a bucket or of an object inside a bucket.

    Attributes:
        bucket: Bucket name
        name: Object name, None when the URI names the bucket itself
    """
    bucket: str
    name: Optional[str] = None

    @property
    def href(self) -> str:
        if self.name is None:
            return f"{SCHEME}://{self.bucket}"
        return f"{SCHEME}://{self.bucket}/{self.name}"

    def __str__(self) -> str:
        return self.href


def parse_gs_uri(uri: str) -> CloudStorageURI:
    """
    Parse and validate a ``gs://`` object URI.

    Accepts URIs in the form: gs://bucket/object/name

    Args:
        uri: Object URI to parse

    Returns:
        CloudStorageURI with both bucket and object name set

    Raises:
        ValueError: If URI format is invalid

    Examples:
        >>> parse_gs_uri("gs://my-bucket/data/file.csv")
        CloudStorageURI(bucket='my-bucket', name='data/file.csv')
    """
    if not uri:
        raise ValueError("URI cannot be empty")

    match = re.match(rf"^{SCHEME}://(.+)$", uri)
    if not match:
        raise ValueError(f"Invalid URI format, expected gs://bucket/name: {uri}")

    remainder = match.group(1)
    if remainder.startswith("/"):
        raise ValueError(f"URI path cannot start with '/': {uri}")

    if "/" not in remainder:
        raise ValueError(f"URI missing object name, expected gs://bucket/name: {uri}")

    bucket, name = remainder.split("/", 1)
    if not name:
        raise ValueError(f"Object name cannot be empty: {uri}")

    return CloudStorageURI(bucket=bucket, name=name)
