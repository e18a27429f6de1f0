"""
Settings and configuration for the storage double.

Centralizes the few cosmetic values the double exposes (signed URL shape)
and validates them with fail-fast behavior.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass

__all__ = ["Settings", "create_settings_from_env"]

DEFAULT_SIGNED_URL_ENDPOINT = "https://storage.googleapis.com"
DEFAULT_SIGNED_URL_ALGORITHM = "MOCKED"


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for MockStorage.

    Signed URL Settings:
        signed_url_endpoint: Scheme and host prepended to every signed URL
        signed_url_algorithm: Value of the X-Goog-Algorithm query parameter
    """
    signed_url_endpoint: str = DEFAULT_SIGNED_URL_ENDPOINT
    signed_url_algorithm: str = DEFAULT_SIGNED_URL_ALGORITHM

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.signed_url_endpoint:
            raise ValueError("signed_url_endpoint is required")

        # Must be http(s)://host[:port][/path]
        url_pattern = r"^https?://[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$"
        if not re.match(url_pattern, self.signed_url_endpoint):
            raise ValueError(f"Invalid signed_url_endpoint format: {self.signed_url_endpoint}")

        if not self.signed_url_algorithm:
            raise ValueError("signed_url_algorithm is required")

        if not re.fullmatch(r"[A-Za-z0-9_-]+", self.signed_url_algorithm):
            raise ValueError(f"Invalid signed_url_algorithm: {self.signed_url_algorithm}")

    def signed_url_base(self) -> str:
        """Endpoint without trailing slash."""
        return self.signed_url_endpoint.rstrip("/")


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - MOCK_GCS_SIGNED_URL_ENDPOINT (default: https://storage.googleapis.com)
        - MOCK_GCS_SIGNED_URL_ALGORITHM (default: MOCKED)

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid

    Note:
        Creates a fresh Settings instance every time (no caching) so tests
        can change the environment between storages.
    """
    return Settings(
        signed_url_endpoint=os.getenv("MOCK_GCS_SIGNED_URL_ENDPOINT", DEFAULT_SIGNED_URL_ENDPOINT),
        signed_url_algorithm=os.getenv("MOCK_GCS_SIGNED_URL_ALGORITHM", DEFAULT_SIGNED_URL_ALGORITHM),
    )
