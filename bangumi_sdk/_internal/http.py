"""Shared HTTP client configuration."""

import httpx

from bangumi_sdk._version import __version__

DEFAULT_BASE_URL = "https://api.bgm.tv"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"bangumi-sdk/{__version__}"


def create_http_client(*, timeout: float = DEFAULT_TIMEOUT) -> httpx.Client:
    """Create configured HTTP client.

    Identification and auth headers are attached per request by the
    dispatcher, so the pooled client carries none of its own.

    Args:
        timeout: Request timeout in seconds.

    Returns:
        Configured httpx.Client instance.
    """
    return httpx.Client(timeout=timeout)
