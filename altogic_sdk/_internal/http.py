"""Shared HTTP client configuration."""

import httpx

from altogic_sdk._version import __version__

DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"altogic-sdk/{__version__}"


def create_http_client(
    *,
    base_url: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create configured async HTTP client.

    Args:
        base_url: Base URL of the app environment.
        timeout: Default request timeout in seconds.
        transport: Optional transport override (mock transports in tests).

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        base_url=base_url,
        headers={"User-Agent": USER_AGENT},
        transport=transport,
    )
