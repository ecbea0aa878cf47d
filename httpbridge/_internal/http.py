"""Shared HTTP client configuration."""

import httpx

from httpbridge._internal.config import ClientConfig
from httpbridge._version import __version__

DEFAULT_USER_AGENT = f"httpbridge/{__version__}"


def create_http_client(
    config: ClientConfig | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create configured HTTP client.

    Args:
        config: Client options. Defaults are used when omitted.
        transport: Optional transport override (used by tests).

    Returns:
        Configured httpx.Client instance.
    """
    config = config or ClientConfig()
    return httpx.Client(
        timeout=config.timeout,
        verify=not config.insecure_ssl,
        proxy=config.proxy,
        follow_redirects=config.follow_redirects,
        max_redirects=config.max_redirects,
        transport=transport,
    )
