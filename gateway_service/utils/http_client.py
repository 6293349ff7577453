"""
Shared upstream HTTP client

One pooled AsyncClient per process, opened in the application lifespan.
"""

import httpx

from gateway_service.utils.config import GatewayConfig

# Connection pool settings (per worker)
MAX_CONNECTIONS = 100
MAX_KEEPALIVE = 20
KEEPALIVE_EXPIRY = 5.0

CONNECT_TIMEOUT = 5.0


def build_http_client(config: GatewayConfig) -> httpx.AsyncClient:
    """Create the AsyncClient used for every outbound call"""
    limits = httpx.Limits(
        max_connections=MAX_CONNECTIONS,
        max_keepalive_connections=MAX_KEEPALIVE,
        keepalive_expiry=KEEPALIVE_EXPIRY
    )
    # Per-handler deadlines are applied with asyncio.wait_for; this is the transport ceiling
    timeout = httpx.Timeout(config.upstream_timeout_seconds, connect=CONNECT_TIMEOUT)
    return httpx.AsyncClient(
        limits=limits,
        timeout=timeout,
        follow_redirects=True,
    )
