"""Shared HTTP client for remote biometric backends."""
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

# Global shared HTTP client instance
_shared_client: Optional[httpx.AsyncClient] = None


def get_shared_http_client(timeout: float = 10.0) -> httpx.AsyncClient:
    """
    Get or create the shared async HTTP client.

    Gate verifications reuse pooled keep-alive connections instead of paying
    a TLS handshake per attempt. ``timeout`` only applies when the client is
    first created; callers pass their own per-request timeout.
    """
    global _shared_client

    if _shared_client is None:
        _shared_client = httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(
                max_keepalive_connections=10,
                max_connections=50,
                keepalive_expiry=30.0,
            ),
        )
        logger.info("Created shared HTTP client")

    return _shared_client


async def close_shared_http_client() -> None:
    """Close the shared client (application shutdown)."""
    global _shared_client

    if _shared_client is not None:
        await _shared_client.aclose()
        _shared_client = None
        logger.info("Closed shared HTTP client")
