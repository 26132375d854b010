"""
Pooled HTTP client shared by every GitHub call.

Commits fan out one blob request per file, so connections are kept alive
and reused across requests and across callers. The client carries no
credentials; each GitHubGateway sends its own token per request.
"""

import logging

import httpx

from gitassist.config import settings

logger = logging.getLogger(__name__)

USER_AGENT = "gitassist"

_client: httpx.AsyncClient | None = None


def _build_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        timeout=httpx.Timeout(settings.github_timeout_seconds, connect=5.0),
        limits=httpx.Limits(
            max_connections=settings.github_max_connections,
            max_keepalive_connections=settings.github_max_connections // 2,
        ),
        http2=True,
    )


def get_github_client() -> httpx.AsyncClient:
    """Return the shared client, creating it on first use or after close."""
    global _client
    if _client is None or _client.is_closed:
        _client = _build_client()
        logger.debug(
            f"Opened GitHub HTTP client (pool={settings.github_max_connections}, "
            f"timeout={settings.github_timeout_seconds}s)"
        )
    return _client


async def close_github_client() -> None:
    """Close the shared client. Called from the app lifespan on shutdown."""
    global _client
    if _client is None or _client.is_closed:
        return
    await _client.aclose()
    _client = None
    logger.debug("Closed GitHub HTTP client")
