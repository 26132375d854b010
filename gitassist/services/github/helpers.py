"""
GitHub API helper utilities.

Provides rate limit handling, error response processing and file path
rewriting shared by the gateway and the commit orchestrator.
"""

import logging
from collections.abc import Sequence
from urllib.parse import quote

import httpx

from gitassist.services.github.exceptions import GitHubAPIError
from gitassist.services.github.types import FileChange

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def extract_error_message(response: httpx.Response) -> str:
    """
    Pull the human-readable message out of a GitHub error response.

    GitHub error bodies look like ``{"message": "...", "documentation_url": "..."}``.
    Falls back to the status line when the body isn't JSON or has no message.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"GitHub API error: {response.status_code} {response.reason_phrase}".strip()


def handle_error_response(response: httpx.Response, context: str) -> None:
    """
    Raise for non-2xx GitHub responses, passing the server message through.

    Args:
        response: The HTTP response from GitHub API
        context: Request description for logging (format: "METHOD /path")

    Raises:
        GitHubAPIError: For any non-2xx status
    """
    if response.is_success:
        return

    message = extract_error_message(response)
    rate_info = RateLimitInfo(response)
    rate_limit_reset = None
    if response.status_code in (403, 429) and rate_info.is_exhausted:
        rate_limit_reset = rate_info.reset_timestamp
        message = "GitHub API rate limit exceeded"

    logger.warning(f"GitHub API error on {context}: {response.status_code} {message}")
    raise GitHubAPIError(message, response.status_code, rate_limit_reset=rate_limit_reset)


def encode_path(value: str) -> str:
    """Percent-encode a branch name or file path for use inside an API path.

    Slashes are kept as separators; ``#``, ``?``, ``%`` and spaces are escaped
    so they can't end the path early.
    """
    return quote(value, safe="/")


def normalize_destination(destination_path: str | None) -> str:
    """Strip leading/trailing separators from a destination prefix."""
    if not destination_path:
        return ""
    return destination_path.strip().strip("/")


def apply_destination_path(
    files: Sequence[FileChange], destination_path: str | None
) -> list[FileChange]:
    """
    Prefix every file path with the destination directory.

    ``"/assets/"`` + ``"logo.png"`` becomes ``"assets/logo.png"``. A prefix
    that is empty after trimming leaves paths unchanged. Order is preserved.
    """
    prefix = normalize_destination(destination_path)
    if not prefix:
        return list(files)
    return [f.with_path(f"{prefix}/{f.path.lstrip('/')}") for f in files]
