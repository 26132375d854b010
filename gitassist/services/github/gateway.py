"""
GitHub API gateway.

Single point through which every GitHub REST call is made. One attempt per
call: no retries, no backoff. Non-2xx responses become GitHubAPIError with
the server's message; 204 and empty bodies become None.
"""

import logging
from typing import Any

from gitassist.config import settings
from gitassist.services.github.exceptions import ReleaseAssetUploadError
from gitassist.services.github.helpers import extract_error_message, handle_error_response
from gitassist.services.github.http_client import get_github_client

logger = logging.getLogger(__name__)


class GitHubGateway:
    """Authenticated, retry-free access to the GitHub REST API."""

    def __init__(self, token: str):
        self.token = token
        self.base_url = settings.github_api_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": settings.github_api_version,
        }

    async def invoke(
        self,
        path: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Call a GitHub API endpoint.

        Args:
            path: API path starting with "/" (e.g. "/repos/owner/repo")
            method: HTTP method
            body: JSON request body for writes
            params: Query string parameters

        Returns:
            Parsed JSON, or None for 204 / empty responses

        Raises:
            GitHubAPIError: On any non-2xx response
        """
        client = get_github_client()
        response = await client.request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers,
            json=body,
            params=params,
        )

        handle_error_response(response, f"{method} {path}")

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def upload(
        self,
        url: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> Any:
        """
        POST raw bytes to an absolute URL (release asset upload host).

        Raises:
            ReleaseAssetUploadError: On any non-2xx response
        """
        client = get_github_client()
        response = await client.post(
            url,
            headers={
                **self._headers,
                "Content-Type": content_type or "application/octet-stream",
            },
            content=content,
        )

        if not response.is_success:
            message = extract_error_message(response)
            logger.warning(f"Release asset upload failed for {filename}: {response.status_code} {message}")
            raise ReleaseAssetUploadError(filename, message, response.status_code)

        if not response.content:
            return None
        return response.json()
