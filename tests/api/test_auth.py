"""Every GitHub-backed endpoint requires a bearer token."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.helpers.auth_assertions import assert_requires_auth

REPO = "/api/v1/repos/octo/hello"


class TestRequireToken:
    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "method,url,body",
        [
            ("post", "/api/v1/commits", {"repo_url": "https://github.com/o/r", "message": "m", "files": []}),
            ("get", "/api/v1/repos", None),
            ("get", f"{REPO}/branches", None),
            ("post", f"{REPO}/branches", {"name": "b", "source_branch": "main"}),
            ("get", f"{REPO}/tags", None),
            ("get", f"{REPO}/contents", None),
            ("get", f"{REPO}/issues", None),
            ("post", f"{REPO}/issues", {"title": "t"}),
            ("get", f"{REPO}/releases", None),
            ("post", f"{REPO}/releases", {"tag_name": "v1", "name": "v1"}),
            ("post", "/api/v1/refine", {"text": "t", "context": "issue"}),
        ],
    )
    async def test_missing_token_returns_401(
        self, anon_client: AsyncClient, method: str, url: str, body
    ):
        kwargs = {"json": body} if body else {}
        await assert_requires_auth(anon_client, method, url, **kwargs)


@pytest.mark.anyio
async def test_health_is_public(anon_client: AsyncClient):
    resp = await anon_client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}
