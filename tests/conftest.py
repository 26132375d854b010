"""Root conftest: test infrastructure for all backend tests.

Provides:
- anyio backend selection (asyncio only)
- An in-memory FakeGitHub standing in for the GitHub API
- API client with the gateway dependency overridden to use FakeGitHub
- Autouse guard so no test reaches the real GitHub API
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from tests.helpers.fake_github import FakeGitHub

TOKEN = "ghp_test_token_12345"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fake_github() -> FakeGitHub:
    """An empty repository with default branch ``main``."""
    return FakeGitHub(token=TOKEN)


# ─────────────────────────────────────────────────────────────────────────────
# API Client
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
async def api_client(fake_github: FakeGitHub):
    """HTTP client whose requests are served by FakeGitHub.

    Sends a bearer token by default; overrides get_github_gateway.
    """
    from gitassist.api.deps import get_github_gateway
    from gitassist.main import app

    app.dependency_overrides[get_github_gateway] = lambda: fake_github

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Authorization": f"Bearer {TOKEN}"},
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def anon_client():
    """HTTP client with no Authorization header."""
    from gitassist.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ─────────────────────────────────────────────────────────────────────────────
# External Service Guard (autouse)
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def block_external_http():
    """SAFETY: fail any test that reaches the real shared GitHub client."""
    with patch(
        "gitassist.services.github.gateway.get_github_client",
        side_effect=AssertionError("Unexpected real GitHub call; patch get_github_client"),
    ) as guard:
        yield guard
