"""API tests for POST /api/v1/refine."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from gitassist.services.interpreter import RefinementError

URL = "/api/v1/refine"


@pytest.mark.anyio
async def test_returns_refined_text(api_client: AsyncClient):
    with patch(
        "gitassist.api.v1.refine.description_refiner.refine",
        new=AsyncMock(return_value="## Bug\n\nCrashes on save."),
    ) as refine:
        resp = await api_client.post(URL, json={"text": "crash on save", "context": "issue"})

    assert resp.status_code == 200
    assert resp.json() == {"refined_text": "## Bug\n\nCrashes on save."}
    refine.assert_awaited_once_with("crash on save", "issue")


@pytest.mark.anyio
async def test_unknown_context_rejected(api_client: AsyncClient):
    resp = await api_client.post(URL, json={"text": "x", "context": "commit"})

    assert resp.status_code == 422


@pytest.mark.anyio
async def test_provider_failure_is_bad_gateway(api_client: AsyncClient):
    with patch(
        "gitassist.api.v1.refine.description_refiner.refine",
        new=AsyncMock(side_effect=RefinementError("AI refinement is not configured")),
    ):
        resp = await api_client.post(URL, json={"text": "x", "context": "release notes"})

    assert resp.status_code == 502
    assert resp.json()["detail"] == "AI refinement is not configured"


@pytest.mark.anyio
async def test_blank_text_is_bad_request(api_client: AsyncClient):
    with patch(
        "gitassist.api.v1.refine.description_refiner.refine",
        new=AsyncMock(side_effect=ValueError("Text to refine is empty")),
    ):
        resp = await api_client.post(URL, json={"text": "   ", "context": "issue"})

    assert resp.status_code == 400
