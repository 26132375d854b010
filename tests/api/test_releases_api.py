"""API tests for release listing and publishing."""

from __future__ import annotations

import base64

import pytest
from httpx import AsyncClient

from tests.helpers.fake_github import FakeGitHub

URL = "/api/v1/repos/octo/hello/releases"


def _asset(name: str, data: bytes = b"binary") -> dict:
    return {"filename": name, "content": base64.b64encode(data).decode()}


class TestPublishRelease:
    @pytest.mark.anyio
    async def test_publish_with_assets(self, api_client: AsyncClient, fake_github: FakeGitHub):
        resp = await api_client.post(
            URL,
            json={
                "tag_name": "v1.0.0",
                "name": "First release",
                "body": "Notes",
                "branch": "main",
                "assets": [_asset("app.zip", b"zipbytes")],
            },
        )

        assert resp.status_code == 201
        data = resp.json()
        assert data["success"] is True
        assert data["error"] is None
        assert data["release"]["tag_name"] == "v1.0.0"
        assert [a["name"] for a in data["uploaded_assets"]] == ["app.zip"]
        assert fake_github.uploads[0][1] == b"zipbytes"

    @pytest.mark.anyio
    async def test_partial_upload_failure_reported(
        self, api_client: AsyncClient, fake_github: FakeGitHub
    ):
        fake_github.failing_uploads.add("bad.bin")

        resp = await api_client.post(
            URL,
            json={
                "tag_name": "v1",
                "name": "v1",
                "branch": "main",
                "assets": [_asset("ok.bin"), _asset("bad.bin")],
            },
        )

        assert resp.status_code == 201
        data = resp.json()
        assert data["success"] is False
        assert "'bad.bin'" in data["error"]
        assert [a["name"] for a in data["uploaded_assets"]] == ["ok.bin"]

    @pytest.mark.anyio
    async def test_defaults_to_default_branch_tip(
        self, api_client: AsyncClient, fake_github: FakeGitHub
    ):
        fake_github.seed_branch("main", "abc123", "tre111")

        resp = await api_client.post(URL, json={"tag_name": "v2", "name": "v2"})

        assert resp.status_code == 201
        assert fake_github.releases[0]["target_commitish"] == "abc123"

    @pytest.mark.anyio
    async def test_empty_repository_cannot_be_tagged(self, api_client: AsyncClient):
        resp = await api_client.post(URL, json={"tag_name": "v1", "name": "v1"})

        assert resp.status_code == 400
        assert resp.json()["detail"].startswith("Cannot tag:")

    @pytest.mark.anyio
    async def test_invalid_asset_encoding(self, api_client: AsyncClient, fake_github: FakeGitHub):
        resp = await api_client.post(
            URL,
            json={
                "tag_name": "v1",
                "name": "v1",
                "branch": "main",
                "assets": [{"filename": "a.bin", "content": "not base64!"}],
            },
        )

        assert resp.status_code == 400
        assert fake_github.releases == []


class TestListReleases:
    @pytest.mark.anyio
    async def test_lists_published_releases(self, api_client: AsyncClient):
        await api_client.post(URL, json={"tag_name": "v1", "name": "One", "branch": "main"})

        resp = await api_client.get(URL)

        assert resp.status_code == 200
        assert [r["tag_name"] for r in resp.json()] == ["v1"]
