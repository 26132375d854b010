"""API tests for POST /api/v1/commits."""

from __future__ import annotations

import base64
import io
import zipfile
from unittest.mock import AsyncMock

import httpx
import pytest
from httpx import AsyncClient

from gitassist.services.github.exceptions import GitHubAPIError
from tests.helpers.auth_assertions import assert_upstream_error
from tests.helpers.fake_github import FakeGitHub

URL = "/api/v1/commits"
REPO_URL = "https://github.com/octo/hello"


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode()


def _payload(**overrides):
    payload = {
        "repo_url": REPO_URL,
        "message": "Add files",
        "files": [
            {"path": "README.md", "content": _b64(b"# Hello")},
            {"path": "src/app.py", "content": _b64(b"print('hi')")},
        ],
    }
    payload.update(overrides)
    return payload


class TestCommitFiles:
    @pytest.mark.anyio
    async def test_empty_repository_initialized(self, api_client: AsyncClient, fake_github: FakeGitHub):
        resp = await api_client.post(URL, json=_payload())

        assert resp.status_code == 201
        data = resp.json()
        assert data["success"] is True
        assert data["strategy"] == "initialize"
        assert data["branch"] == "main"
        assert fake_github.refs["main"] == data["commit_sha"]
        assert data["commit_url"].endswith(data["commit_sha"])

    @pytest.mark.anyio
    async def test_existing_branch_appended(self, api_client: AsyncClient, fake_github: FakeGitHub):
        fake_github.seed_branch("main", "abc123", "tre111")

        resp = await api_client.post(URL, json=_payload(branch="main"))

        assert resp.status_code == 201
        assert resp.json()["strategy"] == "append"
        assert fake_github.commits[resp.json()["commit_sha"]]["parents"] == ["abc123"]

    @pytest.mark.anyio
    async def test_destination_path_applied(self, api_client: AsyncClient, fake_github: FakeGitHub):
        resp = await api_client.post(URL, json=_payload(destination_path="/site/"))

        tree = fake_github.commits[resp.json()["commit_sha"]]["tree"]
        assert fake_github.tree_paths(tree) == {"site/README.md", "site/src/app.py"}

    @pytest.mark.anyio
    async def test_archives_expanded_when_requested(
        self, api_client: AsyncClient, fake_github: FakeGitHub
    ):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("index.html", "<html>")
            archive.writestr("css/site.css", "body{}")
        files = [{"path": "web/bundle.zip", "content": _b64(buffer.getvalue())}]

        resp = await api_client.post(URL, json=_payload(files=files, extract_archives=True))

        assert resp.status_code == 201
        tree = fake_github.commits[resp.json()["commit_sha"]]["tree"]
        assert fake_github.tree_paths(tree) == {"web/index.html", "web/css/site.css"}

    @pytest.mark.anyio
    async def test_zip_committed_as_is_by_default(
        self, api_client: AsyncClient, fake_github: FakeGitHub
    ):
        files = [{"path": "bundle.zip", "content": _b64(b"PK-not-really")}]

        resp = await api_client.post(URL, json=_payload(files=files))

        tree = fake_github.commits[resp.json()["commit_sha"]]["tree"]
        assert fake_github.tree_paths(tree) == {"bundle.zip"}


class TestCommitValidation:
    @pytest.mark.anyio
    async def test_malformed_repo_url(self, api_client: AsyncClient, fake_github: FakeGitHub):
        resp = await api_client.post(URL, json=_payload(repo_url="not-a-url"))

        assert resp.status_code == 400
        assert "Invalid repository URL" in resp.json()["detail"]
        assert fake_github.calls == []

    @pytest.mark.anyio
    async def test_no_files(self, api_client: AsyncClient):
        resp = await api_client.post(URL, json=_payload(files=[]))

        assert resp.status_code == 400
        assert resp.json()["detail"] == "At least one file is required"

    @pytest.mark.anyio
    async def test_empty_message_rejected(self, api_client: AsyncClient):
        resp = await api_client.post(URL, json=_payload(message=""))

        assert resp.status_code == 422

    @pytest.mark.anyio
    async def test_corrupt_archive(self, api_client: AsyncClient):
        files = [{"path": "bundle.zip", "content": _b64(b"not a zip")}]

        resp = await api_client.post(URL, json=_payload(files=files, extract_archives=True))

        assert resp.status_code == 400
        assert "Not a valid ZIP archive" in resp.json()["detail"]


class TestCommitUpstreamErrors:
    @pytest.mark.anyio
    async def test_bad_credentials_passed_through(
        self, api_client: AsyncClient, fake_github: FakeGitHub
    ):
        fake_github.fail("GET", r"^/repos/octo/hello$", GitHubAPIError("Bad credentials", 401))

        resp = await api_client.post(URL, json=_payload())

        assert_upstream_error(resp, 401, "Bad credentials")

    @pytest.mark.anyio
    async def test_git_data_error_passed_through(
        self, api_client: AsyncClient, fake_github: FakeGitHub
    ):
        fake_github.seed_branch("main", "abc123", "tre111")
        fake_github.fail("PATCH", r"/git/refs/heads/main$", GitHubAPIError("Update is not a fast forward", 422))

        resp = await api_client.post(URL, json=_payload())

        assert_upstream_error(resp, 422, "Update is not a fast forward")

    @pytest.mark.anyio
    async def test_transport_failure_is_bad_gateway(
        self, api_client: AsyncClient, fake_github: FakeGitHub
    ):
        fake_github.invoke = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

        resp = await api_client.post(URL, json=_payload(branch="main"))

        assert resp.status_code == 502
        assert resp.json()["detail"] == "Could not reach GitHub. Please try again."
