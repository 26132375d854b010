"""Unit tests for repository URL parsing and destination paths."""

from __future__ import annotations

import time

import pytest

from gitassist.core.exceptions import UpstreamError
from gitassist.services.github.exceptions import GitHubAPIError, InvalidInputError
from gitassist.services.github.helpers import apply_destination_path
from gitassist.services.github.types import FileChange, RepositoryRef


class TestRepositoryRefFromUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/octo/hello",
            "https://github.com/octo/hello/",
            "https://github.com/octo/hello.git",
            "http://github.com/octo/hello",
            "https://www.github.com/octo/hello",
            "http://www.github.com/octo/hello",
            "www.github.com/octo/hello",
            "https://github.com/octo/hello/tree/main/src",
            "octo/hello",
            "github.com/octo/hello",
        ],
    )
    def test_accepted_forms(self, url):
        assert RepositoryRef.from_url(url) == RepositoryRef("octo", "hello")

    @pytest.mark.parametrize("url", ["not-a-url", "", "https://github.com/octo", "https://github.com/"])
    def test_rejected_forms(self, url):
        with pytest.raises(InvalidInputError):
            RepositoryRef.from_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "https://gitlab.com/octo/hello",
            "https://bitbucket.org/octo/hello",
            "gitlab.com/octo/hello",
            "ssh://git@example.com/octo/hello",
        ],
    )
    def test_other_hosts_rejected(self, url):
        with pytest.raises(InvalidInputError, match="Not a GitHub repository URL"):
            RepositoryRef.from_url(url)

    def test_api_path(self):
        assert RepositoryRef("octo", "hello").api_path == "/repos/octo/hello"


class TestApplyDestinationPath:
    def _files(self, *paths):
        return [FileChange(path=p, content="eA==") for p in paths]

    @pytest.mark.parametrize(
        ("prefix", "expected"),
        [
            ("/assets/", "assets/logo.png"),
            ("assets", "assets/logo.png"),
            ("docs/img", "docs/img/logo.png"),
            ("/", "logo.png"),
            ("", "logo.png"),
            (None, "logo.png"),
        ],
    )
    def test_prefix_forms(self, prefix, expected):
        assert apply_destination_path(self._files("logo.png"), prefix)[0].path == expected

    def test_order_and_content_preserved(self):
        files = apply_destination_path(self._files("b", "a", "c"), "x")

        assert [f.path for f in files] == ["x/b", "x/a", "x/c"]
        assert all(f.content == "eA==" for f in files)


class TestUpstreamError:
    def test_passes_github_status_and_message(self):
        error = UpstreamError.from_github(GitHubAPIError("Validation Failed", 422))

        assert error.status_code == 422
        assert error.detail == "Validation Failed"

    def test_missing_status_becomes_bad_gateway(self):
        assert UpstreamError.from_github(GitHubAPIError("boom")).status_code == 502

    def test_rate_limit_reset_noted(self):
        reset = int(time.time()) + 600
        error = UpstreamError.from_github(
            GitHubAPIError("GitHub API rate limit exceeded", 403, rate_limit_reset=reset)
        )

        assert error.detail.startswith("GitHub API rate limit exceeded. Rate limit resets in ")
        assert error.detail.endswith(" minutes.")
