"""
GitHub API read operations.

Provides the read-only lookups the dashboard needs before a write:
- The user's repositories
- Branches and tags (empty lists for repositories with no commits)
- Directory listings and file contents
- Branch creation from an existing branch
"""

import base64
import logging
from typing import Any

from gitassist.services.github.exceptions import GitHubAPIError
from gitassist.services.github.gateway import GitHubGateway
from gitassist.services.github.helpers import encode_path
from gitassist.services.github.git_objects import GitObjectBuilder
from gitassist.services.github.prober import matches_empty_signature
from gitassist.services.github.types import (
    Branch,
    BranchTip,
    Repo,
    RepoContent,
    RepositoryRef,
    Tag,
)

logger = logging.getLogger(__name__)


class GitHubReadOperations:
    """
    Read-only operations for GitHub API.

    All calls go through the GitHubGateway, so errors carry GitHub's own
    message and status.
    """

    def __init__(self, gateway: GitHubGateway):
        self.gateway = gateway

    def _normalize_repo(self, data: dict[str, Any]) -> Repo:
        """Convert GitHub API response to Repo dataclass."""
        return Repo(
            github_id=data["id"],
            name=data["name"],
            full_name=data["full_name"],
            owner=data["owner"]["login"],
            url=data["html_url"],
            description=data.get("description"),
            language=data.get("language"),
            default_branch=data.get("default_branch", "main"),
            stars_count=data.get("stargazers_count", 0),
            forks_count=data.get("forks_count", 0),
            updated_at=data.get("updated_at"),
            topics=data.get("topics") or [],
        )

    async def get_user_repos(self, page: int = 1, per_page: int = 100) -> list[Repo]:
        """
        Fetch repositories owned by the authenticated user, most recently updated first.

        Args:
            page: Page number (1-indexed)
            per_page: Items per page (max 100)
        """
        repos = await self.gateway.invoke(
            "/user/repos",
            params={
                "type": "owner",
                "sort": "updated",
                "per_page": min(per_page, 100),
                "page": page,
            },
        )
        if not isinstance(repos, list):
            return []
        return [self._normalize_repo(r) for r in repos]

    async def _list_or_empty(self, path: str) -> list[dict[str, Any]]:
        """GET a list endpoint, mapping empty-repository errors to []."""
        try:
            items = await self.gateway.invoke(path)
        except GitHubAPIError as e:
            if matches_empty_signature(e):
                return []
            raise
        return items if isinstance(items, list) else []

    async def list_branches(self, repo: RepositoryRef) -> list[Branch]:
        items = await self._list_or_empty(f"{repo.api_path}/branches")
        return [
            Branch(
                name=b["name"],
                commit_sha=b["commit"]["sha"],
                protected=b.get("protected", False),
            )
            for b in items
        ]

    async def list_tags(self, repo: RepositoryRef) -> list[Tag]:
        items = await self._list_or_empty(f"{repo.api_path}/tags")
        return [Tag(name=t["name"], commit_sha=t["commit"]["sha"]) for t in items]

    async def get_contents(self, repo: RepositoryRef, path: str = "") -> list[RepoContent] | str:
        """
        List a directory or read a file.

        Returns:
            Decoded text for a file; otherwise directory entries with
            directories first, then files, each sorted by name. Empty
            repositories and missing paths give [].
        """
        try:
            contents = await self.gateway.invoke(
                f"{repo.api_path}/contents/{encode_path(path.strip('/'))}"
            )
        except GitHubAPIError as e:
            if matches_empty_signature(e):
                return []
            raise

        if contents is None:
            return []

        if isinstance(contents, dict):
            if contents.get("type") == "file" and contents.get("encoding") == "base64":
                return base64.b64decode(contents.get("content") or "").decode("utf-8", errors="replace")
            return []

        items = sorted(contents, key=lambda c: (c["type"] != "dir", c["name"].lower()))
        return [
            RepoContent(
                name=c["name"],
                path=c["path"],
                sha=c["sha"],
                size=c.get("size", 0),
                type=c["type"],
                html_url=c.get("html_url"),
                download_url=c.get("download_url"),
            )
            for c in items
        ]

    async def create_branch(
        self, repo: RepositoryRef, new_branch: str, source_branch: str
    ) -> BranchTip:
        """
        Create ``new_branch`` pointing at the tip of ``source_branch``.

        Raises:
            BranchNotFoundError: If the source branch doesn't exist
        """
        builder = GitObjectBuilder(self.gateway, repo)
        source = await builder.resolve_branch_tip(source_branch)
        assert source.commit_sha is not None
        tip = await builder.create_ref(new_branch, source.commit_sha)
        logger.info(f"Created branch {new_branch} from {source_branch} in {repo.full_name}")
        return tip
