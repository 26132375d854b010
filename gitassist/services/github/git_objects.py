"""
Git object construction via the GitHub Git Data API.

Builds blobs -> tree -> commit -> ref for a set of files:
- Path A (append): tree layered on the branch tip's tree, commit parented on
  the tip, ref patched forward
- Path B (initialize): tree with only the new entries, root commit, ref created

There is no cross-step transaction. A failed step aborts the rest and leaves
any already-created blobs/trees unreferenced on GitHub.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from gitassist.services.github.constants import NO_COMMIT_FOR_REF
from gitassist.services.github.exceptions import BranchNotFoundError, GitHubAPIError
from gitassist.services.github.gateway import GitHubGateway
from gitassist.services.github.helpers import encode_path
from gitassist.services.github.prober import matches_empty_signature
from gitassist.services.github.types import (
    Blob,
    BranchTip,
    Commit,
    FileChange,
    RepositoryRef,
    Tree,
)

logger = logging.getLogger(__name__)


def _is_missing_branch(error: GitHubAPIError) -> bool:
    return NO_COMMIT_FOR_REF in (error.message or "") or matches_empty_signature(error)


class GitObjectBuilder:
    """
    Creates Git objects in one repository.

    Step methods map one-to-one onto Git Data API calls; ``append`` and
    ``initialize`` chain them in dependency order.
    """

    def __init__(self, gateway: GitHubGateway, repo: RepositoryRef):
        self.gateway = gateway
        self.repo = repo

    @property
    def _git(self) -> str:
        return f"{self.repo.api_path}/git"

    # --- Steps ---

    async def resolve_branch_tip(self, branch: str) -> BranchTip:
        """
        Get the commit SHA the branch currently points at.

        Raises:
            BranchNotFoundError: If the branch has no ref
        """
        try:
            ref_data = await self.gateway.invoke(f"{self._git}/ref/heads/{encode_path(branch)}")
        except GitHubAPIError as e:
            if _is_missing_branch(e):
                raise BranchNotFoundError(branch, status_code=e.status_code) from e
            raise

        if not ref_data or not ref_data.get("object", {}).get("sha"):
            raise BranchNotFoundError(branch)
        return BranchTip(branch_name=branch, commit_sha=ref_data["object"]["sha"])

    async def get_tree_sha(self, commit_sha: str, branch: str) -> str:
        """Get the tree SHA of a commit."""
        try:
            commit_data = await self.gateway.invoke(f"{self._git}/commits/{commit_sha}")
        except GitHubAPIError as e:
            if NO_COMMIT_FOR_REF in (e.message or ""):
                raise BranchNotFoundError(branch, e.message, e.status_code) from e
            raise
        tree_sha: str = commit_data["tree"]["sha"]
        return tree_sha

    async def create_blob(self, file: FileChange) -> Blob:
        blob_data = await self.gateway.invoke(
            f"{self._git}/blobs",
            method="POST",
            body={"content": file.content, "encoding": file.encoding},
        )
        return Blob(path=file.path, sha=blob_data["sha"])

    async def create_blobs(self, files: Sequence[FileChange]) -> list[Blob]:
        """Create all blobs concurrently. Result order matches ``files``."""
        return list(await asyncio.gather(*(self.create_blob(f) for f in files)))

    async def create_tree(self, blobs: Sequence[Blob], base_tree_sha: str | None = None) -> Tree:
        """
        Create a tree from blobs.

        With ``base_tree_sha`` GitHub merges the entries into that tree (upsert
        by path). Without it the tree holds only these entries.
        """
        body: dict[str, Any] = {"tree": [b.to_tree_entry() for b in blobs]}
        if base_tree_sha is not None:
            body["base_tree"] = base_tree_sha

        tree_data = await self.gateway.invoke(f"{self._git}/trees", method="POST", body=body)
        return Tree(sha=tree_data["sha"], base_tree_sha=base_tree_sha, entries=list(blobs))

    async def create_commit(self, message: str, tree_sha: str, parent_shas: list[str]) -> Commit:
        commit_data = await self.gateway.invoke(
            f"{self._git}/commits",
            method="POST",
            body={"message": message, "tree": tree_sha, "parents": parent_shas},
        )
        return Commit(
            sha=commit_data["sha"],
            tree_sha=tree_sha,
            parent_shas=list(parent_shas),
            message=message,
            html_url=commit_data.get("html_url", ""),
        )

    async def update_ref(self, branch: str, commit_sha: str) -> BranchTip:
        """Move an existing branch to ``commit_sha`` (fast-forward only)."""
        await self.gateway.invoke(
            f"{self._git}/refs/heads/{encode_path(branch)}",
            method="PATCH",
            body={"sha": commit_sha, "force": False},
        )
        return BranchTip(branch_name=branch, commit_sha=commit_sha)

    async def create_ref(self, branch: str, commit_sha: str) -> BranchTip:
        await self.gateway.invoke(
            f"{self._git}/refs",
            method="POST",
            body={"ref": f"refs/heads/{branch}", "sha": commit_sha},
        )
        return BranchTip(branch_name=branch, commit_sha=commit_sha)

    # --- Paths ---

    async def append(self, branch: str, files: Sequence[FileChange], message: str) -> Commit:
        """
        Path A: commit ``files`` on top of the branch's current tip.

        Raises:
            BranchNotFoundError: If the branch doesn't exist
        """
        tip = await self.resolve_branch_tip(branch)
        parent_sha = tip.commit_sha
        assert parent_sha is not None
        base_tree_sha = await self.get_tree_sha(parent_sha, branch)

        blobs = await self.create_blobs(files)
        tree = await self.create_tree(blobs, base_tree_sha=base_tree_sha)
        commit = await self.create_commit(message, tree.sha, [parent_sha])
        await self.update_ref(branch, commit.sha)

        logger.info(
            f"Appended {commit.sha[:7]} to {self.repo.full_name}@{branch} "
            f"({len(blobs)} file(s), parent {parent_sha[:7]})"
        )
        return commit

    async def initialize(self, branch: str, files: Sequence[FileChange], message: str) -> Commit:
        """Path B: create a root commit holding only ``files`` and a new branch ref."""
        blobs = await self.create_blobs(files)
        tree = await self.create_tree(blobs)
        commit = await self.create_commit(message, tree.sha, [])
        await self.create_ref(branch, commit.sha)

        logger.info(
            f"Initialized {self.repo.full_name}@{branch} with root commit {commit.sha[:7]} "
            f"({len(blobs)} file(s))"
        )
        return commit

    async def seed_with_contents(self, branch: str, file: FileChange, message: str) -> Commit:
        """
        Create a first commit through the contents API.

        The contents endpoint works on repositories with no commits at all,
        where the Git Data API refuses to create blobs. It creates the branch too.
        """
        data = await self.gateway.invoke(
            f"{self.repo.api_path}/contents/{encode_path(file.path)}",
            method="PUT",
            body={"message": message, "content": file.content, "branch": branch},
        )
        commit_data = data["commit"]
        logger.info(f"Seeded {self.repo.full_name}@{branch} via contents API: {file.path}")
        return Commit(
            sha=commit_data["sha"],
            tree_sha=commit_data.get("tree", {}).get("sha", ""),
            parent_shas=[p["sha"] for p in commit_data.get("parents", [])],
            message=message,
            html_url=commit_data.get("html_url", ""),
        )
