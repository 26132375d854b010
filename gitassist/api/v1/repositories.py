"""
Repository browsing endpoints used to pick a commit or release target.
"""

import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from gitassist.api.deps import Gateway
from gitassist.core.exceptions import NotFoundError, UpstreamError
from gitassist.services.github import (
    BranchNotFoundError,
    GitHubAPIError,
    GitHubReadOperations,
    RepositoryRef,
)

router = APIRouter(prefix="/repos", tags=["repositories"])
logger = logging.getLogger(__name__)


class CreateBranchRequest(BaseModel):
    name: str = Field(min_length=1)
    source_branch: str = Field(min_length=1)


@router.get("")
async def list_repos(
    gateway: Gateway,
    page: int = Query(1, ge=1),
    per_page: int = Query(100, ge=1, le=100),
) -> list[dict[str, Any]]:
    """List repositories owned by the authenticated user."""
    try:
        repos = await GitHubReadOperations(gateway).get_user_repos(page=page, per_page=per_page)
    except GitHubAPIError as e:
        raise UpstreamError.from_github(e) from None
    return [asdict(r) for r in repos]


@router.get("/{owner}/{repo}/branches")
async def list_branches(owner: str, repo: str, gateway: Gateway) -> list[dict[str, Any]]:
    """List branches. Empty repositories return an empty list."""
    try:
        branches = await GitHubReadOperations(gateway).list_branches(RepositoryRef(owner, repo))
    except GitHubAPIError as e:
        raise UpstreamError.from_github(e) from None
    return [asdict(b) for b in branches]


@router.post("/{owner}/{repo}/branches", status_code=status.HTTP_201_CREATED)
async def create_branch(
    owner: str, repo: str, data: CreateBranchRequest, gateway: Gateway
) -> dict[str, Any]:
    """Create a branch from the tip of another branch."""
    try:
        tip = await GitHubReadOperations(gateway).create_branch(
            RepositoryRef(owner, repo), data.name, data.source_branch
        )
    except BranchNotFoundError:
        raise NotFoundError(f"Branch '{data.source_branch}'") from None
    except GitHubAPIError as e:
        raise UpstreamError.from_github(e) from None
    return {"name": tip.branch_name, "commit_sha": tip.commit_sha}


@router.get("/{owner}/{repo}/tags")
async def list_tags(owner: str, repo: str, gateway: Gateway) -> list[dict[str, Any]]:
    try:
        tags = await GitHubReadOperations(gateway).list_tags(RepositoryRef(owner, repo))
    except GitHubAPIError as e:
        raise UpstreamError.from_github(e) from None
    return [asdict(t) for t in tags]


@router.get("/{owner}/{repo}/contents")
async def get_contents(
    owner: str,
    repo: str,
    gateway: Gateway,
    path: str = Query("", description="Directory or file path; empty for the root"),
) -> dict[str, Any]:
    """List a directory, or return a file's text under ``content``."""
    try:
        contents = await GitHubReadOperations(gateway).get_contents(RepositoryRef(owner, repo), path)
    except GitHubAPIError as e:
        raise UpstreamError.from_github(e) from None

    if isinstance(contents, str):
        return {"type": "file", "path": path, "content": contents}
    return {"type": "dir", "path": path, "items": [asdict(c) for c in contents]}
