"""
Issue endpoints: list open issues and open a new one.
"""

import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from gitassist.api.deps import Gateway
from gitassist.core.exceptions import UpstreamError
from gitassist.services.github import GitHubAPIError, IssueOperations, RepositoryRef

router = APIRouter(prefix="/repos/{owner}/{repo}/issues", tags=["issues"])
logger = logging.getLogger(__name__)


class CreateIssueRequest(BaseModel):
    title: str = Field(min_length=1)
    body: str = ""


@router.get("")
async def list_issues(owner: str, repo: str, gateway: Gateway) -> list[dict[str, Any]]:
    """List open issues, newest first."""
    try:
        issues = await IssueOperations(gateway).list_open_issues(RepositoryRef(owner, repo))
    except GitHubAPIError as e:
        raise UpstreamError.from_github(e) from None
    return [asdict(i) for i in issues]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_issue(
    owner: str, repo: str, data: CreateIssueRequest, gateway: Gateway
) -> dict[str, Any]:
    try:
        issue = await IssueOperations(gateway).create_issue(
            RepositoryRef(owner, repo), data.title, data.body
        )
    except GitHubAPIError as e:
        raise UpstreamError.from_github(e) from None
    logger.info(f"Opened issue #{issue.number} on {owner}/{repo}")
    return asdict(issue)
