"""
Commit endpoint: write one or more files to a repository in a single commit.
"""

import logging

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from gitassist.api.deps import Gateway
from gitassist.core.exceptions import UpstreamError, ValidationError
from gitassist.services.archive import expand_archives
from gitassist.services.github import (
    CommitOrchestrator,
    CommitResult,
    ErrorKind,
    FileChange,
    GitHubAPIError,
    InvalidInputError,
)

router = APIRouter(prefix="/commits", tags=["commits"])
logger = logging.getLogger(__name__)


# --- Request/Response Models ---


class CommitFileIn(BaseModel):
    """A file to commit. ``content`` must be base64-encoded."""

    path: str = Field(min_length=1)
    content: str


class CommitRequest(BaseModel):
    repo_url: str
    message: str = Field(min_length=1)
    files: list[CommitFileIn]
    branch: str | None = None
    destination_path: str | None = None
    # Expand uploaded .zip files into their contents before committing
    extract_archives: bool = False


class CommitResponse(BaseModel):
    success: bool
    commit_url: str | None
    commit_sha: str | None
    branch: str | None
    strategy: str | None


def _raise_for_failure(result: CommitResult) -> None:
    """Translate a failed CommitResult into an HTTP error carrying GitHub's message."""
    detail = result.message or "Failed to commit files to the repository"
    if result.error_kind == ErrorKind.INVALID_INPUT:
        raise ValidationError(detail)
    raise UpstreamError(detail, result.status_code if (result.status_code or 0) >= 400 else None)


@router.post("", response_model=CommitResponse, status_code=status.HTTP_201_CREATED)
async def commit_files(data: CommitRequest, gateway: Gateway) -> CommitResponse:
    """Commit files to a repository branch.

    Initializes the branch when the repository is empty, appends otherwise.
    """
    files = [FileChange(path=f.path, content=f.content) for f in data.files]

    if data.extract_archives:
        try:
            files = expand_archives(files)
        except InvalidInputError as e:
            raise ValidationError(e.message) from None
        except ValueError:
            raise ValidationError("Archive content is not valid base64") from None

    orchestrator = CommitOrchestrator(gateway.token, gateway=gateway)
    try:
        result = await orchestrator.commit_files(
            data.repo_url,
            files,
            data.message,
            branch=data.branch,
            destination_path=data.destination_path,
        )
    except GitHubAPIError as e:
        raise UpstreamError.from_github(e) from None

    if not result.success:
        _raise_for_failure(result)

    return CommitResponse(
        success=True,
        commit_url=result.commit_url,
        commit_sha=result.commit_sha,
        branch=result.branch,
        strategy=result.strategy.value if result.strategy else None,
    )
