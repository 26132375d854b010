"""
Release endpoints: list releases and publish one with optional attachments.
"""

import base64
import binascii
import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from gitassist.api.deps import Gateway
from gitassist.core.exceptions import UpstreamError, ValidationError
from gitassist.services.github import (
    AssetUpload,
    BranchNotFoundError,
    GitHubAPIError,
    ReleaseOperations,
    RepositoryRef,
)

router = APIRouter(prefix="/repos/{owner}/{repo}/releases", tags=["releases"])
logger = logging.getLogger(__name__)


class ReleaseAssetIn(BaseModel):
    """An attachment. ``content`` must be base64-encoded."""

    filename: str = Field(min_length=1)
    content: str
    content_type: str = "application/octet-stream"
    label: str | None = None


class PublishReleaseRequest(BaseModel):
    tag_name: str = Field(min_length=1)
    name: str = Field(min_length=1)
    body: str = ""
    # Defaults to the tip of the repository's default branch
    branch: str | None = None
    draft: bool = False
    prerelease: bool = False
    assets: list[ReleaseAssetIn] = []


def _decode_assets(assets: list[ReleaseAssetIn]) -> list[AssetUpload]:
    decoded = []
    for asset in assets:
        try:
            content = base64.b64decode(asset.content, validate=True)
        except binascii.Error:
            raise ValidationError(f"Asset '{asset.filename}' is not valid base64") from None
        decoded.append(
            AssetUpload(
                filename=asset.filename,
                content=content,
                content_type=asset.content_type,
                label=asset.label,
            )
        )
    return decoded


@router.get("")
async def list_releases(owner: str, repo: str, gateway: Gateway) -> list[dict[str, Any]]:
    try:
        releases = await ReleaseOperations(gateway).list_releases(RepositoryRef(owner, repo))
    except GitHubAPIError as e:
        raise UpstreamError.from_github(e) from None
    return [asdict(r) for r in releases]


@router.post("", status_code=status.HTTP_201_CREATED)
async def publish_release(
    owner: str, repo: str, data: PublishReleaseRequest, gateway: Gateway
) -> dict[str, Any]:
    """Create a release and upload its attachments.

    Partial upload failures don't fail the request: the release and any
    uploaded assets are returned with ``error`` set to the last failure.
    """
    assets = _decode_assets(data.assets)

    try:
        result = await ReleaseOperations(gateway).publish(
            RepositoryRef(owner, repo),
            tag_name=data.tag_name,
            name=data.name,
            body=data.body,
            branch=data.branch,
            assets=assets,
            draft=data.draft,
            prerelease=data.prerelease,
        )
    except BranchNotFoundError as e:
        raise ValidationError(f"Cannot tag: {e.message}") from None
    except GitHubAPIError as e:
        raise UpstreamError.from_github(e) from None

    return {
        "success": result.success,
        "release": asdict(result.release),
        "uploaded_assets": [asdict(a) for a in result.uploaded_assets],
        "error": result.error,
    }
