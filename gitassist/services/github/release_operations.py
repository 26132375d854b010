"""
GitHub release operations.

Provides:
- Listing and creating releases
- Annotated tag creation
- Asset upload to the release upload endpoint
- Publishing a release with attachments in one call
"""

import logging
from collections.abc import Sequence
from urllib.parse import urlencode

from gitassist.config import settings
from gitassist.services.github.constants import UPLOAD_URL_TEMPLATE
from gitassist.services.github.exceptions import ReleaseAssetUploadError
from gitassist.services.github.gateway import GitHubGateway
from gitassist.services.github.git_objects import GitObjectBuilder
from gitassist.services.github.types import (
    AssetUpload,
    Release,
    ReleaseAsset,
    ReleaseResult,
    RepositoryRef,
    parse_release,
    parse_release_asset,
)

logger = logging.getLogger(__name__)


def expand_upload_url(upload_url: str, filename: str, label: str | None = None) -> str:
    """Fill GitHub's ``{?name,label}`` upload URL template."""
    base = upload_url.replace(UPLOAD_URL_TEMPLATE, "").split("{", 1)[0]
    params = {"name": filename}
    if label:
        params["label"] = label
    return f"{base}?{urlencode(params)}"


class ReleaseOperations:
    """Release and tag operations for one token."""

    def __init__(self, gateway: GitHubGateway):
        self.gateway = gateway

    async def list_releases(self, repo: RepositoryRef) -> list[Release]:
        releases = await self.gateway.invoke(f"{repo.api_path}/releases")
        if not isinstance(releases, list):
            return []
        return [parse_release(r) for r in releases]

    async def create_release(
        self,
        repo: RepositoryRef,
        tag_name: str,
        name: str,
        body: str,
        target_commitish: str,
        draft: bool = False,
        prerelease: bool = False,
    ) -> Release:
        data = await self.gateway.invoke(
            f"{repo.api_path}/releases",
            method="POST",
            body={
                "tag_name": tag_name,
                "target_commitish": target_commitish,
                "name": name,
                "body": body,
                "draft": draft,
                "prerelease": prerelease,
            },
        )
        return parse_release(data)

    async def create_tag(self, repo: RepositoryRef, tag_name: str, commit_sha: str) -> str:
        """
        Create an annotated tag object and its ``refs/tags/<tag>`` ref.

        Returns:
            The tag object SHA
        """
        tag_object = await self.gateway.invoke(
            f"{repo.api_path}/git/tags",
            method="POST",
            body={
                "tag": tag_name,
                "message": f"Release {tag_name}",
                "object": commit_sha,
                "type": "commit",
            },
        )
        await self.gateway.invoke(
            f"{repo.api_path}/git/refs",
            method="POST",
            body={"ref": f"refs/tags/{tag_name}", "sha": tag_object["sha"]},
        )
        tag_sha: str = tag_object["sha"]
        return tag_sha

    async def upload_asset(self, upload_url: str, asset: AssetUpload) -> ReleaseAsset:
        """
        Upload one asset to a release.

        Raises:
            ReleaseAssetUploadError: On non-2xx from the upload endpoint
        """
        url = expand_upload_url(upload_url, asset.filename, asset.label)
        data = await self.gateway.upload(url, asset.filename, asset.content, asset.content_type)
        return parse_release_asset(data)

    async def resolve_target_commitish(self, repo: RepositoryRef, branch: str | None) -> str:
        """
        Explicit branch name, else the default branch's current tip SHA.

        Raises:
            BranchNotFoundError: If the default branch has no commits
        """
        if branch:
            return branch
        repo_info = await self.gateway.invoke(repo.api_path)
        default_branch = (repo_info or {}).get("default_branch") or settings.default_branch_fallback
        tip = await GitObjectBuilder(self.gateway, repo).resolve_branch_tip(default_branch)
        assert tip.commit_sha is not None
        return tip.commit_sha

    async def publish(
        self,
        repo: RepositoryRef,
        tag_name: str,
        name: str,
        body: str = "",
        branch: str | None = None,
        assets: Sequence[AssetUpload] = (),
        draft: bool = False,
        prerelease: bool = False,
    ) -> ReleaseResult:
        """
        Create a release and upload its assets in order.

        A failed upload doesn't stop the remaining uploads and doesn't remove
        assets already attached; the last failure is reported on the result.
        """
        target = await self.resolve_target_commitish(repo, branch)
        release = await self.create_release(
            repo,
            tag_name=tag_name,
            name=name,
            body=body,
            target_commitish=target,
            draft=draft,
            prerelease=prerelease,
        )
        result = ReleaseResult(release=release)

        if assets and not release.upload_url:
            result.error = "Release has no upload URL"
            return result

        for asset in assets:
            try:
                uploaded = await self.upload_asset(release.upload_url or "", asset)
            except ReleaseAssetUploadError as e:
                logger.warning(f"Release {tag_name} on {repo.full_name}: {e.message}")
                result.error = e.message
                continue
            result.uploaded_assets.append(uploaded)

        logger.info(
            f"Published release {tag_name} on {repo.full_name} "
            f"({len(result.uploaded_assets)}/{len(assets)} assets)"
        )
        return result
