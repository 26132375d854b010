"""Data types for GitHub API requests and responses."""

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from gitassist.services.github.constants import BLOB_FILE_MODE, GITHUB_URL_PREFIXES
from gitassist.services.github.exceptions import InvalidInputError


class RepositoryState(str, Enum):
    """Whether the target branch has any commit history."""

    EMPTY = "empty"
    NOT_EMPTY = "not_empty"


class CommitStrategy(str, Enum):
    """How the commit orchestrator wrote the commit."""

    INITIALIZE = "initialize"  # root commit on a new branch
    APPEND = "append"  # commit on top of the current branch tip
    RECOVER = "recover"  # append found no branch, initialized instead
    SEED = "seed"  # first file via contents API, rest appended


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    API_ERROR = "api_error"
    BRANCH_NOT_FOUND = "branch_not_found"


@dataclass(frozen=True)
class FileChange:
    """A file to write in a commit.

    ``content`` is base64 text and is sent to GitHub as-is.
    """

    path: str  # Repository-relative, forward-slash separated
    content: str
    encoding: str = "base64"

    @classmethod
    def from_bytes(cls, path: str, data: bytes) -> "FileChange":
        return cls(path=path, content=base64.b64encode(data).decode("ascii"))

    def with_path(self, path: str) -> "FileChange":
        return FileChange(path=path, content=self.content, encoding=self.encoding)


@dataclass(frozen=True)
class RepositoryRef:
    """Owner/name pair identifying a GitHub repository."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def api_path(self) -> str:
        return f"/repos/{self.owner}/{self.name}"

    @classmethod
    def from_url(cls, url: str) -> "RepositoryRef":
        """
        Parse ``https://github.com/<owner>/<repo>`` into a RepositoryRef.

        Extra path segments (``/tree/main/...``) are ignored and a trailing
        ``.git`` is dropped.

        Raises:
            InvalidInputError: If the URL points at another host or fewer
                than two path segments remain
        """
        remainder = (url or "").strip()
        for prefix in GITHUB_URL_PREFIXES:
            if remainder.startswith(prefix):
                remainder = remainder[len(prefix):]
                break

        segments = [s for s in remainder.split("/") if s]
        if len(segments) < 2:
            raise InvalidInputError(f"Invalid repository URL: {url!r}")

        owner, name = segments[0], segments[1]
        # GitHub owners are letters, digits and hyphens; a dot or colon means a foreign host
        if ":" in owner or "." in owner:
            raise InvalidInputError(f"Not a GitHub repository URL: {url!r}")
        if name.endswith(".git"):
            name = name[: -len(".git")]
        if not name:
            raise InvalidInputError(f"Invalid repository URL: {url!r}")
        return cls(owner=owner, name=name)


@dataclass
class BranchTip:
    """Where a branch points. ``commit_sha`` is None if the branch doesn't exist yet."""

    branch_name: str
    commit_sha: str | None = None

    @property
    def exists(self) -> bool:
        return self.commit_sha is not None


@dataclass(frozen=True)
class Blob:
    """A created blob, ready to be placed in a tree."""

    path: str
    sha: str
    mode: str = BLOB_FILE_MODE
    type: str = "blob"

    def to_tree_entry(self) -> dict[str, str]:
        return {"path": self.path, "mode": self.mode, "type": self.type, "sha": self.sha}


@dataclass
class Tree:
    sha: str
    base_tree_sha: str | None
    entries: list[Blob]


@dataclass
class Commit:
    sha: str
    tree_sha: str
    parent_shas: list[str]
    message: str
    html_url: str


@dataclass
class CommitResult:
    """Outcome of a commit orchestration.

    Expected failures come back as ``success=False`` with a message rather
    than an exception.
    """

    success: bool
    commit_url: str | None = None
    message: str | None = None  # Error message when success is False
    commit_sha: str | None = None
    branch: str | None = None
    strategy: CommitStrategy | None = None
    error_kind: ErrorKind | None = None
    status_code: int | None = None

    @classmethod
    def ok(cls, commit: Commit, branch: str, strategy: CommitStrategy) -> "CommitResult":
        return cls(
            success=True,
            commit_url=commit.html_url,
            commit_sha=commit.sha,
            branch=branch,
            strategy=strategy,
        )

    @classmethod
    def failure(
        cls,
        message: str,
        error_kind: ErrorKind,
        status_code: int | None = None,
        branch: str | None = None,
    ) -> "CommitResult":
        return cls(
            success=False,
            message=message,
            error_kind=error_kind,
            status_code=status_code,
            branch=branch,
        )


# --- Dashboard read models ---


@dataclass
class Repo:
    """Normalized GitHub repository data."""

    github_id: int
    name: str
    full_name: str
    owner: str
    url: str
    description: str | None
    language: str | None
    default_branch: str
    stars_count: int
    forks_count: int
    updated_at: str | None
    topics: list[str] = field(default_factory=list)


@dataclass
class Branch:
    name: str
    commit_sha: str
    protected: bool = False


@dataclass
class Tag:
    name: str
    commit_sha: str


@dataclass
class RepoContent:
    """Single entry in a directory listing."""

    name: str
    path: str
    sha: str
    size: int
    type: str  # "file" or "dir"
    html_url: str | None
    download_url: str | None


@dataclass
class Issue:
    number: int
    title: str
    html_url: str
    state: str
    created_at: str | None
    author: str | None
    author_avatar_url: str | None = None


@dataclass
class ReleaseAsset:
    id: int
    name: str
    browser_download_url: str


@dataclass
class Release:
    id: int
    tag_name: str
    name: str | None
    body: str | None
    html_url: str
    upload_url: str | None
    published_at: str | None
    author: str | None
    assets: list[ReleaseAsset] = field(default_factory=list)
    tarball_url: str | None = None
    zipball_url: str | None = None


@dataclass
class AssetUpload:
    """A file to attach to a release."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"
    label: str | None = None


@dataclass
class ReleaseResult:
    """Outcome of publishing a release with its assets.

    Assets uploaded before a failure stay attached; ``error`` holds the last
    upload failure, if any.
    """

    release: Release
    uploaded_assets: list[ReleaseAsset] = field(default_factory=list)
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def parse_release(data: dict[str, Any]) -> Release:
    """Convert GitHub release JSON into a Release."""
    author = data.get("author") or {}
    return Release(
        id=data["id"],
        tag_name=data["tag_name"],
        name=data.get("name"),
        body=data.get("body"),
        html_url=data["html_url"],
        upload_url=data.get("upload_url"),
        published_at=data.get("published_at"),
        author=author.get("login"),
        assets=[parse_release_asset(a) for a in data.get("assets") or []],
        tarball_url=data.get("tarball_url"),
        zipball_url=data.get("zipball_url"),
    )


def parse_release_asset(data: dict[str, Any]) -> ReleaseAsset:
    return ReleaseAsset(
        id=data["id"],
        name=data["name"],
        browser_download_url=data["browser_download_url"],
    )
