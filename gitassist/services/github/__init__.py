"""
GitHub service package.

Re-exports all public types and classes.
Usage: `from gitassist.services.github import CommitOrchestrator, FileChange`

Module structure:
- orchestrator.py: CommitOrchestrator, the entry point for committing files
- git_objects.py: Blob/tree/commit/ref construction (append and initialize paths)
- prober.py: Empty-repository detection
- gateway.py: Authenticated, retry-free REST calls
- read_operations.py: Repos, branches, tags, contents
- issue_operations.py / release_operations.py: Issue and release calls
- helpers.py: Rate limit handling, error messages, destination paths
- types.py: Data types
- exceptions.py: Custom exceptions
- constants.py: API constants
"""

from gitassist.services.github.exceptions import (
    BranchNotFoundError,
    GitHubAPIError,
    InvalidInputError,
    ReleaseAssetUploadError,
)
from gitassist.services.github.gateway import GitHubGateway
from gitassist.services.github.git_objects import GitObjectBuilder
from gitassist.services.github.helpers import RateLimitInfo, apply_destination_path
from gitassist.services.github.http_client import close_github_client
from gitassist.services.github.issue_operations import IssueOperations
from gitassist.services.github.orchestrator import CommitOrchestrator
from gitassist.services.github.prober import (
    EMPTY_REPOSITORY_SIGNATURES,
    RepositoryStateProber,
    matches_empty_signature,
)
from gitassist.services.github.read_operations import GitHubReadOperations
from gitassist.services.github.release_operations import ReleaseOperations
from gitassist.services.github.types import (
    AssetUpload,
    Blob,
    Branch,
    BranchTip,
    Commit,
    CommitResult,
    CommitStrategy,
    ErrorKind,
    FileChange,
    Issue,
    Release,
    ReleaseAsset,
    ReleaseResult,
    Repo,
    RepoContent,
    RepositoryRef,
    RepositoryState,
    Tag,
    Tree,
)

__all__ = [
    # Commit orchestration (main entry point)
    "CommitOrchestrator",
    "GitObjectBuilder",
    "RepositoryStateProber",
    "EMPTY_REPOSITORY_SIGNATURES",
    "matches_empty_signature",
    # Other operations
    "GitHubGateway",
    "GitHubReadOperations",
    "IssueOperations",
    "ReleaseOperations",
    # HTTP client lifecycle
    "close_github_client",
    # Utilities
    "apply_destination_path",
    "RateLimitInfo",
    # Exceptions
    "BranchNotFoundError",
    "GitHubAPIError",
    "InvalidInputError",
    "ReleaseAssetUploadError",
    # Types
    "AssetUpload",
    "Blob",
    "Branch",
    "BranchTip",
    "Commit",
    "CommitResult",
    "CommitStrategy",
    "ErrorKind",
    "FileChange",
    "Issue",
    "Release",
    "ReleaseAsset",
    "ReleaseResult",
    "Repo",
    "RepoContent",
    "RepositoryRef",
    "RepositoryState",
    "Tag",
    "Tree",
]
