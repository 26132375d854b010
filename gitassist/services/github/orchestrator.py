"""
Commit orchestration.

Entry point for writing files to a repository. Picks a strategy from the
repository's state and drives the GitObjectBuilder:

    probe -> EMPTY      -> initialize                      (INITIALIZE)
    probe -> NOT_EMPTY  -> append                          (APPEND)
    append raises BranchNotFoundError -> initialize once   (RECOVER)
    initialize rejected because the repo has no commits
                        -> contents-API seed, then append  (SEED)

Every call discovers state fresh from GitHub; nothing is kept between calls.
"""

import logging
from collections.abc import Sequence

from gitassist.config import settings
from gitassist.services.github.exceptions import (
    BranchNotFoundError,
    GitHubAPIError,
    InvalidInputError,
)
from gitassist.services.github.gateway import GitHubGateway
from gitassist.services.github.git_objects import GitObjectBuilder
from gitassist.services.github.helpers import apply_destination_path
from gitassist.services.github.prober import RepositoryStateProber
from gitassist.services.github.types import (
    Commit,
    CommitResult,
    CommitStrategy,
    ErrorKind,
    FileChange,
    RepositoryRef,
    RepositoryState,
)

logger = logging.getLogger(__name__)

# Auth failures are not a commit outcome; the caller has to re-authenticate.
PROPAGATED_STATUS_CODES = frozenset({401, 403})


def _is_empty_repository_rejection(error: GitHubAPIError) -> bool:
    """Git Data API refuses object writes to a repository with no commits."""
    return error.status_code == 409 or "Git Repository is empty" in (error.message or "")


class CommitOrchestrator:
    """Commits an ordered list of files to a repository branch."""

    def __init__(self, token: str, gateway: GitHubGateway | None = None):
        self.token = token
        self.gateway = gateway or GitHubGateway(token)

    async def commit_files(
        self,
        repo_url: str,
        files: Sequence[FileChange],
        message: str,
        branch: str | None = None,
        destination_path: str | None = None,
    ) -> CommitResult:
        """
        Commit ``files`` to the repository in a single orchestrated run.

        Args:
            repo_url: Repository URL (https://github.com/<owner>/<repo>)
            files: Ordered, non-empty list of files (base64 content)
            message: Commit message, used verbatim
            branch: Target branch. Defaults to the repository default branch,
                then to settings.default_branch_fallback
            destination_path: Directory prefix applied to every file path

        Returns:
            CommitResult; success=False for invalid input and GitHub API errors

        Raises:
            GitHubAPIError: For 401/403 responses
            httpx.HTTPError: For transport failures
        """
        try:
            repo = self._validate(repo_url, files)
        except InvalidInputError as e:
            return CommitResult.failure(e.message, ErrorKind.INVALID_INPUT)

        final_files = apply_destination_path(files, destination_path)
        target_branch = branch

        try:
            target_branch = await self.resolve_target_branch(repo, branch)
            commit, strategy = await self._run(repo, target_branch, final_files, message)
        except GitHubAPIError as e:
            if e.status_code in PROPAGATED_STATUS_CODES:
                raise
            logger.error(f"Commit to {repo.full_name}@{target_branch} failed: {e.message}")
            kind = (
                ErrorKind.BRANCH_NOT_FOUND
                if isinstance(e, BranchNotFoundError)
                else ErrorKind.API_ERROR
            )
            return CommitResult.failure(e.message, kind, e.status_code, branch=target_branch)

        return CommitResult.ok(commit, target_branch, strategy)

    def _validate(self, repo_url: str, files: Sequence[FileChange]) -> RepositoryRef:
        """Check inputs before any network call."""
        if not self.token:
            raise InvalidInputError("GitHub token is required")
        if not files:
            raise InvalidInputError("At least one file is required")
        return RepositoryRef.from_url(repo_url)

    async def resolve_target_branch(self, repo: RepositoryRef, branch: str | None) -> str:
        """Explicit branch, else the repository default branch, else the fallback."""
        if branch:
            return branch
        repo_info = await self.gateway.invoke(repo.api_path)
        default_branch: str | None = (repo_info or {}).get("default_branch")
        return default_branch or settings.default_branch_fallback

    async def _run(
        self,
        repo: RepositoryRef,
        branch: str,
        files: Sequence[FileChange],
        message: str,
    ) -> tuple[Commit, CommitStrategy]:
        builder = GitObjectBuilder(self.gateway, repo)
        state = await RepositoryStateProber(self.gateway).probe(repo, branch)

        if state == RepositoryState.EMPTY:
            logger.info(f"Initializing {repo.full_name}@{branch} with {len(files)} file(s)")
            return await self._initialize(builder, branch, files, message, CommitStrategy.INITIALIZE)

        try:
            return await builder.append(branch, files, message), CommitStrategy.APPEND
        except BranchNotFoundError:
            logger.info(
                f"Branch {branch} vanished from {repo.full_name} during append, initializing instead"
            )
            return await self._initialize(builder, branch, files, message, CommitStrategy.RECOVER)

    async def _initialize(
        self,
        builder: GitObjectBuilder,
        branch: str,
        files: Sequence[FileChange],
        message: str,
        strategy: CommitStrategy,
    ) -> tuple[Commit, CommitStrategy]:
        try:
            return await builder.initialize(branch, files, message), strategy
        except GitHubAPIError as e:
            if not _is_empty_repository_rejection(e):
                raise
            logger.info(f"Git Data API rejected empty {builder.repo.full_name}, seeding via contents API")

        commit = await builder.seed_with_contents(branch, files[0], message)
        if len(files) > 1:
            commit = await builder.append(branch, files[1:], message)
        return commit, CommitStrategy.SEED
