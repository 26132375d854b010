"""Exceptions for GitHub service."""


class InvalidInputError(ValueError):
    """Request can't be attempted: missing token, no files, malformed repo URL."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class GitHubAPIError(Exception):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class BranchNotFoundError(GitHubAPIError):
    """Target branch has no ref (or no commit) on GitHub.

    Raised by the Git object builder when appending to a branch that doesn't
    exist. The commit orchestrator treats it as a signal to initialize the
    branch instead.
    """

    def __init__(self, branch: str, message: str | None = None, status_code: int | None = 404):
        self.branch = branch
        super().__init__(message or f"Branch '{branch}' not found", status_code)


class ReleaseAssetUploadError(GitHubAPIError):
    """Release asset upload returned a non-2xx response."""

    def __init__(self, filename: str, message: str, status_code: int | None = None):
        self.filename = filename
        super().__init__(f"Failed to upload release asset '{filename}': {message}", status_code)
