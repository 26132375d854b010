import time

from fastapi import HTTPException, status

from gitassist.services.github.exceptions import GitHubAPIError


class NotFoundError(HTTPException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )


class ValidationError(HTTPException):
    """Raised when request validation fails."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
        )


class UpstreamError(HTTPException):
    """Raised when GitHub or the AI provider fails a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            status_code=status_code or status.HTTP_502_BAD_GATEWAY,
            detail=message,
        )

    @classmethod
    def from_github(cls, error: GitHubAPIError) -> "UpstreamError":
        """Pass GitHub's message and status through, noting rate limit resets."""
        detail = error.message
        if error.rate_limit_reset:
            reset_in = max(0, error.rate_limit_reset - int(time.time()))
            minutes = reset_in // 60
            detail = f"{error.message}. Rate limit resets in {minutes} minutes."

        status_code = error.status_code
        if status_code is None or status_code < 400:
            status_code = status.HTTP_502_BAD_GATEWAY
        return cls(detail, status_code)
