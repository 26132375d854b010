"""
Repository state prober.

GitHub has no consistent "is this repository empty" flag, so emptiness is
inferred by resolving the target branch ref and classifying the failure.
All recognized "no commits yet" error shapes live in EMPTY_REPOSITORY_SIGNATURES.
"""

import logging
from dataclasses import dataclass

from gitassist.services.github.exceptions import GitHubAPIError
from gitassist.services.github.gateway import GitHubGateway
from gitassist.services.github.helpers import encode_path
from gitassist.services.github.types import RepositoryRef, RepositoryState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmptySignature:
    """An error shape meaning "no commits exist yet".

    A signature matches when every field that is set matches the error.
    """

    status_code: int | None = None
    message: str | None = None  # Case-sensitive substring of the server message

    def matches(self, error: GitHubAPIError) -> bool:
        if self.status_code is not None and error.status_code != self.status_code:
            return False
        if self.message is not None and self.message not in (error.message or ""):
            return False
        return True


# Matched against prose from GitHub; revalidate when GitHub changes its error texts.
EMPTY_REPOSITORY_SIGNATURES: tuple[EmptySignature, ...] = (
    EmptySignature(message="Git Repository is empty"),
    EmptySignature(message="This repository is empty"),
    EmptySignature(message="Not Found"),
    EmptySignature(status_code=409),
)


def matches_empty_signature(error: GitHubAPIError) -> bool:
    """Check if an API error means the repository/branch has no commits."""
    return any(sig.matches(error) for sig in EMPTY_REPOSITORY_SIGNATURES)


class RepositoryStateProber:
    """Determines whether a repository branch has commit history."""

    def __init__(self, gateway: GitHubGateway):
        self.gateway = gateway

    async def probe(self, repo: RepositoryRef, branch: str) -> RepositoryState:
        """
        Classify the branch as EMPTY or NOT_EMPTY.

        Raises:
            GitHubAPIError: For errors that don't match an empty signature
                (bad credentials, rate limits, server errors)
        """
        try:
            await self.gateway.invoke(f"{repo.api_path}/git/ref/heads/{encode_path(branch)}")
        except GitHubAPIError as e:
            if matches_empty_signature(e):
                logger.info(f"{repo.full_name}@{branch} has no commits ({e.status_code}: {e.message})")
                return RepositoryState.EMPTY
            raise
        return RepositoryState.NOT_EMPTY

    async def is_empty(self, repo: RepositoryRef, branch: str) -> bool:
        return await self.probe(repo, branch) == RepositoryState.EMPTY
