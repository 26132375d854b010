"""Request dependencies.

The GitHub token arrives as a bearer credential on every request and is
passed explicitly into each service call; nothing is stored server-side.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gitassist.services.github import GitHubGateway

security = HTTPBearer(auto_error=False)


async def get_github_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """Extract the caller's GitHub token from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="GitHub token is required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def get_github_gateway(token: str = Depends(get_github_token)) -> GitHubGateway:
    return GitHubGateway(token)


Gateway = Annotated[GitHubGateway, Depends(get_github_gateway)]
