"""GitHub issue operations."""

from typing import Any

from gitassist.services.github.gateway import GitHubGateway
from gitassist.services.github.types import Issue, RepositoryRef


def _parse_issue(data: dict[str, Any]) -> Issue:
    user = data.get("user") or {}
    return Issue(
        number=data["number"],
        title=data["title"],
        html_url=data["html_url"],
        state=data.get("state", "open"),
        created_at=data.get("created_at"),
        author=user.get("login"),
        author_avatar_url=user.get("avatar_url"),
    )


class IssueOperations:
    """List and open issues. Single calls, no orchestration."""

    def __init__(self, gateway: GitHubGateway):
        self.gateway = gateway

    async def list_open_issues(self, repo: RepositoryRef) -> list[Issue]:
        """Open issues, newest first."""
        issues = await self.gateway.invoke(
            f"{repo.api_path}/issues",
            params={"state": "open", "sort": "created", "direction": "desc"},
        )
        if not isinstance(issues, list):
            return []
        # The issues endpoint also returns pull requests
        return [_parse_issue(i) for i in issues if "pull_request" not in i]

    async def create_issue(self, repo: RepositoryRef, title: str, body: str = "") -> Issue:
        data = await self.gateway.invoke(
            f"{repo.api_path}/issues",
            method="POST",
            body={"title": title, "body": body},
        )
        return _parse_issue(data)
