from __future__ import annotations

from typing import Any

import httpx

from ppg_ops.core.errors import GitHubCommentError


class GitHubClient:
    def __init__(
        self,
        token: str,
        *,
        api_url: str = "https://api.github.com",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        self._http_client = http_client

    async def create_issue_comment(self, repository: str, issue_number: int, body: str) -> dict[str, Any]:
        owner, separator, repo = repository.partition("/")
        if not separator or not owner or not repo:
            raise GitHubCommentError(f"repository must look like owner/repo, got {repository!r}")

        url = f"{self.api_url}/repos/{owner}/{repo}/issues/{issue_number}/comments"
        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, json={"body": body}, headers=self.headers)
            else:
                async with httpx.AsyncClient(timeout=10.0) as client:
                    response = await client.post(url, json={"body": body}, headers=self.headers)
        except httpx.HTTPError as exc:
            raise GitHubCommentError(f"comment on {repository}#{issue_number} failed: {exc}") from exc

        if response.is_error:
            raise GitHubCommentError(
                f"comment on {repository}#{issue_number} failed with HTTP {response.status_code}"
            )
        return response.json()


def provisioned_comment_body(database_name: str, *, seeded: bool = True) -> str:
    status = "Ready and seeded with sample data" if seeded else "Ready"
    return f"🗄️ Database provisioned successfully!\n\nDatabase name: {database_name}\nStatus: {status}"
