from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from ppg_ops.core.errors import GitHubCommentError
from ppg_ops.services.github_client import GitHubClient, provisioned_comment_body


def test_create_issue_comment_posts_to_issue_endpoint() -> None:
    seen: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": 99, "body": "ok"}, request=request)

    async def run() -> dict[str, Any]:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            client = GitHubClient("gh-token", api_url="https://ghe.example.com/api/v3/", http_client=http)
            return await client.create_issue_comment("acme/shop", 4, "hello")

    assert asyncio.run(run())["id"] == 99
    assert str(seen[0].url) == "https://ghe.example.com/api/v3/repos/acme/shop/issues/4/comments"
    assert seen[0].headers["Authorization"] == "Bearer gh-token"


def test_create_issue_comment_raises_on_forbidden() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"message": "Resource not accessible by integration"}, request=request)

    async def run() -> None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            await GitHubClient("gh-token", http_client=http).create_issue_comment("acme/shop", 4, "hello")

    with pytest.raises(GitHubCommentError, match="HTTP 403"):
        asyncio.run(run())


def test_create_issue_comment_wraps_network_errors() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    async def run() -> None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            await GitHubClient("gh-token", http_client=http).create_issue_comment("acme/shop", 4, "hello")

    with pytest.raises(GitHubCommentError, match="timed out"):
        asyncio.run(run())


def test_create_issue_comment_validates_repository() -> None:
    with pytest.raises(GitHubCommentError, match="owner/repo"):
        asyncio.run(GitHubClient("gh-token").create_issue_comment("shop", 4, "hello"))


def test_provisioned_comment_body_mentions_seed_status() -> None:
    assert provisioned_comment_body("pr_1_x").endswith("Status: Ready and seeded with sample data")
    assert provisioned_comment_body("pr_1_x", seeded=False).endswith("Status: Ready")
