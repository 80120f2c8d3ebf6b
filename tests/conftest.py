from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from ppg_ops.core.config import get_settings
from ppg_ops.services.prisma_client import PrismaClient

PLATFORM_ENV_VARS = (
    "PRISMA_POSTGRES_SERVICE_TOKEN",
    "PRISMA_PROJECT_ID",
    "GITHUB_TOKEN",
    "GITHUB_API_URL",
    "GITHUB_REPOSITORY",
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "GITHUB_RUN_NUMBER",
    "GITHUB_OUTPUT",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch):
    for name in PLATFORM_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PPG_OTEL_ENABLED", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakePrismaApi:
    """In-memory management API served through httpx.MockTransport."""

    def __init__(self, databases: list[dict[str, Any]] | None = None, *, page_size: int | None = None) -> None:
        self.databases: list[dict[str, Any]] = list(databases or [])
        self.page_size = page_size
        self.requests: list[httpx.Request] = []
        self.create_response: tuple[int, dict[str, Any]] | None = None
        self.delete_response: tuple[int, dict[str, Any]] | None = None
        self._next_id = 1

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")
        if parts[:1] != ["projects"] or len(parts) < 3 or parts[2] != "databases":
            return httpx.Response(404, json={"error": "not_found"}, request=request)

        if request.method == "GET" and len(parts) == 3:
            return self._list(request)
        if request.method == "POST" and len(parts) == 3:
            return self._create(request)
        if request.method == "POST" and len(parts) == 5 and parts[4] == "connections":
            body = json.loads(request.content)
            return httpx.Response(
                201,
                json={"id": "con_1", "name": body["name"], "connectionString": f"postgres://{body['name']}@host/{parts[3]}"},
                request=request,
            )
        if request.method == "DELETE" and len(parts) == 4:
            if self.delete_response is not None:
                status, payload = self.delete_response
                return httpx.Response(status, json=payload, request=request)
            self.databases = [db for db in self.databases if db.get("id") != parts[3]]
            return httpx.Response(200, json={"id": parts[3]}, request=request)
        return httpx.Response(404, json={"error": "not_found"}, request=request)

    def calls(self, method: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.method == method]

    def prisma_client(self, http_client: httpx.AsyncClient) -> PrismaClient:
        return PrismaClient("https://api.prisma.test", "service-token", http_client=http_client)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def _list(self, request: httpx.Request) -> httpx.Response:
        if self.page_size is None:
            return httpx.Response(200, json={"data": self.databases}, request=request)
        start = int(request.url.params.get("cursor", "0"))
        end = start + self.page_size
        has_more = end < len(self.databases)
        return httpx.Response(
            200,
            json={
                "data": self.databases[start:end],
                "pagination": {"hasMore": has_more, "nextCursor": str(end) if has_more else None},
            },
            request=request,
        )

    def _create(self, request: httpx.Request) -> httpx.Response:
        if self.create_response is not None:
            status, payload = self.create_response
            return httpx.Response(status, json=payload, request=request)
        body = json.loads(request.content)
        database_id = f"db_{self._next_id}"
        self._next_id += 1
        record = {"id": database_id, "name": body["name"], "region": body["region"]}
        self.databases.append(record)
        return httpx.Response(
            201,
            json={**record, "connectionString": f"postgres://default@host/{database_id}"},
            request=request,
        )


@pytest.fixture
def fake_api() -> FakePrismaApi:
    return FakePrismaApi()
