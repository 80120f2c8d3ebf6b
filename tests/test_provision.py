from __future__ import annotations

import asyncio

from ppg_ops.jobs.provision import ProvisionResult, provision_database

from conftest import FakePrismaApi


def _provision(api: FakePrismaApi, name: str) -> ProvisionResult:
    async def run() -> ProvisionResult:
        async with api.http_client() as http:
            return await provision_database(api.prisma_client(http), "proj_1", name, region="eu-west-3")

    return asyncio.run(run())


def test_provision_creates_database_when_absent() -> None:
    api = FakePrismaApi([{"id": "db_other", "name": "pr_2_other"}])

    result = _provision(api, "pr_3_login")

    assert result.created is True
    assert result.existed is False
    assert result.database_id == "db_1"
    assert result.connection_string == "postgres://default@host/db_1"
    assert [request.url.path for request in api.calls("POST")] == ["/projects/proj_1/databases"]


def test_provision_reuses_existing_database_with_new_connection() -> None:
    api = FakePrismaApi([{"id": "db_existing", "name": "pr_3_login"}])

    result = _provision(api, "pr_3_login")

    assert result.created is False
    assert result.database_id == "db_existing"
    assert result.connection_string == "postgres://read_write_key@host/db_existing"
    assert [request.url.path for request in api.calls("POST")] == [
        "/projects/proj_1/databases/db_existing/connections"
    ]


def test_provision_twice_for_same_name_creates_once() -> None:
    api = FakePrismaApi()

    first = _provision(api, "pr_4_retry")
    second = _provision(api, "pr_4_retry")

    assert first.created is True
    assert second.created is False
    assert second.database_id == first.database_id
    assert len(api.databases) == 1
