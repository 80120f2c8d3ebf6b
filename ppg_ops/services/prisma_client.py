from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ppg_ops.core.errors import ManagedDatabaseError
from ppg_ops.schemas.databases import (
    CreateConnectionRequest,
    CreatedDatabase,
    CreateDatabaseRequest,
    Database,
    DatabaseList,
    error_message,
)

logger = logging.getLogger(__name__)

MAX_LIST_PAGES = 50


class PrismaClient:
    """Thin async client for the Prisma Postgres management API."""

    def __init__(
        self,
        base_url: str,
        service_token: str,
        *,
        timeout_seconds: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.headers = {
            "Authorization": f"Bearer {service_token}",
            "Content-Type": "application/json",
        }
        self._http_client = http_client

    async def list_databases(self, project_id: str) -> list[Database]:
        databases: list[Database] = []
        params: dict[str, str] = {}
        async with self._session("list databases") as client:
            for _ in range(MAX_LIST_PAGES):
                response = await client.get(
                    self._databases_url(project_id),
                    params=params or None,
                    headers=self.headers,
                )
                payload = _json_or_raise(response, "list databases")
                try:
                    page = DatabaseList.model_validate(payload)
                except ValidationError as exc:
                    raise ManagedDatabaseError(
                        f"unexpected list databases response: {exc}",
                        status_code=response.status_code,
                        body=payload,
                    ) from exc
                databases.extend(page.data or [])
                if page.pagination is None or not page.pagination.has_more or not page.pagination.next_cursor:
                    break
                params = {"cursor": page.pagination.next_cursor}
            else:
                logger.warning("stopped listing databases after %s pages project=%s", MAX_LIST_PAGES, project_id)
        return databases

    async def find_database_id(self, project_id: str, name: str) -> str | None:
        for database in await self.list_databases(project_id):
            if database.name == name and database.id and database.id != "null":
                return database.id
        return None

    async def create_database(self, project_id: str, name: str, region: str) -> CreatedDatabase:
        request = CreateDatabaseRequest(name=name, region=region)
        async with self._session("create database") as client:
            response = await client.post(
                self._databases_url(project_id),
                json=request.model_dump(),
                headers=self.headers,
            )
        payload = _json_or_raise(response, "create database")
        if not isinstance(payload, dict) or not payload.get("id"):
            raise ManagedDatabaseError(
                f"failed to create database {name}: {error_message(payload)}",
                status_code=response.status_code,
                body=payload,
            )
        return CreatedDatabase.model_validate(payload)

    async def create_connection(self, project_id: str, database_id: str, key_name: str = "read_write_key") -> str:
        request = CreateConnectionRequest(name=key_name)
        async with self._session("create connection") as client:
            response = await client.post(
                f"{self._databases_url(project_id)}/{database_id}/connections",
                json=request.model_dump(),
                headers=self.headers,
            )
        payload = _json_or_raise(response, "create connection")
        connection_string = payload.get("connectionString") if isinstance(payload, dict) else None
        if not isinstance(connection_string, str) or not connection_string:
            raise ManagedDatabaseError(
                f"no connection string returned for database {database_id}: {error_message(payload)}",
                status_code=response.status_code,
                body=payload,
            )
        return connection_string

    async def delete_database(self, project_id: str, database_id: str) -> None:
        async with self._session("delete database") as client:
            response = await client.delete(
                f"{self._databases_url(project_id)}/{database_id}",
                headers=self.headers,
            )
        payload = _json_or_none(response)
        logger.info("delete database response status=%s body=%s", response.status_code, payload)
        if response.is_error or (isinstance(payload, dict) and "error" in payload):
            raise ManagedDatabaseError(
                f"failed to delete database: {error_message(payload)}",
                status_code=response.status_code,
                body=payload,
            )

    def _databases_url(self, project_id: str) -> str:
        return f"{self.base_url}/projects/{project_id}/databases"

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[httpx.AsyncClient]:
        try:
            if self._http_client is not None:
                yield self._http_client
                return
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                yield client
        except httpx.HTTPError as exc:
            raise ManagedDatabaseError(f"{operation} failed: {exc}") from exc


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _json_or_raise(response: httpx.Response, operation: str) -> Any:
    payload = _json_or_none(response)
    if response.is_error:
        raise ManagedDatabaseError(
            f"{operation} failed with HTTP {response.status_code}: {error_message(payload)}",
            status_code=response.status_code,
            body=payload if payload is not None else response.text,
        )
    if payload is None:
        raise ManagedDatabaseError(
            f"{operation} returned a non-JSON response",
            status_code=response.status_code,
            body=response.text,
        )
    return payload
