from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Database(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str | None = None
    name: str | None = None
    region: str | None = None
    status: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")


class Pagination(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    has_more: bool = Field(default=False, alias="hasMore")
    next_cursor: str | None = Field(default=None, alias="nextCursor")


class DatabaseList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: list[Database] | None = None
    pagination: Pagination | None = None


class CreatedDatabase(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str | None = None
    connection_string: str | None = Field(default=None, alias="connectionString")


class CreateDatabaseRequest(BaseModel):
    name: str
    region: str


class CreateConnectionRequest(BaseModel):
    name: str


def error_message(body: Any) -> str:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return "Unknown error"
