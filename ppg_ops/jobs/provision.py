from __future__ import annotations

from dataclasses import dataclass
import logging

from ppg_ops.core.errors import ManagedDatabaseError
from ppg_ops.services.prisma_client import PrismaClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProvisionResult:
    database_name: str
    database_id: str
    created: bool
    connection_string: str

    @property
    def existed(self) -> bool:
        return not self.created


async def provision_database(
    client: PrismaClient,
    project_id: str,
    database_name: str,
    *,
    region: str = "us-east-1",
    connection_key_name: str = "read_write_key",
) -> ProvisionResult:
    logger.info("looking for database with name: %s", database_name)
    database_id = await client.find_database_id(project_id, database_name)

    if database_id is not None:
        logger.info("database %s exists with id=%s; creating a new connection string", database_name, database_id)
        connection_string = await client.create_connection(project_id, database_id, connection_key_name)
        return ProvisionResult(
            database_name=database_name,
            database_id=database_id,
            created=False,
            connection_string=connection_string,
        )

    logger.info("no existing database named %s; creating it in region=%s", database_name, region)
    created = await client.create_database(project_id, database_name, region)
    if not created.connection_string:
        raise ManagedDatabaseError(
            f"database {database_name} was created without a connection string",
            body={"id": created.id},
        )
    logger.info("database created successfully id=%s", created.id)
    return ProvisionResult(
        database_name=database_name,
        database_id=created.id,
        created=True,
        connection_string=created.connection_string,
    )
