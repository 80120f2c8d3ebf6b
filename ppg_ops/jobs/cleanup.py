from __future__ import annotations

from dataclasses import dataclass
import logging

from ppg_ops.services.prisma_client import PrismaClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CleanupResult:
    database_name: str
    database_id: str | None
    status: str

    @property
    def deleted(self) -> bool:
        return self.status == "deleted"


async def cleanup_database(client: PrismaClient, project_id: str, database_name: str) -> CleanupResult:
    logger.info("looking for database with name: %s", database_name)
    database_id = await client.find_database_id(project_id, database_name)
    if database_id is None:
        logger.info("no existing database found with name %s", database_name)
        return CleanupResult(database_name=database_name, database_id=None, status="not_found")

    logger.info("database %s exists with id=%s; deleting", database_name, database_id)
    await client.delete_database(project_id, database_id)
    logger.info("database deletion initiated successfully")
    return CleanupResult(database_name=database_name, database_id=database_id, status="deleted")
