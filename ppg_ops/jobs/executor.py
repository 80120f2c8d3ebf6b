from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Any

from opentelemetry import trace

from ppg_ops.core.config import Settings
from ppg_ops.core.events import CIEvent
from ppg_ops.core.outputs import write_step_outputs
from ppg_ops.jobs.cleanup import cleanup_database
from ppg_ops.jobs.provision import provision_database
from ppg_ops.jobs.schema import push_schema, seed_database
from ppg_ops.services.github_client import GitHubClient, provisioned_comment_body
from ppg_ops.services.prisma_client import PrismaClient

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass(slots=True)
class RunOptions:
    skip_schema: bool = False
    skip_seed: bool = False
    comment: bool = True


async def execute_action(
    action: str,
    database_name: str,
    *,
    project_id: str,
    settings: Settings,
    event: CIEvent,
    prisma: PrismaClient,
    github: GitHubClient | None = None,
    options: RunOptions | None = None,
) -> dict[str, Any]:
    options = options or RunOptions()
    if action == "provision":
        return await _run_provision(database_name, project_id, settings, event, prisma, github, options)
    if action == "cleanup":
        return await _run_cleanup(database_name, project_id, settings, prisma)
    raise ValueError(f"unsupported action: {action}")


async def _run_provision(
    database_name: str,
    project_id: str,
    settings: Settings,
    event: CIEvent,
    prisma: PrismaClient,
    github: GitHubClient | None,
    options: RunOptions,
) -> dict[str, Any]:
    with tracer.start_as_current_span("ppg.provision") as span:
        span.set_attribute("ppg.database_name", database_name)
        result = await provision_database(
            prisma,
            project_id,
            database_name,
            region=settings.region,
            connection_key_name=settings.connection_key_name,
        )
        span.set_attribute("ppg.database_id", result.database_id)
        span.set_attribute("ppg.created", result.created)

    write_step_outputs(
        settings.github_output,
        {
            "database-name": result.database_name,
            "exists": result.existed,
            "db-id": result.database_id,
            "connection-string": result.connection_string,
        },
    )

    if not options.skip_schema:
        with tracer.start_as_current_span("ppg.schema"):
            await asyncio.to_thread(push_schema, result.connection_string, settings.schema_commands)
    seeded = False
    if not options.skip_seed:
        with tracer.start_as_current_span("ppg.seed"):
            await asyncio.to_thread(seed_database, result.connection_string, settings.seed_commands)
        seeded = True

    body = provisioned_comment_body(result.database_name, seeded=seeded)
    commented = False
    if event.is_pull_request:
        if not options.comment:
            logger.info("pull request comment disabled")
        elif github is None or not settings.github_repository:
            logger.warning("GITHUB_TOKEN or GITHUB_REPOSITORY not set; skipping pull request comment")
        else:
            with tracer.start_as_current_span("ppg.comment"):
                await github.create_issue_comment(settings.github_repository, event.pr_number, body)
            commented = True
    else:
        print(body)

    return {
        "action": "provision",
        "database_name": result.database_name,
        "database_id": result.database_id,
        "created": result.created,
        "seeded": seeded,
        "commented": commented,
    }


async def _run_cleanup(
    database_name: str,
    project_id: str,
    settings: Settings,
    prisma: PrismaClient,
) -> dict[str, Any]:
    with tracer.start_as_current_span("ppg.cleanup") as span:
        span.set_attribute("ppg.database_name", database_name)
        result = await cleanup_database(prisma, project_id, database_name)
        span.set_attribute("ppg.cleanup_status", result.status)

    write_step_outputs(settings.github_output, {"database-name": result.database_name, "status": result.status})
    return {
        "action": "cleanup",
        "database_name": result.database_name,
        "database_id": result.database_id,
        "status": result.status,
    }
