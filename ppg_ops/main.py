from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence

from ppg_ops.core.config import Settings, get_settings, require_credentials
from ppg_ops.core.errors import OpsError
from ppg_ops.core.events import load_event, resolve_action
from ppg_ops.core.naming import proposed_database_name, sanitize_database_name
from ppg_ops.core.telemetry import configure_logging, setup_telemetry, shutdown_telemetry
from ppg_ops.jobs.executor import RunOptions, execute_action
from ppg_ops.services.github_client import GitHubClient
from ppg_ops.services.prisma_client import PrismaClient

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ppg-ops",
        description="Provision or clean up a per-pull-request Prisma Postgres database.",
    )
    parser.add_argument(
        "action",
        nargs="?",
        choices=["auto", "provision", "cleanup"],
        default="auto",
        help="Action to perform; 'auto' derives it from the GitHub Actions event",
    )
    parser.add_argument("--database-name", help="Database name override (will be sanitized)")
    parser.add_argument("--skip-schema", action="store_true", help="Do not push the ORM schema")
    parser.add_argument("--skip-seed", action="store_true", help="Do not run the seed commands")
    parser.add_argument("--no-comment", action="store_true", help="Do not comment on the pull request")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


async def run(args: argparse.Namespace, settings: Settings) -> int:
    try:
        event = load_event(settings.github_event_name, settings.github_event_path, settings.github_run_number)
        action = resolve_action(event) if args.action == "auto" else args.action
        if action is None:
            logger.info("event %s does not map to a database action; nothing to do", event.event_name)
            return 0

        service_token, project_id = require_credentials(settings)
        database_name = sanitize_database_name(args.database_name or proposed_database_name(event))
        logger.info("action=%s database=%s", action, database_name)

        prisma = PrismaClient(
            settings.api_base_url,
            service_token,
            timeout_seconds=settings.request_timeout_seconds,
        )
        github = GitHubClient(settings.github_token, api_url=settings.github_api_url) if settings.github_token else None
        summary = await execute_action(
            action,
            database_name,
            project_id=project_id,
            settings=settings,
            event=event,
            prisma=prisma,
            github=github,
            options=RunOptions(
                skip_schema=args.skip_schema,
                skip_seed=args.skip_seed,
                comment=not args.no_comment,
            ),
        )
    except (OpsError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    logger.info("run finished: %s", summary)
    return 0


def cli(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    telemetry_runtime = setup_telemetry(settings)
    try:
        return asyncio.run(run(args, settings))
    finally:
        shutdown_telemetry(telemetry_runtime)


if __name__ == "__main__":
    raise SystemExit(cli())
