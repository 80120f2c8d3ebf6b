from __future__ import annotations

from collections.abc import Sequence
import logging
import os
import shlex
import subprocess

from ppg_ops.core.errors import SchemaSetupError

logger = logging.getLogger(__name__)


def push_schema(connection_string: str, commands: Sequence[str], *, cwd: str | None = None) -> None:
    _run_commands("schema", connection_string, commands, cwd=cwd)


def seed_database(connection_string: str, commands: Sequence[str], *, cwd: str | None = None) -> None:
    _run_commands("seed", connection_string, commands, cwd=cwd)


def _run_commands(stage: str, connection_string: str, commands: Sequence[str], *, cwd: str | None) -> None:
    env = {**os.environ, "DATABASE_URL": connection_string}
    for command in commands:
        argv = shlex.split(command)
        if not argv:
            continue
        logger.info("%s step: running %s", stage, command)
        try:
            completed = subprocess.run(argv, env=env, cwd=cwd, check=False)
        except FileNotFoundError as exc:
            raise SchemaSetupError(command, 127) from exc
        if completed.returncode != 0:
            raise SchemaSetupError(command, completed.returncode)
