from __future__ import annotations

from typing import Any


class OpsError(Exception):
    """Base error for provisioning and cleanup runs."""


class ConfigurationError(OpsError):
    """Raised when required credentials or inputs are missing."""


class ManagedDatabaseError(OpsError):
    """Raised when the managed database API rejects or fails a request."""

    def __init__(self, message: str, *, status_code: int | None = None, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SchemaSetupError(OpsError):
    """Raised when an ORM CLI command exits non-zero."""

    def __init__(self, command: str, returncode: int) -> None:
        super().__init__(f"command failed with exit code {returncode}: {command}")
        self.command = command
        self.returncode = returncode


class GitHubCommentError(OpsError):
    """Raised when the pull request comment cannot be posted."""
