from __future__ import annotations

import re

from ppg_ops.core.events import CIEvent

_REPLACED_CHARS = ("/", "-")
_WHITESPACE_OR_CONTROL_RE = re.compile(r"[\s\x00-\x1f\x7f]+")


def proposed_database_name(event: CIEvent) -> str:
    """Unsanitized name keyed to the PR, a manual input, or the run number."""
    if event.is_pull_request:
        return f"pr-{event.pr_number}-{event.head_ref or ''}"
    if event.dispatch_database_name:
        return event.dispatch_database_name
    return f"test-{event.run_number or 0}"


def sanitize_database_name(raw: str) -> str:
    """Lowercase and map `/`, `-`, whitespace and control characters to `_`."""
    name = _WHITESPACE_OR_CONTROL_RE.sub("_", raw.strip())
    for char in _REPLACED_CHARS:
        name = name.replace(char, "_")
    name = name.lower()
    if not name:
        raise ValueError("database name is empty after sanitization")
    return name
