from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

ACTIONS = {"provision", "cleanup"}


@dataclass(slots=True)
class CIEvent:
    event_name: str | None
    action: str | None = None
    pr_number: int | None = None
    head_ref: str | None = None
    dispatch_action: str | None = None
    dispatch_database_name: str | None = None
    run_number: str | None = None

    @property
    def is_pull_request(self) -> bool:
        return self.event_name == "pull_request" and self.pr_number is not None


def load_event(event_name: str | None, event_path: str | None, run_number: str | None = None) -> CIEvent:
    payload = _read_payload(event_path)

    raw_pr = payload.get("pull_request")
    pull_request: dict[str, Any] = raw_pr if isinstance(raw_pr, dict) else {}
    raw_head = pull_request.get("head")
    head: dict[str, Any] = raw_head if isinstance(raw_head, dict) else {}
    raw_inputs = payload.get("inputs")
    inputs: dict[str, Any] = raw_inputs if isinstance(raw_inputs, dict) else {}

    return CIEvent(
        event_name=event_name,
        action=_as_text(payload.get("action")),
        pr_number=_as_int(pull_request.get("number")),
        head_ref=_as_text(head.get("ref")),
        dispatch_action=_as_text(inputs.get("action")),
        dispatch_database_name=_as_text(inputs.get("database_name")),
        run_number=run_number,
    )


def resolve_action(event: CIEvent) -> str | None:
    if event.event_name == "pull_request":
        return "cleanup" if event.action == "closed" else "provision"
    if event.event_name == "workflow_dispatch":
        requested = event.dispatch_action or "provision"
        if requested not in ACTIONS:
            raise ValueError(f"unsupported workflow_dispatch action: {requested}")
        return requested
    return None


def _read_payload(event_path: str | None) -> dict[str, Any]:
    if not event_path:
        return {}
    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("could not read event payload path=%s: %s", event_path, exc)
        return {}
    return payload if isinstance(payload, dict) else {}


def _as_text(value: Any) -> str | None:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
