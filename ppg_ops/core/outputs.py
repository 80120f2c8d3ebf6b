from __future__ import annotations

from pathlib import Path
import uuid


def write_step_outputs(output_path: str | None, values: dict[str, object]) -> None:
    if not output_path:
        return
    lines = [_format_output(key, _render(value)) for key, value in values.items()]
    with Path(output_path).open("a", encoding="utf-8") as handle:
        handle.writelines(lines)


def _format_output(key: str, value: str) -> str:
    if not key or any(char in key for char in "=\r\n<"):
        raise ValueError(f"invalid step output name: {key!r}")
    if "\n" not in value and "\r" not in value:
        return f"{key}={value}\n"
    # Multiline values use the runner's heredoc form so they cannot inject extra keys.
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{key}<<{delimiter}\n{value}\n{delimiter}\n"


def _render(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
