"""Input/output handling utilities."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any


def read_input(source: str | None) -> dict[str, Any]:
    """Read task inputs from a file path or inline JSON string.

    Args:
        source: A path to a JSON file, an inline JSON object, or None.

    Returns:
        The parsed JSON object (empty when source is None).

    Raises:
        json.JSONDecodeError: If the input is not valid JSON.
        ValueError: If the JSON is not an object.
    """
    if source is None:
        return {}

    source_path = Path(source)
    if source_path.exists():
        with open(source_path) as f:
            data = json.load(f)
    else:
        data = json.loads(source)

    if not isinstance(data, dict):
        raise ValueError(f"Task input must be a JSON object, got {type(data).__name__}")
    return data


def parse_assignments(assignments: Iterable[str]) -> dict[str, str]:
    """Parse ``key=value`` pairs given on the command line.

    Values stay strings; the task configuration coerces them.

    Raises:
        ValueError: If an item has no '=' or an empty key.
    """
    result: dict[str, str] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected key=value, got {item!r}")
        result[key] = value
    return result


def write_output(dest: str | Path, obj: Any) -> None:
    """Write output to a JSON file, creating parent directories.

    Raises:
        TypeError: If obj is not JSON serializable.
    """
    dest_path = Path(dest)
    dest_path.parent.mkdir(parents=True, exist_ok=True)

    with open(dest_path, "w") as f:
        json.dump(obj, f, indent=2, default=str)
        f.write("\n")  # Trailing newline for POSIX compliance
