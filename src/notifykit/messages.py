"""Diagnostics artifact for notification runs.

What went wrong (or nearly wrong) during a run is collected apart from the
notification output document and written as one JSON artifact:

    {
      "version": "notifykit-messages/v1",
      "messages": [
        {"level": "warning", "message": "Twitter servers are overloaded and refusing request",
         "code": "HTTP_503", "source": "twitter_update", "service": "Twitter",
         "status_code": 503, "timestamp": "..."}
      ]
    }

Tasks hand their warnings to the runner in a list under MESSAGES_KEY in the
output; the runner pops it before validating the output.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal

MESSAGES_VERSION = "notifykit-messages/v1"
MESSAGES_KEY = "__notifykit_messages__"

MessageLevel = Literal["info", "warning", "error"]
LEVELS: tuple[str, ...] = ("info", "warning", "error")


def _now() -> str:
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True)
class NotifyMessage:
    """One diagnostic entry.

    Attributes:
        level: info, warning or error.
        message: Human-readable text.
        code: Machine-readable code, e.g. HTTP_503 or CONFIG_ERROR.
        source: Task name, or "runner" for runner failures.
        service: Service the notification was meant for.
        status_code: HTTP status returned by the service.
        data: Anything else worth keeping for debugging.
        timestamp: ISO 8601 creation time.
    """

    level: MessageLevel
    message: str
    code: str | None = None
    source: str | None = None
    service: str | None = None
    status_code: int | None = None
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        # Unset optional fields are omitted
        return {k: v for k, v in asdict(self).items() if v is not None and v != {}}

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], *, default_source: str | None = None
    ) -> NotifyMessage:
        """Parse an entry emitted by a task.

        Raises:
            ValueError: If the level is unknown or the message is missing.
        """
        level = data.get("level", "info")
        if level not in LEVELS:
            raise ValueError(
                f"Unknown message level {level!r}, expected one of: {', '.join(LEVELS)}"
            )
        if not data.get("message"):
            raise ValueError("Each message needs a non-empty 'message'")

        return cls(
            level=level,
            message=data["message"],
            code=data.get("code"),
            source=data.get("source") or default_source,
            service=data.get("service"),
            status_code=data.get("status_code"),
            data=data.get("data") or {},
            timestamp=data.get("timestamp") or _now(),
        )


@dataclass
class NotifyMessages:
    """Messages collected over one run, in the order they happened."""

    messages: list[NotifyMessage] = field(default_factory=list)

    def add(self, message: NotifyMessage) -> None:
        self.messages.append(message)

    def extend(self, messages: list[NotifyMessage]) -> None:
        self.messages.extend(messages)

    def error(
        self,
        message: str,
        *,
        code: str,
        source: str = "runner",
        service: str | None = None,
        status_code: int | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        """Record a fatal problem."""
        self.add(
            NotifyMessage(
                level="error",
                message=message,
                code=code,
                source=source,
                service=service,
                status_code=status_code,
                data=data or {},
            )
        )

    def count(self, level: MessageLevel) -> int:
        return sum(1 for m in self.messages if m.level == level)

    @property
    def has_warnings(self) -> bool:
        return self.count("warning") > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": MESSAGES_VERSION,
            "messages": [m.to_dict() for m in self.messages],
        }


def pop_messages(
    task_output: dict[str, Any],
    *,
    task_name: str,
) -> tuple[dict[str, Any], list[NotifyMessage]]:
    """Split a task's output into the output document and its messages.

    The input dict is left untouched. Entries without a source are
    attributed to ``task_name``.

    Raises:
        ValueError: If the embedded messages are malformed.
    """
    if MESSAGES_KEY not in task_output:
        return task_output, []

    output = {k: v for k, v in task_output.items() if k != MESSAGES_KEY}
    raw = task_output[MESSAGES_KEY] or []

    if not isinstance(raw, list):
        raise ValueError(f"{MESSAGES_KEY} must be a list, got {type(raw).__name__}")
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError(f"Each message must be an object, got {type(item).__name__}")

    return output, [NotifyMessage.from_dict(item, default_source=task_name) for item in raw]


def write_messages(path: str | Path, messages: NotifyMessages) -> None:
    """Write the artifact as JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(messages.to_dict(), indent=2, default=str) + "\n")
