"""Dependency injection for notification tasks."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime

import httpx

# Environment variable prefix for process-wide settings
NOTIFYKIT_ENV_PREFIX = "NOTIFYKIT_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class NotifykitEnv:
    """Structured access to NOTIFYKIT_* environment variables.

    Attributes:
        strict: Default outcome policy when a task input does not set one.
        log_level: Logging level name for the runner.
    """

    strict: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> NotifykitEnv:
        """Build from environment variables.

        Args:
            env: Environment variables mapping (typically os.environ).

        Returns:
            NotifykitEnv with values parsed from NOTIFYKIT_* variables.
        """
        return cls(
            strict=env.get(f"{NOTIFYKIT_ENV_PREFIX}STRICT", "").strip().lower() in _TRUE_VALUES,
            log_level=env.get(f"{NOTIFYKIT_ENV_PREFIX}LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )


@dataclass(frozen=True)
class Deps:
    """Dependencies injected into task functions.

    Tasks receive this as a parameter, making them testable with fake deps.

    Attributes:
        http: HTTP client for the single notification request.
        now: Function returning current UTC time (injectable for testing).
        logger: Logger instance for task output.
        settings: Structured access to NOTIFYKIT_* environment variables.
    """

    http: httpx.Client | None
    now: Callable[[], datetime]
    logger: logging.Logger
    settings: NotifykitEnv


@contextmanager
def build_deps(
    env: Mapping[str, str],
    *,
    transport: httpx.BaseTransport | None = None,
) -> Iterator[Deps]:
    """Build dependencies for task execution.

    The HTTP client keeps httpx defaults for timeouts, redirects and
    certificate checks. It is closed when the context exits, including
    on error paths.

    Args:
        env: Environment variables mapping (typically os.environ).
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests).

    Example:
        with build_deps(os.environ) as deps:
            result = my_task(inputs, deps)
    """
    http_client = httpx.Client(transport=transport)

    try:
        yield Deps(
            http=http_client,
            now=lambda: datetime.now(UTC),
            logger=logging.getLogger("notifykit.task"),
            settings=NotifykitEnv.from_env(env),
        )
    finally:
        http_client.close()
