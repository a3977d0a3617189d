"""Task runner - orchestrates one notification with validation."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx

from notifykit.deps import NotifykitEnv, build_deps
from notifykit.errors import (
    ConfigError,
    PreconditionError,
    RemoteFailureError,
    TransportError,
)
from notifykit.io import write_output
from notifykit.messages import NotifyMessages, pop_messages, write_messages
from notifykit.registry import TaskNotFoundError, get_task, load_tasks
from notifykit.schema import SchemaValidationError, load_schema, validate

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_TASK_NOT_FOUND = 3
EXIT_TRANSPORT_ERROR = 4
EXIT_REMOTE_FAILURE = 5
EXIT_PRECONDITION_ERROR = 6


def configure_logging(env: Mapping[str, str], *, verbose: bool = False) -> None:
    """Send log records to stderr at NOTIFYKIT_LOG_LEVEL (DEBUG when verbose)."""
    level_name = "DEBUG" if verbose else NotifykitEnv.from_env(env).log_level
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
        stream=sys.stderr,
    )


def run_task(
    task_name: str,
    inputs: dict[str, Any],
    *,
    output_path: str | Path | None = None,
    messages_output_path: str | Path | None = None,
    schemas_root: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> int:
    """Run a notification task with validation and optional artifacts.

    Steps:
    1. Resolve the task definition
    2. Validate the inputs against the task's input schema
    3. Build dependencies and execute the task (one HTTP request)
    4. Extract messages from the output
    5. Validate the output against the output schema
    6. Write the output (to a file, or stdout when no path is given)
    7. Write the messages artifact (if a path is given)

    Args:
        task_name: Name of the task to run.
        inputs: Task inputs.
        output_path: Path to write the output JSON (stdout when None).
        messages_output_path: Path to write the messages artifact.
        schemas_root: Root directory containing task schemas.
        env: Environment variables (defaults to os.environ).
        transport: Optional httpx transport for the notification client.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    if env is None:
        env = os.environ

    messages = NotifyMessages()

    def fail(exit_code: int, text: str, code: str, **details: Any) -> int:
        logger.error(text)
        messages.error(text, code=code, **details)
        if messages_output_path:
            with contextlib.suppress(OSError):
                write_messages(messages_output_path, messages)
        return exit_code

    logger.info(f"Starting task: {task_name}")

    # 1. Resolve task definition
    load_tasks()
    try:
        task = get_task(task_name)
    except TaskNotFoundError as e:
        return fail(
            EXIT_TASK_NOT_FOUND,
            f"Task not found: {task_name}",
            "TASK_NOT_FOUND",
            data={"available": e.available},
        )

    # 2. Validate input shape
    try:
        validate(inputs, load_schema(task.input_schema, root=schemas_root))
    except FileNotFoundError:
        return fail(
            EXIT_VALIDATION_ERROR,
            f"Input schema not found: {task.input_schema}",
            "SCHEMA_NOT_FOUND",
        )
    except SchemaValidationError as e:
        return fail(
            EXIT_VALIDATION_ERROR,
            f"Input validation failed: {e}",
            "INPUT_VALIDATION_ERROR",
            data={"errors": e.errors},
        )

    # 3. Build dependencies and execute task
    try:
        with build_deps(env, transport=transport) as deps:
            output_raw = task.run(inputs, deps)
    except PreconditionError as e:
        return fail(EXIT_PRECONDITION_ERROR, str(e), "PRECONDITION_ERROR")
    except ConfigError as e:
        return fail(
            EXIT_VALIDATION_ERROR,
            f"Invalid configuration: {e}",
            "CONFIG_ERROR",
            data={"field": e.field},
        )
    except TransportError as e:
        return fail(EXIT_TRANSPORT_ERROR, str(e), "TRANSPORT_ERROR", data={"reason": e.reason})
    except RemoteFailureError as e:
        return fail(
            EXIT_REMOTE_FAILURE,
            e.message,
            "REMOTE_FAILURE",
            service=e.service,
            status_code=e.status_code,
        )
    except Exception as e:
        logger.exception("Task execution failed")
        return fail(EXIT_RUNTIME_ERROR, f"Task execution failed: {e}", "TASK_EXECUTION_ERROR")

    # 4. Extract messages
    try:
        output, task_messages = pop_messages(output_raw, task_name=task_name)
    except ValueError as e:
        return fail(EXIT_RUNTIME_ERROR, str(e), "MESSAGES_PARSE_ERROR")
    messages.extend(task_messages)

    # 5. Validate output
    try:
        validate(output, load_schema(task.output_schema, root=schemas_root))
    except FileNotFoundError:
        return fail(
            EXIT_VALIDATION_ERROR,
            f"Output schema not found: {task.output_schema}",
            "SCHEMA_NOT_FOUND",
        )
    except SchemaValidationError as e:
        return fail(
            EXIT_VALIDATION_ERROR,
            f"Output validation failed: {e}",
            "OUTPUT_VALIDATION_ERROR",
            data={"errors": e.errors},
        )

    # 6. Write output
    if output_path:
        try:
            write_output(output_path, output)
        except OSError as e:
            return fail(EXIT_RUNTIME_ERROR, f"Failed to write output: {e}", "OUTPUT_WRITE_ERROR")
        logger.info(f"Output written to: {output_path}")
    else:
        sys.stdout.write(json.dumps(output, indent=2, default=str) + "\n")

    # 7. Write messages artifact
    if messages_output_path:
        try:
            write_messages(messages_output_path, messages)
        except OSError as e:
            # Don't fail the notification for artifact write errors
            logger.warning(f"Failed to write messages artifact: {e}")

    if messages.has_warnings:
        logger.warning(
            f"Task {task_name} completed with {messages.count('warning')} warning(s)"
        )
    else:
        logger.info(f"Task {task_name} completed")
    return EXIT_SUCCESS
