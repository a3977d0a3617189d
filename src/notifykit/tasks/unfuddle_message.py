"""Unfuddle project message task."""

from __future__ import annotations

from typing import Any

from notifykit.deps import Deps
from notifykit.registry import TaskDef, register_task
from notifykit.services import unfuddle
from notifykit.tasks.base import run_notifier


def run(inputs: dict[str, Any], deps: Deps) -> dict[str, Any]:
    """Post a new message to an Unfuddle project.

    Input fields:
        subdomain: Account subdomain (required)
        project_id: Project id (required)
        username / password: Account credentials (required)
        title: Message title (required)
        body: Message body
        category_ids: Category id, list of ids, or "1,2,3"
        service_host: Override the Unfuddle host
        strict: Fail instead of warning when the message is rejected
    """
    return run_notifier(unfuddle.notifier, unfuddle.UnfuddleConfig, inputs, deps)


register_task(
    TaskDef(
        name="unfuddle_message",
        service="Unfuddle",
        description="Post a build notification as an Unfuddle project message",
        input_schema="unfuddle_message/input.json",
        output_schema="notification_output.json",
        run=run,
    )
)
