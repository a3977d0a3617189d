"""Twitter status update task."""

from __future__ import annotations

from typing import Any

from notifykit.deps import Deps
from notifykit.registry import TaskDef, register_task
from notifykit.services import twitter
from notifykit.tasks.base import run_notifier


def run(inputs: dict[str, Any], deps: Deps) -> dict[str, Any]:
    """Update a Twitter status.

    Input fields:
        username: Account username (required)
        password: Account password (required)
        message: Status text (required, truncated to 140 characters)
        api_url: Override the status update endpoint
        strict: Fail instead of warning when the update is rejected
    """
    return run_notifier(twitter.notifier, twitter.TwitterConfig, inputs, deps)


register_task(
    TaskDef(
        name="twitter_update",
        service="Twitter",
        description="Post a build notification as a Twitter status update",
        input_schema="twitter_update/input.json",
        output_schema="notification_output.json",
        run=run,
    )
)
