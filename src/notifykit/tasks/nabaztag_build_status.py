"""Standardised build notifications for a Nabaztag."""

from __future__ import annotations

from typing import Any

from notifykit.deps import Deps
from notifykit.registry import TaskDef, register_task
from notifykit.services import nabaztag
from notifykit.tasks.base import run_notifier


def run(inputs: dict[str, Any], deps: Deps) -> dict[str, Any]:
    """Announce a build status ("success", "failure" or "recovery").

    Accepts the same fields as nabaztag_notify plus ``status``; the spoken
    message is derived from the status.
    """
    return run_notifier(nabaztag.notifier, nabaztag.NabaztagBuildStatusConfig, inputs, deps)


register_task(
    TaskDef(
        name="nabaztag_build_status",
        service="Nabaztag",
        description="Announce a build success, failure or recovery on a Nabaztag",
        input_schema="nabaztag_build_status/input.json",
        output_schema="notification_output.json",
        run=run,
    )
)
