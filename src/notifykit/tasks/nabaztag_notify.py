"""Nabaztag notification task.

Makes the rabbit speak, move its ears, play a stored message, run a
choreography, or stream audio, in a single API call.
"""

from __future__ import annotations

from typing import Any

from notifykit.deps import Deps
from notifykit.registry import TaskDef, register_task
from notifykit.services import nabaztag
from notifykit.tasks.base import run_notifier


def run(inputs: dict[str, Any], deps: Deps) -> dict[str, Any]:
    """Send an event to a Nabaztag.

    Input fields:
        serial_number: Rabbit serial number (required)
        token: API token (required)
        left_ear_position / right_ear_position: 0-16
        message: Text to speak
        message_id: Stored message to play
        voice: Voice name (e.g. UK-Edwin)
        choreography / choreography_title: Choreography sequence and title
        url_list: Audio stream URLs
        api_url: Override the API endpoint
        strict: Fail instead of warning when the API rejects the event

    Output fields:
        See tasks.base.outcome_output.
    """
    return run_notifier(nabaztag.notifier, nabaztag.NabaztagConfig, inputs, deps)


register_task(
    TaskDef(
        name="nabaztag_notify",
        service="Nabaztag",
        description="Send a spoken message, ear movement or choreography to a Nabaztag",
        input_schema="nabaztag_notify/input.json",
        output_schema="notification_output.json",
        run=run,
    )
)
