"""Shared adapter between the task surface and the notifiers.

Every notification task runs the same steps:
1. Check the HTTP precondition (before any input is read)
2. Build the immutable service configuration from the inputs
3. Execute the notifier (one request)
4. Turn the outcome into the task's output document
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from notifykit.clients.http import require_http
from notifykit.deps import Deps
from notifykit.messages import MESSAGES_KEY, NotifyMessage
from notifykit.notifier import ConfigT, Notifier, Outcome


def run_notifier(
    notifier: Notifier[ConfigT],
    config_type: type[ConfigT],
    inputs: Mapping[str, Any],
    deps: Deps,
) -> dict[str, Any]:
    """Validate inputs, send one notification, and describe the outcome.

    The ``strict`` input defaults to NOTIFYKIT_STRICT when not given.

    Raises:
        PreconditionError: If deps has no usable HTTP client.
        ConfigError: If the inputs do not form a valid configuration.
        TransportError: If the request did not complete.
        RemoteFailureError: If the service reported a failure in strict mode.
    """
    client = require_http(deps.http)

    config = config_type.from_inputs({"strict": deps.settings.strict, **inputs})
    outcome = notifier.execute(client, config, log=deps.logger)

    return outcome_output(outcome, timestamp=deps.now().isoformat())


def outcome_output(outcome: Outcome, *, timestamp: str) -> dict[str, Any]:
    """Output document for a classified outcome.

    Warnings are also reported through the messages artifact.
    """
    output: dict[str, Any] = {
        "service": outcome.service,
        "success": outcome.ok,
        "level": outcome.level.value,
        "status_code": outcome.status_code,
        "description": outcome.description,
        "request_url": outcome.request_url,
        "response_detail": outcome.response_detail,
        "timestamp": timestamp,
    }

    if not outcome.ok:
        warning = NotifyMessage(
            level="warning",
            message=outcome.description,
            code=f"HTTP_{outcome.status_code}",
            service=outcome.service,
            status_code=outcome.status_code,
            timestamp=timestamp,
        )
        output[MESSAGES_KEY] = [warning.to_dict()]

    return output
