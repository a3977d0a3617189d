"""Tests for the notification task adapters."""

from __future__ import annotations

import dataclasses

import pytest

from notifykit.errors import ConfigError, PreconditionError, RemoteFailureError
from notifykit.messages import MESSAGES_KEY
from notifykit.registry import TaskNotFoundError, get_task, load_tasks
from notifykit.tasks import nabaztag_build_status, nabaztag_notify, twitter_update, unfuddle_message

TASK_NAMES = ["nabaztag_build_status", "nabaztag_notify", "twitter_update", "unfuddle_message"]


def test_tasks_registered():
    assert [task.name for task in load_tasks()] == TASK_NAMES


def test_tasks_by_service():
    assert [task.name for task in load_tasks("nabaztag")] == [
        "nabaztag_build_status",
        "nabaztag_notify",
    ]


def test_unknown_task():
    load_tasks()
    with pytest.raises(TaskNotFoundError) as exc_info:
        get_task("carrier_pigeon")
    assert "twitter_update" in exc_info.value.available


@pytest.mark.parametrize("name", TASK_NAMES)
def test_task_schemas(name):
    task = get_task(name)
    assert task.input_schema == f"{name}/input.json"
    assert task.output_schema == "notification_output.json"


@pytest.mark.parametrize(
    "run",
    [nabaztag_notify.run, nabaztag_build_status.run, twitter_update.run, unfuddle_message.run],
)
def test_precondition_checked_before_inputs(fake_deps, run):
    deps = dataclasses.replace(fake_deps, http=None)

    with pytest.raises(PreconditionError):
        run({}, deps)


def test_closed_client_is_a_precondition_failure(fake_deps, twitter_input):
    fake_deps.http.is_closed = True

    with pytest.raises(PreconditionError):
        twitter_update.run(twitter_input, fake_deps)

    fake_deps.http.build_request.assert_not_called()


def test_invalid_inputs_send_nothing(fake_deps):
    with pytest.raises(ConfigError):
        twitter_update.run({"username": "buildbot", "password": "s3cret"}, fake_deps)

    fake_deps.http.send.assert_not_called()


class TestOutput:
    def test_success(self, transport_deps, twitter_input):
        deps, _ = transport_deps(200)

        output = twitter_update.run(twitter_input, deps)

        assert output == {
            "service": "Twitter",
            "success": True,
            "level": "success",
            "status_code": 200,
            "description": "Twitter status updated to: 'Build 42 passed'",
            "request_url": "http://twitter.com/statuses/update.xml?status=Build+42+passed",
            "response_detail": None,
            "timestamp": "2024-01-15T12:00:00+00:00",
        }

    def test_lenient_failure_adds_warning(self, transport_deps, nabaztag_input):
        deps, _ = transport_deps(503)

        output = nabaztag_notify.run(nabaztag_input, deps)

        assert output["success"] is False
        assert output["level"] == "warning"
        assert output[MESSAGES_KEY] == [
            {
                "level": "warning",
                "message": "Nabaztag servers are overloaded and refusing request",
                "code": "HTTP_503",
                "service": "Nabaztag",
                "status_code": 503,
                "timestamp": "2024-01-15T12:00:00+00:00",
            }
        ]

    def test_strict_from_settings(self, transport_deps, unfuddle_input):
        deps, _ = transport_deps(401, strict=True)

        with pytest.raises(RemoteFailureError):
            unfuddle_message.run(unfuddle_input, deps)

    def test_input_strict_wins_over_settings(self, transport_deps, unfuddle_input):
        deps, _ = transport_deps(401, strict=True)

        output = unfuddle_message.run({**unfuddle_input, "strict": "false"}, deps)

        assert output["level"] == "warning"

    def test_build_status(self, transport_deps, nabaztag_input):
        deps, transport = transport_deps(200)

        output = nabaztag_build_status.run({**nabaztag_input, "status": "recovery"}, deps)

        assert output["description"] == "Nabaztag event sent: 'The build has been recovered'"
        assert "tts=The+build+has+been+recovered" in str(transport.last_request.url)
