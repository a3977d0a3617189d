"""Pytest fixtures for notifykit tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from unittest.mock import MagicMock

import httpx
import pytest

from notifykit.deps import Deps, NotifykitEnv

FIXED_NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=UTC)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that answers with a fixed response and keeps every request."""

    def __init__(
        self,
        status_code: int = 200,
        text: str = "",
        *,
        error: Exception | None = None,
    ) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.text = text
        self.error = error
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.text)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


def make_deps(http: httpx.Client | None, *, strict: bool = False) -> Deps:
    return Deps(
        http=http,
        now=lambda: FIXED_NOW,
        logger=logging.getLogger("test"),
        settings=NotifykitEnv(strict=strict),
    )


@pytest.fixture
def fake_deps() -> Deps:
    """Deps with a MagicMock HTTP client, for tests that never send."""
    mock_http = MagicMock(spec=httpx.Client)
    mock_http.is_closed = False
    return make_deps(mock_http)


@pytest.fixture
def transport_deps() -> Iterator[Callable[..., tuple[Deps, RecordingTransport]]]:
    """Factory for Deps backed by a real httpx.Client over a RecordingTransport.

    Usage:
        deps, transport = transport_deps(status_code=201, text="<ok/>")
    """
    clients: list[httpx.Client] = []

    def factory(
        status_code: int = 200,
        text: str = "",
        *,
        error: Exception | None = None,
        strict: bool = False,
    ) -> tuple[Deps, RecordingTransport]:
        transport = RecordingTransport(status_code, text, error=error)
        client = httpx.Client(transport=transport)
        clients.append(client)
        return make_deps(client, strict=strict), transport

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def nabaztag_input() -> dict[str, object]:
    return {"serial_number": "0019DB001122", "token": "1234567890"}


@pytest.fixture
def twitter_input() -> dict[str, object]:
    return {"username": "buildbot", "password": "s3cret", "message": "Build 42 passed"}


@pytest.fixture
def unfuddle_input() -> dict[str, object]:
    return {
        "subdomain": "acme",
        "project_id": 7,
        "username": "buildbot",
        "password": "s3cret",
        "title": "Build 42 passed",
        "body": "All tests green",
    }
