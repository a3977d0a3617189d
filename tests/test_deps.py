"""Tests for dependency injection functionality."""

from __future__ import annotations

from datetime import UTC

import httpx
import pytest

from notifykit.deps import NotifykitEnv, build_deps


class TestNotifykitEnv:
    """Tests for NotifykitEnv dataclass."""

    def test_defaults(self) -> None:
        settings = NotifykitEnv.from_env({})
        assert settings.strict is False
        assert settings.log_level == "INFO"

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes ", "on"])
    def test_strict_true_values(self, value: str) -> None:
        assert NotifykitEnv.from_env({"NOTIFYKIT_STRICT": value}).strict is True

    @pytest.mark.parametrize("value", ["", "0", "false", "no", "strict"])
    def test_strict_false_values(self, value: str) -> None:
        assert NotifykitEnv.from_env({"NOTIFYKIT_STRICT": value}).strict is False

    def test_log_level_uppercased(self) -> None:
        assert NotifykitEnv.from_env({"NOTIFYKIT_LOG_LEVEL": "debug"}).log_level == "DEBUG"

    def test_blank_log_level(self) -> None:
        assert NotifykitEnv.from_env({"NOTIFYKIT_LOG_LEVEL": "  "}).log_level == "INFO"


class TestBuildDeps:
    def test_provides_open_client(self) -> None:
        with build_deps({"NOTIFYKIT_STRICT": "1"}) as deps:
            assert isinstance(deps.http, httpx.Client)
            assert not deps.http.is_closed
            assert deps.settings.strict is True
            assert deps.logger.name == "notifykit.task"
            assert deps.now().tzinfo is UTC

    def test_closes_client_on_exit(self) -> None:
        with build_deps({}) as deps:
            client = deps.http
        assert client is not None
        assert client.is_closed

    def test_closes_client_on_error(self) -> None:
        with pytest.raises(RuntimeError), build_deps({}) as deps:
            client = deps.http
            raise RuntimeError("boom")
        assert client.is_closed

    def test_uses_given_transport(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(204))

        with build_deps({}, transport=transport) as deps:
            response = deps.http.get("http://example.test/")

        assert response.status_code == 204
