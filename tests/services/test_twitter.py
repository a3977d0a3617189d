"""Tests for the Twitter service."""

from __future__ import annotations

import base64
import logging
from urllib.parse import parse_qs, urlsplit

import pytest

from notifykit.errors import ConfigError, RemoteFailureError
from notifykit.services import twitter
from notifykit.services.twitter import MAXIMUM_MESSAGE_LENGTH, TwitterConfig, build_url


def _status(url: str) -> str:
    return parse_qs(urlsplit(url).query)["status"][0]


class TestTwitterConfig:
    def test_credentials_required(self, twitter_input):
        with pytest.raises(ConfigError) as exc_info:
            TwitterConfig.from_inputs({**twitter_input, "password": ""})
        assert exc_info.value.message == "You must specify a Twitter username and password"

    @pytest.mark.parametrize("field", ["username", "password"])
    def test_blank_credentials_rejected(self, twitter_input, field):
        with pytest.raises(ConfigError) as exc_info:
            TwitterConfig.from_inputs({**twitter_input, field: "   "})
        assert exc_info.value.field == field

    def test_password_spaces_kept(self, twitter_input):
        config = TwitterConfig.from_inputs({**twitter_input, "password": " s3cret "})
        assert config.password == " s3cret "

    def test_blank_message_rejected(self, twitter_input):
        with pytest.raises(ConfigError) as exc_info:
            TwitterConfig.from_inputs({**twitter_input, "message": "   "})
        assert exc_info.value.field == "message"
        assert exc_info.value.message == "You must specify a message"

    def test_missing_message(self, twitter_input):
        inputs = {k: v for k, v in twitter_input.items() if k != "message"}
        with pytest.raises(ConfigError) as exc_info:
            TwitterConfig.from_inputs(inputs)
        assert exc_info.value.field == "message"

    def test_short_message_unchanged(self, twitter_input, caplog):
        with caplog.at_level(logging.WARNING):
            config = TwitterConfig.from_inputs(twitter_input)
        assert config.message == "Build 42 passed"
        assert "truncating" not in caplog.text

    def test_long_message_truncated_with_warning(self, twitter_input, caplog):
        message = "x" * 145

        with caplog.at_level(logging.WARNING):
            config = TwitterConfig.from_inputs({**twitter_input, "message": message})

        assert config.message == "x" * MAXIMUM_MESSAGE_LENGTH
        assert "Message is greater than the maximum message length - truncating..." in caplog.text

    def test_truncation_counts_decoded_characters(self, twitter_input):
        # 150 encoded characters decode to 50
        config = TwitterConfig.from_inputs({**twitter_input, "message": "%41%42" * 25})
        assert config.message == "AB" * 25


class TestBuildUrl:
    def test_status_in_query(self, twitter_input):
        config = TwitterConfig.from_inputs(twitter_input)
        assert build_url(config) == f"{twitter.BASE_URL}?status=Build+42+passed"

    def test_transmitted_status_decodes_to_truncated_message(self, twitter_input):
        message = "Deploy " + "ok & done? " * 20
        config = TwitterConfig.from_inputs({**twitter_input, "message": message})

        assert _status(build_url(config)) == message.strip()[:MAXIMUM_MESSAGE_LENGTH]


class TestTwitterNotifier:
    def test_posts_with_basic_auth(self, transport_deps, twitter_input):
        deps, transport = transport_deps(200, "<status/>")
        config = TwitterConfig.from_inputs(twitter_input)

        outcome = twitter.notifier.execute(deps.http, config, log=deps.logger)

        assert outcome.ok
        assert outcome.description == "Twitter status updated to: 'Build 42 passed'"
        request = transport.last_request
        assert request.method == "POST"
        assert request.content == b""
        expected = base64.b64encode(b"buildbot:s3cret").decode()
        assert request.headers["authorization"] == f"Basic {expected}"
        assert _status(str(request.url)) == "Build 42 passed"

    def test_password_not_in_url(self, transport_deps, twitter_input):
        deps, transport = transport_deps(200)
        config = TwitterConfig.from_inputs(twitter_input)

        twitter.notifier.execute(deps.http, config, log=deps.logger)

        assert "s3cret" not in str(transport.last_request.url)

    def test_not_modified_is_a_warning(self, transport_deps, twitter_input, caplog):
        deps, _ = transport_deps(304)
        config = TwitterConfig.from_inputs(twitter_input)

        with caplog.at_level(logging.WARNING):
            outcome = twitter.notifier.execute(deps.http, config, log=deps.logger)

        assert not outcome.ok
        assert outcome.description == "Status hasn't changed since last update"
        assert "Update unsuccessful: Status hasn't changed since last update" in caplog.text

    def test_strict_unauthorised(self, transport_deps, twitter_input):
        deps, _ = transport_deps(401)
        config = TwitterConfig.from_inputs({**twitter_input, "strict": True})

        with pytest.raises(RemoteFailureError) as exc_info:
            twitter.notifier.execute(deps.http, config, log=deps.logger)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Your username and password did not authenticate"
