"""Twitter status updates.

POSTs the status in the query string with basic auth. Messages longer
than 140 characters are truncated (with a warning) rather than rejected.
"""

from __future__ import annotations

import logging

from pydantic import field_validator

from notifykit.encoding import normalize_message, quote_message
from notifykit.notifier import (
    Notifier,
    NotifierConfig,
    OutboundRequest,
    ServiceProfile,
    response_table,
)

logger = logging.getLogger(__name__)

BASE_URL = "http://twitter.com/statuses/update.xml"
MAXIMUM_MESSAGE_LENGTH = 140

# See http://apiwiki.twitter.com/REST+API+Documentation#HTTPStatusCodes
RESPONSE_MESSAGES = response_table(
    {
        304: "Status hasn't changed since last update",
        400: "Bad request - you may have exceeded the rate limit",
        401: "Your username and password did not authenticate",
        403: "Forbidden request - Twitter are refusing to honour the request",
        404: "The Twitter URL is invalid",
        500: "There is a problem with the Twitter server",
        502: "Twitter is either down or being upgraded",
        503: "Twitter servers are overloaded and refusing request",
    }
)

PROFILE = ServiceProfile(
    name="Twitter",
    success_code=200,
    responses=RESPONSE_MESSAGES,
    success_message="Twitter status updated to: '{content}'",
)


class TwitterConfig(NotifierConfig):
    """Configuration for a status update.

    The message is stored normalized and already truncated, so the
    transmitted text decodes to exactly ``message``.
    """

    username: str
    password: str
    message: str
    api_url: str = BASE_URL

    @field_validator("username", "password")
    @classmethod
    def _require_credentials(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("You must specify a Twitter username and password")
        return v

    @field_validator("message")
    @classmethod
    def _prepare_message(cls, v: str) -> str:
        message = normalize_message(v.strip())
        if not message:
            raise ValueError("You must specify a message")
        if len(message) > MAXIMUM_MESSAGE_LENGTH:
            logger.warning("Message is greater than the maximum message length - truncating...")
            message = message[:MAXIMUM_MESSAGE_LENGTH]
        return message


def build_url(config: TwitterConfig) -> str:
    """Status update URL with the encoded message."""
    return f"{config.api_url}?status={quote_message(config.message)}"


def build_request(config: TwitterConfig) -> OutboundRequest:
    return OutboundRequest(
        method="POST",
        url=build_url(config),
        content=config.message,
        body=b"",
        auth=(config.username, config.password),
    )


notifier: Notifier[TwitterConfig] = Notifier(PROFILE, build_request)
