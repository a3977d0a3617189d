"""Nabaztag rabbit notifications.

Sends a single GET to the Nabaztag API with every configured option in the
query string. See http://doc.nabaztag.com/api/home.html for the API.

Query parameters are always emitted in the same order: identity first
(sn, token), then ears, posleft, posright, tts, idmessage, voice, chor,
chortitle, urlList - each only when set.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any
from urllib.parse import urlencode

from pydantic import ValidationInfo, field_validator, model_validator

from notifykit.clients.http import HTTPResponse
from notifykit.encoding import normalize_message
from notifykit.notifier import (
    Notifier,
    NotifierConfig,
    OutboundRequest,
    ServiceProfile,
    response_table,
)

logger = logging.getLogger(__name__)

BASE_URL = "http://api.nabaztag.com/vl/FR/api.jsp"

EAR_POSITION_MIN = 0
EAR_POSITION_MAX = 16

RESPONSE_MESSAGES = response_table(
    {
        400: "Bad request - the Nabaztag API rejected the parameters",
        401: "Your serial number and token did not authenticate",
        403: "Forbidden request - Nabaztag are refusing to honour the request",
        404: "The Nabaztag URL is invalid",
        500: "There is a problem with the Nabaztag server",
        502: "Nabaztag is either down or being upgraded",
        503: "Nabaztag servers are overloaded and refusing request",
    }
)

PROFILE = ServiceProfile(
    name="Nabaztag",
    success_code=200,
    responses=RESPONSE_MESSAGES,
    success_message="Nabaztag event sent: '{content}'",
)


class BuildStatus(str, Enum):
    """Standard build outcomes announced by the rabbit."""

    SUCCESS = "success"
    FAILURE = "failure"
    RECOVERY = "recovery"


BUILD_STATUS_MESSAGES = {
    BuildStatus.SUCCESS: "The build was successful",
    BuildStatus.FAILURE: "The build has failed",
    BuildStatus.RECOVERY: "The build has been recovered",
}


class NabaztagConfig(NotifierConfig):
    """Configuration for a Nabaztag event.

    Attributes:
        serial_number: Rabbit serial number (from my.nabaztag.com preferences).
        token: API token (from my.nabaztag.com preferences).
        left_ear_position: 0-16, None when the ear should not move.
        right_ear_position: 0-16, None when the ear should not move.
        message: Text to speak, stored normalized.
        message_id: Id of a stored message to play.
        voice: Voice name, e.g. UK-Edwin or US-Billye.
        choreography: Sequence of "<time>,motor,<ear>,<angle>,0,<direction>"
            or "<time>,led,<led>,<rgbcolour>" steps (time in 100ms units).
        choreography_title: Title for the choreography.
        url_list: Audio stream URLs.
        api_url: API endpoint.
    """

    serial_number: str
    token: str
    left_ear_position: int | None = None
    right_ear_position: int | None = None
    message: str | None = None
    message_id: int | None = None
    voice: str | None = None
    choreography: str | None = None
    choreography_title: str | None = None
    url_list: str | None = None
    api_url: str = BASE_URL

    @field_validator("serial_number", "token")
    @classmethod
    def _require_identity(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError(
                "You must specify a Nabaztag serial number and token - these can be "
                "found in the preferences section of my.nabaztag.com"
            )
        return v.strip()

    @field_validator("left_ear_position", "right_ear_position")
    @classmethod
    def _check_ear_position(cls, v: int | None, info: ValidationInfo) -> int | None:
        if v is None:
            return v
        if not EAR_POSITION_MIN <= v <= EAR_POSITION_MAX:
            side = "left" if info.field_name == "left_ear_position" else "right"
            raise ValueError(
                f"The {side} ear position must be between {EAR_POSITION_MIN} and "
                f"{EAR_POSITION_MAX} (currently {v})"
            )
        return v

    @field_validator("message")
    @classmethod
    def _normalize_message(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return normalize_message(v.strip())

    @field_validator("voice")
    @classmethod
    def _strip_voice(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v


class NabaztagBuildStatusConfig(NabaztagConfig):
    """Nabaztag event whose message is derived from a build status."""

    status: BuildStatus

    @field_validator("status", mode="before")
    @classmethod
    def _check_status(cls, v: Any) -> Any:
        valid = [s.value for s in BuildStatus]
        if isinstance(v, str) and v.strip().lower() in valid:
            return v.strip().lower()
        raise ValueError(f"Invalid status specified ({v}), expected one of: {', '.join(valid)}")

    @model_validator(mode="before")
    @classmethod
    def _message_from_status(cls, data: Any) -> Any:
        # The status always overrides any configured message
        if isinstance(data, dict):
            status = str(data.get("status", "")).strip().lower()
            if status in BUILD_STATUS_MESSAGES:
                data = {**data, "message": BUILD_STATUS_MESSAGES[BuildStatus(status)]}
        return data


def query_params(config: NabaztagConfig) -> list[tuple[str, str]]:
    """Query parameters for a Nabaztag event, in wire order."""
    params: list[tuple[str, str]] = [
        ("sn", config.serial_number),
        ("token", config.token),
    ]

    # Ear positions
    left_set = config.left_ear_position is not None
    right_set = config.right_ear_position is not None
    if left_set or right_set:
        params.append(("ears", "ok"))
        if left_set:
            params.append(("posleft", str(config.left_ear_position)))
        if right_set:
            params.append(("posright", str(config.right_ear_position)))

    # Message and voice data
    if config.message is not None:
        params.append(("tts", config.message))
    if config.message_id is not None:
        params.append(("idmessage", str(config.message_id)))
    if config.voice is not None:
        params.append(("voice", config.voice))

    # Choreography
    if config.choreography is not None:
        params.append(("chor", config.choreography))
    if config.choreography_title is not None:
        params.append(("chortitle", config.choreography_title))

    # URLs for streaming audio
    if config.url_list is not None:
        params.append(("urlList", config.url_list))

    return params


def build_url(config: NabaztagConfig) -> str:
    """Full GET URL for a Nabaztag event."""
    return f"{config.api_url}?{urlencode(query_params(config))}"


def build_request(config: NabaztagConfig) -> OutboundRequest:
    return OutboundRequest(
        method="GET",
        url=build_url(config),
        content=config.message or "",
    )


def parse_response(response: HTTPResponse) -> str | None:
    """Extract "<message>: <comment>" from a Nabaztag XML answer.

    Returns None when the body has no message or is not XML.
    """
    if not response.body.strip():
        return None
    try:
        root = ET.fromstring(response.body)
    except ET.ParseError:
        logger.debug("Nabaztag response body is not XML, ignoring")
        return None

    message = (root.findtext("message") or "").strip()
    comment = (root.findtext("comment") or "").strip()
    if not message:
        return None
    return f"{message}: {comment}"


notifier: Notifier[NabaztagConfig] = Notifier(PROFILE, build_request, parse_response)
