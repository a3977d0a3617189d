"""Unfuddle project messages.

POSTs an XML message document to a project's messages collection.
See http://unfuddle.com/docs/api/data_models#message for the format.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Any

from pydantic import Field, field_validator

from notifykit.notifier import (
    Notifier,
    NotifierConfig,
    OutboundRequest,
    ServiceProfile,
    response_table,
)

URL_TEMPLATE = "https://{subdomain}.{host}/api/v1/projects/{project_id}/messages"
DEFAULT_HOST = "unfuddle.com"

# Subdomains are a single DNS label, hosts two or more
_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
SUBDOMAIN_RE = re.compile(_LABEL)
HOST_RE = re.compile(rf"{_LABEL}(?:\.{_LABEL})+")

RESPONSE_MESSAGES = response_table(
    {
        400: "Bad request - you may have exceeded the rate limit",
        401: "Your username and password did not authenticate",
        404: "The Unfuddle URL is invalid",
        405: "The specified HTTP verb is not allowed",
        500: "There is a problem with the Unfuddle server",
        502: "Unfuddle is either down or being upgraded",
        503: "Unfuddle servers are overloaded and refusing request",
    }
)

PROFILE = ServiceProfile(
    name="Unfuddle",
    success_code=201,
    responses=RESPONSE_MESSAGES,
    success_message="New Unfuddle message posted: '{content}'",
    failure_prefix="New Unfuddle message unsuccessful",
)

XML_HEADERS = {
    "Accept": "application/xml",
    "Content-Type": "application/xml",
}


class UnfuddleConfig(NotifierConfig):
    """Configuration for a new project message.

    Attributes:
        subdomain: Account subdomain (<subdomain>.unfuddle.com).
        project_id: Numeric project id.
        username: Account username.
        password: Account password.
        title: Message title.
        body: Message body, may be empty.
        category_ids: Category ids, in the order they are sent.
        service_host: Host the subdomain lives under.
    """

    subdomain: str
    project_id: int
    username: str
    password: str
    title: str
    body: str = ""
    category_ids: list[int] = Field(default_factory=list)
    service_host: str = DEFAULT_HOST

    @field_validator("subdomain")
    @classmethod
    def _require_subdomain(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("You must specify a subdomain")
        if not SUBDOMAIN_RE.fullmatch(v):
            raise ValueError(f"You must specify a valid subdomain (currently '{v}')")
        return v

    @field_validator("service_host")
    @classmethod
    def _check_service_host(cls, v: str) -> str:
        v = v.strip()
        if not HOST_RE.fullmatch(v):
            raise ValueError(f"You must specify a valid service host (currently '{v}')")
        return v

    @field_validator("project_id")
    @classmethod
    def _require_project_id(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("You must specify a project id")
        return v

    @field_validator("username", "password")
    @classmethod
    def _require_credentials(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("You must specify an Unfuddle username and password")
        return v

    @field_validator("title")
    @classmethod
    def _require_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("You must specify a message title")
        return v

    @field_validator("category_ids", mode="before")
    @classmethod
    def _split_category_ids(cls, v: Any) -> Any:
        # Accept a single id or a comma-separated list as well as a list
        if v is None:
            return []
        if isinstance(v, int):
            return [v]
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v


def build_url(config: UnfuddleConfig) -> str:
    return URL_TEMPLATE.format(
        subdomain=config.subdomain,
        host=config.service_host,
        project_id=config.project_id,
    )


def build_body(config: UnfuddleConfig) -> str:
    """XML document for a new message.

    <message>
      <title>...</title>
      <body>...</body>
      <categories><category id="5"/>...</categories>
    </message>
    """
    message = ET.Element("message")
    ET.SubElement(message, "title").text = config.title
    ET.SubElement(message, "body").text = config.body

    if config.category_ids:
        categories = ET.SubElement(message, "categories")
        for category_id in config.category_ids:
            ET.SubElement(categories, "category", id=str(category_id))

    return ET.tostring(message, encoding="unicode")


def build_request(config: UnfuddleConfig) -> OutboundRequest:
    return OutboundRequest(
        method="POST",
        url=build_url(config),
        content=config.title,
        headers=dict(XML_HEADERS),
        body=build_body(config).encode("utf-8"),
        auth=(config.username, config.password),
    )


notifier: Notifier[UnfuddleConfig] = Notifier(PROFILE, build_request)
