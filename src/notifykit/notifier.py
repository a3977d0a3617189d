"""Shared request/response contract for every notification service.

A Notifier sends exactly one request and classifies the status code:

- the service's success code is a success
- any other code is looked up in the service's response-code table
  (falling back to an "unrecognised code" description)
- the outcome policy (``strict``) decides whether a failure is fatal
  (RemoteFailureError) or only logged as a warning

Transport failures are always fatal and are raised by the HTTP client
before classification happens.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from notifykit.clients.http import HTTPResponse, redact_url, send
from notifykit.errors import ConfigError, RemoteFailureError

logger = logging.getLogger(__name__)

# Type alias for status code -> friendly description tables
ResponseCodeTable = Mapping[int, str]


def response_table(entries: dict[int, str]) -> ResponseCodeTable:
    """Freeze a response-code table."""
    return MappingProxyType(dict(entries))


class NotifierConfig(BaseModel):
    """Fields shared by every service configuration.

    Attributes:
        strict: Raise on a failed notification instead of logging a warning.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strict: bool = False

    @classmethod
    def from_inputs(cls: type[ConfigT], inputs: Mapping[str, Any]) -> ConfigT:
        """Build a validated configuration from task inputs.

        Raises:
            ConfigError: If a field is missing or invalid.
        """
        try:
            return cls.model_validate(dict(inputs))
        except ValidationError as e:
            raise ConfigError.from_validation_error(e) from None


ConfigT = TypeVar("ConfigT", bound=NotifierConfig)


class OutcomeLevel(str, Enum):
    """How a completed request turned out."""

    SUCCESS = "success"
    WARNING = "warning"
    FATAL = "fatal"


@dataclass(frozen=True)
class ServiceProfile:
    """Static description of a remote service.

    Attributes:
        name: Display name used in log and error messages.
        success_code: The only status code treated as success.
        responses: Friendly descriptions of known failure codes.
        success_message: Template for the confirmation log, formatted with
            ``content`` (the submitted text).
        failure_prefix: Prefix for the warning logged in lenient mode.
    """

    name: str
    success_code: int
    responses: ResponseCodeTable
    success_message: str = "{content}"
    failure_prefix: str = "Update unsuccessful"

    def describe(self, status_code: int) -> str:
        """Friendly description of a non-success status code."""
        if status_code in self.responses:
            return self.responses[status_code]
        return f"Unrecognised HTTP response code '{status_code}' from {self.name}"


@dataclass(frozen=True)
class OutboundRequest:
    """Everything needed to send one notification.

    Attributes:
        method: HTTP method.
        url: Full target URL including any query string.
        content: Submitted text, used in the confirmation log.
        headers: Extra request headers.
        body: Raw request body.
        auth: Basic auth credentials.
    """

    method: str
    url: str
    content: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | str | None = None
    auth: tuple[str, str] | None = None


@dataclass(frozen=True)
class Outcome:
    """Classified result of a completed request.

    Attributes:
        service: Service display name.
        level: success, warning, or fatal.
        status_code: HTTP status code received.
        description: Confirmation or failure description.
        request_url: Target URL with credentials redacted.
        response_detail: Informational text parsed from the response body.
    """

    service: str
    level: OutcomeLevel
    status_code: int
    description: str
    request_url: str
    response_detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.level is OutcomeLevel.SUCCESS

    @property
    def fatal(self) -> bool:
        return self.level is OutcomeLevel.FATAL


def classify(
    profile: ServiceProfile,
    status_code: int,
    *,
    strict: bool,
    content: str = "",
    request_url: str = "",
    response_detail: str | None = None,
) -> Outcome:
    """Classify a status code and apply the outcome policy.

    Args:
        profile: The service being notified.
        status_code: HTTP status code received.
        strict: Whether failures are fatal.
        content: Submitted text, for the confirmation message.
        request_url: Redacted URL, carried on the outcome.
        response_detail: Informational response text, carried on the outcome.

    Returns:
        The classified outcome. A fatal outcome is returned, not raised.
    """
    if status_code == profile.success_code:
        level = OutcomeLevel.SUCCESS
        description = profile.success_message.format(content=content)
    else:
        level = OutcomeLevel.FATAL if strict else OutcomeLevel.WARNING
        description = profile.describe(status_code)

    return Outcome(
        service=profile.name,
        level=level,
        status_code=status_code,
        description=description,
        request_url=request_url,
        response_detail=response_detail,
    )


class Notifier(Generic[ConfigT]):
    """Send one notification to a service and classify the answer.

    Args:
        profile: Static service description.
        build_request: Turns a validated configuration into a request.
        inspect_response: Optional hook extracting informational text from
            a response body. Its result never changes the outcome.
    """

    def __init__(
        self,
        profile: ServiceProfile,
        build_request: Callable[[ConfigT], OutboundRequest],
        inspect_response: Callable[[HTTPResponse], str | None] | None = None,
    ) -> None:
        self.profile = profile
        self.build_request = build_request
        self.inspect_response = inspect_response

    def execute(
        self,
        client: httpx.Client,
        config: ConfigT,
        *,
        log: logging.Logger | None = None,
    ) -> Outcome:
        """Send the notification described by ``config``.

        Raises:
            TransportError: If the request did not complete.
            RemoteFailureError: If the service reported a failure and
                ``config.strict`` is set.
        """
        log = log or logger
        outbound = self.build_request(config)
        log_url = redact_url(outbound.url)
        log.info(f"Sending {self.profile.name} request to {log_url}")

        response = send(
            client,
            outbound.method,
            outbound.url,
            headers=outbound.headers,
            content=outbound.body,
            auth=outbound.auth,
        )

        detail = self.inspect_response(response) if self.inspect_response else None
        if detail:
            log.info(f"{self.profile.name} response: {detail}")

        outcome = classify(
            self.profile,
            response.status_code,
            strict=config.strict,
            content=outbound.content,
            request_url=log_url,
            response_detail=detail,
        )

        if outcome.ok:
            log.info(outcome.description)
        elif outcome.fatal:
            raise RemoteFailureError(
                outcome.description,
                service=self.profile.name,
                status_code=outcome.status_code,
            )
        else:
            log.warning(f"{self.profile.failure_prefix}: {outcome.description}")

        return outcome
