"""Single-shot HTTP transport for notifiers.

Provides a thin wrapper around httpx with:
- Typed response objects
- Transport failures mapped to TransportError
- The Expect header stripped from every outbound request
- Credential redaction for logged URLs
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Any

import httpx

from notifykit.errors import PreconditionError, TransportError

logger = logging.getLogger(__name__)

# Query parameters whose values never reach the logs
_SECRET_PARAMS = ("token", "password")
_SECRET_PARAM_RE = re.compile(r"(?P<key>(?:^|[?&])(?:%s)=)[^&]*" % "|".join(_SECRET_PARAMS))
_USERINFO_RE = re.compile(r"^(?P<scheme>[a-z][a-z0-9+.-]*://)[^/@]+@", re.IGNORECASE)


@dataclass(frozen=True)
class HTTPResponse:
    """Structured HTTP response.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        body: Response body as string
        headers: Response headers as dict
        elapsed_ms: Request duration in milliseconds
    """

    status_code: int
    body: str
    headers: dict[str, str]
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """True if response has 2xx status code."""
        return 200 <= self.status_code < 300


def require_http(client: httpx.Client | None) -> httpx.Client:
    """Check that a usable HTTP client is available.

    Raises:
        PreconditionError: If there is no client or it has been closed.
    """
    if client is None:
        raise PreconditionError("Cannot send notification: no HTTP client is available")
    if client.is_closed:
        raise PreconditionError("Cannot send notification: the HTTP client has been closed")
    return client


def send(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    content: bytes | str | None = None,
    auth: tuple[str, str] | None = None,
) -> HTTPResponse:
    """Send exactly one HTTP request.

    Args:
        client: httpx.Client instance (from deps.http)
        method: HTTP method (GET or POST)
        url: Target URL, query string included
        headers: Optional request headers
        content: Optional raw request body
        auth: Optional (username, password) for basic auth

    Returns:
        HTTPResponse with status and body

    Raises:
        TransportError: If the request did not complete
    """
    method = method.upper()
    log_url = redact_url(url)
    logger.debug(f"HTTP {method} {log_url}")

    request = client.build_request(method, url, headers=headers, content=content)
    # Some servers mishandle "Expect: 100-continue"
    request.headers.pop("Expect", None)

    send_kwargs: dict[str, Any] = {}
    if auth is not None:
        send_kwargs["auth"] = auth

    started = time.perf_counter()
    try:
        response = client.send(request, **send_kwargs)
    except httpx.RequestError as e:
        raise TransportError(
            f"Request failed: {e}",
            url=log_url,
            method=method,
            reason=type(e).__name__,
        ) from e

    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

    result = HTTPResponse(
        status_code=response.status_code,
        body=response.text,
        headers=dict(response.headers),
        elapsed_ms=elapsed_ms,
    )

    logger.debug(f"HTTP {method} {log_url} -> {result.status_code} in {elapsed_ms}ms")
    return result


def redact_url(url: str) -> str:
    """Redact credentials in URLs for logging.

    Hides userinfo and the values of token/password query params.
    """
    url = _USERINFO_RE.sub(r"\g<scheme>***@", url)
    return _SECRET_PARAM_RE.sub(r"\g<key>***", url)
