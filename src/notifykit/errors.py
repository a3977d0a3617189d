"""Typed exceptions for notifykit.

All notification errors inherit from NotifyError. Precondition,
configuration and transport errors are always fatal; RemoteFailureError
is only raised when a notifier runs in strict mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import ValidationError


class NotifyError(Exception):
    """Base exception for all notification errors."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class PreconditionError(NotifyError):
    """The runtime cannot make HTTP requests at all."""


class ConfigError(NotifyError):
    """A configuration field is missing or invalid."""

    def __init__(self, message: str, *, field: str | None = None, value: Any = None):
        context: dict[str, Any] = {}
        if field:
            context["field"] = field
        if value is not None:
            # Truncate long values for readability
            str_val = str(value)
            context["value"] = str_val[:100] + "..." if len(str_val) > 100 else str_val
        super().__init__(message, context=context)
        self.field = field
        self.value = value

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> ConfigError:
        """Convert the first pydantic error into a ConfigError."""
        first = error.errors()[0]
        field = ".".join(str(p) for p in first["loc"]) or None

        if first["type"] == "missing":
            return cls(f"You must specify {field}", field=field)

        ctx = first.get("ctx") or {}
        if "error" in ctx:
            # Raised from one of our validators, keep its wording
            message = str(ctx["error"])
        else:
            message = f"Invalid value for {field}: {first['msg']}"
        return cls(message, field=field, value=first.get("input"))


class TransportError(NotifyError):
    """The request never completed (connection, DNS, TLS, timeout)."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        method: str = "GET",
        reason: str | None = None,
    ):
        context = {"url": url, "method": method, "reason": reason}
        super().__init__(message, context={k: v for k, v in context.items() if v is not None})
        self.url = url
        self.method = method
        self.reason = reason


class RemoteFailureError(NotifyError):
    """The remote service answered with a non-success status in strict mode."""

    def __init__(
        self,
        message: str,
        *,
        service: str | None = None,
        status_code: int | None = None,
    ):
        context = {"service": service, "status_code": status_code}
        super().__init__(message, context={k: v for k, v in context.items() if v is not None})
        self.service = service
        self.status_code = status_code
