"""Shared client modules for notifykit.

These provide the single-request HTTP transport
that every notifier composes into its logic.
"""

from notifykit.clients.http import HTTPResponse, redact_url, require_http, send

__all__ = ["HTTPResponse", "redact_url", "require_http", "send"]
