"""Message text normalization and URL encoding.

Messages often arrive already escaped (percent-encoded by a build property,
or with backslash escapes from a shell). Encoding always starts from the
normalized text, so encoding an already encoded message is a no-op:

    encode_message(encode_message(m)) == encode_message(m)
"""

from __future__ import annotations

from urllib.parse import quote_plus, unquote_plus


def normalize_message(text: str) -> str:
    """Undo percent-encoding and strip backslash escapes."""
    return unquote_plus(text).replace("\\", "")


def quote_message(normalized: str) -> str:
    """Percent-encode normalized text (spaces become '+')."""
    return quote_plus(normalized, safe="")


def encode_message(text: str) -> str:
    """Normalize then percent-encode a message for a query string."""
    return quote_message(normalize_message(text))
