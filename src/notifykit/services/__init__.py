"""Notification services.

Each module holds a service's configuration model, its response-code
table, its request builder, and a ready-made ``notifier``.
"""

from notifykit.services import nabaztag, twitter, unfuddle

__all__ = ["nabaztag", "twitter", "unfuddle"]
