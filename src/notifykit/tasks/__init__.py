"""Task implementations - imported to register tasks."""

from notifykit.tasks import (
    nabaztag_build_status,
    nabaztag_notify,
    twitter_update,
    unfuddle_message,
)

__all__ = [
    "nabaztag_build_status",
    "nabaztag_notify",
    "twitter_update",
    "unfuddle_message",
]
