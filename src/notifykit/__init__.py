"""notifykit: Build-outcome notifications for Nabaztag, Twitter and Unfuddle."""

__version__ = "0.1.0"

from notifykit.deps import Deps, NotifykitEnv, build_deps
from notifykit.encoding import encode_message, normalize_message
from notifykit.errors import (
    ConfigError,
    NotifyError,
    PreconditionError,
    RemoteFailureError,
    TransportError,
)
from notifykit.notifier import (
    Notifier,
    NotifierConfig,
    Outcome,
    OutcomeLevel,
    ServiceProfile,
    classify,
)
from notifykit.registry import TaskDef, get_task, list_tasks, load_tasks
from notifykit.runner import run_task

__all__ = [
    # Core
    "Deps",
    "NotifykitEnv",
    "TaskDef",
    "build_deps",
    "get_task",
    "list_tasks",
    "load_tasks",
    "run_task",
    # Notifier contract
    "Notifier",
    "NotifierConfig",
    "Outcome",
    "OutcomeLevel",
    "ServiceProfile",
    "classify",
    # Message encoding
    "encode_message",
    "normalize_message",
    # Errors
    "ConfigError",
    "NotifyError",
    "PreconditionError",
    "RemoteFailureError",
    "TransportError",
]
