"""Registry of notification tasks, keyed by task name."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from notifykit.deps import Deps

# run(inputs, deps) -> output document
TaskRunFn = Callable[[dict[str, Any], "Deps"], dict[str, Any]]


@dataclass(frozen=True)
class TaskDef:
    """A runnable notification task.

    Attributes:
        name: Unique task name, e.g. "twitter_update".
        service: Display name of the notified service.
        description: One line shown by ``notifykit list``.
        input_schema: Input schema path, relative to the schemas root.
        output_schema: Output schema path, relative to the schemas root.
        run: Task function.
    """

    name: str
    service: str
    description: str
    input_schema: str
    output_schema: str
    run: TaskRunFn


class TaskNotFoundError(LookupError):
    """No task is registered under the requested name."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(f"Unknown task '{name}'. Available tasks: {', '.join(available)}")
        self.name = name
        self.available = available


_REGISTRY: dict[str, TaskDef] = {}


def register_task(task: TaskDef) -> TaskDef:
    """Add a task; task modules call this at import time.

    Raises:
        ValueError: On a duplicate name.
    """
    if task.name in _REGISTRY:
        raise ValueError(f"Duplicate task name: {task.name}")
    _REGISTRY[task.name] = task
    return task


def get_task(name: str) -> TaskDef:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise TaskNotFoundError(name, sorted(_REGISTRY)) from None


def list_tasks(service: str | None = None) -> list[TaskDef]:
    """Registered tasks sorted by name, optionally for one service only."""
    tasks = sorted(_REGISTRY.values(), key=lambda t: t.name)
    if service is None:
        return tasks
    return [t for t in tasks if t.service.lower() == service.lower()]


def load_tasks(service: str | None = None) -> list[TaskDef]:
    """Import the bundled task modules so they register, then list them."""
    import notifykit.tasks  # noqa: F401

    return list_tasks(service)
