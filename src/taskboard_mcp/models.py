"""Project and task entities plus request payload parsing."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class InvalidInputError(ValueError):
    """Raised when a payload cannot be bound to the expected entity shape."""


class NotFound(Enum):
    """Which entity a lookup failed on."""

    PROJECT = "project"
    TASK = "task"


@dataclass(slots=True)
class Task:
    id: int
    title: str
    status: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "status": self.status}

    @classmethod
    def from_dict(cls, data: Any, *, default_id: int = 0) -> "Task":
        """Bind a mapping to a Task.

        Missing title/status become empty strings. A missing id falls back to
        ``default_id`` (0 means "allocate one").
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(f"task must be an object, got {type(data).__name__}")
        task_id = data.get("id", default_id)
        if task_id is None:
            task_id = default_id
        # bool is an int subclass
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise InvalidInputError(f"task id must be an integer, got {task_id!r}")
        if task_id < 0:
            raise InvalidInputError(f"task id must not be negative, got {task_id}")
        return cls(
            id=task_id,
            title=_text(data, "title"),
            status=_text(data, "status"),
        )


@dataclass(slots=True)
class Project:
    id: int
    title: str
    tasks: list[Task] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "tasks": [task.to_dict() for task in self.tasks],
        }


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidInputError(f"task {key} must be a string, got {type(value).__name__}")
    return value


def parse_tasks(items: Any) -> list[Task]:
    """Parse a list of task payloads. ``None`` is an empty task list."""
    if items is None:
        return []
    if isinstance(items, (str, bytes)) or not isinstance(items, list):
        raise InvalidInputError(f"tasks must be a list, got {type(items).__name__}")
    return [Task.from_dict(item) for item in items]
