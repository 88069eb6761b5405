"""Core data types: task priority and the task record itself."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Priority(Enum):
    """Task priority with a circular ordering Low -> Medium -> High -> Low."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    def next(self) -> Priority:
        return _CYCLE[(_CYCLE.index(self) + 1) % len(_CYCLE)]

    def previous(self) -> Priority:
        return _CYCLE[(_CYCLE.index(self) - 1) % len(_CYCLE)]

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: str) -> Priority:
        """Parse a stored priority name, case-insensitively.

        Raises ValueError for anything that is not High, Medium or Low.
        """
        for member in cls:
            if member.value.lower() == str(raw).strip().lower():
                return member
        raise ValueError(f"Unknown priority: {raw!r}")


_CYCLE: tuple[Priority, ...] = (Priority.LOW, Priority.MEDIUM, Priority.HIGH)

# Display order for tiered grouping
DISPLAY_ORDER: tuple[Priority, ...] = (Priority.HIGH, Priority.MEDIUM, Priority.LOW)


@dataclass(frozen=True)
class Task:
    """A single tracked work item.

    Tasks are immutable; edits replace the whole record in the store.
    """

    name: str
    priority: Priority = Priority.LOW
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "task": self.name,
            "priority": self.priority.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        """Build a Task from its stored form.

        `priority` defaults to Low and `description` to an empty string.
        The older `explanation` key is accepted in place of `description`.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Task entry must be a mapping, got {type(data).__name__}")
        if "task" not in data:
            raise ValueError("Task entry is missing the 'task' field")
        raw_priority = data.get("priority")
        priority = Priority.LOW if raw_priority is None else Priority.parse(raw_priority)
        description = data.get("description", data.get("explanation", ""))
        return cls(
            name=str(data["task"]),
            priority=priority,
            description=str(description),
        )
