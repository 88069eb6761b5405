"""
In-memory task collection and selection cursor.

Pure data mutation; no I/O. The session controller is the only owner.

Selection policy:
- Moving clamps at both ends (no wrap-around).
- From no selection, next selects the first row, previous the last.
- Removing the selected task clears the selection.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator

from taskboard.models import DISPLAY_ORDER, Task


class TaskStore:
    """Ordered task list plus an optional selected index."""

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = list(tasks)
        self._selection: int | None = None

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Snapshot of the current tasks in storage order."""
        return tuple(self._tasks)

    @property
    def selection(self) -> int | None:
        return self._selection

    def selected_task(self) -> Task | None:
        if self._selection is None:
            return None
        return self._tasks[self._selection]

    def select_next(self) -> None:
        if not self._tasks:
            return
        if self._selection is None:
            self._selection = 0
        else:
            self._selection = min(self._selection + 1, len(self._tasks) - 1)

    def select_previous(self) -> None:
        if not self._tasks:
            return
        if self._selection is None:
            self._selection = len(self._tasks) - 1
        else:
            self._selection = max(self._selection - 1, 0)

    def remove_selected(self) -> Task | None:
        """Remove the selected task and clear the selection.

        Returns the removed task, or None when nothing was selected.
        """
        if self._selection is None:
            return None
        removed = self._tasks.pop(self._selection)
        self._selection = None
        return removed

    def insert(self, task: Task) -> None:
        """Append a task; existing indices (and the selection) stay valid."""
        self._tasks.append(task)

    def replace(self, index: int, task: Task) -> None:
        if not 0 <= index < len(self._tasks):
            raise IndexError(f"Task index {index} out of range for {len(self._tasks)} tasks")
        self._tasks[index] = task

    def grouped_view(
        self, predicate: Callable[[Task], bool] | None = None
    ) -> Iterator[Task]:
        """Yield tasks grouped High, Medium, Low.

        Within a tier the storage order is preserved. Nothing is copied
        or mutated; the optional predicate filters tasks out of the view.
        """
        for priority in DISPLAY_ORDER:
            for task in self._tasks:
                if task.priority is not priority:
                    continue
                if predicate is not None and not predicate(task):
                    continue
                yield task

    def to_dict(self) -> dict:
        return {"tasks": [task.to_dict() for task in self._tasks]}

    @classmethod
    def from_dict(cls, data: dict) -> TaskStore:
        """Build a store from the persisted document.

        Raises ValueError (or TypeError) for malformed documents.
        """
        if not isinstance(data, dict):
            raise ValueError("Task document must be a mapping")
        entries = data.get("tasks", [])
        if not isinstance(entries, list):
            raise ValueError("'tasks' must be a list")
        return cls(Task.from_dict(entry) for entry in entries)
