"""
Transient state of an in-progress add/edit form.

The description box is a fixed-size window onto hard-wrapped text. The
text is wrapped every `viewport.width` characters and the cursor sits
just after the last character, so it lives on line `len // width`.
That line always exists in the layout, which is why the line count is
`len // width + 1` rather than `ceil(len / width)`: at an exact multiple
of the width the cursor has already wrapped onto a fresh, empty line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from taskboard.models import Priority, Task

# Default form priority (stored tasks without one load as Low)
DEFAULT_PRIORITY = Priority.MEDIUM

PRIORITY_KEYS = {
    "h": Priority.HIGH,
    "m": Priority.MEDIUM,
    "l": Priority.LOW,
}


class Field(Enum):
    NAME = "name"
    PRIORITY = "priority"
    DESCRIPTION = "description"


_FIELD_CYCLE: tuple[Field, ...] = (Field.NAME, Field.PRIORITY, Field.DESCRIPTION)


class Direction(Enum):
    FORWARD = 1
    BACKWARD = -1


class Arrow(Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class Viewport:
    """Inner size of the description box, in cells."""

    width: int = 40
    height: int = 1

    def __post_init__(self) -> None:
        # Zero-sized boxes happen mid-resize; treat them as a single cell.
        object.__setattr__(self, "width", max(1, int(self.width)))
        object.__setattr__(self, "height", max(1, int(self.height)))


def cursor_line(length: int, viewport: Viewport) -> int:
    return length // viewport.width


def line_count(length: int, viewport: Viewport) -> int:
    return cursor_line(length, viewport) + 1


def max_scroll(length: int, viewport: Viewport) -> int:
    return max(0, line_count(length, viewport) - viewport.height)


def scroll_to_cursor(length: int, viewport: Viewport, offset: int) -> int:
    """Return the offset that keeps the cursor line visible.

    Pure function of (length, viewport, offset); applying it twice gives
    the same result as applying it once.
    """
    line = cursor_line(length, viewport)
    if line < offset:
        offset = line
    elif line >= offset + viewport.height:
        offset = line - viewport.height + 1
    return max(0, min(offset, max_scroll(length, viewport)))


def wrap_lines(text: str, width: int) -> list[str]:
    """Hard-wrap text every `width` characters, including the cursor line."""
    width = max(1, width)
    lines = [text[i:i + width] for i in range(0, len(text), width)]
    if len(text) % width == 0:
        lines.append("")
    return lines


@dataclass
class FormState:
    name: str = ""
    priority: Priority = DEFAULT_PRIORITY
    description: str = ""
    active_field: Field = Field.NAME
    description_scroll_offset: int = 0
    viewport: Viewport = field(default_factory=Viewport)

    @classmethod
    def from_task(cls, task: Task, viewport: Viewport | None = None) -> FormState:
        """Pre-populate a form from an existing task (Edit entry)."""
        form = cls(
            name=task.name,
            priority=task.priority,
            description=task.description,
            viewport=viewport or Viewport(),
        )
        form.auto_scroll_to_cursor()
        return form

    def cycle_field(self, direction: Direction = Direction.FORWARD) -> None:
        index = _FIELD_CYCLE.index(self.active_field)
        self.active_field = _FIELD_CYCLE[(index + direction.value) % len(_FIELD_CYCLE)]

    def input_char(self, char: str) -> None:
        if self.active_field is Field.NAME:
            self.name += char
        elif self.active_field is Field.DESCRIPTION:
            self.description += char
            self.auto_scroll_to_cursor()
        elif self.active_field is Field.PRIORITY:
            # Direct jump; anything but h/m/l is ignored
            selected = PRIORITY_KEYS.get(char.lower())
            if selected is not None:
                self.priority = selected
        else:
            raise AssertionError(f"Unhandled field: {self.active_field}")

    def backspace(self) -> None:
        if self.active_field is Field.NAME:
            self.name = self.name[:-1]
        elif self.active_field is Field.DESCRIPTION:
            self.description = self.description[:-1]
            self.auto_scroll_to_cursor()
        elif self.active_field is Field.PRIORITY:
            self.priority = self.priority.previous()
        else:
            raise AssertionError(f"Unhandled field: {self.active_field}")

    def arrow(self, arrow: Arrow) -> None:
        """Up/Down: cycle priority, or scroll the description one line."""
        if self.active_field is Field.PRIORITY:
            if arrow is Arrow.UP:
                self.priority = self.priority.next()
            else:
                self.priority = self.priority.previous()
        elif self.active_field is Field.DESCRIPTION:
            step = -1 if arrow is Arrow.UP else 1
            limit = max_scroll(len(self.description), self.viewport)
            self.description_scroll_offset = max(
                0, min(self.description_scroll_offset + step, limit)
            )

    def auto_scroll_to_cursor(self) -> None:
        self.description_scroll_offset = scroll_to_cursor(
            len(self.description), self.viewport, self.description_scroll_offset
        )

    def resize(self, viewport: Viewport) -> bool:
        """Apply a new viewport; returns True if anything changed."""
        if viewport == self.viewport:
            return False
        self.viewport = viewport
        self.auto_scroll_to_cursor()
        return True

    @property
    def max_scroll(self) -> int:
        return max_scroll(len(self.description), self.viewport)

    @property
    def cursor_line(self) -> int:
        return cursor_line(len(self.description), self.viewport)

    def visible_description(self) -> list[str]:
        """Lines of the description currently inside the viewport."""
        lines = wrap_lines(self.description, self.viewport.width)
        start = self.description_scroll_offset
        return lines[start:start + self.viewport.height]

    def is_valid(self) -> bool:
        return bool(self.name.strip())

    def to_task(self) -> Task:
        return Task(name=self.name, priority=self.priority, description=self.description)
