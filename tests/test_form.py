"""Tests for form.py - add/edit form state and description scrolling."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from taskboard.form import (
    Arrow,
    Direction,
    Field,
    FormState,
    Viewport,
    max_scroll,
    scroll_to_cursor,
    wrap_lines,
)
from taskboard.models import Priority, Task


def description_form(text: str = "", width: int = 10, height: int = 2) -> FormState:
    form = FormState(viewport=Viewport(width, height), active_field=Field.DESCRIPTION)
    for char in text:
        form.input_char(char)
    return form


class TestDefaults:
    """Tests for a freshly created form."""

    def test_defaults(self) -> None:
        form = FormState()
        assert form.name == ""
        assert form.priority is Priority.MEDIUM
        assert form.description == ""
        assert form.active_field is Field.NAME
        assert form.description_scroll_offset == 0

    def test_zero_viewport_is_treated_as_one_cell(self) -> None:
        assert Viewport(0, -3) == Viewport(1, 1)


class TestCycleField:
    """Tests for cycle_field."""

    def test_forward_wraps(self) -> None:
        form = FormState()
        seen = []
        for _ in range(3):
            form.cycle_field(Direction.FORWARD)
            seen.append(form.active_field)
        assert seen == [Field.PRIORITY, Field.DESCRIPTION, Field.NAME]

    def test_backward_wraps(self) -> None:
        form = FormState()
        seen = []
        for _ in range(3):
            form.cycle_field(Direction.BACKWARD)
            seen.append(form.active_field)
        assert seen == [Field.DESCRIPTION, Field.PRIORITY, Field.NAME]


class TestInput:
    """Tests for input_char, backspace and arrow."""

    def test_chars_go_to_name(self) -> None:
        form = FormState()
        for char in "Ship it":
            form.input_char(char)
        assert form.name == "Ship it"
        assert form.description == ""

    def test_chars_go_to_description(self) -> None:
        form = description_form("notes")
        assert form.description == "notes"
        assert form.name == ""

    @pytest.mark.parametrize(
        ("char", "expected"),
        [("h", Priority.HIGH), ("H", Priority.HIGH), ("l", Priority.LOW), ("M", Priority.MEDIUM)],
    )
    def test_priority_letters_jump(self, char: str, expected: Priority) -> None:
        form = FormState(active_field=Field.PRIORITY, priority=Priority.LOW)
        form.input_char(char)
        assert form.priority is expected

    def test_other_chars_ignored_on_priority(self) -> None:
        form = FormState(active_field=Field.PRIORITY)
        form.input_char("x")
        assert form.priority is Priority.MEDIUM
        assert form.name == ""

    def test_backspace_on_text(self) -> None:
        form = FormState(name="ab")
        form.backspace()
        assert form.name == "a"
        form.backspace()
        form.backspace()
        assert form.name == ""

    def test_backspace_on_priority_moves_to_previous(self) -> None:
        form = FormState(active_field=Field.PRIORITY)
        form.backspace()
        assert form.priority is Priority.LOW
        form.backspace()
        assert form.priority is Priority.HIGH

    def test_arrows_cycle_priority(self) -> None:
        form = FormState(active_field=Field.PRIORITY)
        form.arrow(Arrow.UP)
        assert form.priority is Priority.HIGH
        form.arrow(Arrow.UP)
        assert form.priority is Priority.LOW
        form.arrow(Arrow.DOWN)
        assert form.priority is Priority.HIGH

    def test_arrows_ignored_on_name(self) -> None:
        form = FormState(name="x")
        form.arrow(Arrow.UP)
        assert form.priority is Priority.MEDIUM
        assert form.description_scroll_offset == 0


class TestScrolling:
    """Tests for description scroll arithmetic."""

    def test_max_scroll(self) -> None:
        assert max_scroll(0, Viewport(10, 2)) == 0
        assert max_scroll(25, Viewport(10, 2)) == 1
        assert max_scroll(50, Viewport(10, 2)) == 4

    def test_exact_multiple_puts_cursor_on_new_line(self) -> None:
        assert wrap_lines("x" * 20, 10) == ["x" * 10, "x" * 10, ""]
        assert max_scroll(20, Viewport(10, 2)) == 1

    def test_wrap_lines(self) -> None:
        assert wrap_lines("", 4) == [""]
        assert wrap_lines("abcdef", 4) == ["abcd", "ef"]

    def test_typing_follows_cursor(self) -> None:
        form = description_form("x" * 25)
        assert form.cursor_line == 2
        assert form.description_scroll_offset == 1
        assert form.visible_description() == ["x" * 10, "x" * 5]

    def test_backspace_scrolls_back(self) -> None:
        form = description_form("x" * 25)
        for _ in range(10):
            form.backspace()
        assert form.description == "x" * 15
        assert form.description_scroll_offset == 0

    def test_arrows_scroll_within_bounds(self) -> None:
        form = description_form("x" * 35)
        assert form.description_scroll_offset == 2
        form.arrow(Arrow.DOWN)
        assert form.description_scroll_offset == 2
        form.arrow(Arrow.UP)
        form.arrow(Arrow.UP)
        form.arrow(Arrow.UP)
        assert form.description_scroll_offset == 0
        form.arrow(Arrow.DOWN)
        assert form.description_scroll_offset == 1

    def test_resize_reclamps(self) -> None:
        form = description_form("x" * 25)
        assert form.resize(Viewport(30, 2)) is True
        assert form.description_scroll_offset == 0
        assert form.resize(Viewport(30, 2)) is False

    def test_scroll_is_idempotent(self) -> None:
        viewport = Viewport(7, 3)
        once = scroll_to_cursor(40, viewport, 0)
        assert scroll_to_cursor(40, viewport, once) == once

    @pytest.mark.parametrize("width", [1, 3, 10])
    @pytest.mark.parametrize("height", [1, 2, 4])
    @pytest.mark.parametrize("start", [0, 3, 100])
    def test_cursor_always_visible(self, width: int, height: int, start: int) -> None:
        viewport = Viewport(width, height)
        for length in range(0, 45):
            offset = scroll_to_cursor(length, viewport, start)
            line = length // width
            assert 0 <= offset <= max_scroll(length, viewport)
            assert offset <= line < offset + height


class TestCommit:
    """Tests for is_valid, to_task and from_task."""

    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    def test_blank_names_are_invalid(self, name: str) -> None:
        assert not FormState(name=name).is_valid()

    def test_non_blank_name_is_valid(self) -> None:
        assert FormState(name="x").is_valid()

    def test_to_task(self) -> None:
        form = FormState(name="Ship", priority=Priority.HIGH, description="now")
        assert form.to_task() == Task("Ship", Priority.HIGH, "now")
        assert form.name == "Ship"

    def test_from_task_round_trip(self) -> None:
        task = Task("Review", Priority.LOW, "x" * 50)
        form = FormState.from_task(task, Viewport(10, 2))
        assert form.active_field is Field.NAME
        assert form.to_task() == task

    def test_from_task_scrolls_to_end_of_description(self) -> None:
        form = FormState.from_task(Task("R", Priority.LOW, "x" * 50), Viewport(10, 2))
        assert form.description_scroll_offset == 4
