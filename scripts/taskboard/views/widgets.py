"""Panels for the board screen. Each one is redrawn from the view model."""

from __future__ import annotations

from rich.style import Style
from rich.table import Table
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from taskboard.config import Theme
from taskboard.form import Field, FormState
from taskboard.models import DISPLAY_ORDER, Task
from taskboard.session import ErrorOverlay, Screen, Severity

CURSOR = "█"
SELECTED_MARKER = ">"

FORM_TITLES = {
    Screen.ADDING: "Add New Task",
    Screen.EDITING: "Edit Task",
}

FORM_HELP = {
    Screen.ADDING: "Tab: Next field | h/m/l or ↑↓: Priority | Enter: Add task | Esc: Cancel",
    Screen.EDITING: "Tab: Next field | h/m/l or ↑↓: Priority | Enter: Save task | Esc: Cancel",
}

MAIN_HELP = "j/k: Move | A: Add | E: Edit | X: Delete | Esc/q: Quit"


class TaskTablePanel(Static):
    """All tasks in storage order; the selected row is marked and colored."""

    DEFAULT_CSS = """
    TaskTablePanel {
        height: 100%;
        border: round $primary;
        padding: 0 1;
    }
    """

    def __init__(self, theme: Theme, **kwargs) -> None:
        super().__init__(**kwargs)
        self._theme = theme
        self.border_title = "Tasks"

    def show(self, tasks: tuple[Task, ...], selection: int | None) -> None:
        normal = Style(color=self._theme.default_text)
        selected = Style(color=self._theme.selected, bold=True)

        if not tasks:
            self.update(Text("No tasks yet. Press A to add one.", style=normal))
            return

        table = Table(box=None, expand=True, show_edge=False, pad_edge=False)
        table.add_column("", width=1, no_wrap=True)
        table.add_column("Task", ratio=3, no_wrap=True, overflow="ellipsis")
        table.add_column("Priority", ratio=2, no_wrap=True)
        table.add_column("Description", ratio=5, no_wrap=True, overflow="ellipsis")

        for index, task in enumerate(tasks):
            is_selected = index == selection
            table.add_row(
                SELECTED_MARKER if is_selected else "",
                task.name,
                task.priority.label,
                task.description.replace("\n", " "),
                style=selected if is_selected else normal,
            )
        self.update(table)


class GroupedPanel(Static):
    """Tasks sectioned by priority, highest first."""

    DEFAULT_CSS = """
    GroupedPanel {
        height: 100%;
        width: 32;
        border: round $primary;
        padding: 0 1;
    }
    """

    def __init__(self, theme: Theme, **kwargs) -> None:
        super().__init__(**kwargs)
        self._theme = theme
        self.border_title = "By priority"

    def show(self, grouped: tuple[Task, ...]) -> None:
        text = Text(style=Style(color=self._theme.default_text))
        for priority in DISPLAY_ORDER:
            tier = [task for task in grouped if task.priority is priority]
            if not tier:
                continue
            if text.plain:
                text.append("\n")
            text.append(f"─── {priority.label} ({len(tier)}) ───\n", style="bold")
            for task in tier:
                text.append(f"  {task.name}\n")
        if not text.plain:
            text.append("Nothing to do")
        self.update(text)


class FormPanel(Vertical):
    """The add/edit form: name, priority and a scrolling description."""

    DEFAULT_CSS = """
    FormPanel {
        width: 70%;
        height: auto;
        border: round $primary;
        background: $surface;
        padding: 0 1;
    }

    FormPanel .field {
        height: 3;
        border: solid $primary-darken-2;
        padding: 0 1;
    }

    FormPanel #form-description {
        height: 7;
    }

    FormPanel .active {
        border: solid $accent;
    }

    FormPanel #form-help {
        height: 1;
        margin-top: 1;
    }
    """

    def __init__(self, theme: Theme, **kwargs) -> None:
        super().__init__(**kwargs)
        self._theme = theme

    def compose(self) -> ComposeResult:
        yield Static(id="form-name", classes="field")
        yield Static(id="form-priority", classes="field")
        yield Static(id="form-description", classes="field")
        yield Static(id="form-help")

    @property
    def description_box(self) -> Static:
        return self.query_one("#form-description", Static)

    def show(self, screen: Screen, form: FormState) -> None:
        self.border_title = FORM_TITLES[screen]
        normal = Style(color=self._theme.default_text)
        active = Style(color=self._theme.selected)

        boxes = {
            Field.NAME: self.query_one("#form-name", Static),
            Field.PRIORITY: self.query_one("#form-priority", Static),
            Field.DESCRIPTION: self.description_box,
        }
        titles = {
            Field.NAME: "Task Name",
            Field.PRIORITY: "Priority",
            Field.DESCRIPTION: "Description",
        }
        for field, box in boxes.items():
            is_active = field is form.active_field
            box.border_title = titles[field]
            box.set_class(is_active, "active")

        name_active = form.active_field is Field.NAME
        name = Text(form.name, style=active if name_active else normal)
        if name_active:
            name.append(CURSOR)
        boxes[Field.NAME].update(name)

        priority_active = form.active_field is Field.PRIORITY
        boxes[Field.PRIORITY].update(
            Text(
                f"{form.priority.label} (h/m/l or ↑↓)",
                style=active if priority_active else normal,
            )
        )

        boxes[Field.DESCRIPTION].update(self._description_text(form, active, normal))
        self.query_one("#form-help", Static).update(Text(FORM_HELP[screen], style=normal))

    def _description_text(self, form: FormState, active: Style, normal: Style) -> Text:
        is_active = form.active_field is Field.DESCRIPTION
        lines = form.visible_description()
        text = Text(style=active if is_active else normal)
        cursor_row = form.cursor_line - form.description_scroll_offset
        for row, line in enumerate(lines):
            if row:
                text.append("\n")
            text.append(line)
            if is_active and row == cursor_row:
                text.append(CURSOR)
        return text


class ErrorPanel(Static):
    """Modal message box; border color follows the severity."""

    DEFAULT_CSS = """
    ErrorPanel {
        width: 50%;
        height: auto;
        border: heavy $error;
        background: $surface;
        padding: 1 2;
    }

    ErrorPanel.severity-warning {
        border: heavy $warning;
    }

    ErrorPanel.severity-info {
        border: heavy $primary;
    }
    """

    def __init__(self, theme: Theme, **kwargs) -> None:
        super().__init__(**kwargs)
        self._theme = theme

    def show(self, error: ErrorOverlay) -> None:
        for severity in Severity:
            self.set_class(severity is error.severity, f"severity-{severity.value}")
        self.border_title = error.title
        text = Text(error.message, style=Style(color=self._theme.default_text))
        text.append("\n\nEnter / Esc / Space to dismiss", style="dim")
        self.update(text)
