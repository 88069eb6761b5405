"""
Session controller: the state machine behind the task board.

States:
- MAIN: task list; navigate, delete, open the add/edit form, exit.
- ADDING / EDITING: the form overlay; one handler serves both, told apart
  by the target index (None when adding).
- EXIT: terminal; the task store is saved once and the loop ends.

An error overlay, when present, takes every key. Only Enter, Esc and
Space dismiss it; everything else is dropped without reaching a screen
handler.

The controller never draws or reads the terminal itself. `run()` drives a
blocking loop against an event source and a draw callable; the Textual
app instead calls `dispatch()` from its own key handler. Both end in
`shutdown()`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from taskboard.form import Arrow, Direction, FormState, Viewport
from taskboard.keys import KeyCode, KeyEvent
from taskboard.models import Task
from taskboard.store import TaskStore

logger = logging.getLogger(__name__)


class Screen(Enum):
    MAIN = "main"
    ADDING = "adding"
    EDITING = "editing"
    EXIT = "exit"


class Severity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ErrorOverlay:
    title: str
    message: str
    severity: Severity = Severity.ERROR


@dataclass(frozen=True)
class ViewModel:
    """Everything the draw collaborator needs for one frame."""

    screen: Screen
    tasks: tuple[Task, ...]
    selection: int | None
    grouped: tuple[Task, ...]
    form: FormState | None = None
    error: ErrorOverlay | None = None


MAIN_NEXT = frozenset({"j"})
MAIN_PREVIOUS = frozenset({"k"})
MAIN_ADD = "A"
MAIN_EDIT = "E"
MAIN_DELETE = "X"
MAIN_QUIT = "q"

SaveFn = Callable[[TaskStore], None]
DrawFn = Callable[[ViewModel], "Viewport | None"]
EventSource = Callable[[], KeyEvent]


def is_dismiss_key(event: KeyEvent) -> bool:
    if event.code in (KeyCode.ENTER, KeyCode.ESC):
        return True
    return event.code is KeyCode.CHAR and event.char == " "


class SessionController:
    """Owns the screen state, the task store and the active form."""

    def __init__(self, store: TaskStore, save: SaveFn) -> None:
        self.store = store
        self._save = save
        self.screen = Screen.MAIN
        self.form: FormState | None = None
        self.error: ErrorOverlay | None = None
        self._target: int | None = None
        self._viewport = Viewport()
        self._saved = False

    @property
    def finished(self) -> bool:
        return self.screen is Screen.EXIT

    @property
    def saved(self) -> bool:
        return self._saved

    @property
    def editing_index(self) -> int | None:
        return self._target

    # -------------------- rendering contract --------------------

    def view_model(self) -> ViewModel:
        return ViewModel(
            screen=self.screen,
            tasks=self.store.tasks,
            selection=self.store.selection,
            grouped=tuple(self.store.grouped_view()),
            form=replace(self.form) if self.form is not None else None,
            error=self.error,
        )

    def resize_viewport(self, width: int, height: int) -> bool:
        """Record the description box size read back from the last render.

        Returns True if the active form's scroll state changed, so the
        caller knows a redraw is due.
        """
        self._viewport = Viewport(width, height)
        if self.form is None:
            return False
        return self.form.resize(self._viewport)

    # -------------------- overlay --------------------

    def show_error(
        self, title: str, message: str, severity: Severity = Severity.ERROR
    ) -> None:
        logger.warning("Overlay (%s): %s - %s", severity.value, title, message)
        self.error = ErrorOverlay(title, message, severity)

    # -------------------- input routing --------------------

    def dispatch(self, event: KeyEvent) -> None:
        """Route one key event to the overlay or the active screen."""
        if not event.is_press:
            return
        if self.finished:
            return

        if self.error is not None:
            if is_dismiss_key(event):
                logger.debug("Overlay dismissed with %s", event)
                self.error = None
            return

        before = self.screen
        if self.screen is Screen.MAIN:
            self.screen = self._handle_main(event)
        elif self.screen in (Screen.ADDING, Screen.EDITING):
            self.screen = self._handle_form(event)
        else:
            raise AssertionError(f"Unhandled screen: {self.screen}")

        if self.screen is not before:
            logger.debug("Screen %s -> %s (key %s)", before.value, self.screen.value, event)

    def _handle_main(self, event: KeyEvent) -> Screen:
        code = event.code
        if code is KeyCode.ESC:
            return Screen.EXIT
        if code is KeyCode.DOWN:
            self.store.select_next()
            return Screen.MAIN
        if code is KeyCode.UP:
            self.store.select_previous()
            return Screen.MAIN
        if code is not KeyCode.CHAR:
            return Screen.MAIN

        char = event.char
        if char in MAIN_NEXT:
            self.store.select_next()
        elif char in MAIN_PREVIOUS:
            self.store.select_previous()
        elif char == MAIN_DELETE:
            removed = self.store.remove_selected()
            if removed is not None:
                logger.info("Deleted task %r", removed.name)
        elif char == MAIN_ADD:
            self.form = FormState(viewport=self._viewport)
            self._target = None
            return Screen.ADDING
        elif char == MAIN_EDIT:
            return self._begin_edit()
        elif char == MAIN_QUIT:
            return Screen.EXIT
        return Screen.MAIN

    def _begin_edit(self) -> Screen:
        task = self.store.selected_task()
        if task is None:
            self.show_error(
                "No task selected",
                "Select a task with j/k before editing.",
                Severity.WARNING,
            )
            return Screen.MAIN
        self.form = FormState.from_task(task, self._viewport)
        self._target = self.store.selection
        return Screen.EDITING

    def _handle_form(self, event: KeyEvent) -> Screen:
        form = self.form
        if form is None:
            raise AssertionError("Form screen active without a form")
        current = self.screen
        code = event.code

        if code is KeyCode.ESC:
            self._close_form()
            return Screen.MAIN
        if code is KeyCode.TAB:
            form.cycle_field(Direction.BACKWARD if event.shift else Direction.FORWARD)
        elif code is KeyCode.BACKTAB:
            form.cycle_field(Direction.BACKWARD)
        elif code is KeyCode.ENTER:
            if not form.is_valid():
                return current
            self._commit(form.to_task())
            self._close_form()
            return Screen.MAIN
        elif code is KeyCode.CHAR and event.char is not None:
            form.input_char(event.char)
        elif code is KeyCode.BACKSPACE:
            form.backspace()
        elif code is KeyCode.UP:
            form.arrow(Arrow.UP)
        elif code is KeyCode.DOWN:
            form.arrow(Arrow.DOWN)
        return current

    def _commit(self, task: Task) -> None:
        if self._target is None:
            self.store.insert(task)
            logger.info("Added task %r (%s)", task.name, task.priority.label)
        else:
            self.store.replace(self._target, task)
            logger.info("Updated task %d to %r (%s)", self._target, task.name, task.priority.label)

    def _close_form(self) -> None:
        self.form = None
        self._target = None

    # -------------------- lifecycle --------------------

    def run(self, next_event: EventSource, draw: DrawFn) -> None:
        """Render, block for a key, dispatch; repeat until EXIT, then save."""
        while not self.finished:
            viewport = draw(self.view_model())
            if viewport is not None:
                self.resize_viewport(viewport.width, viewport.height)
            self.dispatch(next_event())
        self.shutdown()

    def request_exit(self) -> None:
        """Leave the session from outside the key routing (e.g. Ctrl+Q)."""
        self.form = None
        self._target = None
        self.error = None
        self.screen = Screen.EXIT

    def shutdown(self) -> None:
        """Persist the task store; later calls after a successful save do nothing.

        Save failures propagate to the caller.
        """
        if self._saved:
            return
        self._save(self.store)
        self._saved = True
        logger.info("Saved %d task(s)", len(self.store))
