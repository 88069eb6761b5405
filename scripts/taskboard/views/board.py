"""Board screen: task list, priority summary and the form/error overlays."""

from __future__ import annotations

import logging

from textual import events
from textual.app import ComposeResult
from textual.containers import Center, Horizontal, Middle
from textual.screen import Screen
from textual.widgets import Header, Static

from taskboard.config import Settings
from taskboard.keys import from_textual
from taskboard.session import SessionController, ViewModel
from taskboard.views.widgets import (
    MAIN_HELP,
    ErrorPanel,
    FormPanel,
    GroupedPanel,
    TaskTablePanel,
)

logger = logging.getLogger(__name__)


class BoardScreen(Screen):
    """Draws the controller's view model and feeds it key presses."""

    DEFAULT_CSS = """
    BoardScreen {
        layers: base overlay;
    }

    #board {
        height: 1fr;
        padding: 0 1;
    }

    #task-table {
        width: 1fr;
    }

    #main-help {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }

    #overlay {
        layer: overlay;
        width: 100%;
        height: 100%;
    }
    """

    def __init__(self, controller: SessionController, settings: Settings, **kwargs) -> None:
        super().__init__(**kwargs)
        self._controller = controller
        self._settings = settings

    def compose(self) -> ComposeResult:
        theme = self._settings.theme
        yield Header()
        with Horizontal(id="board"):
            yield TaskTablePanel(theme, id="task-table")
            yield GroupedPanel(theme, id="grouped")
        yield Static(MAIN_HELP, id="main-help")
        with Middle(id="overlay"):
            with Center():
                yield FormPanel(theme, id="form")
            with Center():
                yield ErrorPanel(theme, id="error")

    def on_mount(self) -> None:
        self.draw(self._controller.view_model())

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        key = from_textual(event.key, event.character)
        if key is None:
            return
        logger.debug("Key %s", key)
        self._controller.dispatch(key)
        if self._controller.finished:
            self.app.finish_session()
            return
        self.draw(self._controller.view_model())

    def on_resize(self, event: events.Resize) -> None:
        self.call_after_refresh(self._read_back_viewport)

    def draw(self, view: ViewModel) -> None:
        """Project one view model onto the widgets."""
        self.query_one(TaskTablePanel).show(view.tasks, view.selection)
        self.query_one(GroupedPanel).show(view.grouped)

        form_panel = self.query_one(FormPanel)
        error_panel = self.query_one(ErrorPanel)
        form_panel.display = view.form is not None
        error_panel.display = view.error is not None
        self.query_one("#overlay").display = view.form is not None or view.error is not None

        if view.form is not None:
            form_panel.show(view.screen, view.form)
        if view.error is not None:
            error_panel.show(view.error)

        if view.form is not None:
            self.call_after_refresh(self._read_back_viewport)

    def _read_back_viewport(self) -> None:
        form_panel = self.query_one(FormPanel)
        if not form_panel.display:
            return
        size = form_panel.description_box.content_size
        if size.width <= 0 or size.height <= 0:
            return
        if self._controller.resize_viewport(size.width, size.height):
            self.draw(self._controller.view_model())
