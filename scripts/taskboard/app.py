"""
Taskboard TUI application.

Textual owns the event loop here; the board screen forwards each key
press to the session controller and redraws from its view model.
"""

from __future__ import annotations

import logging
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from taskboard.config import Settings
from taskboard.session import SessionController
from taskboard.storage import PersistenceError, save_tasks
from taskboard.store import TaskStore
from taskboard.views.board import BoardScreen

logger = logging.getLogger(__name__)


class TaskboardApp(App):
    """Main Taskboard TUI application."""

    TITLE = "Taskboard"
    SUB_TITLE = "Tasks"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit_session", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        controller: SessionController,
        settings: Settings | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._controller = controller
        self._settings = settings or Settings()
        self.save_error: PersistenceError | None = None

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(BoardScreen(self._controller, self._settings))

    def finish_session(self) -> None:
        """Save the tasks and leave; a failed save ends the app with status 1."""
        try:
            self._controller.shutdown()
        except PersistenceError as e:
            logger.error("%s", e)
            self.save_error = e
            self.exit(return_code=1)
            return
        self.exit()

    def action_quit_session(self) -> None:
        """Ctrl+Q goes through the same exit path as Esc."""
        self._controller.request_exit()
        self.finish_session()


def run(workspace: Path, store: TaskStore, settings: Settings | None = None) -> SessionController:
    """Run the TUI until the user exits.

    Raises PersistenceError if the tasks could not be saved on the way out.
    """
    controller = SessionController(store, save=lambda s: save_tasks(workspace, s))
    app = TaskboardApp(controller, settings)
    logger.info("Session started with %d task(s) in %s", len(store), workspace)
    app.run()
    if app.save_error is not None:
        raise app.save_error
    return controller
