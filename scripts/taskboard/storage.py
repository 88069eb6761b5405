"""
Workspace and persistence for the task board.

Each resource is one JSON document in the workspace, `<name>.json`.
A missing document gives the default. A broken one gives the default
too, after it has been copied to the first free `<name>.json.bak[.N]`,
so the save at the end of the session cannot destroy the only copy. If
that copy can't be made either, loading raises LoadError instead.
Saving replaces the whole document atomically and raises
PersistenceError on failure.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any, Callable, TypeVar

from taskboard.config import (
    RESOURCE_SUFFIX,
    SETTINGS_RESOURCE,
    TASKS_RESOURCE,
    WORKSPACE_DIRNAME,
    Settings,
)
from taskboard.store import TaskStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TaskboardError(Exception):
    """Base class for task board failures."""


class WorkspaceError(TaskboardError):
    """The base directory is unusable or the workspace can't be created."""


class PersistenceError(TaskboardError):
    """A resource could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not save {path}: {reason}")
        self.path = path
        self.reason = reason


class LoadError(TaskboardError):
    """A resource could neither be loaded nor backed up."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not load or back up {path}: {reason}")
        self.path = path
        self.reason = reason


def ensure_workspace(base: Path | None = None) -> Path:
    """Check the base directory and create `.dashboard` inside it if needed."""
    base = Path.cwd() if base is None else Path(base)
    if not base.is_dir():
        raise WorkspaceError(f"Couldn't find or open {base}")
    workspace = base / WORKSPACE_DIRNAME
    try:
        workspace.mkdir(exist_ok=True)
    except OSError as e:
        raise WorkspaceError(f"Couldn't make dashboard directory {workspace}: {e}") from e
    if not workspace.is_dir():
        raise WorkspaceError(f"{workspace} exists and is not a directory")
    return workspace


def resource_path(workspace: Path, name: str) -> Path:
    return workspace / f"{name}{RESOURCE_SUFFIX}"


def load(
    workspace: Path,
    name: str,
    parse: Callable[[Any], T],
    default: Callable[[], T],
) -> T:
    """Load and parse a resource, substituting the default on any failure.

    Raises LoadError when the document exists but could neither be loaded
    nor backed up, since handing out the default would let the next save
    overwrite it.
    """
    path = resource_path(workspace, name)
    if not path.exists():
        logger.debug("No %s resource at %s, using defaults", name, path)
        return default()

    try:
        return parse(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValueError, TypeError) as e:
        backup = _backup(path)
        if backup is None:
            raise LoadError(path, str(e)) from e
        logger.warning(
            "Could not load %s (%s); using defaults. Original kept at %s",
            path, e, backup,
        )
        return default()


def _backup_path(path: Path) -> Path:
    """First unused `<file>.bak`, `<file>.bak.1`, ... next to `path`."""
    backup = path.with_name(path.name + ".bak")
    n = 0
    while backup.exists():
        n += 1
        backup = path.with_name(f"{path.name}.bak.{n}")
    return backup


def _backup(path: Path) -> Path | None:
    backup = _backup_path(path)
    try:
        shutil.copy2(path, backup)
    except OSError as e:
        logger.error("Could not back up %s: %s", path, e)
        return None
    return backup


def save(workspace: Path, name: str, document: Any) -> Path:
    """Replace a resource with `document`, written to a temp file then renamed."""
    path = resource_path(workspace, name)
    tmp = path.with_name(path.name + ".tmp")
    try:
        text = json.dumps(document, indent=2)
        tmp.write_text(text + "\n", encoding="utf-8")
        os.replace(tmp, path)
    except (OSError, TypeError, ValueError) as e:
        tmp.unlink(missing_ok=True)
        raise PersistenceError(path, str(e)) from e
    logger.debug("Wrote %s (%d bytes)", path, len(text))
    return path


def load_tasks(workspace: Path) -> TaskStore:
    return load(workspace, TASKS_RESOURCE, TaskStore.from_dict, TaskStore)


def save_tasks(workspace: Path, store: TaskStore) -> Path:
    return save(workspace, TASKS_RESOURCE, store.to_dict())


def load_settings(workspace: Path) -> Settings:
    # Settings are never written back, so an unreadable file is safe to skip.
    try:
        return load(workspace, SETTINGS_RESOURCE, Settings.from_dict, Settings)
    except LoadError as e:
        logger.warning("%s; using default settings", e)
        return Settings()
