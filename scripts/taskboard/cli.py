#!/usr/bin/env python3
"""
Taskboard

Full-screen terminal list of prioritized tasks, kept in
.dashboard/tasks.json under the working directory.

Usage:
    taskboard              Launch the interactive board
    taskboard --once       Print tasks grouped by priority and exit
    taskboard --dir PATH   Use PATH instead of the working directory
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from taskboard.logging_setup import setup_logging
from taskboard.models import DISPLAY_ORDER
from taskboard.storage import (
    LoadError,
    PersistenceError,
    WorkspaceError,
    ensure_workspace,
    load_settings,
    load_tasks,
)
from taskboard.store import TaskStore

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SAVE_FAILED = 1
EXIT_WORKSPACE = 2
EXIT_LOAD_FAILED = 3


def print_tasks_once(store: TaskStore) -> int:
    """Print the grouped task list and exit."""
    if not len(store):
        print("No tasks.")
        return EXIT_OK

    grouped = list(store.grouped_view())
    for priority in DISPLAY_ORDER:
        tier = [t for t in grouped if t.priority is priority]
        if not tier:
            continue
        print(f"{priority.label} ({len(tier)})")
        for task in tier:
            line = f"  - {task.name}"
            if task.description:
                line += f": {task.description}"
            print(line)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Taskboard - prioritized task list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--dir",
        type=Path,
        default=None,
        help="Base directory holding .dashboard/ (default: working directory)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Print tasks once and exit (no TUI)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )

    args = parser.parse_args(argv)

    try:
        workspace = ensure_workspace(args.dir)
    except WorkspaceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_WORKSPACE

    setup_logging(workspace, level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        store = load_tasks(workspace)
    except LoadError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        print("Refusing to start: saving would overwrite that file.", file=sys.stderr)
        return EXIT_LOAD_FAILED

    if args.once:
        return print_tasks_once(store)

    from taskboard.app import run

    try:
        run(workspace, store, load_settings(workspace))
    except PersistenceError as e:
        logger.error("Tasks were not saved: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        print("Your changes from this session were NOT saved.", file=sys.stderr)
        return EXIT_SAVE_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
