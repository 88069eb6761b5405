"""Logging configuration.

The board owns the whole terminal while it runs, so logs only go to a
file in the workspace.
"""

from __future__ import annotations

import logging
from pathlib import Path

from taskboard.config import LOG_FILENAME


def setup_logging(log_dir: str | Path, *, level: int = logging.INFO) -> Path:
    """Send all logs to `<log_dir>/taskboard.log`. Call once, early."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
