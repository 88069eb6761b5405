"""
Configuration for the task board.

Paths are fixed by convention: everything lives in a `.dashboard`
directory under the base directory (the current working directory unless
told otherwise). Display colors come from `settings.json` there and fall
back to defaults slot by slot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rich.color import Color, ColorParseError

logger = logging.getLogger(__name__)

WORKSPACE_DIRNAME = ".dashboard"
TASKS_RESOURCE = "tasks"
SETTINGS_RESOURCE = "settings"
LOG_FILENAME = "taskboard.log"
RESOURCE_SUFFIX = ".json"

DEFAULT_TEXT_COLOR = "blue"
DEFAULT_SELECTED_COLOR = "grey70"


def _valid_color(raw: object, fallback: str, slot: str) -> str:
    if raw is None:
        return fallback
    try:
        Color.parse(str(raw))
    except ColorParseError:
        logger.warning("Invalid %s color %r, using %r", slot, raw, fallback)
        return fallback
    return str(raw)


@dataclass(frozen=True)
class Theme:
    """The two display colors: regular text and the highlighted row/field."""

    default_text: str = DEFAULT_TEXT_COLOR
    selected: str = DEFAULT_SELECTED_COLOR

    @classmethod
    def from_dict(cls, data: dict) -> Theme:
        if not isinstance(data, dict):
            raise ValueError("colors must be a mapping")
        return cls(
            default_text=_valid_color(data.get("default_text"), DEFAULT_TEXT_COLOR, "default_text"),
            selected=_valid_color(data.get("selected"), DEFAULT_SELECTED_COLOR, "selected"),
        )


@dataclass(frozen=True)
class Settings:
    theme: Theme = field(default_factory=Theme)

    @classmethod
    def from_dict(cls, data: dict) -> Settings:
        if not isinstance(data, dict):
            raise ValueError("settings document must be a mapping")
        return cls(theme=Theme.from_dict(data.get("colors", {})))
