"""Terminal key model shared by the controller and the Textual front end."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyCode(Enum):
    CHAR = "char"
    ESC = "escape"
    TAB = "tab"
    BACKTAB = "backtab"
    ENTER = "enter"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class KeyKind(Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    """One key event: a named key or a character, plus the Shift flag."""

    code: KeyCode
    char: str | None = None
    shift: bool = False
    kind: KeyKind = KeyKind.PRESS

    @classmethod
    def of_char(cls, char: str, kind: KeyKind = KeyKind.PRESS) -> KeyEvent:
        return cls(KeyCode.CHAR, char=char, shift=char.isupper(), kind=kind)

    @classmethod
    def of(cls, code: KeyCode, shift: bool = False, kind: KeyKind = KeyKind.PRESS) -> KeyEvent:
        return cls(code, shift=shift, kind=kind)

    @property
    def is_press(self) -> bool:
        return self.kind is KeyKind.PRESS

    def __str__(self) -> str:
        if self.code is KeyCode.CHAR:
            return repr(self.char)
        prefix = "shift+" if self.shift else ""
        return f"{prefix}{self.code.value}"


# Textual key names -> KeyCode
_TEXTUAL_NAMES: dict[str, KeyCode] = {
    "escape": KeyCode.ESC,
    "tab": KeyCode.TAB,
    "backtab": KeyCode.BACKTAB,
    "enter": KeyCode.ENTER,
    "backspace": KeyCode.BACKSPACE,
    "up": KeyCode.UP,
    "down": KeyCode.DOWN,
    "left": KeyCode.LEFT,
    "right": KeyCode.RIGHT,
}


def from_textual(key: str, character: str | None) -> KeyEvent | None:
    """Translate a Textual key name/character pair into a KeyEvent.

    Returns None for keys the application has no use for (function keys,
    ctrl/alt combinations, ...).
    """
    modifiers, _, base = key.rpartition("+")
    mods = set(modifiers.split("+")) if modifiers else set()
    shift = "shift" in mods

    code = _TEXTUAL_NAMES.get(base)
    if code is not None:
        if mods - {"shift"}:
            return None
        return KeyEvent.of(code, shift=shift)

    if mods - {"shift"}:
        return None
    if character and len(character) == 1 and character.isprintable():
        return KeyEvent(KeyCode.CHAR, char=character, shift=shift or character.isupper())
    return None
