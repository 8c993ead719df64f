"""Key events decoded from curses input."""

from __future__ import annotations

import curses
from dataclasses import dataclass
from enum import Enum, auto

__all__ = ["KeyCode", "KeyEvent"]


class KeyCode(Enum):
    """Kinds of keys the interface distinguishes."""

    CHAR = auto()
    BACKSPACE = auto()
    ENTER = auto()
    ESC = auto()
    TAB = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    OTHER = auto()


_SPECIAL_KEYS = {
    curses.KEY_UP: KeyCode.UP,
    curses.KEY_DOWN: KeyCode.DOWN,
    curses.KEY_LEFT: KeyCode.LEFT,
    curses.KEY_RIGHT: KeyCode.RIGHT,
    curses.KEY_BACKSPACE: KeyCode.BACKSPACE,
    curses.KEY_ENTER: KeyCode.ENTER,
}

_CONTROL_CHARS = {
    "\x1b": KeyCode.ESC,
    "\t": KeyCode.TAB,
    "\n": KeyCode.ENTER,
    "\r": KeyCode.ENTER,
    "\x7f": KeyCode.BACKSPACE,
    "\b": KeyCode.BACKSPACE,
}


@dataclass(frozen=True)
class KeyEvent:
    """A key press; ``char`` is set for printable characters."""

    code: KeyCode
    char: str | None = None

    @classmethod
    def from_curses(cls, key: str | int) -> KeyEvent:
        """Decode a value returned by ``get_wch`` or ``getch``."""
        if isinstance(key, int):
            if not 0 <= key < 256:
                return cls(_SPECIAL_KEYS.get(key, KeyCode.OTHER))
            key = chr(key)
        code = _CONTROL_CHARS.get(key)
        if code is not None:
            return cls(code)
        if len(key) == 1 and key.isprintable():
            return cls(KeyCode.CHAR, key)
        return cls(KeyCode.OTHER)