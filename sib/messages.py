"""Messages that drive state updates and effects that the runtime carries out."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from sib.note import Note

__all__ = ["Message", "InputChar", "OpenEditor", "Action", "Effect"]


class Message(Enum):
    """Messages without a payload."""

    INIT = auto()
    QUIT = auto()
    CYCLE_FOCUS_FORWARD = auto()
    INPUT_BACKSPACE = auto()
    NOTE_SELECTION_UP = auto()
    NOTE_SELECTION_DOWN = auto()
    OPEN_SELECTED = auto()
    NOOP = auto()


@dataclass(frozen=True)
class InputChar:
    """A character typed into the query input."""

    char: str


@dataclass(frozen=True)
class OpenEditor:
    """Request to open ``note`` in the external editor."""

    note: Note


Action = Message | InputChar
Effect = OpenEditor