"""Application state and panel focus."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sib.note import Note
from sib.ranker import ResultItem
from sib.tokenizer import Token

__all__ = ["Focus", "Model"]


class Focus(Enum):
    """Which panel currently receives panel-specific keys."""

    INPUT = "input"
    NOTES = "notes"
    FILTER = "filter"
    LIVEVIEW = "liveview"

    def next(self) -> Focus:
        """The panel that focus cycles to after this one."""
        return _NEXT_FOCUS[self]


_NEXT_FOCUS = {
    Focus.INPUT: Focus.NOTES,
    Focus.NOTES: Focus.FILTER,
    Focus.FILTER: Focus.INPUT,
    Focus.LIVEVIEW: Focus.INPUT,
}


@dataclass
class Model:
    """Everything the interface shows and acts on."""

    notes: list[Note] = field(default_factory=list)
    ranked_notes: list[ResultItem] = field(default_factory=list)
    token_filters: list[Token] = field(default_factory=list)
    pending_effects: list[Any] = field(default_factory=list)
    panel_focus: Focus = Focus.INPUT
    should_quit: bool = False