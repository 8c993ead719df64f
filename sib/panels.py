"""The four panels of the interface: key handling and drawing."""

from __future__ import annotations

import curses
from dataclasses import dataclass
from typing import Any

from sib.keys import KeyCode, KeyEvent
from sib.messages import Action, InputChar, Message
from sib.model import Focus, Model
from sib.tokenizer import Meta, Tag, Text
from sib.ui import Renderer

__all__ = [
    "FOCUS_COLOR_PAIR",
    "RenderContext",
    "InputPanel",
    "FilterPanel",
    "NotesPanel",
    "LiveviewPanel",
]

FOCUS_COLOR_PAIR = 1

_CURSOR = " > "
_NO_CURSOR = "   "
_BORDER_ROWS = 2


@dataclass(frozen=True)
class RenderContext:
    """Read-only state needed to draw one frame."""

    model: Model
    renderer: Renderer


def _focus_attr() -> int:
    try:
        return curses.color_pair(FOCUS_COLOR_PAIR)
    except curses.error:
        return curses.A_BOLD


def _inner_height(height: int) -> int:
    return max(height - _BORDER_ROWS, 0)


def _put(win: Any, y: int, x: int, text: str, limit: int, attr: int) -> None:
    if limit <= 0:
        return
    try:
        win.addnstr(y, x, text, limit, attr)
    except curses.error:
        pass


def _draw(
    win: Any,
    title: str,
    lines: list[str],
    border_attr: int = curses.A_NORMAL,
    line_attrs: list[int] | None = None,
) -> None:
    win.erase()
    height, width = win.getmaxyx()
    if height < _BORDER_ROWS or width < _BORDER_ROWS:
        return
    if border_attr:
        win.attron(border_attr)
    win.box()
    if border_attr:
        win.attroff(border_attr)
    _put(win, 0, 1, title, width - 2, border_attr)
    attrs = line_attrs or [curses.A_NORMAL] * len(lines)
    for row, (text, attr) in enumerate(zip(lines[: height - 2], attrs), start=1):
        _put(win, row, 1, text, width - 2, attr)


def _border_attr(ctx: RenderContext, focus: Focus) -> int:
    return _focus_attr() if ctx.model.panel_focus is focus else curses.A_NORMAL


@dataclass
class InputPanel:
    """The query being typed."""

    buffer: str = ""

    def handle_key(self, key: KeyEvent) -> Action:
        if key.code is KeyCode.CHAR and key.char is not None:
            return InputChar(key.char)
        if key.code is KeyCode.BACKSPACE:
            return Message.INPUT_BACKSPACE
        return Message.NOOP

    def lines(self, ctx: RenderContext, height: int) -> list[str]:
        """Text shown inside a panel ``height`` rows tall, borders included."""
        return [self.buffer][: _inner_height(height)]

    def render(self, win: Any, ctx: RenderContext) -> None:
        height, _ = win.getmaxyx()
        _draw(win, "Input", self.lines(ctx, height), _border_attr(ctx, Focus.INPUT))


@dataclass
class FilterPanel:
    """The tokens the current query filters by."""

    def handle_key(self, key: KeyEvent) -> Action:
        return Message.NOOP

    def lines(self, ctx: RenderContext, height: int) -> list[str]:
        """Text shown inside a panel ``height`` rows tall, borders included."""
        renderer = ctx.renderer
        if not ctx.model.token_filters:
            items = ["No filters"]
        else:
            items = []
            for token in ctx.model.token_filters:
                match token:
                    case Text(text=text):
                        items.append(renderer.render_path(text))
                    case Tag(name=name):
                        items.append(renderer.render_tag(name))
                    case Meta(key=key, value=value):
                        items.append(renderer.render_kv(key, value))
        return items[: _inner_height(height)]

    def render(self, win: Any, ctx: RenderContext) -> None:
        height, _ = win.getmaxyx()
        _draw(win, "Filters", self.lines(ctx, height), _border_attr(ctx, Focus.FILTER))


@dataclass
class NotesPanel:
    """Ranked notes, scrolled so the selection stays visible."""

    selection_index: int = 0

    def handle_key(self, key: KeyEvent) -> Action:
        return Message.NOOP

    def _window(self, count: int, height: int) -> tuple[int, int]:
        visible = _inner_height(height)
        offset = 0
        if visible > 0 and count > visible:
            target = max(self.selection_index - (visible - 1), 0)
            offset = min(target, count - visible)
        return offset, min(offset + visible, count)

    def lines(self, ctx: RenderContext, height: int) -> list[str]:
        """Visible rows of a panel ``height`` rows tall, borders included."""
        model = ctx.model
        slugs = [str(model.notes[item.note_index].slug) for item in model.ranked_notes]
        start, end = self._window(len(slugs), height)
        return [
            (_CURSOR if start + offset == self.selection_index else _NO_CURSOR) + slug
            for offset, slug in enumerate(slugs[start:end])
        ]

    def render(self, win: Any, ctx: RenderContext) -> None:
        height, _ = win.getmaxyx()
        start, _ = self._window(len(ctx.model.ranked_notes), height)
        lines = self.lines(ctx, height)
        selected = _focus_attr() | curses.A_BOLD
        attrs = [
            selected if start + offset == self.selection_index else curses.A_NORMAL
            for offset in range(len(lines))
        ]
        _draw(win, "Notes", lines, _border_attr(ctx, Focus.NOTES), attrs)


@dataclass
class LiveviewPanel:
    """Placeholder for a preview of the selected note."""

    def handle_key(self, key: KeyEvent) -> Action:
        return Message.NOOP

    def lines(self, ctx: RenderContext, height: int) -> list[str]:
        """Text shown inside a panel ``height`` rows tall, borders included."""
        return ["Liveview coming soon"][: _inner_height(height)]

    def render(self, win: Any, ctx: RenderContext) -> None:
        height, _ = win.getmaxyx()
        _draw(win, "Liveview", self.lines(ctx, height))