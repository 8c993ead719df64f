"""The interactive application: state updates, effects, drawing and the main loop."""

from __future__ import annotations

import argparse
import curses
import logging
import sys
from collections.abc import Iterable, Sequence
from typing import Any

from sib import log_setup
from sib.config import Config, load_config
from sib.context import Context
from sib.keys import KeyCode, KeyEvent
from sib.messages import Action, InputChar, Message, OpenEditor
from sib.model import Focus, Model
from sib.note import Note
from sib.panels import (
    FOCUS_COLOR_PAIR,
    FilterPanel,
    InputPanel,
    LiveviewPanel,
    NotesPanel,
    RenderContext,
)
from sib.tokenizer import parse_query
from sib.ui import Renderer

__all__ = ["App", "main"]

log = logging.getLogger(__name__)

_GLOBAL_KEYS = {
    KeyCode.ESC: Message.QUIT,
    KeyCode.TAB: Message.CYCLE_FOCUS_FORWARD,
    KeyCode.UP: Message.NOTE_SELECTION_UP,
    KeyCode.DOWN: Message.NOTE_SELECTION_DOWN,
    KeyCode.ENTER: Message.OPEN_SELECTED,
}

_ESC_DELAY_MS = 25


class App:
    """Holds the model and panels and reacts to messages."""

    def __init__(self, notes: Iterable[Note], config: Config) -> None:
        self.model = Model(notes=list(notes))
        self.renderer = Renderer.for_mode(config.glyph_mode)
        self.input_panel = InputPanel()
        self.filter_panel = FilterPanel()
        self.notes_panel = NotesPanel()
        self.liveview_panel = LiveviewPanel()

    def route_key(self, key: KeyEvent) -> Action:
        """Turn a key into a message: global keys first, then the focused panel."""
        message = _GLOBAL_KEYS.get(key.code)
        if message is not None:
            return message
        match self.model.panel_focus:
            case Focus.INPUT:
                return self.input_panel.handle_key(key)
            case Focus.NOTES:
                return self.notes_panel.handle_key(key)
            case Focus.FILTER:
                return self.filter_panel.handle_key(key)
            case Focus.LIVEVIEW:
                return self.liveview_panel.handle_key(key)
        return Message.NOOP

    def update(self, msg: Action, ctx: Context) -> None:
        """Apply ``msg`` to the state; side effects are queued, not run."""
        model = self.model
        match msg:
            case Message.INIT:
                self._recompute_search(ctx)
                self._reset_selection()
            case Message.QUIT:
                model.should_quit = True
            case Message.CYCLE_FOCUS_FORWARD:
                model.panel_focus = model.panel_focus.next()
            case InputChar(char=char):
                self.input_panel.buffer += char
                self._recompute_search(ctx)
                self._reset_selection()
            case Message.INPUT_BACKSPACE:
                self.input_panel.buffer = self.input_panel.buffer[:-1]
                self._recompute_search(ctx)
                self._reset_selection()
            case Message.NOTE_SELECTION_UP:
                if self.notes_panel.selection_index > 0:
                    self.notes_panel.selection_index -= 1
            case Message.NOTE_SELECTION_DOWN:
                max_index = max(len(model.ranked_notes) - 1, 0)
                if self.notes_panel.selection_index < max_index:
                    self.notes_panel.selection_index += 1
            case Message.OPEN_SELECTED:
                if not model.ranked_notes:
                    return
                item = model.ranked_notes[self.notes_panel.selection_index]
                model.pending_effects.append(OpenEditor(model.notes[item.note_index]))
            case Message.NOOP:
                pass

    def _recompute_search(self, ctx: Context) -> None:
        tokens = parse_query(self.input_panel.buffer)
        self.model.token_filters = list(tokens)
        self.model.ranked_notes = ctx.ranker.compute_results(self.model.notes, tokens)

    def _reset_selection(self) -> None:
        self.notes_panel.selection_index = max(len(self.model.ranked_notes) - 1, 0)

    def run_effects(self, ctx: Context, screen: Any = None) -> None:
        """Run queued effects, most recent first.

        With a curses ``screen`` the terminal is handed to the editor and
        redrawn afterwards.
        """
        while self.model.pending_effects:
            effect = self.model.pending_effects.pop()
            match effect:
                case OpenEditor(note=note):
                    log.info("Opening editor for %s", note.slug)
                    if screen is not None:
                        curses.def_prog_mode()
                        curses.endwin()
                    try:
                        ctx.editor.open(note)
                    except OSError as err:
                        log.warning("Failed to start editor for %s: %s", note.slug, err)
                    else:
                        ctx.ranker.record_open(note)
                    finally:
                        if screen is not None:
                            curses.reset_prog_mode()
                            screen.clear()
                            screen.refresh()
                            self.render(screen)
                            curses.doupdate()

    def render(self, screen: Any) -> None:
        """Lay the panels out on ``screen`` and draw them; call ``doupdate`` after."""
        height, width = screen.getmaxyx()
        top = height * 20 // 100
        bottom = height * 20 // 100
        middle = height - top - bottom
        left = width // 2
        right = width - left

        ctx = RenderContext(model=self.model, renderer=self.renderer)
        areas = [
            (self.input_panel, top, width, 0, 0),
            (self.notes_panel, middle, left, top, 0),
            (self.filter_panel, middle, right, top, left),
            (self.liveview_panel, bottom, width, top + middle, 0),
        ]
        for panel, rows, cols, y, x in areas:
            if rows < 1 or cols < 1:
                continue
            win = screen.derwin(rows, cols, y, x)
            panel.render(win, ctx)
            win.noutrefresh()

    def run(self, ctx: Context) -> None:
        """Run the interface until the user quits."""
        curses.wrapper(self._main_loop, ctx)

    def _main_loop(self, screen: Any, ctx: Context) -> None:
        _setup_terminal(screen)
        self.update(Message.INIT, ctx)
        while True:
            self.render(screen)
            curses.doupdate()
            try:
                key = screen.get_wch()
            except curses.error:
                continue
            self.update(self.route_key(KeyEvent.from_curses(key)), ctx)
            self.run_effects(ctx, screen)
            if self.model.should_quit:
                break


def _setup_terminal(screen: Any) -> None:
    screen.keypad(True)
    curses.set_escdelay(_ESC_DELAY_MS)
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    if curses.has_colors():
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(FOCUS_COLOR_PAIR, curses.COLOR_YELLOW, -1)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the note search interface."""
    parser = argparse.ArgumentParser(prog="sib", description="Search and open Markdown notes.")
    parser.parse_args(argv)

    try:
        log_setup.init()
        config = load_config()
    except OSError as err:
        print(f"sib: {err}", file=sys.stderr)
        return 1

    log.info("Starting TUI...")
    ctx = Context.from_config(config)
    try:
        app = App(ctx.parser.collect_notes(), config)
        try:
            app.run(ctx)
        except Exception:
            log.exception("TUI encountered an error")
    finally:
        ctx.ranker.close()
    log.info("Exiting TUI...")
    return 0