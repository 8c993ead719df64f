from pathlib import PurePath

import pytest

from sib.model import Focus, Model
from sib.note import Note


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        (Focus.INPUT, Focus.NOTES),
        (Focus.NOTES, Focus.FILTER),
        (Focus.FILTER, Focus.INPUT),
        (Focus.LIVEVIEW, Focus.INPUT),
    ],
)
def test_focus_next(start, expected):
    assert start.next() is expected


def test_focus_cycle_returns_to_start_after_three():
    assert Focus.INPUT.next().next().next() is Focus.INPUT


def test_model_starts_empty_with_input_focus():
    notes = [Note(slug=PurePath("a.md"))]
    model = Model(notes=notes)
    assert model.notes == notes
    assert model.ranked_notes == []
    assert model.token_filters == []
    assert model.pending_effects == []
    assert model.panel_focus is Focus.INPUT
    assert model.should_quit is False


def test_models_do_not_share_lists():
    first, second = Model(), Model()
    first.pending_effects.append("effect")
    assert second.pending_effects == []