import sys
from pathlib import Path, PurePath

import pytest

from sib.editor import EditorService
from sib.note import Note

MARKER_SCRIPT = (
    "from pathlib import Path\n"
    "Path(__file__).with_suffix('.opened').write_text(__file__)\n"
)


def test_open_runs_editor_on_note_path(tmp_path):
    (tmp_path / "topic").mkdir()
    note_file = tmp_path / "topic" / "note.md"
    note_file.write_text(MARKER_SCRIPT, encoding="utf-8")
    service = EditorService(sys.executable, tmp_path)

    status = service.open(Note(slug=PurePath("topic/note.md")))

    assert status == 0
    marker = tmp_path / "topic" / "note.opened"
    assert Path(marker.read_text()) == note_file


def test_open_returns_editor_exit_status(tmp_path):
    (tmp_path / "note.md").write_text("import sys\nsys.exit(3)\n", encoding="utf-8")
    service = EditorService(sys.executable, tmp_path)
    assert service.open(Note(slug=PurePath("note.md"))) == 3


def test_missing_editor_raises(tmp_path):
    service = EditorService(str(tmp_path / "no-such-editor"), tmp_path)
    with pytest.raises(OSError):
        service.open(Note(slug=PurePath("note.md")))