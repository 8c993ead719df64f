from pathlib import PurePath

from sib.config import Config
from sib.context import Context
from sib.note import Note


def _config(tmp_path):
    notes = tmp_path / "notes"
    notes.mkdir()
    return Config(base_notes_dir=notes, usage_file=tmp_path / "usage.toml", editor="vim")


def test_services_follow_config(tmp_path):
    cfg = _config(tmp_path)
    ctx = Context.from_config(cfg)
    assert ctx.editor.editor == "vim"
    assert ctx.editor.base_notes_dir == cfg.base_notes_dir
    assert ctx.parser.base_note_dir == cfg.base_notes_dir
    assert ctx.ranker.usage_file == cfg.usage_file


def test_parser_reads_notes_dir(tmp_path):
    cfg = _config(tmp_path)
    (cfg.base_notes_dir / "hello.md").write_text("Hello world")
    ctx = Context.from_config(cfg)
    notes = ctx.parser.collect_notes()
    assert [str(n.slug) for n in notes] == ["hello.md"]
    assert notes[0].content == "Hello world"


def test_ranker_loads_usage_file(tmp_path):
    cfg = _config(tmp_path)
    cfg.usage_file.write_text('["hello.md"]\nopen_count = 3\nlast_opened = 10\n')
    ctx = Context.from_config(cfg)
    stats = ctx.ranker.usage_for(Note(slug=PurePath("hello.md")))
    assert stats.open_count == 3
    assert stats.last_opened == 10