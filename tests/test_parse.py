import random
from pathlib import Path

import pytest

from sib.note import InvalidMetadata, NoteMetadata
from sib.parse import ParseService, parse_frontmatter, split_markdown_regions

DIFFICULTIES = ("easy", "medium", "hard")
TAG_POOL = ("web", "pwn", "forensics")
MALFORMED = '---\ndifficulty: [unclosed\ntags: ["oops"\n---\nbroken content'


def _write(base: Path, rel: str, contents: str) -> None:
    path = base / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(contents.encode("utf-8"))


def _write_note(base, rel, metadata, content):
    prefix = metadata.to_frontmatter() if metadata is not None else ""
    _write(base, rel, prefix + content)


def _bulk_random(base: Path, count: int) -> None:
    rng = random.Random(69)
    for i in range(count):
        difficulty = rng.choice(DIFFICULTIES)
        tags = rng.sample(TAG_POOL, rng.randint(1, 3))
        meta = NoteMetadata(tags=tags, extra={"difficulty": difficulty})
        content = f"# Note {i}\nRandom content {rng.getrandbits(32)}"
        _write_note(base, f"topic_{i % 5}/note_{i}.md", meta, content)


def test_collect_notes_bulk_randomized_success(tmp_path):
    bulk_amount, malformed_amount = 100, 2
    _bulk_random(tmp_path, bulk_amount)
    for i in range(malformed_amount):
        _write(tmp_path, f"bad/broken{i}.md", MALFORMED)

    notes = sorted(ParseService(tmp_path).collect_notes(), key=lambda n: n.slug)
    assert len(notes) == bulk_amount + malformed_amount

    valid = invalid = none = 0
    for note in notes:
        match note.metadata:
            case NoteMetadata() as meta:
                valid += 1
                assert meta.tags
                assert "Random content" in note.content
                assert meta.get_as_string("difficulty") in DIFFICULTIES
            case InvalidMetadata():
                invalid += 1
            case None:
                none += 1

    assert valid == bulk_amount
    assert invalid == malformed_amount
    assert none == 0


def test_parse_single_note_exact_success(tmp_path):
    meta = NoteMetadata(tags=["tag1", "tag2"], extra={"difficulty": "easy"})
    _write_note(tmp_path, "note.md", meta, "Hello world")

    notes = ParseService(tmp_path).collect_notes()
    assert len(notes) == 1
    note = notes[0]
    assert isinstance(note.metadata, NoteMetadata)
    assert note.metadata.tags == ["tag1", "tag2"]
    assert note.metadata.extra["difficulty"] == "easy"
    assert note.content.strip() == "Hello world"
    assert note.slug.as_posix() == "note.md"


def test_parse_partial_note_success(tmp_path):
    _write_note(tmp_path, "note.md", NoteMetadata(tags=["only-tags"]), "Partial metadata")
    note = ParseService(tmp_path).collect_notes()[0]
    assert isinstance(note.metadata, NoteMetadata)
    assert note.metadata.tags == ["only-tags"]
    assert note.metadata.extra == {}


def test_rejects_unclosed_frontmatter(tmp_path):
    raw = '---\ndifficulty: "easy"\ntags: ["a", "b"]\n# Missing closing ---\nHello world'
    _write(tmp_path, "broken.md", raw)
    note = ParseService(tmp_path).collect_notes()[0]
    assert note.metadata == InvalidMetadata(raw[3:])
    assert note.content == ""
    assert note.slug.as_posix() == "broken.md"


def test_malformed_yaml_is_detected(tmp_path):
    _write(tmp_path, "bad.md", MALFORMED)
    note = ParseService(tmp_path).collect_notes()[0]
    assert note.metadata == InvalidMetadata('difficulty: [unclosed\ntags: ["oops"')
    assert note.content == "broken content"


def test_large_scale_note_collection_success(tmp_path):
    _bulk_random(tmp_path, 1000)
    assert len(ParseService(tmp_path).collect_notes()) == 1000


def test_literal_values_parse_succeeds(tmp_path):
    _write(
        tmp_path,
        "raw_number.md",
        "---\nstring_value: hello\nnumber_int: 42\nnumber_float: 6.9\n"
        "boolean_true: true\nnull_value: null\narray: [1, 2]\n---\nHas a number literal",
    )
    note = ParseService(tmp_path).collect_notes()[0]
    meta = note.metadata
    assert isinstance(meta, NoteMetadata)
    assert meta.tags == []
    assert meta.get_as_string("string_value") == "hello"
    assert meta.extra["number_int"] == 42
    assert meta.extra["number_float"] == 6.9
    assert meta.extra["boolean_true"] is True
    assert "null_value" in meta.extra and meta.extra["null_value"] is None
    assert meta.extra["array"] == [1, 2]


def test_dates_stay_strings(tmp_path):
    _write(tmp_path, "d.md", "---\ncreated: 2024-01-02\n---\nbody")
    meta = ParseService(tmp_path).collect_notes()[0].metadata
    assert meta.get_as_string("created") == "2024-01-02"


def test_note_without_frontmatter(tmp_path):
    _write(tmp_path, "plain.md", "just text\nmore")
    note = ParseService(tmp_path).collect_notes()[0]
    assert note.metadata is None
    assert note.content == "just text\nmore"


def test_empty_frontmatter_is_none(tmp_path):
    _write(tmp_path, "empty.md", "---\n   \n---\nbody")
    note = ParseService(tmp_path).collect_notes()[0]
    assert note.metadata is None
    assert note.content == "body"


def test_only_markdown_files_are_collected(tmp_path):
    _write(tmp_path, "a.md", "a")
    _write(tmp_path, "b.txt", "b")
    _write(tmp_path, "sub/c.md", "c")
    slugs = sorted(n.slug.as_posix() for n in ParseService(tmp_path).collect_notes())
    assert slugs == ["a.md", "sub/c.md"]


def test_undecodable_file_is_skipped(tmp_path):
    (tmp_path / "bad.md").write_bytes(b"\xff\xfe\xfd")
    _write(tmp_path, "good.md", "ok")
    slugs = [n.slug.as_posix() for n in ParseService(tmp_path).collect_notes()]
    assert slugs == ["good.md"]


def test_parse_markdown_file_outside_base(tmp_path):
    base = tmp_path / "notes"
    base.mkdir()
    _write(tmp_path, "outside.md", "x")
    with pytest.raises(ValueError):
        ParseService(base).parse_markdown_file(tmp_path / "outside.md")


def test_split_regions_without_frontmatter():
    assert split_markdown_regions("hello") == (None, "hello")
    assert split_markdown_regions("") == (None, "")


def test_split_regions_closed_block():
    assert split_markdown_regions("---\na: 1\n---\nbody\nmore\n") == ("a: 1", "body\nmore")


def test_split_regions_handles_crlf():
    assert split_markdown_regions("---\r\na: 1\r\n---\r\nbody\r\n") == ("a: 1", "body")


def test_split_regions_unclosed_keeps_rest():
    raw = "---\na: 1\nbody"
    assert split_markdown_regions(raw) == (raw[3:], "")


def test_parse_frontmatter_states():
    assert parse_frontmatter("") is None
    assert parse_frontmatter("tags: [x]") == NoteMetadata(tags=["x"])
    assert parse_frontmatter("- a\n- b") == InvalidMetadata("- a\n- b")