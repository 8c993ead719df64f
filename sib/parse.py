"""Collect Markdown notes from a directory and parse their frontmatter."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import yaml

from sib.note import InvalidMetadata, Note, NoteMetadata

__all__ = ["ParseService", "split_markdown_regions", "parse_frontmatter"]

log = logging.getLogger(__name__)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _FrontmatterLoader(yaml.SafeLoader):
    """Safe loader that keeps date-like scalars as plain strings."""


_FrontmatterLoader.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _lines(raw: str) -> list[str]:
    parts = raw.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def split_markdown_regions(raw: str) -> tuple[str | None, str]:
    """Return the frontmatter (or None) and the body of a Markdown text."""
    lines = _lines(raw)
    if not lines or lines[0].strip() != "---":
        return None, raw

    frontmatter: list[str] = []
    content: list[str] = []
    closed = False
    for line in lines[1:]:
        if closed:
            content.append(line)
        elif line.strip() == "---":
            closed = True
        else:
            frontmatter.append(line)

    if not closed:
        # An unterminated block is kept whole so that it parses as invalid.
        return raw[3:], ""
    return "\n".join(frontmatter), "\n".join(content)


def parse_frontmatter(raw: str) -> NoteMetadata | InvalidMetadata | None:
    """Parse frontmatter text into metadata, InvalidMetadata, or None if empty."""
    if not raw:
        return None
    try:
        data = yaml.load(raw, Loader=_FrontmatterLoader)
        return NoteMetadata.from_mapping(data)
    except (yaml.YAMLError, ValueError):
        return InvalidMetadata(raw)


def _markdown_files(root: Path) -> Iterator[Path]:
    try:
        entries = list(os.scandir(root))
    except OSError as err:
        log.warning("Failed to list %s: %s", root, err)
        return
    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                yield from _markdown_files(Path(entry.path))
            elif entry.is_file(follow_symlinks=False) and Path(entry.name).suffix == ".md":
                yield Path(entry.path)
        except OSError:
            continue


class ParseService:
    """Reads every Markdown note below a base directory."""

    def __init__(self, base_note_dir: str | os.PathLike[str]) -> None:
        self.base_note_dir = Path(base_note_dir)

    def collect_notes(self) -> list[Note]:
        """Walk the base directory and parse every ``.md`` file, skipping unreadable ones."""
        notes: list[Note] = []
        for path in _markdown_files(self.base_note_dir):
            try:
                notes.append(self.parse_markdown_file(path))
            except (OSError, ValueError) as err:
                log.warning("Failed to read %s: %r", path, err)
        return notes

    def parse_markdown_file(self, path: str | os.PathLike[str]) -> Note:
        """Read one note; raise OSError or ValueError if it cannot be used."""
        path = Path(path)
        raw = path.read_bytes().decode("utf-8")
        frontmatter, content = split_markdown_regions(raw)

        if frontmatter is None or not frontmatter.strip():
            metadata = None
        else:
            metadata = parse_frontmatter(frontmatter)
            if isinstance(metadata, InvalidMetadata):
                log.warning("Failed to parse frontmatter in %s: %r", path, metadata.raw)

        try:
            slug = path.relative_to(self.base_note_dir)
        except ValueError:
            raise ValueError(f"{path} is outside {self.base_note_dir}") from None

        return Note(slug=slug, content=content, metadata=metadata)