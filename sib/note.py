"""Notes and the YAML frontmatter metadata attached to them."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any

import yaml

__all__ = ["NoteMetadata", "InvalidMetadata", "Note"]


def _dump_yaml(data: Any) -> str:
    return yaml.safe_dump(
        data, default_flow_style=False, sort_keys=False, allow_unicode=True
    )


@dataclass
class NoteMetadata:
    """Frontmatter of a note: a list of tags plus any other fields."""

    tags: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Any) -> NoteMetadata:
        """Build metadata from a parsed YAML mapping; raise ValueError if malformed."""
        if not isinstance(data, Mapping):
            raise ValueError(f"frontmatter must be a mapping, not {type(data).__name__}")
        tags: list[str] = []
        extra: dict[str, Any] = {}
        for key, value in data.items():
            if not isinstance(key, str):
                raise ValueError(f"frontmatter key {key!r} is not a string")
            if key == "tags":
                if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
                    raise ValueError("'tags' must be a list of strings")
                tags = list(value)
            else:
                extra[key] = value
        return cls(tags=tags, extra=extra)

    def to_frontmatter(self) -> str:
        """Render the metadata as a ``---`` delimited YAML block."""
        body = _dump_yaml({"tags": list(self.tags), **self.extra})
        return f"---\n{body}---\n"

    def get_as_string(self, key: str) -> str | None:
        """Return the value of an extra field as text, or None if absent."""
        if key not in self.extra:
            return None
        value = self.extra[key]
        match value:
            case str():
                return value
            case bool():
                return "true" if value else "false"
            case None:
                return "null"
            case int() | float():
                return str(value)
            case _:
                return _dump_yaml(value)


@dataclass(frozen=True)
class InvalidMetadata:
    """Frontmatter that was present but could not be parsed."""

    raw: str


@dataclass
class Note:
    """A Markdown file below the notes directory."""

    slug: PurePath
    content: str = ""
    metadata: NoteMetadata | InvalidMetadata | None = None

    def valid_metadata(self) -> NoteMetadata | None:
        """Return the metadata if it parsed successfully."""
        return self.metadata if isinstance(self.metadata, NoteMetadata) else None