"""Turn a search query into tag, metadata and text tokens."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Tag", "Text", "Meta", "Token", "parse_query"]

_TAG_PREFIX = "t:"


@dataclass(frozen=True)
class Tag:
    """Filter notes to those carrying a tag containing ``name``."""

    name: str


@dataclass(frozen=True)
class Text:
    """Free text matched against a note's slug."""

    text: str


@dataclass(frozen=True)
class Meta:
    """Filter notes whose metadata ``key`` contains ``value``."""

    key: str
    value: str


Token = Tag | Text | Meta


def _split_parts(text: str) -> list[str]:
    """Split on spaces, keeping quoted runs together and dropping the quotes."""
    parts: list[str] = []
    current: list[str] = []
    in_quotes = False
    for char in text:
        if char == '"':
            in_quotes = not in_quotes
        elif char == " " and not in_quotes:
            if current:
                parts.append("".join(current))
                current.clear()
        else:
            current.append(char)
    if current:
        parts.append("".join(current))
    return parts


def _classify(part: str) -> Token | None:
    if part.startswith(_TAG_PREFIX):
        tag = part[len(_TAG_PREFIX):]
        return Tag(tag) if tag else None
    if ":" in part:
        key, value = part.split(":", 1)
        return Meta(key, value) if key and value else None
    return Text(part)


def parse_query(text: str) -> list[Token]:
    """Parse a query string into tokens, skipping empty tags and metadata."""
    return [token for part in _split_parts(text) if (token := _classify(part)) is not None]