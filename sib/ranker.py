"""Score and order notes by query matches and by how recently and often they were opened."""

from __future__ import annotations

import logging
import math
import os
import time
import tomllib
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from sib.note import Note
from sib.tokenizer import Meta, Tag, Text, Token

__all__ = [
    "SCALE",
    "TAG_BOOST",
    "META_BOOST",
    "SLUG_BOOST",
    "RECENCY_TAU_DAYS",
    "RECENCY_WEIGHT",
    "FREQUENCY_WEIGHT",
    "FREQUENCY_OFFSET",
    "FREQUENCY_DAMPENING",
    "UsageStats",
    "ResultItem",
    "RankerService",
    "now_ts",
]

log = logging.getLogger(__name__)

SCALE = 100.0
TAG_BOOST = 100
META_BOOST = 100
SLUG_BOOST = 50

# How fast recency decays and how much recency and frequency count overall.
RECENCY_TAU_DAYS = 1.0
RECENCY_WEIGHT = 1.0
FREQUENCY_WEIGHT = 1.0

# Frequency shaping: the offset keeps the logarithm away from zero.
FREQUENCY_OFFSET = 1.0
FREQUENCY_DAMPENING = 1.0

SECONDS_PER_DAY = 86400.0


def now_ts() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


@dataclass
class UsageStats:
    """How often and when a note was last opened."""

    open_count: int = 0
    last_opened: int | None = None


@dataclass(frozen=True)
class ResultItem:
    """A note that matched a query, by its index in the note list."""

    note_index: int
    score: int


def _load_usage(path: Path | None) -> dict[str, UsageStats]:
    if path is None or not path.exists():
        return {}
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        return {slug: _usage_from_table(table) for slug, table in data.items()}
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError, ValueError):
        return {}


def _usage_from_table(table: Any) -> UsageStats:
    if not isinstance(table, dict):
        raise ValueError("usage entry must be a table")
    open_count = table.get("open_count")
    last_opened = table.get("last_opened")
    if isinstance(open_count, bool) or not isinstance(open_count, int) or open_count < 0:
        raise ValueError("open_count must be a non-negative integer")
    if last_opened is not None and (
        isinstance(last_opened, bool) or not isinstance(last_opened, int) or last_opened < 0
    ):
        raise ValueError("last_opened must be a non-negative integer")
    return UsageStats(open_count=open_count, last_opened=last_opened)


def _usage_to_table(stats: UsageStats) -> dict[str, int]:
    table = {"open_count": stats.open_count}
    if stats.last_opened is not None:
        table["last_opened"] = stats.last_opened
    return table


class RankerService:
    """Ranks notes against query tokens and keeps per-note usage statistics.

    Unsaved usage changes are written back on ``close`` or when used as a
    context manager.
    """

    def __init__(self, usage_file: str | os.PathLike[str] | None = None) -> None:
        self.usage_file = Path(usage_file) if usage_file is not None else None
        self.usage: dict[str, UsageStats] = _load_usage(self.usage_file)
        self._dirty = False

    def __enter__(self) -> RankerService:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def usage_for(self, note: Note) -> UsageStats | None:
        """Return the recorded usage of ``note``, if any."""
        return self.usage.get(str(note.slug))

    def compute_results(self, notes: Sequence[Note], tokens: Iterable[Token]) -> list[ResultItem]:
        """Score every note and return the positive ones, lowest score first."""
        tokens = list(tokens)
        results = [
            ResultItem(note_index=index, score=score)
            for index, note in enumerate(notes)
            if (score := self.score(note, tokens, self.usage_for(note))) > 0
        ]
        results.sort(key=lambda item: item.score)
        return results

    def record_open(self, note: Note) -> None:
        """Count one more opening of ``note`` at the current time."""
        stats = self.usage.setdefault(str(note.slug), UsageStats())
        stats.open_count += 1
        stats.last_opened = now_ts()
        self._dirty = True

    def score(
        self, note: Note, tokens: Iterable[Token], usage: UsageStats | None = None
    ) -> int:
        """Score ``note``; a tag or metadata token it does not match gives 0."""
        score = 0
        metadata = note.valid_metadata()
        for token in tokens:
            match token:
                case Tag(name=name):
                    if metadata is None or not any(name in tag for tag in metadata.tags):
                        return 0
                    score += TAG_BOOST
                case Meta(key=key, value=value):
                    if metadata is None:
                        return 0
                    found = metadata.get_as_string(key)
                    if found is None or value not in found:
                        return 0
                    score += META_BOOST
                case Text(text=text):
                    if text in str(note.slug):
                        score += SLUG_BOOST

        if usage is not None and usage.last_opened is not None:
            tau = RECENCY_TAU_DAYS * SECONDS_PER_DAY
            age_secs = float(max(now_ts() - usage.last_opened, 0))
            recency = math.exp(-(age_secs / tau)) * RECENCY_WEIGHT
            frequency = (
                math.log(usage.open_count * FREQUENCY_DAMPENING + FREQUENCY_OFFSET)
                * FREQUENCY_WEIGHT
            )
            score += int(recency**2 * frequency * SCALE)

        return score

    def save(self) -> None:
        """Write the usage statistics to the usage file, ignoring write errors."""
        if self.usage_file is None:
            return
        text = tomli_w.dumps({slug: _usage_to_table(s) for slug, s in self.usage.items()})
        try:
            self.usage_file.write_text(text, encoding="utf-8")
        except OSError as err:
            log.warning("Failed to save note usage to %s: %s", self.usage_file, err)
            return
        self._dirty = False
        log.info("Saved note usage to file")

    def close(self) -> None:
        """Save the usage statistics if they changed since loading."""
        if self._dirty:
            self.save()
            self._dirty = False