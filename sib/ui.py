"""Glyph sets, icon lookup and text rendering for filters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

__all__ = ["GlyphMode", "Glyphs", "IconMap", "Renderer", "UNICODE", "NERD"]


@dataclass(frozen=True)
class Glyphs:
    """Prefixes shown before tag and path filters."""

    tag: str
    path: str


UNICODE = Glyphs(tag="🏷 ", path="📁")
NERD = Glyphs(tag="\uf412 ", path="\uea83 ")


class GlyphMode(str, Enum):
    """Which family of glyphs the interface draws with."""

    UNICODE = "unicode"
    NERD = "nerd"

    def glyphs(self) -> Glyphs:
        """Return the glyph set for this mode."""
        return NERD if self is GlyphMode.NERD else UNICODE


_ICONS: dict[GlyphMode, dict[str, str]] = {
    GlyphMode.UNICODE: {"rust": "🦀"},
    GlyphMode.NERD: {"rust": "\ue7a8"},
}


class IconMap:
    """Icons shown in place of known metadata keys."""

    def __init__(self, mode: GlyphMode = GlyphMode.UNICODE) -> None:
        self._icons = dict(_ICONS[GlyphMode(mode)])

    def get(self, key: str) -> str | None:
        """Return the icon for ``key``, or None."""
        return self._icons.get(key)


@dataclass
class Renderer:
    """Formats filter tokens as display text."""

    glyphs: Glyphs = UNICODE
    icons: IconMap = field(default_factory=IconMap)

    @classmethod
    def for_mode(cls, mode: GlyphMode) -> Renderer:
        """Build a renderer using the glyphs and icons of ``mode``."""
        mode = GlyphMode(mode)
        return cls(glyphs=mode.glyphs(), icons=IconMap(mode))

    def render_path(self, value: str) -> str:
        return f"{self.glyphs.path} {value}"

    def render_tag(self, value: str) -> str:
        return f"{self.glyphs.tag} {value}"

    def render_kv(self, key: str, value: str) -> str:
        icon = self.icons.get(key)
        return f"{icon} {value}" if icon is not None else f"{key}: {value}"