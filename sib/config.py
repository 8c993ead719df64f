"""Configuration: default locations, the config file and path setup."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import platformdirs

from sib.ui import GlyphMode

__all__ = [
    "APP_NAME",
    "DEFAULT_BASE_NOTES_DIR",
    "DEFAULT_USAGE_FILE",
    "DEFAULT_EDITOR",
    "CONFIG_FILE_NAME",
    "Config",
    "config_dir",
    "config_file",
    "normalize_path",
    "initialize_paths",
    "load_config",
]

log = logging.getLogger(__name__)

APP_NAME = "sib"
DEFAULT_BASE_NOTES_DIR = "notes"
DEFAULT_USAGE_FILE = "usage.toml"
DEFAULT_EDITOR = "nvim"
CONFIG_FILE_NAME = "config.toml"


def config_dir() -> Path:
    """Directory holding the config and usage files."""
    return platformdirs.user_config_path() / APP_NAME


def config_file() -> Path:
    """Default location of the config file."""
    return config_dir() / CONFIG_FILE_NAME


def _data_dir() -> Path:
    return platformdirs.user_data_path() / APP_NAME


def normalize_path(path: str | os.PathLike[str]) -> Path:
    """Expand a leading ``~`` component to the home directory."""
    path = Path(path)
    if not path.parts or path.parts[0] != "~":
        return path
    try:
        home = Path.home()
    except RuntimeError:
        return path
    return home.joinpath(*path.parts[1:])


def _path_field(raw: Mapping[str, Any], key: str) -> Path | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key!r} must be a string path")
    return normalize_path(value)


@dataclass
class Config:
    """Resolved settings of the application."""

    base_notes_dir: Path
    usage_file: Path
    editor: str = DEFAULT_EDITOR
    glyph_mode: GlyphMode = GlyphMode.UNICODE

    @classmethod
    def default(cls) -> Config:
        """Settings used when the config file gives none."""
        return cls(
            base_notes_dir=_data_dir() / DEFAULT_BASE_NOTES_DIR,
            usage_file=config_dir() / DEFAULT_USAGE_FILE,
            editor=DEFAULT_EDITOR,
            glyph_mode=GlyphMode.UNICODE,
        )

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> Config:
        """Build settings from a parsed config table, filling gaps with defaults.

        Raises ValueError if a field has the wrong type or an unknown glyph mode.
        """
        defaults = cls.default()

        base_notes_dir = _path_field(raw, "base_notes_dir")
        if base_notes_dir is None:
            log.warning("base notes directory missing, using default")
            base_notes_dir = defaults.base_notes_dir

        usage_file = _path_field(raw, "usage_file")
        if usage_file is None:
            log.warning("usage file missing, using default")
            usage_file = defaults.usage_file

        editor = raw.get("editor")
        if editor is None:
            log.warning("editor missing, using default")
            editor = defaults.editor
        elif not isinstance(editor, str):
            raise ValueError("'editor' must be a string")

        glyph_value = raw.get("glyph_mode")
        if glyph_value is None:
            log.warning("glyph_mode missing, using default")
            glyph_mode = defaults.glyph_mode
        elif not isinstance(glyph_value, str):
            raise ValueError("'glyph_mode' must be a string")
        else:
            glyph_mode = GlyphMode(glyph_value)

        return cls(
            base_notes_dir=base_notes_dir,
            usage_file=usage_file,
            editor=editor,
            glyph_mode=glyph_mode,
        )


def _ensure_dir(name: str, path: Path) -> None:
    if not path.exists():
        log.info("%s at %s missing. Creating directory...", name, path)
        path.mkdir(parents=True, exist_ok=True)


def _ensure_file(name: str, path: Path) -> None:
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        log.info("%s at %s missing. Creating file...", name, path)
        path.touch()


def initialize_paths(config: Config, config_path: str | os.PathLike[str] | None = None) -> None:
    """Create the config file, notes directory and usage file if missing.

    Raises OSError if any of them cannot be created.
    """
    config_path = Path(config_path) if config_path is not None else config_file()
    _ensure_dir("config dir", config_path.parent)
    _ensure_file("config file", config_path)
    _ensure_dir("notes dir", config.base_notes_dir)
    _ensure_file("usage file", config.usage_file)


def load_config(config_path: str | os.PathLike[str] | None = None) -> Config:
    """Load the config, creating missing default paths first.

    A config file that does not parse yields the default settings.
    Raises OSError if the paths cannot be set up or the file cannot be read.
    """
    config_path = Path(config_path) if config_path is not None else config_file()
    initialize_paths(Config.default(), config_path)

    contents = config_path.read_text(encoding="utf-8")
    try:
        config = Config.from_raw(tomllib.loads(contents))
    except ValueError:
        config = Config.from_raw({})

    log.info(
        "Successfully loaded config: base_notes_dir=%s usage_file=%s editor=%s glyph_mode=%s",
        config.base_notes_dir,
        config.usage_file,
        config.editor,
        config.glyph_mode.value,
    )
    return config