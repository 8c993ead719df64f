"""Open notes in an external editor."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from sib.note import Note

__all__ = ["EditorService"]


class EditorService:
    """Launches the configured editor on notes below the notes directory."""

    def __init__(self, editor: str, base_notes_dir: str | os.PathLike[str]) -> None:
        self.editor = editor
        self.base_notes_dir = Path(base_notes_dir)

    def open(self, note: Note) -> int:
        """Run the editor on ``note`` and wait for it; return its exit status.

        Raises OSError if the editor cannot be started.
        """
        path = self.base_notes_dir / note.slug
        return subprocess.run([self.editor, str(path)], check=False).returncode