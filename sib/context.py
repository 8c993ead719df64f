"""Services shared by the running application."""

from __future__ import annotations

from dataclasses import dataclass

from sib.config import Config
from sib.editor import EditorService
from sib.parse import ParseService
from sib.ranker import RankerService

__all__ = ["Context"]


@dataclass
class Context:
    """The editor, parser and ranker built from one configuration."""

    editor: EditorService
    parser: ParseService
    ranker: RankerService

    @classmethod
    def from_config(cls, config: Config) -> Context:
        """Create the services configured by ``config``."""
        return cls(
            editor=EditorService(config.editor, config.base_notes_dir),
            parser=ParseService(config.base_notes_dir),
            ranker=RankerService(config.usage_file),
        )