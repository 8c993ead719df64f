"""Logging to a file."""

from __future__ import annotations

import logging
import os

__all__ = ["init"]

_FORMAT = "%(asctime)s %(levelname)s %(filename)s:%(lineno)d: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %I:%M:%S%p"


def init(path: str | os.PathLike[str] = "app.log") -> logging.Handler:
    """Send INFO and above to a freshly truncated log file and return its handler.

    Raises OSError if the file cannot be created.
    """
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.INFO)
    return handler