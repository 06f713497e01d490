"""Logging setup for interactive sessions.

Raw mode owns the terminal, so log records only ever go to a file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(log_path: Path, level: int = logging.WARNING) -> logging.Handler | None:
    """Route the ``termreader`` logger to ``log_path``.

    The handler opens the file lazily, so a session that logs nothing leaves
    nothing behind. Calling this again replaces the previous handler. Returns
    ``None`` when the log directory cannot be created.
    """
    root = logging.getLogger("termreader")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
    root.propagate = False

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        root.addHandler(logging.NullHandler())
        return None

    handler = logging.FileHandler(os.fspath(log_path), encoding="utf-8", delay=True)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return handler
