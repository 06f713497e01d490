"""Runtime tunables for a termreader session.

Limits bound pathological directories and paths. Nothing here is read
from disk or the environment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "termreader"
LOG_FILENAME = "termreader.log"
DEFAULT_MAX_ENTRIES = 10_000
DEFAULT_MAX_PATH_LENGTH = 4096
ESC_SEQUENCE_TIMEOUT_MS = 25
RESERVED_ROWS = 4


def default_log_path() -> Path:
    """Return the per-user log file location."""
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


@dataclass(frozen=True)
class Settings:
    """Immutable limits shared by every view in one session."""

    max_entries: int = DEFAULT_MAX_ENTRIES
    max_path_length: int = DEFAULT_MAX_PATH_LENGTH
    escape_timeout_ms: int | None = None
    reserved_rows: int = RESERVED_ROWS
    log_path: Path = field(default_factory=default_log_path)

    def viewport_height(self, terminal_rows: int) -> int:
        """Rows left for content once header, rules and footer are reserved."""
        return max(1, terminal_rows - self.reserved_rows)


DEFAULT_SETTINGS = Settings()
