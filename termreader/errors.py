"""Exception hierarchy for termreader.

``TerminalInitError`` is the only fatal error. Every other subclass is
recoverable: the view that hits it shows a dismissible message and returns.
"""

from __future__ import annotations


class TermReaderError(Exception):
    """Base exception for all termreader errors."""


class TerminalInitError(TermReaderError):
    """Raised when terminal attributes cannot be queried or applied."""


class DirectoryOpenError(TermReaderError):
    """Raised when a directory cannot be enumerated."""

    def __init__(self, path: str, reason: str = "") -> None:
        super().__init__(f"Cannot open directory: {path}" + (f" ({reason})" if reason else ""))
        self.path = path
        self.reason = reason


class FileOpenError(TermReaderError):
    """Raised when a file cannot be opened or read."""

    def __init__(self, path: str, reason: str = "") -> None:
        super().__init__(f"Cannot open file: {path}" + (f" ({reason})" if reason else ""))
        self.path = path
        self.reason = reason


class PathTooLongError(TermReaderError):
    """Raised when a joined entry path exceeds the supported length."""

    def __init__(self, path: str, limit: int) -> None:
        super().__init__(f"Path too long: {path}")
        self.path = path
        self.limit = limit


class ResourceExhaustedError(TermReaderError):
    """Raised when loading a listing or buffer runs out of memory."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Memory allocation failed while loading {path}")
        self.path = path
