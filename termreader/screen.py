"""ANSI screen output and dismissible message screens.

Every frame is written as one ``os.write`` of CR LF terminated lines, since
output newline translation cannot be relied on once canonical mode is off.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Iterable

from .input import KeyEvent

CLEAR_HOME = "\x1b[2J\x1b[H"
LINE_END = "\r\n"
RULE = "─" * 37

_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")


def sanitize_line(text: str) -> str:
    """Escape control characters so file content cannot drive the terminal."""
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group()):02x}", text)


def compose_frame(lines: Iterable[str]) -> str:
    return CLEAR_HOME + "".join(f"{line}{LINE_END}" for line in lines)


class Screen:
    """Write whole frames to the terminal output fd."""

    def __init__(self, fd: int) -> None:
        self.fd = fd

    def _write(self, text: str) -> None:
        data = text.encode("utf-8", errors="replace")
        while data:
            written = os.write(self.fd, data)
            data = data[written:]

    def clear(self) -> None:
        self._write(CLEAR_HOME)

    def draw(self, lines: Iterable[str]) -> None:
        """Clear the screen and print ``lines`` from the top-left corner."""
        self._write(compose_frame(lines))


def show_message(screen: Screen, read_key: Callable[[], KeyEvent], *lines: str) -> KeyEvent:
    """Show a dismissible message and block for exactly one key.

    Returns the dismissing key so callers can tell closed input apart.
    """
    screen.draw(lines)
    return read_key()
