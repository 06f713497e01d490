"""Low-level terminal input decoding.

Reads raw bytes from the input fd and resolves them into a closed set of key
events. Only three-byte ``ESC [ <letter>`` arrow sequences are recognised;
every other escape sequence collapses to a bare ``ESCAPE`` event.
"""

from __future__ import annotations

import enum
import os
import select
from dataclasses import dataclass

ESC = 0x1B


class KeyKind(enum.Enum):
    CHAR = "char"
    UP = "up"
    DOWN = "down"
    RIGHT = "right"
    LEFT = "left"
    ESCAPE = "escape"
    INPUT_CLOSED = "input_closed"


@dataclass(frozen=True)
class KeyEvent:
    """One decoded key; ``byte`` is set only for ``CHAR`` events."""

    kind: KeyKind
    byte: int | None = None

    @classmethod
    def for_char(cls, ch: str) -> KeyEvent:
        """Build a ``CHAR`` event from a one-character string."""
        return cls(KeyKind.CHAR, ord(ch))

    @property
    def char(self) -> str:
        if self.kind is not KeyKind.CHAR or self.byte is None:
            return ""
        return chr(self.byte)

    def is_char(self, *chars: str) -> bool:
        return self.kind is KeyKind.CHAR and self.char in chars


UP = KeyEvent(KeyKind.UP)
DOWN = KeyEvent(KeyKind.DOWN)
RIGHT = KeyEvent(KeyKind.RIGHT)
LEFT = KeyEvent(KeyKind.LEFT)
ESCAPE = KeyEvent(KeyKind.ESCAPE)
INPUT_CLOSED = KeyEvent(KeyKind.INPUT_CLOSED)

_ARROW_KINDS = {b"A": KeyKind.UP, b"B": KeyKind.DOWN, b"C": KeyKind.RIGHT, b"D": KeyKind.LEFT}


def _read_byte(fd: int) -> bytes | None:
    ch = os.read(fd, 1)
    return ch or None


def _read_ready_byte(fd: int, timeout_ms: int | None) -> bytes | None:
    """Read one continuation byte, giving up after ``timeout_ms``.

    ``None`` timeout blocks like the first read does.
    """
    if timeout_ms is not None:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
    return _read_byte(fd)


def read_key(fd: int, escape_timeout_ms: int | None = None) -> KeyEvent:
    """Block until one logical key event is available on ``fd``.

    End of input yields ``INPUT_CLOSED``. An escape byte consumes at most two
    continuation bytes, each read blocking like the first unless
    ``escape_timeout_ms`` bounds the wait; bytes past the third of a longer
    sequence stay unread and are decoded by the following calls.
    """
    ch = _read_byte(fd)
    if ch is None:
        return INPUT_CLOSED
    if ch[0] != ESC:
        return KeyEvent(KeyKind.CHAR, ch[0])

    first = _read_ready_byte(fd, escape_timeout_ms)
    if first is None:
        return ESCAPE
    second = _read_ready_byte(fd, escape_timeout_ms)
    if second is None:
        return ESCAPE
    if first == b"[":
        kind = _ARROW_KINDS.get(second)
        if kind is not None:
            return KeyEvent(kind)
    return ESCAPE


def is_enter(key: KeyEvent) -> bool:
    """Return whether ``key`` is Enter as sent in raw mode (CR or LF)."""
    return key.is_char("\r", "\n")


def is_quit(key: KeyEvent) -> bool:
    return key.is_char("q", "Q")
