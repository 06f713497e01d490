"""Terminal control helpers for the explorer session.

Owns the raw-mode lifecycle: captures the original tty attributes once,
switches to non-canonical no-echo input, and guarantees the saved attributes
are restored on every exit path.
"""

from __future__ import annotations

import atexit
import contextlib
import logging
import os
import termios
import tty

from .errors import TerminalInitError

logger = logging.getLogger(__name__)


class TerminalController:
    """Own the saved tty state and the transitions in and out of raw mode."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except (termios.error, OSError) as exc:
            raise TerminalInitError(f"cannot read terminal attributes: {exc}") from exc
        self._raw_active = False

    @property
    def raw_active(self) -> bool:
        return self._raw_active

    def enable_raw_mode(self) -> None:
        """Disable canonical input and echo; reads return after one byte."""
        if self._raw_active:
            return
        raw = [list(item) if isinstance(item, list) else item for item in self._saved_tty_state]
        raw[tty.LFLAG] &= ~(termios.ICANON | termios.ECHO)
        raw[tty.CC][termios.VMIN] = 1
        raw[tty.CC][termios.VTIME] = 0
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, raw)
        except (termios.error, OSError) as exc:
            # Leave no partially applied attributes behind.
            with contextlib.suppress(termios.error, OSError):
                termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
            raise TerminalInitError(f"cannot enter raw mode: {exc}") from exc
        self._raw_active = True
        atexit.register(self.disable_raw_mode)
        logger.debug("raw mode enabled on fd %d", self.stdin_fd)

    def disable_raw_mode(self) -> None:
        """Restore the captured attributes verbatim; safe to call repeatedly."""
        if not self._raw_active:
            return
        self._raw_active = False
        atexit.unregister(self.disable_raw_mode)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        logger.debug("raw mode disabled on fd %d", self.stdin_fd)

    def terminal_height(self) -> int:
        """Return the current row count of the output tty, 24 when unknown."""
        try:
            return os.get_terminal_size(self.stdout_fd).lines
        except OSError:
            return 24

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw enter/exit calls."""
        try:
            self.enable_raw_mode()
            yield self
        finally:
            self.disable_raw_mode()
