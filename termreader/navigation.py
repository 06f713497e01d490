"""Navigation loop: an explicit stack of browse frames.

Descending pushes a frame, going back pops one and resets the parent's
selection, and opening a file runs a pager session in place.
"""

from __future__ import annotations

import logging
import os
import sys
from functools import partial

from .browser import Back, BrowseFrame, BrowserView, Descend, OpenFile
from .context import ViewContext
from .input import read_key
from .pager import run_pager
from .screen import Screen
from .settings import Settings
from .terminal import TerminalController

logger = logging.getLogger(__name__)

EXIT_MESSAGE = "Exiting."


def run_explorer(start_path: str, ctx: ViewContext) -> None:
    """Browse from ``start_path`` until the root frame is popped."""
    stack: list[BrowseFrame] = [BrowseFrame(start_path)]
    while stack:
        frame = stack[-1]
        transition = BrowserView(frame, ctx).step()
        if isinstance(transition, Descend):
            logger.debug("enter %s", transition.path)
            stack.append(BrowseFrame(transition.path))
        elif isinstance(transition, Back):
            logger.debug("leave %s", frame.path)
            stack.pop()
            if stack:
                stack[-1].reset_selection()
        elif isinstance(transition, OpenFile):
            logger.debug("open %s", transition.path)
            run_pager(transition.path, ctx)


def run_app(
    start_path: str,
    settings: Settings,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> int:
    """Run the explorer in raw mode on the process terminal.

    Raises ``TerminalInitError`` before anything is drawn when the terminal
    cannot be put into raw mode. Returns the process exit status.
    """
    in_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    out_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd

    terminal = TerminalController(in_fd, out_fd)
    screen = Screen(out_fd)
    with terminal.raw_mode():
        ctx = ViewContext(
            screen=screen,
            read_key=partial(read_key, in_fd, settings.escape_timeout_ms),
            terminal_height=terminal.terminal_height,
            settings=settings,
        )
        run_explorer(os.fspath(start_path), ctx)
        screen.draw([EXIT_MESSAGE])
    return 0
