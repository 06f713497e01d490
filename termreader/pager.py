"""Pager view: scroll through a fully loaded text file.

The viewport height is fixed for the whole session. Scroll arithmetic lives
in ``apply_pager_key`` so it can be exercised without a terminal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from .context import ViewContext
from .errors import FileOpenError, ResourceExhaustedError
from .fs import FileBuffer, load_text_file
from .input import KeyEvent, KeyKind, is_quit
from .screen import RULE, sanitize_line, show_message

logger = logging.getLogger(__name__)

PAGER_FOOTER = "↑↓ scroll | Space/b page | g/G top/bottom | q quit"
DISMISS_HINT = "Press any key to go back..."


@dataclass(frozen=True)
class PagerScroll:
    offset: int = 0


def max_offset(total_lines: int, viewport_height: int) -> int:
    """Return the largest offset that still fills the viewport."""
    return max(0, total_lines - viewport_height)


def apply_pager_key(
    scroll: PagerScroll,
    key: KeyEvent,
    total_lines: int,
    viewport_height: int,
) -> tuple[PagerScroll, bool]:
    """Apply one key to ``scroll`` and return ``(new_scroll, quit)``.

    Every resulting offset stays within ``[0, max_offset]``; unknown keys
    leave the scroll untouched.
    """
    if is_quit(key) or key.kind is KeyKind.INPUT_CLOSED:
        return scroll, True

    offset = scroll.offset
    bottom = max_offset(total_lines, viewport_height)
    if key.kind is KeyKind.UP:
        offset = max(0, offset - 1)
    elif key.kind is KeyKind.DOWN:
        offset = min(offset + 1, bottom)
    elif key.is_char(" "):
        if offset < bottom:
            offset = min(offset + viewport_height, bottom)
    elif key.is_char("b"):
        offset = max(0, offset - viewport_height)
    elif key.is_char("g"):
        offset = 0
    elif key.is_char("G"):
        offset = bottom
    else:
        return scroll, False
    return replace(scroll, offset=max(0, min(offset, bottom))), False


def visible_range(offset: int, total_lines: int, viewport_height: int) -> tuple[int, int]:
    """Return the 1-based inclusive line range shown at ``offset``."""
    return offset + 1, min(offset + viewport_height, total_lines)


def render_pager_frame(buffer: FileBuffer, scroll: PagerScroll, viewport_height: int) -> list[str]:
    """Compose header, rules, visible lines and footer for one frame."""
    total = len(buffer)
    first, last = visible_range(scroll.offset, total, viewport_height)
    lines = [f"File: {sanitize_line(buffer.path)} (lines {first}-{last} of {total})", RULE]
    lines.extend(sanitize_line(line) for line in buffer.lines[scroll.offset : scroll.offset + viewport_height])
    lines.append(RULE)
    lines.append(PAGER_FOOTER)
    return lines


def run_pager(path: str, ctx: ViewContext) -> None:
    """Page through ``path`` until the user quits.

    Open failures and empty files show a one-key dismissible screen instead
    of entering the paging loop.
    """
    try:
        buffer = load_text_file(path)
    except FileOpenError as exc:
        logger.warning("%s", exc)
        show_message(ctx.screen, ctx.read_key, f"Cannot open file: {sanitize_line(path)}", DISMISS_HINT)
        return
    except ResourceExhaustedError as exc:
        logger.warning("%s", exc)
        show_message(ctx.screen, ctx.read_key, "Memory allocation failed!", DISMISS_HINT)
        return

    if buffer.is_empty:
        show_message(ctx.screen, ctx.read_key, f"File is empty: {sanitize_line(path)}", DISMISS_HINT)
        return

    viewport_height = ctx.settings.viewport_height(ctx.terminal_height())
    scroll = PagerScroll()
    logger.debug("paging %s (%d lines, viewport %d)", path, len(buffer), viewport_height)
    while True:
        ctx.screen.draw(render_pager_frame(buffer, scroll, viewport_height))
        scroll, done = apply_pager_key(scroll, ctx.read_key(), len(buffer), viewport_height)
        if done:
            return
