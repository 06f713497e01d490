"""Browser view: one directory listing with a selection cursor.

Each ``BrowserView.step`` re-enumerates the directory, draws one frame,
consumes one key, and reports what the navigation loop should do next.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from .context import ViewContext
from .errors import DirectoryOpenError, PathTooLongError, ResourceExhaustedError
from .fs import DirectoryListing, join_entry_path, list_directory
from .input import KeyEvent, KeyKind, is_enter, is_quit
from .screen import sanitize_line, show_message

logger = logging.getLogger(__name__)

BROWSER_FOOTER = "↑↓ navigate | Enter select | q back"
BACK_HINT = "Press any key to go back..."
CURSOR_MARK = "> "
NO_MARK = "  "


class BrowserAction(enum.Enum):
    STAY = "stay"
    BACK = "back"
    OPEN = "open"


@dataclass(frozen=True)
class BrowserScroll:
    """Window offset and selected index into the current listing."""

    offset: int = 0
    selection: int = 0


@dataclass
class BrowseFrame:
    """One directory level on the navigation stack."""

    path: str
    scroll: BrowserScroll = field(default_factory=BrowserScroll)

    def reset_selection(self) -> None:
        self.scroll = BrowserScroll()


@dataclass(frozen=True)
class Stay:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Descend:
    path: str


@dataclass(frozen=True)
class OpenFile:
    path: str


Transition = Stay | Back | Descend | OpenFile


def clamp_scroll(scroll: BrowserScroll, count: int, visible_rows: int) -> BrowserScroll:
    """Clamp selection into the listing and slide the window to show it."""
    if count <= 0:
        return BrowserScroll()
    rows = max(1, visible_rows)
    selection = min(max(0, scroll.selection), count - 1)
    offset = min(max(0, scroll.offset), max(0, count - rows))
    if selection < offset:
        offset = selection
    elif selection >= offset + rows:
        offset = selection - rows + 1
    return BrowserScroll(offset=offset, selection=selection)


def apply_browser_key(
    scroll: BrowserScroll,
    key: KeyEvent,
    count: int,
    visible_rows: int,
) -> tuple[BrowserScroll, BrowserAction]:
    """Apply one key to ``scroll`` and return ``(new_scroll, action)``."""
    if is_quit(key) or key.kind is KeyKind.INPUT_CLOSED:
        return scroll, BrowserAction.BACK
    if count <= 0:
        return BrowserScroll(), BrowserAction.STAY
    if is_enter(key) or key.kind is KeyKind.RIGHT:
        return clamp_scroll(scroll, count, visible_rows), BrowserAction.OPEN

    selection = scroll.selection
    if key.kind is KeyKind.UP:
        selection = max(0, selection - 1)
    elif key.kind is KeyKind.DOWN:
        selection = min(selection + 1, count - 1)
    else:
        return scroll, BrowserAction.STAY
    return clamp_scroll(BrowserScroll(scroll.offset, selection), count, visible_rows), BrowserAction.STAY


def render_browser_frame(listing: DirectoryListing, scroll: BrowserScroll, visible_rows: int) -> list[str]:
    """Compose the header, visible entries and footer for one frame."""
    count = len(listing)
    suffix = ", truncated" if listing.truncated else ""
    lines = [f"Directory: {sanitize_line(listing.path)} ({count} items{suffix})", ""]
    window = listing.entries[scroll.offset : scroll.offset + max(1, visible_rows)]
    for idx, entry in enumerate(window, start=scroll.offset):
        mark = CURSOR_MARK if idx == scroll.selection else NO_MARK
        lines.append(f"{mark}{sanitize_line(entry.display_name)}")
    lines.append("")
    lines.append(BROWSER_FOOTER)
    return lines


def render_empty_directory_frame(path: str) -> list[str]:
    return [f"Directory: {sanitize_line(path)}", "", "(Empty directory)", "", "Press 'q' to go back"]


class BrowserView:
    """Drive one ``BrowseFrame`` a single key at a time."""

    def __init__(self, frame: BrowseFrame, ctx: ViewContext) -> None:
        self.frame = frame
        self.ctx = ctx

    def _load(self) -> DirectoryListing | None:
        ctx = self.ctx
        try:
            return list_directory(self.frame.path, ctx.settings.max_entries)
        except DirectoryOpenError as exc:
            logger.warning("%s", exc)
            message = f"Cannot open directory: {sanitize_line(self.frame.path)}"
            show_message(ctx.screen, ctx.read_key, message, BACK_HINT)
        except ResourceExhaustedError as exc:
            logger.warning("%s", exc)
            show_message(ctx.screen, ctx.read_key, "Memory allocation failed!", BACK_HINT)
        return None

    def step(self) -> Transition:
        """Render the live listing, read one key, and return the transition."""
        ctx = self.ctx
        listing = self._load()
        if listing is None:
            return Back()

        if not listing.entries:
            ctx.screen.draw(render_empty_directory_frame(listing.path))
            key = ctx.read_key()
            if is_quit(key) or key.kind is KeyKind.INPUT_CLOSED:
                return Back()
            return Stay()

        visible_rows = ctx.settings.viewport_height(ctx.terminal_height())
        scroll = clamp_scroll(self.frame.scroll, len(listing), visible_rows)
        ctx.screen.draw(render_browser_frame(listing, scroll, visible_rows))
        scroll, action = apply_browser_key(scroll, ctx.read_key(), len(listing), visible_rows)
        self.frame.scroll = scroll

        if action is BrowserAction.BACK:
            return Back()
        if action is BrowserAction.STAY:
            return Stay()

        entry = listing.entries[scroll.selection]
        try:
            full_path = join_entry_path(listing.path, entry.name, ctx.settings.max_path_length)
        except PathTooLongError as exc:
            logger.warning("%s", exc)
            show_message(
                ctx.screen,
                ctx.read_key,
                "Path too long!",
                f"Path: {sanitize_line(exc.path)}",
                "Press any key to continue...",
            )
            return Stay()
        if entry.is_dir:
            return Descend(full_path)
        return OpenFile(full_path)
