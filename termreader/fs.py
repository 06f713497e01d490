"""Filesystem adapters: directory enumeration and whole-file text loading.

Listings keep the order the OS returns them in and skip the ``.``/``..``
pseudo-entries. Failures surface as ``termreader.errors`` exceptions.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import DirectoryOpenError, FileOpenError, PathTooLongError, ResourceExhaustedError

logger = logging.getLogger(__name__)

_PSEUDO_ENTRIES = frozenset({".", ".."})


@dataclass(frozen=True)
class DirEntry:
    name: str
    is_dir: bool

    @property
    def display_name(self) -> str:
        return f"{self.name}/" if self.is_dir else self.name


@dataclass(frozen=True)
class DirectoryListing:
    """Snapshot of one directory, capped at the configured entry limit."""

    path: str
    entries: tuple[DirEntry, ...]
    truncated: bool = False

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class FileBuffer:
    path: str
    lines: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


def list_directory(path: str, max_entries: int) -> DirectoryListing:
    """Enumerate ``path`` fresh, stopping after ``max_entries`` children.

    ``is_dir`` comes from the directory entry itself and does not follow
    symlinks.
    """
    entries: list[DirEntry] = []
    truncated = False
    try:
        with os.scandir(path) as it:
            for child in it:
                if child.name in _PSEUDO_ENTRIES:
                    continue
                if len(entries) >= max_entries:
                    truncated = True
                    break
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                entries.append(DirEntry(child.name, is_dir))
    except MemoryError as exc:
        raise ResourceExhaustedError(path) from exc
    except OSError as exc:
        raise DirectoryOpenError(path, exc.strerror or str(exc)) from exc

    if truncated:
        logger.warning("listing of %s truncated at %d entries", path, max_entries)
    return DirectoryListing(path=path, entries=tuple(entries), truncated=truncated)


def split_lines(text: str) -> tuple[str, ...]:
    """Split ``text`` on newlines, dropping each terminator.

    A trailing newline does not start an extra line, so ``"a\\n"`` is one
    line and ``""`` is none.
    """
    if not text:
        return ()
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return tuple(line[:-1] if line.endswith("\r") else line for line in lines)


def read_text(path: str) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8 (dropping a leading BOM), then latin-1, which accepts any
    byte sequence.
    """
    with open(path, "rb") as handle:
        raw = handle.read()
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def load_text_file(path: str) -> FileBuffer:
    """Load every line of ``path`` before paging begins."""
    try:
        return FileBuffer(path=path, lines=split_lines(read_text(path)))
    except MemoryError as exc:
        raise ResourceExhaustedError(path) from exc
    except OSError as exc:
        raise FileOpenError(path, exc.strerror or str(exc)) from exc


def join_entry_path(parent: str, name: str, max_path_length: int) -> str:
    """Join ``parent`` and ``name``, rejecting results the OS could not open.

    The limit counts encoded bytes, matching ``PATH_MAX`` semantics.
    """
    full = os.path.join(parent, name)
    if len(os.fsencode(full)) >= max_path_length:
        raise PathTooLongError(full, max_path_length)
    return full
