"""Bound collaborators shared by the browser and pager views."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .input import KeyEvent
from .screen import Screen
from .settings import Settings


@dataclass(frozen=True)
class ViewContext:
    """Terminal I/O and limits handed to every view session."""

    screen: Screen
    read_key: Callable[[], KeyEvent]
    terminal_height: Callable[[], int]
    settings: Settings
