"""Command-line front door for termreader.

Parses the optional start directory, configures file logging, and hands
control to the raw-mode navigation loop.
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from .errors import TerminalInitError
from .log import setup_logging
from .navigation import run_app
from .settings import DEFAULT_SETTINGS, Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termreader",
        description="Browse directories and page through text files in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to start in. Defaults to current directory.")
    return parser


def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    """Parse CLI arguments and run the explorer.

    Terminal setup failure is the only fatal error; it exits with status 1
    and a diagnostic on stderr before any screen is drawn. An unreadable
    start directory is reported on screen and exits normally.
    """
    args = build_parser().parse_args(argv)
    settings = settings or DEFAULT_SETTINGS

    start_path = args.path if args.path is not None else os.curdir

    setup_logging(Path(settings.log_path))
    try:
        return run_app(start_path, settings)
    except TerminalInitError as exc:
        raise SystemExit(f"termreader: {exc}") from exc
    except KeyboardInterrupt:
        raise SystemExit(130) from None


if __name__ == "__main__":
    raise SystemExit(main())
