"""End-to-end navigation over real temporary directories.

Drives the frame stack with scripted keys and a recording screen, and checks
the raw-mode wiring in ``run_app`` with the terminal controller mocked out.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from termreader.context import ViewContext
from termreader.errors import TerminalInitError
from termreader.input import DOWN, INPUT_CLOSED, KeyEvent
from termreader.navigation import EXIT_MESSAGE, run_app, run_explorer
from termreader.settings import Settings

ENTER = KeyEvent.for_char("\r")
QUIT = KeyEvent.for_char("q")


class _RecordingScreen:
    def __init__(self) -> None:
        self.frames: list[list[str]] = []

    def draw(self, lines) -> None:
        self.frames.append(list(lines))

    def clear(self) -> None:
        self.frames.append([])


def _settings() -> Settings:
    return Settings(log_path=Path(os.devnull))


def _context(script) -> tuple[ViewContext, _RecordingScreen]:
    """``script`` items are keys or zero-argument callables run before the next key."""
    screen = _RecordingScreen()
    pending = list(script)

    def read_key() -> KeyEvent:
        while pending and callable(pending[0]):
            pending.pop(0)()
        return pending.pop(0) if pending else INPUT_CLOSED

    ctx = ViewContext(screen=screen, read_key=read_key, terminal_height=lambda: 24, settings=_settings())
    return ctx, screen


def _selected_line(frame: list[str]) -> str:
    return next(line for line in frame if line.startswith("> "))


class RunExplorerTests(unittest.TestCase):
    def test_descend_then_back_resets_selection_and_relists(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "sub").mkdir()
            (Path(tmp) / "file.txt").write_text("x\n", encoding="utf-8")
            (Path(tmp) / "sub" / "inner.txt").write_text("y\n", encoding="utf-8")
            order = [entry.name for entry in os.scandir(tmp)]
            steps_to_sub = order.index("sub")

            def add_file() -> None:
                (Path(tmp) / "added.txt").write_text("z\n", encoding="utf-8")

            script = [DOWN] * steps_to_sub + [ENTER, add_file, QUIT, QUIT]
            ctx, screen = _context(script)

            run_explorer(tmp, ctx)

        nested = [frame for frame in screen.frames if frame[0].startswith("Directory: " + os.path.join(tmp, "sub"))]
        self.assertTrue(nested)
        after_back = screen.frames[-1]
        self.assertEqual(after_back[0], f"Directory: {tmp} (3 items)")
        self.assertIn("added.txt", "".join(after_back))
        self.assertEqual(after_back[2][:2], "> ")

    def test_file_pager_returns_with_selection_intact(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            for name in ("one.txt", "two.txt", "three.txt"):
                (Path(tmp) / name).write_text(f"{name}\n", encoding="utf-8")
            order = [entry.name for entry in os.scandir(tmp)]
            target = order[-1]

            script = [DOWN] * (len(order) - 1) + [ENTER, QUIT, QUIT]
            ctx, screen = _context(script)

            run_explorer(tmp, ctx)

        pager_frames = [frame for frame in screen.frames if frame[0].startswith("File: ")]
        self.assertEqual(len(pager_frames), 1)
        self.assertEqual(pager_frames[0][0], f"File: {os.path.join(tmp, target)} (lines 1-1 of 1)")
        self.assertEqual(_selected_line(screen.frames[-1]), f"> {target}")

    def test_unreadable_start_directory_exits_after_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = os.path.join(tmp, "missing")
            ctx, screen = _context([KeyEvent.for_char("x")])

            run_explorer(missing, ctx)

        self.assertEqual(len(screen.frames), 1)
        self.assertEqual(screen.frames[0][0], f"Cannot open directory: {missing}")

    def test_closed_input_unwinds_every_frame(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "a").mkdir()
            (Path(tmp) / "a" / "b").mkdir()
            (Path(tmp) / "a" / "b" / "f").write_text("", encoding="utf-8")
            ctx, screen = _context([ENTER, ENTER])

            run_explorer(tmp, ctx)

        headers = [frame[0] for frame in screen.frames]
        self.assertTrue(headers[-1].startswith(f"Directory: {tmp} "))


class RunAppTests(unittest.TestCase):
    def test_run_app_draws_exit_message_inside_raw_mode(self) -> None:
        in_read, in_write = os.pipe()
        out_read, out_write = os.pipe()
        out_fd = out_write
        events: list[str] = []
        try:
            os.write(in_write, b"q")
            controller = mock.Mock()
            controller.terminal_height.return_value = 24

            @contextlib.contextmanager
            def fake_raw_mode():
                events.append("enter")
                try:
                    yield controller
                finally:
                    events.append("exit")

            controller.raw_mode.side_effect = fake_raw_mode
            with tempfile.TemporaryDirectory() as tmp, mock.patch(
                "termreader.navigation.TerminalController", return_value=controller
            ) as controller_cls:
                (Path(tmp) / "f.txt").write_text("x\n", encoding="utf-8")
                status = run_app(tmp, _settings(), stdin_fd=in_read, stdout_fd=out_write)

            os.close(out_write)
            out_write = None
            output = b""
            while chunk := os.read(out_read, 65536):
                output += chunk
        finally:
            for fd in (in_read, in_write, out_read, out_write):
                if fd is not None:
                    os.close(fd)

        self.assertEqual(status, 0)
        controller_cls.assert_called_once_with(in_read, out_fd)
        self.assertEqual(events, ["enter", "exit"])
        text = output.decode("utf-8")
        self.assertIn("Directory: ", text)
        self.assertTrue(text.endswith("\x1b[2J\x1b[H" + EXIT_MESSAGE + "\r\n"))
        self.assertNotIn("\n", text.replace("\r\n", ""))

    def test_run_app_on_non_tty_raises_terminal_init_error(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            with self.assertRaises(TerminalInitError):
                run_app(".", _settings(), stdin_fd=read_fd, stdout_fd=write_fd)
        finally:
            os.close(read_fd)
            os.close(write_fd)


if __name__ == "__main__":
    unittest.main()
