"""A single-line console editor that queues finished lines for the program."""

from __future__ import annotations

import sys
from collections import deque
from typing import Callable, Optional

from bootil import console
from bootil.base import clamp
from bootil.console import ConsoleColor

_DISPLAY_WIDTH = 76
_ROW_WIDTH = 80

KeyReader = Callable[[], str]


def _write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


class LineEditor:
    """Collects typed characters into a line and queues it on return.

    ``read_key`` is polled by get_line(); it returns one character, or an
    empty string when no key is waiting.
    """

    def __init__(self, read_key: Optional[KeyReader] = None) -> None:
        self._read_key = read_key
        self._line = ""
        self._caret = 0
        self._lines: deque[str] = deque()

    @property
    def caret(self) -> int:
        """Position of the caret within the line being edited."""
        return self._caret

    def _clear_line(self) -> None:
        console.pos_push_relative(0, 0)
        _write("\n" + " " * (_ROW_WIDTH - 1) + "\b" * _ROW_WIDTH)
        console.pos_pop()

    def _draw_line(self) -> None:
        with console.colors(ConsoleColor.WHITE, ConsoleColor.BLACK):
            self._clear_line()
            console.pos_push_relative(0, 0)
            _write("\n> " + self._line[-_DISPLAY_WIDTH:])
            if self._caret != len(self._line):
                _write("\b" * (len(self._line) - self._caret))
                with console.colors(ConsoleColor.BLACK, ConsoleColor.GREEN):
                    _write(self._line[self._caret])
            console.pos_pop()

    def feed_char(self, char: str) -> None:
        """Insert one character at the caret; newline and backspace are keys."""
        if len(char) != 1:
            raise ValueError("feed_char takes exactly one character")
        if char in ("\r", "\n"):
            self.on_return()
            return
        if char in ("\b", "\x7f"):
            self.on_backspace()
            return
        self._line = self._line[: self._caret] + char + self._line[self._caret :]
        self._caret += 1
        self._draw_line()

    def on_return(self) -> None:
        """Queue the current line, if it is not empty, and start a new one."""
        if self._line:
            self._clear_line()
            self._lines.append(self._line)
            self._line = ""
        self._caret = 0

    def on_left(self) -> None:
        self._caret = clamp(self._caret - 1, 0, len(self._line))
        self._draw_line()

    def on_right(self) -> None:
        self._caret = clamp(self._caret + 1, 0, len(self._line))
        self._draw_line()

    def on_backspace(self) -> None:
        """Delete the character before the caret."""
        if not self._line or self._caret == 0:
            return
        self._line = self._line[: self._caret - 1] + self._line[self._caret :]
        self._caret -= 1
        self._draw_line()

    def _cycle(self) -> None:
        if self._read_key is None:
            return
        while char := self._read_key():
            self.feed_char(char)

    def get_line(self) -> str:
        """Process waiting keys, then return the oldest finished line or ''."""
        self._cycle()
        return self._lines.popleft() if self._lines else ""

    def line_in_progress(self) -> str:
        return self._line

    def flush(self) -> None:
        """Discard the line being edited; finished lines stay queued."""
        self._line = ""
        self._caret = 0

    def pre_output(self) -> None:
        """Clear the edit line from the screen before other output."""
        if self._line:
            self._clear_line()

    def post_output(self) -> None:
        """Redraw the edit line after other output."""
        if self._line:
            self._draw_line()


_default = LineEditor()


def get_line() -> str:
    return _default.get_line()


def get_line_in_progress() -> str:
    return _default.line_in_progress()


def flush() -> None:
    _default.flush()


def pre_output() -> None:
    _default.pre_output()


def post_output() -> None:
    _default.post_output()