"""Console colour and cursor stacks, screen clearing and coloured messages."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from enum import Enum
from typing import Iterator


class ConsoleColor(Enum):
    WHITE = "white"
    BLACK = "black"
    GREY = "grey"
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"


_FG_CODES = {
    ConsoleColor.WHITE: 97,
    ConsoleColor.BLACK: 30,
    ConsoleColor.GREY: 37,
    ConsoleColor.RED: 91,
    ConsoleColor.BLUE: 94,
    ConsoleColor.GREEN: 92,
    ConsoleColor.YELLOW: 93,
}

_BG_CODES = {
    ConsoleColor.WHITE: 107,
    ConsoleColor.BLACK: 40,
    ConsoleColor.GREY: 47,
    ConsoleColor.RED: 101,
    ConsoleColor.BLUE: 104,
    ConsoleColor.GREEN: 102,
    ConsoleColor.YELLOW: 103,
}

DEFAULT_FG = ConsoleColor.GREY
DEFAULT_BG = ConsoleColor.BLACK

_fg_stack: list[ConsoleColor] = []
_bg_stack: list[ConsoleColor] = []
_positions: list[None] = []


def _is_terminal() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _emit(sequence: str) -> None:
    """Write a control sequence, but only to a real terminal."""
    if _is_terminal():
        sys.stdout.write(sequence)
        sys.stdout.flush()


def current_colors() -> tuple[ConsoleColor, ConsoleColor]:
    """The foreground and background colours now in effect."""
    fg = _fg_stack[-1] if _fg_stack else DEFAULT_FG
    bg = _bg_stack[-1] if _bg_stack else DEFAULT_BG
    return fg, bg


def _update_color() -> None:
    if not _fg_stack and not _bg_stack:
        _emit("\033[0m")
        return
    fg, bg = current_colors()
    _emit(f"\033[{_FG_CODES[fg]};{_BG_CODES[bg]}m")


def fg_color_push(color: ConsoleColor) -> None:
    _fg_stack.append(color)
    _update_color()


def fg_color_pop() -> None:
    """Restore the previous foreground colour; IndexError if none was pushed."""
    _fg_stack.pop()
    _update_color()


def bg_color_push(color: ConsoleColor) -> None:
    _bg_stack.append(color)
    _update_color()


def bg_color_pop() -> None:
    """Restore the previous background colour; IndexError if none was pushed."""
    _bg_stack.pop()
    _update_color()


@contextmanager
def colors(fg: ConsoleColor, bg: ConsoleColor) -> Iterator[None]:
    """Use the given colours for the duration of the block."""
    fg_color_push(fg)
    bg_color_push(bg)
    try:
        yield
    finally:
        fg_color_pop()
        bg_color_pop()


def wait_for_key() -> str:
    """Block until one character can be read from standard input."""
    return sys.stdin.read(1)


def cls() -> None:
    """Clear the screen and move the cursor home."""
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def pos_push(x: int, y: int) -> None:
    """Save the cursor position and move it to column x, row y (zero based)."""
    _positions.append(None)
    _emit(f"\0337\033[{y + 1};{x + 1}H")


def pos_push_relative(x: int, y: int) -> None:
    """Save the cursor position and move it by x columns and y rows."""
    _positions.append(None)
    moves = ["\0337"]
    if x > 0:
        moves.append(f"\033[{x}C")
    elif x < 0:
        moves.append(f"\033[{-x}D")
    if y > 0:
        moves.append(f"\033[{y}B")
    elif y < 0:
        moves.append(f"\033[{-y}A")
    _emit("".join(moves))


def pos_pop() -> None:
    """Return the cursor to the last saved position; IndexError if none."""
    _positions.pop()
    _emit("\0338")


def set_cursor_visible(visible: bool) -> None:
    _emit("\033[?25h" if visible else "\033[?25l")


def msg(fg: ConsoleColor, bg: ConsoleColor, text: str) -> None:
    """Print text in the given colours."""
    with colors(fg, bg):
        sys.stdout.write(text)
        sys.stdout.flush()