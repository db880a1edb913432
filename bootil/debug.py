"""Message output with listeners, assertions, popups and instance counting."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional

from bootil import console, console_input, platform
from bootil.base import is_shutting_down
from bootil.console import ConsoleColor

CrashHandler = Callable[[int, Any], None]


class Listener:
    """Receives every message, warning and error.

    By default each one is kept in the matching list; override the
    methods to do something else with them.
    """

    def __init__(self) -> None:
        self.messages: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def msg(self, text: str) -> None:
        """Called for each message."""
        self.messages.append(text)

    def warning(self, text: str) -> None:
        """Called for each warning."""
        self.warnings.append(text)

    def error(self, text: str) -> None:
        """Called for each fatal error."""
        self.errors.append(text)


@dataclass
class _DebugState:
    last_error: str = ""
    suppress_popups: bool = False
    crash_handler: Optional[CrashHandler] = None


_listeners: list[Listener] = []
_state = _DebugState()


def add_listener(listener: Listener) -> None:
    _listeners.append(listener)


def remove_listener(listener: Listener) -> None:
    """Remove every registration of listener."""
    _listeners[:] = [item for item in _listeners if item is not listener]


def last_error() -> str:
    """Text of the last error passed to output_error()."""
    return _state.last_error


def suppress_popups(suppress: bool) -> None:
    """Stop popup_message() and output_error() from showing popups."""
    _state.suppress_popups = bool(suppress)


def popup_message(text: str) -> None:
    """Show text as a warning, on standard output and in a popup."""
    output_warning(text)
    sys.stdout.write(text)
    sys.stdout.flush()
    if not _state.suppress_popups:
        platform.popup("Bootil", text)


def do_assert(file: str, line: int, function: str, module: str, message: str) -> str:
    """Report a failed assertion as a warning and return the report."""
    report = (
        "ASSERT ASSERT ASSERT\n"
        f"Message: {message}\n"
        f"Module:\t{module}\n"
        f"File:\t{file}\n"
        f"Line:\t{line}\n"
        f"Function:\t{function}\n"
    )
    output_warning(report)
    return report


def set_minidump_function(func: Optional[CrashHandler]) -> None:
    """Register a function called with (code, exception) when crashing."""
    if func is not None and not callable(func):
        raise TypeError("crash handler must be callable")
    _state.crash_handler = func


def _on_crash(code: int, exception: Any) -> None:
    if _state.crash_handler is not None:
        _state.crash_handler(code, exception)


def do_crash() -> None:
    """Run the crash handler and exit with status -1."""
    _on_crash(-1, None)
    raise SystemExit(-1)


def output_msg(text: str) -> None:
    """Print text and pass it to listeners unless shutting down."""
    console_input.pre_output()
    sys.stdout.write(text)
    sys.stdout.flush()
    platform.debugger_output(text)
    console_input.post_output()
    if is_shutting_down():
        return
    for listener in list(_listeners):
        listener.msg(text)


def output_warning(text: str) -> None:
    """Print text in red and pass it to listeners as a warning."""
    console.fg_color_push(ConsoleColor.RED)
    try:
        output_msg(text)
    finally:
        console.fg_color_pop()
    for listener in list(_listeners):
        listener.warning(text)


def output_error(text: str) -> None:
    """Record and report a fatal error, then exit with status 0."""
    _state.last_error = text
    for listener in list(_listeners):
        listener.error(text)
    with console.colors(ConsoleColor.BLACK, ConsoleColor.RED):
        output_msg("Error:\n\n")
        output_msg(text)
        output_msg("\n\n")
    if not _state.suppress_popups:
        platform.popup("Error", text)
    raise SystemExit(0)


class InstanceCounter:
    """Counts live instances of something and reports any left over."""

    _moaned = False

    def __init__(self, name: str) -> None:
        self.name = name
        self.instances = 0

    def increment(self) -> None:
        self.instances += 1

    def decrement(self) -> None:
        self.instances -= 1

    def report(self) -> None:
        """Complain about unreleased instances: loudly the first time only."""
        if self.instances == 0:
            return
        text = f"{self.instances} unreleased instances of {self.name}"
        if not InstanceCounter._moaned:
            popup_message(text)
            output_warning(f"\n\nINSTANCECNT: {text}\n\n")
            InstanceCounter._moaned = True
        else:
            output_msg(f"INSTANCECNT: {text}\n")