"""Process-wide lifecycle flag, small helpers and a simple elapsed-time timer."""

from __future__ import annotations

import threading
import time
from typing import Any, MutableSequence, TypeVar

T = TypeVar("T")

_shutting_down = threading.Event()


def startup() -> None:
    """Mark the library as running."""
    _shutting_down.clear()


def shutdown() -> None:
    """Mark the library as shutting down."""
    _shutting_down.set()


def is_shutting_down() -> bool:
    """Return True once shutdown() has been called and startup() has not since."""
    return _shutting_down.is_set()


def clamp(value: T, minimum: T, maximum: T) -> T:
    """Limit value to the inclusive range [minimum, maximum]."""
    if value < minimum:  # type: ignore[operator]
        return minimum
    if value > maximum:  # type: ignore[operator]
        return maximum
    return value


def remove_all(items: MutableSequence[Any], value: Any) -> None:
    """Remove every element equal to value from items, in place."""
    items[:] = [item for item in items if item != value]


class Timer:
    """Measures seconds elapsed since it was created or last reset."""

    def __init__(self) -> None:
        self._started = 0.0
        self.reset()

    def reset(self, offset: float = 0.0) -> None:
        """Restart the timer as if it had started offset seconds ago."""
        self._started = time.monotonic() - offset

    def seconds(self) -> float:
        """Seconds elapsed since the timer was started."""
        return time.monotonic() - self._started