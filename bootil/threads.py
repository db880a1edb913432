"""Mutexes, mutex-guarded values and a restartable worker thread."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_log = logging.getLogger("bootil")


class Mutex:
    """A non-recursive lock; also usable as a context manager."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def lock(self) -> None:
        self._lock.acquire()

    def unlock(self) -> None:
        """Release the lock; RuntimeError if it is not held."""
        self._lock.release()

    def try_lock(self) -> bool:
        """Take the lock if it is free and return whether it was taken."""
        return self._lock.acquire(blocking=False)

    def __enter__(self) -> Mutex:
        self.lock()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unlock()


class MutexVar(Generic[T]):
    """A value read and written under its own mutex."""

    def __init__(self, value: Optional[T] = None) -> None:
        self._value = value
        self._mutex = Mutex()

    def get(self) -> Optional[T]:
        with self._mutex:
            return self._value

    def set(self, value: T) -> None:
        with self._mutex:
            self._value = value


class Thread:
    """Runs run() in a background thread and tracks whether it is running.

    Subclass and override run(), or pass a callable as target. Long-running
    work should check wants_to_close() and return when it becomes true.
    """

    def __init__(self, target: Optional[Callable[[], object]] = None) -> None:
        self._target = target
        self._thread: Optional[threading.Thread] = None
        self._mutex = Mutex()
        self._running = False
        self._closing = False

    def run(self) -> None:
        """The work done in the thread; calls target by default."""
        if self._target is not None:
            self._target()

    def running(self) -> bool:
        with self._mutex:
            return self._running

    def _run_in_thread(self) -> None:
        with self._mutex:
            self._closing = False
            self._running = True
        try:
            self.run()
        except Exception:
            _log.exception("unhandled exception in thread")
        with self._mutex:
            self._running = False
        self.on_thread_finished()

    def start_in_thread(self) -> None:
        """Start run() in a new thread, first joining any earlier one."""
        if self._thread is not None:
            self.join()
        self._running = True
        self._closing = False
        self._thread = threading.Thread(target=self._run_in_thread, daemon=True)
        self._thread.start()

    def start_in_thread_and_destroy(self) -> None:
        """Run run() in a detached thread that nothing keeps track of."""
        threading.Thread(target=self.run, daemon=True).start()

    def lock(self) -> None:
        self._mutex.lock()

    def unlock(self) -> None:
        self._mutex.unlock()

    def try_lock(self) -> bool:
        return self._mutex.try_lock()

    def join(self) -> None:
        """Ask the thread to close and wait for it to end.

        Called from inside the thread itself, the thread is only detached.
        """
        thread = self._thread
        if thread is None:
            return
        self.set_closing(True)
        if thread is not threading.current_thread():
            thread.join()
        self._thread = None
        self._running = False

    def on_thread_finished(self) -> None:
        """Called in the thread after run() has returned; does nothing by default."""
        return None

    def wants_to_close(self) -> bool:
        with self._mutex:
            return self._closing

    def set_closing(self, closing: bool) -> None:
        with self._mutex:
            self._closing = closing


def current_thread_id() -> int:
    """An identifier of the calling thread."""
    return threading.get_ident()


def run_in_thread_and_destroy(thread: Thread) -> None:
    """Run thread's work in a detached thread."""
    thread.start_in_thread_and_destroy()