"""Operating-system queries and helpers: names, folders, files, processes, time."""

from __future__ import annotations

import logging
import os
import re
import select
import subprocess
import sys
import tempfile
import time
import uuid
import webbrowser
from typing import Optional

_log = logging.getLogger("bootil")

_last_errno = 0
_start_seconds: Optional[int] = None


def last_error() -> str:
    """Description of the last operating-system error seen by this module."""
    return os.strerror(_last_errno)


def format_system_error(error_id: int) -> str:
    return os.strerror(error_id)


def full_program_name() -> str:
    """The program name as it was invoked."""
    return sys.argv[0] if sys.argv and sys.argv[0] else sys.executable


def program_name() -> str:
    return os.path.basename(full_program_name())


def program_folder() -> str:
    return os.path.dirname(full_program_name())


def current_user_name() -> str:
    try:
        import pwd

        return pwd.getpwuid(os.geteuid()).pw_name
    except (ImportError, KeyError, AttributeError):
        return "<UNKNOWN>"


def current_dir() -> str:
    return os.getcwd()


def change_dir(name: str) -> None:
    """Change the working directory; raises OSError on failure."""
    global _last_errno
    try:
        os.chdir(name)
    except OSError as exc:
        _last_errno = exc.errno or 0
        raise


def temporary_dir() -> str:
    if os.name == "posix":
        return "/tmp"
    return tempfile.gettempdir().replace("\\", "/")


def temporary_filename() -> str:
    """A fresh, unused name inside the temporary folder."""
    return f"{temporary_dir()}/{uuid.uuid4().hex}".replace("\\", "/")


def setup_association(ext: str) -> None:
    """File associations are not registered on this platform; logged only."""
    _log.debug("file association for %s not supported here", ext)


def desktop_width() -> int:
    return 800


def desktop_height() -> int:
    return 600


def popup(name: str, text: str) -> bool:
    """Report a popup message; there is no dialog, so it is logged."""
    _log.info("%s: %s", name, text)
    return True


def debugger_output(text: str) -> None:
    """Send text to the debug log."""
    _log.debug("%s", text)


def wildcard_match(pattern: str, text: str) -> bool:
    """Match text against pattern where '*' is any run and '?' any character."""
    regex = "".join(
        ".*" if char == "*" else "." if char == "?" else re.escape(char)
        for char in pattern
    )
    return re.fullmatch(regex, text, re.DOTALL) is not None


def find_files(pattern: str, up_folders: bool = False) -> tuple[list[str], list[str]]:
    """Names of files and folders in pattern's folder that match its last part.

    '.' and '..' are only included when up_folders is true. A missing folder
    gives two empty lists.
    """
    folder = os.path.dirname(pattern) or "."
    wanted = os.path.basename(pattern)
    try:
        entries = sorted(os.listdir(folder))
    except OSError:
        return [], []
    files: list[str] = []
    folders: list[str] = []
    for name in [".", "..", *entries]:
        if not wildcard_match(wanted, name):
            continue
        if os.path.isdir(os.path.join(folder, name)):
            if up_folders or name not in (".", ".."):
                folders.append(name)
        else:
            files.append(name)
    return files, folders


def open_webpage(url: str) -> None:
    webbrowser.open(url)


def start_process(process: str, wait: bool = True) -> Optional[int]:
    """Start a program; when wait is true, return its exit status."""
    child = subprocess.Popen([process])
    if wait:
        return child.wait()
    return None


def sleep(ms: int) -> None:
    time.sleep(ms / 1000)


def platform_name() -> str:
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "osx"
    return "unknown"


def platform_name_short() -> str:
    return {"linux": "LIN", "windows": "WIN", "osx": "OSX"}.get(platform_name(), "UNK")


def architecture() -> str:
    return "64" if sys.maxsize > 2**32 else "32"


def get_milliseconds() -> int:
    """Milliseconds counted from the whole second of the first call."""
    global _start_seconds
    now = time.time()
    if _start_seconds is None:
        _start_seconds = int(now)
    return int((now - _start_seconds) * 1000)


def get_absolute_path(path: str) -> str:
    return os.path.abspath(path)


def is_key_pressed() -> bool:
    """True if standard input has data waiting."""
    try:
        ready, _, _ = select.select([sys.stdin], [], [], 0)
    except (OSError, ValueError, AttributeError, TypeError):
        return False
    return bool(ready)


def get_key_char() -> str:
    return sys.stdin.read(1)