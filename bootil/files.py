"""File and folder helpers, and a list of search paths."""

from __future__ import annotations

import os
import shutil
import uuid
import zlib
from typing import Optional, Union

from bootil import platform


def relative_to_absolute(path: Union[str, "os.PathLike[str]"]) -> str:
    """Return path as a string; paths are otherwise used as given."""
    return os.fspath(path)


def find(pattern: str, up_folders: bool = False) -> tuple[list[str], list[str]]:
    """Files and folders matching a wildcard pattern such as 'dir/*.txt'."""
    return platform.find_files(pattern, up_folders)


def get_files_in_folder(folder: str, recursive: bool = False) -> list[str]:
    """Names of the files in folder; with recursive, 'sub/name' for nested ones."""
    files, folders = find(folder + "/*")
    result = list(files)
    if not recursive:
        return result
    for sub in folders:
        result.extend(
            f"{sub}/{name}" for name in get_files_in_folder(f"{folder}/{sub}", True)
        )
    return result


def exists(path: str) -> bool:
    return os.path.exists(path)


def size(path: str) -> int:
    """Size of the file in bytes, or 0 if it cannot be examined."""
    try:
        return os.stat(path).st_size
    except OSError:
        return 0


def crc(path: str) -> int:
    """CRC-32 of the file's contents, or 0 if it cannot be read."""
    try:
        data = read_bytes(path)
    except OSError:
        return 0
    return zlib.crc32(data) & 0xFFFFFFFF


def read_bytes(path: str) -> bytes:
    with open(path, "rb") as handle:
        return handle.read()


def read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8", newline="") as handle:
        return handle.read()


def write_bytes(path: str, data: bytes) -> None:
    with open(path, "wb") as handle:
        handle.write(data)


def write_text(path: str, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def append(path: str, text: str) -> None:
    with open(path, "a", encoding="utf-8", newline="") as handle:
        handle.write(text)


def is_folder(path: str) -> bool:
    return os.path.isdir(path)


def create_folder(path: str, recursive: bool = False) -> bool:
    """Create a folder; return False if there is nothing to do.

    With recursive, missing parent folders are created first. Raises
    OSError if the folder itself cannot be created.
    """
    fixed = path.replace("\\", "/").rstrip("/")
    if not path or not fixed:
        return False
    if is_folder(fixed):
        return False
    if recursive:
        parent = os.path.dirname(fixed)
        if parent and parent != fixed:
            try:
                create_folder(parent, True)
            except OSError:
                pass
    os.mkdir(fixed)
    return True


def remove_folder(path: str, recursive: bool = False) -> bool:
    """Remove a folder, and with recursive everything inside it.

    Returns False if path is not a folder; raises OSError on failure.
    """
    if not is_folder(path):
        return False
    if recursive:
        files, folders = find(path + "/*")
        for name in files:
            remove_file(f"{path}/{name}")
        for name in folders:
            child = f"{path}/{name}"
            if os.path.islink(child):
                remove_file(child)
            else:
                remove_folder(child, True)
    os.rmdir(path)
    return True


def remove_file(path: str) -> None:
    """Delete a file; raises OSError if it cannot be removed."""
    os.unlink(path)


def copy(source: str, target: str) -> None:
    """Copy a file's contents over target; raises OSError on failure."""
    shutil.copyfile(source, target)


def get_temp_dir() -> str:
    """The temporary folder, from TEMP if set, with forward slashes."""
    name = os.environ.get("TEMP") or platform.temporary_dir()
    name = name.replace("\\", "/").rstrip("/")
    return name or "/"


def get_temp_filename() -> str:
    """A fresh, unused file name inside the temporary folder."""
    return f"{get_temp_dir().rstrip('/')}/{uuid.uuid4().hex}"


class FileSystem:
    """An ordered list of base folders, each stored with one trailing slash."""

    def __init__(self, initial_path: Optional[str] = None) -> None:
        self.paths: list[str] = []
        if initial_path is not None:
            self.add_path(initial_path)

    def add_path(self, path: str) -> None:
        path = relative_to_absolute(path)
        path = path.rstrip("/").rstrip("\\")
        self.paths.append(path + "/")


file_system = FileSystem("")