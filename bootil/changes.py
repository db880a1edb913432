"""Watches folders and reports the names of entries that changed."""

from __future__ import annotations

import os
from typing import Optional

from bootil import files

_Signature = tuple


def _snapshot(directory: str) -> dict[str, _Signature]:
    """Map each entry name in directory to a signature that changes with it."""
    result: dict[str, _Signature] = {}
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        result[entry.name] = ("dir",)
                        continue
                    st = entry.stat(follow_symlinks=False)
                except OSError:
                    continue
                result[entry.name] = (st.st_mode, st.st_size, st.st_mtime_ns, st.st_ino)
    except OSError:
        return {}
    return result


def _subdirectories(path: str) -> list[str]:
    found: list[str] = []
    _, folders = files.find(path + "/*")
    for name in folders:
        child = f"{path}/{name}"
        found.append(child)
        if not os.path.islink(child):
            found.extend(_subdirectories(child))
    return found


class ChangeMonitor:
    """Reports files created, changed or removed in a folder.

    Call has_changes() regularly; each call compares the watched folders
    with how they looked last time. get_change() returns the oldest
    pending change as a path relative to the watched folder.
    """

    def __init__(self) -> None:
        self._folder = ""
        self._watch_subtree = False
        self._snapshots: dict[str, dict[str, _Signature]] = {}
        self._changes: list[str] = []

    def __enter__(self) -> ChangeMonitor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    @property
    def folder_name(self) -> str:
        return self._folder

    def watch_folder(self, folder: str, watch_subtree: bool = False) -> None:
        """Start watching folder, and with watch_subtree its subfolders too.

        Subfolders are those present now. Raises FileNotFoundError or
        NotADirectoryError if folder cannot be watched.
        """
        self.stop()
        if not os.path.exists(folder):
            raise FileNotFoundError(f"no such folder: {folder}")
        if not os.path.isdir(folder):
            raise NotADirectoryError(f"not a folder: {folder}")
        self._folder = folder
        self._watch_subtree = watch_subtree
        directories = [folder]
        if watch_subtree:
            directories.extend(_subdirectories(folder))
        self._snapshots = {directory: _snapshot(directory) for directory in directories}
        self._check_for_changes()

    def stop(self) -> None:
        """Stop watching; changes already noted stay pending."""
        self._snapshots = {}

    def has_changes(self) -> bool:
        self._check_for_changes()
        return bool(self._changes)

    def get_change(self) -> str:
        """The oldest pending change, or an empty string if there is none."""
        if not self._changes:
            return ""
        return self._changes.pop(0)

    def _note_file_changed(self, name: str) -> None:
        if name not in self._changes:
            self._changes.append(name)

    def _prefix(self, directory: str) -> str:
        if directory == self._folder:
            return ""
        return directory[len(self._folder) + 1 :] + "/"

    def _check_for_changes(self) -> None:
        for directory, old in list(self._snapshots.items()):
            new = _snapshot(directory)
            prefix: Optional[str] = None
            for name in sorted(old.keys() | new.keys()):
                if old.get(name) != new.get(name):
                    if prefix is None:
                        prefix = self._prefix(directory)
                    self._note_file_changed(prefix + name)
            self._snapshots[directory] = new