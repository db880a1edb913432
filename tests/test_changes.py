import os

import pytest

from bootil.changes import ChangeMonitor


def _drain(monitor):
    changes = []
    while monitor.has_changes():
        changes.append(monitor.get_change())
    return changes


def test_missing_folder_raises(tmp_path):
    monitor = ChangeMonitor()
    with pytest.raises(FileNotFoundError):
        monitor.watch_folder(str(tmp_path / "nope"))


def test_file_instead_of_folder_raises(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("x")
    with pytest.raises(NotADirectoryError):
        ChangeMonitor().watch_folder(str(path))


def test_no_changes_initially(tmp_path):
    (tmp_path / "existing.txt").write_text("x")
    monitor = ChangeMonitor()
    monitor.watch_folder(str(tmp_path))
    assert monitor.has_changes() is False
    assert monitor.get_change() == ""


def test_folder_name(tmp_path):
    monitor = ChangeMonitor()
    monitor.watch_folder(str(tmp_path))
    assert monitor.folder_name == str(tmp_path)


def test_created_file_reported(tmp_path):
    monitor = ChangeMonitor()
    monitor.watch_folder(str(tmp_path))
    (tmp_path / "new.txt").write_text("hello")
    assert _drain(monitor) == ["new.txt"]
    assert monitor.has_changes() is False


def test_modified_file_reported(tmp_path):
    path = tmp_path / "m.txt"
    path.write_text("abc")
    monitor = ChangeMonitor()
    monitor.watch_folder(str(tmp_path))
    stat = os.stat(path)
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 5_000_000_000))
    assert _drain(monitor) == ["m.txt"]


def test_deleted_file_reported(tmp_path):
    path = tmp_path / "d.txt"
    path.write_text("abc")
    monitor = ChangeMonitor()
    monitor.watch_folder(str(tmp_path))
    path.unlink()
    assert _drain(monitor) == ["d.txt"]


def test_changes_are_not_duplicated(tmp_path):
    monitor = ChangeMonitor()
    monitor.watch_folder(str(tmp_path))
    path = tmp_path / "dup.txt"
    path.write_text("a")
    assert monitor.has_changes() is True
    path.write_text("abcdef")
    assert monitor.has_changes() is True
    assert monitor.get_change() == "dup.txt"
    assert monitor.get_change() == ""


def test_multiple_files(tmp_path):
    monitor = ChangeMonitor()
    monitor.watch_folder(str(tmp_path))
    (tmp_path / "one").write_text("1")
    (tmp_path / "two").write_text("2")
    assert sorted(_drain(monitor)) == ["one", "two"]


def test_subtree_changes_use_relative_path(tmp_path):
    (tmp_path / "sub").mkdir()
    monitor = ChangeMonitor()
    monitor.watch_folder(str(tmp_path), True)
    (tmp_path / "sub" / "x.txt").write_text("x")
    assert _drain(monitor) == ["sub/x.txt"]


def test_without_subtree_nested_changes_ignored(tmp_path):
    (tmp_path / "sub").mkdir()
    monitor = ChangeMonitor()
    monitor.watch_folder(str(tmp_path), False)
    (tmp_path / "sub" / "x.txt").write_text("x")
    assert monitor.has_changes() is False


def test_stop_ends_watching(tmp_path):
    monitor = ChangeMonitor()
    monitor.watch_folder(str(tmp_path))
    monitor.stop()
    (tmp_path / "late.txt").write_text("x")
    assert monitor.has_changes() is False


def test_context_manager_stops(tmp_path):
    with ChangeMonitor() as monitor:
        monitor.watch_folder(str(tmp_path))
        (tmp_path / "inside.txt").write_text("x")
        assert monitor.has_changes() is True
        assert monitor.get_change() == "inside.txt"
    (tmp_path / "after.txt").write_text("x")
    assert monitor.has_changes() is False