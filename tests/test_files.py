import os

import pytest

from bootil import files


def test_bytes_round_trip(tmp_path):
    path = str(tmp_path / "data.bin")
    files.write_bytes(path, b"\x00\x01\xffhello")
    assert files.read_bytes(path) == b"\x00\x01\xffhello"


def test_text_round_trip_and_append(tmp_path):
    path = str(tmp_path / "t.txt")
    files.write_text(path, "line one\r\n")
    files.append(path, "line two")
    assert files.read_text(path) == "line one\r\nline two"


def test_append_creates_file(tmp_path):
    path = str(tmp_path / "new.txt")
    files.append(path, "abc")
    assert files.read_text(path) == "abc"


def test_read_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        files.read_bytes(str(tmp_path / "missing"))
    with pytest.raises(FileNotFoundError):
        files.read_text(str(tmp_path / "missing"))


def test_size_and_missing(tmp_path):
    path = str(tmp_path / "s.bin")
    files.write_bytes(path, b"12345")
    assert files.size(path) == 5
    assert files.size(str(tmp_path / "nope")) == 0


def test_exists_and_is_folder(tmp_path):
    path = str(tmp_path / "f.txt")
    files.write_text(path, "x")
    assert files.exists(path)
    assert not files.exists(str(tmp_path / "nope"))
    assert files.is_folder(str(tmp_path))
    assert not files.is_folder(path)


def test_crc_check_value(tmp_path):
    path = str(tmp_path / "c.txt")
    files.write_bytes(path, b"123456789")
    assert files.crc(path) == 0xCBF43926


def test_crc_missing_is_zero(tmp_path):
    assert files.crc(str(tmp_path / "nope")) == 0


def test_create_folder_recursive(tmp_path):
    target = str(tmp_path / "a" / "b" / "c") + "/"
    assert files.create_folder(target, True) is True
    assert files.is_folder(str(tmp_path / "a" / "b" / "c"))
    assert files.create_folder(target, True) is False


def test_create_folder_backslashes(tmp_path):
    target = str(tmp_path) + "\\made"
    assert files.create_folder(target) is True
    assert files.is_folder(str(tmp_path / "made"))


def test_create_folder_missing_parent_raises(tmp_path):
    with pytest.raises(OSError):
        files.create_folder(str(tmp_path / "x" / "y"))


def test_create_folder_empty(tmp_path):
    assert files.create_folder("") is False


def test_remove_folder_recursive(tmp_path):
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "sub" / "b.txt").write_text("b")
    assert files.remove_folder(str(root), True) is True
    assert not root.exists()


def test_remove_folder_not_folder(tmp_path):
    path = tmp_path / "file.txt"
    path.write_text("x")
    assert files.remove_folder(str(path)) is False
    assert files.remove_folder(str(tmp_path / "nope")) is False


def test_remove_nonempty_folder_without_recursive_raises(tmp_path):
    (tmp_path / "full").mkdir()
    (tmp_path / "full" / "x").write_text("x")
    with pytest.raises(OSError):
        files.remove_folder(str(tmp_path / "full"))


def test_remove_file(tmp_path):
    path = tmp_path / "gone.txt"
    path.write_text("x")
    files.remove_file(str(path))
    assert not path.exists()
    with pytest.raises(FileNotFoundError):
        files.remove_file(str(path))


def test_copy(tmp_path):
    src = str(tmp_path / "src.bin")
    dst = str(tmp_path / "dst.bin")
    files.write_bytes(src, b"payload")
    files.write_bytes(dst, b"old contents that are longer")
    files.copy(src, dst)
    assert files.read_bytes(dst) == b"payload"


def test_copy_missing_source(tmp_path):
    with pytest.raises(OSError):
        files.copy(str(tmp_path / "nope"), str(tmp_path / "dst"))


def test_get_files_in_folder(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "sub" / "b.txt").write_text("b")
    assert files.get_files_in_folder(str(tmp_path), False) == ["a.txt"]
    assert files.get_files_in_folder(str(tmp_path), True) == ["a.txt", "sub/b.txt"]


def test_find_pattern(tmp_path):
    (tmp_path / "dir").mkdir()
    (tmp_path / "one.txt").write_text("1")
    (tmp_path / "two.log").write_text("2")
    found_files, folders = files.find(str(tmp_path) + "/*")
    assert found_files == ["one.txt", "two.log"]
    assert folders == ["dir"]
    txt_files, _ = files.find(str(tmp_path) + "/*.txt")
    assert txt_files == ["one.txt"]


def test_find_up_folders(tmp_path):
    _, folders = files.find(str(tmp_path) + "/*", True)
    assert "." in folders and ".." in folders


def test_relative_to_absolute_is_identity():
    assert files.relative_to_absolute("some/rel/path") == "some/rel/path"


def test_file_system_paths():
    system = files.FileSystem()
    system.add_path("/data//")
    system.add_path("C:\\games\\")
    assert system.paths == ["/data/", "C:\\games/"]


def test_file_system_initial_path():
    assert files.FileSystem("").paths == ["/"]
    assert files.FileSystem("base").paths == ["base/"]


def test_get_temp_dir_from_env(monkeypatch):
    monkeypatch.setenv("TEMP", "C:\\Temp\\")
    assert files.get_temp_dir() == "C:/Temp"


def test_get_temp_filename_unique(monkeypatch, tmp_path):
    monkeypatch.setenv("TEMP", str(tmp_path))
    first = files.get_temp_filename()
    second = files.get_temp_filename()
    assert first != second
    assert first.startswith(files.get_temp_dir() + "/")
    assert not os.path.exists(first)