import pytest

from bootil import console_input
from bootil.console_input import LineEditor


def _type(editor, text):
    for char in text:
        editor.feed_char(char)


def test_typed_line_is_queued_on_return(capsys):
    editor = LineEditor()
    _type(editor, "abc")
    assert editor.line_in_progress() == "abc"
    editor.on_return()
    assert editor.line_in_progress() == ""
    assert editor.get_line() == "abc"
    assert editor.get_line() == ""


def test_lines_come_out_in_order(capsys):
    editor = LineEditor()
    _type(editor, "one\ntwo\n")
    assert editor.get_line() == "one"
    assert editor.get_line() == "two"


def test_empty_return_queues_nothing(capsys):
    editor = LineEditor()
    editor.on_return()
    assert editor.get_line() == ""


def test_insert_at_caret(capsys):
    editor = LineEditor()
    _type(editor, "ac")
    editor.on_left()
    editor.feed_char("b")
    assert editor.line_in_progress() == "abc"
    assert editor.caret == 2


def test_caret_is_clamped(capsys):
    editor = LineEditor()
    _type(editor, "xy")
    for _ in range(5):
        editor.on_left()
    assert editor.caret == 0
    for _ in range(5):
        editor.on_right()
    assert editor.caret == 2


def test_backspace(capsys):
    editor = LineEditor()
    _type(editor, "abc")
    editor.on_left()
    editor.on_backspace()
    assert editor.line_in_progress() == "ac"
    assert editor.caret == 1
    editor.on_left()
    editor.on_backspace()
    assert editor.line_in_progress() == "ac"
    assert editor.caret == 0


def test_backspace_character_deletes(capsys):
    editor = LineEditor()
    _type(editor, "ab\b")
    assert editor.line_in_progress() == "a"


def test_key_reader_is_polled(capsys):
    keys = iter("hi\n")
    editor = LineEditor(read_key=lambda: next(keys, ""))
    assert editor.get_line() == "hi"


def test_flush_keeps_queued_lines(capsys):
    editor = LineEditor()
    _type(editor, "done\npartial")
    editor.flush()
    assert editor.line_in_progress() == ""
    assert editor.caret == 0
    assert editor.get_line() == "done"


def test_feed_char_rejects_strings():
    with pytest.raises(ValueError):
        LineEditor().feed_char("ab")


def test_output_hooks_do_nothing_when_empty(capsys):
    editor = LineEditor()
    editor.pre_output()
    editor.post_output()
    assert capsys.readouterr().out == ""


def test_post_output_redraws_line(capsys):
    editor = LineEditor()
    _type(editor, "cmd")
    capsys.readouterr()
    editor.post_output()
    assert "> cmd" in capsys.readouterr().out


def test_module_functions(capsys):
    console_input.flush()
    assert console_input.get_line_in_progress() == ""
    assert console_input.get_line() == ""