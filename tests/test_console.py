import io

import pytest

from bootil import console
from bootil.console import ConsoleColor


def test_default_colors():
    assert console.current_colors() == (ConsoleColor.GREY, ConsoleColor.BLACK)


def test_fg_push_pop_restores():
    before = console.current_colors()
    console.fg_color_push(ConsoleColor.RED)
    assert console.current_colors()[0] is ConsoleColor.RED
    console.fg_color_pop()
    assert console.current_colors() == before


def test_bg_push_pop_nested():
    console.bg_color_push(ConsoleColor.BLUE)
    console.bg_color_push(ConsoleColor.GREEN)
    assert console.current_colors()[1] is ConsoleColor.GREEN
    console.bg_color_pop()
    assert console.current_colors()[1] is ConsoleColor.BLUE
    console.bg_color_pop()
    assert console.current_colors()[1] is ConsoleColor.BLACK


def test_pop_without_push_raises():
    with pytest.raises(IndexError):
        console.fg_color_pop()
    with pytest.raises(IndexError):
        console.bg_color_pop()


def test_colors_context_restores_after_error():
    before = console.current_colors()
    with pytest.raises(RuntimeError):
        with console.colors(ConsoleColor.YELLOW, ConsoleColor.WHITE):
            assert console.current_colors() == (ConsoleColor.YELLOW, ConsoleColor.WHITE)
            raise RuntimeError("boom")
    assert console.current_colors() == before


def test_cls_writes_clear_sequence(capsys):
    console.cls()
    assert capsys.readouterr().out == "\033[2J\033[H"


def test_msg_prints_text_and_restores_colors(capsys):
    before = console.current_colors()
    console.msg(ConsoleColor.RED, ConsoleColor.BLACK, "hello there")
    assert capsys.readouterr().out == "hello there"
    assert console.current_colors() == before


def test_control_sequences_not_written_when_not_a_terminal(capsys):
    console.set_cursor_visible(False)
    console.pos_push(3, 4)
    console.pos_pop()
    assert capsys.readouterr().out == ""


def test_pos_pop_without_push_raises():
    with pytest.raises(IndexError):
        console.pos_pop()


def test_pos_push_relative_balanced():
    console.pos_push_relative(2, -1)
    console.pos_pop()
    with pytest.raises(IndexError):
        console.pos_pop()


def test_wait_for_key_reads_one_char(monkeypatch):
    monkeypatch.setattr(console.sys, "stdin", io.StringIO("xy"))
    assert console.wait_for_key() == "x"
    assert console.wait_for_key() == "y"
    assert console.wait_for_key() == ""