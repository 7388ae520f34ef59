import pytest

from mgedit.core import CF_KILL, Buffer, BufferFlag, Editor, EditorError
from mgedit.killring import KillDirection, KillRing
from mgedit.words import (
    backward_word,
    capitalize_word,
    count_word,
    delete_backward_word,
    delete_forward_word,
    forward_word,
    in_word,
    lower_word,
    transpose_words,
    upper_word,
)


def make(text, line=1, offset=0):
    buf = Buffer()
    buf.set_text(text)
    ed = Editor(buf)
    ed.window.dot_line = line
    ed.window.dot_offset = offset
    return ed


def test_in_word():
    ed = make("ab cd", offset=0)
    assert in_word(ed) is True
    ed.window.dot_offset = 2
    assert in_word(ed) is False
    ed.window.dot_offset = 5
    assert in_word(ed) is False


def test_forward_word_moves_past_word():
    ed = make("hello world")
    assert forward_word(ed, 1) is True
    assert ed.window.dot_offset == len("hello")


def test_forward_then_backward_round_trip():
    ed = make("alpha beta gamma", offset=len("alpha "))
    forward_word(ed, 1)
    backward_word(ed, 1)
    assert ed.window.dot_offset == len("alpha ")


def test_backward_word_at_start_fails():
    ed = make("hello")
    assert backward_word(ed, 1) is False
    assert ed.window.dot_offset == 0


def test_negative_counts_reverse_direction():
    ed = make("one two")
    forward_word(ed, -1)
    assert ed.window.dot_offset == 0
    ed.window.dot_offset = 0
    backward_word(ed, -1)
    assert ed.window.dot_offset == len("one")


def test_upper_word():
    ed = make("hello world")
    upper_word(ed, 1)
    assert ed.buffer.text() == "hello".upper() + " world"
    assert ed.buffer.flags & BufferFlag.CHANGED


def test_lower_word_two_words():
    ed = make("ONE TWO THREE")
    lower_word(ed, 2)
    assert ed.buffer.text() == "one two THREE"


def test_capitalize_word():
    ed = make("hELLO wORLD")
    capitalize_word(ed, 2)
    assert ed.buffer.text() == "hello world".title()


def test_case_commands_refuse_read_only():
    ed = make("abc")
    ed.buffer.flags |= BufferFlag.READONLY
    with pytest.raises(EditorError):
        upper_word(ed, 1)
    assert ed.buffer.text() == "abc"


def test_case_commands_reject_negative():
    ed = make("abc")
    with pytest.raises(ValueError):
        lower_word(ed, -1)


def test_count_word_keeps_dot():
    ed = make("hello world", offset=1)
    assert count_word(ed) == len("ello")
    assert ed.window.dot_offset == 1


def test_delete_forward_word():
    ed = make("foo bar baz")
    ring = KillRing()
    removed = delete_forward_word(ed, ring, 1)
    assert removed == "foo"
    assert ed.buffer.text() == " bar baz"
    assert ring.text() == "foo"


def test_delete_forward_two_words():
    ed = make("foo bar baz")
    ring = KillRing()
    removed = delete_forward_word(ed, ring, 2)
    assert removed == "foo bar"
    assert ed.buffer.text() == " baz"


def test_delete_backward_word():
    ed = make("foo bar", offset=7)
    ring = KillRing()
    removed = delete_backward_word(ed, ring, 1)
    assert removed == "bar"
    assert ed.buffer.text() == "foo "
    assert ring.text() == "bar"


def test_delete_backward_word_at_start():
    ed = make("foo")
    ring = KillRing()
    assert delete_backward_word(ed, ring, 1) == ""
    assert ed.buffer.text() == "foo"


def test_consecutive_kills_accumulate():
    ed = make("foo bar", offset=7)
    ring = KillRing()
    ring.chunk(" tail", KillDirection.FORWARD)
    ed.last_flag = CF_KILL
    removed = delete_backward_word(ed, ring, 1)
    assert ring.text() == removed + " tail"


def test_kill_without_previous_kill_clears_ring():
    ed = make("foo bar")
    ring = KillRing()
    ring.chunk("old", KillDirection.FORWARD)
    removed = delete_forward_word(ed, ring, 1)
    assert ring.text() == removed


def test_transpose_words_same_line():
    ed = make("foo bar", offset=4)
    transpose_words(ed)
    assert ed.buffer.text() == "bar foo"
    assert ed.window.dot_offset == len("bar foo")


def test_transpose_words_across_lines():
    ed = make("foo\n  bar", line=2, offset=2)
    transpose_words(ed)
    assert ed.buffer.text() == "bar\n  foo"


def test_transpose_single_word_leaves_text():
    ed = make("foo", offset=3)
    transpose_words(ed)
    assert ed.buffer.text() == "foo"
    assert "Don't have two things to transpose" in ed.messages


def test_transpose_without_left_word_raises():
    ed = make("  foo")
    with pytest.raises(EditorError):
        transpose_words(ed)