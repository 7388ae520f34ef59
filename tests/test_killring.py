import pytest

from mgedit.core import CF_KILL, Buffer, BufferFlag, Editor, EditorError
from mgedit.killring import KillDirection, KillRing, kill_line, yank


def make(text, line=1, offset=0):
    buf = Buffer()
    buf.set_text(text)
    ed = Editor(buf)
    ed.window.dot_line = line
    ed.window.dot_offset = offset
    return ed


def test_insert_forward_and_backward():
    ring = KillRing()
    ring.insert("a", KillDirection.FORWARD)
    ring.insert("b", KillDirection.FORWARD)
    ring.insert("c", KillDirection.BACKWARD)
    assert ring.text() == "cab"


def test_insert_none_is_ignored():
    ring = KillRing()
    ring.insert("a", KillDirection.NONE)
    assert ring.text() == ""


def test_remove_indexes_and_bounds():
    ring = KillRing()
    ring.chunk("xyz", KillDirection.FORWARD)
    assert ring.remove(0) == "x"
    assert ring.remove(2) == "z"
    assert ring.remove(3) is None
    assert ring.remove(-1) is None


def test_chunk_on_empty_ring_goes_forward_then_backward():
    ring = KillRing()
    ring.chunk("xy", KillDirection.BACKWARD)
    ring.chunk("z", KillDirection.BACKWARD)
    assert ring.text() == "z" + "xy"


def test_clear():
    ring = KillRing()
    ring.chunk("abc", KillDirection.FORWARD)
    ring.clear()
    assert ring.text() == ""
    assert len(ring) == 0


def test_kill_line_to_end_of_line():
    ed = make("hello world\nnext", 1, 6)
    ring = KillRing()
    assert kill_line(ed, ring) == "world"
    assert ring.text() == "world"
    assert ed.buffer.text() == "hello \nnext"
    assert ed.this_flag & CF_KILL


def test_kill_line_at_end_kills_newline():
    ed = make("hello world\nnext", 1, 11)
    ring = KillRing()
    kill_line(ed, ring)
    assert ring.text() == "\n"
    assert ed.buffer.text() == "hello worldnext"


def test_kill_line_trailing_blanks_take_newline():
    ed = make("ab  \ncd", 1, 2)
    ring = KillRing()
    kill_line(ed, ring)
    assert ring.text() == "  \n"
    assert ed.buffer.text() == "abcd"


def test_kill_line_with_positive_count():
    ed = make("a\nb\nc")
    ring = KillRing()
    kill_line(ed, ring, 2)
    assert ring.text() == "a\nb\n"
    assert ed.buffer.text() == "c"


def test_kill_line_with_zero_kills_to_bol():
    ed = make("abcdef", 1, 3)
    ring = KillRing()
    kill_line(ed, ring, 0)
    assert ring.text() == "abc"
    assert ed.buffer.text() == "def"


def test_kill_line_negative_count():
    ed = make("ab\ncd", 2, 1)
    ring = KillRing()
    kill_line(ed, ring, -1)
    assert ring.text() == "ab\nc"
    assert ed.buffer.text() == "d"


def test_consecutive_kills_append():
    ed = make("one two", 1, 4)
    ring = KillRing()
    ring.chunk("first", KillDirection.FORWARD)
    ed.last_flag = CF_KILL
    kill_line(ed, ring)
    assert ring.text() == "first" + "two"


def test_kill_after_other_command_clears_ring():
    ed = make("one two", 1, 4)
    ring = KillRing()
    ring.chunk("first", KillDirection.FORWARD)
    ed.last_flag = 0
    kill_line(ed, ring)
    assert ring.text() == "two"


def test_kill_then_yank_round_trip():
    original = "alpha\nbeta\ngamma"
    ed = make(original, 1, 0)
    ring = KillRing()
    kill_line(ed, ring, 2)
    yank(ed, ring)
    assert ed.buffer.text() == original
    assert (ed.window.dot_line, ed.window.dot_offset) == (3, 0)


def test_yank_twice_duplicates_and_marks_last_start():
    ed = make("")
    ring = KillRing()
    ring.chunk("ab\n", KillDirection.FORWARD)
    yank(ed, ring, 2)
    assert ed.buffer.text() == "ab\n" * 2
    assert (ed.window.mark_line, ed.window.mark_offset) == (2, 0)


def test_yank_negative_count():
    with pytest.raises(ValueError):
        yank(make("x"), KillRing(), -1)


def test_kill_line_read_only():
    ed = make("text")
    ed.buffer.flags |= BufferFlag.READONLY
    with pytest.raises(EditorError):
        kill_line(ed, KillRing())