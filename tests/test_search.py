import pytest

from mgedit.core import Buffer, BufferFlag, Editor, EditorError
from mgedit.search import QUERY_HELP, SearchDirection, Searcher, chars_equal


def make_editor(text, line=1, offset=0):
    buf = Buffer()
    buf.set_text(text)
    ed = Editor(buf)
    ed.window.dot_line = line
    ed.window.dot_offset = offset
    return ed


def dot(ed):
    return ed.window.dot_line, ed.window.dot_offset


@pytest.mark.parametrize(
    "bc, pc, exact, expected",
    [
        ("a", "a", False, True),
        ("A", "a", False, True),
        ("a", "A", False, True),
        ("a", "A", True, False),
        ("x", "y", False, False),
        (ord("B"), ord("b"), False, True),
    ],
)
def test_chars_equal(bc, pc, exact, expected):
    assert chars_equal(bc, pc, exact) is expected


def test_forward_leaves_dot_after_match():
    ed = make_editor("hello world")
    s = Searcher("world")
    s.forward(ed)
    assert dot(ed) == (1, len("hello world"))
    assert s.last_direction is SearchDirection.FORWARD


def test_forward_lower_pattern_ignores_case():
    ed = make_editor("say HELLO")
    s = Searcher("hello")
    s.forward(ed)
    assert dot(ed) == (1, len("say HELLO"))


def test_forward_upper_pattern_is_exact():
    ed = make_editor("say hello")
    s = Searcher("Hello")
    with pytest.raises(EditorError, match="Search failed"):
        s.forward(ed)
    assert dot(ed) == (1, 0)
    assert s.last_direction is SearchDirection.NONE


def test_forward_across_newline():
    ed = make_editor("ab\ncd")
    s = Searcher("b\nc")
    s.forward(ed)
    assert dot(ed) == (2, 1)


def test_backward_finds_previous_matches():
    ed = make_editor("abc abc", 1, 7)
    s = Searcher("abc")
    s.backward(ed)
    assert dot(ed) == (1, 4)
    s.search_again(ed)
    assert dot(ed) == (1, 0)
    with pytest.raises(EditorError):
        s.search_again(ed)


def test_backward_across_newline():
    ed = make_editor("ab\ncd", 2, 2)
    s = Searcher("b\nc")
    s.backward(ed)
    assert dot(ed) == (1, 1)


def test_search_again_without_last_search():
    ed = make_editor("text")
    with pytest.raises(EditorError, match="No last search"):
        Searcher("t").search_again(ed)


def test_search_again_repeats_forward():
    ed = make_editor("x.x.x")
    s = Searcher("x")
    s.forward(ed)
    first = dot(ed)
    s.search_again(ed)
    assert dot(ed) > first


def test_empty_pattern_is_an_error():
    ed = make_editor("text")
    with pytest.raises(EditorError):
        Searcher().forward(ed)


def test_replace_all():
    ed = make_editor("foo bar foo")
    s = Searcher("foo")
    assert s.replace_all(ed, "baz") == 2
    assert ed.buffer.text() == "baz bar baz"
    assert ed.messages[-1] == "Replaced 2 occurrences"


def test_replace_all_single_message():
    ed = make_editor("one two")
    assert Searcher("two").replace_all(ed, "2") == 1
    assert ed.buffer.text() == "one 2"
    assert ed.messages[-1] == "Replaced 1 occurrence"


def test_replace_all_read_only():
    ed = make_editor("foo")
    ed.buffer.flags |= BufferFlag.READONLY
    with pytest.raises(EditorError):
        Searcher("foo").replace_all(ed, "bar")
    assert ed.buffer.text() == "foo"


def test_query_replace_skip_then_replace():
    ed = make_editor("a a a")
    count = Searcher("a").query_replace(ed, "b", "ny")
    assert count == 1
    assert ed.buffer.text() == "a b a"


def test_query_replace_bang_replaces_rest():
    ed = make_editor("a a a")
    assert Searcher("a").query_replace(ed, "b", "n!") == 2
    assert ed.buffer.text() == "a b b"


def test_query_replace_dot_stops():
    ed = make_editor("a a a")
    assert Searcher("a").query_replace(ed, "b", ".yyy") == 1
    assert ed.buffer.text() == "b a a"


def test_query_replace_quit_key():
    ed = make_editor("a a")
    assert Searcher("a").query_replace(ed, "b", ["\r", "y"]) == 0
    assert ed.buffer.text() == "a a"


def test_query_replace_unknown_key_shows_help():
    ed = make_editor("a")
    assert Searcher("a").query_replace(ed, "b", "?y") == 1
    assert QUERY_HELP in ed.messages
    assert ed.buffer.text() == "b"


def test_zap_including():
    ed = make_editor("hello world")
    s = Searcher()
    killed = s.zap(ed, "o", 1, True)
    assert killed == "hello"
    assert ed.buffer.text() == " world"
    assert s.ring.text() == "hello"
    assert ed.window.mark_line is None


def test_zap_up_to():
    ed = make_editor("hello world")
    Searcher().zap(ed, "o", 1, False)
    assert ed.buffer.text() == "o world"


def test_zap_backward():
    ed = make_editor("hello world", 1, 11)
    Searcher().zap(ed, "o", -1, True)
    assert ed.buffer.text() == "hello w"


def test_zap_backward_up_to():
    ed = make_editor("hello world", 1, 11)
    Searcher().zap(ed, "o", -1, False)
    assert ed.buffer.text() == "hello wo"


def test_zap_failure_restores_dot():
    ed = make_editor("hello world", 1, 2)
    with pytest.raises(EditorError, match="Search failed"):
        Searcher().zap(ed, "w", 2, True)
    assert dot(ed) == (1, 2)
    assert ed.window.mark_line is None
    assert ed.buffer.text() == "hello world"


def test_zap_quit():
    ed = make_editor("abc")
    with pytest.raises(EditorError):
        Searcher().zap(ed, "\x07", 1, True)
    assert ed.buffer.text() == "abc"


def test_zap_zero_count_does_nothing():
    ed = make_editor("abc")
    assert Searcher().zap(ed, "c", 0, True) == ""
    assert ed.buffer.text() == "abc"