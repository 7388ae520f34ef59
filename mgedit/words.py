"""Word commands: motion, case conversion, killing and transposition."""

from __future__ import annotations

from typing import Callable

from mgedit.chars import is_lower, is_upper, is_word, to_lower, to_upper
from mgedit.core import CF_KILL, REDRAW_FULL, BufferFlag, Editor, EditorError
from mgedit.killring import KillDirection, KillRing


def _word_char(ch: str) -> bool:
    return bool(ch) and ord(ch) < 0x100 and is_word(ch)


def _line_text(editor: Editor) -> str:
    return editor.buffer.lines[editor.window.dot_line - 1].text


def _check_writable(editor: Editor) -> None:
    if editor.buffer.flags & BufferFlag.READONLY:
        raise EditorError("Buffer is read-only")


def _check_count(n: int) -> None:
    if n < 0:
        raise ValueError("count must not be negative")


def _begin_kill(editor: Editor, ring: KillRing) -> None:
    if not editor.last_flag & CF_KILL:
        ring.clear()
    editor.this_flag |= CF_KILL


def _set_char(editor: Editor, ch: str) -> None:
    """Overwrite the character under dot."""
    win = editor.window
    line = editor.buffer.lines[win.dot_line - 1]
    off = win.dot_offset
    line.text = line.text[:off] + ch + line.text[off + 1:]
    editor.buffer.flags |= BufferFlag.CHANGED
    for other in editor.windows:
        if other.buffer is editor.buffer:
            other.redisplay |= REDRAW_FULL


def _upper(ch: str) -> str:
    return to_upper(ch) if ord(ch) < 0x100 and is_lower(ch) else ch


def _lower(ch: str) -> str:
    return to_lower(ch) if ord(ch) < 0x100 and is_upper(ch) else ch


def in_word(editor: Editor) -> bool:
    """True if the character under dot is part of a word."""
    text = _line_text(editor)
    offset = editor.window.dot_offset
    return offset < len(text) and _word_char(text[offset])


def backward_word(editor: Editor, n: int = 1) -> bool:
    """Move dot back ``n`` words; False only if dot was at the buffer start."""
    if n < 0:
        return forward_word(editor, -n)
    if not editor.backward_char(1):
        return False
    for _ in range(n):
        while not in_word(editor):
            if not editor.backward_char(1):
                return True
        while in_word(editor):
            if not editor.backward_char(1):
                return True
    return editor.forward_char(1)


def forward_word(editor: Editor, n: int = 1) -> bool:
    """Move dot forward past ``n`` words."""
    if n < 0:
        return backward_word(editor, -n)
    for _ in range(n):
        while not in_word(editor):
            if not editor.forward_char(1):
                return True
        while in_word(editor):
            if not editor.forward_char(1):
                return True
    return True


def _recase(
    editor: Editor,
    n: int,
    first: Callable[[str], str],
    rest: Callable[[str], str],
) -> None:
    _check_writable(editor)
    _check_count(n)
    for _ in range(n):
        while not in_word(editor):
            if not editor.forward_char(1):
                return
        at_start = True
        while in_word(editor):
            ch = editor.char_at_dot()
            converted = first(ch) if at_start else rest(ch)
            if converted != ch:
                _set_char(editor, converted)
            at_start = False
            if not editor.forward_char(1):
                return


def upper_word(editor: Editor, n: int = 1) -> None:
    """Move forward over ``n`` words, converting them to upper case."""
    _recase(editor, n, _upper, _upper)


def lower_word(editor: Editor, n: int = 1) -> None:
    """Move forward over ``n`` words, converting them to lower case."""
    _recase(editor, n, _lower, _lower)


def capitalize_word(editor: Editor, n: int = 1) -> None:
    """Move forward over ``n`` words, capitalising each one."""
    _recase(editor, n, _upper, _lower)


def count_word(editor: Editor) -> int:
    """The number of word characters from dot onward; dot does not move."""
    win = editor.window
    saved = win.dot_line, win.dot_offset
    size = 0
    while in_word(editor):
        if not editor.forward_char(1):
            break
        size += 1
    win.dot_line, win.dot_offset = saved
    return size


def delete_forward_word(editor: Editor, ring: KillRing, n: int = 1) -> str:
    """Kill forward over ``n`` words; returns the killed text."""
    _check_writable(editor)
    _check_count(n)
    _begin_kill(editor, ring)
    win = editor.window
    saved = win.dot_line, win.dot_offset
    size = 0
    done = False
    for _ in range(n):
        while not in_word(editor):
            if not editor.forward_char(1):
                done = True
                break
            size += 1
        if done:
            break
        while in_word(editor):
            if not editor.forward_char(1):
                done = True
                break
            size += 1
        if done:
            break
    win.dot_line, win.dot_offset = saved
    removed = editor.delete(size)
    ring.chunk(removed, KillDirection.FORWARD)
    return removed


def delete_backward_word(editor: Editor, ring: KillRing, n: int = 1) -> str:
    """Kill backward over ``n`` words; returns the killed text."""
    _check_writable(editor)
    _check_count(n)
    _begin_kill(editor, ring)
    if not editor.backward_char(1):
        return ""
    size = 1
    hit_start = False
    for _ in range(n):
        while not in_word(editor):
            if not editor.backward_char(1):
                hit_start = True
                break
            size += 1
        if hit_start:
            break
        while in_word(editor):
            if not editor.backward_char(1):
                hit_start = True
                break
            size += 1
        if hit_start:
            break
    if not hit_start:
        editor.forward_char(1)
        size -= 1
    removed = editor.delete(size)
    ring.chunk(removed, KillDirection.BACKWARD)
    return removed


def _grab_word(editor: Editor) -> str:
    """Delete the word characters at dot and return them."""
    grabbed = []
    while in_word(editor):
        grabbed.append(editor.char_at_dot())
        editor.delete(1)
    return "".join(grabbed)


def transpose_words(editor: Editor) -> None:
    """Swap the word before dot with the word after it."""
    _check_writable(editor)
    win = editor.window
    backward_word(editor, 1)
    word1 = _grab_word(editor)
    if not word1:
        raise EditorError("No word to the left to tranpose.")

    first = win.dot_line, win.dot_offset
    indent = 0
    crossed_line = False
    leave = False
    while not in_word(editor):
        if not editor.forward_char(1):
            leave = True
            editor.messages.append("Don't have two things to transpose")
            break
        if win.dot_offset == 0:
            crossed_line = True
            indent = 0
        elif crossed_line:
            indent += 1

    if leave:
        second = first
    else:
        second_line, second_offset = win.dot_line, win.dot_offset
        word2 = _grab_word(editor)
        second_offset += len(word2)
        win.dot_line, win.dot_offset = first
        editor.insert(word2)
        if crossed_line:
            second_offset = indent
        second = second_line, second_offset

    win.dot_line, win.dot_offset = second
    editor.insert(word1)
    if leave:
        backward_word(editor, 1)