"""Assorted text commands: whitespace handling, indentation, twiddling."""

from __future__ import annotations

from mgedit.chars import is_ctrl
from mgedit.core import REDRAW_EDIT, REDRAW_MOVE, BufferFlag, Editor, EditorError, Window

_SPACE = frozenset(" \t\n\v\f\r")


def _text(editor: Editor) -> str:
    return editor.buffer.lines[editor.window.dot_line - 1].text


def _check_count(n: int) -> None:
    if n < 0:
        raise ValueError("count must not be negative")


def _backdel(editor: Editor, n: int = 1) -> None:
    if editor.backward_char(n):
        editor.delete(n)


def _indent(editor: Editor, cols: int) -> None:
    """Insert whitespace filling ``cols`` columns, honouring no-tab mode."""
    if editor.buffer.flags & BufferFlag.NOTAB:
        editor.insert(" ", cols)
        return
    tabs, spaces = divmod(cols, 8)
    editor.insert("\t", tabs)
    editor.insert(" ", spaces)


def next_tab_stop(col: int, tab_width: int) -> int:
    """The next tab stop after column ``col``."""
    return ((col + tab_width) // tab_width) * tab_width


def column_position(window: Window) -> int:
    """The display column of dot in ``window``."""
    buf = window.buffer
    text = buf.lines[window.dot_line - 1].text[: window.dot_offset]
    col = 0
    for ch in text:
        code = ord(ch)
        if ch == "\t":
            col = next_tab_stop(col, buf.tab_width)
        elif code < 0x100 and is_ctrl(code):
            col += 2
        elif code < 0x80 or code >= 0x100:
            col += 1
        else:
            col += len(f"\\{code:o}")
    return col


def cursor_position(editor: Editor) -> str:
    """Describe the location of dot; the text is also added to the messages."""
    buf = editor.buffer
    win = editor.window
    nl_code = ord(buf.newline[0])
    count = buf.line_count()
    nchar = cchar = cbyte = 0
    for number, line in enumerate(buf.lines, 1):
        if number == win.dot_line:
            cchar = nchar + win.dot_offset
            if win.dot_offset == len(line):
                cbyte = nl_code
            else:
                cbyte = ord(line.text[win.dot_offset])
        nchar += len(line)
        if number < count:
            nchar += 1
    label = "Char:"
    if cbyte == nl_code and win.dot_line == count:
        cbyte = -1
        label = "(EOB)"
    if win.dot_line >= win.top_line:
        row = win.top_row + 1 + win.dot_line - win.top_line
        size = len(buf.lines[win.dot_line - 1])
    else:
        row = win.top_row + 1 + count - win.top_line + 1
        size = 0
    ratio = (100 * cchar) // nchar if nchar else 100
    message = (
        f"{label} {chr(cbyte & 0xFF)} (0{cbyte & 0xFFFFFFFF:o})"
        f"  point={cchar}({ratio}%)  line={win.dot_line}  row={row}"
        f"  col={column_position(win)}"
        f"  (blines={count} rlines={count} l_size={size})"
    )
    editor.messages.append(message)
    return message


def twiddle(editor: Editor) -> None:
    """Swap the characters before and under dot, then move forward."""
    win = editor.window
    text = _text(editor)
    doto = win.dot_offset
    if doto == 0 and win.dot_line == 1:
        raise EditorError("Beginning of buffer")
    if doto == len(text) and win.dot_line == editor.buffer.line_count():
        raise EditorError("End of buffer")
    if doto == 0 and not text:
        win.dot_line += 1
        win.dot_offset = 0
        win.redisplay |= REDRAW_MOVE
    elif doto == 0:
        cr = text[0]
        _backdel(editor)
        editor.forward_char(1)
        editor.newline()
        editor.insert(cr)
        _backdel(editor)
    else:
        cr = text[doto - 1]
        _backdel(editor)
        editor.forward_char(1)
        editor.insert(cr)
    win.redisplay |= REDRAW_EDIT


def open_line(editor: Editor, n: int = 1) -> None:
    """Insert ``n`` newlines after dot without moving dot."""
    _check_count(n)
    if n == 0:
        return
    for _ in range(n):
        editor.newline()
    editor.backward_char(n)


def delete_blank_lines(editor: Editor) -> int:
    """Delete blank lines around dot; returns how many were removed."""
    win = editor.window
    lines = editor.buffer.lines
    first = win.dot_line
    while not lines[first - 1].text and first > 1:
        first -= 1
    count = 0
    following = first + 1
    while following <= len(lines) and not lines[following - 1].text:
        count += 1
        following += 1
    if count == 0:
        return 0
    win.dot_line = first + 1
    win.dot_offset = 0
    editor.delete(count)
    return count


def delete_whitespace(editor: Editor) -> None:
    """Delete all whitespace on either side of dot within the line."""
    win = editor.window
    text = _text(editor)
    col = win.dot_offset
    while col < len(text) and text[col] in _SPACE:
        col += 1
    stopped_on_text = False
    while win.dot_offset > 0:
        editor.backward_char(1)
        if text[win.dot_offset] not in _SPACE:
            stopped_on_text = True
            break
    if stopped_on_text:
        editor.forward_char(1)
    editor.delete(col - win.dot_offset)


def just_one_space(editor: Editor) -> None:
    """Replace the whitespace around dot with a single space."""
    delete_whitespace(editor)
    editor.insert(" ")


def delete_leading_whitespace(editor: Editor) -> None:
    """Delete the current line's indentation, keeping dot on the same text."""
    win = editor.window
    text = _text(editor)
    saved = win.dot_offset
    lead = len(text) - len(text.lstrip("".join(_SPACE)))
    editor.goto_bol()
    editor.delete(lead)
    editor.forward_char(max(0, saved - lead))


def delete_trailing_whitespace(editor: Editor) -> None:
    """Delete whitespace at the end of the current line."""
    win = editor.window
    saved = win.dot_offset
    editor.goto_eol()
    delete_whitespace(editor)
    if saved < win.dot_offset:
        win.dot_offset = saved


def newline_and_indent(editor: Editor, n: int = 1) -> None:
    """Insert ``n`` newlines, each indented like the line before it."""
    _check_count(n)
    tab_width = editor.buffer.tab_width
    for _ in range(n):
        indent = 0
        for ch in _text(editor):
            if ch == "\t":
                indent = next_tab_stop(indent, tab_width)
            elif ch == " ":
                indent += 1
            else:
                break
        delete_whitespace(editor)
        editor.newline()
        _indent(editor, indent)


def space_to_tab_stop(editor: Editor, n: int = 1) -> None:
    """Insert spaces up to the ``n``-th next tab stop."""
    _check_count(n)
    if n == 0:
        return
    col = target = column_position(editor.window)
    for _ in range(n):
        target = next_tab_stop(target, editor.buffer.tab_width)
    editor.insert(" ", target - col)


def back_to_indentation(editor: Editor) -> None:
    """Move dot to the first non-whitespace character of the line."""
    win = editor.window
    text = _text(editor)
    editor.goto_bol()
    while win.dot_offset < len(text) and text[win.dot_offset] in _SPACE:
        win.dot_offset += 1


def join_line(editor: Editor, with_next: bool = False) -> None:
    """Join this line to the previous one (or the next one to this)."""
    win = editor.window
    if with_next:
        editor.goto_eol()
        editor.delete(1)
    else:
        editor.goto_bol()
        _backdel(editor)
    delete_whitespace(editor)
    doto = win.dot_offset
    if doto > 0:
        editor.insert(" ")
        win.dot_offset = doto