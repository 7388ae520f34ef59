"""The kill ring, and the kill-line and yank commands."""

from __future__ import annotations

import enum

from mgedit.core import CF_KILL, REDRAW_FULL, Editor


class KillDirection(enum.IntFlag):
    """Where killed text goes in the kill ring."""

    NONE = 0x00
    FORWARD = 0x01
    BACKWARD = 0x02
    REGION = 0x04


class KillRing:
    """Holds the most recently killed text."""

    def __init__(self) -> None:
        self._data = ""

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        """Forget everything in the kill ring."""
        self._data = ""

    def insert(self, c: str, direction: KillDirection) -> None:
        """Add one character at the back (FORWARD) or front (BACKWARD)."""
        if direction == KillDirection.NONE:
            return
        if direction & KillDirection.FORWARD:
            self._data += c
        elif direction & KillDirection.BACKWARD:
            self._data = c + self._data
        else:
            raise ValueError(f"invalid kill direction: {direction!r}")

    def remove(self, n: int) -> str | None:
        """The character at index ``n``, or None when ``n`` is out of range."""
        if n < 0 or n >= len(self._data):
            return None
        return self._data[n]

    def chunk(self, text: str, direction: KillDirection) -> None:
        """Add a string; an empty ring always takes it forward."""
        if not self._data:
            direction = KillDirection.FORWARD
        if direction & KillDirection.FORWARD:
            self._data += text
        elif direction & KillDirection.BACKWARD:
            self._data = text + self._data

    def text(self) -> str:
        return self._data


def _begin_kill(editor: Editor, ring: KillRing) -> None:
    if not editor.last_flag & CF_KILL:
        ring.clear()
    editor.this_flag |= CF_KILL


def kill_line(editor: Editor, ring: KillRing, n: int | None = None) -> str:
    """Kill text from dot, Emacs style; returns the killed text.

    Without an argument, kill to the end of the line, or the newline when
    only blanks remain.  With ``n > 0`` kill forward over ``n`` newlines;
    with ``n <= 0`` kill back to the start of the line and ``-n`` lines more.
    """
    _begin_kill(editor, ring)
    win = editor.window
    lines = editor.buffer.lines
    count = len(lines)
    text = lines[win.dot_line - 1].text
    if n is None:
        rest = text[win.dot_offset:]
        if not rest.strip(" \t"):
            chunk = len(rest) + 1
        else:
            chunk = len(rest) or 1
    elif n > 0:
        chunk = len(text) - win.dot_offset
        following = win.dot_line + 1
        if following <= count:
            chunk += 1
            for _ in range(n - 1):
                chunk += len(lines[following - 1])
                following += 1
                if following > count:
                    break
                chunk += 1
    else:
        chunk = win.dot_offset
        win.dot_offset = 0
        for _ in range(-n):
            if win.dot_line == 1:
                break
            win.dot_line -= 1
            chunk += len(lines[win.dot_line - 1]) + 1
    if not chunk:
        return ""
    removed = editor.delete(chunk)
    ring.chunk(removed, KillDirection.FORWARD)
    return removed


def yank(editor: Editor, ring: KillRing, n: int = 1) -> None:
    """Insert the kill ring's text ``n`` times at dot, marking the start."""
    if n < 0:
        raise ValueError("count must not be negative")
    win = editor.window
    nl = editor.buffer.newline[0]
    parts = ring.text().split(nl)
    breaks = 0
    for _ in range(n):
        editor.set_mark()
        for index, part in enumerate(parts):
            if index:
                editor.newline()
                breaks += 1
            if part:
                editor.insert(part)
    if win.dot_line == win.top_line:
        win.top_line = max(1, win.top_line - breaks)
        win.redisplay |= REDRAW_FULL