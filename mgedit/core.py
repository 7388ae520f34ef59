"""Editor data model: lines, buffers, windows and the editing primitives."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

PACKAGE_STRING = "mgedit 1.0"

# Table sizes.
NFILEN = 1024
NLINE = 256
NPAT = 80
NSRCH = 128
NXNAME = 64
NKNAME = 20
MAX_TOKEN = 64

# Flags describing the last command.
CF_CPCN = 0x0001
CF_KILL = 0x0002
CF_INS = 0x0004

# Window redisplay hints.
REDRAW_FRAME = 0x01
REDRAW_MOVE = 0x02
REDRAW_EDIT = 0x04
REDRAW_FULL = 0x08
REDRAW_MODE = 0x10

# Window options.
WINDOW_NONE = 0x00
WINDOW_EPHEMERAL = 0x01


class EditorError(Exception):
    """An editing command could not be carried out."""


class BufferFlag(enum.IntFlag):
    NONE = 0
    CHANGED = 0x01
    BACKUP = 0x02
    NOTAB = 0x04
    OVERWRITE = 0x08
    READONLY = 0x10
    DIRTY = 0x20
    IGNORE_DIRTY = 0x40
    DIRED_DELETED = 0x80


@dataclass(eq=False)
class Line:
    """One line of text; the line end is implied."""

    text: str = ""

    def __len__(self) -> int:
        return len(self.text)


@dataclass
class Region:
    """Start (1-based line, offset) and size in characters of a region."""

    line: int
    offset: int
    size: int


@dataclass(eq=False)
class Buffer:
    """Named text held as a list of lines, with a saved dot and mark."""

    name: str = "*scratch*"
    lines: list = field(default_factory=lambda: [Line()])
    flags: BufferFlag = BufferFlag.NONE
    filename: str = ""
    cwd: str = ""
    newline: str = "\n"
    tab_width: int = 8
    dot_line: int = 1
    dot_offset: int = 0
    mark_line: int | None = None
    mark_offset: int = 0

    def set_text(self, text: str) -> None:
        """Replace the contents and reset the saved dot and mark."""
        self.lines = [Line(part) for part in text.split(self.newline)]
        self.dot_line, self.dot_offset = 1, 0
        self.mark_line, self.mark_offset = None, 0

    def text(self) -> str:
        return self.newline.join(line.text for line in self.lines)

    def line_count(self) -> int:
        return len(self.lines)


@dataclass(eq=False)
class Window:
    """A view of a buffer with its own dot, mark and screen area."""

    buffer: Buffer | None = None
    dot_line: int = 1
    dot_offset: int = 0
    mark_line: int | None = None
    mark_offset: int = 0
    top_line: int = 1
    top_row: int = 0
    rows: int = 0
    frame: int = 0
    redisplay: int = 0
    options: int = WINDOW_NONE


class Editor:
    """The current buffer and window plus the primitive editing operations."""

    def __init__(self, buffer: Buffer | None = None, rows: int = 24, cols: int = 80):
        self.buffer = buffer if buffer is not None else Buffer()
        self.rows = rows
        self.cols = cols
        self.window = Window(
            self.buffer,
            dot_line=self.buffer.dot_line,
            dot_offset=self.buffer.dot_offset,
            mark_line=self.buffer.mark_line,
            mark_offset=self.buffer.mark_offset,
            top_row=0,
            rows=rows - 2,
        )
        self.windows = [self.window]
        self.messages: list[str] = []
        self.this_flag = 0
        self.last_flag = 0

    # -- internals ---------------------------------------------------------

    def _line(self, number: int) -> Line:
        return self.buffer.lines[number - 1]

    def _check_writable(self) -> None:
        if self.buffer.flags & BufferFlag.READONLY:
            raise EditorError("Buffer is read-only")

    def _replace(self, line_no: int, offset: int, length: int, new_text: str) -> str:
        """Replace ``length`` characters at a position; returns what was removed."""
        buf = self.buffer
        nl = buf.newline
        lines = buf.lines
        first = line_no - 1
        end_idx, end_off = first, offset
        removed: list[str] = []
        remaining = length
        while remaining > 0:
            text = lines[end_idx].text
            avail = len(text) - end_off
            if remaining <= avail:
                removed.append(text[end_off:end_off + remaining])
                end_off += remaining
                remaining = 0
            elif end_idx + 1 >= len(lines):
                removed.append(text[end_off:])
                end_off = len(text)
                break
            else:
                removed.append(text[end_off:] + nl)
                remaining -= avail + 1
                end_idx += 1
                end_off = 0

        combined = lines[first].text[:offset] + new_text + lines[end_idx].text[end_off:]
        lines[first:end_idx + 1] = [Line(part) for part in combined.split(nl)]

        breaks = new_text.count(nl)
        new_end_idx = first + breaks
        new_end_off = offset + len(new_text) if breaks == 0 else len(new_text.rsplit(nl, 1)[1])
        delta = new_end_idx - end_idx
        start = (line_no, offset)
        end = (end_idx + 1, end_off)

        def moved(ln: int, off: int, advance: bool) -> tuple[int, int]:
            point = (ln, off)
            if point < start:
                return point
            if point > end or (point == end and (end != start or advance)):
                if ln == end[0]:
                    return new_end_idx + 1, new_end_off + off - end_off
                return ln + delta, off
            return start

        multiline = breaks > 0 or end_idx > first
        for win in self.windows:
            if win.buffer is not buf:
                continue
            win.dot_line, win.dot_offset = moved(win.dot_line, win.dot_offset, win is self.window)
            if win.mark_line is not None:
                win.mark_line, win.mark_offset = moved(win.mark_line, win.mark_offset, False)
            if win.top_line - 1 > end_idx:
                win.top_line += delta
            elif win.top_line - 1 > first:
                win.top_line = line_no
            win.top_line = max(1, min(win.top_line, len(lines)))
            win.redisplay |= REDRAW_FULL if multiline else REDRAW_EDIT
        buf.flags |= BufferFlag.CHANGED
        return "".join(removed)

    # -- editing -----------------------------------------------------------

    def insert(self, c: str, n: int = 1) -> None:
        """Insert ``n`` copies of ``c`` at dot, leaving dot after them."""
        self._check_writable()
        if n <= 0:
            return
        win = self.window
        self._replace(win.dot_line, win.dot_offset, 0, c * n)

    def newline(self) -> None:
        """Split the current line at dot."""
        self._check_writable()
        win = self.window
        self._replace(win.dot_line, win.dot_offset, 0, self.buffer.newline)

    def delete(self, n: int = 1) -> str:
        """Delete up to ``n`` characters forward from dot; returns them."""
        self._check_writable()
        if n < 0:
            raise ValueError("delete count must not be negative")
        if n == 0:
            return ""
        win = self.window
        return self._replace(win.dot_line, win.dot_offset, n, "")

    # -- motion ------------------------------------------------------------

    def forward_char(self, n: int = 1) -> bool:
        """Move dot forward; False if the end of the buffer stopped it."""
        if n < 0:
            return self.backward_char(-n)
        win = self.window
        for _ in range(n):
            if win.dot_offset == len(self._line(win.dot_line)):
                if win.dot_line == self.buffer.line_count():
                    return False
                win.dot_line += 1
                win.dot_offset = 0
                win.redisplay |= REDRAW_MOVE
            else:
                win.dot_offset += 1
        return True

    def backward_char(self, n: int = 1) -> bool:
        """Move dot backward; False if the start of the buffer stopped it."""
        if n < 0:
            return self.forward_char(-n)
        win = self.window
        for _ in range(n):
            if win.dot_offset == 0:
                if win.dot_line == 1:
                    return False
                win.dot_line -= 1
                win.dot_offset = len(self._line(win.dot_line))
                win.redisplay |= REDRAW_MOVE
            else:
                win.dot_offset -= 1
        return True

    def goto_bol(self) -> None:
        self.window.dot_offset = 0

    def goto_eol(self) -> None:
        self.window.dot_offset = len(self._line(self.window.dot_line))

    def set_mark(self) -> None:
        """Set the mark at dot."""
        win = self.window
        win.mark_line, win.mark_offset = win.dot_line, win.dot_offset

    def clear_mark(self) -> None:
        self.window.mark_line = None
        self.window.mark_offset = 0

    def char_at_dot(self) -> str:
        """The character under dot: a newline at a line end, '' at buffer end."""
        win = self.window
        line = self._line(win.dot_line)
        if win.dot_offset < len(line):
            return line.text[win.dot_offset]
        if win.dot_line == self.buffer.line_count():
            return ""
        return self.buffer.newline


def show_version() -> str:
    """The text shown by the version command."""
    return PACKAGE_STRING