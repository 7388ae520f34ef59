"""Commands on the region, the text between dot and mark."""

from __future__ import annotations

import os
import subprocess

from mgedit.chars import is_lower, is_upper, to_lower, to_upper
from mgedit.core import (
    CF_KILL,
    REDRAW_FULL,
    REDRAW_MOVE,
    Buffer,
    BufferFlag,
    Editor,
    EditorError,
    Line,
    Region,
)
from mgedit.killring import KillDirection, KillRing

PREFIX_LENGTH = 40
SHELL_TIMEOUT = 10.0
SHELL_OUTPUT_BUFFER = "*Shell Command Output*"
_DEFAULT_SHELL = "/bin/sh"


def _position(editor: Editor, line: int, offset: int) -> int:
    lines = editor.buffer.lines
    return sum(len(item) + 1 for item in lines[: line - 1]) + offset


def _check_writable(editor: Editor) -> None:
    if editor.buffer.flags & BufferFlag.READONLY:
        raise EditorError("Buffer is read-only")


def _begin_kill(editor: Editor, ring: KillRing) -> None:
    if not editor.last_flag & CF_KILL:
        ring.clear()
    editor.this_flag |= CF_KILL


def _segments(editor: Editor, region: Region):
    """Yield (line index, start, end) for each line piece of the region."""
    lines = editor.buffer.lines
    remaining = region.size
    idx, off = region.line - 1, region.offset
    while remaining > 0:
        end = min(len(lines[idx]), off + remaining)
        yield idx, off, end
        remaining -= end - off
        if remaining == 0 or idx + 1 >= len(lines):
            return
        remaining -= 1
        idx += 1
        off = 0


def get_region(editor: Editor) -> Region:
    """The region between dot and mark in the current window."""
    win = editor.window
    if win.mark_line is None:
        raise EditorError("No mark set in this window")
    start, end = sorted(
        ((win.dot_line, win.dot_offset), (win.mark_line, win.mark_offset))
    )
    size = _position(editor, *end) - _position(editor, *start)
    return Region(start[0], start[1], size)


def region_text(editor: Editor, region: Region) -> str:
    """The text of a region, stopping at the end of the buffer."""
    lines = editor.buffer.lines
    nl = editor.buffer.newline[0]
    pieces = []
    previous = None
    for idx, start, end in _segments(editor, region):
        if previous is not None:
            pieces.append(nl)
        pieces.append(lines[idx].text[start:end])
        previous = idx
    return "".join(pieces)


def put_text(editor: Editor, text: str) -> None:
    """Insert text at dot, turning newline characters into line breaks."""
    nl = editor.buffer.newline[0]
    for index, part in enumerate(text.split(nl)):
        if index:
            editor.newline()
        if part:
            editor.insert(part)


def kill_region(editor: Editor, ring: KillRing) -> str:
    """Delete the region into the kill ring and clear the mark."""
    region = get_region(editor)
    _begin_kill(editor, ring)
    win = editor.window
    win.dot_line, win.dot_offset = region.line, region.offset
    removed = editor.delete(region.size)
    ring.chunk(removed, KillDirection.FORWARD)
    editor.clear_mark()
    return removed


def copy_region(editor: Editor, ring: KillRing) -> str:
    """Copy the region into the kill ring and clear the mark."""
    region = get_region(editor)
    _begin_kill(editor, ring)
    text = region_text(editor, region)
    ring.chunk(text, KillDirection.FORWARD)
    editor.clear_mark()
    return text


def _map_region(editor: Editor, convert) -> None:
    _check_writable(editor)
    region = get_region(editor)
    lines = editor.buffer.lines
    for idx, start, end in _segments(editor, region):
        text = lines[idx].text
        changed = "".join(convert(ch) for ch in text[start:end])
        lines[idx].text = text[:start] + changed + text[end:]
    editor.buffer.flags |= BufferFlag.CHANGED
    for win in editor.windows:
        if win.buffer is editor.buffer:
            win.redisplay |= REDRAW_FULL


def _lower(ch: str) -> str:
    return to_lower(ch) if ord(ch) < 0x100 and is_upper(ch) else ch


def _upper(ch: str) -> str:
    return to_upper(ch) if ord(ch) < 0x100 and is_lower(ch) else ch


def lower_region(editor: Editor) -> None:
    """Convert upper case letters in the region to lower case."""
    _map_region(editor, _lower)


def upper_region(editor: Editor) -> None:
    """Convert lower case letters in the region to upper case."""
    _map_region(editor, _upper)


def prefix_region(editor: Editor, prefix: str = ">") -> None:
    """Put ``prefix`` at the start of every line the region touches.

    Dot is left at the start of the line after the region.
    """
    _check_writable(editor)
    prefix = prefix[: PREFIX_LENGTH - 1]
    region = get_region(editor)
    win = editor.window
    last = win.mark_line if region.line == win.dot_line else win.dot_line
    count = last - region.line + 1
    win.dot_line, win.dot_offset = region.line, region.offset
    for _ in range(count):
        editor.goto_bol()
        if prefix:
            editor.insert(prefix)
        if win.dot_line < editor.buffer.line_count():
            win.dot_line += 1
            win.redisplay |= REDRAW_MOVE
    editor.goto_bol()


def mark_buffer(editor: Editor) -> None:
    """Put the mark at the end of the buffer and dot at the beginning."""
    win = editor.window
    lines = editor.buffer.lines
    win.mark_line = len(lines)
    win.mark_offset = len(lines[-1])
    win.dot_line, win.dot_offset = 1, 0
    win.redisplay |= REDRAW_MOVE


def run_shell_command(command: str, text: str | None = None) -> Buffer:
    """Run ``command`` through the user's shell, feeding it ``text``.

    Standard output and standard error are collected, one buffer line per
    output line, in a read-only buffer that is returned.
    """
    if not command:
        raise EditorError("No shell command given")
    shell = os.environ.get("SHELL") or _DEFAULT_SHELL
    argv0 = shell.rsplit("/", 1)[-1]
    try:
        result = subprocess.run(
            [argv0, "-c", command],
            executable=shell,
            input=(text or "").encode(),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=SHELL_TIMEOUT,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        raise EditorError("poll timed out") from exc
    except OSError as exc:
        raise EditorError(f"Can't run shell: {exc}") from exc

    buf = Buffer(name=SHELL_OUTPUT_BUFFER)
    output = result.stdout.decode(errors="replace")
    nl = buf.newline[0]
    parts = output.split(nl)
    if parts and parts[-1] == "":
        parts.pop()
    if not parts:
        parts = ["(Shell command succeeded with no output)"]
    buf.lines = [Line(part) for part in parts]
    buf.flags |= BufferFlag.READONLY
    return buf