"""Undo records for a buffer and the undo command.

Positions are absolute character offsets from the start of the buffer,
counting each line end as one character, so records stay valid when lines
are split or joined.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from mgedit.core import Buffer, BufferFlag, Editor, EditorError
from mgedit.region import put_text


class UndoType(enum.Enum):
    INSERT = 1
    DELETE = 2
    BOUNDARY = 3
    MODIFIED = 4
    DELREG = 5


_LABELS = {
    UndoType.DELETE: "DELETE",
    UndoType.DELREG: "DELREGION",
    UndoType.INSERT: "INSERT",
    UndoType.BOUNDARY: "----",
    UndoType.MODIFIED: "MODIFIED",
}


@dataclass
class UndoRecord:
    """One recorded change: its kind, position, size and deleted text."""

    type: UndoType
    pos: int = 0
    size: int = 0
    content: str | None = None


def absolute_position(buffer: Buffer, line: int, offset: int) -> int:
    """The absolute offset of (1-based line, offset) in ``buffer``."""
    return sum(len(item) + 1 for item in buffer.lines[: line - 1]) + offset


def location(buffer: Buffer, pos: int) -> tuple[int, int] | None:
    """The (1-based line, offset) of an absolute offset, or None if past the end."""
    for number, line in enumerate(buffer.lines, 1):
        if pos <= len(line):
            return number, pos
        pos -= len(line) + 1
    return None


class UndoLog:
    """The undo records of one buffer, newest last."""

    def __init__(self) -> None:
        self.records: list[UndoRecord] = []
        self.enabled = True
        self.boundaries = True
        self._ptr: int | None = None
        self._nulled = False
        self._continuing = False
        self._in_undo = False

    # -- internals ---------------------------------------------------------

    def _touch(self) -> None:
        if not self._in_undo:
            self._continuing = False

    def _last_type(self) -> UndoType | None:
        return self.records[-1].type if self.records else None

    # -- settings ----------------------------------------------------------

    def set_enabled(self, on: bool) -> bool:
        """Switch recording on or off; returns the previous setting."""
        previous = self.enabled
        self.enabled = bool(on)
        return previous

    def set_boundaries(self, on: bool) -> bool:
        """Switch boundary recording, adding a boundary first; returns the old setting."""
        previous = self.boundaries
        if not self.enabled:
            return False
        self.add_boundary()
        self.boundaries = bool(on)
        return previous

    def break_chain(self) -> None:
        """Make the next undo start again from the newest record."""
        self._continuing = False

    # -- recording ---------------------------------------------------------

    def add_boundary(self) -> bool:
        """Separate commands; no-op after a boundary or modified record."""
        if not self.boundaries:
            return False
        self._touch()
        if self._last_type() in (UndoType.BOUNDARY, UndoType.MODIFIED):
            return True
        self.records.append(UndoRecord(UndoType.BOUNDARY))
        return True

    def add_modified(self) -> None:
        """Record the point where the buffer was last unmodified."""
        self._touch()
        self.records = [r for r in self.records if r.type is not UndoType.MODIFIED]
        self.records.append(UndoRecord(UndoType.MODIFIED))

    def add_insert(self, pos: int, size: int) -> None:
        """Record that ``size`` characters were inserted at ``pos``."""
        if not self.enabled:
            return
        self._touch()
        if self.records:
            top = self.records[-1]
            if top.type is UndoType.INSERT and top.pos + top.size == pos:
                top.size += size
                return
        record = UndoRecord(UndoType.INSERT, pos, size)
        self.add_boundary()
        self.records.append(record)

    def add_delete(self, pos: int, content: str, is_region: bool = False) -> None:
        """Record, before it happens, the deletion of ``content`` at ``pos``."""
        if not self.enabled:
            return
        self._touch()
        if content.startswith("\n"):
            self.add_boundary()
        elif self.records and not is_region:
            top = self.records[-1]
            if top.type is UndoType.DELETE and top.pos - top.size != pos:
                self.add_boundary()
        kind = UndoType.DELREG if is_region else UndoType.DELETE
        record = UndoRecord(kind, pos, len(content), content)
        if is_region or self._last_type() is not UndoType.DELETE:
            self.add_boundary()
        self.records.append(record)

    def add_change(self, pos: int, content: str) -> None:
        """Record, before it happens, an in-place change of ``content`` at ``pos``."""
        if not self.enabled:
            return
        self.add_boundary()
        self.boundaries = False
        try:
            self.add_delete(pos, content, False)
            self.add_insert(pos, len(content))
        finally:
            self.boundaries = True
        self.add_boundary()

    # -- inspection --------------------------------------------------------

    def dump(self) -> list[str]:
        """Describe the records, newest first, one line each."""
        out = []
        for num, rec in enumerate(reversed(self.records), 1):
            label = _LABELS.get(rec.type, "UNKNOWN")
            text = f"{num}:\t {label} at {rec.pos} "
            if rec.content is not None:
                text += f'"{rec.content[: rec.size]}"'
            text += f" [{rec.size}]"
            out.append(text)
        return out

    # -- undoing -----------------------------------------------------------

    def _apply(self, editor: Editor, rec: UndoRecord) -> None:
        win = editor.window
        if rec.type in (UndoType.BOUNDARY, UndoType.MODIFIED):
            if rec.type is UndoType.MODIFIED:
                editor.buffer.flags &= ~BufferFlag.CHANGED
            return
        where = location(editor.buffer, rec.pos)
        if where is None:
            raise EditorError("Internal error in Undo!")
        win.dot_line, win.dot_offset = where
        if rec.type is UndoType.INSERT:
            self.add_delete(rec.pos, editor.buffer.text()[rec.pos: rec.pos + rec.size])
            editor.delete(rec.size)
        elif rec.type is UndoType.DELETE:
            content = rec.content or ""
            self.add_insert(rec.pos, len(content))
            put_text(editor, content)
            win.dot_line, win.dot_offset = where
        elif rec.type is UndoType.DELREG:
            content = rec.content or ""
            self.add_insert(rec.pos, len(content))
            put_text(editor, content)

    def undo(self, editor: Editor, n: int = 1) -> None:
        """Undo ``n`` commands; consecutive calls walk further back, then redo."""
        if n < 0:
            raise ValueError("count must not be negative")
        ptr = self._ptr
        if (ptr is None and self._nulled) or not self._continuing:
            ptr = len(self.records) - 1 if self.records else None
            self._nulled = True
        error: str | None = None
        self._in_undo = True
        try:
            for _ in range(n):
                while ptr is not None and self.records[ptr].type is UndoType.BOUNDARY:
                    self.records.pop(ptr)
                    ptr = ptr - 1 if ptr > 0 else None
                if ptr is None:
                    error = "No further undo information"
                    self._nulled = True
                    break
                self._nulled = False
                self.add_boundary()
                saved = self.boundaries
                self.boundaries = False
                try:
                    while ptr is not None:
                        rec = self.records[ptr]
                        try:
                            self._apply(editor, rec)
                        except EditorError as exc:
                            error = str(exc)
                            break
                        ptr = ptr - 1 if ptr > 0 else None
                        if rec.type is UndoType.BOUNDARY:
                            break
                finally:
                    self.boundaries = saved
                self.add_boundary()
                editor.messages.append("Undo!")
        finally:
            self._in_undo = False
            self._ptr = ptr
            self._continuing = True
        if error is not None:
            raise EditorError(error)