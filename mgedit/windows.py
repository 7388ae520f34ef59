"""Window layout commands: splitting, resizing and switching windows."""

from __future__ import annotations

from collections import Counter

from mgedit.core import (
    REDRAW_FRAME,
    REDRAW_FULL,
    REDRAW_MODE,
    Editor,
    EditorError,
    Window,
)


def _save_to_buffer(win: Window) -> None:
    buf = win.buffer
    buf.dot_line, buf.dot_offset = win.dot_line, win.dot_offset
    buf.mark_line, buf.mark_offset = win.mark_line, win.mark_offset


def _forward(win: Window, line: int, n: int) -> int:
    return min(line + n, win.buffer.line_count())


def _backward(line: int, n: int) -> int:
    return max(1, line - n)


class Layout:
    """Arranges the editor's windows on the screen, top to bottom."""

    def __init__(self, editor: Editor):
        self.editor = editor

    def _index(self) -> int:
        return self.editor.windows.index(self.editor.window)

    def _select(self, win: Window) -> None:
        self.editor.window = win
        self.editor.buffer = win.buffer

    def _neighbour(self) -> Window:
        windows = self.editor.windows
        if len(windows) == 1:
            raise EditorError("Only one window")
        idx = self._index()
        return windows[idx + 1] if idx + 1 < len(windows) else windows[idx - 1]

    def split(self) -> Window:
        """Split the current window in two; returns the new window."""
        ed = self.editor
        cur = ed.window
        if cur.rows < 3:
            raise EditorError(f"Cannot split a {cur.rows} line window")
        new = Window(
            cur.buffer,
            dot_line=cur.dot_line,
            dot_offset=cur.dot_offset,
            mark_line=cur.mark_line,
            mark_offset=cur.mark_offset,
        )
        upper = (cur.rows - 1) // 2
        lower = (cur.rows - 1) - upper
        depth = max(0, cur.dot_line - cur.top_line)
        top = cur.top_line
        idx = self._index()
        if depth <= upper:
            if depth == upper:
                top = _forward(cur, top, 1)
            cur.rows = upper
            ed.windows.insert(idx + 1, new)
            new.top_row = cur.top_row + upper + 1
            new.rows = lower
        else:
            ed.windows.insert(idx, new)
            new.top_row = cur.top_row
            new.rows = upper
            cur.top_row += upper + 1
            cur.rows = lower
            top = _forward(cur, top, upper + 1)
        cur.top_line = top
        new.top_line = top
        cur.redisplay |= REDRAW_MODE | REDRAW_FULL
        new.redisplay |= REDRAW_MODE | REDRAW_FULL
        return new

    def next_window(self) -> Window:
        windows = self.editor.windows
        win = windows[(self._index() + 1) % len(windows)]
        self._select(win)
        return win

    def previous_window(self) -> Window:
        windows = self.editor.windows
        win = windows[self._index() - 1]
        self._select(win)
        return win

    def only_window(self) -> None:
        """Make the current window the only one on the screen."""
        ed = self.editor
        cur = ed.window
        idx = self._index()
        counts = Counter(id(w.buffer) for w in ed.windows)
        for win in ed.windows[:idx] + ed.windows[idx + 1:]:
            counts[id(win.buffer)] -= 1
            if counts[id(win.buffer)] == 0:
                _save_to_buffer(win)
        ed.windows[:] = [cur]
        line, row = cur.top_line, cur.top_row
        while row != 0 and line > 1:
            row -= 1
            line -= 1
        cur.top_row = 0
        cur.rows = ed.rows - 2
        cur.top_line = line
        cur.redisplay |= REDRAW_MODE | REDRAW_FULL

    def enlarge(self, n: int = 1) -> None:
        """Grow the current window by ``n`` rows at a neighbour's expense."""
        if n < 0:
            self.shrink(-n)
            return
        cur = self.editor.window
        adj = self._neighbour()
        if adj.rows <= n:
            raise EditorError("Impossible change")
        windows = self.editor.windows
        if windows.index(adj) == self._index() + 1:
            adj.top_line = _forward(adj, adj.top_line, n)
            adj.top_row += n
        else:
            cur.top_line = _backward(cur.top_line, n)
            cur.top_row -= n
        cur.rows += n
        adj.rows -= n
        cur.redisplay |= REDRAW_MODE | REDRAW_FULL
        adj.redisplay |= REDRAW_MODE | REDRAW_FULL

    def shrink(self, n: int = 1) -> None:
        """Shrink the current window by ``n`` rows, giving them to a neighbour."""
        if n < 0:
            self.enlarge(-n)
            return
        self._shrink(n, trusted=False)

    def _shrink(self, n: int, trusted: bool) -> None:
        cur = self.editor.window
        adj = self._neighbour()
        if not trusted and cur.rows <= n:
            raise EditorError("Impossible change")
        windows = self.editor.windows
        if windows.index(adj) == self._index() + 1:
            adj.top_line = _backward(adj.top_line, n)
            adj.top_row -= n
        else:
            cur.top_line = _forward(cur, cur.top_line, n)
            cur.top_row += n
        cur.rows -= n
        adj.rows += n
        cur.redisplay |= REDRAW_MODE | REDRAW_FULL
        adj.redisplay |= REDRAW_MODE | REDRAW_FULL

    def delete_window(self) -> None:
        """Remove the current window, giving its rows to a neighbour."""
        ed = self.editor
        win = ed.window
        self._shrink(win.rows + 1, trusted=True)
        if sum(1 for w in ed.windows if w.buffer is win.buffer) == 1:
            _save_to_buffer(win)
        idx = self._index()
        ed.windows.pop(idx)
        self._select(ed.windows[idx] if idx < len(ed.windows) else ed.windows[0])

    def resize(self, rows: int) -> None:
        """Adapt the layout to a screen of ``rows`` rows."""
        ed = self.editor
        changed = rows != ed.rows
        ed.rows = rows
        if not changed:
            return
        last = ed.windows[-1]
        if rows < last.top_row + 3:
            raise EditorError("Display unusable")
        last.rows = rows - last.top_row - 2
        last.redisplay |= REDRAW_FULL

    def reposition(self, n: int | None = None) -> None:
        """Ask redisplay to frame dot at line ``n`` (None centres it)."""
        win = self.editor.window
        if n is None:
            win.frame = 0
        else:
            win.frame = n + 1 if n >= 0 else n
        win.redisplay |= REDRAW_FRAME