"""Plain searches, replacement and the zap-to-char commands."""

from __future__ import annotations

import enum
from collections.abc import Iterable

from mgedit.chars import ctrl, is_upper, to_lower
from mgedit.core import REDRAW_FULL, REDRAW_MOVE, Editor, EditorError
from mgedit.killring import KillRing
from mgedit.region import kill_region, put_text

_NEWLINE = "\n"

_REPLACE_KEYS = frozenset("y ")
_QUIT_KEYS = frozenset({ctrl("G"), ctrl("["), ctrl("M")})
_SKIP_KEYS = frozenset({"n", ctrl("H"), ctrl("?")})

QUERY_HELP = (
    "y/n or <SP>/<DEL>: replace/don't, [.] repl-end, "
    "[!] repl-rest, <CR>/<ESC> quit"
)


class SearchDirection(enum.Enum):
    """Direction of the last successful search command."""

    NONE = "none"
    FORWARD = "forward"
    BACKWARD = "backward"


def _code(c: int | str) -> int:
    return ord(c) if isinstance(c, str) else c & 0xFF


def chars_equal(bc: int | str, pc: int | str, exact_case: bool) -> bool:
    """Compare a buffer character with a pattern character.

    Unless ``exact_case`` is set, an upper case letter on either side
    matches its lower case counterpart.
    """
    b, p = _code(bc), _code(pc)
    if b == p:
        return True
    if exact_case or b > 0xFF or p > 0xFF:
        return False
    if is_upper(b):
        return to_lower(b) == p
    if is_upper(p):
        return b == to_lower(p)
    return False


def _exact_case(pattern: str) -> bool:
    return any(ord(ch) <= 0xFF and is_upper(ch) for ch in pattern)


def _report(editor: Editor, count: int) -> None:
    editor.window.redisplay |= REDRAW_FULL
    if count == 1:
        editor.messages.append("Replaced 1 occurrence")
    else:
        editor.messages.append(f"Replaced {count} occurrences")


class Searcher:
    """Holds the search pattern and the direction of the last search."""

    def __init__(self, pattern: str = "", ring: KillRing | None = None):
        self.pattern = pattern
        self.last_direction = SearchDirection.NONE
        self.ring = ring if ring is not None else KillRing()

    # -- primitives --------------------------------------------------------

    def _require_pattern(self) -> str:
        if not self.pattern:
            raise EditorError("No search pattern")
        return self.pattern

    def _failed(self) -> EditorError:
        return EditorError(f'Search failed: "{self.pattern}"')

    def _search_forward(self, editor: Editor) -> bool:
        """Move dot just past the next match; False if there is none."""
        pat = self.pattern
        if not pat:
            return False
        lines = editor.buffer.lines
        count = len(lines)
        exact = _exact_case(pat)
        win = editor.window
        clp, cbo = win.dot_line, win.dot_offset
        while True:
            text = lines[clp - 1].text
            if cbo == len(text):
                if clp == count:
                    return False
                clp += 1
                cbo = 0
                c = _NEWLINE
            else:
                c = text[cbo]
                cbo += 1
            if not chars_equal(c, pat[0], exact):
                continue
            tlp, tbo = clp, cbo
            matched = True
            for pc in pat[1:]:
                ttext = lines[tlp - 1].text
                if tbo == len(ttext):
                    if tlp == count:
                        matched = False
                        break
                    tlp += 1
                    tbo = 0
                    c = _NEWLINE
                else:
                    c = ttext[tbo]
                    tbo += 1
                if not chars_equal(c, pc, exact):
                    matched = False
                    break
            if matched:
                win.dot_line, win.dot_offset = tlp, tbo
                win.redisplay |= REDRAW_MOVE
                return True

    def _search_backward(self, editor: Editor) -> bool:
        """Move dot to the start of the previous match; False if none."""
        pat = self.pattern
        if not pat:
            return False
        lines = editor.buffer.lines
        exact = _exact_case(pat)
        win = editor.window
        clp, cbo = win.dot_line, win.dot_offset
        last = pat[-1]
        rest = pat[:-1][::-1]
        while True:
            if cbo == 0:
                if clp == 1:
                    return False
                clp -= 1
                cbo = len(lines[clp - 1]) + 1
            cbo -= 1
            text = lines[clp - 1].text
            c = _NEWLINE if cbo == len(text) else text[cbo]
            if not chars_equal(c, last, exact):
                continue
            tlp, tbo = clp, cbo
            matched = True
            for pc in rest:
                if tbo == 0:
                    if tlp == 1:
                        matched = False
                        break
                    tlp -= 1
                    tbo = len(lines[tlp - 1]) + 1
                tbo -= 1
                ttext = lines[tlp - 1].text
                c = _NEWLINE if tbo == len(ttext) else ttext[tbo]
                if not chars_equal(c, pc, exact):
                    matched = False
                    break
            if matched:
                win.dot_line, win.dot_offset = tlp, tbo
                win.redisplay |= REDRAW_MOVE
                return True

    def _replace_match(self, editor: Editor, length: int, replacement: str) -> None:
        editor.backward_char(length)
        editor.delete(length)
        put_text(editor, replacement)

    # -- commands ----------------------------------------------------------

    def forward(self, editor: Editor) -> None:
        """Search forward from dot, leaving dot just after the match."""
        self._require_pattern()
        if not self._search_forward(editor):
            raise self._failed()
        self.last_direction = SearchDirection.FORWARD

    def backward(self, editor: Editor) -> None:
        """Search backward from dot, leaving dot at the start of the match."""
        self._require_pattern()
        if not self._search_backward(editor):
            raise self._failed()
        self.last_direction = SearchDirection.BACKWARD

    def search_again(self, editor: Editor) -> None:
        """Repeat the last search in the same direction."""
        if self.last_direction is SearchDirection.FORWARD:
            if not self._search_forward(editor):
                raise self._failed()
            return
        if self.last_direction is SearchDirection.BACKWARD:
            if not self._search_backward(editor):
                raise self._failed()
            return
        raise EditorError("No last search")

    def replace_all(self, editor: Editor, replacement: str) -> int:
        """Replace every match after dot; returns the number replaced."""
        length = len(self._require_pattern())
        count = 0
        while self._search_forward(editor):
            self._replace_match(editor, length, replacement)
            count += 1
        _report(editor, count)
        return count

    def query_replace(
        self, editor: Editor, replacement: str, answers: Iterable[str]
    ) -> int:
        """Replace matches after dot, asking ``answers`` at each one.

        'y' or space replaces, 'n', backspace or DEL skips, '.' replaces and
        stops, '!' replaces the rest, ^G, ESC or CR stop.  Any other answer
        adds a help message and the next answer is taken.  Running out of
        answers stops.  Returns the number of replacements made.
        """
        pat = self._require_pattern()
        length = len(pat)
        keys = iter(answers)
        editor.messages.append(f"Query replacing {pat} with {replacement}:")
        count = 0
        stop = False
        while not stop and self._search_forward(editor):
            for key in keys:
                if key in _REPLACE_KEYS:
                    self._replace_match(editor, length, replacement)
                    count += 1
                    break
                if key == ".":
                    self._replace_match(editor, length, replacement)
                    count += 1
                    stop = True
                    break
                if key in _QUIT_KEYS:
                    stop = True
                    break
                if key == "!":
                    self._replace_match(editor, length, replacement)
                    count += 1
                    while self._search_forward(editor):
                        self._replace_match(editor, length, replacement)
                        count += 1
                    stop = True
                    break
                if key in _SKIP_KEYS:
                    break
                editor.messages.append(QUERY_HELP)
            else:
                stop = True
        _report(editor, count)
        return count

    def zap(self, editor: Editor, char: str, n: int = 1, including: bool = True) -> str:
        """Kill from dot to the ``n``-th occurrence of ``char``.

        A negative ``n`` searches backward.  Unless ``including`` is set the
        character itself is kept.  Returns the killed text.
        """
        if char == ctrl("G"):
            raise EditorError("Quit")
        backward = n < 0
        n = abs(n)
        if n == 0:
            return ""
        self.pattern = char
        win = editor.window
        editor.set_mark()
        search = self._search_backward if backward else self._search_forward
        for _ in range(n):
            if not search(editor):
                win.dot_line, win.dot_offset = win.mark_line, win.mark_offset
                editor.clear_mark()
                raise self._failed()
        if not including:
            if backward:
                editor.forward_char(1)
            else:
                editor.backward_char(1)
        killed = kill_region(editor, self.ring)
        editor.clear_mark()
        return killed