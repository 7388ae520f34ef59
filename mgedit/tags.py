"""ctags(1) tables: loading, lookup, the tag position stack and token lookup."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from mgedit.chars import is_word
from mgedit.core import MAX_TOKEN, Buffer, Editor, EditorError

DEFAULT_TAGS_FILE = "tags"

_ESCAPE = "\\"
_WHITESPACE = frozenset(" \t\n\v\f\r")


@dataclass(frozen=True)
class Tag:
    """One tags file entry: the name, its file and the line prefix to find."""

    name: str
    filename: str
    pattern: str


def strip_pattern(pattern: str) -> str:
    """Turn a ``/^text$/`` or ``?^text$?`` address into plain ``text``."""
    body = pattern[:-1]
    if body.endswith("$"):
        body = body[:-1]
    body = body[1:]
    if body.startswith("^"):
        body = body[1:]
    return body


def parse_tag_line(line: str) -> Tag:
    """Parse ``<tag>\\t<filename>\\t<pattern>`` into a Tag."""
    name, sep, rest = line.partition("\t")
    if not sep:
        raise EditorError(f"Malformed tags line: {line!r}")
    filename, sep, address = rest.partition("\t")
    if not sep or not address:
        raise EditorError(f"Malformed tags line: {line!r}")
    cut = address.find(';"')
    if cut >= 0:
        address = address[:cut]
    return Tag(name, filename, strip_pattern(address))


def _continues(line: str) -> bool:
    trailing = len(line) - len(line.rstrip(_ESCAPE))
    return trailing % 2 == 1


def _unescape(text: str) -> str:
    out = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == _ESCAPE and i + 1 < len(text):
            nxt = text[i + 1]
            out.append(ch + nxt if nxt == _ESCAPE else nxt)
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _logical_lines(stream: Iterable[str]) -> Iterator[str]:
    """Join continued lines and remove escapes."""
    pending = ""
    have_pending = False
    for raw in stream:
        line = raw[:-1] if raw.endswith("\n") else raw
        if _continues(line):
            pending += line[:-1]
            have_pending = True
            continue
        yield _unescape(pending + line)
        pending = ""
        have_pending = False
    if have_pending:
        yield _unescape(pending)


class TagTable:
    """Loaded tags, keyed by name, and the stack of positions left by find-tag."""

    def __init__(self) -> None:
        self._tags: dict[str, Tag] = {}
        self._stack: list[Any] = []

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, name: object) -> bool:
        return name in self._tags

    def __iter__(self) -> Iterator[Tag]:
        return (self._tags[name] for name in sorted(self._tags))

    @property
    def depth(self) -> int:
        """Number of saved positions on the stack."""
        return len(self._stack)

    def load(self, path: str | os.PathLike) -> int:
        """Add the tags in a file; duplicates keep the first entry.

        Returns the number of tags added.  A malformed line stops loading
        with an error, keeping the tags read before it.
        """
        try:
            handle = open(path, encoding="utf-8", errors="replace")
        except OSError as exc:
            raise EditorError(f"Unable to open tags file: {os.fspath(path)}") from exc
        with handle:
            if not os.path.isfile(path):
                raise EditorError("Not a regular file")
            added = 0
            for line in _logical_lines(handle):
                tag = parse_tag_line(line)
                if tag.name not in self._tags:
                    self._tags[tag.name] = tag
                    added += 1
        return added

    def find(self, name: str) -> Tag:
        """The tag called ``name``."""
        try:
            return self._tags[name]
        except KeyError:
            raise EditorError(f"No tag containing {name}") from None

    def push(self, name: str, position: Any) -> Tag:
        """Look up ``name`` and save ``position`` to return to later."""
        tag = self.find(name)
        self._stack.append(position)
        return tag

    def pop(self) -> Any:
        """The most recently saved position."""
        if not self._stack:
            raise EditorError("No previous location for find-tag invocation")
        return self._stack.pop()

    def unload(self) -> None:
        """Forget the loaded tags but keep the position stack."""
        self._tags.clear()

    def clear(self) -> None:
        """Forget the tags and the position stack."""
        self._stack.clear()
        self._tags.clear()


def search_pattern(buffer: Buffer, pattern: str) -> int | None:
    """The 1-based number of the first line starting with ``pattern``."""
    for number, line in enumerate(buffer.lines, 1):
        if line.text.startswith(pattern):
            return number
    return None


def _token_char(ch: str) -> bool:
    return ch == "_" or (bool(ch) and ord(ch) < 0x100 and is_word(ch))


def _in_token(editor: Editor) -> bool:
    win = editor.window
    text = editor.buffer.lines[win.dot_line - 1].text
    return win.dot_offset < len(text) and _token_char(text[win.dot_offset])


def _at_token_start(editor: Editor) -> bool:
    win = editor.window
    if win.dot_offset == 0:
        return True
    text = editor.buffer.lines[win.dot_line - 1].text
    off = win.dot_offset
    return off < len(text) and _token_char(text[off]) and not _token_char(text[off - 1])


def _back_token(editor: Editor) -> bool:
    if not editor.backward_char(1):
        return False
    while not _in_token(editor):
        if not editor.backward_char(1):
            return True
    while _in_token(editor):
        if not editor.backward_char(1):
            return True
    return editor.forward_char(1)


def _forward_token(editor: Editor) -> None:
    while not _in_token(editor):
        if not editor.forward_char(1):
            return
    while _in_token(editor):
        if not editor.forward_char(1):
            return


def token_at_dot(editor: Editor) -> str | None:
    """The identifier at dot (underscores count as word characters).

    Dot does not move.  Returns None when there is no usable token.
    """
    win = editor.window
    saved = win.dot_line, win.dot_offset
    try:
        if not _at_token_start(editor) and not _back_token(editor):
            return None
        start = win.dot_offset
        _forward_token(editor)
        text = editor.buffer.lines[win.dot_line - 1].text
        while start < len(text) and text[start] in _WHITESPACE:
            start += 1
        size = win.dot_offset - start
        if size <= 0 or size >= MAX_TOKEN:
            return None
        return text[start:start + size]
    finally:
        win.dot_line, win.dot_offset = saved