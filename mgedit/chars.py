"""Character classification for the editor's eight-bit character set.

Every predicate accepts either a character code (an int, masked to eight
bits) or a one-character string.
"""

from __future__ import annotations

import enum


class _Kind(enum.IntFlag):
    NONE = 0
    WORD = 0x01
    UPPER = 0x02
    LOWER = 0x04
    CONTROL = 0x08
    SENTENCE_END = 0x10
    DIGIT = 0x20


def _classify(code: int) -> _Kind:
    kind = _Kind.NONE
    if code < 0x20 or code == 0x7F:
        kind |= _Kind.CONTROL
    if 0x41 <= code <= 0x5A:
        kind |= _Kind.UPPER | _Kind.WORD
    elif 0x61 <= code <= 0x7A:
        kind |= _Kind.LOWER | _Kind.WORD
    elif 0x30 <= code <= 0x39:
        kind |= _Kind.DIGIT | _Kind.WORD
    if chr(code) in ".?!":
        kind |= _Kind.SENTENCE_END
    return kind


_TABLE = tuple(_classify(code) for code in range(256))


def _code(c: int | str) -> int:
    return (ord(c) if isinstance(c, str) else c) & 0xFF


def _has(c: int | str, kind: _Kind) -> bool:
    return bool(_TABLE[_code(c)] & kind)


def is_word(c: int | str) -> bool:
    """True if the character is part of a word."""
    return _has(c, _Kind.WORD)


def is_ctrl(c: int | str) -> bool:
    """True for control characters."""
    return _has(c, _Kind.CONTROL)


def is_upper(c: int | str) -> bool:
    """True for upper case letters."""
    return _has(c, _Kind.UPPER)


def is_lower(c: int | str) -> bool:
    """True for lower case letters."""
    return _has(c, _Kind.LOWER)


def is_eosp(c: int | str) -> bool:
    """True for end-of-sentence punctuation."""
    return _has(c, _Kind.SENTENCE_END)


def is_digit(c: int | str) -> bool:
    """True for decimal digits."""
    return _has(c, _Kind.DIGIT)


def _shift(c: int | str, delta: int) -> int | str:
    if isinstance(c, str):
        return chr(ord(c) + delta)
    return c + delta


def to_upper(c: int | str) -> int | str:
    """Convert a lower case letter to upper case (no range check)."""
    return _shift(c, -0x20)


def to_lower(c: int | str) -> int | str:
    """Convert an upper case letter to lower case (no range check)."""
    return _shift(c, 0x20)


def ctrl(c: int | str) -> int | str:
    """The control character for ``c``; ``ctrl('?')`` is DEL."""
    if isinstance(c, str):
        return chr(ord(c) ^ 0x40)
    return c ^ 0x40