"""Byte-level shell glob matching with fnmatch(3) semantics.

Python's :mod:`fnmatch` neither honours backslash escapes nor offers the
``FNM_PATHNAME`` flag, so patterns are translated to byte regular expressions
here. Matching works on raw bytes: ``?`` consumes exactly one byte, even in
the middle of a multi-byte character.
"""

from __future__ import annotations

import functools
import re
import string
from typing import Final

_SLASH: Final[int] = ord("/")
_BACKSLASH: Final[int] = ord("\\")


def _byteset(chars: str | bytes) -> frozenset[int]:
    if isinstance(chars, str):
        chars = chars.encode("ascii")
    return frozenset(chars)


_POSIX_CLASSES: Final[dict[bytes, frozenset[int]]] = {
    b"alnum": _byteset(string.ascii_letters + string.digits),
    b"alpha": _byteset(string.ascii_letters),
    b"blank": _byteset(" \t"),
    b"cntrl": _byteset(bytes(range(32)) + b"\x7f"),
    b"digit": _byteset(string.digits),
    b"graph": _byteset(bytes(range(33, 127))),
    b"lower": _byteset(string.ascii_lowercase),
    b"print": _byteset(bytes(range(32, 127))),
    b"punct": _byteset(string.punctuation),
    b"space": _byteset(" \t\n\r\x0b\x0c"),
    b"upper": _byteset(string.ascii_uppercase),
    b"xdigit": _byteset(string.hexdigits),
}


def _escape(byte: int) -> bytes:
    return b"\\x%02x" % byte


def _parse_bracket(pattern: bytes, start: int) -> tuple[frozenset[int], bool, int] | None:
    """Parse a bracket expression whose ``[`` sits just before *start*.

    Returns:
        ``(members, negated, next_index)``, or ``None`` when the expression
        is unterminated and the ``[`` must be taken literally.
    """
    i = start
    size = len(pattern)
    negated = False
    if i < size and pattern[i] in b"!^":
        negated = True
        i += 1

    members: set[int] = set()
    first = True
    while i < size:
        c = pattern[i]
        if c == ord("]") and not first:
            return frozenset(members), negated, i + 1
        first = False

        if pattern.startswith(b"[:", i):
            end = pattern.find(b":]", i + 2)
            if end != -1:
                members |= _POSIX_CLASSES.get(pattern[i + 2 : end], frozenset())
                i = end + 2
                continue

        if c == _BACKSLASH:
            i += 1
            if i >= size:
                return None
            c = pattern[i]
        i += 1

        if i + 1 < size and pattern[i] == ord("-") and pattern[i + 1] != ord("]"):
            high = pattern[i + 1]
            i += 2
            if high == _BACKSLASH:
                if i >= size:
                    return None
                high = pattern[i]
                i += 1
            # a reversed range matches nothing
            members.update(range(c, high + 1))
        else:
            members.add(c)
    return None


def _bracket_to_re(members: frozenset[int], negated: bool, pathname: bool) -> bytes:
    if pathname:
        members = members | {_SLASH} if negated else members - {_SLASH}
    if not members:
        return b"[\\x00-\\xff]" if negated else b"(?!)"

    runs: list[bytes] = []
    ordered = sorted(members)
    low = prev = ordered[0]
    for byte in ordered[1:] + [None]:
        if byte is not None and byte == prev + 1:
            prev = byte
            continue
        runs.append(_escape(low) if low == prev else _escape(low) + b"-" + _escape(prev))
        if byte is not None:
            low = prev = byte
    return (b"[^" if negated else b"[") + b"".join(runs) + b"]"


def translate(pattern: bytes, pathname: bool = False) -> bytes:
    """Translate a glob into the body of a byte regular expression.

    Args:
        pattern: Glob pattern bytes.
        pathname: When true, no wildcard matches ``/`` (``FNM_PATHNAME``).

    Returns:
        bytes: Regex source meant for ``fullmatch`` with ``re.DOTALL``.
    """
    any_byte = b"[^/]" if pathname else b"."
    parts: list[bytes] = []
    i = 0
    size = len(pattern)
    while i < size:
        c = pattern[i]
        i += 1
        if c == ord("*"):
            while i < size and pattern[i] == ord("*"):
                i += 1
            parts.append(any_byte + b"*")
        elif c == ord("?"):
            parts.append(any_byte)
        elif c == ord("["):
            parsed = _parse_bracket(pattern, i)
            if parsed is None:
                parts.append(_escape(c))
            else:
                members, negated, i = parsed
                parts.append(_bracket_to_re(members, negated, pathname))
        elif c == _BACKSLASH:
            if i >= size:
                # a dangling escape can never match
                parts.append(b"(?!)")
                break
            if pathname and pattern[i] == _SLASH:
                # an escaped separator never matches in pathname mode
                parts.append(b"(?!)")
            else:
                parts.append(_escape(pattern[i]))
            i += 1
        else:
            parts.append(_escape(c))
    return b"".join(parts)


@functools.lru_cache(maxsize=512)
def _compile(pattern: bytes, pathname: bool) -> re.Pattern[bytes]:
    return re.compile(translate(pattern, pathname), re.DOTALL)


def glob_match(pattern: bytes, name: bytes, pathname: bool = False) -> bool:
    """Return whether *name* matches the glob *pattern* in full."""
    return _compile(pattern, pathname).fullmatch(name) is not None
