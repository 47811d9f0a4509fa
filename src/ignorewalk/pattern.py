"""Pattern compilation: raw gitignore-style strings to immutable records."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Final, Union

from ignorewalk import InvalidPatternError

WILDCARD_BYTES: Final[bytes] = b"*?[\\"

_RECORD_KEYS: Final[tuple[str, ...]] = (
    "pattern",
    "negated",
    "directory_only",
    "no_directory",
    "ends_with_literal",
    "first_wildcard",
)


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A parsed exclude/include rule.

    Attributes:
        pattern: Glob body with the leading ``!`` and trailing ``/`` removed.
            A leading ``/`` (anchor) is kept; the path matcher strips it.
        negated: The raw pattern started with ``!``.
        directory_only: The raw pattern ended with ``/``.
        no_directory: The body has no ``/`` and is matched against basenames.
        ends_with_literal: The body is ``*`` followed by a wildcard-free suffix.
        first_wildcard: Byte offset of the first ``* ? [ \\`` in the body,
            or ``None`` when it has none.
    """

    pattern: str
    negated: bool = False
    directory_only: bool = False
    no_directory: bool = False
    ends_with_literal: bool = False
    first_wildcard: int | None = None

    @property
    def anchored(self) -> bool:
        return self.pattern.startswith("/")

    def to_text(self) -> str:
        """Rebuild the raw pattern string this record was compiled from."""
        text = self.pattern
        if self.directory_only:
            text += "/"
        if self.negated:
            text = "!" + text
        return text


PatternLike = Union[str, CompiledPattern, Mapping[str, object]]


def pattern_bytes(text: str) -> bytes:
    """Encode a pattern or path the same way the filesystem stores names."""
    return os.fsencode(text)


def first_wildcard(data: bytes) -> int | None:
    """Return the offset of the leftmost wildcard byte, or ``None``."""
    offsets = [pos for pos in (data.find(bytes([c])) for c in WILDCARD_BYTES) if pos >= 0]
    return min(offsets) if offsets else None


def compile_pattern(raw: str) -> CompiledPattern:
    """Parse one raw pattern string.

    Args:
        raw: Pattern in gitignore syntax, e.g. ``"!/build/"``.

    Returns:
        CompiledPattern: Immutable record with precomputed flags.

    Raises:
        InvalidPatternError: If ``raw`` is not a string.
    """
    if not isinstance(raw, str):
        raise InvalidPatternError(
            f"Exclude/include pattern must be a string, got {type(raw).__name__}"
        )

    pattern = raw
    negated = False
    directory_only = False

    if pattern.startswith("!"):
        negated = True
        pattern = pattern[1:]
    if pattern.endswith("/"):
        directory_only = True
        pattern = pattern[:-1]

    body = pattern_bytes(pattern)
    offset = first_wildcard(body)
    ends_with_literal = body.startswith(b"*") and first_wildcard(body[1:]) is None

    return CompiledPattern(
        pattern=pattern,
        negated=negated,
        directory_only=directory_only,
        no_directory="/" not in pattern,
        ends_with_literal=ends_with_literal,
        first_wildcard=offset,
    )


def coerce_pattern(value: PatternLike) -> CompiledPattern:
    """Accept a raw string, a compiled record, or a mapping of record fields.

    Raises:
        InvalidPatternError: If ``value`` is of another type, or a mapping
            is missing one of the record keys.
    """
    if isinstance(value, CompiledPattern):
        return value
    if isinstance(value, str):
        return compile_pattern(value)
    if isinstance(value, Mapping):
        missing = [key for key in _RECORD_KEYS if key not in value]
        if missing:
            raise InvalidPatternError(
                "Pre-compiled pattern records must contain the keys "
                f"{', '.join(_RECORD_KEYS)}; missing {', '.join(missing)}"
            )
        pattern = value["pattern"]
        offset = value["first_wildcard"]
        if not isinstance(pattern, str) or not (offset is None or isinstance(offset, int)):
            raise InvalidPatternError(f"Malformed pre-compiled pattern record: {dict(value)!r}")
        return CompiledPattern(
            pattern=pattern,
            negated=bool(value["negated"]),
            directory_only=bool(value["directory_only"]),
            no_directory=bool(value["no_directory"]),
            ends_with_literal=bool(value["ends_with_literal"]),
            first_wildcard=offset,
        )
    raise InvalidPatternError(
        f"Exclude/include pattern must be a string, got {type(value).__name__}"
    )


def compile_patterns(values: Iterable[PatternLike] | None) -> tuple[CompiledPattern, ...]:
    """Compile a whole pattern list once, preserving declaration order."""
    if values is None:
        return ()
    if isinstance(values, (str, bytes)):
        raise InvalidPatternError("Pattern lists must be a sequence of patterns, not a single string")
    return tuple(coerce_pattern(value) for value in values)
