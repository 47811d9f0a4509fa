"""Entry filtering: custom hook, then except-list, then only-list."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field, replace
from typing import Protocol

from ignorewalk.matcher import last_matching_pattern
from ignorewalk.pattern import CompiledPattern, PatternLike, compile_patterns


class MatchDecision(enum.Enum):
    """Outcome of a filter for a single path."""

    INCLUDE = "include"
    EXCLUDE = "exclude"
    UNDECIDED = "undecided"


class CustomFilter(Protocol):
    """Protocol for a caller-supplied filter hook.

    A decisive result overrides the ``except_`` and ``only`` lists. A plain
    ``True`` or ``False`` counts as include or exclude, ``None`` as undecided.
    """

    def __call__(self, path: str) -> MatchDecision | bool | None: ...


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """Options controlling which entries a walk keeps.

    Attributes:
        except_: Exclusion patterns; a negated pattern re-includes.
        only: Inclusion patterns, applied to files only.
        custom_filter: Optional hook evaluated before the pattern lists.
        recursive: Whether to descend into subdirectories.
        base_path: Walk root. Filled in once by the top-level operation.
    """

    except_: tuple[PatternLike, ...] = field(default_factory=tuple)
    only: tuple[PatternLike, ...] = field(default_factory=tuple)
    custom_filter: CustomFilter | None = None
    recursive: bool = True
    base_path: str | None = None


def prepare_options(options: FilterOptions, root: str) -> FilterOptions:
    """Compile pattern lists and resolve the walk root, once per top-level call.

    Already prepared options are returned unchanged, so recursive calls reuse
    the same object. A caller-supplied ``base_path`` is kept as is.
    """
    if options.base_path is not None and _is_compiled(options.except_) and _is_compiled(options.only):
        return options
    return replace(
        options,
        except_=compile_patterns(options.except_),
        only=compile_patterns(options.only),
        base_path=options.base_path if options.base_path is not None else os.path.realpath(root),
    )


def _is_compiled(patterns: tuple[PatternLike, ...]) -> bool:
    return isinstance(patterns, tuple) and all(isinstance(p, CompiledPattern) for p in patterns)


def _to_slashes(path: str) -> str:
    return path.replace("\\", "/")


def filter_path(path: str, options: FilterOptions, is_dir: bool | None = None) -> bool:
    """Return whether *path* passes the filtering options.

    Pattern lists are expected to be compiled already (see
    :func:`prepare_options`); the top-level operations do this once per call.

    Args:
        path: Path of the file or directory being checked.
        options: Filtering options with ``base_path`` set.
        is_dir: Whether *path* is a directory; looked up on disk when ``None``.

    Returns:
        bool: ``True`` to keep the entry (or descend into the directory).
    """
    if options.custom_filter is not None:
        decision = options.custom_filter(path)
        if decision is True or decision is MatchDecision.INCLUDE:
            return True
        if decision is False or decision is MatchDecision.EXCLUDE:
            return False

    if not options.except_ and not options.only:
        return True

    if is_dir is None:
        is_dir = os.path.isdir(path)
    slashed = _to_slashes(path)
    base_path = _to_slashes(options.base_path or "")

    if options.except_:
        matched = last_matching_pattern(base_path, slashed, _compiled(options.except_), is_dir)
        if matched is not None:
            return matched.negated

    if not is_dir and options.only:
        # only-patterns are never prefixed with "!", so negation is not checked
        matched = last_matching_pattern(base_path, slashed, _compiled(options.only), is_dir)
        return matched is not None
    return True


def _compiled(patterns: tuple[PatternLike, ...]) -> tuple[CompiledPattern, ...]:
    if _is_compiled(patterns):
        return patterns  # type: ignore[return-value]
    return compile_patterns(patterns)
