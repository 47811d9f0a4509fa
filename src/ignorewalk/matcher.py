"""Pattern matching against basenames and root-relative paths.

Follows ``match_basename()``, ``match_pathname()`` and
``last_exclude_matching_from_list()`` from git's ``dir.c``: the last pattern
in a list that matches decides, and patterns containing ``/`` are matched
once against the path relative to the walk root.
"""

from __future__ import annotations

import os
import posixpath
from collections.abc import Sequence

from ignorewalk.glob import glob_match
from ignorewalk.pattern import CompiledPattern, pattern_bytes


def match_basename(name: str, pattern: CompiledPattern) -> bool:
    """Match a single path component against a pattern.

    Args:
        name: File or directory name without separators.
        pattern: Compiled pattern, normally with ``no_directory`` set.

    Returns:
        bool: ``True`` when the name matches.
    """
    body = pattern_bytes(pattern.pattern)
    data = pattern_bytes(name)

    if pattern.first_wildcard is None:
        return body == data
    if pattern.ends_with_literal:
        # "*literal" against "fooliteral"
        return data.endswith(body[1:])
    return glob_match(body, data)


def match_pathname(path: str, base_path: str, pattern: CompiledPattern) -> bool:
    """Match a full path against a pattern, relative to *base_path*.

    Both paths must use ``/`` as the separator. Wildcards never match ``/``.

    Args:
        path: Path of the candidate entry.
        base_path: Root the walk started from; this prefix is not compared.
        pattern: Compiled pattern whose body contains a ``/``.

    Returns:
        bool: ``True`` when the root-relative path matches.
    """
    body = pattern_bytes(pattern.pattern)
    offset = pattern.first_wildcard

    # the pattern has the base path implicitly in front of it
    if body.startswith(b"/"):
        body = body[1:]
        if offset is not None and offset != 0:
            offset -= 1

    data = pattern_bytes(path)
    base = pattern_bytes(base_path)
    # strip the base and the separator after it; a root base such as "/"
    # already ends with one
    name = data[len(base):] if base else data
    if base and name.startswith(b"/"):
        name = name[1:]

    if offset != 0:
        if offset is None:
            offset = len(body)
        # a literal prefix longer than the remaining path cannot match
        if offset > len(name):
            return False
        if body[:offset] != name[:offset]:
            return False
        body = body[offset:]
        name = name[offset:]

        if not body and not name:
            return True

    return glob_match(body, name, pathname=True)


def last_matching_pattern(
    base_path: str,
    path: str,
    patterns: Sequence[CompiledPattern],
    is_dir: bool | None = None,
) -> CompiledPattern | None:
    """Find the pattern that decides the fate of *path*.

    The list is scanned in reverse, so later patterns take precedence over
    earlier ones.

    Args:
        base_path: Walk root, ``/``-separated.
        path: Candidate path, ``/``-separated.
        patterns: Compiled patterns in declaration order.
        is_dir: Whether *path* is a directory; looked up on disk when ``None``.

    Returns:
        The deciding pattern, or ``None`` when no pattern matches.
    """
    basename = posixpath.basename(path)
    for pattern in reversed(patterns):
        if pattern.directory_only:
            if is_dir is None:
                is_dir = os.path.isdir(path)
            if not is_dir:
                continue

        if pattern.no_directory:
            if match_basename(basename, pattern):
                return pattern
            continue

        if match_pathname(path, base_path, pattern):
            return pattern
    return None
