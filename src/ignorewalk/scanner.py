"""Directory walker using os.scandir with an explicit stack (DFS)."""

from __future__ import annotations

import logging
import os

from ignorewalk import DirectoryUnreadableError, RootNotADirectoryError
from ignorewalk.filter import FilterOptions, filter_path, prepare_options

logger = logging.getLogger(__name__)


def read_directory(directory: str) -> list[os.DirEntry[str]]:
    """List one directory level, closing the handle before returning.

    Raises:
        DirectoryUnreadableError: If the directory cannot be opened or read.
    """
    try:
        with os.scandir(directory) as it:
            return list(it)
    except OSError as exc:
        logger.debug("Cannot read directory %s: %s", directory, exc)
        raise DirectoryUnreadableError(directory, f"cannot read directory '{directory}': {exc}") from exc


def entry_is_dir(entry: os.DirEntry[str]) -> bool:
    """Return whether an entry is a directory, following symlinks."""
    try:
        return entry.is_dir()
    except OSError:
        logger.debug("Cannot stat: %s", entry.path)
        return False


def is_dangling_link(entry: os.DirEntry[str]) -> bool:
    """Return whether an entry is a symlink whose target no longer exists."""
    return entry.is_symlink() and not os.path.exists(entry.path)


def list_files(root: str | os.PathLike[str], options: FilterOptions | None = None) -> list[str]:
    """Return the files under *root* that pass the filtering options.

    Directories are used for traversal only and never appear in the result.
    Entries are visited in directory-listing order; the aggregate is sorted
    before it is returned.

    Args:
        root: Directory to search.
        options: Filtering options. Defaults to ``FilterOptions()``.

    Returns:
        list[str]: Sorted absolute file paths.

    Raises:
        RootNotADirectoryError: If *root* does not exist or is not a directory.
        InvalidPatternError: If a pattern in the options is malformed.
        DirectoryUnreadableError: If any visited directory cannot be read.
    """
    root_str = os.fspath(root)
    if not os.path.isdir(root_str):
        raise RootNotADirectoryError(f"'{root_str}' is not a directory")

    start = os.path.realpath(root_str)
    active = prepare_options(options or FilterOptions(), start)

    result: list[str] = []
    # Stack items: (directory_path, real paths of it and its ancestors)
    stack: list[tuple[str, frozenset[str]]] = [(start, frozenset({start}))]

    while stack:
        current_dir, ancestors = stack.pop()
        logger.debug("Scanning %s", current_dir)

        child_dirs: list[tuple[str, frozenset[str]]] = []
        for dir_entry in read_directory(current_dir):
            is_dir = entry_is_dir(dir_entry)
            if not is_dir and is_dangling_link(dir_entry):
                logger.debug("Skipping dangling symlink %s", dir_entry.path)
                continue
            if not filter_path(dir_entry.path, active, is_dir):
                if is_dir:
                    logger.debug("Pruned %s", dir_entry.path)
                continue

            if not is_dir:
                result.append(dir_entry.path)
            elif active.recursive:
                real = os.path.realpath(dir_entry.path)
                if real in ancestors:
                    logger.debug("Skipping symlink loop %s", dir_entry.path)
                    continue
                child_dirs.append((dir_entry.path, ancestors | {real}))

        # Push children in reverse so they are visited in listing order
        stack.extend(reversed(child_dirs))

    result.sort()
    return result
