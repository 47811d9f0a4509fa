"""Filtered directory copy, recursive removal and directory creation."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ignorewalk import RootNotADirectoryError
from ignorewalk.filter import FilterOptions, filter_path, prepare_options
from ignorewalk.scanner import entry_is_dir, is_dangling_link, read_directory

logger = logging.getLogger(__name__)

CopyHook = Callable[[str, str], object]


@dataclass(frozen=True, slots=True)
class CopyOptions(FilterOptions):
    """Filtering options plus copy-specific settings.

    Attributes:
        dir_mode: Permission bits for newly created directories.
        file_mode: Permission bits for copied files. ``None`` keeps the
            mode the file was created with.
        before_copy: Called as ``before_copy(src, dst)`` before each file or
            directory is copied. Returning ``False`` skips that entry.
        after_copy: Called as ``after_copy(src, dst)`` after each file, and
            after each directory once its contents have been copied.
    """

    dir_mode: int = 0o775
    file_mode: int | None = None
    before_copy: CopyHook | None = None
    after_copy: CopyHook | None = None


def normalize_path(path: str, sep: str = os.sep) -> str:
    """Convert both ``/`` and ``\\`` to *sep* and strip trailing separators.

    For example ``'/home\\demo/'`` becomes ``'/home/demo'`` on POSIX.
    """
    return path.replace("/", sep).replace("\\", sep).rstrip(sep)


def create_directory(path: str | os.PathLike[str], mode: int = 0o775, recursive: bool = True) -> bool:
    """Create a directory and ``chmod`` it so the umask does not apply.

    Args:
        path: Directory to create.
        mode: Permission bits for each created directory.
        recursive: Whether to create missing parent directories too.

    Returns:
        bool: ``True`` once the directory exists.
    """
    target = os.fspath(path)
    if os.path.isdir(target):
        return True
    parent = os.path.dirname(target)
    if recursive and parent and not os.path.isdir(parent):
        create_directory(parent, mode, True)
    try:
        os.mkdir(target, mode)
    except FileExistsError:
        if not os.path.isdir(target):
            raise
        return True
    os.chmod(target, mode)
    return True


def copy_tree(
    src: str | os.PathLike[str],
    dst: str | os.PathLike[str],
    options: CopyOptions | None = None,
) -> None:
    """Copy the files and subdirectories of *src* that pass the filter into *dst*.

    *dst* and its parents are created when missing. When *dst* lies inside
    *src* it is not copied into itself. Symlinked directories are followed,
    except into one of their own ancestors.

    Raises:
        RootNotADirectoryError: If *src* is not a directory.
        InvalidPatternError: If a pattern in the options is malformed.
        DirectoryUnreadableError: If a source directory cannot be read.
    """
    src_str = os.fspath(src)
    if not os.path.isdir(src_str):
        raise RootNotADirectoryError(f"'{src_str}' is not a directory")

    start = os.path.realpath(src_str)
    active = prepare_options(options or CopyOptions(), start)
    dst_str = os.fspath(dst)
    if not os.path.isdir(dst_str):
        create_directory(dst_str, active.dir_mode, True)
    _copy_directory(start, dst_str, active, frozenset({start}), os.path.realpath(dst_str))


def _copy_directory(
    src: str,
    dst: str,
    options: CopyOptions,
    ancestors: frozenset[str],
    dst_root: str,
) -> None:
    if not os.path.isdir(dst):
        create_directory(dst, options.dir_mode, True)

    for dir_entry in read_directory(src):
        from_path = dir_entry.path
        to_path = os.path.join(dst, dir_entry.name)
        is_dir = entry_is_dir(dir_entry)

        real = from_path
        if is_dir:
            real = os.path.realpath(from_path)
            if real == dst_root:
                logger.debug("Skipping copy destination %s", from_path)
                continue
            if real in ancestors:
                logger.debug("Skipping symlink loop %s", from_path)
                continue
        elif is_dangling_link(dir_entry):
            logger.debug("Skipping dangling symlink %s", from_path)
            continue

        if not filter_path(from_path, options, is_dir):
            continue
        if options.before_copy is not None and options.before_copy(from_path, to_path) is False:
            logger.debug("Copy cancelled: %s", from_path)
            continue

        if not is_dir:
            shutil.copyfile(from_path, to_path)
            if options.file_mode is not None:
                os.chmod(to_path, options.file_mode)
            logger.debug("Copied %s -> %s", from_path, to_path)
        elif options.recursive:
            _copy_directory(from_path, to_path, options, ancestors | {real}, dst_root)
        else:
            continue

        if options.after_copy is not None:
            options.after_copy(from_path, to_path)


def remove_tree(directory: str | os.PathLike[str]) -> None:
    """Remove a directory and everything below it, best effort.

    A missing directory is not an error. Symlinks are unlinked, never
    followed. Failures on individual entries are logged and skipped.
    """
    path = os.fspath(directory)
    if os.path.islink(path):
        _unlink(path)
        return
    if not os.path.isdir(path):
        return

    try:
        with os.scandir(path) as it:
            entries = list(it)
    except OSError as exc:
        logger.warning("Cannot read directory %s: %s", path, exc)
        return

    for dir_entry in entries:
        if dir_entry.is_dir(follow_symlinks=False):
            remove_tree(dir_entry.path)
        else:
            _unlink(dir_entry.path)

    try:
        os.rmdir(path)
    except OSError as exc:
        logger.warning("Cannot remove directory %s: %s", path, exc)


def _unlink(path: str) -> None:
    try:
        os.unlink(path)
    except OSError as exc:
        logger.warning("Cannot remove %s: %s", path, exc)
