"""CLI entry point for iwalk — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from ignorewalk import IgnoreWalkError, RootNotADirectoryError
from ignorewalk.filter import FilterOptions
from ignorewalk.scanner import list_files


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``iwalk`` command.
    """
    parser = argparse.ArgumentParser(
        prog="iwalk",
        description="list files under a directory, filtered by gitignore-style patterns",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Root directory to search (default: current directory)",
    )
    parser.add_argument(
        "-e",
        "--except",
        action="append",
        default=[],
        dest="except_patterns",
        metavar="PATTERN",
        help="Exclude paths matching PATTERN; '!' re-includes (can be repeated, last match wins)",
    )
    parser.add_argument(
        "-O",
        "--only",
        action="append",
        default=[],
        dest="only_patterns",
        metavar="PATTERN",
        help="Keep only files matching PATTERN (can be repeated)",
    )
    parser.add_argument(
        "--no-recursive",
        action="store_false",
        dest="recursive",
        help="Do not descend into subdirectories",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Also exclude whatever the root .gitignore ignores",
    )
    parser.add_argument(
        "--preset",
        type=str,
        default=None,
        help="Prepend a named except-pattern preset (python, node, rust, generic)",
    )
    parser.add_argument(
        "-r",
        "--relative",
        action="store_true",
        help="Print paths relative to the root directory, '/'-separated",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        dest="output_file",
        help="Write output to a file instead of stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log traversal details to stderr",
    )
    return parser


def run_iwalk(argv: list[str] | None = None) -> str:
    """Run iwalk with provided CLI args and return the rendered file list.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.

    Returns:
        str: One path per line, sorted.

    Raises:
        IgnoreWalkError: On any user-facing validation or I/O error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _resolve_root(directory: str) -> Path:
    """Resolve directory and validate it is a directory.

    Raises:
        RootNotADirectoryError: If directory does not exist or is not a directory.
    """
    root = Path(directory).resolve()
    if not root.is_dir():
        raise RootNotADirectoryError(f"'{directory}' is not a directory")
    return root


def _build_except_patterns(args: argparse.Namespace) -> list[str]:
    """Build the except list: preset patterns first, so user patterns win.

    Raises:
        IgnoreWalkError: If ``--preset`` value is invalid.
    """
    patterns: list[str] = []
    if args.preset:
        from ignorewalk.preset import get_preset_patterns

        try:
            patterns.extend(get_preset_patterns(args.preset))
        except ValueError as exc:
            raise IgnoreWalkError(str(exc)) from exc
    patterns.extend(args.except_patterns)
    return patterns


def _build_options(args: argparse.Namespace, root: Path) -> FilterOptions:
    custom_filter = None
    if args.gitignore:
        from ignorewalk.gitignore import GitignoreFilter

        custom_filter = GitignoreFilter(root)

    return FilterOptions(
        except_=tuple(_build_except_patterns(args)),
        only=tuple(args.only_patterns),
        custom_filter=custom_filter,
        recursive=args.recursive,
    )


def _format_output(args: argparse.Namespace, root: Path, files: list[str]) -> str:
    if not args.relative:
        return "\n".join(files)
    return "\n".join(os.path.relpath(path, root).replace(os.sep, "/") for path in files)


def _run_with_args(args: argparse.Namespace) -> str:
    """Run the list/format pipeline for parsed arguments.

    Raises:
        IgnoreWalkError: On any user-facing validation or I/O error.
    """
    root = _resolve_root(args.directory)
    options = _build_options(args, root)
    files = list_files(root, options)
    return _format_output(args, root, files)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once and writes output to stdout or ``-o`` file.
    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        output = _run_with_args(args)
    except IgnoreWalkError as exc:
        sys.stderr.write(f"iwalk: {exc}\n")
        sys.exit(1)

    if args.output_file:
        try:
            Path(args.output_file).write_text(output + "\n", encoding="utf-8", newline="")
        except OSError as exc:
            sys.stderr.write(f"iwalk: cannot write to '{args.output_file}': {exc}\n")
            sys.exit(1)
    elif output:
        sys.stdout.write(output + "\n")
