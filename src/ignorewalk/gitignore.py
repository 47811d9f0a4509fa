"""Gitignore integration — a custom filter backed by a root .gitignore via pathspec."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pathspec import GitIgnoreSpec

from ignorewalk.filter import MatchDecision

logger = logging.getLogger(__name__)


def load_gitignore_spec(root: Path) -> GitIgnoreSpec | None:
    """Load .gitignore patterns from *root* directory.

    Args:
        root: Directory containing the ``.gitignore`` file.

    Returns:
        A compiled spec when a ``.gitignore`` exists and is readable,
        otherwise ``None``.
    """
    gitignore_path = root / ".gitignore"
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except OSError:
        logger.debug("Cannot read .gitignore: %s", gitignore_path)
        return None
    return GitIgnoreSpec.from_lines(lines)


class GitignoreFilter:
    """Exclude whatever the root ``.gitignore`` ignores.

    Paths the ``.gitignore`` does not match are left undecided, so the
    ``except_`` and ``only`` lists still apply to them.
    """

    def __init__(self, root: str | os.PathLike[str], spec: GitIgnoreSpec | None = None) -> None:
        """Initialize the filter.

        Args:
            root: Directory holding the ``.gitignore``; paths are matched
                relative to it.
            spec: Pre-loaded spec. Loaded from *root* when omitted.
        """
        self._root = os.path.realpath(root)
        self._spec = spec if spec is not None else load_gitignore_spec(Path(self._root))

    def __call__(self, path: str) -> MatchDecision:
        if self._spec is None:
            return MatchDecision.UNDECIDED

        relative = os.path.relpath(os.path.realpath(path), self._root).replace(os.sep, "/")
        if relative.startswith("../") or relative == "..":
            return MatchDecision.UNDECIDED
        if os.path.isdir(path):
            relative += "/"
        if self._spec.match_file(relative):
            return MatchDecision.EXCLUDE
        return MatchDecision.UNDECIDED
