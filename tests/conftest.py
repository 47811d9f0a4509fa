"""Shared fixtures for ignorewalk tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest


def relative_names(root: Path, files: list[str]) -> list[str]:
    """Return *files* relative to *root*, ``/``-separated, in the given order."""
    return [os.path.relpath(path, root).replace(os.sep, "/") for path in files]


@pytest.fixture
def real_tmp(tmp_path: Path) -> Path:
    """``tmp_path`` with symlinks resolved, matching the walker's output paths."""
    return Path(os.path.realpath(tmp_path))


@pytest.fixture
def php_tree(real_tmp: Path) -> Path:
    """Mixed tree for only/except tests.

    Structure::

        root/
        ├── a.php
        ├── b.txt
        └── sub/
            └── c.php
    """
    (real_tmp / "a.php").write_text("a")
    (real_tmp / "b.txt").write_text("b")
    (real_tmp / "sub").mkdir()
    (real_tmp / "sub" / "c.php").write_text("c")
    return real_tmp


@pytest.fixture
def project_tree(real_tmp: Path) -> Path:
    """A realistic project tree with VCS and build noise.

    Structure::

        root/
        ├── .git/
        │   ├── HEAD
        │   └── objects/
        │       └── ab
        ├── build/
        │   └── out.o
        ├── docs/
        │   ├── guide.md
        │   └── build/
        │       └── index.html
        ├── logs/
        │   ├── debug.log
        │   └── important.log
        ├── src/
        │   ├── app.py
        │   ├── app.pyc
        │   └── views/
        │       ├── index.php
        │       └── admin/
        │           └── users.php
        └── README.md
    """
    (real_tmp / ".git" / "objects").mkdir(parents=True)
    (real_tmp / ".git" / "HEAD").write_text("ref: refs/heads/main")
    (real_tmp / ".git" / "objects" / "ab").write_bytes(b"\x00")
    (real_tmp / "build").mkdir()
    (real_tmp / "build" / "out.o").write_bytes(b"\x00")
    (real_tmp / "docs" / "build").mkdir(parents=True)
    (real_tmp / "docs" / "guide.md").write_text("guide")
    (real_tmp / "docs" / "build" / "index.html").write_text("<html>")
    (real_tmp / "logs").mkdir()
    (real_tmp / "logs" / "debug.log").write_text("debug")
    (real_tmp / "logs" / "important.log").write_text("important")
    (real_tmp / "src" / "views" / "admin").mkdir(parents=True)
    (real_tmp / "src" / "app.py").write_text("app")
    (real_tmp / "src" / "app.pyc").write_bytes(b"\x00")
    (real_tmp / "src" / "views" / "index.php").write_text("index")
    (real_tmp / "src" / "views" / "admin" / "users.php").write_text("users")
    (real_tmp / "README.md").write_text("readme")
    return real_tmp


@pytest.fixture
def gitignore_tree(real_tmp: Path) -> Path:
    """Tree with .gitignore for gitignore-integration testing.

    Structure::

        root/
        ├── .gitignore          (*.pyc, node_modules/, dist/)
        ├── dist/
        │   └── bundle.js
        ├── node_modules/
        │   └── pkg/
        │       └── index.js
        ├── src/
        │   ├── app.py
        │   └── app.pyc
        └── README.md
    """
    (real_tmp / ".gitignore").write_text("*.pyc\nnode_modules/\ndist/\n")
    (real_tmp / "dist").mkdir()
    (real_tmp / "dist" / "bundle.js").write_text("bundle")
    (real_tmp / "node_modules" / "pkg").mkdir(parents=True)
    (real_tmp / "node_modules" / "pkg" / "index.js").write_text("js")
    (real_tmp / "src").mkdir()
    (real_tmp / "src" / "app.py").write_text("app")
    (real_tmp / "src" / "app.pyc").write_bytes(b"\x00")
    (real_tmp / "README.md").write_text("readme")
    return real_tmp

