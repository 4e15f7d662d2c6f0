"""Shared pytest fixtures for building source trees with controlled mtimes."""

from __future__ import annotations

from typing import TypeAlias

import os
from collections.abc import Callable
from pathlib import Path

import pytest

BASE_MTIME: int = 1_700_000_000

MakeFile: TypeAlias = Callable[..., Path]


def set_mtime(path: Path, mtime: int) -> Path:
    """Pin both atime and mtime of *path* to *mtime*."""
    os.utime(path, (mtime, mtime))
    return path


@pytest.fixture()
def make_file(tmp_path: Path) -> MakeFile:
    """Return a factory writing ``tmp_path / relative`` with an explicit mtime."""

    def _make(relative: str, content: str = "", *, mtime: int = BASE_MTIME) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return set_mtime(path, mtime)

    return _make


@pytest.fixture()
def project_root(tmp_path: Path) -> Path:
    """Return a project root with a config-less default layout."""
    (tmp_path / "assets").mkdir()
    return tmp_path


@pytest.fixture()
def touch() -> Callable[[Path, int], Path]:
    """Return the mtime setter for use inside tests."""
    return set_mtime
