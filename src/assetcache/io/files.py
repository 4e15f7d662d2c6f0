"""File-level helpers for modification times and source reads."""

from __future__ import annotations

from pathlib import Path

from assetcache.exceptions import ReadFailureError, ResourceNotFoundError


def file_mtime(path: Path) -> int:
    """Return the modification time of *path* in whole Unix seconds."""
    try:
        return int(path.stat().st_mtime)
    except FileNotFoundError as exc:
        raise ResourceNotFoundError(path) from exc
    except OSError as exc:
        raise ReadFailureError(path, exc) from exc


def read_source_text(path: Path) -> str:
    """Read a source file as UTF-8 text, replacing undecodable bytes."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError as exc:
        raise ResourceNotFoundError(path) from exc
    except OSError as exc:
        raise ReadFailureError(path, exc) from exc
