"""Last-observed modification times keyed by absolute file path."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from assetcache.io import file_mtime


class ModTimeLedger:
    """Record of the most recent mtime seen for every examined file.

    ``observe`` always hits the filesystem. Comparing its result with the
    value ``recorded_mtime`` returned just before tells whether the file
    changed since it was last looked at.
    """

    def __init__(self, entries: Mapping[str, int] | None = None) -> None:
        self._entries: dict[str, int] = dict(entries or {})

    def observe(self, path: Path) -> int:
        """Stat *path*, record its current mtime and return it."""
        mtime = file_mtime(path)
        self._entries[os.fspath(path)] = mtime
        return mtime

    def recorded_mtime(self, path: Path) -> int | None:
        """Return the previously recorded mtime, or None when never observed."""
        return self._entries.get(os.fspath(path))

    def forget(self, path: Path) -> None:
        self._entries.pop(os.fspath(path), None)

    def snapshot(self) -> dict[str, int]:
        """Return a JSON-ready copy of every entry."""
        return dict(sorted(self._entries.items()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, os.PathLike)) and os.fspath(path) in self._entries
