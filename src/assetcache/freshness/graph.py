"""Lazily populated map of each stylesheet to its direct imports."""

from __future__ import annotations

from typing import TypeAlias

import logging
import os
from collections.abc import Callable, Iterator, Mapping
from pathlib import Path

from assetcache.freshness.imports import parse_imports

logger = logging.getLogger(__name__)

ImportParser: TypeAlias = Callable[[Path], tuple[Path, ...]]


class DependencyGraph:
    """Memoized ``file -> direct children`` mapping.

    Entries are computed on first request and kept until ``invalidate`` is
    called for that file. Transitive closure is never stored; callers walk
    the graph one level at a time.
    """

    def __init__(
        self,
        children: Mapping[str, list[str] | tuple[str, ...]] | None = None,
        *,
        parser: ImportParser = parse_imports,
    ) -> None:
        self._children: dict[str, tuple[str, ...]] = {
            key: tuple(value) for key, value in (children or {}).items()
        }
        self._parser = parser

    def children_of(self, path: Path) -> tuple[Path, ...]:
        """Return direct imports of *path*, parsing the file on first use."""
        key = os.fspath(path)
        cached = self._children.get(key)
        if cached is None:
            logger.debug("Scanning imports of %s", key)
            cached = tuple(os.fspath(child) for child in self._parser(path))
            self._children[key] = cached
        return tuple(Path(child) for child in cached)

    def invalidate(self, path: Path) -> None:
        """Drop the cached children of *path* so the next lookup re-parses it."""
        self._children.pop(os.fspath(path), None)

    def has_entry(self, path: Path) -> bool:
        return os.fspath(path) in self._children

    def walk(self, path: Path) -> Iterator[tuple[int, Path]]:
        """Yield ``(depth, file)`` pairs depth-first, visiting each file once."""
        visited: set[Path] = set()
        stack: list[tuple[int, Path]] = [(0, path)]
        while stack:
            depth, current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            yield depth, current
            try:
                children = self.children_of(current)
            except OSError as exc:
                logger.debug("Skipping unreadable import %s: %s", current, exc)
                continue
            stack.extend((depth + 1, child) for child in reversed(children))

    def snapshot(self) -> dict[str, list[str]]:
        """Return a JSON-ready copy of every cached entry."""
        return {key: list(value) for key, value in sorted(self._children.items())}

    def __len__(self) -> int:
        return len(self._children)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, os.PathLike)) and os.fspath(path) in self._children
