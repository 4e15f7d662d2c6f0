"""Artifact freshness checks over inputs and their transitive imports."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, TypeAlias

from assetcache.constants.parsing import IMPORT_CAPABLE_EXTENSIONS
from assetcache.exceptions import ReadFailureError, ResourceNotFoundError
from assetcache.freshness.graph import DependencyGraph
from assetcache.freshness.ledger import ModTimeLedger

logger = logging.getLogger(__name__)

StalenessMemo: TypeAlias = dict[Path, bool]


class CheckableBundle(Protocol):
    """Minimal bundle shape the checker needs."""

    @property
    def cached_path(self) -> Path: ...

    @property
    def inputs(self) -> tuple[Path, ...]: ...


def is_fresh(bundle: CheckableBundle, *, ledger: ModTimeLedger, graph: DependencyGraph) -> bool:
    """Return True when the bundle's cached artifact is still valid.

    Direct inputs are all checked before any import graph is consulted, so a
    touched input short-circuits without parsing a single stylesheet.
    """
    cached_path = bundle.cached_path
    if not cached_path.is_file():
        return False

    try:
        cache_time = int(cached_path.stat().st_mtime)
    except FileNotFoundError:
        return False

    deep: list[Path] = []
    for source in bundle.inputs:
        if observe_and_invalidate(source, ledger=ledger, graph=graph) > cache_time:
            logger.debug("Input %s is newer than %s", source, cached_path)
            return False
        if is_import_capable(source):
            deep.append(source)

    memo: StalenessMemo = {}
    for source in deep:
        if subtree_is_stale(source, cache_time, memo, ledger=ledger, graph=graph, required=True):
            logger.debug("Import tree of %s changed after %s", source, cached_path)
            return False

    return True


def subtree_is_stale(
    path: Path,
    cache_time: int,
    memo: StalenessMemo,
    *,
    ledger: ModTimeLedger,
    graph: DependencyGraph,
    required: bool = False,
) -> bool:
    """Return True if *path* or anything it imports is newer than *cache_time*.

    *memo* is shared across one freshness query. A file is marked not stale
    while its subtree is in progress, which terminates import cycles; a cycle
    member that really changed still reports through its own mtime.

    With ``required`` set, read failures of *path* propagate. Otherwise a
    vanished or unreadable import target counts as a leaf.
    """
    known = memo.get(path)
    if known is not None:
        return known
    memo[path] = False

    try:
        mtime = observe_and_invalidate(path, ledger=ledger, graph=graph)
        if mtime > cache_time:
            memo[path] = True
            return True
        children = graph.children_of(path)
    except (ResourceNotFoundError, ReadFailureError) as exc:
        if required:
            raise
        logger.debug("Treating unreadable import %s as a leaf: %s", path, exc)
        return False

    for child in children:
        if subtree_is_stale(child, cache_time, memo, ledger=ledger, graph=graph):
            memo[path] = True
            return True

    return False


def observe_and_invalidate(path: Path, *, ledger: ModTimeLedger, graph: DependencyGraph) -> int:
    """Refresh the ledger for *path*, dropping its cached imports if it changed."""
    previous = ledger.recorded_mtime(path)
    current = ledger.observe(path)
    if previous != current:
        if previous is not None:
            logger.debug("%s changed (%d -> %d); rescanning imports", path, previous, current)
        graph.invalidate(path)
    return current


def is_import_capable(path: Path) -> bool:
    """Return True for stylesheet dialects that can ``@import`` other files."""
    return path.suffix[1:].lower() in IMPORT_CAPABLE_EXTENSIONS
