"""Sidecar persistence for the mtime ledger and dependency graph."""

from __future__ import annotations

import logging
from pathlib import Path

from assetcache.constants.cache import (
    CACHE_FILENAME,
    CACHE_SUBDIR,
    CACHE_TEMP_PREFIX,
    CACHE_TEMP_SUFFIX,
    SIDECAR_CHILDREN_KEY,
    SIDECAR_LEDGER_KEY,
)
from assetcache.exceptions import PersistenceError
from assetcache.freshness.graph import DependencyGraph
from assetcache.freshness.ledger import ModTimeLedger
from assetcache.io import load_json_file, write_json_atomic
from assetcache.types import SidecarPayload

logger = logging.getLogger(__name__)


def sidecar_path(cache_dir: Path) -> Path:
    """Return the fixed sidecar location under *cache_dir*."""
    return cache_dir / CACHE_SUBDIR / CACHE_FILENAME


def new_payload() -> SidecarPayload:
    """Return an empty sidecar payload."""
    return {SIDECAR_LEDGER_KEY: {}, SIDECAR_CHILDREN_KEY: {}}  # type: ignore[return-value]


def load_payload(path: Path) -> SidecarPayload:
    """Load the sidecar if valid, otherwise return an empty payload."""
    try:
        if not path.is_file():
            return new_payload()
        raw = load_json_file(path)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable cache sidecar %s: %s", path, exc)
        return new_payload()

    if not isinstance(raw, dict):
        logger.warning("Ignoring malformed cache sidecar %s", path)
        return new_payload()

    return {
        SIDECAR_LEDGER_KEY: _normalize_ledger(raw.get(SIDECAR_LEDGER_KEY)),
        SIDECAR_CHILDREN_KEY: _normalize_children(raw.get(SIDECAR_CHILDREN_KEY)),
    }  # type: ignore[return-value]


def load_sidecar(path: Path) -> tuple[ModTimeLedger, DependencyGraph]:
    """Rebuild the ledger and graph persisted by a previous run."""
    payload = load_payload(path)
    ledger = ModTimeLedger(payload[SIDECAR_LEDGER_KEY])
    graph = DependencyGraph(payload[SIDECAR_CHILDREN_KEY])
    logger.debug("Loaded %d ledger entries and %d graph entries from %s", len(ledger), len(graph), path)
    return ledger, graph


def save_sidecar(path: Path, ledger: ModTimeLedger, graph: DependencyGraph) -> None:
    """Replace the sidecar wholesale with the current ledger and graph.

    Raises ``PersistenceError`` when the directory or file cannot be written.
    """
    payload: SidecarPayload = {
        SIDECAR_LEDGER_KEY: ledger.snapshot(),
        SIDECAR_CHILDREN_KEY: graph.snapshot(),
    }  # type: ignore[misc]
    try:
        write_json_atomic(
            path=path,
            payload=payload,
            temp_prefix=CACHE_TEMP_PREFIX,
            temp_suffix=CACHE_TEMP_SUFFIX,
        )
    except OSError as exc:
        raise PersistenceError(path, exc) from exc


def _normalize_ledger(raw: object) -> dict[str, int]:
    if not isinstance(raw, dict):
        return {}

    entries: dict[str, int] = {}
    for key, value in raw.items():
        if not isinstance(key, str) or isinstance(value, bool) or not isinstance(value, int):
            continue
        entries[key] = value
    return entries


def _normalize_children(raw: object) -> dict[str, list[str]]:
    if not isinstance(raw, dict):
        return {}

    children: dict[str, list[str]] = {}
    for key, value in raw.items():
        if not isinstance(key, str) or not isinstance(value, list):
            continue
        children[key] = [child for child in value if isinstance(child, str)]
    return children
