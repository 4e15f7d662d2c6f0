"""Process-scoped cache context owning the ledger, graph and sidecar."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from assetcache.exceptions import PersistenceError
from assetcache.freshness.checker import CheckableBundle, is_fresh
from assetcache.freshness.graph import DependencyGraph
from assetcache.freshness.ledger import ModTimeLedger
from assetcache.freshness.store import load_sidecar, save_sidecar, sidecar_path

logger = logging.getLogger(__name__)


class CacheContext:
    """Ledger and dependency graph shared by every freshness query of a process.

    A persistent context warms itself from the sidecar on ``open`` and writes
    it back on ``close``. ``close`` is best effort: a failed write only costs
    a rescan on the next run, so it is logged and swallowed.
    """

    def __init__(
        self,
        ledger: ModTimeLedger | None = None,
        graph: DependencyGraph | None = None,
        *,
        store_path: Path | None = None,
    ) -> None:
        self.ledger = ledger if ledger is not None else ModTimeLedger()
        self.graph = graph if graph is not None else DependencyGraph()
        self.store_path = store_path
        self.lock = threading.RLock()
        self.closed = False

    @classmethod
    def open(cls, cache_dir: Path | None = None, *, persistent: bool = True) -> CacheContext:
        """Create a context, loading the sidecar under *cache_dir* when persistent."""
        if not persistent or cache_dir is None:
            return cls()
        store_path = sidecar_path(cache_dir)
        ledger, graph = load_sidecar(store_path)
        return cls(ledger, graph, store_path=store_path)

    @property
    def persistent(self) -> bool:
        return self.store_path is not None

    def is_fresh(self, bundle: CheckableBundle) -> bool:
        """Answer a freshness query under the context lock."""
        with self.lock:
            return is_fresh(bundle, ledger=self.ledger, graph=self.graph)

    def flush(self) -> None:
        """Write the sidecar now, raising ``PersistenceError`` on failure."""
        if self.store_path is None:
            return
        with self.lock:
            save_sidecar(self.store_path, self.ledger, self.graph)

    def close(self) -> None:
        """Flush once, logging instead of raising on persistence failures."""
        if self.closed:
            return
        self.closed = True
        try:
            self.flush()
        except PersistenceError as exc:
            logger.warning("Could not save cache state: %s", exc)

    def __enter__(self) -> CacheContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@contextmanager
def open_cache_context(cache_dir: Path | None = None, *, persistent: bool = True) -> Iterator[CacheContext]:
    """Yield an open context that is flushed on every exit path."""
    context = CacheContext.open(cache_dir, persistent=persistent)
    try:
        yield context
    finally:
        context.close()
