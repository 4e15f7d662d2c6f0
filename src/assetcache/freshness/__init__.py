"""Freshness determination over stylesheet import graphs."""

from .checker import is_fresh, subtree_is_stale
from .context import CacheContext, open_cache_context
from .graph import DependencyGraph
from .imports import parse_imports
from .ledger import ModTimeLedger
from .store import load_sidecar, save_sidecar, sidecar_path

__all__ = [
    "CacheContext",
    "DependencyGraph",
    "ModTimeLedger",
    "is_fresh",
    "load_sidecar",
    "open_cache_context",
    "parse_imports",
    "save_sidecar",
    "sidecar_path",
    "subtree_is_stale",
]
