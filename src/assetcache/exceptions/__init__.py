"""Shared exception hierarchy for assetcache."""

from __future__ import annotations

from .base import AssetCacheError
from .bundles import UnknownBundleError
from .compile import CompileError
from .config import ConfigError
from .filters import FilterError
from .resources import PersistenceError, ReadFailureError, ResourceNotFoundError

__all__ = [
    "AssetCacheError",
    "CompileError",
    "ConfigError",
    "FilterError",
    "PersistenceError",
    "ReadFailureError",
    "ResourceNotFoundError",
    "UnknownBundleError",
]
