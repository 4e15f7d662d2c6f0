"""Configuration loading, validation, and normalization for assetcache.

This package facade re-exports the public names so callers can use
``from assetcache.config import ...``.
"""

from __future__ import annotations

from assetcache.config.loader import load_config
from assetcache.config.model import AssetCacheConfig, default_paths
from assetcache.config.validator import validate_config_file

__all__ = [
    "AssetCacheConfig",
    "default_paths",
    "load_config",
    "validate_config_file",
]
