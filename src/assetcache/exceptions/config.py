"""Configuration-related exceptions."""

from __future__ import annotations

from assetcache.exceptions.base import AssetCacheError


class ConfigError(AssetCacheError, ValueError):
    """Raised when cache configuration is invalid."""
