"""Filter construction exceptions."""

from __future__ import annotations

from assetcache.exceptions.base import AssetCacheError


class FilterError(AssetCacheError, ValueError):
    """Raised when a filter definition cannot be built."""
