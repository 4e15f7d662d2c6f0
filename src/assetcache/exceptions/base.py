"""Root exception type."""

from __future__ import annotations


class AssetCacheError(Exception):
    """Base class for all assetcache errors."""
