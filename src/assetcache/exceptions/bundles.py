"""Bundle registry exceptions."""

from __future__ import annotations

from assetcache.exceptions.base import AssetCacheError


class UnknownBundleError(AssetCacheError, KeyError):
    """Raised when a bundle id was never registered in this process."""

    def __str__(self) -> str:
        return f"Unknown bundle id: {self.args[0]}" if self.args else "Unknown bundle id"
