"""Artifact compilation exceptions."""

from __future__ import annotations

from assetcache.exceptions.base import AssetCacheError


class CompileError(AssetCacheError):
    """Raised when a bundle artifact cannot be produced."""
