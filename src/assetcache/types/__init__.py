"""Shared type aliases for assetcache."""

from .cache import SidecarPayload
from .common import JsonObject, JsonScalar, JsonValue
from .config import AssetConfig, FilterConfig, PathsConfig

__all__ = [
    "AssetConfig",
    "FilterConfig",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "PathsConfig",
    "SidecarPayload",
]
