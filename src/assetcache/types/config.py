"""Typed configuration structures for assetcache settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from assetcache.types.common import JsonValue


@dataclass(frozen=True)
class PathsConfig:
    """Resolved filesystem locations."""

    root_dir: Path
    cache_dir: Path
    web_dir: Path


@dataclass(frozen=True)
class AssetConfig:
    """A named asset: raw input references plus the filters it asks for."""

    inputs: tuple[str, ...]
    filters: tuple[str, ...] = ()


@dataclass(frozen=True)
class FilterConfig:
    """A named filter definition as written in ``assetcache.yaml``."""

    kind: str
    apply_to: str | None = None
    options: dict[str, JsonValue] = field(default_factory=dict)
