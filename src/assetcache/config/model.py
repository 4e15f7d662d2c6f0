"""Config data model for assetcache."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from assetcache.constants.config import (
    CACHE_DIR_ALIAS,
    DEFAULT_CACHE_DIR,
    DEFAULT_MODE,
    DEFAULT_URL_PREFIX,
    DEFAULT_WEB_DIRNAME,
    MODE_PROD,
    ROOT_DIR_ALIAS,
    WEB_DIR_ALIAS,
    Mode,
)
from assetcache.types.config import AssetConfig, FilterConfig, PathsConfig


def default_paths(root: Path) -> PathsConfig:
    """Return the conventional layout for a project rooted at *root*."""
    root = root.resolve()
    return PathsConfig(
        root_dir=root,
        cache_dir=root / DEFAULT_CACHE_DIR,
        web_dir=root / DEFAULT_WEB_DIRNAME,
    )


@dataclass(frozen=True)
class AssetCacheConfig:
    """Resolved asset cache config."""

    paths: PathsConfig
    mode: Mode = DEFAULT_MODE
    url_prefix: str = DEFAULT_URL_PREFIX
    aliases: dict[str, str] = field(default_factory=dict)
    assets: dict[str, AssetConfig] = field(default_factory=dict)
    bundles: dict[str, tuple[str, ...]] = field(default_factory=dict)
    filters: dict[str, FilterConfig] = field(default_factory=dict)
    cache_age: dict[str, int] = field(default_factory=dict)

    @classmethod
    def for_root(cls, root: Path, **overrides: object) -> AssetCacheConfig:
        """Build a config with default paths under *root*."""
        return cls(paths=default_paths(root), **overrides)  # type: ignore[arg-type]

    @property
    def is_production(self) -> bool:
        """Production mode serves prebuilt artifacts and skips freshness checks."""
        return self.mode == MODE_PROD

    @property
    def alias_map(self) -> dict[str, str]:
        """User aliases layered over the built-in directory tokens."""
        builtin = {
            CACHE_DIR_ALIAS: os.fspath(self.paths.cache_dir),
            ROOT_DIR_ALIAS: os.fspath(self.paths.root_dir),
            WEB_DIR_ALIAS: os.fspath(self.paths.web_dir),
        }
        return {**builtin, **self.aliases}
