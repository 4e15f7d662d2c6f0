"""Configuration defaults and filenames."""

from __future__ import annotations

from typing import Literal, TypeAlias

Mode: TypeAlias = Literal["dev", "prod"]

CONFIG_FILENAME: str = "assetcache.yaml"

MODE_DEV: Mode = "dev"
MODE_PROD: Mode = "prod"
DEFAULT_MODE: Mode = MODE_DEV
VALID_MODES: frozenset[str] = frozenset({MODE_DEV, MODE_PROD})

DEFAULT_CACHE_DIR: str = "var/cache"
DEFAULT_WEB_DIRNAME: str = "web"
DEFAULT_URL_PREFIX: str = "/_assets"

CACHE_DIR_ALIAS: str = "%cache_dir%"
ROOT_DIR_ALIAS: str = "%root_dir%"
WEB_DIR_ALIAS: str = "%web_dir%"

# Values containing any of these markers are treated as path references.
PATH_REFERENCE_MARKERS: tuple[str, ...] = ("@", "%", "..")
NAMED_ASSET_PREFIX: str = "@"

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "mode",
        "paths",
        "url_prefix",
        "aliases",
        "assets",
        "bundles",
        "filters",
        "cache_age",
    }
)
ALLOWED_PATH_KEYS: frozenset[str] = frozenset({"cache_dir", "root_dir", "web_dir"})
ALLOWED_ASSET_KEYS: frozenset[str] = frozenset({"inputs", "filters"})
