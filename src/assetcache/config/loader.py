"""Config loading and normalization for assetcache."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from assetcache.config.model import AssetCacheConfig, default_paths
from assetcache.constants.config import (
    CONFIG_FILENAME,
    DEFAULT_MODE,
    DEFAULT_URL_PREFIX,
    DEFAULT_WEB_DIRNAME,
    VALID_MODES,
)
from assetcache.constants.filters import FILTER_APPLY_TO_KEY, FILTER_KIND_KEY
from assetcache.exceptions import ConfigError
from assetcache.types.config import AssetConfig, FilterConfig, PathsConfig


def load_config(root: Path, config_path: Path | None = None) -> AssetCacheConfig:
    """Load and validate config from ``assetcache.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return AssetCacheConfig(paths=default_paths(root))

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    mode = raw.get("mode", DEFAULT_MODE)
    if not isinstance(mode, str) or mode not in VALID_MODES:
        raise ConfigError(f"mode must be one of {sorted(VALID_MODES)}, got {mode!r}")

    url_prefix = raw.get("url_prefix", DEFAULT_URL_PREFIX)
    if not isinstance(url_prefix, str) or not url_prefix.startswith("/"):
        raise ConfigError("url_prefix must be a string starting with '/'")

    return AssetCacheConfig(
        paths=_build_paths(_ensure_mapping(raw.get("paths"), "paths"), root),
        mode=mode,  # type: ignore[arg-type]
        url_prefix=url_prefix.rstrip("/") or "/",
        aliases=_ensure_string_mapping(raw.get("aliases"), "aliases"),
        assets=_build_assets(_ensure_mapping(raw.get("assets"), "assets")),
        bundles=_build_bundles(_ensure_mapping(raw.get("bundles"), "bundles")),
        filters=_build_filters(_ensure_mapping(raw.get("filters"), "filters")),
        cache_age=_build_cache_age(_ensure_mapping(raw.get("cache_age"), "cache_age")),
    )


def _ensure_mapping(value: Any, key_name: str) -> dict[str, Any]:
    """Coerce a missing value to an empty mapping, raising on other types."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key_name} must be a mapping")
    return value


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a string or list of strings to a list, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _ensure_string_mapping(value: Any, key_name: str) -> dict[str, str]:
    mapping = _ensure_mapping(value, key_name)
    for key, item in mapping.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise ConfigError(f"{key_name} must map strings to strings")
    return dict(mapping)


def _build_paths(raw: dict[str, Any], root: Path) -> PathsConfig:
    defaults = default_paths(root)
    root_dir = _anchored(raw.get("root_dir"), "paths.root_dir", root) or defaults.root_dir
    cache_dir = _anchored(raw.get("cache_dir"), "paths.cache_dir", root_dir) or defaults.cache_dir
    web_dir = _anchored(raw.get("web_dir"), "paths.web_dir", root_dir) or (root_dir / DEFAULT_WEB_DIRNAME)
    return PathsConfig(root_dir=root_dir, cache_dir=cache_dir, web_dir=web_dir)


def _anchored(value: Any, key_name: str, base: Path) -> Path | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key_name} must be a non-empty string")
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base / path
    return path.resolve()


def _build_assets(raw: dict[str, Any]) -> dict[str, AssetConfig]:
    assets: dict[str, AssetConfig] = {}
    for name, spec in raw.items():
        if isinstance(spec, (str, list)):
            spec = {"inputs": spec}
        if not isinstance(spec, dict):
            raise ConfigError(f"assets.{name} must be a mapping")
        inputs = _ensure_string_list(spec.get("inputs"), f"assets.{name}.inputs")
        if not inputs:
            raise ConfigError(f"assets.{name}.inputs must not be empty")
        filters = _ensure_string_list(spec.get("filters"), f"assets.{name}.filters")
        assets[str(name)] = AssetConfig(inputs=tuple(inputs), filters=tuple(filters))
    return assets


def _build_bundles(raw: dict[str, Any]) -> dict[str, tuple[str, ...]]:
    bundles: dict[str, tuple[str, ...]] = {}
    for output, inputs in raw.items():
        resolved = _ensure_string_list(inputs, f"bundles.{output}")
        if not resolved:
            raise ConfigError(f"bundles.{output} must list at least one input")
        bundles[str(output)] = tuple(resolved)
    return bundles


def _build_filters(raw: dict[str, Any]) -> dict[str, FilterConfig]:
    filters: dict[str, FilterConfig] = {}
    for name, spec in raw.items():
        if not isinstance(spec, dict):
            raise ConfigError(f"filters.{name} must be a mapping")
        options = dict(spec)
        kind = options.pop(FILTER_KIND_KEY, None)
        if not isinstance(kind, str) or not kind.strip():
            raise ConfigError(f"filters.{name}.{FILTER_KIND_KEY} must be a non-empty string")
        apply_to = options.pop(FILTER_APPLY_TO_KEY, None)
        if apply_to is not None:
            if not isinstance(apply_to, str):
                raise ConfigError(f"filters.{name}.{FILTER_APPLY_TO_KEY} must be a string")
            try:
                re.compile(apply_to)
            except re.error as exc:
                raise ConfigError(f"filters.{name}.{FILTER_APPLY_TO_KEY} is not a valid pattern: {exc}") from exc
        filters[str(name)] = FilterConfig(kind=kind, apply_to=apply_to, options=options)
    return filters


def _build_cache_age(raw: dict[str, Any]) -> dict[str, int]:
    ages: dict[str, int] = {}
    for ext, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"cache_age.{ext} must be a non-negative integer")
        ages[str(ext).lstrip(".")] = value
    return ages
