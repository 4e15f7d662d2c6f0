"""Config file validation for assetcache."""

from __future__ import annotations

import difflib
import re
from pathlib import Path
from typing import Any

import yaml

from assetcache.constants.config import (
    ALLOWED_ASSET_KEYS,
    ALLOWED_CONFIG_KEYS,
    ALLOWED_PATH_KEYS,
    CONFIG_FILENAME,
    VALID_MODES,
)
from assetcache.constants.filters import FILTER_APPLY_TO_KEY, FILTER_KIND_KEY
from assetcache.constants.validation import (
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
)
from assetcache.exceptions import FilterError
from assetcache.exceptions.validation import ValidationError
from assetcache.filters import build_filter
from assetcache.types.config import FilterConfig


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[ValidationError]:
    """Validate an assetcache.yaml file and return all validation errors.

    Unlike ``load_config`` this never raises; every problem found is
    returned as a :class:`ValidationError`.
    """
    errors: list[ValidationError] = []
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    path_str = str(path)

    if not path.exists():
        if config_explicit:
            errors.append(
                ValidationError(code=CFG001, path=path_str, field="", message=f"config file not found: {path}")
            )
        return errors

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        errors.append(ValidationError(code=CFG002, path=path_str, field="", message=f"invalid YAML: {exc}"))
        return errors

    if raw is None:
        return errors

    if not isinstance(raw, dict):
        errors.append(
            ValidationError(
                code=CFG003,
                path=path_str,
                field="",
                message=f"config must be a YAML mapping, got {type(raw).__name__}",
            )
        )
        return errors

    _check_unknown_keys(raw, ALLOWED_CONFIG_KEYS, prefix="", path_str=path_str, errors=errors)

    if "mode" in raw and (not isinstance(raw["mode"], str) or raw["mode"] not in VALID_MODES):
        errors.append(
            ValidationError(
                code=CFG006,
                path=path_str,
                field="mode",
                message="invalid value for `mode`",
                hint=f"expected one of: {', '.join(sorted(VALID_MODES))}; got: {raw['mode']!r}",
            )
        )

    if "url_prefix" in raw and (not isinstance(raw["url_prefix"], str) or not raw["url_prefix"].startswith("/")):
        errors.append(_type_error(path_str, "url_prefix", "a string starting with '/'"))

    paths = _mapping_or_error(raw, "paths", path_str, errors)
    _check_unknown_keys(paths, ALLOWED_PATH_KEYS, prefix="paths.", path_str=path_str, errors=errors)
    for key, value in paths.items():
        if not isinstance(value, str) or not value.strip():
            errors.append(_type_error(path_str, f"paths.{key}", "a non-empty string"))

    aliases = _mapping_or_error(raw, "aliases", path_str, errors)
    for key, value in aliases.items():
        if not isinstance(value, str):
            errors.append(_type_error(path_str, f"aliases.{key}", "a string"))

    filters = _mapping_or_error(raw, "filters", path_str, errors)
    for name, spec in filters.items():
        errors.extend(_validate_filter(str(name), spec, path_str))

    assets = _mapping_or_error(raw, "assets", path_str, errors)
    for name, spec in assets.items():
        errors.extend(_validate_asset(str(name), spec, filters, path_str))

    bundles = _mapping_or_error(raw, "bundles", path_str, errors)
    for output, inputs in bundles.items():
        if not _is_string_list(inputs) or not inputs:
            errors.append(_type_error(path_str, f"bundles.{output}", "a non-empty string or list of strings"))

    cache_age = _mapping_or_error(raw, "cache_age", path_str, errors)
    for ext, value in cache_age.items():
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            errors.append(_type_error(path_str, f"cache_age.{ext}", "a non-negative integer"))

    return errors


def _suggest_key(unknown: str, allowed: frozenset[str]) -> str:
    """Return a 'did you mean ...' hint for a close key match, or empty string."""
    matches = difflib.get_close_matches(unknown, sorted(allowed), n=1, cutoff=0.6)
    if matches:
        return f"did you mean `{matches[0]}`?"
    return ""


def _check_unknown_keys(
    raw: dict[str, Any],
    allowed: frozenset[str],
    *,
    prefix: str,
    path_str: str,
    errors: list[ValidationError],
) -> None:
    for key in sorted(raw, key=str):
        if key not in allowed:
            errors.append(
                ValidationError(
                    code=CFG004,
                    path=path_str,
                    field=f"{prefix}{key}",
                    message=f"unknown key `{key}`",
                    hint=_suggest_key(str(key), allowed),
                )
            )


def _mapping_or_error(
    raw: dict[str, Any],
    key: str,
    path_str: str,
    errors: list[ValidationError],
) -> dict[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        errors.append(_type_error(path_str, key, "a mapping"))
        return {}
    return value


def _type_error(path_str: str, field: str, expected: str) -> ValidationError:
    return ValidationError(code=CFG005, path=path_str, field=field, message=f"`{field}` must be {expected}")


def _is_string_list(value: object) -> bool:
    if isinstance(value, str):
        return True
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _validate_filter(name: str, spec: object, path_str: str) -> list[ValidationError]:
    field = f"filters.{name}"
    if not isinstance(spec, dict):
        return [_type_error(path_str, field, "a mapping")]

    options = dict(spec)
    kind = options.pop(FILTER_KIND_KEY, None)
    apply_to = options.pop(FILTER_APPLY_TO_KEY, None)
    if not isinstance(kind, str) or not kind.strip():
        return [_type_error(path_str, f"{field}.{FILTER_KIND_KEY}", "a non-empty string")]
    if apply_to is not None:
        if not isinstance(apply_to, str):
            return [_type_error(path_str, f"{field}.{FILTER_APPLY_TO_KEY}", "a string")]
        try:
            re.compile(apply_to)
        except re.error as exc:
            return [
                ValidationError(
                    code=CFG007,
                    path=path_str,
                    field=f"{field}.{FILTER_APPLY_TO_KEY}",
                    message=f"invalid pattern: {exc}",
                )
            ]

    try:
        build_filter(name, FilterConfig(kind=kind, apply_to=apply_to, options=options))
    except FilterError as exc:
        return [ValidationError(code=CFG007, path=path_str, field=field, message=str(exc))]
    return []


def _validate_asset(name: str, spec: object, filters: dict[str, Any], path_str: str) -> list[ValidationError]:
    field = f"assets.{name}"
    if isinstance(spec, (str, list)):
        spec = {"inputs": spec}
    if not isinstance(spec, dict):
        return [_type_error(path_str, field, "a mapping")]

    errors: list[ValidationError] = []
    _check_unknown_keys(spec, ALLOWED_ASSET_KEYS, prefix=f"{field}.", path_str=path_str, errors=errors)
    inputs = spec.get("inputs")
    if not _is_string_list(inputs) or not inputs:
        errors.append(_type_error(path_str, f"{field}.inputs", "a non-empty string or list of strings"))

    asset_filters = spec.get("filters", [])
    if not _is_string_list(asset_filters):
        errors.append(_type_error(path_str, f"{field}.filters", "a list of strings"))
        return errors
    for filter_name in [asset_filters] if isinstance(asset_filters, str) else asset_filters:
        if filter_name not in filters:
            errors.append(
                ValidationError(
                    code=CFG008,
                    path=path_str,
                    field=f"{field}.filters",
                    message=f"undefined filter `{filter_name}`",
                    hint=_suggest_key(filter_name, frozenset(str(key) for key in filters)),
                )
            )
    return errors
