"""Alias substitution and path resolution for configured inputs."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from assetcache.constants.config import PATH_REFERENCE_MARKERS
from assetcache.exceptions import ResourceNotFoundError


def is_path_reference(value: str) -> bool:
    """Return True when *value* contains alias or parent-directory markers."""
    return any(marker in value for marker in PATH_REFERENCE_MARKERS)


def substitute_aliases(value: str, aliases: Mapping[str, str]) -> str:
    """Replace every alias token in *value*, longest token first."""
    for token in sorted(aliases, key=len, reverse=True):
        if token in value:
            value = value.replace(token, aliases[token])
    return value


def resolve_config_value(
    value: str | list[str] | tuple[str, ...],
    aliases: Mapping[str, str],
    root: Path,
) -> Path | list[Path]:
    """Resolve a configured path (or list of paths) to existing canonical paths.

    Alias tokens are substituted only when the value looks like a reference.
    Relative results are anchored at *root*.
    """
    if isinstance(value, (list, tuple)):
        return [_resolve_one(item, aliases, root) for item in value]
    return _resolve_one(value, aliases, root)


def _resolve_one(value: str, aliases: Mapping[str, str], root: Path) -> Path:
    raw = substitute_aliases(value, aliases) if is_path_reference(value) else value
    candidate = Path(raw).expanduser()
    if not candidate.is_absolute():
        candidate = root / candidate
    if not candidate.exists():
        raise ResourceNotFoundError(raw, f"The resource '{value}' could not be located at {candidate}")
    return Path(os.path.realpath(candidate))
