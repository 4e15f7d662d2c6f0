"""Stable bundle identifiers and derived artifact locations."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from assetcache.constants.assets import MINIFIED_INFIX
from assetcache.constants.cache import CACHE_SUBDIR
from assetcache.exceptions import ConfigError


def bundle_hash(output: str, inputs: Sequence[str]) -> str:
    """Return the identity of ``(output, inputs)``.

    Input order is part of the digest: the same inputs listed in a different
    order produce a different bundle, since concatenation order changes the
    artifact.
    """
    blob = json.dumps([output, list(inputs)], separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(blob).hexdigest()


def artifact_path(cache_dir: Path, bundle_id: str, output: str) -> Path:
    """Dev-mode artifact location: the output name tagged with the bundle id."""
    relative = _relative_output(output)
    tagged = relative.with_name(f"{relative.stem}-{bundle_id}{relative.suffix}")
    return cache_dir / CACHE_SUBDIR / tagged


def minified_name(output: str) -> str:
    """Insert the ``.min`` infix before the extension of *output*."""
    relative = _relative_output(output)
    return relative.with_name(f"{relative.stem}.{MINIFIED_INFIX}{relative.suffix}").as_posix()


def production_path(web_dir: Path, output: str) -> Path:
    """Location of the prebuilt, minified artifact served in production."""
    return web_dir / minified_name(output)


def _relative_output(output: str) -> PurePosixPath:
    relative = PurePosixPath(output.lstrip("/"))
    if ".." in relative.parts or not relative.name:
        raise ConfigError(f"Output name must be a file path without '..' segments: {output!r}")
    return relative
