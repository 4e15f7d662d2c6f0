"""Response metadata for serving cached artifacts over HTTP."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import timezone
from email.utils import formatdate, parsedate_to_datetime
from pathlib import Path, PurePosixPath

from assetcache.constants.assets import MIME_TYPES
from assetcache.exceptions import ConfigError
from assetcache.io import file_mtime


@dataclass(frozen=True)
class RenderOptions:
    """Everything needed to answer a request for one artifact."""

    bundle_id: str
    cache_path: Path
    filename: str
    ext: str
    mime_type: str
    cache_age: int
    modified: int
    etag: str


def resolve_render_options(
    *,
    bundle_id: str,
    web_path: str,
    cache_path: Path,
    cache_ages: dict[str, int] | None = None,
    cache_age: int | None = None,
    mime_type: str | None = None,
) -> RenderOptions:
    """Derive response options for the artifact at *cache_path*.

    ``cache_age`` and ``mime_type`` fall back to per-extension defaults;
    ``ConfigError`` is raised when neither is available.
    """
    if not bundle_id:
        raise ConfigError("The option 'bundle_id' is required to render an artifact")
    if not web_path:
        raise ConfigError("The option 'web_path' is required to render an artifact")

    name = PurePosixPath(web_path.split("?", 1)[0])
    ext = name.suffix[1:].lower()
    modified = file_mtime(cache_path)

    if cache_age is None:
        cache_age = (cache_ages or {}).get(ext)
        if cache_age is None:
            raise ConfigError(f"No cache age configured for '.{ext}' files")
    if mime_type is None:
        mime_type = MIME_TYPES.get(ext)
        if mime_type is None:
            raise ConfigError(f"No MIME type known for '.{ext}' files")

    return RenderOptions(
        bundle_id=bundle_id,
        cache_path=cache_path,
        filename=name.stem,
        ext=ext,
        mime_type=mime_type,
        cache_age=cache_age,
        modified=modified,
        etag=hashlib.md5(f"{bundle_id}_{modified}".encode("utf-8")).hexdigest(),
    )


def response_headers(options: RenderOptions) -> dict[str, str]:
    """Caching and content headers for a full (200) response."""
    return {
        "Last-Modified": formatdate(options.modified, usegmt=True),
        "ETag": f'"{options.etag}"',
        "Cache-Control": f"public, max-age={options.cache_age}",
        "Content-Type": options.mime_type,
        "Content-Disposition": f'inline; filename="{options.filename}.{options.ext}"',
    }


def is_not_modified(
    options: RenderOptions,
    *,
    if_modified_since: str | None = None,
    if_none_match: str | None = None,
) -> bool:
    """Return True when the client's validators match the current artifact."""
    if if_none_match and if_none_match.strip().strip('"') == options.etag:
        return True
    if if_modified_since:
        try:
            since = parsedate_to_datetime(if_modified_since)
        except (TypeError, ValueError):
            return False
        if since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)
        return options.modified <= int(since.timestamp())
    return False
