"""Stylesheet ``@import`` scanning and candidate resolution."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from assetcache.constants.parsing import (
    IMPORT_PATTERN,
    LINE_COMMENT_PREFIX,
    PARTIAL_EXTENSION,
    PARTIAL_PREFIX,
    REMOTE_IMPORT_MODIFIER,
)
from assetcache.io import read_source_text

logger = logging.getLogger(__name__)


def parse_imports(path: Path) -> tuple[Path, ...]:
    """Return the files *path* directly imports, in first-seen order.

    Targets are canonicalized with ``realpath`` so the same file reached
    through different relative spellings appears once. Remote ``url(...)``
    imports and targets that do not exist on disk are skipped.

    Raises ``ResourceNotFoundError`` or ``ReadFailureError`` when *path*
    itself cannot be read.
    """
    text = read_source_text(path)
    import_dir = path.parent
    parent_ext = path.suffix[1:]

    children: list[Path] = []
    seen: set[Path] = set()
    for line in text.splitlines():
        if line.startswith(LINE_COMMENT_PREFIX):
            continue
        match = IMPORT_PATTERN.search(line)
        if match is None:
            continue
        modifier, raw_target = match.group(1), match.group(2)
        if modifier == REMOTE_IMPORT_MODIFIER:
            continue

        target = raw_target.replace('"', "").replace("'", "").strip()
        resolved = resolve_import_target(import_dir, target, parent_ext)
        if resolved is None:
            logger.debug("Unresolved import %r in %s", target, path)
            continue
        if resolved not in seen:
            seen.add(resolved)
            children.append(resolved)

    return tuple(children)


def import_candidates(import_dir: Path, target: str, parent_ext: str) -> list[Path]:
    """List the on-disk spellings an import target may refer to, in priority order."""
    candidates = [
        import_dir / target,
        import_dir / f"{target}.{parent_ext}",
    ]
    if parent_ext == PARTIAL_EXTENSION:
        head, _, file_name = target.rpartition("/")
        partial = f"{PARTIAL_PREFIX}{file_name}.{parent_ext}"
        candidates.append(import_dir / (f"{head}/{partial}" if head else partial))
    return candidates


def resolve_import_target(import_dir: Path, target: str, parent_ext: str) -> Path | None:
    """Return the canonical path of the first existing candidate, or None."""
    if not target:
        return None
    for candidate in import_candidates(import_dir, target, parent_ext):
        if candidate.is_file():
            return Path(os.path.realpath(candidate))
    return None
