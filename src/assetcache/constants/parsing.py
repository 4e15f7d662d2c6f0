"""Patterns and extension sets for stylesheet import scanning."""

from __future__ import annotations

import re

LINE_COMMENT_PREFIX: str = "//"

# Group 1 is the optional modifier, group 2 the quoted or bare path.
IMPORT_PATTERN: re.Pattern[str] = re.compile(r"@import\s*(url|\(reference\)|\(inline\))?\s*\(?([^;]+?)\)?;")
REMOTE_IMPORT_MODIFIER: str = "url"

IMPORT_CAPABLE_EXTENSIONS: frozenset[str] = frozenset({"less", "sass", "scss"})
PARTIAL_EXTENSION: str = "scss"
PARTIAL_PREFIX: str = "_"
