"""Filter kinds and option names."""

from __future__ import annotations

FILTER_KIND_KEY: str = "kind"
FILTER_APPLY_TO_KEY: str = "apply_to"

KIND_MINIFY_CSS: str = "minify_css"
KIND_MINIFY_JS: str = "minify_js"
KIND_BANNER: str = "banner"
KIND_REPLACE: str = "replace"

BANNER_POSITIONS: frozenset[str] = frozenset({"top", "bottom"})
