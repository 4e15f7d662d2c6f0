"""Built-in filter kinds."""

from __future__ import annotations

import re
from pathlib import Path
from typing import ClassVar

import rcssmin
import rjsmin

from assetcache.constants.filters import (
    BANNER_POSITIONS,
    KIND_BANNER,
    KIND_MINIFY_CSS,
    KIND_MINIFY_JS,
    KIND_REPLACE,
)
from assetcache.filters.base import AssetFilter, OptionSetter, bool_option, pattern_option, str_option


class CssMinifyFilter(AssetFilter):
    """Stylesheet minification through ``rcssmin``.

    Quoted strings and ``url()`` values are tokenized, never rewritten.
    ``/*! ... */`` license comments survive only with ``keep_bang_comments``.
    """

    kind: ClassVar[str] = KIND_MINIFY_CSS
    option_setters: ClassVar[dict[str, OptionSetter]] = {
        "keep_bang_comments": bool_option("keep_bang_comments"),
    }

    def __init__(self, name: str, apply_to: str | None = None) -> None:
        super().__init__(name, apply_to)
        self.keep_bang_comments = False

    def apply(self, content: str, *, source: Path | None = None) -> str:
        return rcssmin.cssmin(content, keep_bang_comments=self.keep_bang_comments)


class JsMinifyFilter(AssetFilter):
    """Script minification through ``rjsmin``; string and template literals are left intact."""

    kind: ClassVar[str] = KIND_MINIFY_JS
    option_setters: ClassVar[dict[str, OptionSetter]] = {
        "keep_bang_comments": bool_option("keep_bang_comments"),
    }

    def __init__(self, name: str, apply_to: str | None = None) -> None:
        super().__init__(name, apply_to)
        self.keep_bang_comments = False

    def apply(self, content: str, *, source: Path | None = None) -> str:
        return rjsmin.jsmin(content, keep_bang_comments=self.keep_bang_comments)


class BannerFilter(AssetFilter):
    """Adds a fixed text block above or below the content."""

    kind: ClassVar[str] = KIND_BANNER
    option_setters: ClassVar[dict[str, OptionSetter]] = {
        "text": str_option("text"),
        "position": str_option("position", choices=BANNER_POSITIONS),
    }
    required_options: ClassVar[frozenset[str]] = frozenset({"text"})

    def __init__(self, name: str, apply_to: str | None = None) -> None:
        super().__init__(name, apply_to)
        self.text = ""
        self.position = "top"

    def apply(self, content: str, *, source: Path | None = None) -> str:
        if self.position == "bottom":
            return f"{content}\n{self.text}"
        return f"{self.text}\n{content}"


class ReplaceFilter(AssetFilter):
    """Regular-expression substitution over the content."""

    kind: ClassVar[str] = KIND_REPLACE
    option_setters: ClassVar[dict[str, OptionSetter]] = {
        "pattern": pattern_option("pattern"),
        "replacement": str_option("replacement"),
    }
    required_options: ClassVar[frozenset[str]] = frozenset({"pattern"})

    def __init__(self, name: str, apply_to: str | None = None) -> None:
        super().__init__(name, apply_to)
        self.pattern: re.Pattern[str] | None = None
        self.replacement = ""

    def apply(self, content: str, *, source: Path | None = None) -> str:
        if self.pattern is None:
            return content
        return self.pattern.sub(self.replacement, content)
