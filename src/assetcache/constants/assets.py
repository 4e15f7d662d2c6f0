"""Asset type constants shared by the compiler and response helpers."""

from __future__ import annotations

STYLESHEET_EXTENSION: str = "css"
SCRIPT_EXTENSION: str = "js"
COMPILABLE_OUTPUT_EXTENSIONS: frozenset[str] = frozenset({STYLESHEET_EXTENSION, SCRIPT_EXTENSION})

MINIFIED_INFIX: str = "min"
PREPROCESSED_STYLESHEET_EXTENSIONS: frozenset[str] = frozenset({"less", "scss"})

IMAGE_EXTENSIONS: frozenset[str] = frozenset({"gif", "jpg", "png", "svg", "tif"})
FONT_EXTENSIONS: frozenset[str] = frozenset({"otf", "eot", "svg", "ttf", "woff", "woff2"})

MIME_TYPES: dict[str, str] = {
    SCRIPT_EXTENSION: "text/javascript",
    STYLESHEET_EXTENSION: "text/css",
}
