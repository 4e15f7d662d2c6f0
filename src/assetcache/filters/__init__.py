"""Content filters applied while compiling bundles."""

from .base import AssetFilter
from .builtin import BannerFilter, CssMinifyFilter, JsMinifyFilter, ReplaceFilter
from .registry import FILTER_KINDS, FilterSet, apply_filters, build_filter

__all__ = [
    "FILTER_KINDS",
    "AssetFilter",
    "BannerFilter",
    "CssMinifyFilter",
    "FilterSet",
    "JsMinifyFilter",
    "ReplaceFilter",
    "apply_filters",
    "build_filter",
]
