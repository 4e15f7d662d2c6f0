"""Registry of filter kinds and per-config filter construction.

Only kinds listed in ``FILTER_KINDS`` can be referenced from
``assetcache.yaml``; each kind declares the options it accepts.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from assetcache.exceptions import FilterError
from assetcache.filters.base import AssetFilter
from assetcache.filters.builtin import BannerFilter, CssMinifyFilter, JsMinifyFilter, ReplaceFilter
from assetcache.types.config import FilterConfig

logger = logging.getLogger(__name__)

FILTER_KINDS: dict[str, type[AssetFilter]] = {
    CssMinifyFilter.kind: CssMinifyFilter,
    JsMinifyFilter.kind: JsMinifyFilter,
    BannerFilter.kind: BannerFilter,
    ReplaceFilter.kind: ReplaceFilter,
}


def build_filter(name: str, config: FilterConfig) -> AssetFilter:
    """Instantiate the filter described by *config* and apply its options."""
    filter_cls = FILTER_KINDS.get(config.kind)
    if filter_cls is None:
        raise FilterError(
            f'Filter "{name}" has unknown kind "{config.kind}". Valid kinds: {", ".join(sorted(FILTER_KINDS))}'
        )

    missing = sorted(filter_cls.required_options - set(config.options))
    if missing:
        raise FilterError(f'Filter "{name}" ({config.kind}) is missing required option(s): {", ".join(missing)}')

    built = filter_cls(name, config.apply_to)
    for key, value in config.options.items():
        built.set_option(key, value)
    return built


class FilterSet:
    """Builds configured filters on demand and picks the ones a file needs."""

    def __init__(self, configs: Mapping[str, FilterConfig]) -> None:
        self._configs = dict(configs)
        self._built: dict[str, AssetFilter] = {}

    def get(self, name: str) -> AssetFilter:
        """Return the filter configured under *name*, building it once."""
        built = self._built.get(name)
        if built is None:
            config = self._configs.get(name)
            if config is None:
                raise FilterError(f'Filter "{name}" is not configured')
            built = build_filter(name, config)
            self._built[name] = built
            logger.debug("Built filter %s (%s)", name, config.kind)
        return built

    def names_for(self, file_name: str) -> list[str]:
        """Names of filters whose ``apply_to`` pattern matches *file_name*."""
        return [name for name in self._configs if self.get(name).matches(file_name)]

    def for_file(self, file_name: str, extra: Iterable[str] = ()) -> list[AssetFilter]:
        """Explicit *extra* filters followed by matching ones, without duplicates."""
        ordered: list[str] = []
        for name in [*extra, *self.names_for(file_name)]:
            if name not in ordered:
                ordered.append(name)
        return [self.get(name) for name in ordered]


def apply_filters(content: str, filters: Iterable[AssetFilter], *, source: Path | None = None) -> str:
    """Run *content* through each filter in order."""
    for item in filters:
        content = item.apply(content, source=source)
    return content
