"""In-process registry of bundles and named-input resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from assetcache.bundles.identity import artifact_path, bundle_hash
from assetcache.bundles.models import BundleDescriptor
from assetcache.config.model import AssetCacheConfig
from assetcache.constants.config import NAMED_ASSET_PREFIX
from assetcache.exceptions import UnknownBundleError
from assetcache.paths import resolve_config_value

logger = logging.getLogger(__name__)


def resolve_inputs(inputs: Sequence[str], config: AssetCacheConfig) -> tuple[tuple[Path, ...], tuple[str, ...]]:
    """Expand named assets and resolve paths for a bundle's raw inputs.

    ``@name`` (or bare ``name``) matching a configured asset contributes that
    asset's inputs and filters. Anything else is resolved as a path, so a
    missing file raises ``ResourceNotFoundError``.
    """
    aliases = config.alias_map
    root = config.paths.root_dir
    paths: list[Path] = []
    filters: list[str] = []

    for raw in inputs:
        asset = config.assets.get(raw.removeprefix(NAMED_ASSET_PREFIX))
        if asset is None:
            paths.append(resolve_config_value(raw, aliases, root))  # type: ignore[arg-type]
            continue
        paths.extend(resolve_config_value(list(asset.inputs), aliases, root))  # type: ignore[arg-type]
        filters.extend(name for name in asset.filters if name not in filters)

    return tuple(paths), tuple(filters)


class BundleRegistry:
    """Bundles registered during this process, keyed by bundle id.

    Descriptors are never persisted; only the ledger and graph that feed
    freshness decisions survive between runs.
    """

    def __init__(self, config: AssetCacheConfig) -> None:
        self.config = config
        self._bundles: dict[str, BundleDescriptor] = {}

    def add(self, output: str, inputs: Sequence[str], *, resolve: bool = True) -> str:
        """Register a bundle and return its id; re-registering is idempotent."""
        bundle_id = bundle_hash(output, inputs)
        if bundle_id in self._bundles:
            return bundle_id

        if resolve:
            resolved, filters = resolve_inputs(inputs, self.config)
        else:
            resolved, filters = tuple(Path(item).resolve() for item in inputs), ()

        self._bundles[bundle_id] = BundleDescriptor(
            bundle_id=bundle_id,
            output=output,
            inputs=resolved,
            cached_path=artifact_path(self.config.paths.cache_dir, bundle_id, output),
            filters=filters,
        )
        logger.debug("Registered bundle %s for %s with %d input(s)", bundle_id, output, len(resolved))
        return bundle_id

    def get(self, bundle_id: str) -> BundleDescriptor:
        try:
            return self._bundles[bundle_id]
        except KeyError:
            raise UnknownBundleError(bundle_id) from None

    def __contains__(self, bundle_id: object) -> bool:
        return bundle_id in self._bundles

    def __iter__(self) -> Iterator[BundleDescriptor]:
        return iter(self._bundles.values())

    def __len__(self) -> int:
        return len(self._bundles)
