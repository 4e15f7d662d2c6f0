"""Caller-facing facade over bundle registration, freshness and compilation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from assetcache.bundles import BundleDescriptor, BundleRegistry, minified_name, production_path
from assetcache.compiler import BundleCompiler, Compiler
from assetcache.config import AssetCacheConfig, load_config
from assetcache.constants.cache import CACHE_SUBDIR
from assetcache.filters import FilterSet
from assetcache.freshness import CacheContext
from assetcache.io import file_mtime
from assetcache.render import RenderOptions, resolve_render_options

logger = logging.getLogger(__name__)


class AssetCache:
    """Registers bundles and hands out paths or URLs to up-to-date artifacts.

    Use as a context manager (or call ``close``) so the ledger and import
    graph are written back for the next process.
    """

    def __init__(
        self,
        config: AssetCacheConfig,
        *,
        compiler: Compiler | None = None,
        context: CacheContext | None = None,
    ) -> None:
        self.config = config
        self.registry = BundleRegistry(config)
        self.filters = FilterSet(config.filters)
        self.compiler: Compiler = compiler if compiler is not None else BundleCompiler(self.filters)
        if context is None:
            context = CacheContext.open(config.paths.cache_dir, persistent=not config.is_production)
        self.context = context

    @classmethod
    def from_root(cls, root: Path, config_path: Path | None = None, **kwargs: object) -> AssetCache:
        """Load ``assetcache.yaml`` under *root* and build a cache from it."""
        return cls(load_config(root, config_path), **kwargs)  # type: ignore[arg-type]

    def add_bundle(self, output: str, inputs: Sequence[str], *, resolve: bool = True) -> str:
        """Register ``(output, inputs)`` and return its bundle id."""
        return self.registry.add(output, inputs, resolve=resolve)

    def bundle(self, bundle_id: str) -> BundleDescriptor:
        return self.registry.get(bundle_id)

    def is_fresh(self, bundle_id: str) -> bool:
        """Return True when the bundle's cached artifact is still valid."""
        return self.context.is_fresh(self.registry.get(bundle_id))

    def cached_artifact_path(self, bundle_id: str) -> Path:
        return self.registry.get(bundle_id).cached_path

    def ensure_fresh(self, bundle_id: str, *, force: bool = False) -> bool:
        """Compile the bundle when stale (or when forced); return True if compiled."""
        bundle = self.registry.get(bundle_id)
        with self.context.lock:
            if not force and self.context.is_fresh(bundle):
                return False
            logger.info("Rebuilding %s", bundle.output)
            self.compiler(bundle)
            return True

    def get_url(self, output: str, inputs: Sequence[str]) -> str:
        """Return the URL to embed for a bundle in the current mode.

        Production mode points at the prebuilt minified file and never checks
        freshness; dev mode rebuilds stale bundles first.
        """
        if self.config.is_production:
            return self.production_url(output)

        bundle_id = self.add_bundle(output, inputs)
        self.ensure_fresh(bundle_id)
        return self.dev_url(bundle_id)

    def dev_url(self, bundle_id: str) -> str:
        """URL of the cached artifact under ``url_prefix``, versioned by its mtime."""
        cached_path = self.cached_artifact_path(bundle_id)
        relative = cached_path.relative_to(self.config.paths.cache_dir / CACHE_SUBDIR).as_posix()
        prefix = self.config.url_prefix.rstrip("/")
        return f"{prefix}/{relative}?v={file_mtime(cached_path)}"

    def production_url(self, output: str) -> str:
        """URL of the prebuilt minified artifact; the version is empty if it is missing."""
        path = production_path(self.config.paths.web_dir, output)
        version = str(int(path.stat().st_mtime)) if path.is_file() else ""
        return f"/{minified_name(output)}?v={version}"

    def render_options(self, bundle_id: str, web_path: str) -> RenderOptions:
        """Response options for serving the bundle's cached artifact."""
        return resolve_render_options(
            bundle_id=bundle_id,
            web_path=web_path,
            cache_path=self.cached_artifact_path(bundle_id),
            cache_ages=self.config.cache_age,
        )

    def close(self) -> None:
        """Persist the ledger and graph (best effort)."""
        self.context.close()

    def __enter__(self) -> AssetCache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
