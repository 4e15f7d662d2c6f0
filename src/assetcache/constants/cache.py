"""Constants used by the freshness ledger and sidecar persistence."""

from __future__ import annotations

CACHE_SUBDIR: str = "assetcache"
CACHE_FILENAME: str = "cache.json"
CACHE_TEMP_PREFIX: str = ".cache-"
CACHE_TEMP_SUFFIX: str = ".tmp"
ARTIFACT_TEMP_PREFIX: str = ".artifact-"
ARTIFACT_TEMP_SUFFIX: str = ".tmp"

SIDECAR_LEDGER_KEY: str = "assetList"
SIDECAR_CHILDREN_KEY: str = "assetChildren"
