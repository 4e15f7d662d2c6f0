"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "assetcache"
CLI_DESCRIPTION: str = f"{BRAND_NAME}: incremental build cache for stylesheet and script bundles"
FRESH_LABEL: str = "fresh"
STALE_LABEL: str = "stale"
