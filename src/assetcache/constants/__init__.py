"""Shared constants for assetcache."""
