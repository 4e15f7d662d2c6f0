"""Command-line interface for assetcache."""
