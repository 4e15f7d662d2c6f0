"""CLI subcommand handlers."""

from __future__ import annotations

import argparse
import sys

from assetcache.config import validate_config_file
from assetcache.constants.branding import FRESH_LABEL, STALE_LABEL
from assetcache.constants.validation import CFG010
from assetcache.exceptions import ConfigError
from assetcache.exceptions.validation import ValidationError, format_errors
from assetcache.freshness import DependencyGraph
from assetcache.service import AssetCache


def handle_check(args: argparse.Namespace) -> int:
    """Print one fresh/stale line per selected bundle."""
    stale = 0
    with AssetCache.from_root(args.root, args.config) as cache:
        for output, bundle_id in _register_bundles(cache, args.bundle):
            fresh = cache.is_fresh(bundle_id)
            if not fresh:
                stale += 1
            label = FRESH_LABEL if fresh else STALE_LABEL
            print(f"{label:<6} {output}  {cache.cached_artifact_path(bundle_id)}")

    if stale and args.fail_on_stale:
        return 1
    return 0


def handle_build(args: argparse.Namespace) -> int:
    """Compile every selected bundle that is stale, or all of them with ``--force``."""
    built = 0
    with AssetCache.from_root(args.root, args.config) as cache:
        selected = _register_bundles(cache, args.bundle)
        for output, bundle_id in selected:
            if cache.ensure_fresh(bundle_id, force=args.force):
                built += 1
                print(f"built  {output}  {cache.cached_artifact_path(bundle_id)}")

    print(f"{built} of {len(selected)} bundle(s) rebuilt.")
    return 0


def handle_graph(args: argparse.Namespace) -> int:
    """Print the transitive imports of a stylesheet as an indented tree."""
    path = args.file.resolve()
    if not path.is_file():
        print(f"File not found: {path}", file=sys.stderr)
        return 2

    graph = DependencyGraph()
    for depth, node in graph.walk(path):
        print(f"{'  ' * depth}{node}")
    return 0


def handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    root = args.root.resolve()
    if not root.is_dir():
        errors = [
            ValidationError(code=CFG010, path=str(root), field="", message=f"root directory does not exist: {root}")
        ]
    else:
        errors = validate_config_file(root, args.config, config_explicit=args.config is not None)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0


def _register_bundles(cache: AssetCache, selected: list[str] | None) -> list[tuple[str, str]]:
    """Register configured bundles, optionally restricted to *selected* outputs."""
    bundles = cache.config.bundles
    if selected:
        unknown = sorted(set(selected) - set(bundles))
        if unknown:
            raise ConfigError(f"No bundle configured for output(s): {', '.join(unknown)}")
        outputs = [output for output in bundles if output in selected]
    else:
        outputs = list(bundles)
    return [(output, cache.add_bundle(output, bundles[output])) for output in outputs]
