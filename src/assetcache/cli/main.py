"""CLI entrypoint for assetcache."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from assetcache import __version__
from assetcache.cli.handlers import handle_build, handle_check, handle_graph, handle_validate_config
from assetcache.constants.branding import CLI_DESCRIPTION
from assetcache.exceptions import AssetCacheError, ConfigError


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--root", type=Path, default=Path("."), help="Project root path (default: .)")
    parser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug diagnostics")


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(prog="assetcache", description=CLI_DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Report whether configured bundles are fresh")
    _add_common_arguments(check)
    check.add_argument(
        "-b",
        "--bundle",
        action="append",
        default=None,
        help="Only check this output name (repeat for multiple bundles)",
    )
    check.add_argument("--fail-on-stale", action="store_true", help="Exit with status 1 if any bundle is stale")

    build = subparsers.add_parser("build", help="Compile stale bundles")
    _add_common_arguments(build)
    build.add_argument(
        "-b",
        "--bundle",
        action="append",
        default=None,
        help="Only build this output name (repeat for multiple bundles)",
    )
    build.add_argument("-f", "--force", action="store_true", help="Rebuild bundles even when fresh")

    graph = subparsers.add_parser("graph", help="Print the import tree of a stylesheet")
    graph.add_argument("file", type=Path, help="Stylesheet to inspect")
    graph.add_argument("-v", "--verbose", action="store_true", help="Show debug diagnostics")

    validate = subparsers.add_parser("validate-config", help="Validate configuration without building")
    _add_common_arguments(validate)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    handlers = {
        "check": handle_check,
        "build": handle_build,
        "graph": handle_graph,
        "validate-config": handle_validate_config,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.error(f"Unsupported command: {args.command}")

    try:
        return handler(args)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except AssetCacheError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
