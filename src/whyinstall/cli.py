"""Command-line entrypoint.

Usage:
  whyinstall <package> [--cwd PATH] [--json] [--size-map] [--impact]
             [--max-depth N] [--config PATH] [--verbose]

Exit status is 0 on success and 1 when the package is not installed or the
configuration is invalid.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from collections.abc import Sequence

from . import __version__
from .config import ConfigError, load_settings
from .core import analyze_package, analyze_size_map
from .discovery import PackageNotFoundError
from .package_manager import detect_package_manager
from .report import build_report, build_size_report
from .summary import render_analysis, render_size_map


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="whyinstall",
        description="Find why a dependency exists in your JS/TS project",
    )
    parser.add_argument("package_name", help="Package name to analyze")
    parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    parser.add_argument(
        "-c", "--cwd", type=Path, default=Path("."), help="Working directory"
    )
    parser.add_argument(
        "-s", "--size-map", action="store_true", help="Show bundle size impact breakdown"
    )
    parser.add_argument(
        "-i", "--impact", action="store_true", help="Estimate the impact of removing the package"
    )
    parser.add_argument("--max-depth", type=int, default=None, help="Maximum chain length")
    parser.add_argument("--config", type=Path, default=None, help="Settings JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    root = args.cwd.absolute()
    try:
        settings = load_settings(root, args.config).with_max_depth(args.max_depth)

        if not args.json:
            print(f"\nDetected package manager: {detect_package_manager(root)}\n")

        if args.size_map:
            size_map = analyze_size_map(args.package_name, root, settings)
            if args.json:
                print(json.dumps(build_size_report(size_map), indent=2))
            else:
                print(render_size_map(size_map))
        else:
            result = analyze_package(
                args.package_name, root, include_impact=args.impact, settings=settings
            )
            if args.json:
                print(json.dumps(build_report(result), indent=2))
            else:
                print(render_analysis(result))
    except (PackageNotFoundError, ConfigError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
