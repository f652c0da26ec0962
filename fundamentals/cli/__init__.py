"""
Command line entry point for the fundamentals library.

Commands:

* ``tour [section ...]`` – print the guided walkthrough.
* ``config`` – print the resolved runtime configuration.
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Optional

from fundamentals import __version__
from fundamentals.config import ENV_LOG_LEVEL, load_runtime_config, set_config
from fundamentals.errors import FundamentalsError
from fundamentals.observability.logging import configure_logging
from fundamentals.tour import SECTIONS, run_tour


def cmd_tour(args: argparse.Namespace) -> int:
    unknown = [name for name in args.sections if name not in SECTIONS]
    if unknown:
        print(
            f"Error: unknown tour section(s): {', '.join(unknown)}. Choose from: {', '.join(SECTIONS)}.",
            file=sys.stderr,
        )
        return 2
    run_tour(args.sections, out=sys.stdout)
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    print(json.dumps(args.runtime_config.describe(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Optional values, runtime checks and operators with explicit contracts",
        prog="fundamentals",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a fundamentals.toml or .fundamentalsrc configuration file",
    )
    parser.add_argument(
        "--workspace",
        default=None,
        help="Directory searched for configuration (defaults to current working directory)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "warning", "error", "critical"],
        default=None,
        help=f"Logging level (or set {ENV_LOG_LEVEL})",
    )
    parser.add_argument(
        "--build-mode",
        choices=["debug", "release", "unchecked"],
        default=None,
        help="Override the configured build mode for this run",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    tour_parser = subparsers.add_parser("tour", help="Print the guided walkthrough")
    tour_parser.add_argument(
        "sections",
        nargs="*",
        metavar="SECTION",
        help=f"Sections to run: {', '.join(SECTIONS)} (default: all)",
    )
    tour_parser.set_defaults(func=cmd_tour)

    config_parser = subparsers.add_parser("config", help="Print the resolved configuration")
    config_parser.set_defaults(func=cmd_config)
    return parser


def main(argv: Optional[list] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    workspace = Path(args.workspace).resolve() if args.workspace else Path.cwd()
    explicit = Path(args.config).resolve() if args.config else None
    try:
        runtime_config = load_runtime_config(workspace, explicit)
        overrides = {}
        if args.log_level:
            overrides["log_level"] = args.log_level
        if args.build_mode:
            overrides["build_mode"] = args.build_mode
        args.runtime_config = set_config(runtime_config, **overrides)
        configure_logging(args.runtime_config.log_level)
        return args.func(args)
    except FundamentalsError as exc:
        print(f"Error: {exc.format()}", file=sys.stderr)
        if os.getenv("FUNDAMENTALS_VERBOSE"):
            raise
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
