#!/usr/bin/env python3
"""proton-usage - Main Entry Point.

Prints which compatibility tool each Steam app is configured to use, or
the launch options configured per local account.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from proton_usage.config import config
from proton_usage.core.errors import ProtonUsageError
from proton_usage.core.logging import logger, setup_logging, verbosity_to_level
from proton_usage.integrations.steam_store import SteamStoreClient
from proton_usage.services.report_service import parse_launch_options, parse_steam_config
from proton_usage.version import __app_name__, __version__

__all__ = ["build_parser", "main", "run"]

COMPAT_TOOLS_COMMAND = "compat-tools"
LAUNCH_OPTIONS_COMMAND = "launch-options"


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="Show which Steam apps use which compatibility tool.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-s",
        "--steam-path",
        type=Path,
        help="Path to the Steam home directory. Default: ~/.steam",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Output verbosity (-v, -vv)",
    )
    parser.add_argument(
        "--fetch-names",
        action="store_true",
        default=None,
        help="Look up names missing from local files on the Steam Store",
    )
    parser.add_argument("--log-file", type=Path, help="Also write debug logs to this file")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.add_parser(COMPAT_TOOLS_COMMAND, help="List apps per compatibility tool (default)")
    subparsers.add_parser(LAUNCH_OPTIONS_COMMAND, help="List launch options per account")

    return parser


def run(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments without the program name; defaults to sys.argv.

    Returns:
        Process exit code (0 = success, 1 = failure).
    """
    args = build_parser().parse_args(argv)

    log_file = args.log_file or config.LOG_FILE
    try:
        setup_logging(verbosity_to_level(args.verbose), log_file)
    except OSError as e:
        print(f"Error: Couldn't open log file '{log_file}': {e.strerror or e}", file=sys.stderr)
        return 1

    fetch_names = config.FETCH_NAMES if args.fetch_names is None else args.fetch_names
    name_lookup = None
    if fetch_names:
        client = SteamStoreClient(timeout=config.REQUEST_TIMEOUT, max_workers=config.MAX_CONCURRENT_REQUESTS)
        name_lookup = client.fetch_app_names

    try:
        steam_home = config.get_steam_home(args.steam_path)
        logger.debug("Using Steam home %s", steam_home)

        if args.command == LAUNCH_OPTIONS_COMMAND:
            report = parse_launch_options(steam_home, name_lookup)
        else:
            report = parse_steam_config(steam_home, name_lookup)

    except ProtonUsageError as e:
        logger.debug("Aborting: %s", e, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = report.render()
    if output:
        print(output)
    return 0


def main() -> None:
    """Main application execution flow."""
    sys.exit(run())


if __name__ == "__main__":
    main()
