"""Command-line interface for the farm keeper."""
from __future__ import annotations

import argparse
import asyncio
import sys

from .config import load_config
from .handler import run_once
from .logging_setup import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="farm-keeper",
        description="Leveraged yield-farm keeper",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: $KEEPER_CONFIG or config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("run", help="Evaluate all assets and submit deposits/withdrawals")
    sub.add_parser("report", help="Evaluate all assets without submitting transactions")

    return parser


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command; return the process exit code."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    result = await run_once(config, dry_run=args.command == "report")
    return 0 if result.ok else 1


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
