"""Command-line interface for the health factor calculator."""
from __future__ import annotations

import argparse
import asyncio
import sys

from .config import AppConfig, load_config
from .logging_setup import configure_logging
from .positions import load_position_file
from .render import render_report, render_reserves
from .services import CalculatorSession, build_session


def _positive_int(value: str) -> int:
    """argparse type for intervals: an integer greater than zero."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="aave-health",
        description="Model an Aave position and compute its health factor",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("reserves", help="List lendable reserves")
    sub.add_parser("price", help="Show the current ETH price")

    calc_parser = sub.add_parser("calculate", help="Compute the health factor of a position file")
    calc_parser.add_argument("position", help="Path to a position YAML file")

    watch_parser = sub.add_parser("watch", help="Recompute on every price refresh")
    watch_parser.add_argument("position", help="Path to a position YAML file")
    watch_parser.add_argument(
        "interval",
        nargs="?",
        type=_positive_int,
        default=None,
        help="Refresh interval in seconds (overrides config)",
    )

    return parser


def _report(session: CalculatorSession, config: AppConfig) -> str:
    return render_report(
        session.store.deposits,
        session.store.borrows,
        session.summary(),
        critical=config.thresholds.critical,
        warning=config.thresholds.warning,
    )


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command; returns the exit code."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    position = None
    if args.command in ("calculate", "watch"):
        position = load_position_file(args.position)

    session = build_session(config)
    await session.load()

    if args.command == "reserves":
        print(render_reserves(session.reserves, session.exchange_rate))
        return 0 if session.reserves else 1

    if args.command == "price":
        if session.exchange_rate is None:
            print("Price unavailable")
            return 1
        print(f"{config.price_api.base_asset_id}: {session.exchange_rate:,.2f} "
              f"{config.price_api.vs_currency.upper()}")
        return 0

    if not session.entry_enabled:
        print("No reserves available, cannot model a position.")
        return 1

    missing = session.apply_position_file(position)
    for key in missing:
        print(f"Unknown asset: {key}", file=sys.stderr)

    if args.command == "calculate":
        print(_report(session, config))
        return 0

    def _print(s: CalculatorSession) -> None:
        print(_report(s, config))
        print()

    interval = args.interval or config.watch.refresh_interval_seconds
    _print(session)
    await asyncio.sleep(interval)
    await session.run_refresh(interval, on_update=_print)
    return 0


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        sys.exit(asyncio.run(_run(args)))
    except KeyboardInterrupt:
        sys.exit(130)
