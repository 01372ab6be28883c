"""Plain-text rendering of the catalog, the position tables and the health factor."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from .engine import format_health_factor, to_number
from .models import Asset, PositionEntry, PositionSummary

INCOMPLETE_HINT = "Add at least 1 deposit and 1 borrow"


def _now_str() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def format_price(price_in_base: object, exchange_rate: float | None) -> str:
    """Display price to 2 dp, or the raw base-unit price while the rate is unset."""
    base = to_number(price_in_base)
    if exchange_rate is None:
        return f"{base:.6f} ETH"
    return f"${base * exchange_rate:,.2f}"


def render_reserves(reserves: Iterable[Asset], exchange_rate: float | None) -> str:
    reserves = list(reserves)
    if not reserves:
        return "No reserves available."

    lines = [f"{'Symbol':<8} {'LTV':>7} {'Liq. thr.':>10} {'Price':>16}"]
    for asset in reserves:
        lines.append(
            f"{asset.symbol:<8} {asset.ltv * 100:>6.2f}% "
            f"{asset.liquidation_threshold * 100:>9.2f}% "
            f"{format_price(asset.price_in_base, exchange_rate):>16}"
        )
    return "\n".join(lines)


def render_entries(
    title: str, entries: Iterable[PositionEntry], exchange_rate: float | None
) -> str:
    entries = list(entries)
    lines = [title]
    if not entries:
        lines.append(f"  No {title.lower()}")
        return "\n".join(lines)

    for entry in entries:
        amount = f"{to_number(entry.amount):,.6f}".rstrip("0").rstrip(".")
        lines.append(
            f"  {amount} {entry.asset.symbol}"
            f" @ {format_price(entry.asset.price_in_base, exchange_rate)}"
        )
    return "\n".join(lines)


def render_health_factor(summary: PositionSummary, critical: float = 1.0, warning: float = 2.0) -> str:
    if summary.exchange_rate is None:
        return "Health Factor: loading prices..."

    line = f"Health Factor: {format_health_factor(summary.health_factor, critical, warning)}"
    if not summary.is_complete:
        line += f"\n{INCOMPLETE_HINT}"
    return line


def render_report(
    deposits: Iterable[PositionEntry],
    borrows: Iterable[PositionEntry],
    summary: PositionSummary,
    critical: float = 1.0,
    warning: float = 2.0,
) -> str:
    rate = summary.exchange_rate
    rate_line = f"ETH: ${rate:,.2f}" if rate is not None else "ETH: price unavailable"
    return (
        f"{render_entries('Deposits', deposits, rate)}\n"
        f"\n"
        f"{render_entries('Borrows', borrows, rate)}\n"
        f"\n"
        f"{render_health_factor(summary, critical, warning)}\n"
        f"\n"
        f"{rate_line} · {_now_str()} UTC"
    )
