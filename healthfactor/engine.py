"""Health factor engine — pure functions, no I/O.

    health_factor = Σ(deposit amount × price × liquidation threshold)
                    / Σ(borrow amount × price)

Prices are in the base unit (ETH). Every input is coerced with
:func:`to_number`, so a malformed row contributes 0 instead of raising.
"""
from __future__ import annotations

import math
from typing import Any, Iterable

from .models import PositionEntry, PositionSummary

CRITICAL = "critical"
WARNING = "warning"
SAFE = "safe"

PLACEHOLDER = "--"

_BAND_MARKERS = {
    CRITICAL: "☠️",
    WARNING: "⚠️",
    SAFE: "🍏",
}


def to_number(value: Any) -> float:
    """Coerce an entered value to a float; missing, non-numeric or non-finite gives 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def entry_value(entry: PositionEntry) -> float:
    """Value of a single entry in the base unit."""
    return to_number(entry.amount) * to_number(entry.asset.price_in_base)


def total_collateral_value(deposits: Iterable[PositionEntry]) -> float:
    return sum((entry_value(d) for d in deposits), 0.0)


def total_weighted_collateral(deposits: Iterable[PositionEntry]) -> float:
    """Sum of deposit values, each weighted by its own liquidation threshold."""
    return sum(
        (entry_value(d) * to_number(d.asset.liquidation_threshold) for d in deposits),
        0.0,
    )


def total_borrow_value(borrows: Iterable[PositionEntry]) -> float:
    return sum((entry_value(b) for b in borrows), 0.0)


def divide(numerator: float, denominator: float) -> float:
    """IEEE-style division: x/0 is ±inf, 0/0 is nan."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def health_factor(
    deposits: Iterable[PositionEntry], borrows: Iterable[PositionEntry]
) -> float:
    """Compute the health factor; non-finite when nothing is borrowed."""
    return divide(total_weighted_collateral(deposits), total_borrow_value(borrows))


def classify(
    ratio: float, critical: float = 1.0, warning: float = 2.0
) -> str | None:
    """Map a ratio to its band, or None when the ratio is not finite."""
    if not math.isfinite(ratio):
        return None
    if ratio < critical:
        return CRITICAL
    if ratio < warning:
        return WARNING
    return SAFE


def format_health_factor(
    ratio: float, critical: float = 1.0, warning: float = 2.0
) -> str:
    """Render a ratio to 2 decimals with its band marker, or the placeholder."""
    band = classify(ratio, critical, warning)
    if band is None:
        return PLACEHOLDER
    return f"{ratio:.2f} {_BAND_MARKERS[band]}"


def to_display(value_in_base: Any, exchange_rate: float | None) -> float | None:
    """Convert a base-unit value to display currency; None while the rate is unset."""
    if exchange_rate is None:
        return None
    return to_number(value_in_base) * exchange_rate


def summarize(
    deposits: Iterable[PositionEntry],
    borrows: Iterable[PositionEntry],
    exchange_rate: float | None = None,
    critical: float = 1.0,
    warning: float = 2.0,
) -> PositionSummary:
    """Build a :class:`PositionSummary` for the given entries."""
    deposits = tuple(deposits)
    borrows = tuple(borrows)
    weighted = total_weighted_collateral(deposits)
    borrowed = total_borrow_value(borrows)
    ratio = divide(weighted, borrowed)
    return PositionSummary(
        collateral_value=total_collateral_value(deposits),
        weighted_collateral=weighted,
        borrowed_value=borrowed,
        health_factor=ratio,
        band=classify(ratio, critical, warning),
        exchange_rate=exchange_rate,
        deposit_count=len(deposits),
        borrow_count=len(borrows),
    )
