"""Pure parsing functions for subgraph reserve data — no I/O."""
from __future__ import annotations

import logging
from typing import Any

from ..engine import to_number
from ..models import Asset

logger = logging.getLogger(__name__)

# Ratios come back in basis points, prices in wei.
BPS_PRECISION = 10**4
WEI_PRECISION = 10**18


def bps_to_fraction(value: Any) -> float:
    """Convert a basis-point value to a fraction.

    Examples:
        "8000" → 0.8
        "" → 0.0
    """
    return to_number(value) / BPS_PRECISION


def wei_to_base(value: Any) -> float:
    """Convert a wei-denominated price to ETH."""
    return to_number(value) / WEI_PRECISION


def parse_decimals(value: Any, default: int = 18) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def parse_reserve(raw: dict[str, Any]) -> Asset | None:
    """Parse a single subgraph reserve into an :class:`Asset`.

    Returns None when the reserve has no id.
    """
    reserve_id = str(raw.get("id") or "")
    if not reserve_id:
        return None

    price = raw.get("price")
    if not isinstance(price, dict):
        price = {}

    return Asset(
        id=reserve_id,
        symbol=str(raw.get("symbol") or reserve_id).upper(),
        decimals=parse_decimals(raw.get("decimals")),
        ltv=bps_to_fraction(raw.get("baseLTVasCollateral")),
        liquidation_threshold=bps_to_fraction(raw.get("reserveLiquidationThreshold")),
        price_in_base=wei_to_base(price.get("priceInEth")),
    )


def parse_reserves(raw_reserves: Any) -> list[Asset]:
    """Parse all reserves, skipping malformed ones, sorted by symbol."""
    if not isinstance(raw_reserves, list):
        logger.warning("Expected a list of reserves, got %s", type(raw_reserves).__name__)
        return []

    assets: list[Asset] = []
    for raw in raw_reserves:
        if not isinstance(raw, dict):
            logger.debug("Skipping non-object reserve entry: %r", raw)
            continue
        asset = parse_reserve(raw)
        if asset is None:
            logger.debug("Skipping reserve without id: %r", raw)
            continue
        assets.append(asset)
    return sorted(assets, key=lambda a: a.symbol)
