"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class Asset:
    """Lendable reserve snapshot from the catalog.

    Ratios are fractions (0.8 == 80%), ``price_in_base`` is denominated in
    the chain's native currency (ETH).
    """

    id: str
    symbol: str
    decimals: int = 18
    ltv: float = 0.0
    liquidation_threshold: float = 0.0
    price_in_base: float | None = 0.0

    def with_price(self, price_in_base: float | None) -> Asset:
        return replace(self, price_in_base=price_in_base)


@dataclass(frozen=True)
class PositionEntry:
    """A deposit or borrow row: the entry's own copy of an asset plus an amount.

    ``amount`` is kept as entered (it may be an empty string or ``None``);
    the engine coerces it when computing.
    """

    asset: Asset
    amount: Any = 0

    @property
    def asset_id(self) -> str:
        return self.asset.id


@dataclass(frozen=True)
class PositionSummary:
    """Result of one health factor computation."""

    collateral_value: float
    weighted_collateral: float
    borrowed_value: float
    health_factor: float
    band: str | None
    exchange_rate: float | None = None
    deposit_count: int = 0
    borrow_count: int = 0

    @property
    def is_complete(self) -> bool:
        """True when there is at least one deposit and one borrow."""
        return self.deposit_count > 0 and self.borrow_count > 0
