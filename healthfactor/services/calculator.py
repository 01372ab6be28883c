"""Calculator session — owns the adapters, the loaded data and the position store."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from ..catalog import SubgraphCatalog
from ..config import AppConfig, ThresholdsConfig
from ..engine import summarize
from ..interfaces.price_oracle import PriceOracle
from ..interfaces.reserve_catalog import ReserveCatalog
from ..models import Asset, PositionSummary
from ..oracles import CoinGeckoOracle
from ..positions import PositionFile, PositionRow
from ..store import PositionStore, available_assets

logger = logging.getLogger(__name__)

DEPOSITS = "deposits"
BORROWS = "borrows"


class CalculatorSession:
    """Models one hypothetical position against live catalog and price data."""

    def __init__(
        self,
        catalog: ReserveCatalog,
        oracle: PriceOracle,
        base_asset_id: str = "ethereum",
        thresholds: ThresholdsConfig | None = None,
    ) -> None:
        self._catalog = catalog
        self._oracle = oracle
        self._base_asset_id = base_asset_id
        self._thresholds = thresholds or ThresholdsConfig()

        self.reserves: list[Asset] = []
        self.exchange_rate: Optional[float] = None
        self.loaded = False
        self.store = PositionStore()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Fetch the catalog and the exchange rate concurrently."""
        reserves, rate = await asyncio.gather(
            self._catalog.fetch_reserves(),
            self._oracle.fetch_exchange_rate(self._base_asset_id),
        )
        self.reserves = list(reserves)
        self.exchange_rate = rate
        self.loaded = True

        if not self.reserves:
            logger.warning("No reserves available, position entry disabled")
        if rate is None:
            logger.warning("Exchange rate for %s unavailable", self._base_asset_id)

    async def refresh_rate(self) -> Optional[float]:
        """Re-fetch the exchange rate; keeps None if the fetch fails."""
        self.exchange_rate = await self._oracle.fetch_exchange_rate(self._base_asset_id)
        return self.exchange_rate

    async def run_refresh(
        self,
        interval_seconds: int,
        on_update: Callable[["CalculatorSession"], Awaitable[None] | None] | None = None,
        iterations: int | None = None,
    ) -> None:
        """Refresh the rate every ``interval_seconds`` and call ``on_update``.

        Runs forever unless ``iterations`` is given.
        """
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        logger.info("Refreshing %s price every %d seconds", self._base_asset_id, interval_seconds)

        count = 0
        while iterations is None or count < iterations:
            count += 1
            try:
                await self.refresh_rate()
                if on_update is not None:
                    result = on_update(self)
                    if asyncio.iscoroutine(result):
                        await result
            except Exception as e:
                logger.error("Error in refresh loop: %s", e)

            if iterations is None or count < iterations:
                await asyncio.sleep(interval_seconds)

    # ------------------------------------------------------------------
    # Catalog lookups
    # ------------------------------------------------------------------

    @property
    def entry_enabled(self) -> bool:
        return bool(self.reserves)

    def find_asset(self, key: str) -> Asset | None:
        """Look up a reserve by id, then by symbol (case-insensitive)."""
        for asset in self.reserves:
            if asset.id == key:
                return asset
        wanted = key.upper()
        for asset in self.reserves:
            if asset.symbol.upper() == wanted:
                return asset
        return None

    def available_deposit_assets(self) -> list[Asset]:
        return available_assets(self.reserves, self.store.deposits)

    def available_borrow_assets(self) -> list[Asset]:
        return available_assets(self.reserves, self.store.borrows)

    # ------------------------------------------------------------------
    # Position edits
    # ------------------------------------------------------------------

    def add_deposit(self, asset: Asset | None, amount: Any = 0) -> None:
        if not self.entry_enabled:
            logger.warning("Position entry disabled, deposit ignored")
            return
        self.store.add_deposit(asset, amount)

    def add_borrow(self, asset: Asset | None, amount: Any = 0) -> None:
        if not self.entry_enabled:
            logger.warning("Position entry disabled, borrow ignored")
            return
        self.store.add_borrow(asset, amount)

    def update_amount(self, kind: str, asset_id: str, new_amount: Any) -> None:
        self.store.update_amount(kind, asset_id, new_amount)

    def update_display_price(self, kind: str, asset_id: str, new_display_price: Any) -> None:
        """Set an entry's price from a display-currency value using the current rate."""
        self.store.update_implied_base_price(
            kind, asset_id, new_display_price, self.exchange_rate
        )

    def remove(self, kind: str, asset_id: str) -> None:
        self.store.remove(kind, asset_id)

    def apply_position_file(self, position: PositionFile) -> list[str]:
        """Add every row of a position file; returns the keys that matched no reserve."""
        missing: list[str] = []
        for kind, rows in ((DEPOSITS, position.deposits), (BORROWS, position.borrows)):
            for row in rows:
                if not self._apply_row(kind, row):
                    missing.append(row.asset)
        return missing

    def _apply_row(self, kind: str, row: PositionRow) -> bool:
        asset = self.find_asset(row.asset)
        if asset is None:
            logger.warning("Unknown asset '%s' in %s, skipped", row.asset, kind)
            return False

        if kind == DEPOSITS:
            self.add_deposit(asset, row.amount)
        else:
            self.add_borrow(asset, row.amount)

        if row.price_usd is not None:
            self.update_display_price(kind, asset.id, row.price_usd)
        return True

    # ------------------------------------------------------------------
    # Computation
    # ------------------------------------------------------------------

    def summary(self) -> PositionSummary:
        """Recompute the position summary from the current entries."""
        return summarize(
            self.store.deposits,
            self.store.borrows,
            exchange_rate=self.exchange_rate,
            critical=self._thresholds.critical,
            warning=self._thresholds.warning,
        )


def build_session(config: AppConfig) -> CalculatorSession:
    """Construct the adapters once and inject them into a new session."""
    return CalculatorSession(
        catalog=SubgraphCatalog(config.catalog),
        oracle=CoinGeckoOracle(config.price_api),
        base_asset_id=config.price_api.base_asset_id,
        thresholds=config.thresholds,
    )
