"""Price oracle protocol — base unit to display currency rate."""
from typing import Optional, Protocol


class PriceOracle(Protocol):
    """Abstract interface for fetching the base-unit exchange rate."""

    async def fetch_exchange_rate(self, base_asset_id: str) -> Optional[float]: ...
