"""CoinGecko exchange rate oracle."""
import logging
import math
import ssl
from typing import Optional

import aiohttp
import certifi

from ..config import PriceApiConfig

logger = logging.getLogger(__name__)


class CoinGeckoOracle:
    """Fetch the base asset's display-currency price from CoinGecko."""

    def __init__(self, config: PriceApiConfig) -> None:
        self.url = config.url
        self.vs_currency = config.vs_currency
        self.api_key = config.api_key
        self.timeout = config.timeout

    async def fetch_exchange_rate(self, base_asset_id: str) -> Optional[float]:
        """Fetch the current rate for ``base_asset_id``; None on failure."""
        params = {"ids": base_asset_id, "vs_currencies": self.vs_currency}
        headers = {"x-cg-demo-api-key": self.api_key} if self.api_key else {}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    self.url,
                    params=params,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status != 200:
                        logger.error(
                            "Error fetching %s price: HTTP %s",
                            base_asset_id,
                            response.status,
                        )
                        return None

                    data = await response.json()
        except Exception as e:
            logger.error("Error fetching %s price: %s", base_asset_id, e)
            return None

        quote = data.get(base_asset_id) if isinstance(data, dict) else None
        raw = quote.get(self.vs_currency) if isinstance(quote, dict) else None
        try:
            rate = float(raw)
        except (TypeError, ValueError, OverflowError):
            logger.error("No %s price for %s in response", self.vs_currency, base_asset_id)
            return None

        if not math.isfinite(rate) or rate <= 0:
            logger.error("Invalid %s price for %s: %s", self.vs_currency, base_asset_id, raw)
            return None

        logger.info("Fetched %s price: %.2f %s", base_asset_id, rate, self.vs_currency.upper())
        return rate
