"""Aave subgraph reserve catalog."""
from __future__ import annotations

import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import CatalogConfig
from ..models import Asset
from . import parser

logger = logging.getLogger(__name__)

RESERVES_QUERY = """
query GetReserves {
  reserves {
    id
    decimals
    baseLTVasCollateral
    reserveLiquidationThreshold
    symbol
    price {
      priceInEth
    }
  }
}
"""


class SubgraphCatalog:
    """Fetch reserve metadata from an Aave GraphQL subgraph."""

    def __init__(self, config: CatalogConfig) -> None:
        self.url = config.subgraph_url
        self.timeout = config.timeout

    async def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL query and return its ``data`` object."""
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.post(
                self.url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status != 200:
                    raise RuntimeError(f"Subgraph HTTP {response.status}")

                result = await response.json()
                if result.get("errors"):
                    raise RuntimeError(f"Subgraph query error: {result['errors']}")

                return result.get("data") or {}

    async def fetch_reserves(self) -> list[Asset]:
        """Fetch and parse all reserves; empty list on any failure."""
        try:
            data = await self.query(RESERVES_QUERY)
            raw_reserves = data.get("reserves") if isinstance(data, dict) else None
            reserves = parser.parse_reserves(raw_reserves or [])
        except Exception as e:
            logger.error("Error fetching reserves from subgraph: %s", e)
            return []

        logger.info("Fetched %d reserves from subgraph", len(reserves))
        return reserves
