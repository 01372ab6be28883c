"""Unit tests for the CoinGecko oracle — response parsing and error handling."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from healthfactor.config import PriceApiConfig
from healthfactor.oracles.coingecko import CoinGeckoOracle


@pytest.fixture()
def oracle(sample_price_api_config: PriceApiConfig) -> CoinGeckoOracle:
    return CoinGeckoOracle(sample_price_api_config)


def _mock_session(status: int = 200, data=None, side_effect=None) -> AsyncMock:
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.json = AsyncMock(return_value=data)
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)

    mock_session = AsyncMock()
    if side_effect is not None:
        mock_session.get = MagicMock(side_effect=side_effect)
    else:
        mock_session.get = MagicMock(return_value=mock_response)
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=None)
    return mock_session


class TestCoinGeckoFetchExchangeRate:
    @pytest.mark.asyncio
    async def test_parses_response(self, oracle: CoinGeckoOracle) -> None:
        session = _mock_session(data={"ethereum": {"usd": 3512.25}})

        with patch("healthfactor.oracles.coingecko.aiohttp.ClientSession", return_value=session):
            with patch("healthfactor.oracles.coingecko.aiohttp.TCPConnector"):
                rate = await oracle.fetch_exchange_rate("ethereum")

        assert rate == pytest.approx(3512.25)
        params = session.get.call_args.kwargs["params"]
        assert params == {"ids": "ethereum", "vs_currencies": "usd"}
        assert session.get.call_args.kwargs["headers"] == {}

    @pytest.mark.asyncio
    async def test_sends_api_key(self, sample_price_api_config: PriceApiConfig) -> None:
        from dataclasses import replace

        oracle = CoinGeckoOracle(replace(sample_price_api_config, api_key="k"))
        session = _mock_session(data={"ethereum": {"usd": 1.0}})

        with patch("healthfactor.oracles.coingecko.aiohttp.ClientSession", return_value=session):
            with patch("healthfactor.oracles.coingecko.aiohttp.TCPConnector"):
                await oracle.fetch_exchange_rate("ethereum")

        assert session.get.call_args.kwargs["headers"] == {"x-cg-demo-api-key": "k"}

    @pytest.mark.asyncio
    async def test_handles_http_error(self, oracle: CoinGeckoOracle) -> None:
        session = _mock_session(status=429)

        with patch("healthfactor.oracles.coingecko.aiohttp.ClientSession", return_value=session):
            with patch("healthfactor.oracles.coingecko.aiohttp.TCPConnector"):
                assert await oracle.fetch_exchange_rate("ethereum") is None

    @pytest.mark.asyncio
    async def test_handles_network_error(self, oracle: CoinGeckoOracle) -> None:
        session = _mock_session(side_effect=ConnectionError("timeout"))

        with patch("healthfactor.oracles.coingecko.aiohttp.ClientSession", return_value=session):
            with patch("healthfactor.oracles.coingecko.aiohttp.TCPConnector"):
                assert await oracle.fetch_exchange_rate("ethereum") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"ethereum": {}},
            {"ethereum": {"usd": "abc"}},
            {"ethereum": {"usd": 0}},
            {"ethereum": {"usd": 10**400}},
            [],
        ],
    )
    async def test_missing_or_invalid_value(self, oracle: CoinGeckoOracle, data) -> None:
        session = _mock_session(data=data)

        with patch("healthfactor.oracles.coingecko.aiohttp.ClientSession", return_value=session):
            with patch("healthfactor.oracles.coingecko.aiohttp.TCPConnector"):
                assert await oracle.fetch_exchange_rate("ethereum") is None
