"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from healthfactor.config import (
    AppConfig,
    CatalogConfig,
    PriceApiConfig,
    ThresholdsConfig,
    WatchConfig,
)
from healthfactor.models import Asset, PositionEntry


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_catalog_config() -> CatalogConfig:
    return CatalogConfig(subgraph_url="https://subgraph.example.com/aave", timeout=10)


@pytest.fixture()
def sample_price_api_config() -> PriceApiConfig:
    return PriceApiConfig(
        url="https://prices.example.com/simple/price",
        base_asset_id="ethereum",
        vs_currency="usd",
        timeout=5,
    )


@pytest.fixture()
def sample_app_config(
    sample_catalog_config: CatalogConfig,
    sample_price_api_config: PriceApiConfig,
) -> AppConfig:
    return AppConfig(
        catalog=sample_catalog_config,
        price_api=sample_price_api_config,
        thresholds=ThresholdsConfig(critical=1.0, warning=2.0),
        watch=WatchConfig(refresh_interval_seconds=30),
    )


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def weth() -> Asset:
    return Asset(
        id="0xweth",
        symbol="WETH",
        decimals=18,
        ltv=0.75,
        liquidation_threshold=0.8,
        price_in_base=100.0,
    )


@pytest.fixture()
def usdc() -> Asset:
    return Asset(
        id="0xusdc",
        symbol="USDC",
        decimals=6,
        ltv=0.8,
        liquidation_threshold=0.85,
        price_in_base=1.0,
    )


@pytest.fixture()
def dai() -> Asset:
    return Asset(
        id="0xdai",
        symbol="DAI",
        decimals=18,
        ltv=0.75,
        liquidation_threshold=0.8,
        price_in_base=1.0,
    )


@pytest.fixture()
def sample_reserves(weth: Asset, usdc: Asset, dai: Asset) -> list[Asset]:
    return [dai, usdc, weth]


@pytest.fixture()
def sample_deposits(weth: Asset) -> tuple[PositionEntry, ...]:
    # 10 × 100 × 0.8 = 800 weighted collateral
    return (PositionEntry(asset=weth, amount=10),)


# ---------------------------------------------------------------------------
# YAML fixtures
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    catalog:
      subgraph_url: "https://subgraph.example.com/aave"
      timeout: 10
    price_api:
      url: "https://prices.example.com/simple/price"
      base_asset_id: ethereum
      vs_currency: usd
      api_key: ""
      timeout: 5
    thresholds:
      critical: 1.0
      warning: 2.0
    watch:
      refresh_interval_seconds: 30
""")

SAMPLE_POSITION_YAML = textwrap.dedent("""\
    deposits:
      - {asset: WETH, amount: 10}
    borrows:
      - {asset: USDC, amount: 400}
      - {asset: dai, amount: "", price_usd: 2.0}
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


@pytest.fixture()
def sample_position_path(tmp_path: Path) -> Path:
    pos_file = tmp_path / "position.yaml"
    pos_file.write_text(SAMPLE_POSITION_YAML)
    return pos_file


# ---------------------------------------------------------------------------
# Sample subgraph data
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_raw_reserves() -> list[dict]:
    return [
        {
            "id": "0xusdc",
            "decimals": "6",
            "baseLTVasCollateral": "8000",
            "reserveLiquidationThreshold": "8500",
            "symbol": "USDC",
            "price": {"priceInEth": "2500000000000000"},  # 0.0025 ETH
        },
        {
            "id": "0xweth",
            "decimals": 18,
            "baseLTVasCollateral": "7500",
            "reserveLiquidationThreshold": "8000",
            "symbol": "WETH",
            "price": {"priceInEth": "1000000000000000000"},  # 1 ETH
        },
    ]
