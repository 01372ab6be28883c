"""Unit tests for text rendering."""
from __future__ import annotations

import math

from healthfactor.engine import summarize
from healthfactor.models import Asset, PositionEntry, PositionSummary
from healthfactor.render import (
    INCOMPLETE_HINT,
    format_price,
    render_entries,
    render_health_factor,
    render_report,
    render_reserves,
)


def _summary(hf: float, rate: float | None = 2000.0, borrows: int = 1) -> PositionSummary:
    return PositionSummary(
        collateral_value=0.0,
        weighted_collateral=0.0,
        borrowed_value=0.0,
        health_factor=hf,
        band=None,
        exchange_rate=rate,
        deposit_count=1,
        borrow_count=borrows,
    )


class TestFormatPrice:
    def test_display_currency(self) -> None:
        assert format_price(0.0005, 2000.0) == "$1.00"

    def test_falls_back_to_base(self) -> None:
        assert format_price(0.5, None) == "0.500000 ETH"

    def test_unset_price(self) -> None:
        assert format_price(None, 2000.0) == "$0.00"


class TestRenderReserves:
    def test_lists_symbols(self, sample_reserves) -> None:
        text = render_reserves(sample_reserves, 1.0)
        assert "USDC" in text and "WETH" in text
        assert "80.00%" in text

    def test_empty(self) -> None:
        assert render_reserves([], 1.0) == "No reserves available."


class TestRenderEntries:
    def test_empty_list(self) -> None:
        assert "No borrows" in render_entries("Borrows", [], 1.0)

    def test_rows(self, weth: Asset) -> None:
        text = render_entries("Deposits", [PositionEntry(asset=weth, amount="10")], 20.0)
        assert "10 WETH @ $2,000.00" in text


class TestRenderHealthFactor:
    def test_loading(self) -> None:
        assert "loading" in render_health_factor(_summary(2.0, rate=None))

    def test_value(self) -> None:
        assert render_health_factor(_summary(1.6)) == "Health Factor: 1.60 ⚠️"

    def test_incomplete(self) -> None:
        text = render_health_factor(_summary(math.inf, borrows=0))
        assert "--" in text
        assert INCOMPLETE_HINT in text


class TestRenderReport:
    def test_full_report(self, sample_deposits, usdc: Asset) -> None:
        borrows = (PositionEntry(asset=usdc, amount=400),)
        summary = summarize(sample_deposits, borrows, exchange_rate=1.0)
        # 10 × 100 × 0.8 / 400 = 2.0
        text = render_report(sample_deposits, borrows, summary)
        assert "Deposits" in text and "Borrows" in text
        assert "2.00 🍏" in text
        assert "ETH: $1.00" in text
