"""Position file loader — YAML list of deposits and borrows."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionRow:
    """One row of a position file, before it is matched against the catalog."""

    asset: str
    amount: Any = 0
    price_usd: float | None = None


@dataclass(frozen=True)
class PositionFile:
    deposits: tuple[PositionRow, ...] = ()
    borrows: tuple[PositionRow, ...] = ()


def _build_rows(raw: Any, section: str) -> tuple[PositionRow, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValueError(f"'{section}' must be a list")

    rows: list[PositionRow] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or not item.get("asset"):
            raise ValueError(f"{section}[{i}] needs an 'asset' key")
        price = item.get("price_usd")
        rows.append(
            PositionRow(
                asset=str(item["asset"]),
                amount=item.get("amount", 0),
                price_usd=float(price) if price is not None else None,
            )
        )
    return tuple(rows)


def load_position_file(path: str | Path) -> PositionFile:
    """Read a position file.

    Example::

        deposits:
          - {asset: YFI, amount: 6.44447}
        borrows:
          - {asset: USDT, amount: 45995, price_usd: 1.0}
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Position file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Position file {path} must be a mapping")

    position = PositionFile(
        deposits=_build_rows(raw.get("deposits"), "deposits"),
        borrows=_build_rows(raw.get("borrows"), "borrows"),
    )
    logger.info(
        "Loaded %d deposits and %d borrows from %s",
        len(position.deposits),
        len(position.borrows),
        path,
    )
    return position
