"""Position store — copy-on-write deposit and borrow lists.

A change returns a new tuple and a no-op returns the same one. Entries are
frozen and never changed in place, so callers detect changes by identity.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Iterable

from .engine import to_number
from .models import Asset, PositionEntry

logger = logging.getLogger(__name__)

Entries = tuple[PositionEntry, ...]


def add_entry(
    entries: Entries, asset: Asset | None, amount: Any = 0
) -> Entries:
    """Append a new entry; unchanged when no asset is selected or it is already listed."""
    if asset is None or not asset.id:
        logger.debug("No asset selected, entry not added")
        return entries
    if any(e.asset_id == asset.id for e in entries):
        logger.warning("Asset %s is already in the list, entry not added", asset.symbol)
        return entries
    return entries + (PositionEntry(asset=asset, amount=amount),)


def _replace_matching(
    entries: Entries, asset_id: str, update: Callable[[PositionEntry], PositionEntry]
) -> Entries:
    # No match leaves the original tuple (same identity) in place.
    if not any(e.asset_id == asset_id for e in entries):
        return entries
    return tuple(update(e) if e.asset_id == asset_id else e for e in entries)


def update_amount(entries: Entries, asset_id: str, new_amount: Any) -> Entries:
    """Replace the amount of the entry for ``asset_id``."""
    return _replace_matching(
        entries, asset_id, lambda e: replace(e, amount=new_amount)
    )


def implied_base_price(
    display_price: Any, exchange_rate: float | None
) -> float | None:
    """Back-compute a base-unit price from a display price; None if the rate is unset or zero."""
    rate = to_number(exchange_rate)
    if rate == 0:
        return None
    return to_number(display_price) / rate


def update_implied_base_price(
    entries: Entries,
    asset_id: str,
    new_display_price: Any,
    exchange_rate: float | None,
) -> Entries:
    """Override the base-unit price on the matching entry's own copy of its asset.

    With an unset or zero exchange rate no override is applied and the entry
    keeps its current price.
    """
    price = implied_base_price(new_display_price, exchange_rate)
    if price is None:
        logger.warning("Exchange rate unavailable, price override for %s ignored", asset_id)
        return entries
    return _replace_matching(
        entries, asset_id, lambda e: replace(e, asset=e.asset.with_price(price))
    )


def remove(entries: Entries, asset_id: str) -> Entries:
    if not any(e.asset_id == asset_id for e in entries):
        return entries
    return tuple(e for e in entries if e.asset_id != asset_id)


def available_assets(catalog: Iterable[Asset], entries: Entries) -> list[Asset]:
    """Catalog assets not already used in ``entries``."""
    used = {e.asset_id for e in entries}
    return [a for a in catalog if a.id not in used]


class PositionStore:
    """Holds the deposit and borrow lists for one session."""

    def __init__(self) -> None:
        self.deposits: Entries = ()
        self.borrows: Entries = ()

    def add_deposit(self, asset: Asset | None, amount: Any = 0) -> None:
        self.deposits = add_entry(self.deposits, asset, amount)

    def add_borrow(self, asset: Asset | None, amount: Any = 0) -> None:
        self.borrows = add_entry(self.borrows, asset, amount)

    def _get(self, kind: str) -> Entries:
        if kind == "deposits":
            return self.deposits
        if kind == "borrows":
            return self.borrows
        raise ValueError(f"Unknown position list '{kind}'")

    def _set(self, kind: str, entries: Entries) -> None:
        if kind == "deposits":
            self.deposits = entries
        else:
            self.borrows = entries

    def update_amount(self, kind: str, asset_id: str, new_amount: Any) -> None:
        self._set(kind, update_amount(self._get(kind), asset_id, new_amount))

    def update_implied_base_price(
        self,
        kind: str,
        asset_id: str,
        new_display_price: Any,
        exchange_rate: float | None,
    ) -> None:
        self._set(
            kind,
            update_implied_base_price(
                self._get(kind), asset_id, new_display_price, exchange_rate
            ),
        )

    def remove(self, kind: str, asset_id: str) -> None:
        self._set(kind, remove(self._get(kind), asset_id))

    def clear(self) -> None:
        self.deposits = ()
        self.borrows = ()
