"""Reserve catalog protocol — lendable asset metadata."""
from typing import Protocol

from ..models import Asset


class ReserveCatalog(Protocol):
    """Abstract interface for fetching the list of lendable reserves."""

    async def fetch_reserves(self) -> list[Asset]: ...
