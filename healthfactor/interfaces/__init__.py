"""Protocol interfaces for the health factor calculator."""
from .price_oracle import PriceOracle
from .reserve_catalog import ReserveCatalog

__all__ = ["PriceOracle", "ReserveCatalog"]
