"""Price oracle protocol — BTC price feed abstraction."""
from decimal import Decimal
from typing import Protocol


class PriceOracle(Protocol):
    """Abstract interface for fetching the coin's price in BTC."""

    async def fetch_btc_price(self) -> Decimal: ...
