"""Currency symbol protocol — display symbol lookup."""
from typing import Protocol


class CurrencySymbols(Protocol):
    """Abstract interface for mapping a currency code to its display symbol."""

    def symbol_for(self, currency_code: str) -> str: ...
