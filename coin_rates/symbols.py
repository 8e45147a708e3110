"""Default currency symbol lookup."""
from __future__ import annotations

_SYMBOLS: dict[str, str] = {
    "AUD": "A$",
    "BRL": "R$",
    "CAD": "CA$",
    "CHF": "CHF",
    "CNY": "CN¥",
    "EUR": "€",
    "GBP": "£",
    "HKD": "HK$",
    "INR": "₹",
    "JPY": "¥",
    "KRW": "₩",
    "MXN": "MX$",
    "NZD": "NZ$",
    "PLN": "zł",
    "RUB": "₽",
    "SGD": "S$",
    "THB": "฿",
    "TRY": "₺",
    "UAH": "₴",
    "USD": "$",
    "ZAR": "R",
}


class StaticCurrencySymbols:
    """Symbol table for common currencies; unknown codes map to themselves."""

    def __init__(self, overrides: dict[str, str] | None = None) -> None:
        self._symbols = dict(_SYMBOLS)
        if overrides:
            self._symbols.update(overrides)

    def symbol_for(self, currency_code: str) -> str:
        return self._symbols.get(currency_code.upper(), currency_code)
