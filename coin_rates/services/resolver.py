"""Read-side queries against a rate snapshot."""
from __future__ import annotations

import locale
import logging
from typing import Callable, Optional

from ..interfaces import CurrencySymbols
from ..models import ExchangeRate, RateSnapshot

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_CODE = "USD"


def use_environment_locale() -> None:
    """Load LC_MONETARY from the environment; Python starts every process in "C"."""
    try:
        locale.setlocale(locale.LC_MONETARY, "")
    except locale.Error as e:
        logger.debug("Environment locale unavailable, keeping C monetary locale: %s", e)


def locale_currency_code() -> Optional[str]:
    """Currency of the process locale, or None when the locale has none."""
    try:
        code = locale.localeconv().get("int_curr_symbol", "")
    except (ValueError, locale.Error):
        return None
    code = str(code).strip()
    return code.upper() or None


class QueryResolver:
    """List, search and best-rate resolution over one snapshot at a time.

    Never triggers a refresh; callers pass the snapshot they want answered.
    """

    def __init__(
        self,
        symbols: CurrencySymbols,
        fallback_code: str = DEFAULT_FALLBACK_CODE,
        default_code: Callable[[], Optional[str]] = locale_currency_code,
    ) -> None:
        self._symbols = symbols
        self._fallback_code = fallback_code
        self._default_code = default_code

    def list_rates(self, snapshot: RateSnapshot) -> list[ExchangeRate]:
        table = snapshot.table
        if not table:
            return []
        return [table[code] for code in sorted(table)]

    def search(self, snapshot: RateSnapshot, text: str) -> list[ExchangeRate]:
        needle = text.lower()
        return [
            rate
            for rate in self.list_rates(snapshot)
            if needle in rate.currency_code.lower()
            or needle in self._symbols.symbol_for(rate.currency_code).lower()
        ]

    def best_for(
        self, snapshot: RateSnapshot, currency_code: Optional[str]
    ) -> Optional[ExchangeRate]:
        """Exact match, then the locale currency, then the fallback currency."""
        table = snapshot.table
        if not table:
            return None

        if currency_code:
            rate = table.get(currency_code)
            if rate is not None:
                return rate

        default_code = self._default_code()
        if default_code:
            rate = table.get(default_code)
            if rate is not None:
                return rate

        return table.get(self._fallback_code)
