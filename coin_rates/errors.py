"""Exception hierarchy for rate acquisition and the query surface."""
from __future__ import annotations


class ExchangeRateError(Exception):
    """Base class for all coin-rates errors."""


class SourceUnavailableError(ExchangeRateError):
    """An oracle or fiat endpoint failed at the transport, HTTP or decode level."""

    def __init__(self, message: str, *, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class DegenerateAggregateError(SourceUnavailableError):
    """An oracle answered, but its aggregate price is unusable."""


class FieldUnparseableError(ExchangeRateError):
    """None of a currency's preferred fields held a usable number."""

    def __init__(self, currency_code: str, message: str) -> None:
        super().__init__(f"{currency_code}: {message}")
        self.currency_code = currency_code


class UnsupportedOperationError(ExchangeRateError):
    """Write attempted through the read-only query surface."""
