"""Coin-to-fiat exchange rates with oracle fallback and an offline cache."""
from .errors import (
    DegenerateAggregateError,
    ExchangeRateError,
    FieldUnparseableError,
    SourceUnavailableError,
    UnsupportedOperationError,
)
from .models import COIN, ExchangeRate, RateSnapshot

__all__ = [
    "COIN",
    "DegenerateAggregateError",
    "ExchangeRate",
    "ExchangeRateError",
    "FieldUnparseableError",
    "RateSnapshot",
    "SourceUnavailableError",
    "UnsupportedOperationError",
]
