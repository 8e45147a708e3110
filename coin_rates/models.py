"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Any, Iterable, Mapping

COIN = 100_000_000
FIAT_EXPONENT = 4

_FIAT_QUANTUM = Decimal(1).scaleb(-FIAT_EXPONENT)

RateTable = Mapping[str, "ExchangeRate"]

ROW_CURRENCY_CODE = "currency_code"
ROW_RATE_COIN = "rate_coin"
ROW_RATE_FIAT = "rate_fiat"
ROW_SOURCE = "source"


@dataclass(frozen=True)
class ExchangeRate:
    """Price of one whole coin in a fiat currency.

    ``fiat_amount`` is fixed-point with ``FIAT_EXPONENT`` decimal places, so
    ``fiat_amount=5_000_000`` reads as 500.0000.
    """

    currency_code: str
    fiat_amount: int
    source: str
    coin_amount: int = COIN

    @classmethod
    def from_fiat(cls, currency_code: str, fiat: Decimal, source: str) -> ExchangeRate:
        quantized = fiat.quantize(_FIAT_QUANTUM, rounding=ROUND_HALF_UP)
        return cls(
            currency_code=currency_code,
            fiat_amount=int(quantized.scaleb(FIAT_EXPONENT)),
            source=source,
        )

    @property
    def fiat(self) -> Decimal:
        return Decimal(self.fiat_amount).scaleb(-FIAT_EXPONENT)

    @property
    def coin(self) -> Decimal:
        return Decimal(self.coin_amount) / COIN

    def to_row(self) -> dict[str, Any]:
        return {
            ROW_CURRENCY_CODE: self.currency_code,
            ROW_RATE_COIN: self.coin_amount,
            ROW_RATE_FIAT: self.fiat_amount,
            ROW_SOURCE: self.source,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> ExchangeRate:
        """Rebuild a rate from a row; raises KeyError/ValueError on bad input."""
        return cls(
            currency_code=str(row[ROW_CURRENCY_CODE]),
            coin_amount=int(row[ROW_RATE_COIN]),
            fiat_amount=int(row[ROW_RATE_FIAT]),
            source=str(row[ROW_SOURCE]),
        )


def make_table(rates: Iterable[ExchangeRate]) -> RateTable:
    """Build a read-only rate table keyed by currency code."""
    return MappingProxyType({r.currency_code: r for r in rates})


@dataclass(frozen=True)
class RateSnapshot:
    """A rate table together with the time it was fetched.

    ``last_updated`` is None until the first successful refresh; a table
    seeded from the persisted cache keeps it None.
    """

    table: RateTable | None = None
    last_updated: float | None = None
