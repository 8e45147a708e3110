"""Fiat price-list fetcher — turns the BTC price into a full rate table."""
from __future__ import annotations

import logging
import time
from decimal import Decimal, InvalidOperation
from typing import Any

from ..config import FiatSourceConfig
from ..errors import FieldUnparseableError, SourceUnavailableError
from ..http import fetch_json
from ..models import ExchangeRate, RateTable, make_table

logger = logging.getLogger(__name__)

TIMESTAMP_KEY = "timestamp"


def _parse_field(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"not numeric: {value!r}")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"not numeric: {value!r}") from e
    if not number.is_finite():
        raise ValueError(f"not finite: {value!r}")
    return number


def extract_rate(
    currency_code: str,
    quote: dict[str, Any],
    fields: tuple[str, ...],
    btc_price: Decimal,
    source: str,
) -> ExchangeRate:
    """Build one currency's rate from the first usable field in priority order.

    Raises FieldUnparseableError if no field yields a positive amount.
    """
    for field_name in fields:
        if field_name not in quote or quote[field_name] is None:
            continue
        try:
            btc_rate = _parse_field(quote[field_name])
        except ValueError as e:
            logger.warning("Problem parsing %s field %s: %s", currency_code, field_name, e)
            continue

        rate = ExchangeRate.from_fiat(currency_code, btc_rate * btc_price, source)
        if rate.fiat_amount <= 0:
            raise FieldUnparseableError(
                currency_code, f"non-positive rate from field {field_name}"
            )
        return rate

    raise FieldUnparseableError(currency_code, "no usable field")


def parse_price_list(
    data: Any, fields: tuple[str, ...], btc_price: Decimal, source: str
) -> RateTable:
    """Convert a price-list document into a rate table, skipping bad currencies."""
    if not isinstance(data, dict):
        raise SourceUnavailableError(f"{source}: expected an object keyed by currency")

    rates: list[ExchangeRate] = []
    for currency_code, quote in data.items():
        if currency_code == TIMESTAMP_KEY:
            continue
        if not isinstance(quote, dict):
            logger.debug("Skipping %s from %s: not an object", currency_code, source)
            continue
        try:
            rates.append(extract_rate(currency_code, quote, fields, btc_price, source))
        except FieldUnparseableError as e:
            logger.warning("Skipping rate from %s: %s", source, e)

    return make_table(rates)


class FiatRateFetcher:
    """Fetch fiat prices of BTC from a primary source, falling back to a second one."""

    def __init__(
        self,
        primary: FiatSourceConfig,
        fallback: FiatSourceConfig,
        timeout: float,
        user_agent: str = "",
    ) -> None:
        self.primary = primary
        self.fallback = fallback
        self.timeout = timeout
        self.user_agent = user_agent

    async def _request(self, source: FiatSourceConfig, btc_price: Decimal) -> RateTable:
        start = time.monotonic()
        data, length = await fetch_json(
            source.url, timeout=self.timeout, user_agent=self.user_agent
        )
        table = parse_price_list(data, source.fields, btc_price, source.source)
        logger.info(
            "Fetched %d exchange rates from %s, %d chars, took %d ms",
            len(table),
            source.url,
            length,
            (time.monotonic() - start) * 1000,
        )
        return table

    async def fetch(self, btc_price: Decimal) -> RateTable:
        """Return a rate table priced at ``btc_price`` BTC per coin.

        Raises SourceUnavailableError when both sources fail. An empty table
        from a source that answered is returned as is.
        """
        try:
            return await self._request(self.primary, btc_price)
        except SourceUnavailableError as e:
            logger.warning(
                "Primary fiat source %s failed, trying %s: %s",
                self.primary.source,
                self.fallback.source,
                e,
            )

        try:
            return await self._request(self.fallback, btc_price)
        except SourceUnavailableError as e:
            logger.warning("Fallback fiat source %s failed: %s", self.fallback.source, e)
            raise
