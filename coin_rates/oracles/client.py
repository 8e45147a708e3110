"""BTC price oracle client with ordered fallback across sources."""
from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Sequence

from ..config import OracleConfig
from ..errors import DegenerateAggregateError, SourceUnavailableError
from ..http import fetch_json

logger = logging.getLogger(__name__)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"not a number: {value!r}")
    try:
        number = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"not a number: {value!r}") from e
    if not number.is_finite():
        raise ValueError(f"not finite: {value!r}")
    return number


def _walk(data: Any, path: Sequence[str]) -> Any:
    for key in path:
        if not isinstance(data, dict) or key not in data:
            raise KeyError(f"missing '{key}' in response")
        data = data[key]
    return data


def volume_weighted_price(
    trades: Sequence[dict[str, Any]], quote_field: str, base_field: str
) -> Decimal:
    """Return ``sum(quote) / sum(base)`` over a list of trade records."""
    quote_total = Decimal(0)
    base_total = Decimal(0)
    for trade in trades:
        quote_total += _to_decimal(trade[quote_field])
        base_total += _to_decimal(trade[base_field])

    if base_total == 0:
        raise DegenerateAggregateError("zero base volume across trades")
    return quote_total / base_total


def parse_oracle_price(oracle: OracleConfig, data: Any) -> Decimal:
    """Extract the BTC price from one oracle response.

    Raises DegenerateAggregateError for unusable aggregates and
    KeyError/TypeError/ValueError for responses of the wrong shape.
    """
    payload = _walk(data, oracle.path)

    if oracle.shape == "trades":
        if not isinstance(payload, list):
            raise TypeError("expected a list of trades")
        price = volume_weighted_price(payload, oracle.quote_field, oracle.base_field)
    else:
        if not isinstance(payload, dict):
            raise TypeError("expected an object")
        if oracle.success_field and (
            str(payload.get(oracle.success_field)).lower() != oracle.success_value.lower()
        ):
            raise DegenerateAggregateError(
                f"{oracle.success_field}={payload.get(oracle.success_field)!r}"
            )
        price = _to_decimal(payload[oracle.average_field])

    if price <= 0:
        raise DegenerateAggregateError(f"non-positive price {price}")
    return price


class OracleClient:
    """Query an ordered list of oracles for the coin's BTC price; first success wins."""

    def __init__(
        self,
        oracles: Sequence[OracleConfig],
        timeout: float,
        user_agent: str = "",
    ) -> None:
        self.oracles = tuple(oracles)
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch_btc_price(self) -> Decimal:
        """Return the first accepted price, or raise SourceUnavailableError."""
        for oracle in self.oracles:
            try:
                data, _ = await fetch_json(
                    oracle.url, timeout=self.timeout, user_agent=self.user_agent
                )
                price = parse_oracle_price(oracle, data)
            except SourceUnavailableError as e:
                logger.warning("Oracle %s unavailable: %s", oracle.name, e)
                continue
            except (KeyError, TypeError, ValueError, ArithmeticError) as e:
                logger.warning("Oracle %s returned unusable data: %s", oracle.name, e)
                continue

            logger.info("BTC price from oracle %s: %s", oracle.name, price)
            return price

        raise SourceUnavailableError("All price oracles failed")
