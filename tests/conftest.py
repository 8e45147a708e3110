"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from decimal import Decimal
from pathlib import Path
from typing import Optional

import pytest

from coin_rates.config import (
    AppConfig,
    CacheConfig,
    CurrencyConfig,
    FiatConfig,
    FiatSourceConfig,
    OracleConfig,
    RefreshConfig,
)
from coin_rates.models import ExchangeRate, RateSnapshot, make_table
from coin_rates.services import QueryResolver
from coin_rates.symbols import StaticCurrencySymbols


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def trades_oracle() -> OracleConfig:
    return OracleConfig(
        name="poloniex",
        url="https://oracle1.example.com/trades",
        shape="trades",
        quote_field="total",
        base_field="amount",
    )


@pytest.fixture()
def average_oracle() -> OracleConfig:
    return OracleConfig(
        name="bter",
        url="https://oracle2.example.com/ticker",
        shape="average",
        average_field="avg",
        success_field="result",
        success_value="true",
    )


@pytest.fixture()
def primary_source() -> FiatSourceConfig:
    return FiatSourceConfig(
        url="https://fiat1.example.com/ticker",
        source="primary.example.com",
        fields=("24h_avg", "last"),
    )


@pytest.fixture()
def fallback_source() -> FiatSourceConfig:
    return FiatSourceConfig(
        url="https://fiat2.example.com/ticker",
        source="fallback.example.com",
        fields=("15m",),
    )


@pytest.fixture()
def sample_app_config(
    tmp_path: Path,
    trades_oracle: OracleConfig,
    average_oracle: OracleConfig,
    primary_source: FiatSourceConfig,
    fallback_source: FiatSourceConfig,
) -> AppConfig:
    return AppConfig(
        refresh=RefreshConfig(interval_minutes=10, http_timeout_seconds=5, user_agent="test-agent"),
        oracles=(trades_oracle, average_oracle),
        fiat=FiatConfig(primary=primary_source, fallback=fallback_source),
        currency=CurrencyConfig(default_code="EUR", fallback_code="USD"),
        cache=CacheConfig(path=str(tmp_path / "cache.yaml")),
    )


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------


class MemoryConfigStore:
    """In-memory ConfigStore."""

    def __init__(
        self,
        cached: Optional[ExchangeRate] = None,
        default_code: Optional[str] = None,
    ) -> None:
        self.cached = cached
        self.default_code = default_code
        self.writes: list[ExchangeRate] = []

    def get_cached_rate(self) -> Optional[ExchangeRate]:
        return self.cached

    def set_cached_rate(self, rate: ExchangeRate) -> None:
        self.cached = rate
        self.writes.append(rate)

    def get_default_currency_code(self) -> Optional[str]:
        return self.default_code


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def config_store() -> MemoryConfigStore:
    return MemoryConfigStore()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def resolver() -> QueryResolver:
    return QueryResolver(StaticCurrencySymbols(), fallback_code="USD", default_code=lambda: None)


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


def make_rate(code: str, fiat: str, source: str = "test") -> ExchangeRate:
    return ExchangeRate.from_fiat(code, Decimal(fiat), source)


@pytest.fixture()
def sample_snapshot() -> RateSnapshot:
    return RateSnapshot(
        table=make_table(
            [
                make_rate("USD", "500"),
                make_rate("EUR", "450.5"),
                make_rate("GBP", "390.25"),
            ]
        ),
        last_updated=1000.0,
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    refresh:
      interval_minutes: 5
      http_timeout_seconds: 7.5
      user_agent: "coin-rates-test"
    oracles:
      - name: poloniex
        url: "https://oracle1.example.com/trades"
        shape: trades
      - name: cryptsy
        url: "https://oracle2.example.com/market"
        shape: trades
        path: [return, markets, DOGE, recenttrades]
        base_field: quantity
      - name: bter
        url: "https://oracle3.example.com/ticker"
        shape: average
        success_field: result
        success_value: "true"
    fiat:
      primary:
        url: "https://fiat1.example.com/ticker"
        source: primary.example.com
        fields: ["24h_avg", "last"]
      fallback:
        url: "https://fiat2.example.com/ticker"
        source: fallback.example.com
        fields: ["15m"]
    currency:
      default_code: eur
      fallback_code: USD
    cache:
      path: /tmp/coin-rates-cache.yaml
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
