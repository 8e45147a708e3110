"""Read-only exchange-rates query surface."""
from __future__ import annotations

from typing import Any, Callable, NoReturn, Optional

from ..config import AppConfig
from ..errors import UnsupportedOperationError
from ..fiat import FiatRateFetcher
from ..interfaces import ConfigStore, CurrencySymbols
from ..models import ExchangeRate
from ..oracles import OracleClient
from ..storage import RateCache, YamlConfigStore
from ..symbols import StaticCurrencySymbols
from .resolver import QueryResolver, locale_currency_code
from .scheduler import RefreshScheduler


class ExchangeRatesProvider:
    """Answer rate queries, refreshing first unless ``offline`` is set.

    Queries never raise: with no network and no cache they return empty
    results. Writes are rejected.
    """

    def __init__(self, scheduler: RefreshScheduler, resolver: QueryResolver) -> None:
        self._scheduler = scheduler
        self._resolver = resolver

    @classmethod
    def create(
        cls,
        config: AppConfig,
        config_store: Optional[ConfigStore] = None,
        symbols: Optional[CurrencySymbols] = None,
        default_code: Callable[[], Optional[str]] = locale_currency_code,
    ) -> ExchangeRatesProvider:
        """Wire the provider from configuration and seed it from the cache."""
        if config_store is None:
            config_store = YamlConfigStore(
                config.cache.path, default_currency_code=config.currency.default_code
            )
        timeout = config.refresh.http_timeout_seconds
        user_agent = config.refresh.user_agent

        resolver = QueryResolver(
            symbols or StaticCurrencySymbols(),
            fallback_code=config.currency.fallback_code,
            default_code=default_code,
        )
        cache = RateCache(config_store)
        scheduler = RefreshScheduler(
            oracle=OracleClient(config.oracles, timeout * 2, user_agent),
            fiat=FiatRateFetcher(
                config.fiat.primary, config.fiat.fallback, timeout, user_agent
            ),
            cache=cache,
            resolver=resolver,
            config_store=config_store,
            interval_seconds=config.refresh.interval_minutes * 60,
            initial=cache.initial_snapshot(),
        )
        return cls(scheduler, resolver)

    @property
    def scheduler(self) -> RefreshScheduler:
        return self._scheduler

    async def list_rates(self, offline: bool = False) -> list[ExchangeRate]:
        snapshot = await self._scheduler.refresh(offline)
        return self._resolver.list_rates(snapshot)

    async def search(self, text: str, offline: bool = False) -> list[ExchangeRate]:
        snapshot = await self._scheduler.refresh(offline)
        return self._resolver.search(snapshot, text)

    async def best_for(
        self, currency_code: Optional[str], offline: bool = False
    ) -> Optional[ExchangeRate]:
        snapshot = await self._scheduler.refresh(offline)
        return self._resolver.best_for(snapshot, currency_code)

    # ------------------------------------------------------------------
    # Writes are not supported
    # ------------------------------------------------------------------

    def insert(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise UnsupportedOperationError("exchange rates are read-only")

    def update(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise UnsupportedOperationError("exchange rates are read-only")

    def delete(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise UnsupportedOperationError("exchange rates are read-only")

    def get_type(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise UnsupportedOperationError("exchange rates have no content type")
