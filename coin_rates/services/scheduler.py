"""Throttled, single-flight refresh of the rate table."""
from __future__ import annotations

import asyncio
import logging
import time
from decimal import Decimal
from typing import Callable, Optional, Protocol

from ..errors import SourceUnavailableError
from ..interfaces import ConfigStore, PriceOracle
from ..models import RateSnapshot, RateTable
from ..storage import RateCache
from .resolver import QueryResolver

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 10 * 60


class FiatSource(Protocol):
    async def fetch(self, btc_price: Decimal) -> RateTable: ...


class RefreshScheduler:
    """Own the current rate snapshot and refresh it at most once per interval.

    The snapshot is immutable and swapped in a single assignment. Callers that
    find it stale while a refresh is running await that refresh instead of
    starting their own.
    """

    def __init__(
        self,
        oracle: PriceOracle,
        fiat: FiatSource,
        cache: RateCache,
        resolver: QueryResolver,
        config_store: ConfigStore,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        initial: Optional[RateSnapshot] = None,
    ) -> None:
        self._oracle = oracle
        self._fiat = fiat
        self._cache = cache
        self._resolver = resolver
        self._config_store = config_store
        self._interval = interval_seconds
        self._clock = clock
        self._snapshot = initial if initial is not None else RateSnapshot()
        self._inflight: Optional[asyncio.Future[None]] = None

    @property
    def snapshot(self) -> RateSnapshot:
        return self._snapshot

    def is_stale(self) -> bool:
        last = self._snapshot.last_updated
        return last is None or self._clock() - last >= self._interval

    async def refresh(self, offline: bool = False) -> RateSnapshot:
        """Refresh if due, then return the current snapshot.

        Offline callers and callers inside the throttle window get the
        current snapshot without any network access.
        """
        if offline or not self.is_stale():
            return self._snapshot

        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._refresh_once())
        await asyncio.shield(self._inflight)
        return self._snapshot

    async def _refresh_once(self) -> None:
        try:
            btc_price = await self._oracle.fetch_btc_price()
            table = await self._fiat.fetch(btc_price)
        except SourceUnavailableError as e:
            logger.warning("Exchange rate refresh failed, keeping previous rates: %s", e)
            return
        except Exception:
            logger.exception("Unexpected error refreshing exchange rates")
            return

        if not table:
            logger.warning("Exchange rate refresh returned no rates, keeping previous rates")
            return

        self._snapshot = RateSnapshot(table=table, last_updated=self._clock())
        logger.info("Exchange rates refreshed: %d currencies", len(table))

        try:
            await asyncio.to_thread(self._persist_best, self._snapshot)
        except Exception:
            logger.exception("Could not persist the cached exchange rate")

    def _persist_best(self, snapshot: RateSnapshot) -> None:
        to_cache = self._resolver.best_for(
            snapshot, self._config_store.get_default_currency_code()
        )
        if to_cache is not None:
            self._cache.store(to_cache)
