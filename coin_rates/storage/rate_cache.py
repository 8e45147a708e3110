"""Single-entry rate cache used to seed the table on cold start."""
from __future__ import annotations

import logging
from typing import Optional

from ..interfaces import ConfigStore
from ..models import ExchangeRate, RateSnapshot, make_table

logger = logging.getLogger(__name__)


class RateCache:
    """Persist and restore one best-effort rate through a config store."""

    def __init__(self, store: ConfigStore) -> None:
        self._store = store

    def load(self) -> Optional[ExchangeRate]:
        rate = self._store.get_cached_rate()
        if rate is not None and rate.fiat_amount <= 0:
            logger.warning("Discarding cached rate with non-positive amount: %s", rate)
            return None
        return rate

    def initial_snapshot(self) -> RateSnapshot:
        """Snapshot holding the cached rate, if any, and no refresh timestamp."""
        rate = self.load()
        if rate is None:
            return RateSnapshot()
        logger.info("Seeded rate table from cache: %s %s", rate.currency_code, rate.fiat)
        return RateSnapshot(table=make_table([rate]))

    def store(self, rate: ExchangeRate) -> None:
        try:
            self._store.set_cached_rate(rate)
        except OSError as e:
            logger.warning("Could not persist cached rate %s: %s", rate.currency_code, e)
