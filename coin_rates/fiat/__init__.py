"""Fiat price-list modules."""
from .fetcher import FiatRateFetcher

__all__ = ["FiatRateFetcher"]
