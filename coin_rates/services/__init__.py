"""Service modules"""
from .resolver import QueryResolver
from .scheduler import RefreshScheduler
from .provider import ExchangeRatesProvider

__all__ = ["QueryResolver", "RefreshScheduler", "ExchangeRatesProvider"]
