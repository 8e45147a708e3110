"""Persistence modules."""
from .file_store import YamlConfigStore
from .rate_cache import RateCache

__all__ = ["RateCache", "YamlConfigStore"]
