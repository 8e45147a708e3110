"""Config store protocol — persisted preferences and the cached rate."""
from typing import Optional, Protocol

from ..models import ExchangeRate


class ConfigStore(Protocol):
    """Abstract interface for the external configuration store."""

    def get_cached_rate(self) -> Optional[ExchangeRate]: ...

    def set_cached_rate(self, rate: ExchangeRate) -> None: ...

    def get_default_currency_code(self) -> Optional[str]: ...
