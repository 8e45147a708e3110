"""Protocol interfaces for the exchange-rates provider."""
from .config_store import ConfigStore
from .currency_symbols import CurrencySymbols
from .price_oracle import PriceOracle

__all__ = ["ConfigStore", "CurrencySymbols", "PriceOracle"]
