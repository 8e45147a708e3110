"""YAML-file backed config store."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from ..models import ExchangeRate

logger = logging.getLogger(__name__)

_CACHED_RATE_KEY = "cached_exchange_rate"
_CURRENCY_CODE_KEY = "exchange_currency_code"


class YamlConfigStore:
    """Persist the cached rate and currency preference in a small YAML file.

    A missing or unreadable file behaves like an empty store.
    """

    def __init__(self, path: str | Path, default_currency_code: Optional[str] = None) -> None:
        self.path = Path(path)
        self.default_currency_code = default_currency_code

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not read config store %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        with open(tmp, "w") as f:
            yaml.safe_dump(data, f, sort_keys=True)
        tmp.replace(self.path)

    def get_cached_rate(self) -> Optional[ExchangeRate]:
        row = self._read().get(_CACHED_RATE_KEY)
        if not isinstance(row, dict):
            return None
        try:
            return ExchangeRate.from_row(row)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring malformed cached rate in %s: %s", self.path, e)
            return None

    def set_cached_rate(self, rate: ExchangeRate) -> None:
        data = self._read()
        data[_CACHED_RATE_KEY] = rate.to_row()
        self._write(data)

    def get_default_currency_code(self) -> Optional[str]:
        code = self._read().get(_CURRENCY_CODE_KEY)
        if isinstance(code, str) and code:
            return code.upper()
        return self.default_currency_code

    def set_default_currency_code(self, code: str) -> None:
        data = self._read()
        data[_CURRENCY_CODE_KEY] = code.upper()
        self._write(data)
