"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ORACLE_SHAPES = ("trades", "average")

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RefreshConfig:
    interval_minutes: int = 10
    http_timeout_seconds: float = 15.0
    user_agent: str = "coin-rates"


@dataclass(frozen=True)
class OracleConfig:
    name: str = ""
    url: str = ""
    shape: str = "trades"
    path: tuple[str, ...] = ()
    quote_field: str = "total"
    base_field: str = "amount"
    average_field: str = "avg"
    success_field: str = ""
    success_value: str = ""


@dataclass(frozen=True)
class FiatSourceConfig:
    url: str = ""
    source: str = ""
    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class FiatConfig:
    primary: FiatSourceConfig = field(default_factory=FiatSourceConfig)
    fallback: FiatSourceConfig = field(default_factory=FiatSourceConfig)


@dataclass(frozen=True)
class CurrencyConfig:
    default_code: str = "USD"
    fallback_code: str = "USD"


@dataclass(frozen=True)
class CacheConfig:
    path: str = "rates_cache.yaml"


@dataclass(frozen=True)
class AppConfig:
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    oracles: tuple[OracleConfig, ...] = ()
    fiat: FiatConfig = field(default_factory=FiatConfig)
    currency: CurrencyConfig = field(default_factory=CurrencyConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_refresh(raw: dict[str, Any]) -> RefreshConfig:
    return RefreshConfig(
        interval_minutes=int(raw.get("interval_minutes", 10)),
        http_timeout_seconds=float(raw.get("http_timeout_seconds", 15.0)),
        user_agent=str(raw.get("user_agent", RefreshConfig.user_agent)),
    )


def _build_oracles(raw: list[dict[str, Any]]) -> tuple[OracleConfig, ...]:
    oracles: list[OracleConfig] = []
    for o in raw:
        oracles.append(
            OracleConfig(
                name=o.get("name", ""),
                url=o.get("url", ""),
                shape=o.get("shape", "trades"),
                path=tuple(str(p) for p in o.get("path", [])),
                quote_field=o.get("quote_field", "total"),
                base_field=o.get("base_field", "amount"),
                average_field=o.get("average_field", "avg"),
                success_field=o.get("success_field", ""),
                success_value=str(o.get("success_value", "")),
            )
        )
    return tuple(oracles)


def _build_fiat_source(raw: dict[str, Any]) -> FiatSourceConfig:
    return FiatSourceConfig(
        url=raw.get("url", ""),
        source=raw.get("source", ""),
        fields=tuple(str(f) for f in raw.get("fields", [])),
    )


def _build_fiat(raw: dict[str, Any]) -> FiatConfig:
    return FiatConfig(
        primary=_build_fiat_source(raw.get("primary", {})),
        fallback=_build_fiat_source(raw.get("fallback", {})),
    )


def _build_currency(raw: dict[str, Any]) -> CurrencyConfig:
    return CurrencyConfig(
        default_code=str(raw.get("default_code", "USD")).upper(),
        fallback_code=str(raw.get("fallback_code", "USD")).upper(),
    )


def _build_cache(raw: dict[str, Any]) -> CacheConfig:
    return CacheConfig(path=str(raw.get("path", CacheConfig.path)))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        refresh=_build_refresh(raw.get("refresh", {})),
        oracles=_build_oracles(raw.get("oracles", [])),
        fiat=_build_fiat(raw.get("fiat", {})),
        currency=_build_currency(raw.get("currency", {})),
        cache=_build_cache(raw.get("cache", {})),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if cfg.refresh.interval_minutes <= 0:
        raise ValueError("Refresh interval must be positive")
    if cfg.refresh.http_timeout_seconds <= 0:
        raise ValueError("HTTP timeout must be positive")

    if not cfg.oracles:
        raise ValueError("At least one oracle must be configured")

    for oracle in cfg.oracles:
        if not oracle.url:
            raise ValueError(f"Oracle '{oracle.name}' has no url")
        if oracle.shape not in ORACLE_SHAPES:
            raise ValueError(
                f"Oracle '{oracle.name}' has unknown shape '{oracle.shape}'"
            )

    for label, source in (("primary", cfg.fiat.primary), ("fallback", cfg.fiat.fallback)):
        if not source.url:
            raise ValueError(f"Fiat {label} source has no url")
        if not source.fields:
            raise ValueError(f"Fiat {label} source has no fields")
