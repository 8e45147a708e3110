"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

from pathlib import Path

import pytest

from coin_rates.config import (
    AppConfig,
    FiatSourceConfig,
    OracleConfig,
    RefreshConfig,
    _interpolate_env,
    load_config,
)

_FIAT_YAML = """\
fiat:
  primary:
    url: "https://fiat1.test.com"
    source: one
    fields: [last]
  fallback:
    url: "https://fiat2.test.com"
    source: two
    fields: [15m]
"""


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TOK", "secret")
        result = _interpolate_env({"key": "${TOK}", "plain": "text"})
        assert result == {"key": "secret", "plain": "text"}

    def test_nested_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("A", "x")
        assert _interpolate_env(["${A}", "y"]) == ["x", "y"]

    def test_non_string_passthrough(self) -> None:
        assert _interpolate_env(42) == 42
        assert _interpolate_env(True) is True


class TestLoadConfig:
    def test_loads_valid_yaml(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        assert isinstance(cfg, AppConfig)
        assert cfg.refresh.interval_minutes == 5
        assert cfg.refresh.http_timeout_seconds == 7.5
        assert [o.name for o in cfg.oracles] == ["poloniex", "cryptsy", "bter"]
        assert cfg.fiat.primary.fields == ("24h_avg", "last")
        assert cfg.fiat.fallback.source == "fallback.example.com"

    def test_oracle_descriptors(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        poloniex, cryptsy, bter = cfg.oracles
        assert poloniex.path == ()
        assert poloniex.base_field == "amount"
        assert cryptsy.path == ("return", "markets", "DOGE", "recenttrades")
        assert cryptsy.base_field == "quantity"
        assert bter.shape == "average"
        assert bter.success_value == "true"

    def test_currency_codes_upper_cased(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        assert cfg.currency.default_code == "EUR"
        assert cfg.currency.fallback_code == "USD"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_defaults_applied(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(
            "oracles:\n  - name: o\n    url: https://o.test.com\n" + _FIAT_YAML
        )
        cfg = load_config(cfg_file)
        assert cfg.refresh.interval_minutes == 10
        assert cfg.refresh.http_timeout_seconds == 15.0
        assert cfg.oracles[0].shape == "trades"
        assert cfg.oracles[0].quote_field == "total"
        assert cfg.cache.path == "rates_cache.yaml"

    def test_env_interpolation_in_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TEST_VERSION", "1.2.3")
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(
            'refresh:\n  user_agent: "coin-rates/${TEST_VERSION}"\n'
            "oracles:\n  - name: o\n    url: https://o.test.com\n" + _FIAT_YAML
        )
        cfg = load_config(cfg_file)
        assert cfg.refresh.user_agent == "coin-rates/1.2.3"


class TestValidation:
    def _write(self, tmp_path: Path, content: str) -> Path:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(content)
        return cfg_file

    def test_no_oracles_raises(self, tmp_path: Path) -> None:
        cfg_file = self._write(tmp_path, "oracles: []\n" + _FIAT_YAML)
        with pytest.raises(ValueError, match="At least one oracle"):
            load_config(cfg_file)

    def test_unknown_shape_raises(self, tmp_path: Path) -> None:
        cfg_file = self._write(
            tmp_path,
            "oracles:\n  - name: o\n    url: https://o.test.com\n    shape: candles\n"
            + _FIAT_YAML,
        )
        with pytest.raises(ValueError, match="unknown shape"):
            load_config(cfg_file)

    def test_oracle_without_url_raises(self, tmp_path: Path) -> None:
        cfg_file = self._write(tmp_path, "oracles:\n  - name: o\n" + _FIAT_YAML)
        with pytest.raises(ValueError, match="has no url"):
            load_config(cfg_file)

    def test_missing_fallback_raises(self, tmp_path: Path) -> None:
        cfg_file = self._write(
            tmp_path,
            "oracles:\n  - name: o\n    url: https://o.test.com\n"
            "fiat:\n  primary:\n    url: https://f.test.com\n    fields: [last]\n",
        )
        with pytest.raises(ValueError, match="Fiat fallback source has no url"):
            load_config(cfg_file)

    def test_non_positive_interval_raises(self, tmp_path: Path) -> None:
        cfg_file = self._write(
            tmp_path,
            "refresh:\n  interval_minutes: 0\n"
            "oracles:\n  - name: o\n    url: https://o.test.com\n" + _FIAT_YAML,
        )
        with pytest.raises(ValueError, match="interval must be positive"):
            load_config(cfg_file)


class TestFrozenConfigs:
    def test_refresh_config_immutable(self) -> None:
        r = RefreshConfig()
        with pytest.raises(AttributeError):
            r.interval_minutes = 1  # type: ignore[misc]

    def test_oracle_config_immutable(self) -> None:
        o = OracleConfig(name="x", url="https://x")
        with pytest.raises(AttributeError):
            o.url = "https://y"  # type: ignore[misc]

    def test_fiat_source_immutable(self) -> None:
        f = FiatSourceConfig(url="https://x", fields=("last",))
        with pytest.raises(AttributeError):
            f.fields = ()  # type: ignore[misc]
