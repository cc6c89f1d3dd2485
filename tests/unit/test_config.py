"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

from pathlib import Path

import pytest

from healthfactor import config as config_module
from healthfactor.config import (
    AppConfig,
    EngineConfig,
    ThresholdsConfig,
    _interpolate_env,
    load_config,
)
from healthfactor.fixed_point import LEGACY_PRICE_SCALE, PRICE_SCALE_E8


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCALE", "100000")
        result = _interpolate_env({"engine": {"price_scale": "${SCALE}"}})
        assert result == {"engine": {"price_scale": "100000"}}

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
        assert cfg.engine.price_scale == PRICE_SCALE_E8
        assert cfg.thresholds.hf_warning == 1.5
        assert cfg.thresholds.hf_critical == 1.1
        assert cfg.recorder.sinks == ("log",)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_no_path_and_no_default_uses_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "none.yaml")
        assert load_config() == AppConfig()

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("")
        assert load_config(cfg_file) == AppConfig()

    def test_env_interpolation_in_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HF_PRICE_SCALE", str(LEGACY_PRICE_SCALE))
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text("engine:\n  price_scale: ${HF_PRICE_SCALE}\n")
        cfg = load_config(cfg_file)
        assert cfg.engine.price_scale == LEGACY_PRICE_SCALE


class TestValidation:
    def _write(self, tmp_path: Path, content: str) -> Path:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(content)
        return cfg_file

    def test_zero_price_scale_raises(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, "engine:\n  price_scale: 0\n")
        with pytest.raises(ValueError, match="price_scale"):
            load_config(path)

    def test_inverted_thresholds_raise(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path, "thresholds:\n  hf_warning: 1.1\n  hf_critical: 1.5\n"
        )
        with pytest.raises(ValueError, match="hf_critical"):
            load_config(path)

    def test_non_positive_threshold_raises(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path, "thresholds:\n  hf_warning: 1.1\n  hf_critical: 0\n"
        )
        with pytest.raises(ValueError, match="positive"):
            load_config(path)

    def test_unknown_sink_raises(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, "recorder:\n  sinks: [pager]\n")
        with pytest.raises(ValueError, match="Unknown recorder sink"):
            load_config(path)


class TestFrozenConfigs:
    def test_thresholds_immutable(self) -> None:
        t = ThresholdsConfig()
        with pytest.raises(AttributeError):
            t.hf_warning = 99.0  # type: ignore[misc]

    def test_engine_config_immutable(self) -> None:
        e = EngineConfig()
        with pytest.raises(AttributeError):
            e.price_scale = 1  # type: ignore[misc]
