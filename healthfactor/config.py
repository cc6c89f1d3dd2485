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

from .fixed_point import PRICE_SCALE_E8

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineConfig:
    price_scale: int = PRICE_SCALE_E8


@dataclass(frozen=True)
class ThresholdsConfig:
    hf_warning: float = 1.25
    hf_critical: float = 1.05


@dataclass(frozen=True)
class RecorderConfig:
    sinks: tuple[str, ...] = ("log",)


@dataclass(frozen=True)
class AppConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    thresholds: ThresholdsConfig = field(default_factory=ThresholdsConfig)
    recorder: RecorderConfig = field(default_factory=RecorderConfig)


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


def _build_engine(raw: dict[str, Any]) -> EngineConfig:
    return EngineConfig(price_scale=int(raw.get("price_scale", PRICE_SCALE_E8)))


def _build_thresholds(raw: dict[str, Any]) -> ThresholdsConfig:
    return ThresholdsConfig(
        hf_warning=float(raw.get("hf_warning", 1.25)),
        hf_critical=float(raw.get("hf_critical", 1.05)),
    )


def _build_recorder(raw: dict[str, Any]) -> RecorderConfig:
    return RecorderConfig(sinks=tuple(raw.get("sinks", ["log"])))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root; when that file is absent the built-in defaults
            are used.
    """
    load_dotenv()

    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            logger.debug("No %s found, using defaults", DEFAULT_CONFIG_PATH)
            return AppConfig()
        config_path = DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        engine=_build_engine(raw.get("engine") or {}),
        thresholds=_build_thresholds(raw.get("thresholds") or {}),
        recorder=_build_recorder(raw.get("recorder") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    if cfg.engine.price_scale <= 0:
        raise ValueError(
            f"engine.price_scale must be positive, got {cfg.engine.price_scale}"
        )

    thresholds = cfg.thresholds
    if thresholds.hf_critical <= 0 or thresholds.hf_warning <= 0:
        raise ValueError("Health factor thresholds must be positive")
    if thresholds.hf_critical > thresholds.hf_warning:
        raise ValueError(
            f"hf_critical ({thresholds.hf_critical}) must not exceed "
            f"hf_warning ({thresholds.hf_warning})"
        )

    for sink in cfg.recorder.sinks:
        if sink not in ("log",):
            raise ValueError(f"Unknown recorder sink '{sink}'")
