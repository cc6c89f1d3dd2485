"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from healthfactor.config import AppConfig, EngineConfig, RecorderConfig, ThresholdsConfig
from healthfactor.fixed_point import PRICE_SCALE_E8
from healthfactor.models import CollateralInput, ComputeArgs, DebtInput

# Prices in the fixtures are expressed in the e8 convention.
ONE_DOLLAR_E8 = PRICE_SCALE_E8


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_thresholds() -> ThresholdsConfig:
    return ThresholdsConfig(hf_warning=1.25, hf_critical=1.05)


@pytest.fixture()
def sample_app_config(sample_thresholds: ThresholdsConfig) -> AppConfig:
    return AppConfig(
        engine=EngineConfig(price_scale=PRICE_SCALE_E8),
        thresholds=sample_thresholds,
        recorder=RecorderConfig(sinks=("log",)),
    )


# ---------------------------------------------------------------------------
# Position fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def usdc_collateral() -> CollateralInput:
    """0.001 of a $2 token at 80% threshold."""
    return CollateralInput(
        amount=1000,
        decimals=6,
        price_e8=2 * ONE_DOLLAR_E8,
        liq_threshold_bps=8000,
        borrow_factor_bps=0,
    )


@pytest.fixture()
def usdc_debt() -> DebtInput:
    """0.0005 of a $1 token."""
    return DebtInput(amount=500, decimals=6, price_e8=ONE_DOLLAR_E8)


@pytest.fixture()
def sample_args(usdc_collateral: CollateralInput, usdc_debt: DebtInput) -> ComputeArgs:
    return ComputeArgs(collaterals=(usdc_collateral,), debts=(usdc_debt,))


# ---------------------------------------------------------------------------
# File fixtures
# ---------------------------------------------------------------------------

SAMPLE_CONFIG_YAML = textwrap.dedent("""\
    engine:
      price_scale: 100000000
    thresholds:
      hf_warning: 1.5
      hf_critical: 1.1
    recorder:
      sinks: [log]
""")

SAMPLE_POSITIONS_YAML = textwrap.dedent("""\
    collaterals:
      - amount: 1000
        decimals: 6
        price_e8: 200000000
        liq_threshold_bps: 8000
        borrow_factor_bps: 0
    debts:
      - amount: 500
        decimals: 6
        price_e8: 100000000
""")

# 1 SOL (9 decimals) at $150 with 75% LTV against 50 USDC borrowed.
SAMPLE_KAMINO_YAML = textwrap.dedent("""\
    obligation:
      deposits:
        SOL_RESERVE: "1000000000"
      borrows:
        USDC_RESERVE: "50000000.421"
    reserves:
      SOL_RESERVE:
        liquidity:
          marketPriceSf: 172938225691027046400
          mintDecimals: 9
        config:
          loanToValuePct: 75
      USDC_RESERVE:
        liquidity:
          marketPriceSf: 1152921504606846976
          mintDecimals: 6
        config:
          loanToValuePct: 80
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_CONFIG_YAML)
    return cfg_file


@pytest.fixture()
def sample_positions_path(tmp_path: Path) -> Path:
    path = tmp_path / "positions.yaml"
    path.write_text(SAMPLE_POSITIONS_YAML)
    return path


@pytest.fixture()
def sample_kamino_path(tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.yaml"
    path.write_text(SAMPLE_KAMINO_YAML)
    return path
