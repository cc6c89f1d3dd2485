"""Position file loading: YAML (or JSON) into ComputeArgs."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .models import CollateralInput, ComputeArgs, DebtInput

logger = logging.getLogger(__name__)

_COLLATERAL_FIELDS = ("amount", "decimals", "price_e8", "liq_threshold_bps")
_DEBT_FIELDS = ("amount", "decimals", "price_e8")


def _require(entry: dict[str, Any], fields: tuple[str, ...], where: str) -> None:
    missing = [name for name in fields if name not in entry]
    if missing:
        raise ValueError(f"{where} is missing field(s): {', '.join(missing)}")


def parse_collateral(entry: dict[str, Any], where: str = "collateral") -> CollateralInput:
    _require(entry, _COLLATERAL_FIELDS, where)
    return CollateralInput(
        amount=int(entry["amount"]),
        decimals=int(entry["decimals"]),
        price_e8=int(entry["price_e8"]),
        liq_threshold_bps=int(entry["liq_threshold_bps"]),
        borrow_factor_bps=int(entry.get("borrow_factor_bps", 0)),
    )


def parse_debt(entry: dict[str, Any], where: str = "debt") -> DebtInput:
    _require(entry, _DEBT_FIELDS, where)
    return DebtInput(
        amount=int(entry["amount"]),
        decimals=int(entry["decimals"]),
        price_e8=int(entry["price_e8"]),
    )


def parse_compute_args(raw: dict[str, Any]) -> ComputeArgs:
    """Build ComputeArgs from a mapping with ``collaterals`` and ``debts`` lists."""
    if not isinstance(raw, dict):
        raise ValueError("Position data must be a mapping")

    collaterals = tuple(
        parse_collateral(entry, f"collaterals[{i}]")
        for i, entry in enumerate(raw.get("collaterals") or [])
    )
    debts = tuple(
        parse_debt(entry, f"debts[{i}]")
        for i, entry in enumerate(raw.get("debts") or [])
    )
    return ComputeArgs(collaterals=collaterals, debts=debts)


def load_raw(path: str | Path) -> dict[str, Any]:
    """Read a YAML or JSON document (JSON is valid YAML)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ValueError(f"Input file is empty: {path}")
    return raw


def load_compute_args(path: str | Path) -> ComputeArgs:
    args = parse_compute_args(load_raw(path))
    logger.info(
        "Loaded %d collateral(s) and %d debt(s) from %s",
        len(args.collaterals),
        len(args.debts),
        path,
    )
    return args
