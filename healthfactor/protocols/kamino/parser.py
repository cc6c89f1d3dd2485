"""Pure parsing functions for Kamino obligation snapshots — no I/O.

A snapshot is the already-fetched state of one obligation and the reserves
it touches::

    obligation:
      deposits: {<reserve>: <raw amount>}
      borrows:  {<reserve>: <raw amount>}
    reserves:
      <reserve>:
        liquidity: {marketPriceSf: <2^60-scaled price>, mintDecimals: 9}
        config: {loanToValuePct: 75}
"""
from __future__ import annotations

import logging
from typing import Any

from ...fixed_point import price_sf_to_e8
from ...models import CollateralInput, ComputeArgs, DebtInput

logger = logging.getLogger(__name__)


def parse_amount(raw: Any) -> int | None:
    """Parse a raw token amount, truncating any fractional part.

    Examples:
        "1000000000" → 1000000000
        "50000000.75" → 50000000
        "0" → None
    """
    text = str(raw).strip()
    if "." in text:
        text = text.split(".")[0]
    try:
        amount = int(text)
    except ValueError:
        logger.error("Invalid amount format: %r", raw)
        return None
    if amount <= 0:
        return None
    return amount


def ltv_pct_to_bps(pct: int) -> int:
    """Convert a percentage to bps; values above 100 are already bps."""
    return pct * 100 if pct <= 100 else pct


def parse_reserve_asset(
    reserve: dict[str, Any],
    amount: Any,
    is_collateral: bool = False,
) -> CollateralInput | DebtInput | None:
    """Build an engine input from a reserve snapshot and an obligation amount.

    Collateral is weighted by the reserve's ``loanToValuePct`` and carries
    no borrow factor.
    """
    raw_amount = parse_amount(amount)
    if raw_amount is None:
        return None

    liquidity = reserve.get("liquidity", {})
    price_e8 = price_sf_to_e8(int(liquidity.get("marketPriceSf", 0)))
    decimals = int(liquidity.get("mintDecimals", 0))

    if is_collateral:
        ltv = int(reserve.get("config", {}).get("loanToValuePct", 0))
        return CollateralInput(
            amount=raw_amount,
            decimals=decimals,
            price_e8=price_e8,
            liq_threshold_bps=ltv_pct_to_bps(ltv),
            borrow_factor_bps=0,
        )
    return DebtInput(amount=raw_amount, decimals=decimals, price_e8=price_e8)


def build_compute_args(
    obligation: dict[str, Any],
    reserves: dict[str, dict[str, Any]],
) -> ComputeArgs:
    """Walk deposits then borrows, skipping reserves absent from the snapshot."""
    collaterals: list[CollateralInput] = []
    for reserve_addr, amount in (obligation.get("deposits") or {}).items():
        reserve = reserves.get(reserve_addr)
        if reserve is None:
            logger.warning("Deposit reserve %s not in snapshot, skipping", reserve_addr)
            continue
        asset = parse_reserve_asset(reserve, amount, is_collateral=True)
        if asset is not None:
            collaterals.append(asset)

    debts: list[DebtInput] = []
    for reserve_addr, amount in (obligation.get("borrows") or {}).items():
        reserve = reserves.get(reserve_addr)
        if reserve is None:
            logger.warning("Borrow reserve %s not in snapshot, skipping", reserve_addr)
            continue
        asset = parse_reserve_asset(reserve, amount)
        if asset is not None:
            debts.append(asset)

    return ComputeArgs(collaterals=tuple(collaterals), debts=tuple(debts))
