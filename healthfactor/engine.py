"""Health factor engine: folds positions into a single Q64.64 ratio.

    HF = Σ(collateral_i · price_i · liq_threshold_i / borrow_factor_i)
         / Σ(debt_j · price_j)

Collaterals are valued before debts, each list in input order, so the first
offending element is always the one reported.
"""
from __future__ import annotations

import logging

from .fixed_point import (
    PRICE_SCALE_E8,
    bps_to_q64,
    checked_add,
    price_e8_to_q64,
    q64_div,
    q64_mul,
    scale_to_q64,
)
from .models import (
    CollateralInput,
    ComputeArgs,
    DebtInput,
    HealthFactor,
    ValuationTotals,
)
from .validation import validate_collateral, validate_debt

logger = logging.getLogger(__name__)


def collateral_value_q64(
    collateral: CollateralInput,
    price_scale: int = PRICE_SCALE_E8,
    where: str = "",
) -> int:
    """Risk-weighted value of one collateral position."""
    validate_collateral(collateral, where)

    amount_q64 = scale_to_q64(collateral.amount, collateral.decimals)
    price_q64 = price_e8_to_q64(collateral.price_e8, price_scale)
    threshold_q64 = bps_to_q64(collateral.liq_threshold_bps)

    value = q64_mul(amount_q64, price_q64)
    value = q64_mul(value, threshold_q64)

    # Higher borrow factor means less effective collateral.
    if collateral.borrow_factor_bps > 0:
        value = q64_div(value, bps_to_q64(collateral.borrow_factor_bps))
    return value


def debt_value_q64(
    debt: DebtInput,
    price_scale: int = PRICE_SCALE_E8,
    where: str = "",
) -> int:
    """Value of one debt position."""
    validate_debt(debt, where)

    amount_q64 = scale_to_q64(debt.amount, debt.decimals)
    price_q64 = price_e8_to_q64(debt.price_e8, price_scale)
    return q64_mul(amount_q64, price_q64)


def aggregate(args: ComputeArgs, price_scale: int = PRICE_SCALE_E8) -> ValuationTotals:
    """Sum collateral and debt values with overflow-checked addition."""
    total_collateral = 0
    for i, collateral in enumerate(args.collaterals):
        value = collateral_value_q64(collateral, price_scale, where=f"collateral[{i}]")
        total_collateral = checked_add(total_collateral, value)

    total_debt = 0
    for i, debt in enumerate(args.debts):
        value = debt_value_q64(debt, price_scale, where=f"debt[{i}]")
        total_debt = checked_add(total_debt, value)

    logger.debug(
        "Aggregated %d collateral(s), %d debt(s): collateral_q64=%d debt_q64=%d",
        len(args.collaterals),
        len(args.debts),
        total_collateral,
        total_debt,
    )
    return ValuationTotals(collateral_q64=total_collateral, debt_q64=total_debt)


def resolve(totals: ValuationTotals) -> HealthFactor:
    """Divide totals into the final ratio; no debt means unbounded health."""
    if totals.debt_q64 == 0:
        return HealthFactor.infinite()
    return HealthFactor.finite(q64_div(totals.collateral_q64, totals.debt_q64))


def compute_hf(args: ComputeArgs, price_scale: int = PRICE_SCALE_E8) -> HealthFactor:
    return resolve(aggregate(args, price_scale))


def compute_hf_q64(args: ComputeArgs, price_scale: int = PRICE_SCALE_E8) -> int:
    """Raw Q64.64 health factor, ``U128_MAX`` when there is no debt."""
    return compute_hf(args, price_scale).to_q64()
