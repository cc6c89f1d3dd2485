"""Per-asset input checks, run before any arithmetic."""
from __future__ import annotations

from .errors import (
    InvalidBorrowFactor,
    InvalidDecimals,
    InvalidLiqThreshold,
    InvalidPrice,
)
from .fixed_point import BPS_DENOMINATOR, MAX_DECIMALS
from .models import CollateralInput, DebtInput

MIN_BORROW_FACTOR_BPS = 1_000
MAX_BORROW_FACTOR_BPS = 10_000


def validate_price(price_e8: int, where: str = "") -> None:
    if price_e8 <= 0:
        raise InvalidPrice(_detail(f"price_e8={price_e8}", where))


def validate_decimals(decimals: int, where: str = "") -> None:
    if decimals > MAX_DECIMALS:
        raise InvalidDecimals(_detail(f"decimals={decimals} > {MAX_DECIMALS}", where))


def validate_liq_threshold(bps: int, where: str = "") -> None:
    if bps > BPS_DENOMINATOR:
        raise InvalidLiqThreshold(
            _detail(f"liq_threshold_bps={bps} > {BPS_DENOMINATOR}", where)
        )


def validate_borrow_factor(bps: int, where: str = "") -> None:
    """Borrow factor is either 0 (unused) or within [1000, 10000] bps."""
    if bps == 0:
        return
    if not MIN_BORROW_FACTOR_BPS <= bps <= MAX_BORROW_FACTOR_BPS:
        raise InvalidBorrowFactor(
            _detail(
                f"borrow_factor_bps={bps} not 0 or in "
                f"[{MIN_BORROW_FACTOR_BPS}, {MAX_BORROW_FACTOR_BPS}]",
                where,
            )
        )


def validate_collateral(collateral: CollateralInput, where: str = "") -> None:
    validate_price(collateral.price_e8, where)
    validate_decimals(collateral.decimals, where)
    validate_liq_threshold(collateral.liq_threshold_bps, where)
    validate_borrow_factor(collateral.borrow_factor_bps, where)


def validate_debt(debt: DebtInput, where: str = "") -> None:
    validate_price(debt.price_e8, where)
    validate_decimals(debt.decimals, where)


def _detail(message: str, where: str) -> str:
    return f"{where}: {message}" if where else message
