"""Data models — all frozen (immutable)."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .fixed_point import ONE_Q64, U128_MAX, q64_to_decimal, q64_to_float

_U8_MAX = (1 << 8) - 1
_U16_MAX = (1 << 16) - 1
_U64_MAX = (1 << 64) - 1
_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1


def _check_width(name: str, value: int, low: int, high: int) -> None:
    """Reject values that could not be carried in the field's wire width."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise ValueError(f"{name}={value} is outside [{low}, {high}]")


@dataclass(frozen=True)
class DebtInput:
    """A borrowed asset: raw amount, token decimals and e8 price."""

    amount: int
    decimals: int
    price_e8: int

    def __post_init__(self) -> None:
        _check_width("amount", self.amount, 0, _U64_MAX)
        _check_width("decimals", self.decimals, 0, _U8_MAX)
        _check_width("price_e8", self.price_e8, _I64_MIN, _I64_MAX)


@dataclass(frozen=True)
class CollateralInput:
    """A deposited asset, weighted by liquidation threshold and borrow factor.

    ``borrow_factor_bps == 0`` means the asset carries no borrow factor.
    """

    amount: int
    decimals: int
    price_e8: int
    liq_threshold_bps: int
    borrow_factor_bps: int = 0

    def __post_init__(self) -> None:
        _check_width("amount", self.amount, 0, _U64_MAX)
        _check_width("decimals", self.decimals, 0, _U8_MAX)
        _check_width("price_e8", self.price_e8, _I64_MIN, _I64_MAX)
        _check_width("liq_threshold_bps", self.liq_threshold_bps, 0, _U16_MAX)
        _check_width("borrow_factor_bps", self.borrow_factor_bps, 0, _U16_MAX)


@dataclass(frozen=True)
class ComputeArgs:
    """Ordered collateral and debt positions for one computation."""

    collaterals: tuple[CollateralInput, ...] = ()
    debts: tuple[DebtInput, ...] = ()


@dataclass(frozen=True)
class ValuationTotals:
    """Summed Q64.64 values of a position set."""

    collateral_q64: int = 0
    debt_q64: int = 0


@dataclass(frozen=True)
class HealthFactor:
    """Either a finite Q64.64 ratio or unbounded (no debt)."""

    q64: int = 0
    unbounded: bool = False

    def __post_init__(self) -> None:
        _check_width("q64", self.q64, 0, U128_MAX)
        if self.unbounded and self.q64 != U128_MAX:
            raise ValueError(f"unbounded HealthFactor must carry q64=U128_MAX, got {self.q64}")

    @classmethod
    def finite(cls, q64: int) -> HealthFactor:
        return cls(q64=q64, unbounded=False)

    @classmethod
    def infinite(cls) -> HealthFactor:
        return cls(q64=U128_MAX, unbounded=True)

    @property
    def is_liquidatable(self) -> bool:
        """True when a finite HF is strictly below 1.0."""
        return not self.unbounded and self.q64 < ONE_Q64

    def to_q64(self) -> int:
        """Raw on-chain form: ``U128_MAX`` stands in for unbounded."""
        return U128_MAX if self.unbounded else self.q64

    def to_float(self) -> float:
        if self.unbounded:
            return math.inf
        return q64_to_float(self.q64)

    def __str__(self) -> str:
        if self.unbounded:
            return "∞"
        return f"{q64_to_decimal(self.q64):.4f}"


@dataclass(frozen=True)
class HfState:
    """Last recorded health factor for a user."""

    user: str
    last_hf_q64: int
    last_update_slot: int


@dataclass(frozen=True)
class HealthFactorComputed:
    """Event emitted after a health factor has been recorded."""

    user: str
    hf_q64: int
    timestamp: int
