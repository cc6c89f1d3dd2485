"""Deterministic Q64.64 health factor engine for lending positions."""
from .engine import aggregate, compute_hf, compute_hf_q64, resolve
from .errors import (
    HealthFactorError,
    InvalidBorrowFactor,
    InvalidDecimals,
    InvalidLiqThreshold,
    InvalidPrice,
    MathOverflow,
)
from .models import (
    CollateralInput,
    ComputeArgs,
    DebtInput,
    HealthFactor,
    ValuationTotals,
)

__all__ = [
    "CollateralInput",
    "ComputeArgs",
    "DebtInput",
    "HealthFactor",
    "HealthFactorError",
    "InvalidBorrowFactor",
    "InvalidDecimals",
    "InvalidLiqThreshold",
    "InvalidPrice",
    "MathOverflow",
    "ValuationTotals",
    "aggregate",
    "compute_hf",
    "compute_hf_q64",
    "resolve",
]
