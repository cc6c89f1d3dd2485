"""Typed failures raised by the health-factor engine.

Every error aborts the whole computation; no partial result is returned.
"""
from __future__ import annotations


class HealthFactorError(Exception):
    """Base class for engine failures."""

    code = "HealthFactorError"
    default_message = "Health factor computation failed"

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = self.default_message
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MathOverflow(HealthFactorError):
    code = "MathOverflow"
    default_message = "Math overflow"


class InvalidPrice(HealthFactorError):
    code = "InvalidPrice"
    default_message = "Invalid oracle price"


class InvalidDecimals(HealthFactorError):
    code = "InvalidDecimals"
    default_message = "Invalid decimals"


class InvalidLiqThreshold(HealthFactorError):
    code = "InvalidLiqThreshold"
    default_message = "Invalid liquidation threshold"


class InvalidBorrowFactor(HealthFactorError):
    code = "InvalidBorrowFactor"
    default_message = "Invalid borrow factor"
