"""Q64.64 fixed-point primitives: pure integer arithmetic, no floats.

A Q64.64 value is an unsigned 128-bit integer whose low 64 bits hold the
fraction: ``1.0`` is ``1 << 64``. Products are formed in a 256-bit wide
intermediate and every result handed back must fit in 128 bits.
"""
from __future__ import annotations

from decimal import Decimal, localcontext

from .errors import MathOverflow

Q64_SHIFT = 64
ONE_Q64 = 1 << Q64_SHIFT
Q64_FRACTION_MASK = ONE_Q64 - 1

U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U256_MAX = (1 << 256) - 1

BPS_DENOMINATOR = 10_000
MAX_DECIMALS = 18

# Oracle prices arrive as integers scaled by 10^8 ("price_e8").
PRICE_SCALE_E8 = 100_000_000
# Divisor used by the first on-chain deployment; selectable via config.
LEGACY_PRICE_SCALE = 100_000

# Kamino reserves quote ``marketPriceSf`` scaled by 2^60.
MARKET_PRICE_SF_SHIFT = 60


# ---------------------------------------------------------------------------
# Range helpers
# ---------------------------------------------------------------------------


def _require_u128(value: int, name: str) -> int:
    if value < 0 or value > U128_MAX:
        raise MathOverflow(f"{name}={value} is outside the u128 range")
    return value


def _narrow(value: int) -> int:
    """Truncate a wide intermediate back to u128, failing if it does not fit."""
    if value > U128_MAX:
        raise MathOverflow(f"result {value} does not fit in 128 bits")
    return value


def ten_pow(decimals: int) -> int:
    """Return ``10 ** decimals``."""
    return 10**decimals


def checked_add(a: int, b: int) -> int:
    """Add two u128 values, raising MathOverflow instead of wrapping."""
    total = _require_u128(a, "a") + _require_u128(b, "b")
    if total > U128_MAX:
        raise MathOverflow(f"{a} + {b} exceeds u128")
    return total


# ---------------------------------------------------------------------------
# Core primitives
# ---------------------------------------------------------------------------


def mul_div(a: int, b: int, denom: int) -> int:
    """Compute ``floor(a * b / denom)`` through a 256-bit intermediate.

    Raises:
        MathOverflow: ``denom`` is zero, an operand is outside u128, the
            product exceeds 256 bits, or the quotient exceeds 128 bits.
    """
    if denom == 0:
        raise MathOverflow("division by zero")
    _require_u128(a, "a")
    _require_u128(b, "b")
    _require_u128(denom, "denom")
    product = a * b
    if product > U256_MAX:
        raise MathOverflow("intermediate product exceeds 256 bits")
    return _narrow(product // denom)


def q64_mul(a: int, b: int) -> int:
    """Multiply two Q64.64 values: ``floor(a * b / 2^64)``."""
    _require_u128(a, "a")
    _require_u128(b, "b")
    product = a * b
    if product > U256_MAX:
        raise MathOverflow("intermediate product exceeds 256 bits")
    return _narrow(product >> Q64_SHIFT)


def q64_div(a: int, b: int) -> int:
    """Divide two Q64.64 values: ``floor((a << 64) / b)``."""
    if b == 0:
        raise MathOverflow("division by zero")
    _require_u128(a, "a")
    _require_u128(b, "b")
    numerator = a << Q64_SHIFT
    if numerator > U256_MAX:
        raise MathOverflow("shifted numerator exceeds 256 bits")
    return _narrow(numerator // b)


# ---------------------------------------------------------------------------
# Conversions into Q64.64
# ---------------------------------------------------------------------------


def scale_to_q64(raw_integer: int, decimals: int) -> int:
    """Convert a raw token amount carrying ``decimals`` implied digits.

    Examples:
        scale_to_q64(1_500_000, 6) == 1.5 * 2^64
    """
    return mul_div(raw_integer, ONE_Q64, ten_pow(decimals))


def bps_to_q64(bps: int) -> int:
    """Convert basis points into Q64.64 (10000 bps == ONE_Q64)."""
    return mul_div(bps, ONE_Q64, BPS_DENOMINATOR)


def price_e8_to_q64(price: int, scale: int = PRICE_SCALE_E8) -> int:
    """Convert an integer oracle price into Q64.64.

    ``scale`` is the factor the oracle multiplied the real price by;
    it defaults to ``PRICE_SCALE_E8``.
    """
    return mul_div(price, ONE_Q64, scale)


def price_sf_to_e8(market_price_sf: int) -> int:
    """Convert a 2^60-scaled reserve price into the e8 convention."""
    return (market_price_sf * PRICE_SCALE_E8) >> MARKET_PRICE_SF_SHIFT


# ---------------------------------------------------------------------------
# Display conversions
# ---------------------------------------------------------------------------


def q64_to_decimal(value: int) -> Decimal:
    """Exact decimal expansion of a Q64.64 value."""
    integer_part = value >> Q64_SHIFT
    fractional_part = value & Q64_FRACTION_MASK
    # 2^-64 needs 64 fractional digits, the integer part up to 20.
    with localcontext() as ctx:
        ctx.prec = 90
        return Decimal(integer_part) + Decimal(fractional_part) / Decimal(ONE_Q64)


def q64_to_float(value: int) -> float:
    integer_part = value >> Q64_SHIFT
    fractional_part = value & Q64_FRACTION_MASK
    return integer_part + fractional_part / ONE_Q64
