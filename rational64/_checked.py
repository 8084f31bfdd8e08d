"""Fixed-width integer helpers used by :mod:`rational64.rational`.

Python integers never overflow, so the 64-bit limits are emulated here. The
predicates answer whether a product or sum of two signed 64-bit operands is
still representable in that width.
"""
from __future__ import annotations

import math

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

_MODULUS = 1 << 64


def fits_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def fits_uint64(value: int) -> bool:
    return 0 <= value <= UINT64_MAX


def wrap_int64(value: int) -> int:
    """Reduce *value* into the signed 64-bit range with two's-complement wraparound."""
    value &= _MODULUS - 1
    if value > INT64_MAX:
        value -= _MODULUS
    return value


def _trunc_div(a: int, b: int) -> int:
    # C-style division, rounding toward zero.
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def gcd(a: int, b: int) -> int:
    """Return the non-negative greatest common divisor, with ``gcd(0, d) == d``."""
    return math.gcd(a, b)


def would_overflow_mul(a: int, b: int) -> bool:
    """Return ``True`` when ``a * b`` does not fit in a signed 64-bit integer."""
    if a == 0 or b == 0:
        return False
    if not (fits_int64(a) and fits_int64(b)):
        return True
    if (a == INT64_MIN and b == -1) or (b == INT64_MIN and a == -1):
        return True
    product = wrap_int64(a * b)
    return _trunc_div(product, b) != a


def would_overflow_add(a: int, b: int) -> bool:
    """Return ``True`` when ``a + b`` does not fit in a signed 64-bit integer."""
    if not (fits_int64(a) and fits_int64(b)):
        return True
    result = wrap_int64(a + b)
    if a > 0 and b > 0 and result <= 0:
        return True
    if a < 0 and b < 0 and result >= 0:
        return True
    return False


__all__ = [
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    "fits_int64",
    "fits_uint64",
    "wrap_int64",
    "gcd",
    "would_overflow_mul",
    "would_overflow_add",
]
