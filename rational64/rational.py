"""Exact 64-bit rational numbers with overflow-checked arithmetic."""
from __future__ import annotations

import logging
import math
import numbers
import operator
from fractions import Fraction
from typing import Any, Callable, Optional, Tuple, Union

import numpy as np

from ._checked import (
    INT64_MIN,
    UINT64_MAX,
    fits_int64,
    fits_uint64,
    gcd,
    would_overflow_add,
    would_overflow_mul,
    wrap_int64,
)
from .config import DEFAULT_CONFIG, Config, OverflowPolicy
from .exceptions import RationalOverflowError, ZeroDenominatorError

logger = logging.getLogger(__name__)

NumberLike = Union["Rational", Fraction, numbers.Integral]
Pair = Tuple[int, int]
PairOp = Callable[[int, int, int, int], Optional[Pair]]

DEFAULT_MAX_DENOMINATOR = 10**15


def _ensure_int(value: Any, *, name: str) -> int:
    """Convert *value* to ``int`` when it represents an integer."""
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


# ----------------------------------------------------------------------
# Pair arithmetic
#
# The helpers below work on raw (numerator, denominator) pairs. The
# ``_fast`` and ``_reduced`` variants return ``None`` when a step would leave
# the 64-bit range.
def _normalize(num: int, den: int, config: Config) -> Pair:
    """Move the sign into the numerator and reduce to lowest terms.

    A zero denominator yields canonical zero ``(0, 1)``: construction never
    fails on it unless the configuration is strict.
    """
    if den == 0:
        if config.strict:
            raise ZeroDenominatorError("denominator must be non-zero")
        return 0, 1
    if den < 0:
        num, den = -num, -den
    if num == 0:
        return 0, 1
    divisor = gcd(num, den)
    return num // divisor, den // divisor


def _fits(num: int, den: int) -> bool:
    return fits_int64(num) and 0 < den <= UINT64_MAX


def _wrap_pair(num: int, den: int, config: Config) -> Pair:
    """Normalize *num*/*den* as fixed-width integers would see them after wraparound."""
    num, den = _normalize(wrap_int64(num), wrap_int64(den), config)
    # -INT64_MIN wraps back onto itself
    return wrap_int64(num), den


def _add_fast(an: int, ad: int, bn: int, bd: int) -> Optional[Pair]:
    if (
        would_overflow_mul(an, bd)
        or would_overflow_mul(bn, ad)
        or would_overflow_mul(ad, bd)
    ):
        return None
    left, right = an * bd, bn * ad
    if would_overflow_add(left, right):
        return None
    return left + right, ad * bd


def _add_reduced(an: int, ad: int, bn: int, bd: int) -> Optional[Pair]:
    common = gcd(ad, bd)
    reduced_ad, reduced_bd = ad // common, bd // common
    if would_overflow_mul(an, reduced_bd) or would_overflow_mul(bn, reduced_ad):
        return None
    left, right = an * reduced_bd, bn * reduced_ad
    if would_overflow_add(left, right):
        return None
    den = ad * reduced_bd
    if not fits_uint64(den):
        return None
    return left + right, den


def _add_wrapped(an: int, ad: int, bn: int, bd: int) -> Pair:
    return an * bd + bn * ad, ad * bd


def _cross_cancel(an: int, ad: int, bn: int, bd: int) -> Tuple[int, int, int, int]:
    """Cancel common factors between each numerator and the other denominator."""
    g1 = gcd(an, bd)
    g2 = gcd(bn, ad)
    return an // g1, ad // g2, bn // g2, bd // g1


def _mul_fast(an: int, ad: int, bn: int, bd: int) -> Optional[Pair]:
    if would_overflow_mul(an, bn) or would_overflow_mul(ad, bd):
        return None
    return an * bn, ad * bd


def _mul_reduced(an: int, ad: int, bn: int, bd: int) -> Optional[Pair]:
    an, ad, bn, bd = _cross_cancel(an, ad, bn, bd)
    if would_overflow_mul(an, bn):
        return None
    den = ad * bd
    if not fits_uint64(den):
        return None
    return an * bn, den


def _mul_wrapped(an: int, ad: int, bn: int, bd: int) -> Pair:
    an, ad, bn, bd = _cross_cancel(an, ad, bn, bd)
    return an * bn, ad * bd


class Rational:
    """Rational number with a signed 64-bit numerator and unsigned 64-bit denominator.

    Values are immutable and always kept in lowest terms with a positive
    denominator, so equality is a comparison of the stored pair. Arithmetic
    first tries the direct formula and switches to a reduced-magnitude
    computation when an intermediate product would overflow; what happens when
    even that overflows is decided by the value's :class:`~rational64.config.Config`.
    """

    __slots__ = ("_numerator", "_denominator", "_config")
    __array_priority__ = 1000.0  # Prefer Rational semantics in NumPy expressions.

    def __init__(
        self,
        numerator: numbers.Integral = 0,
        denominator: numbers.Integral = 1,
        *,
        config: Optional[Config] = None,
    ) -> None:
        if config is None:
            config = DEFAULT_CONFIG
        num = _ensure_int(numerator, name="numerator")
        den = _ensure_int(denominator, name="denominator")

        normalized = _normalize(num, den, config)
        if not _fits(*normalized):
            if config.overflow is OverflowPolicy.RAISE:
                raise RationalOverflowError("Rational", (num, den))
            logger.warning("Rational(%d, %d) wrapped to 64 bits", num, den)
            normalized = _wrap_pair(num, den, config)

        self._numerator, self._denominator = normalized
        self._config = config

    @classmethod
    def _make(cls, num: int, den: int, config: Config) -> "Rational":
        # *num*/*den* must already be normalized and in range.
        value = cls.__new__(cls)
        value._numerator = num
        value._denominator = den
        value._config = config
        return value

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def zero(cls, *, config: Optional[Config] = None) -> "Rational":
        return cls._make(0, 1, config or DEFAULT_CONFIG)

    @classmethod
    def from_integer(cls, value: numbers.Integral, *, config: Optional[Config] = None) -> "Rational":
        """Embed an integer as ``value/1``."""
        return cls(value, 1, config=config)

    @classmethod
    def from_fraction(
        cls,
        numerator: numbers.Integral,
        denominator: numbers.Integral,
        *,
        config: Optional[Config] = None,
    ) -> "Rational":
        """Build ``numerator/denominator`` in lowest terms; a zero denominator gives zero."""
        return cls(numerator, denominator, config=config)

    @classmethod
    def from_float(
        cls,
        value: float,
        *,
        max_denominator: Optional[int] = None,
        config: Optional[Config] = None,
    ) -> "Rational":
        """Return the best rational approximation of *value*."""
        if isinstance(value, bool):  # bool is a subclass of int; treat explicitly.
            return cls(int(value), 1, config=config)
        if math.isnan(value) or math.isinf(value):
            raise ValueError("cannot convert NaN or infinity to Rational")
        if max_denominator is None:
            max_denominator = DEFAULT_MAX_DENOMINATOR
        if not 1 <= max_denominator <= UINT64_MAX:
            raise ValueError("max_denominator must be between 1 and 2**64 - 1")
        frac = Fraction.from_float(value).limit_denominator(max_denominator)
        return cls(frac.numerator, frac.denominator, config=config)

    @classmethod
    def rationalize(cls, value: Any, *, config: Optional[Config] = None) -> "Rational":
        """Coerce a numeric-like value into :class:`Rational`."""
        if isinstance(value, Rational):
            if config is None or config == value._config:
                return value
            return value.with_config(config)
        if isinstance(value, Fraction):
            return cls(value.numerator, value.denominator, config=config)
        if isinstance(value, numbers.Integral):
            return cls(int(value), 1, config=config)
        if isinstance(value, np.generic):
            return cls.rationalize(value.item(), config=config)
        if isinstance(value, numbers.Real):
            return cls.from_float(float(value), config=config)
        raise TypeError(f"Cannot convert {type(value)!r} to Rational")

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def config(self) -> Config:
        return self._config

    def with_config(self, config: Config) -> "Rational":
        """Return the same value governed by *config*."""
        return self._make(self._numerator, self._denominator, config)

    def as_fraction(self) -> Fraction:
        """Return a :class:`Fraction` with the same value."""
        return Fraction(self._numerator, self._denominator)

    def to_float(self) -> float:
        """Floating-point approximation, for display only."""
        return self._numerator / self._denominator

    def to_text(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:
        return self.to_float()

    def __int__(self) -> int:
        quotient = abs(self._numerator) // self._denominator
        return -quotient if self._numerator < 0 else quotient

    def __bool__(self) -> bool:
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        return self.to_text()

    def __format__(self, format_spec: str) -> str:
        if format_spec in ("", "r", "R"):
            return str(self)
        try:
            return format(float(self), format_spec)
        except (ValueError, TypeError):
            return format(str(self), format_spec)

    # ------------------------------------------------------------------
    # Internal helpers
    def _coerce(self, value: Any) -> "Rational":
        if isinstance(value, Rational):
            return value
        if isinstance(value, Fraction):
            return Rational(value.numerator, value.denominator, config=self._config)
        if isinstance(value, numbers.Integral):
            return Rational(int(value), 1, config=self._config)
        if isinstance(value, np.generic) and isinstance(value.item(), numbers.Integral):
            return Rational(value.item(), 1, config=self._config)
        raise TypeError(f"Cannot interpret {type(value)!r} as Rational")

    def _binary_operation(self, other: Any, op):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self, self._coerce(x)),
                otypes=[object],
            )
            return vectorised(other)
        try:
            other_rat = self._coerce(other)
        except TypeError:
            return NotImplemented
        return op(self, other_rat)

    def _dual_path(
        self,
        operation: str,
        other: "Rational",
        right: Pair,
        fast: PairOp,
        reduced: PairOp,
        wrapped: Callable[[int, int, int, int], Pair],
    ) -> "Rational":
        """Run *fast*, then *reduced*, then the overflow policy on ``self`` and *right*."""
        config = self._config.combine(other._config)
        operands = (self._numerator, self._denominator) + right
        result = fast(*operands)
        if result is None:
            logger.debug("%s(%s, %s): direct formula overflows, reducing first", operation, self, other)
            result = reduced(*operands)
        if result is not None:
            return self._make(*_normalize(*result, config), config)

        if config.overflow is OverflowPolicy.RAISE:
            raise RationalOverflowError(operation, (self, other))
        logger.warning("%s(%s, %s) wrapped to 64 bits", operation, self, other)
        return self._make(*_wrap_pair(*wrapped(*operands), config), config)

    def _coerce_power(self, value: Any) -> int:
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, Rational):
            if value.denominator != 1:
                raise ValueError("Exponent must be an integer")
            return value.numerator
        if isinstance(value, np.generic):
            return self._coerce_power(value.item())
        if isinstance(value, numbers.Real):
            if not float(value).is_integer():
                raise ValueError("Exponent must be an integer")
            return int(value)
        raise TypeError("Unsupported exponent type")

    # ------------------------------------------------------------------
    # Arithmetic
    def add(self, other: NumberLike) -> "Rational":
        other = self._coerce(other)
        return self._dual_path(
            "add",
            other,
            (other._numerator, other._denominator),
            _add_fast,
            _add_reduced,
            _add_wrapped,
        )

    def subtract(self, other: NumberLike) -> "Rational":
        return self.add(self._coerce(other).negate())

    def multiply(self, other: NumberLike) -> "Rational":
        other = self._coerce(other)
        return self._dual_path(
            "multiply",
            other,
            (other._numerator, other._denominator),
            _mul_fast,
            _mul_reduced,
            _mul_wrapped,
        )

    def divide(self, other: NumberLike) -> "Rational":
        """Multiply by the reciprocal of *other*.

        Dividing by zero returns canonical zero unless the configuration is
        strict, in which case ``ZeroDenominatorError`` is raised.
        """
        other = self._coerce(other)
        config = self._config.combine(other._config)
        if other._numerator == 0:
            if config.strict:
                raise ZeroDenominatorError("division by zero")
            return self.zero(config=config)
        # Swapping can put a negative value into the denominator slot.
        reciprocal = _normalize(other._denominator, other._numerator, config)
        return self._dual_path(
            "divide",
            other,
            reciprocal,
            _mul_fast,
            _mul_reduced,
            _mul_wrapped,
        )

    def reciprocal(self) -> "Rational":
        """Return ``1/self``; zero follows the same policy as :meth:`divide`."""
        return Rational(1, config=self._config).divide(self)

    def negate(self) -> "Rational":
        if self._numerator == INT64_MIN:
            if self._config.overflow is OverflowPolicy.RAISE:
                raise RationalOverflowError("negate", (self,))
            logger.warning("negate(%s) wrapped to 64 bits", self)
            return self
        return self._make(-self._numerator, self._denominator, self._config)

    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.add)

    def __radd__(self, other: Any) -> Any:
        return self._binary_operation(other, lambda a, b: b.add(a))

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.subtract)

    def __rsub__(self, other: Any) -> Any:
        return self._binary_operation(other, lambda a, b: b.subtract(a))

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.multiply)

    def __rmul__(self, other: Any) -> Any:
        return self._binary_operation(other, lambda a, b: b.multiply(a))

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.divide)

    def __rtruediv__(self, other: Any) -> Any:
        return self._binary_operation(other, lambda a, b: b.divide(a))

    def __pow__(self, exponent: Any) -> Any:
        if isinstance(exponent, np.ndarray):
            vectorised = np.vectorize(lambda x: self.__pow__(x), otypes=[object])
            return vectorised(exponent)
        power = self._coerce_power(exponent)
        base = self if power >= 0 else self.reciprocal()
        power = abs(power)
        result = Rational(1, config=self._config)
        # Square-and-multiply; each squaring is needed by a later factor.
        while power:
            if power & 1:
                result = result.multiply(base)
            power >>= 1
            if power:
                base = base.multiply(base)
        return result

    def __neg__(self) -> "Rational":
        return self.negate()

    def __pos__(self) -> "Rational":
        return self

    def __abs__(self) -> "Rational":
        return self.negate() if self._numerator < 0 else self

    # ------------------------------------------------------------------
    # Comparisons
    #
    # Cross products are exact Python integers, so ordering never overflows.
    def equals(self, other: NumberLike) -> bool:
        other = self._coerce(other)
        return (
            self._numerator == other._numerator
            and self._denominator == other._denominator
        )

    def not_equals(self, other: NumberLike) -> bool:
        return not self.equals(other)

    def less_than(self, other: NumberLike) -> bool:
        other = self._coerce(other)
        return self._numerator * other._denominator < other._numerator * self._denominator

    def less_or_equal(self, other: NumberLike) -> bool:
        return self.less_than(other) or self.equals(other)

    def greater_than(self, other: NumberLike) -> bool:
        return not self.less_or_equal(other)

    def greater_or_equal(self, other: NumberLike) -> bool:
        return not self.less_than(other)

    def _compare(self, other: Any, op) -> Any:
        try:
            other_rat = self._coerce(other)
        except TypeError:
            return NotImplemented
        return op(self, other_rat)

    def __eq__(self, other: Any) -> Any:
        return self._compare(other, Rational.equals)

    def __ne__(self, other: Any) -> Any:
        return self._compare(other, Rational.not_equals)

    def __lt__(self, other: Any) -> Any:
        return self._compare(other, Rational.less_than)

    def __le__(self, other: Any) -> Any:
        return self._compare(other, Rational.less_or_equal)

    def __gt__(self, other: Any) -> Any:
        return self._compare(other, Rational.greater_than)

    def __ge__(self, other: Any) -> Any:
        return self._compare(other, Rational.greater_or_equal)

    def __hash__(self) -> int:
        # Matches int and Fraction hashing for equal values.
        return hash(self.as_fraction())

    # ------------------------------------------------------------------
    # NumPy interoperability
    _UFUNC_DISPATCH = {
        np.add: operator.add,
        np.subtract: operator.sub,
        np.multiply: operator.mul,
        np.divide: operator.truediv,
        np.true_divide: operator.truediv,
        np.negative: operator.neg,
        np.positive: operator.pos,
        np.absolute: abs,
        np.power: operator.pow,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Rational ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, Rational):
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(self._coerce, otypes=[object])
                coerced.append(vectorised(value))
                has_array = True
            else:
                coerced.append(self._coerce(value))
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


def rationalize(value: Any, *, config: Optional[Config] = None) -> Rational:
    """Public helper to convert *value* into :class:`Rational`."""

    return Rational.rationalize(value, config=config)


__all__ = ["Rational", "rationalize", "DEFAULT_MAX_DENOMINATOR"]
