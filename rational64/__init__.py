"""Exact rational numbers within the 64-bit integer range."""

__version__ = "0.1.0"

from ._checked import INT64_MAX, INT64_MIN, UINT64_MAX
from .array import as_rational_array, zeros, zeros_like
from .config import DEFAULT_CONFIG, Config, OverflowPolicy
from .exceptions import (
    ConfigError,
    RationalError,
    RationalOverflowError,
    ZeroDenominatorError,
)
from .rational import DEFAULT_MAX_DENOMINATOR, Rational, rationalize

__all__ = [
    "__version__",
    "Rational",
    "rationalize",
    "DEFAULT_MAX_DENOMINATOR",
    "as_rational_array",
    "zeros",
    "zeros_like",
    "Config",
    "OverflowPolicy",
    "DEFAULT_CONFIG",
    "RationalError",
    "RationalOverflowError",
    "ZeroDenominatorError",
    "ConfigError",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
]
