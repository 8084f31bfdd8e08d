"""Exception hierarchy for rational64."""

from __future__ import annotations
from typing import Any, Optional, Tuple


class RationalError(Exception):
    """Base class for all rational64 exceptions."""
    pass


class RationalOverflowError(RationalError, OverflowError):
    """Raised when a result cannot be represented in the 64-bit width."""

    def __init__(self, operation: str, operands: Tuple[Any, ...] = (), detail: Optional[str] = None):
        rendered = ", ".join(str(value) for value in operands)
        message = f"{operation}({rendered}) overflows the 64-bit range"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.operation = operation
        self.operands = operands


class ZeroDenominatorError(RationalError, ZeroDivisionError):
    """Raised in strict mode instead of coercing a zero denominator or divisor to zero."""
    pass


class ConfigError(RationalError, ValueError):
    """Raised when configuration values are invalid."""
    pass


__all__ = [
    "RationalError",
    "RationalOverflowError",
    "ZeroDenominatorError",
    "ConfigError",
]
