"""Arithmetic policy settings for rational64."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Union

from .exceptions import ConfigError


class OverflowPolicy(Enum):
    """What to do when even the reduced-magnitude path cannot avoid overflow."""
    RAISE = "raise"  # raise RationalOverflowError
    WRAP = "wrap"    # two's-complement wraparound, as fixed-width integers would


_KNOWN_KEYS = frozenset({"overflow", "strict"})


@dataclass(frozen=True)
class Config:
    """
    Policy carried by every :class:`~rational64.rational.Rational`.

    Attributes:
        overflow: Handling of results outside the 64-bit range.
        strict: Raise ``ZeroDenominatorError`` for a zero denominator or a
                zero divisor instead of returning canonical zero.
    """
    overflow: OverflowPolicy = OverflowPolicy.RAISE
    strict: bool = False

    def __post_init__(self):
        # Accept the policy by its string value, e.g. from a TOML file
        if not isinstance(self.overflow, OverflowPolicy):
            try:
                policy = OverflowPolicy(str(self.overflow).lower())
            except ValueError:
                choices = ", ".join(repr(p.value) for p in OverflowPolicy)
                raise ConfigError(
                    f"overflow must be one of {choices}, got {self.overflow!r}"
                ) from None
            object.__setattr__(self, "overflow", policy)
        if not isinstance(self.strict, bool):
            raise ConfigError(f"strict must be a boolean, got {self.strict!r}")

    @classmethod
    def default(cls) -> Config:
        """Forgiving coercions, explicit overflow failures."""
        return cls()

    @classmethod
    def parity(cls) -> Config:
        """Behave like plain fixed-width integers: wrap on unavoidable overflow."""
        return cls(overflow=OverflowPolicy.WRAP)

    @classmethod
    def checked(cls) -> Config:
        """Fail loudly on every invalid input and on overflow."""
        return cls(overflow=OverflowPolicy.RAISE, strict=True)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Config:
        unknown = set(values) - _KNOWN_KEYS
        if unknown:
            raise ConfigError(f"unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**values)

    @classmethod
    def from_toml(cls, path: Union[str, Path]) -> Config:
        """Load a configuration file, reading a ``[rational64]`` table when present."""
        with Path(path).open("rb") as fh:
            data = tomllib.load(fh)
        section = data.get("rational64", data)
        if not isinstance(section, dict):
            raise ConfigError("[rational64] must be a table")
        return cls.from_mapping(section)

    def combine(self, other: Config) -> Config:
        """Return the policy for an operation between values carrying *self* and *other*."""
        if self == other:
            return self
        if OverflowPolicy.RAISE in (self.overflow, other.overflow):
            overflow = OverflowPolicy.RAISE
        else:
            overflow = OverflowPolicy.WRAP
        return Config(overflow=overflow, strict=self.strict or other.strict)


DEFAULT_CONFIG = Config()


__all__ = ["Config", "OverflowPolicy", "DEFAULT_CONFIG"]
