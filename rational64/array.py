"""NumPy object arrays of :class:`~rational64.rational.Rational` values."""
from __future__ import annotations

from typing import Any, Optional, Tuple, Union

import numpy as np

from .config import Config
from .rational import Rational


def as_rational_array(
    values: Any,
    *,
    config: Optional[Config] = None,
    copy: bool = True,
) -> np.ndarray:
    """Return a ``numpy.ndarray`` of :class:`Rational` values.

    ``values`` can be any iterable containing numeric-like entries or an existing
    NumPy array. Floats are approximated with :meth:`Rational.from_float`. When
    ``copy`` is ``False`` and ``values`` is already an object array holding only
    :class:`Rational` entries, that array is returned as is.
    """

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype == object and all(isinstance(item, Rational) for item in array.flat):
            if config is None:
                return array
        if array.size == 0:
            return array.astype(object)
        vectorised = np.vectorize(
            lambda item: Rational.rationalize(item, config=config),
            otypes=[object],
        )
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        coerced = [Rational.rationalize(item, config=config) for item in values]
        return np.array(coerced, dtype=object)

    return as_rational_array(list(values), config=config, copy=copy)


def zeros(
    shape: Union[int, Tuple[int, ...]],
    *,
    config: Optional[Config] = None,
) -> np.ndarray:
    """Return an object array of the given shape filled with canonical zero."""

    array = np.empty(shape, dtype=object)
    array.fill(Rational.zero(config=config))
    return array


def zeros_like(
    values: Any,
    *,
    config: Optional[Config] = None,
) -> np.ndarray:
    """Return a zero-filled array that matches the shape of ``values``."""

    return zeros(np.shape(values), config=config)


__all__ = ["as_rational_array", "zeros", "zeros_like"]
