# array_backend/utils.py
"""
Input canonicalisation and validation used by every public cbinom function.

Vector-valued inputs (quantiles, probabilities, samples) are canonicalised to
1-D float arrays of shape (n,); parameters are canonicalised to Python floats.
Anything that is not real-valued numeric data (booleans, complex numbers,
strings, objects) is rejected with :class:`~cbinom.exceptions.InvalidArgument`
before any numeric work happens.
"""

from __future__ import annotations

import numpy as np
from typing import Any

from ..custom_types import Array, ArrayLike
from ..exceptions import InvalidArgument


def _as_array(x: Any, *, message: str, argument: str | None = None) -> Array:
    try:
        return np.asarray(x)
    except Exception as e:
        raise InvalidArgument(
            f"{message} (could not convert {type(x).__name__} to an array: {e})",
            argument=argument,
        ) from e


def _is_real_numeric(arr: Array) -> bool:
    """True for integer or floating dtypes; bool and complex do not count."""
    return np.issubdtype(arr.dtype, np.integer) or np.issubdtype(arr.dtype, np.floating)


def _ensure_numeric_vector(x: ArrayLike, *, message: str, argument: str | None = None,
                           allow_empty: bool = True) -> Array:
    """
    Return `x` as a float vector of shape (n,).

    Accepts:
      - Python / numpy scalars -> (1,)
      - 1D arrays (n,)
      - 2D arrays shaped (n,1) or (1,n)

    Raises:
      InvalidArgument for non-numeric input, for matrices that are not vectors,
      and for empty input when `allow_empty` is False.
    """
    arr = _as_array(x, message=message, argument=argument)
    if not _is_real_numeric(arr):
        raise InvalidArgument(message, argument=argument)

    if arr.ndim == 0:
        out = arr.reshape((1,))
    elif arr.ndim == 1:
        out = arr
    elif arr.ndim == 2 and (arr.shape[0] == 1 or arr.shape[1] == 1):
        out = np.ravel(arr)
    else:
        raise InvalidArgument(
            f"{argument or 'input'} must be a scalar or a vector; got shape {arr.shape}",
            argument=argument,
        )

    if not allow_empty and out.size == 0:
        raise InvalidArgument(f"{argument or 'input'} must contain at least one value", argument=argument)

    return out.astype(float, copy=True)


def _ensure_numeric_scalar(x: Any, *, message: str, argument: str | None = None) -> float:
    """
    Return a Python float for inputs that contain a single real number.

    Accepts Python scalars, numpy scalar types and arrays with exactly one element.
    """
    arr = _as_array(x, message=message, argument=argument)
    if not _is_real_numeric(arr):
        raise InvalidArgument(message, argument=argument)
    if arr.size != 1:
        raise InvalidArgument(
            f"{argument or 'input'} must be a single value; got size={arr.size}, shape={arr.shape}",
            argument=argument,
        )
    return float(arr.reshape(()))


def _ensure_positive_integer(x: Any, *, message: str, argument: str | None = None) -> int:
    """
    Return a Python int for a positive whole number.

    Float-valued integers (``3.0``) are accepted; ``2.5``, ``0`` and negatives
    are not.
    """
    value = _ensure_numeric_scalar(x, message=message, argument=argument)
    if not np.isfinite(value) or value <= 0 or value % 1 != 0:
        raise InvalidArgument(f"{argument or 'input'} must be a positive integer", argument=argument)
    return int(value)


def _as_column(values: Array) -> Array:
    """Reshape a (n,) result to the (n, 1) column layout used by the object API."""
    return np.asarray(values, dtype=float).reshape(-1, 1)
