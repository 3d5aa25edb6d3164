"""Distribution function of the continuous binomial distribution.

    F(x; size, prob) = 1 - I_prob(x, size - x + 1)

Closed form through the regularized incomplete Beta function; no integration.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from ..array_backend.utils import _ensure_numeric_vector
from ..custom_types import ArrayLike
from ._params import NUMERIC_MESSAGE, _validate_parameters
from .special import TaggedArray, incomplete_beta

__all__ = ["pcbinom", "cdf_values"]


def _tail_probability(x: NDArray[np.floating], size: float, prob: float, lower_tail: bool) -> TaggedArray:
    # Lower tail is the complement of I_prob, upper tail is I_prob itself; the
    # switch happens inside the primitive, not as 1 - result.
    return incomplete_beta(x, size - x + 1.0, prob, upper=lower_tail)


def cdf_values(x: NDArray[np.floating], size: float, prob: float, lower_tail: bool = True) -> NDArray[np.floating]:
    """CDF (or survival function) for already validated inputs.

    Undefined elements become 0, then every element with ``x >= size + 1`` is
    set to 1.
    """
    out = _tail_probability(x, size, prob, lower_tail).filled(0.0)
    out[x >= size + 1.0] = 1.0
    return out


def pcbinom(x: ArrayLike, size: float, prob: float, lower_tail: bool = True) -> NDArray[np.floating]:
    """Distribution function for the continuous binomial distribution.

    Args:
        x: Vector of quantiles.
        size: Number of trials, a positive real.
        prob: Probability of success on each trial, in (0, 1).
        lower_tail: If True (default) return P[X <= x], otherwise P[X > x].

    Returns:
        Array of shape (n,) with the CDF/SF values.

    Raises:
        InvalidArgument: If an input is non-numeric, ``size <= 0`` or ``prob``
            is outside (0, 1).

    Example:
        ``pcbinom(x=4, size=8, prob=0.3)`` equals ``1 - I_0.3(4, 5)``.
    """
    x = _ensure_numeric_vector(x, message=NUMERIC_MESSAGE, argument="x")
    size, prob = _validate_parameters(size, prob)
    return cdf_values(x, size, prob, lower_tail=bool(lower_tail))
