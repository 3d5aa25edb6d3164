from __future__ import annotations

from typing import Any, Tuple

import numpy as np

from ..array_backend.utils import _ensure_numeric_scalar
from ..exceptions import InvalidArgument

NUMERIC_MESSAGE = "x, size, and prob must be numeric values"


def _validate_parameters(size: Any, prob: Any, *, message: str = NUMERIC_MESSAGE,
                         min_size: float | None = None) -> Tuple[float, float]:
    """Validates a (size, prob) pair and returns it as floats.

    Args:
        size: Positive real, analogous to the number of trials.
        prob: Success probability in the open interval (0, 1).
        message: Error message used when either value is not numeric.
        min_size: Inclusive lower bound on size; when None size only has to be
            strictly positive.

    Raises:
        InvalidArgument: If a value is non-numeric, not a single value, or out
            of range.
    """
    size = _ensure_numeric_scalar(size, message=message, argument="size")
    prob = _ensure_numeric_scalar(prob, message=message, argument="prob")

    if min_size is None:
        if not (np.isfinite(size) and size > 0):
            raise InvalidArgument("size must be a finite positive number", argument="size")
    elif not (np.isfinite(size) and size >= min_size):
        raise InvalidArgument(f"size must be finite and >= {min_size:g}", argument="size")

    if not (0.0 < prob < 1.0):
        raise InvalidArgument("prob must be in the interval (0, 1)", argument="prob")
    return size, prob
