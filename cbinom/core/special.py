"""Beta-function primitives with explicit definedness tags.

Every primitive returns a :class:`TaggedArray`: the raw values plus a mask
marking which elements are mathematically defined and finite. Callers decide
what an undefined element becomes (the CDF and density map it to ``0``)
instead of relying on suppressed floating-point warnings.

The domain checks are done here rather than trusted to scipy: ``betainc`` and
``beta`` extend to some non-positive shape parameters, whereas the
distribution is only defined through Beta functions with positive arguments.
The one exception is ``I_x(0, b)``: a zero first shape is the limiting point
mass at 0, so ``I_x(0, b) = 1`` for every ``x`` in [0, 1].
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import special as sps

from ..custom_types import ArrayLike

__all__ = [
    "TaggedArray",
    "incomplete_beta",
    "beta_function",
    "log_beta_function",
]


@dataclass(frozen=True)
class TaggedArray:
    """Values paired with a boolean ``defined`` mask of the same shape.

    Undefined entries hold ``nan`` in ``values``.
    """
    values: NDArray[np.floating]
    defined: NDArray[np.bool_]

    @classmethod
    def from_values(cls, values: ArrayLike, domain: ArrayLike = True) -> "TaggedArray":
        v = np.asarray(values, dtype=float)
        mask = np.broadcast_to(np.asarray(domain, dtype=bool), v.shape) & np.isfinite(v)
        return cls(values=np.where(mask, v, np.nan), defined=mask)

    @property
    def all_defined(self) -> bool:
        return bool(np.all(self.defined))

    def filled(self, sentinel: float) -> NDArray[np.floating]:
        """Copy of ``values`` with every undefined element replaced by ``sentinel``."""
        return np.where(self.defined, self.values, float(sentinel))

    def __len__(self) -> int:
        return int(self.values.size)


def incomplete_beta(a: ArrayLike, b: ArrayLike, x: ArrayLike, *, upper: bool = False) -> TaggedArray:
    """Regularized incomplete Beta function ``I_x(a, b)``.

    Args:
        a, b: Shape parameters; broadcast against each other and ``x``.
        x: Upper integration limit in [0, 1].
        upper: If True return the complement ``1 - I_x(a, b)``, computed
            directly by ``scipy.special.betaincc`` so that small upper-tail
            probabilities keep their relative accuracy.

    Returns:
        TaggedArray, undefined where ``a < 0``, ``b <= 0``, ``x`` is outside
        [0, 1] or scipy returns a non-finite value.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    x = np.asarray(x, dtype=float)
    domain = (a >= 0) & (b > 0) & (x >= 0) & (x <= 1)
    with np.errstate(all="ignore"):
        raw = sps.betaincc(a, b, x) if upper else sps.betainc(a, b, x)
    raw = np.where(a == 0, 0.0 if upper else 1.0, raw)
    return TaggedArray.from_values(raw, domain)


def beta_function(a: ArrayLike, b: ArrayLike) -> TaggedArray:
    """Complete Beta function ``B(a, b)``, undefined unless ``a > 0`` and ``b > 0``."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    domain = (a > 0) & (b > 0)
    with np.errstate(all="ignore"):
        raw = sps.beta(a, b)
    return TaggedArray.from_values(raw, domain)


def log_beta_function(a: ArrayLike, b: ArrayLike) -> TaggedArray:
    """``log B(a, b)``, same domain as :func:`beta_function` but free of underflow."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    domain = (a > 0) & (b > 0)
    with np.errstate(all="ignore"):
        raw = sps.betaln(a, b)
    return TaggedArray.from_values(raw, domain)
