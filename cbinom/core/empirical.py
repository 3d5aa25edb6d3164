"""Empirical CDF table and the quantile pairs behind a Q-Q comparison.

Nothing here draws; :func:`qq_pairs` returns the (theoretical, empirical)
coordinates and leaves the plotting to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from ..array_backend.utils import _ensure_numeric_scalar, _ensure_numeric_vector
from ..config import NumericalSettings
from ..custom_types import ArrayLike
from ..exceptions import InvalidArgument
from .moments import FitResult, cbinom_mme
from .quantile import qcbinom

__all__ = ["EmpiricalCdfTable", "QQPairs", "empirical_cdf", "qq_pairs"]

_MESSAGE = "data and correction must contain numerical values"


@dataclass(frozen=True)
class EmpiricalCdfTable:
    """Unique sorted sample values and their empirical CDF.

    The last row is tail corrected: its probability is ``n / (n + correction)``
    and its value the sample quantile at that probability.
    """
    values: NDArray[np.floating]
    cdf: NDArray[np.floating]

    def __len__(self) -> int:
        return int(self.values.size)


@dataclass(frozen=True)
class QQPairs:
    theoretical: NDArray[np.floating]
    empirical: NDArray[np.floating]
    probabilities: NDArray[np.floating]
    fit: FitResult


def _validated(data: ArrayLike, correction: float):
    x = _ensure_numeric_vector(data, message=_MESSAGE, argument="data", allow_empty=False)
    cor = _ensure_numeric_scalar(correction, message=_MESSAGE, argument="correction")
    if not np.all(np.isfinite(x)):
        raise InvalidArgument("data must contain finite values", argument="data")
    if not (np.isfinite(cor) and cor > 0):
        raise InvalidArgument("correction must be a finite positive number", argument="correction")
    return x, cor


def empirical_cdf(data: ArrayLike, correction: float = 0.25) -> EmpiricalCdfTable:
    """Empirical CDF of ``data`` with a continuity correction on the largest value.

    Args:
        data: Observations.
        correction: Tail correction; the largest value gets probability
            ``n / (n + correction)``.

    Returns:
        EmpiricalCdfTable with one row per distinct value.
    """
    x, cor = _validated(data, correction)
    n = x.size
    values, counts = np.unique(x, return_counts=True)
    cdf = np.cumsum(counts) / n

    tail = n / (n + cor)
    cdf[-1] = tail
    values = values.astype(float)
    values[-1] = np.quantile(x, tail)
    return EmpiricalCdfTable(values=values, cdf=cdf)


def qq_pairs(data: ArrayLike, correction: float = 0.25, *, strict: bool = True,
             settings: Optional[NumericalSettings] = None) -> QQPairs:
    """Theoretical vs. sample quantiles for a continuous binomial Q-Q plot.

    Fits ``(prob, size)`` to ``data`` by :func:`cbinom_mme`, then evaluates the
    fitted quantile function at the empirical CDF probabilities. A perfect fit
    puts every pair on the identity line.

    Returns:
        QQPairs with ``theoretical`` (x axis), ``empirical`` (y axis), the
        probabilities used and the fit.
    """
    x, cor = _validated(data, correction)
    table = empirical_cdf(x, cor)
    fit = cbinom_mme(x, strict=strict, settings=settings)
    theoretical = qcbinom(table.cdf, size=fit.size_hat, prob=fit.prob_hat, strict=strict, settings=settings)
    return QQPairs(theoretical=theoretical, empirical=table.values, probabilities=table.cdf, fit=fit)
