"""Numerical settings for the quadrature and optimisation routines.

Nothing is read from files or the environment; callers override defaults by
passing a :class:`NumericalSettings` instance through the ``settings=``
keyword of the public functions.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

import numpy as np

from .exceptions import InvalidArgument


@dataclass(frozen=True)
class QuadratureSettings:
    """QUADPACK tolerances shared by the density and moment integrals.

    Defaults are scipy's own, so the integrals run at the integrator's
    standard tolerance. ``limit`` (the subinterval cap) only applies to the
    1-D moment integrals; ``dblquad`` for the density keeps QUADPACK's
    default cap.
    """
    epsabs: float = 1.49e-8
    epsrel: float = 1.49e-8
    limit: int = 50

    def __post_init__(self) -> None:
        if not (self.epsabs >= 0 and self.epsrel >= 0):
            raise InvalidArgument("quadrature tolerances must be nonnegative", argument="epsabs, epsrel")
        if self.epsabs == 0 and self.epsrel == 0:
            raise InvalidArgument("at least one quadrature tolerance must be positive", argument="epsabs, epsrel")
        if int(self.limit) < 1:
            raise InvalidArgument("limit must be a positive integer", argument="limit")


@dataclass(frozen=True)
class QuantileSettings:
    """Nelder-Mead options for the CDF inversion.

    ``residual_tol`` bounds ``|F(x*) - target|`` at the returned point; a larger
    residual is reported as non-convergence.
    """
    xatol: float = 1e-8
    fatol: float = 1e-14
    maxiter: Optional[int] = None
    residual_tol: float = 1e-4

    def __post_init__(self) -> None:
        if self.xatol <= 0 or self.fatol <= 0:
            raise InvalidArgument("xatol and fatol must be positive", argument="xatol, fatol")
        if self.maxiter is not None and int(self.maxiter) < 1:
            raise InvalidArgument("maxiter must be a positive integer", argument="maxiter")
        if self.residual_tol <= 0:
            raise InvalidArgument("residual_tol must be positive", argument="residual_tol")


@dataclass(frozen=True)
class FitSettings:
    """L-BFGS-B setup for the method-of-moments fit.

    ``fd_step`` is the finite-difference step used for the gradient. Steps
    as coarse as 1e-3 stop L-BFGS-B short of the moment match.
    """
    prob_bounds: Tuple[float, float] = (1e-5, 0.9999)
    size_lower: float = 1.0
    start: Tuple[float, float] = (0.3, 1.0)
    fd_step: float = 1e-5
    maxiter: int = 15000
    objective_warn: float = 1e-4

    def __post_init__(self) -> None:
        lo, hi = self.prob_bounds
        if not (0.0 < lo < hi < 1.0):
            raise InvalidArgument("prob_bounds must satisfy 0 < lower < upper < 1", argument="prob_bounds")
        if self.size_lower <= 0:
            raise InvalidArgument("size_lower must be positive", argument="size_lower")
        p0, s0 = self.start
        if not (lo <= p0 <= hi) or s0 < self.size_lower:
            raise InvalidArgument("start must lie inside the bounds", argument="start")
        if self.fd_step <= 0:
            raise InvalidArgument("fd_step must be positive", argument="fd_step")
        if int(self.maxiter) < 1:
            raise InvalidArgument("maxiter must be a positive integer", argument="maxiter")

    def bounds(self) -> list:
        return [tuple(self.prob_bounds), (self.size_lower, None)]

    def start_vector(self) -> np.ndarray:
        return np.asarray(self.start, dtype=float)


@dataclass(frozen=True)
class NumericalSettings:
    quadrature: QuadratureSettings = field(default_factory=QuadratureSettings)
    quantile: QuantileSettings = field(default_factory=QuantileSettings)
    fit: FitSettings = field(default_factory=FitSettings)

    def with_overrides(self, **changes) -> "NumericalSettings":
        """Return a copy with whole sub-settings replaced, e.g. ``quantile=...``."""
        return replace(self, **changes)


DEFAULT_SETTINGS = NumericalSettings()


def resolve_settings(settings: Optional[NumericalSettings]) -> NumericalSettings:
    return DEFAULT_SETTINGS if settings is None else settings


__all__ = [
    "QuadratureSettings",
    "QuantileSettings",
    "FitSettings",
    "NumericalSettings",
    "DEFAULT_SETTINGS",
    "resolve_settings",
]
