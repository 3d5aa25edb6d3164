"""Density of the continuous binomial distribution.

There is no closed form. For a point ``y`` inside the support the density is

    f(y) = J(y) / B(y, size + 1 - y)^2

    J(y) = ∫_{prob}^{1} ∫_{0}^{prob} (s t)^(y-1) ((1-s)(1-t))^(size-y)
                 [log(s(1-t)) - log(t(1-s))] dt ds

i.e. the derivative of ``1 - I_prob(y, size - y + 1)`` with respect to ``y``.
``J`` is evaluated with adaptive 2-D quadrature; each point is an independent
integration.
"""
from __future__ import annotations

import math
from typing import Callable, Optional

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import dblquad

from ..array_backend.utils import _ensure_numeric_vector
from ..config import NumericalSettings, QuadratureSettings, resolve_settings
from ..custom_types import ArrayLike
from ..utils.logging import get_logger
from ._params import NUMERIC_MESSAGE, _validate_parameters
from ._quadrature import captured_integration_warnings
from .special import TaggedArray, log_beta_function

__all__ = ["dcbinom", "log_dcbinom", "density_values"]

log = get_logger(__name__, component="density")


def _normalised_integrand(y: float, size: float, log_norm: float) -> Callable[[float, float], float]:
    """Integrand of J(y) / B^2, with ``log_norm = 2 log B(y, size + 1 - y)``.

    The normaliser sits inside the integrand so that QUADPACK's absolute
    tolerance is on the scale of the density rather than of B^2.
    """
    a = y - 1.0
    b = size - y

    def g(t: float, s: float) -> float:
        st = s * t
        cc = (1.0 - s) * (1.0 - t)
        if st <= 0.0 or cc <= 0.0:
            return 0.0
        try:
            weight = math.exp(a * math.log(st) + b * math.log(cc) - log_norm)
        except OverflowError:
            return math.inf
        return weight * (math.log(s * (1.0 - t)) - math.log(t * (1.0 - s)))

    return g


def _integral(y: float, size: float, prob: float, log_norm: float, quad: QuadratureSettings) -> float:
    """J(y) / B^2 over the box [prob, 1] x [0, prob]; may be non-finite when QUADPACK gives up."""
    extra = {"x": y, "size": size, "prob": prob}
    with captured_integration_warnings(log, "Density quadrature warning", extra):
        value, _ = dblquad(
            _normalised_integrand(y, size, log_norm),
            prob, 1.0,
            0.0, prob,
            epsabs=quad.epsabs,
            epsrel=quad.epsrel,
        )
    return float(value)


def density_values(x: NDArray[np.floating], size: float, prob: float,
                   quad: Optional[QuadratureSettings] = None) -> NDArray[np.floating]:
    """Density for already validated inputs; degenerate elements become 0.

    Points whose Beta normaliser is undefined (``x <= 0`` or
    ``x >= size + 1``) are not integrated.
    """
    quad = quad or QuadratureSettings()
    log_norm = log_beta_function(x, size + 1.0 - x)

    values = np.full(x.shape, np.nan)
    for i in np.flatnonzero(log_norm.defined):
        values[i] = _integral(float(x[i]), size, prob, 2.0 * float(log_norm.values[i]), quad)

    return TaggedArray.from_values(values, log_norm.defined).filled(0.0)


def dcbinom(x: ArrayLike, size: float, prob: float, *,
            settings: Optional[NumericalSettings] = None) -> NDArray[np.floating]:
    """Density for the continuous binomial distribution.

    Args:
        x: Vector of quantiles.
        size: Number of trials, a positive real.
        prob: Probability of success on each trial, in (0, 1).
        settings: Optional numerical settings; only ``settings.quadrature`` is used.

    Returns:
        Array of shape (n,) of density values. Points outside the support
        ``(0, size + 1)`` and points where the integral degenerates give 0.

    Raises:
        InvalidArgument: If an input is non-numeric, ``size <= 0`` or ``prob``
            is outside (0, 1).

    Example:
        ``dcbinom(x=2, size=5, prob=0.5)``
    """
    x = _ensure_numeric_vector(x, message=NUMERIC_MESSAGE, argument="x")
    size, prob = _validate_parameters(size, prob)
    return density_values(x, size, prob, resolve_settings(settings).quadrature)


def log_dcbinom(x: ArrayLike, size: float, prob: float, *,
                settings: Optional[NumericalSettings] = None) -> NDArray[np.floating]:
    """Natural log of :func:`dcbinom`; ``-inf`` wherever the density is 0."""
    d = dcbinom(x, size, prob, settings=settings)
    with np.errstate(divide="ignore"):
        return np.log(d)
