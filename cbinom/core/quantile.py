"""Quantile function and random generation by numerical CDF inversion.

For a target probability ``p`` the quantile is found by minimising the
squared residual

    f(x) = (F(x; size, prob) - p)^2

with a 1-D minimiser seeded at ``size - 0.5`` and kept inside the support
``[0, size + 1]``. Outside the support the CDF is flat (0 below, 1 above),
so an unbounded search can drift there and stall. The same solve,
fed with uniform draws, is the sampler.

This is a root search phrased as an optimisation: on a flat stretch of the
objective it can stop at a point with a nonzero residual. Such points are
reported through :class:`~cbinom.exceptions.DidNotConverge` (or a logged
warning when ``strict=False``) rather than returned silently.
"""
from __future__ import annotations

import math
from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

from ..array_backend.utils import _ensure_numeric_vector, _ensure_positive_integer
from ..config import NumericalSettings, QuantileSettings, resolve_settings
from ..custom_types import ArrayLike, PRNG
from ..exceptions import DidNotConverge, InvalidArgument
from ..utils.logging import get_logger
from ._params import _validate_parameters
from .cdf import cdf_values
from .optimize import minimize_scalar_seeded

__all__ = ["qcbinom", "rcbinom", "invert", "solve_quantile"]

log = get_logger(__name__, component="quantile")

_QUANTILE_MESSAGE = "inputs p, size and prob must be numeric"
_RANDOM_MESSAGE = "inputs n, size and prob must be numeric"


def _seed(size: float) -> float:
    # size - 0.5 sits inside the support (0, size + 1) whenever size > 0.5;
    # for smaller sizes it would start on the flat part of the CDF.
    start = size - 0.5
    return start if start > 0.0 else 0.5 * (size + 1.0)


def solve_quantile(target: float, size: float, prob: float, settings: QuantileSettings,
                   *, strict: bool = True) -> float:
    """Returns x with F(x; size, prob) ≈ target for validated inputs.

    Raises:
        DidNotConverge: If ``strict`` and the minimiser fails or leaves a
            residual above ``settings.residual_tol``.
    """
    def objective(x: float) -> float:
        return float((cdf_values(np.array([x]), size, prob)[0] - target) ** 2)

    outcome = minimize_scalar_seeded(
        objective,
        _seed(size),
        xatol=settings.xatol,
        fatol=settings.fatol,
        maxiter=settings.maxiter,
        bounds=(0.0, size + 1.0),
    )
    x_star = float(outcome.x[0])
    residual = math.sqrt(max(outcome.fun, 0.0))

    if outcome.success and residual <= settings.residual_tol:
        return x_star

    reason = outcome.message if not outcome.success else f"residual {residual:.3g} above tolerance"
    if strict:
        raise DidNotConverge(
            f"CDF inversion for target {target!r} (size={size}, prob={prob}) did not converge: {reason}",
            stage="quantile",
            result=outcome.raw,
        )
    log.warning(
        "CDF inversion did not converge",
        extra={"stage": "quantile", "target": target, "size": size, "prob": prob,
               "status": "FAILED", "error": reason},
    )
    return x_star


def _solve_all(targets: NDArray[np.floating], size: float, prob: float,
               settings: QuantileSettings, strict: bool) -> NDArray[np.floating]:
    out = np.empty(targets.shape, dtype=float)
    for i, target in enumerate(targets):
        out[i] = solve_quantile(float(target), size, prob, settings, strict=strict)
    return out


def qcbinom(p: ArrayLike, size: float, prob: float, *, strict: bool = True,
            settings: Optional[NumericalSettings] = None) -> NDArray[np.floating]:
    """Quantile function for the continuous binomial distribution.

    Args:
        p: Vector of probabilities, each strictly inside (0, 1).
        size: Number of trials, a positive real.
        prob: Probability of success on each trial, in (0, 1).
        strict: Raise on non-convergence (default) instead of logging a
            warning and returning the best point found.
        settings: Optional numerical settings; ``settings.quantile`` is used.

    Returns:
        Array of shape (n,) of quantiles, in the order of ``p``.

    Raises:
        InvalidArgument: On non-numeric inputs, ``size <= 0``, ``prob`` or any
            ``p`` outside (0, 1).
        DidNotConverge: If ``strict`` and some element could not be inverted.

    Example:
        ``qcbinom(p=0.3, size=10, prob=0.5)``
    """
    p = _ensure_numeric_vector(p, message=_QUANTILE_MESSAGE, argument="p")
    size, prob = _validate_parameters(size, prob, message=_QUANTILE_MESSAGE)
    if np.any(~(p > 0.0)) or np.any(~(p < 1.0)):
        raise InvalidArgument("p must be in the interval (0, 1)", argument="p")

    return _solve_all(p, size, prob, resolve_settings(settings).quantile, strict)


def invert(u: ArrayLike, size: float, prob: float, *, strict: bool = True,
           settings: Optional[NumericalSettings] = None) -> NDArray[np.floating]:
    """Maps uniform draws ``u`` in [0, 1] through the inverse CDF."""
    u = _ensure_numeric_vector(u, message=_RANDOM_MESSAGE, argument="u")
    size, prob = _validate_parameters(size, prob, message=_RANDOM_MESSAGE)
    if np.any(~(u >= 0.0)) or np.any(~(u <= 1.0)):
        raise InvalidArgument("u must be in the interval [0, 1]", argument="u")
    return _solve_all(u, size, prob, resolve_settings(settings).quantile, strict)


def rcbinom(n: Any, size: float, prob: float, *, rng: Optional[PRNG] = None, strict: bool = True,
            settings: Optional[NumericalSettings] = None) -> NDArray[np.floating]:
    """Random generation for the continuous binomial distribution.

    Draws ``n`` independent uniforms and inverts each through the CDF.

    Args:
        n: Number of observations, a positive integer.
        size: Number of trials, at least 1.
        prob: Probability of success, in (0, 1).
        rng: Random number generator. If ``None``, a default generator is created.
        strict: See :func:`qcbinom`.
        settings: Optional numerical settings.

    Returns:
        Array of shape (n,) of samples.

    Example:
        ``rcbinom(n=1, size=5, prob=0.3)``
    """
    n = _ensure_positive_integer(n, message=_RANDOM_MESSAGE, argument="n")
    size, prob = _validate_parameters(size, prob, message=_RANDOM_MESSAGE, min_size=1.0)

    rng = rng or np.random.default_rng()
    u = rng.random(n)
    return _solve_all(u, size, prob, resolve_settings(settings).quantile, strict)
