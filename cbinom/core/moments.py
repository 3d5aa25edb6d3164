"""Raw moments and the method-of-moments estimator.

For X on [0, size + 1] the first two raw moments follow from the survival
function S(x) = I_prob(x, size - x + 1):

    M1 = ∫_0^{size+1} S(x) dx          M2 = ∫_0^{size+1} 2x S(x) dx

:func:`cbinom_mme` matches these to the sample moments by minimising

    g(prob, size) = (M1 - mean(data))^2 + (M2 - mean(data^2))^2

over prob ∈ [1e-5, 0.9999], size ∈ [1, ∞), starting from (0.3, 1).

The starting point is fixed and there is no restart logic, so for some
samples the optimiser can stop at a poor local solution or on a bound. The
returned :class:`FitResult` reports this (``converged``, ``at_bound``,
``objective``, ``warnings``) instead of hiding it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import quad

from ..array_backend.utils import _ensure_numeric_vector
from ..config import NumericalSettings, QuadratureSettings, resolve_settings
from ..custom_types import ArrayLike
from ..exceptions import DidNotConverge, InvalidArgument
from ..utils.logging import get_logger
from ._params import _validate_parameters
from ._quadrature import captured_integration_warnings
from .optimize import minimize_box
from .special import incomplete_beta

__all__ = ["FitResult", "raw_moments", "cbinom_mme", "cbinomMME"]

log = get_logger(__name__, component="moments")

_DATA_MESSAGE = "data must contain numerical values"


@dataclass
class FitResult:
    """Method-of-moments estimate with optimiser diagnostics.

    Iterating yields ``(prob_hat, size_hat)``.
    """
    prob_hat: float
    size_hat: float
    converged: bool
    objective: float
    n_iter: int
    n_samples: int
    message: str = ""
    at_bound: bool = False
    warnings: List[str] = field(default_factory=list)

    @property
    def params(self) -> Dict[str, float]:
        return {"prob": self.prob_hat, "size": self.size_hat}

    def __iter__(self) -> Iterator[float]:
        yield self.prob_hat
        yield self.size_hat


def _survival(x: float, size: float, prob: float) -> float:
    return float(incomplete_beta(x, size - x + 1.0, prob).filled(0.0))


def _moments(size: float, prob: float, quad_settings: QuadratureSettings) -> Tuple[float, float]:
    upper = size + 1.0
    kwargs = {"epsabs": quad_settings.epsabs, "epsrel": quad_settings.epsrel, "limit": quad_settings.limit}
    extra = {"size": size, "prob": prob}
    with captured_integration_warnings(log, "Moment quadrature warning", extra):
        m1, _ = quad(_survival, 0.0, upper, args=(size, prob), **kwargs)
        m2, _ = quad(lambda x: 2.0 * x * _survival(x, size, prob), 0.0, upper, **kwargs)
    return float(m1), float(m2)


def raw_moments(size: float, prob: float, *,
                settings: Optional[NumericalSettings] = None) -> Tuple[float, float]:
    """Returns ``(E[X], E[X^2])`` for the continuous binomial distribution.

    Raises:
        InvalidArgument: If ``size <= 0`` or ``prob`` is outside (0, 1).
    """
    size, prob = _validate_parameters(size, prob, message="size and prob must be numeric values")
    return _moments(size, prob, resolve_settings(settings).quadrature)


def _sample_moments(data: NDArray[np.floating]) -> Tuple[float, float]:
    return float(np.mean(data)), float(np.mean(data ** 2))


def cbinom_mme(data: ArrayLike, *, strict: bool = True,
               settings: Optional[NumericalSettings] = None) -> FitResult:
    """Method-of-moments estimates of prob and size.

    Args:
        data: Observations, a non-empty numeric vector of finite values.
        strict: If True (default) raise when the optimiser does not converge;
            otherwise log a warning and return the last iterate with
            ``converged=False``.
        settings: Optional numerical settings; ``settings.fit`` and
            ``settings.quadrature`` are used.

    Returns:
        FitResult with ``prob_hat`` and ``size_hat``.

    Raises:
        InvalidArgument: If ``data`` is non-numeric, empty or non-finite.
        DidNotConverge: If ``strict`` and L-BFGS-B reports failure.

    Example:
        ``cbinom_mme(rcbinom(n=1000, size=5, prob=0.5))``
    """
    data = _ensure_numeric_vector(data, message=_DATA_MESSAGE, argument="data", allow_empty=False)
    if not np.all(np.isfinite(data)):
        raise InvalidArgument("data must contain finite values", argument="data")

    settings = resolve_settings(settings)
    fit, quad_settings = settings.fit, settings.quadrature
    target1, target2 = _sample_moments(data)

    def objective(theta: NDArray[np.floating]) -> float:
        prob, size = float(theta[0]), float(theta[1])
        if not (0.0 < prob < 1.0) or size <= 0.0:
            return np.inf
        m1, m2 = _moments(size, prob, quad_settings)
        return (m1 - target1) ** 2 + (m2 - target2) ** 2

    outcome = minimize_box(
        objective,
        fit.start_vector(),
        fit.bounds(),
        fd_step=fit.fd_step,
        maxiter=fit.maxiter,
    )
    prob_hat, size_hat = float(outcome.x[0]), float(outcome.x[1])

    notes: List[str] = []
    lo, hi = fit.prob_bounds
    at_bound = bool(np.isclose(prob_hat, lo) or np.isclose(prob_hat, hi) or np.isclose(size_hat, fit.size_lower))
    if at_bound:
        notes.append(f"estimate on a bound (prob={prob_hat:.6g}, size={size_hat:.6g})")
    if outcome.fun > fit.objective_warn:
        notes.append(f"moment mismatch {outcome.fun:.3g} above {fit.objective_warn:g}")

    result = FitResult(
        prob_hat=prob_hat,
        size_hat=size_hat,
        converged=outcome.success,
        objective=outcome.fun,
        n_iter=outcome.n_iter,
        n_samples=int(data.size),
        message=outcome.message,
        at_bound=at_bound,
        warnings=notes,
    )

    if not outcome.success:
        if strict:
            raise DidNotConverge(
                f"Method-of-moments fit did not converge: {outcome.message}",
                stage="fit",
                result=outcome.raw,
            )
        result.warnings.append(outcome.message)
        log.warning(
            "Model failed to converge",
            extra={"stage": "fit", "n_samples": result.n_samples, "status": "FAILED", "error": outcome.message},
        )
    elif notes:
        log.warning(
            "Method-of-moments fit needs review",
            extra={"stage": "fit", "n_samples": result.n_samples, "status": "WARN", "error": "; ".join(notes)},
        )
    else:
        log.debug(
            "Method-of-moments fit converged",
            extra={"stage": "fit", "n_samples": result.n_samples, "prob": prob_hat, "size": size_hat},
        )
    return result


cbinomMME = cbinom_mme
