"""Objective-agnostic minimisers.

Two thin wrappers over :func:`scipy.optimize.minimize`:

- :func:`minimize_scalar_seeded`: 1-D minimisation from a seed, optionally
  kept inside an interval (Nelder-Mead). Used for CDF inversion by
  squared-residual minimisation.
- :func:`minimize_box`: box-constrained minimisation of a vector objective
  (L-BFGS-B with finite-difference gradients). Used for moment matching.

Neither knows anything about the distribution; both report convergence in a
:class:`MinimizeOutcome` and leave the policy for failures to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from scipy.optimize import minimize

__all__ = [
    "MinimizeOutcome",
    "minimize_scalar_seeded",
    "minimize_box",
]


@dataclass(frozen=True)
class MinimizeOutcome:
    x: NDArray[np.floating]
    fun: float
    success: bool
    n_iter: int
    n_eval: int
    message: str
    raw: object = None


def _finite_or_inf(objective: Callable[[NDArray[np.floating]], float]) -> Callable[[NDArray[np.floating]], float]:
    # A non-finite objective value is treated as "worse than anything".
    def wrapped(v: NDArray[np.floating]) -> float:
        value = float(objective(v))
        return value if np.isfinite(value) else np.inf
    return wrapped


def _outcome(result) -> MinimizeOutcome:
    return MinimizeOutcome(
        x=np.asarray(result.x, dtype=float).reshape(-1),
        fun=float(result.fun),
        success=bool(result.success),
        n_iter=int(getattr(result, "nit", 0)),
        n_eval=int(getattr(result, "nfev", 0)),
        message=str(result.message),
        raw=result,
    )


def minimize_scalar_seeded(
    objective: Callable[[float], float],
    seed: float,
    *,
    xatol: float = 1e-8,
    fatol: float = 1e-14,
    maxiter: Optional[int] = None,
    bounds: Optional[Tuple[float, float]] = None,
) -> MinimizeOutcome:
    """Minimises a scalar function of one real variable starting at `seed`.

    Args:
        objective: f(x) -> float.
        seed: Starting point.
        xatol: Absolute tolerance on x between simplex vertices.
        fatol: Absolute tolerance on f between simplex vertices.
        maxiter: Iteration cap; scipy's default when None.
        bounds: Optional (lower, upper) limits; simplex vertices are clipped
            into them, so the search never leaves the interval.

    Returns:
        MinimizeOutcome with ``x`` of shape (1,).
    """
    options = {"xatol": xatol, "fatol": fatol}
    if maxiter is not None:
        options["maxiter"] = int(maxiter)
    fun = _finite_or_inf(lambda v: objective(float(v[0])))
    result = minimize(
        fun,
        x0=np.array([float(seed)]),
        method="Nelder-Mead",
        bounds=None if bounds is None else [tuple(bounds)],
        options=options,
    )
    return _outcome(result)


def minimize_box(
    objective: Callable[[NDArray[np.floating]], float],
    seed: Sequence[float],
    bounds: Sequence[Tuple[Optional[float], Optional[float]]],
    *,
    fd_step: float = 1e-5,
    maxiter: int = 15000,
) -> MinimizeOutcome:
    """Minimises `objective` over a box, starting at `seed`.

    Args:
        objective: f(theta) -> float for theta of shape (d,).
        seed: Starting point, shape (d,). Must lie inside `bounds`.
        bounds: One (lower, upper) pair per coordinate; None means unbounded.
        fd_step: Step of the forward-difference gradient.
        maxiter: Iteration cap.

    Returns:
        MinimizeOutcome with ``x`` of shape (d,).
    """
    x0 = np.asarray(seed, dtype=float).reshape(-1)
    if len(bounds) != x0.size:
        raise ValueError(f"bounds has {len(bounds)} entries for a {x0.size}-dimensional seed")
    result = minimize(
        _finite_or_inf(objective),
        x0=x0,
        method="L-BFGS-B",
        bounds=list(bounds),
        options={"eps": float(fd_step), "maxiter": int(maxiter)},
    )
    return _outcome(result)
