from __future__ import annotations

from typing import Any, Optional

import numpy as np
from numpy.typing import NDArray

from ..array_backend.utils import _as_column, _ensure_numeric_vector, _ensure_positive_integer
from ..config import NumericalSettings, resolve_settings
from ..core._params import NUMERIC_MESSAGE, _validate_parameters
from ..core.cdf import cdf_values
from ..core.density import density_values
from ..core.moments import FitResult, cbinom_mme, raw_moments
from ..core.quantile import invert, qcbinom
from ..custom_types import ArrayLike, PRNG
from .distribution import Distribution

__all__ = ["ContinuousBinomial"]


class ContinuousBinomial(Distribution[np.floating]):
    """Continuous binomial distribution on [0, size + 1].

    Object wrapper around the functional API (``dcbinom``, ``pcbinom``,
    ``qcbinom``, ``rcbinom``, ``cbinom_mme``), holding one validated
    parameter pair, a random generator and numerical settings.

    Shape policy:
        - ``sample(n)`` -> (n, 1)
        - ``density`` / ``log_density`` / ``cdf`` / ``sf`` -> (n, 1)
        - ``inv_cdf(u)`` -> (n, 1)

    Attributes:
        size: Positive real, analogous to the number of trials.
        prob: Success probability in (0, 1).
        fit_result: The :class:`FitResult` when built by :meth:`from_data`,
            otherwise None.
    """

    def __init__(
        self,
        size: float,
        prob: float,
        *,
        rng: Optional[PRNG] = None,
        settings: Optional[NumericalSettings] = None,
    ):
        """Initializes a ContinuousBinomial distribution.

        Args:
            size: size > 0.
            prob: 0 < prob < 1.
            rng: Random generator. If ``None``, a default generator is created.
            settings: Numerical settings used by every evaluation.

        Raises:
            InvalidArgument: If the parameters are invalid.
        """
        self._size, self._prob = _validate_parameters(size, prob, message="size and prob must be numeric values")
        self._rng = rng or np.random.default_rng()
        self._settings = resolve_settings(settings)
        self._moments: Optional[tuple] = None
        self.fit_result: Optional[FitResult] = None

    @property
    def size(self) -> float:
        return self._size

    @property
    def prob(self) -> float:
        return self._prob

    @property
    def support(self) -> tuple:
        """Closed support interval (0, size + 1)."""
        return (0.0, self._size + 1.0)

    def __repr__(self) -> str:
        return f"ContinuousBinomial(size={self._size!r}, prob={self._prob!r})"

    # ------------------------ Distribution core ------------------------

    def _vector(self, values: ArrayLike, argument: str = "x") -> NDArray[np.floating]:
        return _ensure_numeric_vector(values, message=NUMERIC_MESSAGE, argument=argument)

    def sample(self, n_samples: int) -> NDArray[np.floating]:
        """Draws samples by inverting the CDF at uniform draws.

        Returns:
            Samples of shape (n_samples, 1).

        Raises:
            InvalidArgument: If ``n_samples`` is not a positive integer.
        """
        n_samples = _ensure_positive_integer(n_samples, message="n_samples must be numeric", argument="n_samples")
        u = self._rng.random(n_samples)
        return _as_column(invert(u, self._size, self._prob, settings=self._settings))

    rvs = sample

    def density(self, values: ArrayLike) -> NDArray[np.floating]:
        """PDF values, shape (n, 1)."""
        return _as_column(density_values(self._vector(values), self._size, self._prob,
                                         self._settings.quadrature))

    def log_density(self, values: ArrayLike) -> NDArray[np.floating]:
        """Log-PDF values, shape (n, 1); ``-inf`` outside the support."""
        with np.errstate(divide="ignore"):
            return np.log(self.density(values))

    def cdf(self, values: ArrayLike) -> NDArray[np.floating]:
        """CDF values, shape (n, 1)."""
        return _as_column(cdf_values(self._vector(values), self._size, self._prob, lower_tail=True))

    def sf(self, values: ArrayLike) -> NDArray[np.floating]:
        """Survival function P[X > x], shape (n, 1)."""
        return _as_column(cdf_values(self._vector(values), self._size, self._prob, lower_tail=False))

    def inv_cdf(self, u: ArrayLike) -> NDArray[np.floating]:
        """Quantiles for probabilities in (0, 1), shape (n, 1)."""
        return _as_column(qcbinom(u, self._size, self._prob, settings=self._settings))

    # ------------------------ Moments ------------------------

    def _raw_moments(self) -> tuple:
        if self._moments is None:
            self._moments = raw_moments(self._size, self._prob, settings=self._settings)
        return self._moments

    def mean(self) -> NDArray[np.floating]:
        """Mean vector, shape (1,)."""
        m1, _ = self._raw_moments()
        return np.array([m1], dtype=float)

    def cov(self) -> NDArray[np.floating]:
        """Variance as a (1, 1) covariance matrix."""
        m1, m2 = self._raw_moments()
        return np.array([[max(m2 - m1 * m1, 0.0)]], dtype=float)

    def var(self) -> NDArray[np.floating]:
        """Variance, shape (1,)."""
        return np.diag(self.cov())

    # ------------------------ Converters ------------------------

    @classmethod
    def from_data(
        cls,
        data: ArrayLike,
        *,
        rng: Optional[PRNG] = None,
        strict: bool = True,
        settings: Optional[NumericalSettings] = None,
    ) -> 'ContinuousBinomial':
        """Fits (size, prob) to observations by the method of moments.

        The fit diagnostics are kept on ``fit_result``.
        """
        fit = cbinom_mme(data, strict=strict, settings=settings)
        dist = cls(fit.size_hat, fit.prob_hat, rng=rng, settings=settings)
        dist.fit_result = fit
        return dist

    @classmethod
    def from_distribution(
        cls,
        convert_from: Distribution,
        num_samples: int = 1024,
        **fit_kwargs: Any,
    ) -> 'ContinuousBinomial':
        """Fits a ContinuousBinomial to samples drawn from another distribution.

        Args:
            convert_from: Source distribution; only its ``sample`` method is used.
            num_samples: Number of samples to draw. Defaults to 1024.
            **fit_kwargs: Forwarded to :meth:`from_data` (``rng``, ``strict``,
                ``settings``).
        """
        xs = np.asarray(convert_from.sample(num_samples), dtype=float).reshape(-1)
        return cls.from_data(xs, **fit_kwargs)
