from typing import Any, Generic, TypeVar
from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

__all__ = [
    "Distribution",
]

T = TypeVar("T", bound=np.number)


# -------------------------- Abstract Classes ----------------------------


class Distribution(Generic[T], ABC):
    """
    Abstract base class for univariate distributions.

    Subclasses implement sampling, density and distribution-function
    evaluation, and a way to be fitted from another distribution. Operations
    a subclass cannot support may be left unimplemented.

    Shape policy:
        - ``sample(n)`` -> (n, 1)
        - ``density`` / ``log_density`` / ``cdf`` -> (n, 1)
        - ``inv_cdf(u)`` -> (n, 1)

    Type Variables:
        T: Numeric data type (e.g., float or np.floating).
    """

    def sample(self, n_samples: int) -> NDArray[T]:
        """
        Samples data points from the distribution.

        Args:
            n_samples: The number of samples to generate.

        Returns:
            NDArray[T]: Array of shape (n_samples, 1).

        Raises:
            NotImplementedError: If the subclass does not implement this method.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def density(self, data: NDArray) -> NDArray[np.floating]:
        """
        Computes the probability density p(data) under this distribution.

        Args:
            data: Points at which to evaluate the density.

        Returns:
            NDArray[np.floating]: Density values of shape (n, 1).

        Raises:
            NotImplementedError: If the subclass does not implement this method.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def log_density(self, data: NDArray) -> NDArray[np.floating]:
        """
        Computes the log-probability density log p(data).

        Raises:
            NotImplementedError: If the subclass does not implement this method.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def cdf(self, data: NDArray) -> NDArray[np.floating]:
        """
        Evaluates the cumulative distribution function P[X <= data].

        Raises:
            NotImplementedError: If the subclass does not implement this method.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    def inv_cdf(self, u: NDArray[np.floating]) -> NDArray[T]:
        """
        Computes quantiles for probabilities `u`.

        Raises:
            NotImplementedError: If the subclass does not implement this method.
        """
        raise NotImplementedError("This method may be implemented by subclasses (optional)")

    @classmethod
    @abstractmethod
    def from_distribution(
        cls,
        convert_from: 'Distribution',
        **fit_kwargs: Any,
    ) -> 'Distribution[T]':
        """
        Constructs a new distribution by fitting or converting from another.

        Typical implementations draw samples from `convert_from` and fit the
        parameters of `cls` to them (e.g., by moment matching).

        Args:
            convert_from: The source distribution to fit or convert from.
            **fit_kwargs: Additional fitting parameters specific to the subclass.

        Returns:
            Distribution[T]: A new instance of `cls` fitted to the source distribution.
        """
        raise NotImplementedError("This method should be implemented by subclasses")
