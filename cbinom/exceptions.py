"""Package-wide exception types."""

from __future__ import annotations

from typing import Any, Optional


class CBinomError(Exception):
    """Base exception for all cbinom errors."""


class InvalidArgument(CBinomError, ValueError):
    """Raised when an argument fails validation, before any numeric work.

    Attributes:
        argument: Name (or comma separated names) of the offending argument(s).
    """

    def __init__(self, message: str, *, argument: Optional[str] = None):
        super().__init__(message)
        self.argument = argument


class DidNotConverge(CBinomError, RuntimeError):
    """Raised when an optimiser stops without reaching its convergence criteria.

    Attributes:
        stage: Which procedure failed (``"quantile"`` or ``"fit"``).
        result: The optimiser's raw result, when one is available.
    """

    def __init__(self, message: str, *, stage: str, result: Any = None):
        super().__init__(message)
        self.stage = stage
        self.result = result


__all__ = ["CBinomError", "InvalidArgument", "DidNotConverge"]
