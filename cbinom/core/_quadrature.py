from __future__ import annotations

import logging
import warnings
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from scipy.integrate import IntegrationWarning


@contextmanager
def captured_integration_warnings(logger: logging.Logger, message: str, extra: Dict[str, Any]) -> Iterator[None]:
    """Turns QUADPACK ``IntegrationWarning``s raised inside the block into DEBUG records.

    Other warning categories are re-emitted unchanged.
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", IntegrationWarning)
        yield
    for w in caught:
        if issubclass(w.category, IntegrationWarning):
            logger.debug(message, extra={**extra, "error": str(w.message)})
        else:
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)
