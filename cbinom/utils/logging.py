"""Structured logging helpers.

The library only creates loggers; handlers are installed by applications,
optionally through :func:`configure_logging`.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

DEFAULT_FIELDS = ("component", "stage", "target", "size", "prob", "x", "n_samples", "status", "error")


class JSONFormatter(logging.Formatter):
    """JSON formatter adding common contextual fields when present."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in DEFAULT_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: int = logging.INFO, *, stream=None) -> logging.Handler:
    """Send ``cbinom`` log records to ``stream`` (stderr by default) as JSON lines.

    Only the ``cbinom`` logger hierarchy is touched. Returns the installed
    handler so callers can remove it again.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger("cbinom")
    for existing in list(root.handlers):
        if isinstance(existing.formatter, JSONFormatter):
            root.removeHandler(existing)
    root.setLevel(level)
    root.addHandler(handler)
    return handler


def get_logger(name: str, component: Optional[str] = None) -> logging.Logger:
    """Fetch a logger, stamping ``component`` on records that lack one."""

    logger = logging.getLogger(name)
    if component and not any(getattr(f, "component", None) == component for f in logger.filters):

        class _ComponentFilter(logging.Filter):
            def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
                if not hasattr(record, "component"):
                    record.component = component
                return True

        f = _ComponentFilter()
        f.component = component  # type: ignore[attr-defined]
        logger.addFilter(f)
    return logger


__all__ = ["JSONFormatter", "configure_logging", "get_logger"]
