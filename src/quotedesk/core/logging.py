"""Process-wide logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the ``quotedesk`` logger."""
    logger = logging.getLogger("quotedesk")
    logger.setLevel(level.upper())
    if not any(getattr(h, "_quotedesk", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._quotedesk = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
