"""Logging setup for the storefront backend."""

from __future__ import annotations

import logging

LOGGER_NAME = "storefront"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Safe to call more than once (each app created by the factory calls it);
    only the level is refreshed on subsequent calls.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))
    if not any(getattr(h, "_storefront", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handler._storefront = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
