"""
Logging configuration for storefront_cart.

Usage:
    from storefront_cart.logging_config import logger

    logger.info("Cart loaded with %s items", count)
"""
from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOGGER_NAME = "storefront_cart"


def _resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def setup_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stdout handler to the package logger once and set its level."""
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(_resolve_level(level))

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    # aiohttp client noise
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    return package_logger


logger = logging.getLogger(LOGGER_NAME)

__all__ = ["LOG_FORMAT", "logger", "setup_logging"]
