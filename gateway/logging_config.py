# Role: One-time logging setup. Level follows gateway.config.DEBUG so operators get debug traces
# (payloads, content types, chosen paths) only when they ask for them.

from __future__ import annotations

import logging
import sys
from typing import Optional

import gateway.config as config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the "gateway" logger tree once.

    Args:
        level: explicit level name; defaults to DEBUG when config.DEBUG is on, else INFO.

    Returns:
        The configured package logger.
    """
    level_name = (level or ("DEBUG" if config.DEBUG else "INFO")).upper()

    logger = logging.getLogger("gateway")
    logger.setLevel(getattr(logging, level_name))

    # Remove existing handlers so repeated calls (reload, tests) don't duplicate lines
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level_name))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
