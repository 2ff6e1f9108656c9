from __future__ import annotations

import logging
import sys

from spriteforge.config import LOG_FORMAT

ROOT_LOGGER = "spriteforge"


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stdout handler to the package logger."""
    logger = logging.getLogger(ROOT_LOGGER)
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)
    if not any(getattr(h, "_spriteforge", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._spriteforge = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
