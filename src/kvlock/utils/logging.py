"""Logging helpers with consistent formatting."""

from __future__ import annotations

import logging
import sys
from typing import Union

from rich.logging import RichHandler


def get_logger(name: str, level: Union[int, str] = logging.INFO, *, rich: bool = True) -> logging.Logger:
    """Configure and return a logger.

    Loggers that already carry handlers are returned untouched; use
    :func:`configure_logger` to apply explicit settings.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    return configure_logger(name, level, rich=rich)


def configure_logger(name: str, level: Union[int, str] = logging.INFO, *, rich: bool = True) -> logging.Logger:
    """Replace the handlers of ``name`` with a single rich or plain handler."""
    logger = logging.getLogger(name)
    level = _level(level)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.setLevel(level)

    if rich:
        handler: logging.Handler = RichHandler(
            level=level,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            show_time=True,
            show_path=False,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.propagate = False
    return logger


def _level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO
