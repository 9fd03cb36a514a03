"""
Logging for expcharts.

Every module logs through get_logger(__name__), so records land under the
"expcharts" hierarchy. The package attaches only a NullHandler; nothing is
printed until the host application (or configure_logging) adds a handler.

Levels used across the package:

- DEBUG: a curve or layout function returned None because its inputs were
  missing or unusable ("no distribution curves: mean or sample size
  missing", "degenerate window at 5.0, nothing to place"). Expected while
  a form is half filled.
- INFO: the chart style config was written to disk.
- WARNING: a stored chart style or config file was ignored and defaults
  were used in its place.
- ERROR: the chart style config could not be saved (the error is re-raised).

Demos call configure_logging(level="DEBUG") or set EXPCHARTS_LOG_LEVEL to
see the DEBUG records on stderr.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "expcharts"
LOG_LEVEL_ENV_VAR = "EXPCHARTS_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the expcharts logger only (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the
        EXPCHARTS_LOG_LEVEL env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to DEFAULT_FMT.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding a new one. If False,
        do nothing when a stderr handler is already attached.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt=fmt if fmt is not None else DEFAULT_FMT,
        datefmt=datefmt if datefmt is not None else DEFAULT_DATEFMT,
    )

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'expcharts' package logger.

    Use like:
        logger = get_logger(__name__)
    """
    if name is None:
        name = LOGGER_NAME
    return logging.getLogger(name)
