"""Tests for expcharts logging helpers."""

from __future__ import annotations

import logging
import sys

import expcharts
from expcharts.utils.logging import LOGGER_NAME, configure_logging, get_logger


def _stderr_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
    ]


def test_package_logger_has_null_handler():
    logger = logging.getLogger(LOGGER_NAME)
    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)
    assert expcharts.__version__


def test_get_logger_default_name():
    assert get_logger().name == "expcharts"
    assert get_logger("expcharts.curves").name == "expcharts.curves"


def test_configure_logging_does_not_duplicate_handlers():
    logger = logging.getLogger(LOGGER_NAME)
    saved = logger.handlers[:]
    try:
        configure_logging(level="DEBUG", force=True)
        configure_logging(level="DEBUG")
        assert len(_stderr_handlers(logger)) == 1
        assert logger.level == logging.DEBUG
    finally:
        for h in logger.handlers[:]:
            logger.removeHandler(h)
        for h in saved:
            logger.addHandler(h)
        logger.setLevel(logging.NOTSET)


def test_configure_logging_reads_env_level(monkeypatch):
    monkeypatch.setenv("EXPCHARTS_LOG_LEVEL", "warning")
    logger = logging.getLogger(LOGGER_NAME)
    saved = logger.handlers[:]
    try:
        configure_logging(force=True)
        assert logger.level == logging.WARNING
    finally:
        for h in logger.handlers[:]:
            logger.removeHandler(h)
        for h in saved:
            logger.addHandler(h)
        logger.setLevel(logging.NOTSET)


def test_configure_logging_never_touches_root():
    root_handlers = logging.getLogger().handlers[:]
    logger = logging.getLogger(LOGGER_NAME)
    saved = logger.handlers[:]
    try:
        configure_logging(level="INFO", force=True)
        assert logging.getLogger().handlers == root_handlers
    finally:
        for h in logger.handlers[:]:
            logger.removeHandler(h)
        for h in saved:
            logger.addHandler(h)


def test_missing_inputs_log_at_debug(caplog):
    from expcharts.curves.normal_curve import synthesize_normal_curves

    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        assert synthesize_normal_curves(None, 0.06, 100, 100) is None
    records = [r for r in caplog.records if r.name == "expcharts.curves.normal_curve"]
    assert records
    assert all(r.levelno == logging.DEBUG for r in records)
    assert "no distribution curves" in records[0].getMessage()
