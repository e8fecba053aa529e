"""Tests for the shared logging setup"""

import logging

import pytest

from form_designer.logging_config import NOISY_LOGGERS, InfoFilter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    noisy_levels = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, noisy_level in noisy_levels.items():
        logging.getLogger(name).setLevel(noisy_level)


def _record(level):
    return logging.LogRecord("form_designer", level, __file__, 1, "message", None, None)


def test_info_filter_passes_only_below_warning():
    info_filter = InfoFilter()

    assert info_filter.filter(_record(logging.DEBUG))
    assert info_filter.filter(_record(logging.INFO))
    assert not info_filter.filter(_record(logging.WARNING))
    assert not info_filter.filter(_record(logging.ERROR))


def test_setup_twice_does_not_duplicate_handlers(restore_root_logger):
    setup_logging("info")
    setup_logging("info")

    stdout_handler, stderr_handler = restore_root_logger.handlers
    assert restore_root_logger.level == logging.INFO
    assert any(isinstance(f, InfoFilter) for f in stdout_handler.filters)
    assert stderr_handler.level == logging.WARNING


def test_noisy_loggers_are_quieted_above_debug(restore_root_logger):
    setup_logging("INFO")

    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_unknown_level_falls_back_to_info(restore_root_logger):
    setup_logging("chatty")

    assert restore_root_logger.level == logging.INFO
