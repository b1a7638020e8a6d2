import logging
import re

import pytest

from frakt.logsetup import TRACE, init_logger, log_level


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.parametrize(
    "flags, expected",
    [
        ((0, 0, 0), logging.ERROR),
        ((0, 1, 0), logging.DEBUG),
        ((1, 1, 0), logging.DEBUG),
        ((1, 0, 0), logging.INFO),
        ((1, 0, 1), logging.INFO),
        ((0, 0, 1), TRACE),
        ((0, 1, 1), TRACE),
        ((2, 0, 0), logging.WARNING),
        ((0, 2, 0), logging.WARNING),
        ((0, 0, 2), logging.WARNING),
    ],
)
def test_log_level_table(flags, expected):
    assert log_level(*flags) == expected


def test_trace_is_below_debug():
    assert log_level(0, 0, 1) < log_level(0, 1, 0)
    assert logging.getLevelName(log_level(0, 0, 1)) == "TRACE"


def test_init_logger_sets_root_level(restore_root_logger):
    init_logger(0, 1, 0)
    assert restore_root_logger.level == log_level(0, 1, 0)
    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1


def test_init_logger_format_has_millisecond_utc_timestamp(restore_root_logger):
    init_logger(1, 0, 0)
    assert restore_root_logger.level == log_level(1, 0, 0)
    handler = restore_root_logger.handlers[0]
    record = logging.LogRecord("frakt", logging.INFO, __file__, 1, "hello", None, None)
    line = handler.format(record)
    assert re.fullmatch(
        r"\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z INFO frakt\] hello", line
    )


def test_init_logger_can_be_called_again(restore_root_logger):
    init_logger(0, 0, 0)
    init_logger(0, 0, 1)
    assert restore_root_logger.level == log_level(0, 0, 1)
    assert restore_root_logger.level == TRACE
    assert len(restore_root_logger.handlers) == 1