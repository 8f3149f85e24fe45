"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from dep_verify.utils.logging import ROOT_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_root_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.mark.parametrize("kwargs,level", [
    ({}, logging.WARNING),
    ({"verbose": True}, logging.INFO),
    ({"verbose": True, "debug": True}, logging.DEBUG),
])
def test_levels(kwargs, level):
    setup_logging(**kwargs)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    assert logger.level == level
    assert [type(handler) for handler in logger.handlers] == [RichHandler]


def test_repeated_setup_does_not_duplicate_handlers():
    setup_logging()
    setup_logging(verbose=True)

    assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1


def test_log_file(tmp_path):
    log_file = tmp_path / "depverify.log"
    setup_logging(verbose=True, log_file=log_file)

    get_logger("Scanner").info("Scanning directory: /project")
    for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
        handler.flush()

    content = log_file.read_text()
    assert "dep_verify.Scanner - INFO - Scanning directory: /project" in content
