# /tests/test_logging_config.py

import logging

import pytest

from app.core.config import Settings
from app.core.logging_config import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_setup_logging_keeps_existing_handlers(root_logger):
    """
    GIVEN: a root logger that already has a handler (the server's or pytest's).
    THEN:  setup_logging leaves it attached and adds nothing of its own.
    """
    existing = logging.NullHandler()
    root_logger.addHandler(existing)
    before = list(root_logger.handlers)

    setup_logging(Settings(log_level="DEBUG"))

    assert existing in root_logger.handlers
    assert root_logger.handlers == before
    assert root_logger.level == logging.DEBUG


def test_setup_logging_adds_a_stream_handler_when_none_exists(root_logger):
    root_logger.handlers[:] = []

    setup_logging(Settings(log_level="warning"))

    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], logging.StreamHandler)
    assert root_logger.level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
