"""Tests for package logging configuration."""

import logging

import pytest

from authbind.logging_config import LOG_FORMAT, configure_app_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("authbind")
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


def test_sets_level(package_logger):
    assert configure_app_logging("debug") is package_logger
    assert package_logger.level == logging.DEBUG
    assert package_logger.propagate is True


def test_attaches_handler_when_nothing_handles_records(package_logger, monkeypatch):
    monkeypatch.setattr(logging.getLogger(), "handlers", [])
    package_logger.handlers = []

    configure_app_logging("INFO")
    configure_app_logging("INFO")

    assert len(package_logger.handlers) == 1
    assert package_logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_leaves_handlers_to_host_application(package_logger, monkeypatch):
    monkeypatch.setattr(logging.getLogger(), "handlers", [logging.NullHandler()])
    package_logger.handlers = []

    configure_app_logging("WARNING")

    assert package_logger.handlers == []
