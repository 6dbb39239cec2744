"""Tests for logging setup."""

import logging

import pytest
import structlog

from snapshot_compressor.configure_logging import configure_logging


@pytest.fixture
def restore_logging():
    """Restore root logger and structlog defaults after the test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_configure_logging_sets_level(restore_logging):
    """Test that the root logger gets the requested level and a stderr handler."""
    logging_dict = configure_logging(log_level="WARNING", colored_logs=False)

    assert logging.getLogger().level == logging.WARNING
    assert logging_dict["root"]["level"] == "WARNING"
    assert logging_dict["handlers"]["default"]["stream"] == "ext://sys.stderr"


def test_structlog_routed_through_stdlib(restore_logging, capsys):
    """Test that structlog events are rendered by the stdlib handler on stderr."""
    configure_logging(log_level="INFO", colored_logs=False)

    structlog.get_logger("snapshot_compressor.test").info("Compression finished", path="skipped")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Compression finished" in captured.err
    assert "path=skipped" in captured.err


def test_rich_tracebacks_formatter(restore_logging):
    """Test that rich tracebacks swap the exception formatter."""
    logging_dict = configure_logging(rich_tracebacks=True)

    renderer = logging_dict["formatters"]["console"]["processors"][-1]
    assert isinstance(renderer, structlog.dev.ConsoleRenderer)
