"""Unit tests for CLI logging configuration."""

import logging

import pytest

from glfm_markdown.logging_utils import PACKAGE_LOGGER_NAME, configure_logging, resolve_log_level


@pytest.mark.unit
class TestLoggingConfiguration:
    """Tests for configure_logging and resolve_log_level."""

    @pytest.mark.parametrize(
        "value,expected",
        [("debug", logging.DEBUG), ("ERROR", logging.ERROR), (logging.INFO, logging.INFO), ("bogus", logging.WARNING)],
    )
    def test_resolve_log_level(self, value, expected):
        """Test level names and numbers resolve to numeric levels."""
        assert resolve_log_level(value) == expected

    def test_only_package_logger_configured(self):
        """Test the root logger is left alone."""
        root_handlers = list(logging.getLogger().handlers)
        logger = configure_logging("INFO")
        assert logger.name == PACKAGE_LOGGER_NAME
        assert logger.level == logging.INFO
        assert logger.propagate is False
        assert logging.getLogger().handlers == root_handlers

    def test_reconfigure_replaces_handlers(self):
        """Test calling twice does not duplicate handlers."""
        configure_logging("INFO")
        logger = configure_logging("DEBUG")
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        """Test records are also written to the log file."""
        log_path = tmp_path / "glfm.log"
        logger = configure_logging("DEBUG", log_file=str(log_path), trace_mode=True)
        logging.getLogger("glfm_markdown.test").debug("hello from test")
        for handler in logger.handlers:
            handler.flush()
        text = log_path.read_text(encoding="utf-8")
        assert "hello from test" in text
        assert "[glfm_markdown.test]" in text
