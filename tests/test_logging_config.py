"""
Tests for logging configuration.
"""

import json
import logging

import pytest
import structlog

from storefront.logging_config import configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Put structlog and the root logger back after each test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    structlog.reset_defaults()
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)


class TestConfigureLogging:
    """Test configure_logging."""

    def test_json_output(self, capsys):
        """Test JSON lines carry the event and bound fields."""
        logger = configure_logging("DEBUG", use_json=True)

        logger.info("cart_updated", storage_key="ts_cart", count=2)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "cart_updated"
        assert payload["level"] == "info"
        assert payload["count"] == 2
        assert "timestamp" in payload

    def test_level_filter(self, capsys):
        """Test messages below the configured level are dropped."""
        logger = configure_logging("WARNING", use_json=True)

        logger.info("hidden")
        logger.warning("shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out

    def test_console_output(self, capsys):
        """Test the console renderer is used by default."""
        logger = configure_logging("INFO", use_json=False)

        logger.info("catalog_indexed", entries=3)

        out = capsys.readouterr().out
        assert "catalog_indexed" in out
        assert "entries=3" in out

    def test_single_handler(self):
        """Test repeated configuration does not stack handlers."""
        configure_logging("INFO")
        configure_logging("INFO")

        assert len(logging.getLogger().handlers) == 1
        assert logging.getLogger().level == logging.INFO
