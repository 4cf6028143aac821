"""
Tests for structured logging setup.
"""

import structlog

from energy_monitor.core.logger import LOG_LEVELS, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def teardown_method(self):
        setup_logging()

    def test_console_renderer_by_default(self):
        """Test that console output is the default renderer."""
        setup_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_renderer(self):
        """Test that JSON output can be selected."""
        setup_logging(json_output=True)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_log_levels(self):
        assert set(LOG_LEVELS) == {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
