"""Tests for unified logging module with rich-formatted output."""

from io import StringIO

import pytest


@pytest.fixture
def captured():
    """Route loguru output into a buffer at DEBUG level, restore afterwards."""
    from braidtopo.utils.logging import configure_logging

    buffer = StringIO()
    configure_logging(level="DEBUG", format="{level} | {message}", sink=buffer)
    yield buffer
    configure_logging()


class TestRichLogger:
    """Test suite for the RichLogger class."""

    def test_logger_creation(self):
        """Test that logger can be created with a name."""
        from braidtopo.utils.logging import RichLogger

        logger = RichLogger("test_module")
        assert logger.name == "test_module"
        assert logger._logger is not None

    def test_messages_prefixed_with_name(self, captured):
        """Test standard methods log with the logger name."""
        from braidtopo.utils.logging import RichLogger

        logger = RichLogger("braids")
        logger.info("info message")
        logger.warning("warning message")
        logger.error("error message")
        logger.debug("debug message")

        output = captured.getvalue()
        assert "INFO | [braids] info message" in output
        assert "WARNING | [braids] warning message" in output
        assert "ERROR | [braids] error message" in output
        assert "DEBUG | [braids] debug message" in output

    def test_metric_formatting(self, captured):
        """Test metric() shows floats with 4 decimals and ints exactly."""
        from braidtopo.utils.logging import RichLogger

        logger = RichLogger("test")
        logger.metric("complexity", 0.91629073, unit="nats")
        logger.metric("minlength", 24)

        output = captured.getvalue()
        assert "METRIC complexity=0.9163 nats" in output
        assert "METRIC minlength=24" in output

    def test_progress_is_debug_only(self, captured):
        """Test progress() logs at debug level with a percentage."""
        from braidtopo.utils.logging import RichLogger

        RichLogger("test").progress("loop_entropy", 1, 4)
        assert "DEBUG | [test] PROGRESS loop_entropy 1/4 (25.0%)" in captured.getvalue()

    def test_progress_zero_total(self, captured):
        """Test progress() handles zero total gracefully."""
        from braidtopo.utils.logging import RichLogger

        RichLogger("test").progress("Task", 0, 0)
        assert "(0.0%)" in captured.getvalue()

    def test_progress_hidden_at_info(self):
        """Test progress() prints nothing at the default level."""
        from braidtopo.utils.logging import RichLogger, configure_logging

        buffer = StringIO()
        configure_logging(level="INFO", sink=buffer)
        try:
            RichLogger("test").progress("Task", 1, 2)
        finally:
            configure_logging()
        assert buffer.getvalue() == ""

    def test_section_method(self, captured):
        """Test section() logs the title."""
        from braidtopo.utils.logging import RichLogger

        RichLogger("test").section("Braid report")
        assert "=== Braid report ===" in captured.getvalue()

    def test_bind_method(self):
        """Test bind() method for structured logging."""
        from braidtopo.utils.logging import RichLogger

        logger = RichLogger("test")
        bound_logger = logger.bind(braid="< 1 -2 >")
        assert bound_logger is logger

    def test_table_method(self):
        """Test table() accepts rich renderables."""
        from rich.table import Table

        from braidtopo.utils.logging import RichLogger

        table = Table()
        table.add_column("Quantity")
        table.add_row("intaxis")
        RichLogger("test").table(table)


class TestGetLogger:
    """Test suite for the get_logger() function."""

    def test_get_logger_returns_rich_logger(self):
        """Test get_logger() returns RichLogger instance."""
        from braidtopo.utils.logging import RichLogger, get_logger

        logger = get_logger("test_module")
        assert isinstance(logger, RichLogger)
        assert logger.name == "test_module"

    def test_get_logger_multiple_instances(self):
        """Test get_logger() creates independent instances."""
        from braidtopo.utils.logging import get_logger

        assert get_logger("module1") is not get_logger("module2")


class TestConfigureLogging:
    """Test suite for the configure_logging() function."""

    def test_level_filters(self):
        """Test messages below the configured level are dropped."""
        from braidtopo.utils.logging import RichLogger, configure_logging

        buffer = StringIO()
        configure_logging(level="WARNING", format="{message}", sink=buffer)
        try:
            logger = RichLogger("test")
            logger.info("hidden")
            logger.warning("shown")
        finally:
            configure_logging()
        assert "hidden" not in buffer.getvalue()
        assert "shown" in buffer.getvalue()

    def test_env_var_level(self, monkeypatch):
        """Test configure_logging() respects LOG_LEVEL environment variable."""
        from braidtopo.utils.logging import RichLogger, configure_logging

        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        buffer = StringIO()
        configure_logging(format="{message}", sink=buffer)
        try:
            RichLogger("test").warning("quiet")
        finally:
            monkeypatch.delenv("LOG_LEVEL")
            configure_logging()
        assert buffer.getvalue() == ""

    def test_env_var_format(self, monkeypatch):
        """Test configure_logging() respects LOG_FORMAT environment variable."""
        from braidtopo.utils.logging import RichLogger, configure_logging

        monkeypatch.setenv("LOG_FORMAT", "custom|{message}")
        buffer = StringIO()
        configure_logging(sink=buffer)
        try:
            RichLogger("test").info("hello")
        finally:
            monkeypatch.delenv("LOG_FORMAT")
            configure_logging()
        assert "custom|[test] hello" in buffer.getvalue()

    def test_custom_theme(self):
        """Test configure_logging() with a partial custom theme."""
        from braidtopo.utils.logging import configure_logging

        configure_logging(theme={"metric": "bold magenta"})
        configure_logging()
