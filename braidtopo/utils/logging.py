"""
Unified logging module with rich-formatted output.

Integrates loguru's structured logging with rich's formatting capabilities
so that braid computations and the command-line tools report in one style.

Usage:
    from braidtopo.utils.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Computing loop coordinates")
    logger.metric("complexity", 0.916)
    logger.section("Braid report")
"""

import os
import sys
from typing import Any, Dict, Optional

from loguru import logger as loguru_logger
from rich.console import Console, RenderableType
from rich.theme import Theme

_DEFAULT_THEME = {
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "metric": "bold green",
    "section": "bold blue",
}

_console = Console(theme=Theme(_DEFAULT_THEME))


class RichLogger:
    """
    Logger that combines loguru with rich formatting.

    Provides standard logging methods (info, warning, error, debug) plus
    specialized methods for metrics, iteration progress and section headers.
    """

    def __init__(self, name: str):
        """
        Initialize logger with a name.

        Args:
            name: Logger name (typically __name__ or module name)
        """
        self.name = name
        self._logger = loguru_logger

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(f"[{self.name}] {message}", **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(f"[{self.name}] {message}", **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.error(f"[{self.name}] {message}", **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(f"[{self.name}] {message}", **kwargs)

    def metric(self, name: str, value: Any, unit: str = "", **kwargs: Any) -> None:
        """
        Log a metric with structured output and rich formatting.

        Args:
            name: Metric name
            value: Metric value (floats are shown with 4 decimals, integers exactly)
            unit: Optional unit string (e.g., "nats", "bits")
            **kwargs: Additional metadata
        """
        unit_str = f" {unit}" if unit else ""
        formatted_value = f"{value:.4f}" if isinstance(value, float) else str(value)

        _console.print(
            f"[metric]METRIC[/metric] {name}: [bold green]{formatted_value}{unit_str}[/bold green]"
        )

        # Also log to loguru for file/structured logging
        self._logger.info(f"METRIC {name}={formatted_value}{unit_str}", **kwargs)

    def progress(self, task: str, current: int, total: int) -> None:
        """
        Record iteration progress at debug level.

        Long iterations call this once per step, so nothing is printed to the
        console unless the loguru level admits DEBUG.

        Args:
            task: Task name/description
            current: Current step/iteration
            total: Total steps/iterations
        """
        percentage = (current / total) * 100 if total > 0 else 0
        self._logger.debug(
            f"[{self.name}] PROGRESS {task} {current}/{total} ({percentage:.1f}%)"
        )

    def section(self, title: str) -> None:
        """
        Print a visual section break with title.

        Args:
            title: Section title
        """
        _console.rule(f"[section]{title}[/section]")

        # Also log to loguru for file output
        self._logger.info(f"=== {title} ===")

    def bind(self, **kwargs: Any) -> "RichLogger":
        """
        Bind context to logger (for structured logging).

        Args:
            **kwargs: Context key-value pairs

        Returns:
            Self for chaining
        """
        self._logger = self._logger.bind(**kwargs)
        return self

    def table(self, renderable: RenderableType) -> None:
        """
        Print a Rich renderable object (e.g., Table, Panel, etc.).

        Args:
            renderable: Any Rich renderable object (Table, Panel, etc.)
        """
        _console.print(renderable)


def get_logger(name: str) -> RichLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ or module name)

    Returns:
        Configured RichLogger instance with rich formatting

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.metric("minlength", 24)
    """
    return RichLogger(name)


def configure_logging(
    level: Optional[str] = None,
    format: Optional[str] = None,
    sink: Any = sys.stderr,
    theme: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configure global logging settings.

    Supports environment variables for easy configuration:
    - LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR)
    - LOG_FORMAT: Set custom format template

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
               Defaults to LOG_LEVEL env var or "INFO"
        format: Optional custom format string for loguru.
                Defaults to LOG_FORMAT env var or default template
        sink: Output sink (default: stderr)
        theme: Optional custom theme dict for rich console.
               Keys: info, warning, error, metric, section

    Example:
        >>> configure_logging(level="DEBUG")
        >>> configure_logging(theme={"metric": "bold magenta"})
    """
    global _console

    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")

    if format is None:
        format = os.environ.get("LOG_FORMAT")
        if format is None:
            format = (
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<level>{message}</level>"
            )

    if theme is not None:
        merged = dict(_DEFAULT_THEME)
        merged.update(theme)
        _console = Console(theme=Theme(merged))

    # Remove default loguru handler
    loguru_logger.remove()

    loguru_logger.add(
        sink,
        format=format,
        level=level,
        colorize=True,
    )


# Configure default logging on module import
configure_logging()
