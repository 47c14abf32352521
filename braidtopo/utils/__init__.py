"""Utility modules for braidtopo.

This package contains the shared logging setup used by the topology
engine and the command-line tools.
"""

from braidtopo.utils.logging import get_logger, configure_logging, RichLogger

__all__ = [
    "get_logger",
    "configure_logging",
    "RichLogger",
]
