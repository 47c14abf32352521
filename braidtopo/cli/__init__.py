"""CLI utilities for braidtopo.

This module provides rich-formatted command-line interfaces with:
- Colored help output via rich.console
- Grouped argument sections (Arithmetic, Loops, Metrics)
- Preset module support
- Example usage sections
"""

from braidtopo.cli.help_formatter import (
    RichArgumentParser,
    RichHelpFormatter,
    create_parser_from_dataclass,
    create_parser_from_defaults,
)

__all__ = [
    "RichArgumentParser",
    "RichHelpFormatter",
    "create_parser_from_dataclass",
    "create_parser_from_defaults",
]
