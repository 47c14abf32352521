"""Rich-formatted argparse for braidtopo CLI scripts.

Features:
- Rich-formatted colored help output
- Grouped arguments (Arithmetic, Metrics, ...)
- Preset module support (--preset=braidtopo.config.presets.exact)
- Flags generated from a dataclass, types inferred from defaults
- Example usage sections

Usage:
    from braidtopo.cli.help_formatter import create_parser_from_dataclass

    parser = create_parser_from_dataclass(
        BraidConfig,
        description="Report loop coordinates of a braid",
        groups={'Arithmetic': ['backend', 'strict']},
        examples=["python -m braidtopo.cli.braid_info 1 -2 3"],
    )
    args = parser.parse_args()
"""

import argparse
from dataclasses import MISSING, fields, is_dataclass
from typing import Any, Dict, List, Optional, TextIO, Union

from rich.console import Console


class RichHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Argparse formatter with wider columns for rich output.

    Note: This is used internally by RichArgumentParser.
    """

    def __init__(self, prog: str, **kwargs: Any) -> None:
        super().__init__(prog, max_help_position=40, width=100, **kwargs)


class RichArgumentParser(argparse.ArgumentParser):
    """ArgumentParser with rich-formatted help output.

    Attributes:
        examples: List of example usage strings to display in help
        _rich_console: Rich console for colored output
    """

    def __init__(
        self,
        *args,
        examples: Optional[List[str]] = None,
        **kwargs
    ):
        kwargs.setdefault('formatter_class', RichHelpFormatter)
        super().__init__(*args, **kwargs)

        self.examples = examples or []
        self._rich_console = Console()

    def format_help(self) -> str:
        """Format help message, with an examples section when provided."""
        help_text = super().format_help()

        if self.examples:
            help_text += "\n[bold cyan]Examples:[/bold cyan]\n"
            for example in self.examples:
                help_text += f"  [dim]$[/dim] [green]{example}[/green]\n"

        return help_text

    def print_help(self, file: Optional[TextIO] = None) -> None:
        """Print help with rich formatting to terminal.

        Args:
            file: Output file (default: rich console on stdout)
        """
        if file is not None:
            print(self.format_help(), file=file)
            return

        formatted_lines = []
        for line in self.format_help().split('\n'):
            # Section headers and flags get highlighted
            if line and not line.startswith(' ') and line.endswith(':'):
                formatted_lines.append(f"[bold cyan]{line}[/bold cyan]")
            elif line.strip().startswith('-'):
                formatted_lines.append(f"[yellow]{line}[/yellow]")
            else:
                formatted_lines.append(line)

        self._rich_console.print('\n'.join(formatted_lines), highlight=False)


def create_parser_from_defaults(
    defaults: Dict[str, Any],
    description: str,
    groups: Optional[Dict[str, List[str]]] = None,
    examples: Optional[List[str]] = None,
    preset_help: str = "Preset module applied before CLI flags",
) -> RichArgumentParser:
    """Create rich argparse parser from default values.

    Args:
        defaults: Dictionary of parameter names to default values
        description: Program description for help text
        groups: Optional dict mapping group names to lists of param names
                Example: {'Arithmetic': ['backend', 'strict']}
        examples: Optional list of example usage strings
        preset_help: Help text for the --preset flag

    Returns:
        RichArgumentParser instance configured with all arguments

    Example:
        >>> parser = create_parser_from_defaults(
        ...     defaults={'backend': 'int64', 'iterations': 10},
        ...     description="Braid report",
        ...     groups={'Arithmetic': ['backend']},
        ... )
        >>> parser.parse_args(['--iterations', '20']).iterations
        20
    """
    parser = RichArgumentParser(
        description=description,
        examples=examples,
        epilog="Note: Presets override defaults, CLI flags override presets.",
    )

    parser.add_argument(
        '--preset',
        default=None,
        help=preset_help,
    )

    if groups:
        for group_name, param_names in groups.items():
            group = parser.add_argument_group(
                f"[{group_name}]",
                description=f"{group_name} parameters"
            )
            for param_name in param_names:
                if param_name in defaults:
                    _add_argument_from_default(group, param_name, defaults[param_name])

        grouped_params = set()
        for param_names in groups.values():
            grouped_params.update(param_names)

        ungrouped_params = set(defaults.keys()) - grouped_params
        if ungrouped_params:
            other_group = parser.add_argument_group(
                "[Other]",
                description="Other parameters"
            )
            for param_name in sorted(ungrouped_params):
                _add_argument_from_default(other_group, param_name, defaults[param_name])
    else:
        for param_name, default_value in defaults.items():
            _add_argument_from_default(parser, param_name, default_value)

    return parser


def _add_argument_from_default(
    parser_or_group: Union[argparse.ArgumentParser, argparse._ArgumentGroup],
    param_name: str,
    default_value: Union[str, int, float, bool],
) -> None:
    """Add an argument to parser/group inferred from default value.

    Args:
        parser_or_group: ArgumentParser or argument group
        param_name: Parameter name (flag is --param_name)
        default_value: Default value (type is inferred from this)
    """
    flag_name = f"--{param_name}"

    # Booleans become switches that flip the default
    if isinstance(default_value, bool):
        parser_or_group.add_argument(
            flag_name,
            action='store_true' if not default_value else 'store_false',
            default=default_value,
            help=f"(default: {default_value})"
        )
    else:
        parser_or_group.add_argument(
            flag_name,
            type=type(default_value),
            default=default_value,
            help=f"(default: {default_value})"
        )


def dataclass_to_defaults(dataclass_type: type) -> Dict[str, Any]:
    """Extract default values from a dataclass into a dictionary.

    Args:
        dataclass_type: A dataclass type (not an instance)

    Returns:
        Dictionary mapping field names to their default values

    Raises:
        TypeError: If dataclass_type is not a dataclass

    Example:
        >>> dataclass_to_defaults(BraidConfig)['backend']
        'int64'
    """
    if not is_dataclass(dataclass_type):
        raise TypeError(f"{dataclass_type} is not a dataclass")

    defaults = {}
    for field in fields(dataclass_type):
        if field.default is not MISSING:
            defaults[field.name] = field.default
        elif field.default_factory is not MISSING:
            defaults[field.name] = field.default_factory()
        # Required fields have no flag default

    return defaults


def create_parser_from_dataclass(
    dataclass_type: type,
    description: str,
    groups: Optional[Dict[str, List[str]]] = None,
    examples: Optional[List[str]] = None,
    preset_help: str = "Preset module applied before CLI flags",
) -> RichArgumentParser:
    """Create rich argparse parser directly from a dataclass.

    Combines dataclass_to_defaults() and create_parser_from_defaults().

    Args:
        dataclass_type: A dataclass type defining configuration
        description: Program description for help text
        groups: Optional dict mapping group names to lists of param names
        examples: Optional list of example usage strings
        preset_help: Help text for the --preset flag

    Returns:
        RichArgumentParser instance configured with all dataclass fields

    Raises:
        TypeError: If dataclass_type is not a dataclass
    """
    defaults = dataclass_to_defaults(dataclass_type)

    return create_parser_from_defaults(
        defaults=defaults,
        description=description,
        groups=groups,
        examples=examples,
        preset_help=preset_help,
    )
