"""Type-safe configuration loader with CLI override support.

Configuration comes from dataclass defaults, optionally a preset module
(imported, never exec()ed), then --key=value overrides whose types are
checked against the defaults.

Example usage:
    from braidtopo.config.loader import load_config
    from braidtopo.config.base import BraidConfig

    # Load with CLI overrides
    config = load_config(BraidConfig, ['--backend=bigint', '--iterations=30'])

    # Load from preset module
    config = load_config(BraidConfig, ['braidtopo.config.presets.exact', '--length=minlength'])
"""

import sys
import importlib
from ast import literal_eval
from dataclasses import fields, MISSING
from typing import TypeVar, Type, List, Dict, Any, Optional

from braidtopo.errors import ValidationError, ConfigurationError
from braidtopo.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


def load_config(
    config_class: Type[T],
    args: Optional[List[str]] = None,
    show_help: bool = True
) -> T:
    """Load configuration with type-safe CLI overrides.

    Args:
        config_class: The dataclass type to instantiate (e.g., BraidConfig)
        args: Command-line arguments to parse (defaults to sys.argv[1:])
        show_help: Whether to show help and exit when --help is passed

    Returns:
        An instance of config_class with all overrides applied

    Raises:
        ValidationError: If arguments are malformed or types don't match
        ConfigurationError: If config values are invalid

    Example:
        >>> config = load_config(BraidConfig, ['--iterations=20'])
        >>> config.iterations
        20
    """
    if args is None:
        args = sys.argv[1:]

    if show_help and '--help' in args:
        _print_help(config_class)
        sys.exit(0)

    config_module_name = None
    overrides: Dict[str, Any] = {}

    for arg in args:
        if '=' not in arg:
            # A bare argument names a preset module
            if arg.startswith('--'):
                raise ValidationError(
                    problem="Invalid config module argument format",
                    cause=f"Config module argument '{arg}' cannot start with '--'",
                    recovery="Use either: braidtopo.config.presets.exact OR --key=value"
                )
            config_module_name = arg
        else:
            if not arg.startswith('--'):
                raise ValidationError(
                    problem="Invalid override argument format",
                    cause=f"Override argument '{arg}' must start with '--'",
                    recovery="Use format: --key=value (e.g., --backend=bigint)"
                )
            key, val = arg.split('=', 1)
            overrides[key[2:]] = val

    config_dict = _get_default_config(config_class)

    if config_module_name:
        preset_values = load_preset(config_module_name)
        unknown = sorted(set(preset_values) - set(config_dict))
        if unknown:
            raise ValidationError(
                problem=f"Preset {config_module_name} sets unknown keys",
                cause=f"{', '.join(unknown)} are not fields of {config_class.__name__}",
                recovery=f"Use only: {', '.join(sorted(config_dict))}"
            )
        logger.info(f"Loaded {len(preset_values)} settings from {config_module_name}")
        config_dict.update(preset_values)

    for key, val_str in overrides.items():
        if key not in config_dict:
            available = ', '.join(sorted(config_dict.keys()))
            raise ValidationError(
                problem=f"Unknown config key: {key}",
                cause=f"'{key}' is not a valid configuration parameter for {config_class.__name__}",
                recovery=f"Use one of: {available}"
            )

        expected_type = type(config_dict[key])

        try:
            parsed_val = literal_eval(val_str)
        except (SyntaxError, ValueError):
            # Bare words such as bigint are strings
            parsed_val = val_str

        # Integers widen to float fields
        if expected_type is float and type(parsed_val) is int:
            parsed_val = float(parsed_val)

        if type(parsed_val) != expected_type:
            raise ValidationError(
                problem="Configuration type mismatch",
                cause=f"Cannot override '{key}': expected {expected_type.__name__}, got {type(parsed_val).__name__}",
                recovery=f"Provide a value of type {expected_type.__name__} (current value: {config_dict[key]})"
            )

        logger.debug(f"Overriding: {key} = {parsed_val}")
        config_dict[key] = parsed_val

    try:
        return config_class(**config_dict)
    except TypeError as e:
        raise ConfigurationError(
            problem=f"Failed to create {config_class.__name__}",
            cause=str(e),
            recovery="Check that all required fields are provided and types are correct"
        )


def _get_default_config(config_class: Type[T]) -> Dict[str, Any]:
    """Extract default values from a dataclass.

    Args:
        config_class: The dataclass type to extract defaults from

    Returns:
        Dictionary mapping field names to default values
    """
    config_dict = {}
    for field in fields(config_class):
        if field.default is not MISSING:
            config_dict[field.name] = field.default
        elif field.default_factory is not MISSING:
            config_dict[field.name] = field.default_factory()

    return config_dict


def load_preset(module_name: str) -> Dict[str, Any]:
    """Import a preset module and extract its public plain values.

    Args:
        module_name: Dotted module path (e.g., 'braidtopo.config.presets.exact')

    Returns:
        Dictionary of configuration values from the module

    Raises:
        ValidationError: If the module cannot be imported
    """
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValidationError(
            problem=f"Cannot load config module: {module_name}",
            cause=str(e),
            recovery="Provide a valid module path (e.g., 'braidtopo.config.presets.exact')"
        )

    config_values = {}
    for name in dir(module):
        if name.startswith('_'):
            continue
        value = getattr(module, name)
        # Skip imported modules, classes and functions
        if isinstance(value, (bool, int, float, str)):
            config_values[name] = value

    return config_values


def _print_help(config_class: Type) -> None:
    """Print help message for config loading.

    Args:
        config_class: The config dataclass to show help for
    """
    print(f"""
Type-Safe Configuration Loader - {config_class.__name__}

Usage:
    load_config(BraidConfig, [preset_module, --key=value, ...])

Examples:
    braidtopo.config.presets.exact
    --backend=bigint --iterations=30

Available Configuration Options for {config_class.__name__}:
""")

    for field in fields(config_class):
        default_str = ""
        if field.default is not MISSING:
            default_str = f" (default: {field.default})"
        elif field.default_factory is not MISSING:
            default_str = " (default: <factory>)"

        type_hint = field.type
        type_name = type_hint.__name__ if hasattr(type_hint, '__name__') else str(type_hint)

        print(f"    --{field.name}=<{type_name}>{default_str}")

    print("""
Note: Boolean values should be 'True' or 'False' (case-sensitive)
      Strings, numbers, and other Python literals are parsed automatically
""")
