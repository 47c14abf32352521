"""Configuration module for braidtopo.

Exports:
    BraidConfig: Settings shared by the braid report tools
    load_config: Type-safe loader applying presets and --key=value overrides

Directory Structure:
    base.py: Configuration dataclass
    loader.py: Preset and CLI override handling
    presets/: Named presets (exact, fast)

Example:
    from braidtopo.config import BraidConfig, load_config

    config = load_config(BraidConfig, ['--backend=bigint'])
"""

from .base import BraidConfig
from .loader import load_config, load_preset

__all__ = [
    "BraidConfig",
    "load_config",
    "load_preset",
]
