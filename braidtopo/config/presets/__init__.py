"""Configuration presets for braid reports.

Each preset is a plain module of BraidConfig field values, loaded by name:

- exact: arbitrary-precision arithmetic, long entropy runs, abort on overflow
- fast: floating-point arithmetic for quick growth estimates of long braids

Usage:
    from braidtopo.config import BraidConfig, load_config

    config = load_config(BraidConfig, ['braidtopo.config.presets.exact'])
"""
