"""braidtopo - braid groups through Dynnikov loop coordinates.

A toolkit for braids of particle trajectories:
- Loop coordinates of multicurves in the punctured disk
- Piecewise-linear action of Artin generators with overflow-checked arithmetic
- Braid isotopy, entropy estimates and Dynnikov-Wiest complexity
- Time-stamped braids with chronological composition

Example:
    from braidtopo import BraidWord, LoopCoordinate

    b = BraidWord([1, -2, 3])
    loop = b.act_on(LoopCoordinate.basis(4))
    print(loop.intaxis(), loop.minlength())
"""

__version__ = "0.1.0"

# Lazy imports so that CLI utilities (e.g., --help) and the error/config
# modules load without importing torch.
def __getattr__(name):
    """Lazy import heavy dependencies only when accessed."""
    if name in ("BraidConfig", "load_config"):
        from braidtopo.config import BraidConfig, load_config
        return locals()[name]
    elif name in (
        "BraidWord",
        "ChronoBraid",
        "LoopCoordinate",
        "OverflowGuard",
        "get_backend",
        "loopcoords",
        "loop_entropy",
        "complexity",
    ):
        from braidtopo.topology import (
            BraidWord,
            ChronoBraid,
            LoopCoordinate,
            OverflowGuard,
            get_backend,
            loopcoords,
            loop_entropy,
            complexity,
        )
        return locals()[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    # Version
    "__version__",
    # Config
    "BraidConfig",
    "load_config",
    # Core types
    "BraidWord",
    "ChronoBraid",
    "LoopCoordinate",
    # Arithmetic
    "OverflowGuard",
    "get_backend",
    # Operations
    "loopcoords",
    "loop_entropy",
    "complexity",
]
