"""Base configuration for braid computations.

BraidConfig collects the knobs shared by the command-line tools: which
numeric backend to compute in, which loop basis to report, which length
functional to use for complexity, and how long to iterate for entropy.
"""

from dataclasses import dataclass

from braidtopo.errors import ConfigurationError


BACKEND_NAMES = (
    "int32", "int64", "bigint", "double",
    "fixed-32", "fixed-64", "arbitrary-precision", "vpi", "floating", "float64",
)
BASIS_NAMES = ("default", "right", "left", "dehornoy", "bp")
LENGTH_NAMES = ("intaxis", "minlength")


@dataclass
class BraidConfig:
    """Configuration for braid reports.

    Attributes:
        backend: Numeric backend (int32, int64, bigint, double or an alias)
        basis: Loop-coordinate basis to report (default, left, dehornoy, bp)
        length: Length functional for complexity (intaxis or minlength)
        log_base: Logarithm base for complexity; 0 means natural log
        iterations: Number of braid applications for the entropy estimate
        strict: Abort on fixed-width overflow instead of warning
    """

    backend: str = "int64"
    basis: str = "default"
    length: str = "intaxis"
    log_base: float = 0.0
    iterations: int = 10
    strict: bool = False

    def __post_init__(self):
        if self.backend not in BACKEND_NAMES:
            raise ConfigurationError(
                problem=f"Unknown numeric backend '{self.backend}'",
                cause=f"backend must be one of: {', '.join(BACKEND_NAMES)}",
                recovery="Use backend='bigint' for exact results or 'int64' for speed",
            )
        if self.basis not in BASIS_NAMES:
            raise ConfigurationError(
                problem=f"Unknown loop basis '{self.basis}'",
                cause=f"basis must be one of: {', '.join(BASIS_NAMES)}",
                recovery="Use basis='default'",
            )
        if self.length not in LENGTH_NAMES:
            raise ConfigurationError(
                problem=f"Unknown length type '{self.length}'",
                cause=f"length must be one of: {', '.join(LENGTH_NAMES)}",
                recovery="Use length='intaxis' or length='minlength'",
            )
        if self.iterations < 1:
            raise ConfigurationError(
                problem=f"iterations ({self.iterations}) must be at least 1",
                cause="The entropy estimate needs at least one application of the braid",
                recovery="Set iterations to a positive integer (e.g., 10)",
            )
        if self.log_base < 0 or self.log_base == 1:
            raise ConfigurationError(
                problem=f"Invalid log_base {self.log_base}",
                cause="The logarithm base must be positive and different from 1 (0 for natural log)",
                recovery="Use log_base=0.0, 2.0 or 10.0",
            )
