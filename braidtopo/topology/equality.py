# braidtopo/topology/equality.py
"""
Braid isotopy through loop coordinates.

The action of B_n on multicurves is faithful, and the multicurve obtained by
acting on the canonical loops already determines the braid. Two braids on
the same number of strands are therefore isotopic exactly when their loop
coordinates agree, which turns equality into a single linear-time pass of
integer arithmetic (Dehornoy-Dynnikov).

Overflow of the fixed-width backends is not fatal here: coordinates are
computed leniently, an OverflowWarning is emitted, and the comparison result
is returned anyway. Use backend="bigint" when the warning matters.
"""

import warnings
from typing import Any, Union

from braidtopo.errors import ConfigurationError, OverflowWarning
from braidtopo.topology.action import act
from braidtopo.topology.loop import LoopCoordinate
from braidtopo.topology.numeric import NumericBackend, OverflowGuard, get_backend
from braidtopo.utils.logging import get_logger

logger = get_logger(__name__)


BASES = ("default", "right", "left", "dehornoy", "bp")


def _mirror(loop: LoopCoordinate, negate_a: bool, guard: OverflowGuard) -> LoopCoordinate:
    """
    Report coordinates with the puncture order reversed.

    The b coordinates change sign under the reflection; negate_a also flips
    the a coordinates (Dehornoy's convention). Negation goes through the
    backend so that a wrapped minimum value is reported to the guard.
    """
    be = loop.backend
    coords = loop.container
    m = coords.shape[1] // 2
    a_cols = [coords[:, j] for j in reversed(range(m))]
    b_cols = [be.negate(coords[:, m + j], guard) for j in reversed(range(m))]
    if negate_a:
        a_cols = [be.negate(col, guard) for col in a_cols]
    return LoopCoordinate._wrap(be.stack_columns(a_cols + b_cols), be, loop.orientation, loop._single)


def loopcoords(
    b: Any,
    basis: str = "default",
    backend: Union[str, NumericBackend, None] = None,
    strict: bool = False,
) -> LoopCoordinate:
    """
    Loop coordinates of a braid.

    Args:
        b: BraidWord
        basis: "default" (alias "right") acts on LoopCoordinate.basis(b.n);
               "left" acts with the inverse braid and mirrors the puncture
               order; "dehornoy" is "left" with the a coordinates negated;
               "bp" acts on the canonical loops with a boundary puncture
        backend: Numeric backend selector (default int64)
        strict: Raise on overflow instead of warning

    Returns:
        A single LoopCoordinate

    Raises:
        UnsupportedOperationError: If b is not a BraidWord (time-stamped
                                   braids included)

    Example:
        >>> loopcoords(BraidWord([1, -2, 3])).rows()
        [[1, -2, 1, -2, -2, 2]]
    """
    b = _braid(b, "loopcoords")
    if basis not in BASES:
        raise ConfigurationError(
            problem=f"Unknown loop-coordinate basis '{basis}'",
            cause=f"Basis must be one of: {', '.join(BASES)}",
            recovery="Use basis='default'",
        )
    n = max(b.n, 2)
    be = get_backend(backend)

    if basis in ("default", "right"):
        return act(b, LoopCoordinate.basis(n, backend=be), strict=strict)
    if basis == "bp":
        return act(b, LoopCoordinate.basis(n, "bp", backend=be), strict=strict)

    guard = OverflowGuard(strict=strict)
    inverse = act(b.inv(), LoopCoordinate.basis(n, backend=be), strict=strict)
    mirrored = _mirror(inverse, basis == "dehornoy", guard)
    if guard.overflowed:
        message = (
            f"Integer overflow in the {be.name} backend while mirroring the "
            f"{basis} coordinates of {b}; the result is unreliable"
        )
        logger.warning(message)
        warnings.warn(OverflowWarning(message, guard.conditions), stacklevel=2)
    return mirrored


def _braid(b: Any, operation: str) -> Any:
    # braid.py imports this module
    from braidtopo.topology.braid import require_braid

    return require_braid(
        b, operation, recovery="Compare time-stamped braids with ==, or use b.braid for isotopy"
    )


def eq(b1: Any, b2: Any, backend: Union[str, NumericBackend, None] = None) -> bool:
    """
    Isotopy test: same strand count and same loop coordinates.

    Braids on one strand are always equal (B_1 is trivial). Time-stamped
    braids are rejected: their equality also compares crossing times.

    Warns:
        OverflowWarning: If the fixed-width backend overflowed; the result
                         may then be wrong
    """
    b1, b2 = _braid(b1, "eq"), _braid(b2, "eq")
    if b1.n != b2.n:
        return False
    if b1.n < 2:
        return True
    return loopcoords(b1, backend=backend) == loopcoords(b2, backend=backend)


def lexeq(b1: Any, b2: Any) -> bool:
    """Lexical equality: same strand count and identical words."""
    b1, b2 = _braid(b1, "lexeq"), _braid(b2, "lexeq")
    return b1.n == b2.n and tuple(b1.word) == tuple(b2.word)


def is_trivial(b: Any, backend: Union[str, NumericBackend, None] = None) -> bool:
    """True when b is isotopic to the identity on b.n strands."""
    b = _braid(b, "is_trivial")
    return eq(b, b.power(0), backend=backend)
