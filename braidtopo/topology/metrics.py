# braidtopo/topology/metrics.py
"""
Growth measures of braids: entropy estimate and complexity.

Both measures look at how much a braid stretches loops.

Entropy: for a pseudo-Anosov braid, the length of b^N l grows like
exp(N h) where h is the topological entropy. The estimate

    h ~ log(|b^N l| / |l|) / N

converges as N grows, but the coordinates grow exponentially with it, so
the iteration runs in strict overflow mode and aborts at the first overflow
rather than returning garbage. Switch to backend="bigint" for long runs.

Complexity (Dynnikov-Wiest): the log of how much the braid lengthens the
canonical loops with a boundary puncture E,

    C(b) = log |bE| - log |E|

where |.| is either the intersection number with the real axis minus
(n-1) (the part that survives for the trivial braid is removed), or the
minimal length with no correction.

Reference:
- Dynnikov, I. & Wiest, B. "On the complexity of braids" (2007)
- Thiffeault, J.-L. "Braids of entangled particle trajectories" (2010)
"""

import math
from typing import Any, List, Optional, Tuple, Union

from braidtopo.errors import ConfigurationError, ShapeError, UnsupportedOperationError
from braidtopo.topology.action import act
from braidtopo.topology.braid import require_braid
from braidtopo.topology.equality import loopcoords
from braidtopo.topology.loop import LoopCoordinate
from braidtopo.topology.numeric import NumericBackend, OverflowGuard
from braidtopo.utils.logging import get_logger

logger = get_logger(__name__)

_LENGTHS = {
    "intaxis": "intaxis",
    0: "intaxis",
    "minlength": "minlength",
    1: "minlength",
}

_TIME_STAMPED = "Use the finite-time braiding exponent of the underlying trajectories"


def length_selector(length: Union[str, int]) -> str:
    """
    Resolve a loop length functional.

    Args:
        length: "intaxis" (or 0) or "minlength" (or 1)

    Raises:
        UnsupportedOperationError: For any other selector
    """
    key = length.lower() if isinstance(length, str) else length
    if isinstance(key, bool) or key not in _LENGTHS:
        raise UnsupportedOperationError(
            problem=f"Unknown length type {length!r}",
            cause="Supported loop lengths are 'intaxis' (0) and 'minlength' (1)",
            recovery="Use length='intaxis' or length='minlength'",
        )
    return _LENGTHS[key]


def _measure(loop: LoopCoordinate, length: str, guard: OverflowGuard) -> List[Any]:
    values = getattr(loop, length)(guard)
    return values if loop.batch_size > 1 else [values]


def _log_ratio(num: Any, den: Any) -> float:
    if den <= 0 or num <= 0:
        raise ShapeError(
            problem="Cannot take the log of a zero loop length",
            cause=f"Loop lengths were {den} and {num}",
            recovery="Use a nonzero loop (not all coordinates zero)",
        )
    return math.log(num) - math.log(den)


def loop_entropy(
    b: Any,
    loop: Optional[LoopCoordinate] = None,
    iterations: int = 10,
    length: Union[str, int] = "minlength",
    backend: Union[str, NumericBackend, None] = None,
) -> Union[float, List[float]]:
    """
    Estimate topological entropy from the growth of an iterated loop.

    Args:
        b: BraidWord
        loop: Starting loop(s); defaults to the loop coordinates of b
        iterations: Number N of applications of b (N >= 1)
        length: Loop length functional, "minlength" (default) or "intaxis"
        backend: Numeric backend for the default loop, or to convert `loop` to

    Returns:
        log(|b^N l| / |l|) / N, a list for a batch of loops

    Raises:
        CoordinateOverflowError: If a fixed-width backend overflows
        ConfigurationError: If iterations < 1
        UnsupportedOperationError: For time-stamped braids
    """
    b = require_braid(b, "loop_entropy", recovery=_TIME_STAMPED)
    iterations = int(iterations)
    if iterations < 1:
        raise ConfigurationError(
            problem=f"Invalid iteration count {iterations}",
            cause="The entropy estimate needs at least one application of the braid",
            recovery="Use iterations >= 1",
        )
    length = length_selector(length)

    if loop is None:
        loop = loopcoords(b, backend=backend, strict=True)
    elif backend is not None:
        loop = loop.to(backend)

    guard = OverflowGuard(strict=True)
    start = _measure(loop, length, guard)
    current = loop
    for k in range(iterations):
        current = act(b, current, strict=True)
        logger.progress("loop_entropy", k + 1, iterations)
    end = _measure(current, length, guard)

    rates = [_log_ratio(e, s) / iterations for e, s in zip(end, start)]
    logger.debug(f"entropy estimate {rates} after {iterations} iterations ({length})")
    return rates if loop.batch_size > 1 else rates[0]


def complexity(
    b: Any,
    length: Union[str, int] = "intaxis",
    base: Optional[float] = None,
    backend: Union[str, NumericBackend, None] = None,
    return_loop: bool = False,
) -> Union[float, Tuple[float, LoopCoordinate]]:
    """
    Dynnikov-Wiest complexity of a braid.

    Args:
        b: BraidWord
        length: "intaxis" (0, default) or "minlength" (1)
        base: Logarithm base; None or 0 for the natural log
        backend: Numeric backend selector
        return_loop: Also return the image bE of the reference loops

    Returns:
        C, or (C, bE) when return_loop is set

    Example:
        >>> complexity(BraidWord([1, -2]))  # log(10 / 4)
        0.9162907318741551
    """
    b = require_braid(b, "complexity", recovery=_TIME_STAMPED)
    length = length_selector(length)

    reference = LoopCoordinate.basis(b.n, "bp", backend=backend)
    image = act(b, reference, strict=True)

    guard = OverflowGuard(strict=True)
    before = _measure(reference, length, guard)[0]
    after = _measure(image, length, guard)[0]
    if length == "intaxis":
        before -= b.n - 1
        after -= b.n - 1

    c = _log_ratio(after, before)
    if base:
        c /= math.log(base)
    return (c, image) if return_loop else c
