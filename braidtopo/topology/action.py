# braidtopo/topology/action.py
"""
Action of Artin generators on Dynnikov coordinates.

A braid acts on the punctured disk by a mapping class, and therefore on the
multicurves it contains. In Dynnikov coordinates each generator acts by a
piecewise-linear map built from max, min, + and -, touching only the two
coordinate pairs adjacent to the swapped punctures.

With x^+ = max(x, 0) and x^- = min(x, 0), the update of the pairs
(a, b) = (a_{i-1}, b_{i-1}) and (c, d) = (a_i, b_i) for sigma_i is

    f  = a + b^- - c - d^+
    a' = a - b^+ - (d^+ + f)^+        b' = d + f^-
    c' = c - d^- - (b^- - f)^-        d' = b - f^-

and sigma_i^{-1} uses the inverse map

    e  = a - b^- - c + d^+
    a' = a + b^+ + (d^+ - e)^+        b' = d - e^+
    c' = c + d^- + (b^- + e)^-        d' = b + e^+

The first generator sees only one pair: its map is the above with a fixed
virtual pair that every loop avoids. The last puncture is a boundary
puncture, so no generator of a braid acting on the loop reaches past pair m.

Reference:
- Dehornoy, P. "Efficient solutions to the braid isotopy problem" (2008)
- Dynnikov, I. "On a Yang-Baxter map and the Dehornoy ordering" (2002)
"""

import warnings
from typing import Any, Optional

from braidtopo.errors import GeneratorRangeError, OverflowWarning
from braidtopo.topology.loop import LoopCoordinate
from braidtopo.topology.numeric import NumericBackend, OverflowGuard
from braidtopo.utils.logging import get_logger

logger = get_logger(__name__)


def _left_end(be: NumericBackend, a, b, positive: bool, guard):
    """sigma_1^{+/-1} on the first pair (a_1, b_1)."""
    if positive:
        b_new = be.add(a, be.pos(b), guard)
        a_new = be.add(be.negate(b, guard), be.pos(b_new), guard)
    else:
        b_new = be.subtract(be.pos(b), a, guard)
        a_new = be.subtract(b, be.pos(b_new), guard)
    return a_new, b_new


def _middle(be: NumericBackend, a, b, c, d, positive: bool, guard):
    """sigma_i^{+/-1} on the pairs (a_{i-1}, b_{i-1}) and (a_i, b_i)."""
    b_pos, b_neg = be.pos(b), be.neg(b)
    d_pos, d_neg = be.pos(d), be.neg(d)
    if positive:
        f = be.subtract(be.subtract(be.add(a, b_neg, guard), c, guard), d_pos, guard)
        f_neg = be.neg(f)
        a_new = be.subtract(be.subtract(a, b_pos, guard), be.pos(be.add(d_pos, f, guard)), guard)
        b_new = be.add(d, f_neg, guard)
        c_new = be.subtract(be.subtract(c, d_neg, guard), be.neg(be.subtract(b_neg, f, guard)), guard)
        d_new = be.subtract(b, f_neg, guard)
    else:
        e = be.add(be.subtract(be.subtract(a, b_neg, guard), c, guard), d_pos, guard)
        e_pos = be.pos(e)
        a_new = be.add(be.add(a, b_pos, guard), be.pos(be.subtract(d_pos, e, guard)), guard)
        b_new = be.subtract(d, e_pos, guard)
        c_new = be.add(be.add(c, d_neg, guard), be.neg(be.add(b_neg, e, guard)), guard)
        d_new = be.add(b, e_pos, guard)
    return a_new, b_new, c_new, d_new


def apply_generator(
    coords: Any,
    g: int,
    backend: NumericBackend,
    guard: Optional[OverflowGuard] = None,
) -> Any:
    """
    Apply one signed generator to a batch of coordinate rows.

    Args:
        coords: Backend container of shape (k, 2m), rows [a_1..a_m, b_1..b_m]
                for loops hosting braids on n = m+1 strands
        g: Signed generator, 1 <= |g| <= n-1; negative means inverse.
           |g| = 1 touches a single pair.
        backend: Backend owning the container
        guard: Overflow guard (strict when omitted)

    Returns:
        New container of the same shape. Only pairs |g|-1 and |g| change.

    Raises:
        GeneratorRangeError: If g is zero or |g| >= n, which would move the
                             boundary puncture
    """
    m = coords.shape[1] // 2
    i = abs(int(g))
    if i < 1 or i > m:
        raise GeneratorRangeError(
            problem=f"Generator {g} does not act on loops for {m + 1} strands",
            cause=f"Generator magnitudes must lie in 1..{m}",
            recovery="Use loops built for at least as many strands as the braid",
        )
    positive = g > 0
    out = backend.copy(coords)

    if i == 1:
        a_new, b_new = _left_end(backend, coords[:, 0], coords[:, m], positive, guard)
        out[:, 0], out[:, m] = a_new, b_new
    else:
        p, q = i - 2, i - 1
        a_new, b_new, c_new, d_new = _middle(
            backend,
            coords[:, p], coords[:, m + p],
            coords[:, q], coords[:, m + q],
            positive, guard,
        )
        out[:, p], out[:, m + p] = a_new, b_new
        out[:, q], out[:, m + q] = c_new, d_new
    return out


def act(braid: Any, loop: LoopCoordinate, strict: bool = False) -> LoopCoordinate:
    """
    Act with a braid on a loop or batch of loops.

    Generators are applied in word order, each to the whole batch at once.

    Args:
        braid: Object with `n` and `word` (a BraidWord)
        loop: Loops with loop.n >= braid.n
        strict: Raise CoordinateOverflowError at the first overflow instead of
                warning after the pass

    Returns:
        New LoopCoordinate with the loop's backend and orientation

    Raises:
        GeneratorRangeError: If the braid has more strands than the loop
        CoordinateOverflowError: On overflow in strict mode

    Warns:
        OverflowWarning: On overflow in lenient mode; the result is best-effort
    """
    if braid.n > loop.n:
        raise GeneratorRangeError(
            problem=f"A braid on {braid.n} strands cannot act on loops for {loop.n} strands",
            cause="Loop coordinates have too few punctures for the braid's generators",
            recovery=f"Use LoopCoordinate.basis({braid.n}) or loops with n >= {braid.n}",
        )

    backend = loop.backend
    guard = OverflowGuard(strict=strict)
    coords = loop.container
    for g in braid.word:
        coords = apply_generator(coords, g, backend, guard)

    if guard.overflowed:
        message = (
            f"Integer overflow in the {backend.name} backend while acting with a "
            f"braid of length {len(braid.word)}; the resulting coordinates are unreliable"
        )
        logger.warning(message)
        warnings.warn(OverflowWarning(message, guard.conditions), stacklevel=2)

    return LoopCoordinate._wrap(coords, backend, loop.orientation, loop._single)
