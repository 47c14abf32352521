# braidtopo/topology/__init__.py
"""Braid computations through Dynnikov loop coordinates.

Exports:
    LoopCoordinate: Multicurves (single or batched) in Dynnikov coordinates
    BraidWord: Braids as words in signed Artin generators
    ChronoBraid: Braids with crossing times
    act / apply_generator: Piecewise-linear action of braids on loops
    loopcoords / eq / lexeq / is_trivial: Isotopy through loop coordinates
    loop_entropy / complexity: Growth measures
    get_backend / OverflowGuard: Numeric backends with overflow detection

The braid group acts faithfully on loops in the punctured disk, so every
question about braid isotopy or stretching becomes integer arithmetic on
coordinate vectors:
- Equality: compare the images of the canonical loops
- Entropy: growth rate of the length of an iterated loop
- Complexity: log-stretch of the canonical loops with a boundary puncture

Usage:
    from braidtopo.topology import BraidWord, LoopCoordinate

    >>> b = BraidWord([1, -2, 3])
    >>> b.act_on(LoopCoordinate.basis(4)).rows()
    [[1, -2, 1, -2, -2, 2]]
    >>> BraidWord([1, 2, 1]) == BraidWord([2, 1, 2])
    True
"""

# Arithmetic
from braidtopo.topology.numeric import (
    BigIntBackend,
    NumericBackend,
    OverflowGuard,
    TorchBackend,
    available_backends,
    get_backend,
)

# Loops and the generator action
from braidtopo.topology.loop import LoopCoordinate
from braidtopo.topology.action import act, apply_generator
from braidtopo.topology.equality import eq, is_trivial, lexeq, loopcoords

# Braids
from braidtopo.topology.braid import BraidWord, compose, cycle, invert, length, power
from braidtopo.topology.chrono import ChronoBraid

# Growth measures
from braidtopo.topology.metrics import complexity, length_selector, loop_entropy

__all__ = [
    "NumericBackend",
    "TorchBackend",
    "BigIntBackend",
    "OverflowGuard",
    "available_backends",
    "get_backend",
    "LoopCoordinate",
    "act",
    "apply_generator",
    "loopcoords",
    "eq",
    "lexeq",
    "is_trivial",
    "BraidWord",
    "compose",
    "invert",
    "power",
    "cycle",
    "length",
    "ChronoBraid",
    "loop_entropy",
    "complexity",
    "length_selector",
]
