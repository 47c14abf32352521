# braidtopo/topology/chrono.py
"""
Time-stamped braids.

Braids extracted from particle trajectories carry, for every generator, the
time at which the corresponding crossing happened. Times make the braid a
record of physical history rather than a group element:
- composition is allowed only in chronological order
- equality compares times first, then words up to the reordering of
  simultaneous crossings, which must act on distinct strand pairs
- power, inverse and cyclic permutation have no temporal meaning and
  are not provided
"""

from itertools import groupby
from typing import Any, Iterable, Iterator, Optional, Sequence, Tuple, Union

from braidtopo.errors import ChronologyError, ShapeError, UnsupportedOperationError
from braidtopo.topology.braid import BraidWord
from braidtopo.topology.loop import LoopCoordinate


class ChronoBraid:
    """
    A braid word with one crossing time per generator.

    Args:
        braid: BraidWord, ChronoBraid or a sequence of signed generators
        tcross: Non-decreasing crossing times, one per generator. Defaults to
                1, 2, ..., len(word).
        n: Strand count for a generator sequence (see BraidWord)

    Raises:
        ShapeError: If tcross and the word differ in length
        ChronologyError: If tcross decreases

    Example:
        >>> b = ChronoBraid([1, 2, -1], [0.1, 0.5, 0.9])
        >>> b2 = ChronoBraid([2], [1.2])
        >>> (b * b2).tcross
        (0.1, 0.5, 0.9, 1.2)
    """

    __slots__ = ("_braid", "_tcross")

    def __init__(
        self,
        braid: Union[BraidWord, "ChronoBraid", Iterable[Any]] = (),
        tcross: Optional[Iterable[Any]] = None,
        n: Optional[int] = None,
    ):
        if isinstance(braid, ChronoBraid):
            if tcross is None:
                tcross = braid.tcross
            braid = braid.braid
        if isinstance(braid, BraidWord) and n is None:
            word = braid
        else:
            word = BraidWord(braid.word if isinstance(braid, BraidWord) else braid, n)

        if tcross is None:
            times = tuple(float(k) for k in range(1, len(word) + 1))
        else:
            times = tuple(float(t) for t in tcross)

        if len(times) != len(word):
            raise ShapeError(
                problem="Crossing times must match the braid word in length",
                cause=f"Word has {len(word)} generators, tcross has {len(times)} entries",
                recovery="Pass one crossing time per generator",
            )
        for k in range(1, len(times)):
            if times[k] < times[k - 1]:
                raise ChronologyError(
                    problem="Crossing times must be non-decreasing",
                    cause=f"tcross[{k}] = {times[k]} comes before tcross[{k - 1}] = {times[k - 1]}",
                    recovery="Sort the crossings by time before building the braid",
                )
        self._braid = word
        self._tcross = times

    @property
    def braid(self) -> BraidWord:
        """The underlying plain braid, without times."""
        return self._braid

    @property
    def word(self) -> Tuple[int, ...]:
        return self._braid.word

    @property
    def n(self) -> int:
        return self._braid.n

    @property
    def tcross(self) -> Tuple[float, ...]:
        return self._tcross

    def __len__(self) -> int:
        return len(self._braid)

    def __iter__(self) -> Iterator[Tuple[int, float]]:
        return iter(zip(self._braid.word, self._tcross))

    def is_identity(self) -> bool:
        return self._braid.is_identity()

    def act_on(self, loop: LoopCoordinate, strict: bool = False) -> LoopCoordinate:
        return self._braid.act_on(loop, strict=strict)

    def compose(self, other: "ChronoBraid") -> "ChronoBraid":
        """
        Chronological product: all of self happens before any of other.

        Raises:
            ChronologyError: If self's last crossing is later than other's first
            UnsupportedOperationError: If other is not time-stamped
        """
        if not isinstance(other, ChronoBraid):
            raise UnsupportedOperationError(
                problem=f"Cannot compose a time-stamped braid with {type(other).__name__}",
                cause="The product of a time-stamped and a plain braid has no crossing times",
                recovery="Wrap the plain braid as ChronoBraid(b, tcross)",
            )
        if self._tcross and other._tcross and self._tcross[-1] > other._tcross[0]:
            raise ChronologyError(
                problem="Time-stamped braids must be composed in chronological order",
                cause=f"Left braid ends at t={self._tcross[-1]}, "
                f"right braid starts at t={other._tcross[0]}",
                recovery="Swap the operands or shift the crossing times",
            )
        return ChronoBraid(self._braid.compose(other._braid), self._tcross + other._tcross)

    def __mul__(self, other: Any) -> "ChronoBraid":
        if not isinstance(other, ChronoBraid):
            return NotImplemented
        return self.compose(other)

    def _canonical_word(self) -> Tuple[int, ...]:
        # Simultaneous crossings are ordered by generator index.
        word = []
        pairs = zip(self._tcross, self._braid.word)
        for _, run in groupby(pairs, key=lambda pair: pair[0]):
            word.extend(sorted((g for _, g in run), key=abs))
        return tuple(word)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChronoBraid):
            return NotImplemented
        if self._tcross != other._tcross:
            return False
        return self._canonical_word() == other._canonical_word()

    __hash__ = None

    def subbraid(self, strands: Sequence[int]) -> "ChronoBraid":
        """Sub-braid on a strand subset, keeping the times of retained crossings."""
        sub, indices = self._braid.subbraid_indices(strands)
        return ChronoBraid(sub, tuple(self._tcross[k] for k in indices))

    def __str__(self) -> str:
        times = " ".join(f"{t:g}" for t in self._tcross)
        return f"{self._braid}  tcross: [{times}]"

    def __repr__(self) -> str:
        return f"ChronoBraid({list(self.word)}, tcross={list(self._tcross)}, n={self.n})"
