# braidtopo/topology/braid.py
"""
Braid words in Artin generators.

The braid group B_n on n strands has generators sigma_1, ..., sigma_{n-1}
subject to the relations:
- sigma_i sigma_j = sigma_j sigma_i for |i-j| > 1 (far commutativity)
- sigma_i sigma_{i+1} sigma_i = sigma_{i+1} sigma_i sigma_{i+1}

A word is a sequence of signed integers: i stands for sigma_i (strand i
crosses over strand i+1), -i for its inverse. Words are read left to right,
which is also the order in which generators act on loops.

Equality of BraidWord objects is braid isotopy, decided through loop
coordinates (see braidtopo.topology.equality); use lexeq for word identity.
"""

from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from braidtopo.errors import GeneratorRangeError, ShapeError, UnsupportedOperationError
from braidtopo.topology import equality
from braidtopo.topology.action import act
from braidtopo.topology.loop import LoopCoordinate
from braidtopo.topology.numeric import NumericBackend


class BraidWord:
    """
    A braid on n strands given by a word in Artin generators.

    Args:
        word: Sequence of nonzero signed generators (ints, or anything int()
              accepts: numpy integers, 0-d tensors)
        n: Strand count. Defaults to max|g| + 1 (1 for the empty word); may be
           larger, never smaller.

    Example:
        >>> b = BraidWord([1, -2, 3])
        >>> b.n
        4
        >>> str(b.inv())
        '< -3 2 -1 >'
    """

    __slots__ = ("_word", "_n")

    def __init__(self, word: Union[Iterable[Any], "BraidWord"] = (), n: Optional[int] = None):
        if isinstance(word, BraidWord):
            word = word.word
        gens = tuple(int(g) for g in word)
        if any(g == 0 for g in gens):
            raise GeneratorRangeError(
                problem="Braid words cannot contain the generator 0",
                cause=f"Word {list(gens)} has a zero entry",
                recovery="Use i for sigma_i and -i for its inverse, i >= 1",
            )
        needed = max((abs(g) for g in gens), default=0) + 1
        if n is None:
            n = needed
        elif int(n) < 1:
            raise GeneratorRangeError(
                problem=f"Invalid strand count {n}",
                cause="A braid needs at least one strand",
                recovery="Use n >= 1",
            )
        elif int(n) < needed:
            raise GeneratorRangeError(
                problem=f"Too few strands ({n}) for braid word",
                cause=f"Generator {max(gens, key=abs)} needs at least {needed} strands",
                recovery=f"Use n >= {needed} or omit n",
            )
        self._word = gens
        self._n = int(n)

    @property
    def word(self) -> Tuple[int, ...]:
        return self._word

    @property
    def n(self) -> int:
        return self._n

    def __len__(self) -> int:
        return len(self._word)

    def __iter__(self) -> Iterator[int]:
        return iter(self._word)

    def is_identity(self) -> bool:
        """True for the empty word (lexically trivial)."""
        return not self._word

    # ------------------------------------------------------------------
    # Group operations
    # ------------------------------------------------------------------

    def compose(self, other: "BraidWord") -> "BraidWord":
        """Concatenate words; the result lives on max(n1, n2) strands."""
        if not isinstance(other, BraidWord):
            raise UnsupportedOperationError(
                problem=f"Cannot compose a braid with {type(other).__name__}",
                cause="Composition is defined between plain braids only",
                recovery="Use b.act_on(loop) to act on loops",
            )
        return BraidWord(self._word + other._word, max(self._n, other._n))

    def __mul__(self, other: Any) -> "BraidWord":
        if not isinstance(other, BraidWord):
            return NotImplemented
        return self.compose(other)

    def inv(self) -> "BraidWord":
        return BraidWord(tuple(-g for g in reversed(self._word)), self._n)

    def power(self, m: int) -> "BraidWord":
        """
        Repeat the word m times; negative m repeats the inverse.

        Args:
            m: Integer exponent. 0 gives the identity on the same strands.
        """
        m = int(m)
        base = self if m >= 0 else self.inv()
        return BraidWord(base._word * abs(m), self._n)

    def __pow__(self, m: int) -> "BraidWord":
        return self.power(m)

    def cycle(self, k: int = 1) -> "BraidWord":
        """Cyclic permutation: move the first k generators to the end."""
        if not self._word:
            return BraidWord((), self._n)
        k %= len(self._word)
        return BraidWord(self._word[k:] + self._word[:k], self._n)

    # ------------------------------------------------------------------
    # Action and equality
    # ------------------------------------------------------------------

    def act_on(self, loop: LoopCoordinate, strict: bool = False) -> LoopCoordinate:
        """Act on a loop or batch of loops (see braidtopo.topology.action.act)."""
        return act(self, loop, strict=strict)

    def loopcoords(
        self,
        basis: str = "default",
        backend: Union[str, NumericBackend, None] = None,
        strict: bool = False,
    ) -> LoopCoordinate:
        return equality.loopcoords(self, basis=basis, backend=backend, strict=strict)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BraidWord):
            return NotImplemented
        return equality.eq(self, other)

    __hash__ = None

    def lexeq(self, other: "BraidWord") -> bool:
        return equality.lexeq(self, other)

    def is_trivial(self, backend: Union[str, NumericBackend, None] = None) -> bool:
        """True when the braid is isotopic to the identity, whatever its word."""
        return equality.is_trivial(self, backend=backend)

    # ------------------------------------------------------------------
    # Strand bookkeeping
    # ------------------------------------------------------------------

    def writhe(self) -> int:
        """Sum of generator signs."""
        return sum(1 if g > 0 else -1 for g in self._word)

    def perm(self) -> Tuple[int, ...]:
        """
        Induced strand permutation.

        Returns:
            Tuple whose k-th entry is the label (1-based) of the strand that
            ends in position k.
        """
        labels = list(range(1, self._n + 1))
        for g in self._word:
            i = abs(g)
            labels[i - 1], labels[i] = labels[i], labels[i - 1]
        return tuple(labels)

    def subbraid_indices(self, strands: Sequence[int]) -> Tuple["BraidWord", List[int]]:
        """
        Project onto a subset of strands.

        A generator survives when both strands it crosses are kept; it is
        renumbered by the rank of its left strand among the kept strands at
        that moment.

        Args:
            strands: Distinct 1-based strand labels

        Returns:
            (sub-braid on len(strands) strands, 0-based positions of the
            retained generators in this word)
        """
        keep = [int(s) for s in strands]
        if not keep or len(set(keep)) != len(keep) or min(keep) < 1 or max(keep) > self._n:
            raise ShapeError(
                problem=f"Invalid strand subset {list(strands)}",
                cause=f"Strands must be distinct labels in 1..{self._n}",
                recovery="Pass at least one distinct strand label",
            )
        kept = set(keep)
        labels = list(range(1, self._n + 1))
        word: List[int] = []
        indices: List[int] = []
        for k, g in enumerate(self._word):
            i = abs(g)
            left, right = labels[i - 1], labels[i]
            if left in kept and right in kept:
                rank = sum(1 for s in labels[:i] if s in kept)
                word.append(rank if g > 0 else -rank)
                indices.append(k)
            labels[i - 1], labels[i] = right, left
        return BraidWord(word, len(kept)), indices

    def subbraid(self, strands: Sequence[int]) -> "BraidWord":
        return self.subbraid_indices(strands)[0]

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        if not self._word:
            return "< e >"
        return "< " + " ".join(str(g) for g in self._word) + " >"

    def __repr__(self) -> str:
        return f"BraidWord({list(self._word)}, n={self._n})"


def require_braid(b: Any, operation: str, recovery: Optional[str] = None) -> BraidWord:
    if isinstance(b, BraidWord):
        return b
    if hasattr(b, "tcross"):
        cause = f"{operation} ignores crossing times, so it is not defined for time-stamped braids"
        recovery = recovery or "Use b.braid to work with the underlying plain braid"
    else:
        cause = f"{operation} expects a BraidWord, got {type(b).__name__}"
        recovery = recovery or "Build the braid with BraidWord(word)"
    raise UnsupportedOperationError(
        problem=f"{operation} is not defined for {type(b).__name__}",
        cause=cause,
        recovery=recovery,
    )


def compose(b1: Any, b2: Any) -> Any:
    """Product b1 * b2 (time-stamped braids compose chronologically)."""
    return b1.compose(b2)


def invert(b: Any) -> BraidWord:
    return require_braid(b, "invert").inv()


def power(b: Any, m: int) -> BraidWord:
    return require_braid(b, "power").power(m)


def cycle(b: Any, k: int = 1) -> BraidWord:
    return require_braid(b, "cycle").cycle(k)


def length(b: Any) -> int:
    return len(b)
