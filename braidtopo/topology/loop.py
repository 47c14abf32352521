# braidtopo/topology/loop.py
"""
Dynnikov coordinates of multicurves in the punctured disk.

A loop (more precisely an integral lamination, a collection of disjoint
essential simple closed curves) in a disk with N punctures is encoded by
2(N-2) integers:

    (a_1, ..., a_{N-2}, b_1, ..., b_{N-2})

where a_i and b_i are half-differences of the intersection numbers of the
loop with the arcs above and below consecutive punctures. The encoding is a
bijection between nonzero integer vectors and multicurves, which is what
makes braid equality decidable by integer arithmetic.

A LoopCoordinate with strand count n describes loops on N = n+1 punctures:
the last puncture is a boundary puncture that braids on n strands never move.

Reference:
- Dynnikov, I. "On a Yang-Baxter map and the Dehornoy ordering" (2002)
- Thiffeault, J.-L. "Braids of entangled particle trajectories" (2010)
- Hall, T. & Yurttas, S. O. "On the topological entropy of families of braids" (2009)
"""

from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
import torch
from einops import rearrange

from braidtopo.errors import ConfigurationError, ShapeError
from braidtopo.topology.numeric import NumericBackend, OverflowGuard, get_backend


BASIS_KINDS = ("default", "bp")


def _nested(data: Any) -> Any:
    if isinstance(data, LoopCoordinate):
        return data.rows()
    if torch.is_tensor(data) or isinstance(data, np.ndarray):
        return data.tolist()
    return data


def _as_rows(data: Any, what: str = "coordinates") -> Tuple[List[List[Any]], bool]:
    """
    Normalize user input into a list of equal-length rows.

    Returns:
        (rows, single) where single is True when the input was one flat loop
    """
    data = _nested(data)
    try:
        items = list(data)
    except TypeError:
        raise ShapeError(
            problem=f"Loop {what} must be a sequence",
            cause=f"Got {type(data).__name__}",
            recovery="Pass a flat sequence for one loop or nested rows for a batch",
        )
    if not items:
        raise ShapeError(
            problem=f"Loop {what} are empty",
            cause="At least one coordinate pair is needed (n >= 2)",
            recovery="Use LoopCoordinate.basis(n) for the canonical loops",
        )

    is_row = [isinstance(_nested(item), (list, tuple)) for item in items]
    if not any(is_row):
        return [items], True
    if not all(is_row):
        raise ShapeError(
            problem=f"Loop {what} mix scalars and rows",
            cause="Every member of a batch must be a row of coordinates",
            recovery="Pass either one flat sequence or a list of equal-length rows",
        )

    rows = [list(_nested(item)) for item in items]
    lengths = sorted({len(row) for row in rows})
    if len(lengths) > 1:
        raise ShapeError(
            problem=f"Ragged loop {what}",
            cause=f"Rows have lengths {lengths}",
            recovery="All loops of a batch must share the same number of strands",
        )
    if lengths[0] == 0:
        raise ShapeError(
            problem=f"Loop {what} are empty",
            cause="At least one coordinate pair is needed (n >= 2)",
            recovery="Use LoopCoordinate.basis(n) for the canonical loops",
        )
    return rows, False


class LoopCoordinate:
    """
    One loop or a batch of loops in Dynnikov coordinates.

    Rows are laid out as [a_1..a_{n-1}, b_1..b_{n-1}]. A batch has an
    orientation, "column" (shape (k, 1)) or "row" (shape (1, k)), which only
    affects shape and transpose; rows() and iteration always follow member
    order. Values are immutable: every operation returns a new loop.

    Args:
        coords: Flat sequence (one loop) or nested rows (batch). Tensors and
                numpy arrays are accepted.
        backend: Numeric backend selector (default int64)
        orientation: "column" or "row"

    Example:
        >>> l = LoopCoordinate([0, 0, 0, -1, -1, -1])
        >>> l.n
        4
        >>> l.intaxis()
        6
    """

    __slots__ = ("_coords", "_backend", "_orientation", "_single")

    def __init__(
        self,
        coords: Any,
        backend: Union[str, NumericBackend, None] = None,
        orientation: str = "column",
    ):
        if isinstance(coords, LoopCoordinate) and backend is None:
            backend = coords.backend
        rows, single = _as_rows(coords)
        if isinstance(coords, LoopCoordinate):
            single = coords._single
        if len(rows[0]) % 2:
            raise ShapeError(
                problem="Loop coordinates must have even length",
                cause=f"Got rows of length {len(rows[0])}",
                recovery="Pass 2*(n-1) coordinates laid out as [a_1..a_{n-1}, b_1..b_{n-1}]",
            )
        self._init(get_backend(backend).asarray(rows), get_backend(backend), orientation, single)

    def _init(self, container: Any, backend: NumericBackend, orientation: str, single: bool) -> None:
        if orientation not in ("column", "row"):
            raise ConfigurationError(
                problem=f"Unknown loop orientation '{orientation}'",
                cause="Orientation must be 'column' or 'row'",
                recovery="Use orientation='column' (the default)",
            )
        self._coords = container
        self._backend = backend
        self._orientation = orientation
        self._single = single and container.shape[0] == 1

    @classmethod
    def _wrap(
        cls,
        container: Any,
        backend: NumericBackend,
        orientation: str = "column",
        single: bool = False,
    ) -> "LoopCoordinate":
        """Build from a validated backend container without copying."""
        obj = cls.__new__(cls)
        obj._init(container, backend, orientation, single)
        return obj

    @classmethod
    def from_ab(
        cls,
        a: Any,
        b: Any,
        backend: Union[str, NumericBackend, None] = None,
        orientation: str = "column",
    ) -> "LoopCoordinate":
        """
        Build loops from separate a and b coordinates.

        Args:
            a: Flat sequence or nested rows of a coordinates
            b: b coordinates with exactly the shape of a

        Raises:
            ShapeError: If a and b differ in shape
        """
        a_rows, a_single = _as_rows(a, "a coordinates")
        b_rows, b_single = _as_rows(b, "b coordinates")
        if a_single != b_single or len(a_rows) != len(b_rows) or len(a_rows[0]) != len(b_rows[0]):
            raise ShapeError(
                problem="a and b coordinates must have the same size",
                cause=f"a has {len(a_rows)} row(s) of length {len(a_rows[0])}, "
                f"b has {len(b_rows)} row(s) of length {len(b_rows[0])}",
                recovery="Pass one b coordinate per a coordinate",
            )
        rows = [ra + rb for ra, rb in zip(a_rows, b_rows)]
        return cls(rows[0] if a_single else rows, backend=backend, orientation=orientation)

    @classmethod
    def basis(
        cls,
        n: int,
        kind: str = "default",
        backend: Union[str, NumericBackend, None] = None,
    ) -> "LoopCoordinate":
        """
        Canonical loops for braids on n strands.

        "default" is a = 0, b = -1: the n-1 loops each enclosing one adjacent
        pair of punctures, collapsed into one multicurve. "bp" adds an extra
        boundary puncture, i.e. the default pattern on n+1 strands, which is
        the reference loop for complexity.

        Args:
            n: Strand count (n >= 2, or n >= 1 for "bp")
            kind: "default" or "bp"
            backend: Numeric backend selector

        Raises:
            ShapeError: If n is too small for the kind
            ConfigurationError: If kind is unknown
        """
        if kind not in BASIS_KINDS:
            raise ConfigurationError(
                problem=f"Unknown loop basis '{kind}'",
                cause=f"Basis kind must be one of: {', '.join(BASIS_KINDS)}",
                recovery="Use kind='default' for the canonical loops",
            )
        smallest = 1 if kind == "bp" else 2
        if int(n) < smallest:
            raise ShapeError(
                problem=f"Cannot build {kind} basis loops on {n} strand(s)",
                cause="Loops need at least one coordinate pair",
                recovery=f"Use n >= {smallest}",
            )
        m = int(n) if kind == "bp" else int(n) - 1
        return cls([0] * m + [-1] * m, backend=backend)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def backend(self) -> NumericBackend:
        return self._backend

    @property
    def n(self) -> int:
        """Largest strand count of a braid that can act on this loop."""
        return self._coords.shape[1] // 2 + 1

    @property
    def batch_size(self) -> int:
        return self._coords.shape[0]

    @property
    def orientation(self) -> str:
        return self._orientation

    @property
    def shape(self) -> Tuple[int, int]:
        k = self.batch_size
        return (k, 1) if self._orientation == "column" else (1, k)

    @property
    def container(self) -> Any:
        """Backend container of shape (batch_size, 2(n-1)). Do not mutate."""
        return self._coords

    def transpose(self) -> "LoopCoordinate":
        flipped = "row" if self._orientation == "column" else "column"
        return LoopCoordinate._wrap(self._backend.copy(self._coords), self._backend, flipped, self._single)

    @property
    def T(self) -> "LoopCoordinate":
        return self.transpose()

    def to(self, backend: Union[str, NumericBackend]) -> "LoopCoordinate":
        """Convert to another numeric backend."""
        target = get_backend(backend)
        container = target.asarray(self._backend.to_python(self._coords))
        return LoopCoordinate._wrap(container, target, self._orientation, self._single)

    def __len__(self) -> int:
        return self.batch_size

    def __iter__(self) -> Iterator["LoopCoordinate"]:
        for i in range(self.batch_size):
            yield self[i]

    def __getitem__(self, index: int) -> "LoopCoordinate":
        k = self.batch_size
        if not -k <= index < k:
            raise IndexError(f"loop index {index} out of range for batch of {k}")
        index %= k
        row = self._coords[index:index + 1]
        return LoopCoordinate._wrap(self._backend.copy(row), self._backend, "column", True)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def _split(self) -> Tuple[Any, Any]:
        a, b = rearrange(self._coords, "k (two m) -> two k m", two=2)
        return a, b

    def _view(self, x: Any) -> Any:
        x = self._backend.copy(x)
        return x[0] if self._single else x

    @property
    def coords(self) -> Any:
        """Coordinates, 1-D for a single loop, (k, 2(n-1)) for a batch."""
        return self._view(self._coords)

    @property
    def a(self) -> Any:
        return self._view(self._split()[0])

    @property
    def b(self) -> Any:
        return self._view(self._split()[1])

    def ab(self) -> Tuple[Any, Any]:
        return self.a, self.b

    def rows(self) -> List[List[Any]]:
        """One flat list of Python numbers per member."""
        return self._backend.to_python(self._coords)

    # ------------------------------------------------------------------
    # Measures
    # ------------------------------------------------------------------

    def _crossings(self, guard: Optional[OverflowGuard]) -> Tuple[List[Any], Any, Any]:
        """
        Vertical-line crossing numbers and the two extreme b coordinates.

        b_0 = -max_i(|a_i| + b_i^+ + sum_{j<i} b_j) and b_n = -b_0 - sum b_i are
        the b coordinates of the arcs left of the first and right of the last
        puncture; nu_1 = -2 b_0 and nu_{i+1} = nu_i - 2 b_i count how often the
        loop crosses the vertical line through each gap between punctures.

        Returns:
            (nu columns, -b_0, b_n), each as 1-D backend containers
        """
        be = self._backend
        a, b = self._split()
        m = a.shape[1]

        cum = be.zeros((self.batch_size,))
        best = None
        for i in range(m):
            term = be.add(be.add(be.absolute(a[:, i], guard), be.pos(b[:, i]), guard), cum, guard)
            best = term if best is None else be.maximum(best, term)
            cum = be.add(cum, b[:, i], guard)

        nus = [be.add(best, best, guard)]
        for i in range(m):
            nus.append(be.subtract(nus[-1], be.add(b[:, i], b[:, i], guard), guard))
        return nus, best, be.subtract(best, cum, guard)

    def _per_member(self, column: Any) -> Any:
        values = self._backend.to_python(column)
        return values[0] if self._single else values

    def nu(self, guard: Optional[OverflowGuard] = None) -> Any:
        """Crossing numbers nu_1..nu_n, a list per member."""
        nus, _, _ = self._crossings(guard)
        return self._per_member(self._backend.stack_columns(nus))

    def minlength(self, guard: Optional[OverflowGuard] = None) -> Any:
        """
        Minimum length of the loop with punctures at unit spacing.

        Computed as the sum of the crossing numbers nu_i.

        Returns:
            A number for a single loop, a list for a batch
        """
        nus, _, _ = self._crossings(guard)
        return self._per_member(self._backend.total(self._backend.stack_columns(nus), guard))

    def intaxis(self, guard: Optional[OverflowGuard] = None) -> Any:
        """
        Minimum number of intersections of the loop with the real axis.

        |a_1| + |a_{n-1}| + sum |a_{i+1} - a_i| counts crossings between
        punctures, |b_0| + |b_n| + sum |b_i| crossings outside them.

        Returns:
            A number for a single loop, a list for a batch
        """
        be = self._backend
        a, b = self._split()
        m = a.shape[1]
        _, minus_b0, bn = self._crossings(guard)

        terms = [be.absolute(a[:, 0], guard), be.absolute(a[:, m - 1], guard)]
        for i in range(m - 1):
            terms.append(be.absolute(be.subtract(a[:, i + 1], a[:, i], guard), guard))
        terms.append(be.absolute(minus_b0, guard))
        terms.append(be.absolute(bn, guard))
        for i in range(m):
            terms.append(be.absolute(b[:, i], guard))
        return self._per_member(be.total(be.stack_columns(terms), guard))

    # ------------------------------------------------------------------
    # Comparison and text
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LoopCoordinate):
            return NotImplemented
        if self.n != other.n or self.batch_size != other.batch_size:
            return False
        if self._backend is other._backend:
            return self._backend.equal(self._coords, other._coords)
        return self.rows() == other.rows()

    __hash__ = None

    def __repr__(self) -> str:
        shown = self.rows()[0] if self._single else self.rows()
        return f"LoopCoordinate(n={self.n}, coords={shown}, backend={self._backend.name!r})"

    def __str__(self) -> str:
        return "\n".join(" ".join(str(v) for v in row) for row in self.rows())
