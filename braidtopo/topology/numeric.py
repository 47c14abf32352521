# braidtopo/topology/numeric.py
"""
Numeric backends for loop-coordinate arithmetic.

Dynnikov coordinates grow exponentially under iterated braid action, so the
arithmetic they live in is a choice with consequences:
- int32 / int64: torch integer tensors, fast, overflow is detected
- bigint: numpy object arrays of Python ints, exact, never overflows
- double: torch float64 tensors, never signals, inexact for large values

Every backend exposes the same small vocabulary (add, subtract, negate,
maximum, minimum, compare, equal) which is all the piecewise-linear
generator update needs.

Fixed-width overflow is detected without branching on values:
- x + y overflows iff x and y share a sign that the sum does not,
  i.e. ((x ^ s) & (y ^ s)) < 0
- x - y overflows iff x and y differ in sign and the difference does
  not share the sign of x, i.e. ((x ^ y) & (x ^ s)) < 0
- -x and |x| overflow iff x is the most negative representable value

Detected overflows are reported to an OverflowGuard. A strict guard raises
CoordinateOverflowError at once; a lenient guard records an
OverflowCondition and lets the computation continue on wrapped values.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import torch

from braidtopo.errors import ConfigurationError, CoordinateOverflowError, OverflowCondition


class OverflowGuard:
    """
    Collector for overflow conditions raised during one computation.

    Args:
        strict: Raise CoordinateOverflowError on the first condition instead
                of recording it.
    """

    def __init__(self, strict: bool = True):
        self.strict = strict
        self.conditions: List[OverflowCondition] = []

    def report(self, condition: OverflowCondition) -> None:
        if self.strict:
            raise CoordinateOverflowError(
                problem=f"Integer overflow during '{condition.operation}'",
                cause=f"The {condition.backend} backend cannot represent the result of "
                f"{condition.describe()}",
                recovery="Use backend='bigint' for exact results, or fewer iterations",
                condition=condition,
            )
        self.conditions.append(condition)

    @property
    def overflowed(self) -> bool:
        return bool(self.conditions)


def _guard(guard: Optional[OverflowGuard]) -> OverflowGuard:
    return guard if guard is not None else OverflowGuard(strict=True)


class NumericBackend(ABC):
    """
    Arithmetic over 2-D coordinate containers (rows are loops).

    Subclasses hold one container type. Binary operations expect operands of
    the same shape; results are new containers.
    """

    name: str = ""
    exact: bool = True

    @abstractmethod
    def asarray(self, data: Any) -> Any:
        """Convert nested sequences, tensors or arrays into this backend's container."""

    @abstractmethod
    def zeros(self, shape: Tuple[int, ...]) -> Any:
        ...

    @abstractmethod
    def copy(self, x: Any) -> Any:
        ...

    @abstractmethod
    def stack_columns(self, columns: Sequence[Any]) -> Any:
        """Stack 1-D columns of equal length into a (k, len(columns)) container."""

    @abstractmethod
    def to_python(self, x: Any) -> Any:
        """Return nested lists of Python ints (floats for inexact backends)."""

    @abstractmethod
    def add(self, x: Any, y: Any, guard: Optional[OverflowGuard] = None) -> Any:
        ...

    @abstractmethod
    def subtract(self, x: Any, y: Any, guard: Optional[OverflowGuard] = None) -> Any:
        ...

    @abstractmethod
    def negate(self, x: Any, guard: Optional[OverflowGuard] = None) -> Any:
        ...

    @abstractmethod
    def absolute(self, x: Any, guard: Optional[OverflowGuard] = None) -> Any:
        ...

    @abstractmethod
    def maximum(self, x: Any, y: Any) -> Any:
        ...

    @abstractmethod
    def minimum(self, x: Any, y: Any) -> Any:
        ...

    @abstractmethod
    def pos(self, x: Any) -> Any:
        """Positive part max(x, 0)."""

    @abstractmethod
    def neg(self, x: Any) -> Any:
        """Negative part min(x, 0)."""

    @abstractmethod
    def compare(self, x: Any, y: Any) -> Any:
        """Elementwise sign of x - y (-1, 0 or 1), computed without subtraction."""

    @abstractmethod
    def equal(self, x: Any, y: Any) -> bool:
        """True when x and y have the same shape and all entries agree."""

    def total(self, x: Any, guard: Optional[OverflowGuard] = None) -> Any:
        """
        Row sums of a 2-D container with checked additions.

        Args:
            x: Container of shape (k, m)
            guard: Overflow guard (strict when omitted)

        Returns:
            1-D container of length k
        """
        acc = self.zeros((x.shape[0],))
        for j in range(x.shape[1]):
            acc = self.add(acc, x[:, j], guard)
        return acc

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class TorchBackend(NumericBackend):
    """
    Backend on torch tensors of a fixed dtype.

    Integer dtypes check every add, subtract, negate and absolute for
    overflow. Floating dtypes never signal.

    Args:
        name: Canonical backend name
        dtype: torch dtype of the coordinate tensors
    """

    def __init__(self, name: str, dtype: torch.dtype):
        self.name = name
        self.dtype = dtype
        self.exact = not dtype.is_floating_point
        if self.exact:
            info = torch.iinfo(dtype)
            self.min_value = info.min
            self.max_value = info.max

    def asarray(self, data: Any) -> torch.Tensor:
        if isinstance(data, np.ndarray):
            data = data.tolist()
        try:
            return torch.as_tensor(data, dtype=self.dtype).clone()
        except (RuntimeError, OverflowError) as e:
            raise CoordinateOverflowError(
                problem=f"Coordinates do not fit the {self.name} backend",
                cause=str(e),
                recovery="Use backend='bigint' for values beyond the fixed-width range",
                condition=OverflowCondition("convert", self.name),
            ) from e

    def zeros(self, shape: Tuple[int, ...]) -> torch.Tensor:
        return torch.zeros(shape, dtype=self.dtype)

    def copy(self, x: torch.Tensor) -> torch.Tensor:
        return x.clone()

    def stack_columns(self, columns: Sequence[torch.Tensor]) -> torch.Tensor:
        return torch.stack(list(columns), dim=1)

    def to_python(self, x: torch.Tensor) -> Any:
        return x.tolist()

    def _check(self, mask: torch.Tensor, operation: str, operands: Tuple[torch.Tensor, ...],
               guard: Optional[OverflowGuard]) -> None:
        if not bool(mask.any()):
            return
        offending = tuple(
            tuple(values) for values in zip(*(op[mask].tolist() for op in operands))
        )
        _guard(guard).report(OverflowCondition(operation, self.name, offending))

    def add(self, x, y, guard=None):
        s = x + y
        if self.exact:
            self._check(((x ^ s) & (y ^ s)) < 0, "add", (x, y), guard)
        return s

    def subtract(self, x, y, guard=None):
        s = x - y
        if self.exact:
            self._check(((x ^ y) & (x ^ s)) < 0, "subtract", (x, y), guard)
        return s

    def negate(self, x, guard=None):
        if self.exact:
            self._check(x == self.min_value, "negate", (x,), guard)
        return -x

    def absolute(self, x, guard=None):
        if self.exact:
            self._check(x == self.min_value, "absolute", (x,), guard)
        return x.abs()

    def maximum(self, x, y):
        return torch.maximum(x, y)

    def minimum(self, x, y):
        return torch.minimum(x, y)

    def pos(self, x):
        return x.clamp(min=0)

    def neg(self, x):
        return x.clamp(max=0)

    def compare(self, x, y):
        return (x > y).to(torch.int8) - (x < y).to(torch.int8)

    def equal(self, x, y) -> bool:
        return x.shape == y.shape and bool(torch.equal(x, y))


class BigIntBackend(NumericBackend):
    """
    Arbitrary-precision backend on numpy object arrays of Python ints.

    numpy dispatches add, maximum, negative and friends elementwise to the
    Python objects, so results are exact and no overflow checks are needed.
    """

    name = "bigint"
    exact = True

    _to_int = np.frompyfunc(int, 1, 1)

    def asarray(self, data: Any) -> np.ndarray:
        if torch.is_tensor(data):
            data = data.tolist()
        arr = np.array(data, dtype=object)
        if arr.size == 0:
            return arr
        return self._to_int(arr).astype(object)

    def zeros(self, shape: Tuple[int, ...]) -> np.ndarray:
        arr = np.empty(shape, dtype=object)
        arr.fill(0)
        return arr

    def copy(self, x: np.ndarray) -> np.ndarray:
        return x.copy()

    def stack_columns(self, columns: Sequence[np.ndarray]) -> np.ndarray:
        return np.stack(list(columns), axis=1)

    def to_python(self, x: np.ndarray) -> Any:
        return x.tolist()

    def add(self, x, y, guard=None):
        return x + y

    def subtract(self, x, y, guard=None):
        return x - y

    def negate(self, x, guard=None):
        return -x

    def absolute(self, x, guard=None):
        return np.abs(x)

    def maximum(self, x, y):
        return np.maximum(x, y)

    def minimum(self, x, y):
        return np.minimum(x, y)

    def pos(self, x):
        return np.maximum(x, 0)

    def neg(self, x):
        return np.minimum(x, 0)

    def compare(self, x, y):
        return (x > y).astype(int) - (x < y).astype(int)

    def equal(self, x, y) -> bool:
        return x.shape == y.shape and bool((x == y).all())


_BACKENDS: Dict[str, NumericBackend] = {
    "int32": TorchBackend("int32", torch.int32),
    "int64": TorchBackend("int64", torch.int64),
    "bigint": BigIntBackend(),
    "double": TorchBackend("double", torch.float64),
}

_ALIASES = {
    "fixed-32": "int32",
    "fixed-64": "int64",
    "arbitrary-precision": "bigint",
    "vpi": "bigint",
    "floating": "double",
    "float64": "double",
}

DEFAULT_BACKEND = "int64"


def available_backends() -> List[str]:
    """Canonical backend names."""
    return list(_BACKENDS)


def get_backend(name: Union[str, NumericBackend, None] = None) -> NumericBackend:
    """
    Resolve a backend selector.

    Args:
        name: Canonical name, alias, an existing backend instance, or None for
              the default (int64)

    Returns:
        The shared NumericBackend instance

    Raises:
        ConfigurationError: If the name is unknown
    """
    if isinstance(name, NumericBackend):
        return name
    if name is None:
        name = DEFAULT_BACKEND
    key = str(name).lower()
    key = _ALIASES.get(key, key)
    if key not in _BACKENDS:
        raise ConfigurationError(
            problem=f"Unknown numeric backend '{name}'",
            cause=f"Backend must be one of: {', '.join(_BACKENDS)} "
            f"(aliases: {', '.join(_ALIASES)})",
            recovery="Use backend='bigint' for exact results or 'int64' for speed",
        )
    return _BACKENDS[key]
