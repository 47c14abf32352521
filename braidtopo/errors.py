"""Structured error handling with rich-formatted panels.

This module provides the exception taxonomy for braidtopo. Every error
displays a panel with a problem description, its cause and a recovery
suggestion, then behaves like an ordinary exception.

Example:
    raise ShapeError(
        problem="Loop coordinates must have even length",
        cause="Got 3 coordinates",
        recovery="Pass 2*(n-1) coordinates laid out as [a_1..a_{n-1}, b_1..b_{n-1}]"
    )
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from rich.console import Console
from rich.panel import Panel


console = Console(stderr=True)


@dataclass(frozen=True)
class OverflowCondition:
    """Record of one detected fixed-width overflow.

    Attributes:
        operation: Name of the backend operation (add, subtract, negate, ...)
        backend: Name of the numeric backend that detected it
        operands: Offending operand tuples, one per overflowing entry
    """

    operation: str
    backend: str
    operands: Tuple[Tuple[Any, ...], ...] = ()

    def describe(self, limit: int = 3) -> str:
        shown = ", ".join(str(ops) for ops in self.operands[:limit])
        more = len(self.operands) - limit
        if more > 0:
            shown += f" (+{more} more)"
        return f"{self.operation}{shown and ' of ' + shown}"


class BraidTopoError(Exception):
    """Base exception class for braidtopo errors with rich formatting.

    Attributes:
        problem: A concise description of what went wrong
        cause: Explanation of why the error occurred
        recovery: Actionable steps to fix the issue
        context: Optional additional context (e.g., the offending values)
    """

    def __init__(
        self,
        problem: str,
        cause: Optional[str] = None,
        recovery: Optional[str] = None,
        context: Optional[str] = None,
    ):
        self.problem = problem
        self.cause = cause
        self.recovery = recovery
        self.context = context

        message_parts = [f"[bold red]Problem:[/bold red] {problem}"]

        if cause:
            message_parts.append(f"\n[bold yellow]Cause:[/bold yellow] {cause}")

        if recovery:
            message_parts.append(f"\n[bold green]Recovery:[/bold green] {recovery}")

        if context:
            message_parts.append(f"\n[bold blue]Context:[/bold blue] {context}")

        self.message = "\n".join(message_parts)

        self._display_error()

        # Plain text for standard error handling
        super().__init__(problem)

    def _display_error(self):
        """Display the error message as a rich panel."""
        panel = Panel(
            self.message,
            title=f"[bold red]{self.__class__.__name__}[/bold red]",
            border_style="red",
            expand=False,
        )
        console.print(panel)


class ShapeError(BraidTopoError, ValueError):
    """Error raised for malformed coordinate, word or time-sequence construction.

    Raised for odd-length coordinate rows, ragged batches, mismatched
    ``a``/``b`` lengths and crossing-time sequences whose length differs
    from the braid word.

    Example:
        raise ShapeError(
            problem="a and b must have the same size",
            cause="len(a)=3, len(b)=2",
            recovery="Pass one b coordinate per a coordinate"
        )
    """
    pass


class GeneratorRangeError(ShapeError):
    """Error raised when a generator magnitude does not fit a strand count.

    Raised when a braid word is built with an explicit strand count that is
    too small for its generators, when a generator is zero, or when a braid
    acts on a loop with fewer strands than the braid.
    """
    pass


class ChronologyError(BraidTopoError, ValueError):
    """Error raised when time-stamped braids break chronological order.

    Raised when composing two time-stamped braids whose crossing times are
    not ordered, or when a crossing-time sequence decreases.
    """
    pass


class UnsupportedOperationError(BraidTopoError, TypeError):
    """Error raised for operations that are not defined on their operands.

    Examples are powers, inverses or entropy of time-stamped braids, and
    unknown length functionals for complexity.
    """
    pass


class ConfigurationError(BraidTopoError, ValueError):
    """Error raised for invalid configuration values.

    Raised for unknown numeric backends, unknown loop bases and out of range
    settings such as a non-positive iteration count.

    Example:
        raise ConfigurationError(
            problem="Unknown numeric backend 'int128'",
            cause="Backend must be one of: int32, int64, bigint, double",
            recovery="Use backend='bigint' for exact arbitrary-precision results"
        )
    """
    pass


class ValidationError(BraidTopoError, ValueError):
    """Error raised for input validation failures.

    This error is raised when command-line overrides or preset modules fail
    validation checks (e.g., wrong types, unknown keys, invalid formats).
    """
    pass


class CoordinateOverflowError(BraidTopoError, OverflowError):
    """Fatal overflow of a fixed-width backend where an exact result is required.

    Attributes:
        condition: The OverflowCondition that triggered the error
    """

    def __init__(
        self,
        problem: str,
        cause: Optional[str] = None,
        recovery: Optional[str] = None,
        context: Optional[str] = None,
        condition: Optional[OverflowCondition] = None,
    ):
        self.condition = condition
        super().__init__(problem, cause=cause, recovery=recovery, context=context)


class OverflowWarning(RuntimeWarning):
    """Recoverable overflow: the result was computed but may be unreliable.

    Attributes:
        conditions: OverflowCondition records collected during the computation
    """

    def __init__(self, message: str, conditions: Tuple[OverflowCondition, ...] = ()):
        super().__init__(message)
        self.conditions = tuple(conditions)
