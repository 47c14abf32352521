#!/usr/bin/env python3
"""CLI report for a braid given as a word in Artin generators.

Prints a rich table with:
- The braid, its strand count, writhe and permutation
- Its loop coordinates in the chosen basis
- Intersection number with the real axis and minimal length of those loops
- Dynnikov-Wiest complexity and an entropy estimate

Usage:
    # Report on sigma_1 sigma_2^-1 sigma_3
    python -m braidtopo.cli.braid_info 1 -2 3

    # Exact arithmetic and a longer entropy run
    python -m braidtopo.cli.braid_info --backend=bigint --iterations=40 1 -2

    # Named preset, then a flag on top
    python -m braidtopo.cli.braid_info --preset=braidtopo.config.presets.exact --basis=dehornoy 1 -2 3
"""

import sys
import warnings
from dataclasses import fields
from typing import Any, List, Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from braidtopo.cli.help_formatter import create_parser_from_dataclass, dataclass_to_defaults
from braidtopo.config import BraidConfig, load_config
from braidtopo.errors import BraidTopoError, CoordinateOverflowError, OverflowWarning
from braidtopo.topology import BraidWord, complexity, loop_entropy, loopcoords
from braidtopo.utils.logging import get_logger

logger = get_logger(__name__)

GROUPS = {
    'Arithmetic': ['backend', 'strict'],
    'Loops': ['basis'],
    'Metrics': ['length', 'log_base', 'iterations'],
}

EXAMPLES = [
    "python -m braidtopo.cli.braid_info 1 -2 3",
    "python -m braidtopo.cli.braid_info --backend=bigint --iterations=40 1 -2",
    "python -m braidtopo.cli.braid_info --preset=braidtopo.config.presets.exact -- -1 2",
]


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = create_parser_from_dataclass(
        BraidConfig,
        description="Loop coordinates, complexity and entropy of a braid",
        groups=GROUPS,
        examples=EXAMPLES,
    )
    parser.add_argument(
        'word',
        nargs='*',
        type=int,
        help="Signed generators: i for sigma_i, -i for its inverse",
    )
    parser.add_argument(
        '--n',
        type=int,
        default=None,
        help="Strand count (default: max|g| + 1)",
    )
    return parser.parse_args(argv)


def build_config(args) -> BraidConfig:
    """Combine defaults, an optional preset and explicit flags into a BraidConfig.

    Flags that differ from their defaults become --key=value overrides for
    load_config, so a preset value is used for every field whose flag was
    left at its default.
    """
    defaults = dataclass_to_defaults(BraidConfig)
    overrides = [
        f"--{f.name}={getattr(args, f.name)!r}"
        for f in fields(BraidConfig)
        if getattr(args, f.name) != defaults[f.name]
    ]
    preset = [args.preset] if args.preset else []
    return load_config(BraidConfig, preset + overrides, show_help=False)


class BraidReport:
    """Computes and renders the report for one braid.

    Attributes:
        braid: The braid being reported on
        config: Settings for arithmetic and metrics
        console: Rich console for output
    """

    def __init__(self, braid: BraidWord, config: BraidConfig, console: Optional[Console] = None):
        self.braid = braid
        self.config = config
        self.console = console or Console()

    def _loop_row(self) -> Tuple[Any, bool]:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", OverflowWarning)
            loop = loopcoords(
                self.braid,
                basis=self.config.basis,
                backend=self.config.backend,
                strict=self.config.strict,
            )
        overflowed = any(issubclass(w.category, OverflowWarning) for w in caught)
        return loop, overflowed

    def _guarded(self, name: str, compute, fmt: str = "{:.6f}") -> str:
        try:
            value = compute()
        except CoordinateOverflowError:
            return "[red]overflow[/red] (try --backend=bigint)"
        logger.metric(name, value)
        return fmt.format(value)

    def rows(self) -> List[Tuple[str, str]]:
        """Report rows as (label, value) pairs."""
        cfg = self.config
        loop, overflowed = self._loop_row()
        rows = [
            ("Braid", str(self.braid)),
            ("Strands", str(self.braid.n)),
            ("Length", str(len(self.braid))),
            ("Writhe", str(self.braid.writhe())),
            ("Permutation", " ".join(str(p) for p in self.braid.perm())),
            (f"Loop coordinates ({cfg.basis})", " ".join(str(v) for v in loop.rows()[0])),
        ]
        if overflowed:
            rows.append(("Overflow", f"[yellow]{cfg.backend} overflowed, values unreliable[/yellow]"))
        else:
            rows.append(("intaxis", self._guarded("intaxis", loop.intaxis, "{}")))
            rows.append(("minlength", self._guarded("minlength", loop.minlength, "{}")))

        base = cfg.log_base or None
        rows.append((
            f"Complexity ({cfg.length})",
            self._guarded("complexity", lambda: complexity(self.braid, cfg.length, base=base, backend=cfg.backend)),
        ))
        rows.append((
            f"Entropy estimate (N={cfg.iterations})",
            self._guarded("entropy", lambda: loop_entropy(self.braid, iterations=cfg.iterations, backend=cfg.backend)),
        ))
        return rows

    def render(self) -> None:
        table = Table(title="Braid Report", show_header=True, header_style="bold magenta")
        table.add_column("Quantity", style="cyan", no_wrap=True)
        table.add_column("Value", style="white")
        for label, value in self.rows():
            table.add_row(label, value)

        self.console.print(
            Panel.fit(
                f"[bold cyan]{self.braid}[/bold cyan]\n"
                f"backend: {self.config.backend}, basis: {self.config.basis}",
                border_style="cyan",
            )
        )
        self.console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the braid report CLI.

    Returns:
        Exit code (0 for success, 1 for invalid input)
    """
    args = parse_args(argv)
    try:
        config = build_config(args)
        braid = BraidWord(args.word, args.n)
        logger.debug(f"Reporting on {braid!r} with {config}")
        BraidReport(braid, config).render()
    except BraidTopoError as e:
        # The error panel has already been printed
        logger.error(f"braid_info failed: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
