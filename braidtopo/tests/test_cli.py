"""Tests for the braid report CLI and its rich argparse helpers.

Tests cover:
- Parser generation from the BraidConfig dataclass
- Preset handling (presets fill flags left at their defaults)
- Report rows, including overflow fallbacks
- Exit codes of main()
"""

from dataclasses import dataclass
from io import StringIO
from unittest.mock import patch

import pytest
from rich.console import Console

from braidtopo.cli.braid_info import BraidReport, build_config, main, parse_args
from braidtopo.cli.help_formatter import (
    RichArgumentParser,
    create_parser_from_dataclass,
    create_parser_from_defaults,
    dataclass_to_defaults,
)
from braidtopo.config import BraidConfig, load_config
from braidtopo.errors import ValidationError
from braidtopo.topology import BraidWord


class TestParserGeneration:
    """Test parsers built from defaults and dataclasses."""

    def test_types_inferred_from_defaults(self):
        """Test flag types follow the default values."""
        parser = create_parser_from_defaults(
            {"backend": "int64", "iterations": 10, "log_base": 0.0, "strict": False},
            description="test",
        )
        args = parser.parse_args(["--iterations", "20", "--log_base", "2", "--strict"])
        assert args.iterations == 20
        assert args.log_base == 2.0
        assert args.strict is True
        assert args.backend == "int64"
        assert args.preset is None

    def test_dataclass_defaults(self):
        """Test defaults are read from dataclass fields."""
        defaults = dataclass_to_defaults(BraidConfig)
        assert defaults["backend"] == "int64"
        assert defaults["iterations"] == 10

    def test_not_a_dataclass(self):
        """Test plain classes are rejected."""
        with pytest.raises(TypeError):
            dataclass_to_defaults(dict)

    def test_groups_and_ungrouped(self):
        """Test ungrouped fields land in an Other group."""

        @dataclass
        class Settings:
            backend: str = "int64"
            verbose: bool = False

        parser = create_parser_from_dataclass(
            Settings, description="test", groups={"Arithmetic": ["backend"]}
        )
        titles = [group.title for group in parser._action_groups]
        assert "[Arithmetic]" in titles
        assert "[Other]" in titles

    def test_examples_in_help(self):
        """Test examples are appended to the help text."""
        parser = RichArgumentParser(description="test", examples=["braid-info 1 -2"])
        assert "braid-info 1 -2" in parser.format_help()

    def test_print_help_to_file(self):
        """Test help can be printed to a file object."""
        parser = RichArgumentParser(description="braid report")
        out = StringIO()
        parser.print_help(out)
        assert "braid report" in out.getvalue()


class TestBraidInfoArguments:
    """Test argument parsing and config assembly for braid_info."""

    def test_negative_generators(self):
        """Test signed generators parse as positionals."""
        args = parse_args(["1", "-2", "3"])
        assert args.word == [1, -2, 3]
        assert args.n is None

    def test_flags(self):
        """Test config flags and --n."""
        args = parse_args(["--backend", "bigint", "--n", "5", "1"])
        assert args.backend == "bigint"
        assert args.n == 5

    def test_build_config_defaults(self):
        """Test no flags gives the default config."""
        assert build_config(parse_args(["1"])) == BraidConfig()

    def test_preset_fills_defaults(self):
        """Test a preset sets fields whose flags were not given."""
        args = parse_args(["--preset", "braidtopo.config.presets.exact", "--iterations", "40", "1"])
        config = build_config(args)
        assert config.backend == "bigint"
        assert config.strict is True
        assert config.iterations == 40

    def test_flags_go_through_load_config(self):
        """Changed flags are handed to load_config as --key=value overrides."""
        args = parse_args(["--log_base", "2", "--strict", "--basis", "dehornoy", "1"])
        with patch("braidtopo.cli.braid_info.load_config", wraps=load_config) as mock_load:
            config = build_config(args)
        mock_load.assert_called_once_with(
            BraidConfig,
            ["--basis='dehornoy'", "--log_base=2.0", "--strict=True"],
            show_help=False,
        )
        assert config == BraidConfig(basis="dehornoy", log_base=2.0, strict=True)

    def test_preset_with_unknown_keys(self, quiet_errors):
        """Presets are checked against the config fields."""
        with pytest.raises(ValidationError, match="unknown keys"):
            build_config(parse_args(["--preset", "string", "1"]))
        assert main(["--preset", "string", "1"]) == 1


class TestBraidReport:
    """Test the computed report rows."""

    def test_rows(self, braid_123):
        """Test the basic quantities of sigma_1 sigma_2^-1 sigma_3."""
        rows = dict(BraidReport(braid_123, BraidConfig()).rows())
        assert rows["Braid"] == "< 1 -2 3 >"
        assert rows["Strands"] == "4"
        assert rows["Length"] == "3"
        assert rows["Writhe"] == "1"
        assert rows["Permutation"] == "2 3 4 1"
        assert rows["Loop coordinates (default)"] == "1 -2 1 -2 -2 2"
        assert rows["intaxis"] == "18"
        assert rows["minlength"] == "24"
        assert float(rows["Complexity (intaxis)"]) > 0
        assert "Entropy estimate (N=10)" in rows

    def test_complexity_value(self):
        """Test complexity is printed with six decimals."""
        rows = dict(BraidReport(BraidWord([1, -2]), BraidConfig()).rows())
        assert rows["Complexity (intaxis)"] == "0.916291"

    def test_dehornoy_basis(self, braid_123):
        """Test the reported basis follows the config."""
        rows = dict(BraidReport(braid_123, BraidConfig(basis="dehornoy")).rows())
        assert rows["Loop coordinates (dehornoy)"] == "1 -2 3 0 0 0"

    def test_overflow_fallbacks(self, quiet_errors):
        """Test overflowing quantities are reported instead of raising."""
        rows = dict(BraidReport(BraidWord([1, -2] * 50), BraidConfig()).rows())
        assert "Overflow" in rows
        assert "intaxis" not in rows
        assert "overflow" in rows["Complexity (intaxis)"]
        assert "overflow" in rows["Entropy estimate (N=10)"]

    def test_bigint_has_no_overflow(self):
        """Test exact arithmetic reports every quantity."""
        rows = dict(BraidReport(BraidWord([1, -2] * 50), BraidConfig(backend="bigint")).rows())
        assert "Overflow" not in rows
        assert float(rows["Complexity (intaxis)"]) > 40

    def test_render(self, braid_123):
        """Test rendering writes the table to the console."""
        out = StringIO()
        BraidReport(braid_123, BraidConfig(), Console(file=out, width=120)).render()
        text = out.getvalue()
        assert "Braid Report" in text
        assert "minlength" in text


class TestMain:
    """Test exit codes of the CLI entry point."""

    def test_success(self):
        """Test a valid braid exits with 0."""
        assert main(["1", "-2", "3"]) == 0

    def test_invalid_config(self, quiet_errors):
        """Test invalid settings exit with 1."""
        assert main(["--backend", "int128", "1"]) == 1

    def test_invalid_strand_count(self, quiet_errors):
        """Test a strand count too small for the word exits with 1."""
        assert main(["--n", "2", "1", "3"]) == 1
