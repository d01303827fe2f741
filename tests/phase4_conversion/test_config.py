"""
Phase 4 Tests: Configuration

These tests verify EncodeConfig:
- Defaults match the documented values
- Validation of every bounded option
- Presets and derived copies
- Delimiter and quote strategy name parsing
"""

import pytest

from toonconv.config import Delimiter, EncodeConfig, QuoteStrategy
from toonconv.types.errors import ConfigurationError


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self):
        """Defaults follow the documented configuration surface."""
        config = EncodeConfig()
        assert config.indent == 2
        assert config.delimiter is Delimiter.COMMA
        assert config.length_marker is True
        assert config.quote_strings is QuoteStrategy.SMART
        assert config.byte_limit == 100 * 1024 * 1024
        assert config.time_limit == 300.0
        assert config.include_schema is True
        assert config.pretty is True
        assert config.validate_output is True
        assert config.max_depth == 1000

    def test_immutable(self):
        """Configurations cannot be modified in place."""
        config = EncodeConfig()
        with pytest.raises(AttributeError):
            config.indent = 4

    def test_indent_unit(self):
        """indent_unit is one level of spaces."""
        assert EncodeConfig(indent=3).indent_unit == "   "
        assert EncodeConfig(indent=0).indent_unit == ""


class TestValidation:
    """Tests for option validation."""

    @pytest.mark.parametrize("indent", [-1, 9, 100])
    def test_indent_out_of_range(self, indent):
        """Indent must be 0-8."""
        with pytest.raises(ConfigurationError, match="Indent size must be 0-8"):
            EncodeConfig(indent=indent)

    def test_indent_bounds_accepted(self):
        """0 and 8 are valid indents."""
        EncodeConfig(indent=0)
        EncodeConfig(indent=8)

    @pytest.mark.parametrize(
        "options",
        [
            {"byte_limit": 0},
            {"byte_limit": -5},
            {"time_limit": 0},
            {"max_depth": 0},
            {"indent": 2.5},
            {"indent": True},
        ],
    )
    def test_invalid_options(self, options):
        """Non-positive limits and wrong types are rejected."""
        with pytest.raises(ConfigurationError):
            EncodeConfig(**options)

    def test_wrong_enum_type(self):
        """Delimiters and strategies must be enum members."""
        with pytest.raises(ConfigurationError):
            EncodeConfig(delimiter=";")
        with pytest.raises(ConfigurationError):
            EncodeConfig(quote_strings="smart")


class TestPresets:
    """Tests for the preset constructors."""

    def test_small_files(self):
        """small_files lowers the resource ceilings."""
        config = EncodeConfig.small_files()
        assert config.byte_limit == 10 * 1024 * 1024
        assert config.time_limit == 30.0

    def test_large_files(self):
        """large_files raises the ceilings and skips validation."""
        config = EncodeConfig.large_files()
        assert config.byte_limit == 1024 * 1024 * 1024
        assert config.validate_output is False

    def test_batch_processing(self):
        """batch_processing is compact and unvalidated."""
        config = EncodeConfig.batch_processing()
        assert config.pretty is False
        assert config.validate_output is False

    def test_with_options(self):
        """with_options returns a validated copy."""
        base = EncodeConfig()
        changed = base.with_options(indent=4, delimiter=Delimiter.TAB)
        assert changed.indent == 4
        assert changed.delimiter is Delimiter.TAB
        assert base.indent == 2

    def test_with_options_validates(self):
        """Invalid changes are rejected."""
        with pytest.raises(ConfigurationError):
            EncodeConfig().with_options(indent=20)

    def test_with_options_unknown_field(self):
        """Unknown fields are configuration errors."""
        with pytest.raises(ConfigurationError):
            EncodeConfig().with_options(colour="blue")


class TestNameParsing:
    """Tests for from_name() helpers."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("comma", Delimiter.COMMA),
            ("TAB", Delimiter.TAB),
            ("pipe", Delimiter.PIPE),
            ("|", Delimiter.PIPE),
            ("\t", Delimiter.TAB),
        ],
    )
    def test_delimiter_names(self, name, expected):
        """Delimiters resolve from names and characters."""
        assert Delimiter.from_name(name) is expected

    def test_unknown_delimiter(self):
        """Unknown delimiters are configuration errors."""
        with pytest.raises(ConfigurationError, match="Invalid delimiter"):
            Delimiter.from_name("semicolon")

    def test_quote_strategy_names(self):
        """Strategies resolve case-insensitively."""
        assert QuoteStrategy.from_name("Always") is QuoteStrategy.ALWAYS

    def test_unknown_quote_strategy(self):
        """Unknown strategies are configuration errors."""
        with pytest.raises(ConfigurationError, match="Invalid quote strategy"):
            QuoteStrategy.from_name("sometimes")
