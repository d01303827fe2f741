"""
Configuration for JSON to TOON encoding.

EncodeConfig is immutable: every component reads it and none may change
it during an encode call. Use with_options() to derive a modified copy.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Self

from toonconv.constants import (
    DEFAULT_BYTE_LIMIT,
    DEFAULT_INDENT,
    DEFAULT_MAX_DEPTH,
    DEFAULT_TIME_LIMIT,
    MAX_INDENT,
)
from toonconv.types.errors import ConfigurationError
from toonconv.utils.validators import validate_int_range, validate_positive_number


class Delimiter(str, Enum):
    """Array element and tabular row separator."""

    COMMA = ","
    TAB = "\t"
    PIPE = "|"

    @classmethod
    def from_name(cls, name: str) -> "Delimiter":
        """Resolve ``comma``/``tab``/``pipe`` or the literal character."""
        lookup = {
            "comma": cls.COMMA,
            ",": cls.COMMA,
            "tab": cls.TAB,
            "\t": cls.TAB,
            "pipe": cls.PIPE,
            "|": cls.PIPE,
        }
        key = name if name == "\t" else name.lower()
        try:
            return lookup[key]
        except KeyError:
            raise ConfigurationError(
                f"Invalid delimiter '{name}'. Use 'comma', 'tab', or 'pipe'"
            ) from None


class QuoteStrategy(str, Enum):
    """String quoting policy."""

    SMART = "smart"  # Quote only when omitting quotes would change meaning
    ALWAYS = "always"
    NEVER = "never"

    @classmethod
    def from_name(cls, name: str) -> "QuoteStrategy":
        try:
            return cls(name.lower())
        except ValueError:
            raise ConfigurationError(
                f"Invalid quote strategy '{name}'. Use 'smart', 'always', or 'never'"
            ) from None


@dataclass(frozen=True)
class EncodeConfig:
    """Options consumed by every stage of one encode call.

    Attributes:
        indent: Spaces per indentation level (0-8).
        delimiter: Separator for inline arrays and tabular rows.
        length_marker: Emit the element count inside array headers.
        quote_strings: Quoting policy for string values.
        byte_limit: Pre-flight ceiling on the input's compact JSON size.
        time_limit: Wall-clock ceiling in seconds.
        include_schema: Attach detected array schemas to the result metadata.
        pretty: Multi-line objects (True) or one line per object (False).
        validate_output: Re-check the emitted text in strict mode.
        max_depth: Hard nesting ceiling enforced before emission.
    """

    indent: int = DEFAULT_INDENT
    delimiter: Delimiter = Delimiter.COMMA
    length_marker: bool = True
    quote_strings: QuoteStrategy = QuoteStrategy.SMART
    byte_limit: int = DEFAULT_BYTE_LIMIT
    time_limit: float = DEFAULT_TIME_LIMIT
    include_schema: bool = True
    pretty: bool = True
    validate_output: bool = True
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        try:
            validate_int_range(self.indent, "Indent size", 0, MAX_INDENT)
            validate_positive_number(self.byte_limit, "Byte limit")
            validate_positive_number(self.time_limit, "Timeout")
            validate_int_range(self.max_depth, "Max depth", min_value=1)
        except ValueError as e:
            raise ConfigurationError(str(e), original_error=e) from e

        if not isinstance(self.delimiter, Delimiter):
            raise ConfigurationError(f"delimiter must be a Delimiter, got {self.delimiter!r}")
        if not isinstance(self.quote_strings, QuoteStrategy):
            raise ConfigurationError(
                f"quote_strings must be a QuoteStrategy, got {self.quote_strings!r}"
            )

    @classmethod
    def small_files(cls) -> Self:
        """Configuration for small inputs (<1MB)."""
        return cls(byte_limit=10 * 1024 * 1024, time_limit=30.0)

    @classmethod
    def large_files(cls) -> Self:
        """Configuration for large inputs (>100MB); skips validation."""
        return cls(byte_limit=1024 * 1024 * 1024, time_limit=1800.0, validate_output=False)

    @classmethod
    def batch_processing(cls) -> Self:
        """Configuration for batch runs: compact output, no validation."""
        return cls(
            byte_limit=512 * 1024 * 1024,
            time_limit=600.0,
            pretty=False,
            validate_output=False,
        )

    def with_options(self, **changes: Any) -> Self:
        """Return a validated copy with the given fields replaced."""
        try:
            return replace(self, **changes)
        except TypeError as e:
            raise ConfigurationError(str(e), original_error=e) from e

    @property
    def indent_unit(self) -> str:
        """The whitespace for one indentation level."""
        return " " * self.indent
