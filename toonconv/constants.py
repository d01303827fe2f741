"""Shared constants and helpers for toonconv.

Centralizes encoder defaults, resource ceilings, quoting character sets,
and timezone-aware datetime helpers.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime.

    Replacement for the deprecated ``datetime.utcnow()`` which returns a naive
    datetime.  This returns ``datetime.now(timezone.utc)`` and can be used
    directly as a ``default_factory`` in dataclass fields.
    """
    return datetime.now(timezone.utc)


# Indentation bounds (spaces per nesting level)
DEFAULT_INDENT: int = 2
MAX_INDENT: int = 8

# Pre-flight size gate, measured on the compact JSON serialization (100 MiB).
DEFAULT_BYTE_LIMIT: int = 100 * 1024 * 1024

# Wall-clock ceiling in seconds (5 minutes).
DEFAULT_TIME_LIMIT: float = 300.0

# Hard recursion ceiling enforced by the depth/cycle guard.
DEFAULT_MAX_DEPTH: int = 1000

# Share of null values above which a schema field is reported as nullable.
NULLABLE_THRESHOLD: float = 0.1

# Rough approximation used for token estimates: ~4 characters per token.
CHARS_PER_TOKEN: int = 4

# Characters that always force a string value into quotes.
STRUCTURAL_CHARS: frozenset[str] = frozenset({":", ",", "\n", "\r", "{", "}", "[", "]"})

# Characters that force a key into quotes (besides ':' and ' ').
KEY_STRUCTURAL_CHARS: frozenset[str] = frozenset({"[", "]", "{", "}", ","})

# Literal tokens a decoder would read as keywords.
RESERVED_LITERALS: frozenset[str] = frozenset({"true", "false", "null"})

# Textual number forms that do not parse as Python floats in the same way.
SPECIAL_NUMBER_LITERALS: frozenset[str] = frozenset({"Infinity", "-Infinity", "NaN"})
