"""
Input validation utilities for toonconv.

Range checks used by the configuration layer, plus parsing of
human-readable byte sizes accepted on the command line.
"""

import re

# ============================================================================
# Input Validation
# ============================================================================


def validate_int_range(
    value: int,
    name: str,
    min_value: int | None = None,
    max_value: int | None = None,
) -> None:
    """
    Validate an integer lies within inclusive bounds.

    Args:
        value: Value to validate
        name: Parameter name for error messages
        min_value: Lower bound (None = unbounded)
        max_value: Upper bound (None = unbounded)

    Raises:
        ValueError: If value is not an int or is out of bounds
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")

    if min_value is not None and value < min_value:
        if max_value is not None:
            raise ValueError(f"{name} must be {min_value}-{max_value}")
        raise ValueError(f"{name} must be at least {min_value}")

    if max_value is not None and value > max_value:
        if min_value is not None:
            raise ValueError(f"{name} must be {min_value}-{max_value}")
        raise ValueError(f"{name} must be at most {max_value}")


def validate_positive_number(
    value: int | float,
    name: str,
    allow_zero: bool = False,
) -> None:
    """
    Validate that a value is a positive number.

    Args:
        value: Value to validate
        name: Parameter name for error messages
        allow_zero: Whether zero is allowed

    Raises:
        ValueError: If value is invalid
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number")

    if allow_zero:
        if value < 0:
            raise ValueError(f"{name} must be non-negative")
    else:
        if value <= 0:
            raise ValueError(f"{name} must be greater than 0")


# ============================================================================
# Byte Sizes
# ============================================================================

_SIZE_UNITS = {
    "": 1,
    "B": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
}

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([KMG]?B?)\s*$", re.IGNORECASE)


def parse_byte_size(text: str) -> int:
    """
    Parse a human-readable size such as ``512``, ``64KB`` or ``1.5GB``.

    Units are binary (1KB = 1024 bytes).

    Args:
        text: Size string

    Returns:
        Size in bytes

    Raises:
        ValueError: If the text is not a size
    """
    match = _SIZE_PATTERN.match(text)
    if not match:
        raise ValueError(f"Invalid size '{text}'. Use a number with an optional KB, MB or GB suffix")

    number, unit = match.groups()
    unit = unit.upper()
    if unit and not unit.endswith("B"):
        unit += "B"
    return int(float(number) * _SIZE_UNITS[unit])
