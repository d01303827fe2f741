"""Canonical decimal rendering of numbers.

Integers render as plain digits. Fractional values render as the shortest
decimal that round-trips, never in scientific notation, with no trailing
zeros and no trailing decimal point: ``120.0`` -> ``120``, ``25.50`` ->
``25.5``. Infinity and NaN have no lossless decimal form and are rejected.
"""

import math
from decimal import Decimal, InvalidOperation

from toonconv.types.errors import InvalidNumberError


def canonicalize_number(value: int | float | Decimal | str, path: str | None = None) -> str:
    """Render a number as minimal decimal text.

    Args:
        value: An int, float or Decimal, or the text of a number.
        path: Optional location used in error messages.

    Returns:
        Canonical decimal text.

    Raises:
        InvalidNumberError: For infinite or not-a-number values, or text
            that is not a number.

    Examples:
        >>> canonicalize_number(120.0)
        '120'
        >>> canonicalize_number(Decimal("25.50"))
        '25.5'
        >>> canonicalize_number(1e-7)
        '0.0000001'
    """
    if isinstance(value, bool):
        raise InvalidNumberError(value, path)

    if isinstance(value, int):
        return str(value)

    if isinstance(value, float):
        if math.isinf(value) or math.isnan(value):
            raise InvalidNumberError(value, path)
        if value.is_integer():
            return str(int(value))
        # repr() is the shortest text that round-trips to the same float
        return _plain_decimal(Decimal(repr(value)))

    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidNumberError(value, path) from None

    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidNumberError(value, path)
        return _plain_decimal(value)

    raise InvalidNumberError(value, path)


def _plain_decimal(value: Decimal) -> str:
    # Fixed-point without a precision argument, so no rounding
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text
