"""
Core value model for TOON encoding.

The encoder walks plain Python JSON values: ``None``, ``bool``, numbers
(``int``, ``float``, ``Decimal``), ``str``, arrays (``list``/``tuple``)
and objects (``dict`` with string keys, insertion order preserved).
ValueKind names the six node kinds; kind_of() maps a Python object onto
them and rejects anything else.
"""

from collections.abc import Sequence
from decimal import Decimal
from enum import Enum
from typing import Any, TypeAlias

from .errors import UnsupportedValueError

Value: TypeAlias = None | bool | int | float | Decimal | str | list | tuple | dict


class ValueKind(str, Enum):
    """The six node kinds of a value tree."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any, path: str | None = None) -> ValueKind:
    """Classify a Python object as a value-tree node.

    Args:
        value: The object to classify.
        path: Optional location used in the error message.

    Returns:
        The node kind.

    Raises:
        UnsupportedValueError: If the object is not part of the value model.
    """
    if value is None:
        return ValueKind.NULL
    # bool is a subclass of int, test it first
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float, Decimal)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        for key in value:
            if not isinstance(key, str):
                raise UnsupportedValueError(f"dict key {type(key).__name__}", path)
        return ValueKind.OBJECT
    raise UnsupportedValueError(type(value).__name__, path)


def is_array(value: Any) -> bool:
    """Check if a value is an array node."""
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> bool:
    """Check if a value is an object node."""
    return isinstance(value, dict)


def is_scalar(value: Any) -> bool:
    """Check if a value is a scalar (null, bool, number or string)."""
    return not is_array(value) and not is_object(value)


def is_integral(value: Any) -> bool:
    """Check if a number is an integer type (not a float, not a bool)."""
    return isinstance(value, int) and not isinstance(value, bool)


def all_objects(elements: Sequence[Any]) -> bool:
    """Check if every element of an array is an object."""
    return all(is_object(item) for item in elements)


def all_scalars(elements: Sequence[Any]) -> bool:
    """Check if no element of an array is an object or an array."""
    return all(is_scalar(item) for item in elements)
