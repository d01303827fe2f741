"""Shared serialization utilities.

Converts richer Python types (dataclasses, enums, datetimes, tuples) into
the plain value model the encoder walks. Plain value trees are detected
up front with is_value_tree() so they are encoded as-is without a copy.
"""

from collections import deque
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from toonconv.types.errors import UnsupportedValueError


def serialize_to_primitives(data: Any) -> Any:
    """Convert complex Python types to value-model primitives.

    Handles:
    - Primitives (str, int, float, Decimal, bool, None): returned as-is
    - datetime/date: converted to ISO format string
    - Enum: converted to value
    - dataclass: converted to dict via asdict()
    - dict: recursively serialize values, keys become strings
    - list/tuple: recursively serialize items
    - Objects with to_dict(): use that method
    - Objects with __dict__: serialize that

    Non-finite floats are kept so the number canonicalizer can reject them.

    Args:
        data: Any Python data structure.

    Returns:
        A value tree (primitives, dicts, lists only).

    Raises:
        UnsupportedValueError: If an object has no known conversion.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class User:
        ...     name: str
        ...     active: bool
        >>> serialize_to_primitives(User("Alice", True))
        {'name': 'Alice', 'active': True}
    """
    if data is None:
        return None

    if isinstance(data, (str, int, float, Decimal, bool)):
        return data

    if isinstance(data, (datetime, date)):
        return data.isoformat()

    if isinstance(data, Enum):
        return serialize_to_primitives(data.value)

    if is_dataclass(data) and not isinstance(data, type):
        return serialize_to_primitives(asdict(data))

    if isinstance(data, dict):
        return {
            _serialize_key(k): serialize_to_primitives(v)
            for k, v in data.items()
        }

    if isinstance(data, (list, tuple)):
        return [serialize_to_primitives(item) for item in data]

    if hasattr(data, "to_dict"):
        return serialize_to_primitives(data.to_dict())

    if hasattr(data, "__dict__"):
        return serialize_to_primitives(vars(data))

    raise UnsupportedValueError(type(data).__name__)


def _serialize_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def is_value_tree(data: Any) -> bool:
    """Check if data is already made only of value-model nodes.

    Returns True if data contains only primitives (str, int, float,
    Decimal, bool, None) and standard containers (dict with string keys,
    list, tuple). Walks iteratively so deep trees do not exhaust the stack.

    Args:
        data: Data to check.

    Returns:
        True if data can be encoded without normalization.
    """
    pending = deque([data])
    while pending:
        item = pending.pop()
        if item is None or isinstance(item, (str, int, float, Decimal, bool)):
            continue
        if isinstance(item, dict):
            if not all(isinstance(k, str) for k in item):
                return False
            pending.extend(item.values())
            continue
        if isinstance(item, (list, tuple)):
            pending.extend(item)
            continue
        return False
    return True
