"""Array layout classification.

Every non-empty array node gets exactly one of three layouts:

- TABULAR_OBJECTS: all elements are objects with the same non-empty key
  set, and every array-valued field has the same length in all elements.
- INLINE_PRIMITIVES: no element is an object or an array.
- MIXED_LIST: anything else.

The object check runs first; an array must be rejected as tabular before
it is considered for the inline form. Empty arrays are handled by the
caller (they always render as ``[0]:``).
"""

from collections.abc import Sequence
from enum import Enum
from typing import Any

from toonconv.types.core import all_objects, all_scalars, is_array


class ArrayLayout(str, Enum):
    """Layout classes for array nodes."""

    EMPTY = "empty"
    TABULAR_OBJECTS = "tabular_objects"
    INLINE_PRIMITIVES = "inline_primitives"
    MIXED_LIST = "mixed_list"


def is_uniform_object_array(elements: Sequence[Any]) -> bool:
    """Check if an array qualifies for the tabular layout."""
    if not elements or not all_objects(elements):
        return False

    first = elements[0]
    first_keys = set(first)
    # Rows of empty objects would be blank lines
    if not first_keys:
        return False
    if any(set(obj) != first_keys for obj in elements[1:]):
        return False

    # A ragged nested array column would be truncated in a table
    for key in first:
        array_lengths = set()
        saw_non_array = False
        for obj in elements:
            field_value = obj[key]
            if is_array(field_value):
                array_lengths.add(len(field_value))
            else:
                saw_non_array = True
        if array_lengths and (saw_non_array or len(array_lengths) > 1):
            return False

    return True


def classify(elements: Sequence[Any]) -> ArrayLayout:
    """Assign an array its layout class.

    Args:
        elements: The array's elements.

    Returns:
        ArrayLayout.EMPTY for an empty array, otherwise exactly one of
        TABULAR_OBJECTS, INLINE_PRIMITIVES or MIXED_LIST.
    """
    if len(elements) == 0:
        return ArrayLayout.EMPTY

    if is_uniform_object_array(elements):
        return ArrayLayout.TABULAR_OBJECTS

    if all_scalars(elements):
        return ArrayLayout.INLINE_PRIMITIVES

    return ArrayLayout.MIXED_LIST
