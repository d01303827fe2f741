"""Serialization Utility Tests.

Tests for serialize_to_primitives and is_value_tree.

Bug Caught by Each Test:
- test_dataclass: dataclasses reach the formatter unconverted
- test_enum_keys: enum keys produce non-string object keys
- test_nan_kept: NaN silently dropped instead of rejected later
- test_deep_tree_check: value tree detection exhausts the stack
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

import pytest

from toonconv.types.errors import UnsupportedValueError
from toonconv.utils.serialization import is_value_tree, serialize_to_primitives


class Color(Enum):
    RED = "red"
    BLUE = "blue"


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Shape:
    name: str
    points: list[Point] = field(default_factory=list)
    color: Color = Color.RED


class Legacy:
    def __init__(self):
        self.kind = "legacy"
        self.size = 3


class Exportable:
    def to_dict(self):
        return {"exported": True}


class TestSerializeToPrimitives:
    """Tests for serialize_to_primitives()."""

    @pytest.mark.parametrize("value", [None, "s", 1, 1.5, True, Decimal("2.50")])
    def test_primitives_unchanged(self, value):
        """Primitives pass through."""
        assert serialize_to_primitives(value) == value

    def test_dataclass(self):
        """Dataclasses become dicts, recursively."""
        shape = Shape("tri", [Point(0, 0), Point(1, 2)], Color.BLUE)
        assert serialize_to_primitives(shape) == {
            "name": "tri",
            "points": [{"x": 0, "y": 0}, {"x": 1, "y": 2}],
            "color": "blue",
        }

    def test_datetimes(self):
        """Dates and datetimes become ISO strings."""
        assert serialize_to_primitives(date(2024, 5, 6)) == "2024-05-06"
        assert serialize_to_primitives(datetime(2024, 5, 6, 7, 8)) == "2024-05-06T07:08:00"

    def test_tuple(self):
        """Tuples become lists."""
        assert serialize_to_primitives((1, (2, 3))) == [1, [2, 3]]

    def test_enum_keys(self):
        """Non-string keys are stringified."""
        assert serialize_to_primitives({Color.RED: 1, 2: "b"}) == {"red": 1, "2": "b"}

    def test_to_dict_and_vars(self):
        """to_dict() is preferred, then instance attributes."""
        assert serialize_to_primitives(Exportable()) == {"exported": True}
        assert serialize_to_primitives(Legacy()) == {"kind": "legacy", "size": 3}

    def test_nan_kept(self):
        """Non-finite floats survive so the formatter can reject them."""
        result = serialize_to_primitives({"v": float("nan")})
        assert result["v"] != result["v"]

    def test_unsupported(self):
        """Objects without a known conversion raise."""
        with pytest.raises(UnsupportedValueError):
            serialize_to_primitives({1, 2})


class TestIsValueTree:
    """Tests for is_value_tree()."""

    def test_plain_tree(self):
        """JSON-like data is a value tree."""
        assert is_value_tree({"a": [1, "b", None, {"c": (True, 2.5)}]}) is True

    def test_rich_types(self):
        """Dataclasses, dates and non-string keys are not."""
        assert is_value_tree({"p": Point(1, 2)}) is False
        assert is_value_tree([date(2024, 1, 1)]) is False
        assert is_value_tree({1: "a"}) is False

    def test_deep_tree_check(self, nested):
        """Deep trees are checked without recursion."""
        assert is_value_tree(nested(5000)) is True
