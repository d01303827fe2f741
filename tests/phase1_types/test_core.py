"""
Phase 1 Tests: Value Model

These tests verify the mapping of Python objects onto the six node kinds:
- Kind detection, including bool before int
- Rejection of objects outside the value model
- Array and object predicates
"""

from datetime import date
from decimal import Decimal

import pytest

from toonconv.types import (
    UnsupportedValueError,
    ValueKind,
    all_objects,
    all_scalars,
    is_array,
    is_integral,
    is_object,
    is_scalar,
    kind_of,
)


class TestKindOf:
    """Tests for kind_of()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, ValueKind.NULL),
            (True, ValueKind.BOOL),
            (False, ValueKind.BOOL),
            (0, ValueKind.NUMBER),
            (2.5, ValueKind.NUMBER),
            (Decimal("1.10"), ValueKind.NUMBER),
            ("", ValueKind.STRING),
            ([], ValueKind.ARRAY),
            ((1, 2), ValueKind.ARRAY),
            ({}, ValueKind.OBJECT),
        ],
    )
    def test_detects_kind(self, value, expected):
        """Each supported Python type maps to its node kind."""
        assert kind_of(value) is expected

    def test_bool_is_not_number(self):
        """bool is classified before int."""
        assert kind_of(True) is ValueKind.BOOL

    def test_rejects_unknown_type(self):
        """Objects outside the value model raise UnsupportedValueError."""
        with pytest.raises(UnsupportedValueError) as exc_info:
            kind_of(date(2024, 1, 1))
        assert exc_info.value.type_name == "date"

    def test_rejects_non_string_keys(self):
        """Objects must have string keys."""
        with pytest.raises(UnsupportedValueError, match="dict key int"):
            kind_of({1: "a"})

    def test_error_carries_path(self):
        """The optional path ends up in the error context."""
        with pytest.raises(UnsupportedValueError) as exc_info:
            kind_of(object(), path="a.b")
        assert exc_info.value.context.path == "a.b"


class TestPredicates:
    """Tests for the node predicates."""

    def test_is_array(self):
        """Lists and tuples are arrays."""
        assert is_array([1]) is True
        assert is_array((1,)) is True
        assert is_array("abc") is False
        assert is_array({}) is False

    def test_is_object(self):
        """Only dicts are objects."""
        assert is_object({"a": 1}) is True
        assert is_object([]) is False

    def test_is_scalar(self):
        """Scalars are everything except arrays and objects."""
        assert is_scalar(None) is True
        assert is_scalar("x") is True
        assert is_scalar(1.5) is True
        assert is_scalar([]) is False
        assert is_scalar({}) is False

    def test_is_integral(self):
        """Integers are integral; floats and bools are not."""
        assert is_integral(3) is True
        assert is_integral(3.0) is False
        assert is_integral(True) is False

    def test_all_objects(self):
        """all_objects requires every element to be a dict."""
        assert all_objects([{}, {"a": 1}]) is True
        assert all_objects([{}, 1]) is False

    def test_all_scalars(self):
        """all_scalars rejects nested containers."""
        assert all_scalars([1, "a", None, True]) is True
        assert all_scalars([1, [2]]) is False
        assert all_scalars([1, {}]) is False
