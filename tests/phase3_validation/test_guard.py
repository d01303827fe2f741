"""
Phase 3 Tests: Depth/Cycle Guard

These tests verify the pre-emission guard:
- Depth ceiling enforcement, including very deep input
- Detection of real cycles through self-referencing containers
- Shared (non-cyclic) references are accepted
- Canonical path construction
"""

import pytest

from toonconv.types.errors import CircularReferenceError, MaxDepthExceededError
from toonconv.validation.guard import CycleGuard, check, child_path, has_circular_refs


class TestDepth:
    """Tests for the depth ceiling."""

    def test_within_limit(self, nested):
        """A tree exactly at the ceiling passes."""
        check(nested(5), max_depth=5)

    def test_over_limit(self, nested):
        """One level past the ceiling fails."""
        with pytest.raises(MaxDepthExceededError) as exc_info:
            check(nested(6), max_depth=5)
        assert exc_info.value.limit == 5
        assert exc_info.value.depth == 6

    def test_very_deep_input(self, nested):
        """Input deeper than the interpreter stack is rejected cleanly."""
        with pytest.raises(MaxDepthExceededError) as exc_info:
            check(nested(2000), max_depth=1000)
        assert exc_info.value.limit == 1000

    def test_deep_arrays(self):
        """Arrays count as nesting levels too."""
        value = 1
        for _ in range(20):
            value = [value]
        with pytest.raises(MaxDepthExceededError):
            check(value, max_depth=10)

    def test_scalar_root(self):
        """A scalar root has depth 0."""
        guard = CycleGuard(max_depth=1)
        guard.detect("just text")
        assert guard.deepest == 0

    def test_deepest_tracked(self, nested):
        """The guard records the deepest level seen."""
        guard = CycleGuard(max_depth=100)
        guard.detect(nested(7))
        assert guard.deepest == 7


class TestCycles:
    """Tests for circular reference detection."""

    def test_self_referencing_list(self):
        """A list containing itself is a cycle."""
        items = []
        items.append(items)
        with pytest.raises(CircularReferenceError) as exc_info:
            check(items)
        assert exc_info.value.path == "[0]"

    def test_dict_cycle(self):
        """A dict reachable from its own child is a cycle."""
        root = {"child": {}}
        root["child"]["back"] = root
        with pytest.raises(CircularReferenceError) as exc_info:
            check(root)
        assert exc_info.value.path == "child.back"

    def test_shared_reference_is_not_a_cycle(self):
        """The same list under two keys is not a cycle."""
        shared = [1, 2]
        check({"a": shared, "b": shared, "c": [shared, shared]})

    def test_has_circular_refs(self):
        """has_circular_refs reports cycles as a boolean."""
        loop = {}
        loop["self"] = loop
        assert has_circular_refs(loop) is True
        assert has_circular_refs({"a": [1, {"b": 2}]}) is False

    def test_is_safe(self, nested):
        """is_safe is False for cycles and depth violations."""
        guard = CycleGuard(max_depth=3)
        loop = []
        loop.append(loop)
        assert guard.is_safe({"a": 1}) is True
        assert guard.is_safe(loop) is False
        assert guard.is_safe(nested(4)) is False

    def test_guard_reusable(self):
        """A guard can check several trees in turn."""
        guard = CycleGuard()
        guard.detect({"a": {"b": 1}})
        guard.detect({"a": {"b": 1}})


class TestChildPath:
    """Tests for canonical path construction."""

    def test_simple_keys(self):
        """Plain keys are dot-joined."""
        assert child_path("", "users") == "users"
        assert child_path("users", "name") == "users.name"

    def test_indices(self):
        """Array indices use brackets."""
        assert child_path("users", 0) == "users[0]"
        assert child_path("", 3) == "[3]"

    def test_keys_with_path_syntax(self):
        """Keys containing path syntax use the bracket form."""
        assert child_path("a", "b.c") == 'a["b.c"]'
        assert child_path("", "") == '[""]'
        assert child_path("a", "x y") == 'a["x y"]'

    def test_distinct_nodes_distinct_paths(self):
        """A dotted key and a nested key never collide."""
        check({"a.b": 1, "a": {"b": 2}})
