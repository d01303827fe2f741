"""Depth and circular reference guard for value trees.

Runs to completion before any text is emitted so an encode call never
produces partial output for cyclic or overly deep input.

The traversal is iterative and tracks, for every visited node:
- its depth, failing with MaxDepthExceededError past the ceiling;
- its canonical path (``a.b[2].c``), failing with CircularReferenceError
  if the same path is reached twice in one traversal;
- the identities of the containers on the current path, failing with
  CircularReferenceError if a container is its own ancestor. Python
  dicts and lists can hold references to themselves, so this is the
  check that catches real cycles.
"""

import re
from typing import Any

from toonconv.constants import DEFAULT_MAX_DEPTH
from toonconv.formatter.quotes import quote
from toonconv.types.errors import CircularReferenceError, MaxDepthExceededError

_SIMPLE_KEY = re.compile(r"^[^.\[\]\"\\\s]+$")

_ENTER = 0
_EXIT = 1


def child_path(path: str, key: str | int) -> str:
    """Extend a canonical path by one object key or array index.

    Keys containing path syntax are written in bracket form
    (``a["b.c"]``) so distinct nodes never share a path.
    """
    if isinstance(key, int):
        return f"{path}[{key}]"
    if _SIMPLE_KEY.match(key):
        return f"{path}.{key}" if path else key
    return f"{path}[{quote(key)}]"


class CycleGuard:
    """Circular reference and depth detector.

    Attributes:
        max_depth: Deepest nesting level accepted (root is depth 0).
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth
        self.visited_paths: set[str] = set()
        self.deepest = 0

    def detect(self, root: Any) -> None:
        """Walk the tree and raise on the first violation.

        Raises:
            MaxDepthExceededError: If a node sits deeper than max_depth.
            CircularReferenceError: If a path repeats or a container is
                reachable from itself.
        """
        self.reset()
        ancestors: set[int] = set()
        stack: list[tuple[int, Any, int, str]] = [(_ENTER, root, 0, "")]

        while stack:
            action, value, depth, path = stack.pop()

            if action == _EXIT:
                ancestors.discard(value)
                continue

            if depth > self.max_depth:
                raise MaxDepthExceededError(self.max_depth, depth=depth, path=path)
            self.deepest = max(self.deepest, depth)

            if path:
                if path in self.visited_paths:
                    raise CircularReferenceError(path)
                self.visited_paths.add(path)

            if isinstance(value, dict):
                children = [(child_path(path, key), item) for key, item in value.items()]
            elif isinstance(value, (list, tuple)):
                children = [(child_path(path, i), item) for i, item in enumerate(value)]
            else:
                continue

            node_id = id(value)
            if node_id in ancestors:
                raise CircularReferenceError(path)
            ancestors.add(node_id)
            stack.append((_EXIT, node_id, depth, path))

            for item_path, item in reversed(children):
                stack.append((_ENTER, item, depth + 1, item_path))

    def is_safe(self, root: Any) -> bool:
        """Check if a tree passes the guard."""
        try:
            self.detect(root)
        except (CircularReferenceError, MaxDepthExceededError):
            return False
        return True

    def reset(self) -> None:
        """Reset the guard for reuse."""
        self.visited_paths.clear()
        self.deepest = 0


def check(root: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
    """Check a tree for cycles and excessive depth.

    Raises:
        MaxDepthExceededError: If a node sits deeper than max_depth.
        CircularReferenceError: If the tree is cyclic.
    """
    CycleGuard(max_depth).detect(root)


def has_circular_refs(root: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> bool:
    """Convenience function to check for circular references."""
    try:
        check(root, max_depth)
    except CircularReferenceError:
        return True
    except MaxDepthExceededError:
        return False
    return False
