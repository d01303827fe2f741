"""Interpreter stack headroom for deep value trees.

The formatter, serialize_to_primitives and the json module recurse once or
more per nesting level, so trees the depth guard accepts can outgrow
Python's default recursion limit. stack_headroom() raises the limit for
the duration of one encode call. The limit is process-wide and shared by
every thread: the first holder saves it and the last one out restores it.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from toonconv.utils.logger import logger

# Worst case is a list nested in a list item:
# format_mixed_array -> format_value -> format_array
FRAMES_PER_LEVEL = 4

_lock = threading.Lock()
_holders = 0
_saved_limit: int | None = None


def required_limit(base: int, max_depth: int) -> int:
    """Recursion limit that fits ``max_depth`` levels above ``base`` frames."""
    return base + max_depth * FRAMES_PER_LEVEL


@contextmanager
def stack_headroom(max_depth: int) -> Iterator[None]:
    """Run the body with enough recursion limit for ``max_depth`` levels.

    The limit is only ever raised while held, never lowered, and is
    restored once no caller holds it.
    """
    global _holders, _saved_limit

    with _lock:
        if _holders == 0:
            _saved_limit = sys.getrecursionlimit()
        _holders += 1
        target = required_limit(_saved_limit, max_depth)
        if sys.getrecursionlimit() < target:
            logger.debug(f"Raising recursion limit to {target}")
            sys.setrecursionlimit(target)

    try:
        yield
    finally:
        with _lock:
            _holders -= 1
            if _holders == 0:
                sys.setrecursionlimit(_saved_limit)
                _saved_limit = None
