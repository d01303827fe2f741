"""TOON emitter: the recursive tree walker that produces the final text.

Layout per node:

- Scalars render inline (``null``, ``true``, canonical numbers, quoted or
  bare strings).
- Objects render one ``key: value`` per line; composite values start on
  the next line one level deeper, arrays attach their header to the key
  (``tags[3]: a,b,c``). An empty object renders as the empty string.
- Inline primitive arrays render as ``[N]: v1,v2``.
- Tabular arrays render a ``[N]{f1,f2}:`` header and one row per element,
  one level deeper than the header.
- Mixed arrays render ``[N]:`` and one ``-`` item per element; object
  items put their keys on the lines below the dash.

The indentation level is passed down explicitly, so one ToonFormatter
holds no per-call mutable state beyond its configuration and deadline.
"""

import time
from collections.abc import Callable, Sequence
from typing import Any

from toonconv.config import EncodeConfig
from toonconv.types.core import ValueKind, is_array, is_object, is_scalar, kind_of
from toonconv.types.errors import TimeoutExceededError

from .classifier import ArrayLayout, classify
from .numbers import canonicalize_number
from .quotes import QuoteEngine
from .schema import SchemaGenerator


class ToonFormatter:
    """Formats a value tree as TOON text.

    Attributes:
        config: The encode configuration.
        quotes: Quoting engine bound to the configured delimiter and policy.
        schemas: Schema generator used for tabular headers.
        deadline: Monotonic time after which emission aborts, if any.
    """

    def __init__(
        self,
        config: EncodeConfig | None = None,
        deadline: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or EncodeConfig()
        self.quotes = QuoteEngine(self.config.delimiter, self.config.quote_strings)
        self.schemas = SchemaGenerator(self.quotes)
        self.deadline = deadline
        self._clock = clock
        self._started = clock()

    @property
    def delimiter(self) -> str:
        return self.config.delimiter.value

    def format(self, value: Any) -> str:
        """Format a whole value tree.

        Raises:
            InvalidNumberError: If a number is infinite or NaN.
            UnsupportedValueError: If a node is outside the value model.
            TimeoutExceededError: If the deadline passes during emission.
        """
        return self.format_value(value, 0)

    def format_value(self, value: Any, level: int, in_row: bool = False) -> str:
        """Format one node at the given indentation level.

        Args:
            value: The node.
            level: Indentation level of the line the node starts on.
            in_row: The node is a cell of a tabular row and must stay on
                one line.
        """
        kind = kind_of(value)
        if kind is ValueKind.NULL:
            return "null"
        if kind is ValueKind.BOOL:
            return "true" if value else "false"
        if kind is ValueKind.NUMBER:
            return canonicalize_number(value)
        if kind is ValueKind.STRING:
            return self.quotes.format(value)
        if in_row:
            return self.quotes.format(self.format_inline(value))
        if kind is ValueKind.ARRAY:
            return self.format_array(value, level)
        return self.format_object(value, level)

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def format_array(self, elements: Sequence[Any], level: int) -> str:
        """Format an array whose header sits on a line at ``level``."""
        layout = classify(elements)

        if layout is ArrayLayout.EMPTY:
            return self._header(0)
        if layout is ArrayLayout.TABULAR_OBJECTS:
            return self.format_tabular_array(elements, level)
        if layout is ArrayLayout.INLINE_PRIMITIVES:
            return self.format_primitive_array(elements, level)
        return self.format_mixed_array(elements, level)

    def format_primitive_array(self, elements: Sequence[Any], level: int) -> str:
        """Inline format: ``[N]: v1,v2,v3``."""
        values = [self.format_value(item, level) for item in elements]
        return f"{self._header(len(elements))} {self.delimiter.join(values)}"

    def format_tabular_array(self, elements: Sequence[dict[str, Any]], level: int) -> str:
        """Tabular format: ``[N]{f1,f2}:`` followed by one row per element."""
        fields = list(elements[0])
        lines = [self._header(len(elements), self.schemas.header_fields(elements))]
        row_indent = self._indent(level + 1)

        for obj in elements:
            self._check_deadline()
            cells = [self.format_value(obj[name], level + 1, in_row=True) for name in fields]
            lines.append(row_indent + self.delimiter.join(cells))

        return "\n".join(lines)

    def format_mixed_array(self, elements: Sequence[Any], level: int) -> str:
        """List format: ``[N]:`` followed by one dash item per element."""
        lines = [self._header(len(elements))]
        item_indent = self._indent(level + 1)

        for item in elements:
            self._check_deadline()
            if is_object(item):
                if item:
                    lines.append(f"{item_indent}-\n{self.format_object(item, level + 2)}")
                else:
                    lines.append(f"{item_indent}-")
            else:
                lines.append(f"{item_indent}- {self.format_value(item, level + 1)}")

        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def format_object(self, obj: dict[str, Any], level: int) -> str:
        """Format an object whose keys sit at ``level``.

        Every line of the result carries its own indentation.
        """
        if not obj:
            return ""

        if self.config.pretty:
            return self.format_pretty_object(obj, level)
        return self._indent(level) + self.format_compact_object(obj, level)

    def format_pretty_object(self, obj: dict[str, Any], level: int) -> str:
        """One ``key: value`` per line."""
        indent = self._indent(level)
        lines = []

        for key, value in obj.items():
            prefix = indent + self.quotes.format_key(key)

            if is_array(value):
                lines.append(prefix + self.format_array(value, level))
            elif is_object(value):
                if value:
                    lines.append(f"{prefix}:\n{self.format_object(value, level + 1)}")
                else:
                    lines.append(f"{prefix}:")
            else:
                lines.append(f"{prefix}: {self.format_value(value, level)}")

        return "\n".join(lines)

    def format_compact_object(self, obj: dict[str, Any], level: int) -> str:
        """All ``key:value`` pairs of one object on a single line."""
        pairs = []

        for key, value in obj.items():
            formatted_key = self.quotes.format_key(key)

            if is_array(value):
                pairs.append(formatted_key + self.format_array(value, level))
            elif is_object(value):
                pairs.append(f"{formatted_key}:{self.format_compact_object(value, level)}")
            else:
                pairs.append(f"{formatted_key}:{self.format_value(value, level)}")

        return " ".join(pairs)

    # ------------------------------------------------------------------
    # Single-line rendering for tabular cells
    # ------------------------------------------------------------------

    def format_inline(self, value: Any) -> str:
        """Render any node on one line (used for composite table cells).

        The caller quotes the result as a string, so a nested cell such as
        ``{"b": 1}`` and the string ``"b:1"`` produce the same cell text.
        Readers that need the two apart should avoid tabular layout for
        arrays with composite fields.
        """
        if is_scalar(value):
            return self.format_value(value, 0)

        if is_array(value):
            header = self._header(len(value))
            if not value:
                return header
            items = [self.format_inline(item) for item in value]
            return f"{header} {self.delimiter.join(items)}"

        pairs = [
            f"{self.quotes.format_key(key)}:{self.format_inline(item)}"
            for key, item in value.items()
        ]
        return " ".join(pairs)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _indent(self, level: int) -> str:
        return self.config.indent_unit * level

    def _header(self, count: int, fields: list[str] | None = None) -> str:
        marker = f"[{count}]" if self.config.length_marker else "[]"
        if fields is not None:
            marker += "{" + ",".join(fields) + "}"
        return marker + ":"

    def _check_deadline(self) -> None:
        if self.deadline is None:
            return
        now = self._clock()
        if now > self.deadline:
            raise TimeoutExceededError(self.config.time_limit, elapsed=now - self._started)


def format_to_toon(value: Any, config: EncodeConfig | None = None) -> str:
    """Convenience function to format a value tree as TOON."""
    return ToonFormatter(config).format(value)
