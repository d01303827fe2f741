"""Schema generation for classified arrays.

For a tabular array the generator derives the ordered field list (first
element's key order, the same order the tabular header uses) and infers a
type per field by scanning every row. For an inline primitive array it
infers a single element type. The result is diagnostic metadata only:
classification has already decided the layout.

Type inference rules:
- Integer and Float are compatible; their co-occurrence yields Float.
- Any other disagreement yields Mixed.
- Nulls are skipped during inference; if more than 10% of the rows are
  null the field is reported as nullable.
- A field that is null everywhere is Null.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from toonconv.constants import NULLABLE_THRESHOLD
from toonconv.types.core import ValueKind, is_integral, kind_of

from .classifier import ArrayLayout, classify
from .quotes import QuoteEngine


class FieldKind(str, Enum):
    """Inferred type of a field or array element."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    MIXED = "mixed"


@dataclass(frozen=True)
class FieldType:
    """A field kind, optionally wrapped as nullable."""

    kind: FieldKind
    nullable: bool = False

    def __str__(self) -> str:
        if self.nullable:
            return f"nullable<{self.kind.value}>"
        return self.kind.value


@dataclass(frozen=True)
class ArraySchema:
    """Derived description of one array node.

    Attributes:
        layout: The array's layout class.
        length: Number of elements.
        fields: Raw field names, for tabular arrays.
        header_fields: Field names as written in the tabular header
            (individually key-quoted).
        field_types: Inferred type per field, for tabular arrays.
        element_type: Inferred element type, for uniform primitive arrays.
    """

    layout: ArrayLayout
    length: int
    fields: tuple[str, ...] | None = None
    header_fields: tuple[str, ...] | None = None
    field_types: tuple[FieldType, ...] | None = None
    element_type: FieldType | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "layout": self.layout.value,
            "length": self.length,
            "fields": list(self.fields) if self.fields is not None else None,
            "field_types": (
                [str(t) for t in self.field_types] if self.field_types is not None else None
            ),
            "element_type": str(self.element_type) if self.element_type else None,
        }


def value_field_kind(value: Any) -> FieldKind:
    """Map a single value to its field kind."""
    kind = kind_of(value)
    if kind is ValueKind.NULL:
        return FieldKind.NULL
    if kind is ValueKind.BOOL:
        return FieldKind.BOOLEAN
    if kind is ValueKind.NUMBER:
        return FieldKind.INTEGER if is_integral(value) else FieldKind.FLOAT
    if kind is ValueKind.STRING:
        return FieldKind.STRING
    if kind is ValueKind.ARRAY:
        return FieldKind.ARRAY
    return FieldKind.OBJECT


def merge_kinds(current: FieldKind | None, new: FieldKind) -> FieldKind:
    """Combine two observed kinds of the same field."""
    if current is None or current == new:
        return new
    if {current, new} == {FieldKind.INTEGER, FieldKind.FLOAT}:
        return FieldKind.FLOAT
    return FieldKind.MIXED


def infer_type(values: Sequence[Any]) -> FieldType:
    """Infer one type for a column of values."""
    null_count = 0
    detected: FieldKind | None = None

    for value in values:
        if value is None:
            null_count += 1
            continue
        detected = merge_kinds(detected, value_field_kind(value))

    if detected is None:
        return FieldType(FieldKind.NULL)

    nullable = bool(values) and null_count / len(values) > NULLABLE_THRESHOLD
    return FieldType(detected, nullable=nullable)


class SchemaGenerator:
    """Builds ArraySchema metadata for array nodes."""

    def __init__(self, quote_engine: QuoteEngine | None = None):
        self.quote_engine = quote_engine or QuoteEngine()

    def header_fields(self, elements: Sequence[dict[str, Any]]) -> list[str]:
        """Field names of a tabular array, key-quoted for the header."""
        return [self.quote_engine.format_key(key) for key in elements[0]]

    def generate(self, elements: Sequence[Any]) -> ArraySchema:
        """Describe an array node.

        Args:
            elements: The array's elements.

        Returns:
            The derived schema; tabular arrays carry fields and field types,
            uniform primitive arrays carry an element type.
        """
        layout = classify(elements)

        if layout is ArrayLayout.TABULAR_OBJECTS:
            fields = tuple(elements[0])
            field_types = tuple(
                infer_type([obj[name] for obj in elements]) for name in fields
            )
            return ArraySchema(
                layout=layout,
                length=len(elements),
                fields=fields,
                header_fields=tuple(self.header_fields(elements)),
                field_types=field_types,
            )

        if layout is ArrayLayout.INLINE_PRIMITIVES:
            element_type = infer_type(elements)
            return ArraySchema(
                layout=layout,
                length=len(elements),
                element_type=element_type,
            )

        return ArraySchema(layout=layout, length=len(elements))
