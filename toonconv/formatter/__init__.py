"""
TOON formatting package.

- quotes: smart quoting and escaping of strings and keys
- numbers: canonical decimal rendering
- classifier: array layout classification
- schema: field list and type inference for classified arrays
- emitter: the recursive tree walker producing TOON text
"""

from .classifier import ArrayLayout, classify, is_uniform_object_array
from .emitter import ToonFormatter, format_to_toon
from .numbers import canonicalize_number
from .quotes import (
    QuoteEngine,
    looks_like_number,
    needs_key_quoting,
    needs_quoting,
    quote,
    smart_quote,
    unquote,
)
from .schema import ArraySchema, FieldKind, FieldType, SchemaGenerator, infer_type

__all__ = [
    # Classifier
    "ArrayLayout",
    "classify",
    "is_uniform_object_array",
    # Emitter
    "ToonFormatter",
    "format_to_toon",
    # Numbers
    "canonicalize_number",
    # Quoting
    "QuoteEngine",
    "looks_like_number",
    "needs_key_quoting",
    "needs_quoting",
    "quote",
    "smart_quote",
    "unquote",
    # Schema
    "ArraySchema",
    "FieldKind",
    "FieldType",
    "SchemaGenerator",
    "infer_type",
]
