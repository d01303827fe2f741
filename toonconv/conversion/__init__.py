"""
Conversion package.

- engine: the encode orchestrator and its result types
- stats: statistics over one or many encode calls
"""

from .engine import (
    ArraySchemaSummary,
    ConversionEngine,
    ConversionMetadata,
    EncodedResult,
    SchemaInfo,
    collect_schema_info,
    compact_json_size,
    encode,
    estimate_tokens,
)
from .stats import ConversionStatistics, estimate_token_savings, reduction_percent

__all__ = [
    # Engine
    "ArraySchemaSummary",
    "ConversionEngine",
    "ConversionMetadata",
    "EncodedResult",
    "SchemaInfo",
    "collect_schema_info",
    "compact_json_size",
    "encode",
    "estimate_tokens",
    # Statistics
    "ConversionStatistics",
    "estimate_token_savings",
    "reduction_percent",
]
