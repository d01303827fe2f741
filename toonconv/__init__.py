"""
toonconv - JSON to TOON encoder.

Encodes JSON-like value trees as TOON (Token-Oriented Object Notation),
a compact text format for feeding structured data to language models:
- Indented ``key: value`` objects
- Inline primitive arrays and tabular arrays of uniform objects
- Smart quoting that only quotes strings when meaning would change
- Pre-flight guards against cyclic, deep, oversized or slow input
"""

__version__ = "0.1.0"

from toonconv.config import Delimiter, EncodeConfig, QuoteStrategy
from toonconv.conversion import ConversionEngine, EncodedResult, encode
from toonconv.types.errors import ToonconvError

__all__ = [
    "ConversionEngine",
    "Delimiter",
    "EncodeConfig",
    "EncodedResult",
    "QuoteStrategy",
    "ToonconvError",
    "encode",
]
