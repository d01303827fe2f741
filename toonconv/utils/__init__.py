"""
toonconv utility modules.

This package provides shared utilities used across the toonconv codebase:
- Logging (loguru, per-encode ids)
- Recursion limit headroom for deep trees
- Serialization of rich Python types into the value model
- Option validation and human readable size parsing
"""

# Logger
from .logger import (
    EncodeScope,
    configure_logging,
    current_encode_id,
    current_scope,
    encode_scope,
    logger,
    new_encode_id,
)

# Serialization
from .serialization import is_value_tree, serialize_to_primitives

# Stack
from .stack import FRAMES_PER_LEVEL, required_limit, stack_headroom

# Validators
from .validators import (
    parse_byte_size,
    validate_int_range,
    validate_positive_number,
)

__all__ = [
    # Logger
    "EncodeScope",
    "configure_logging",
    "current_encode_id",
    "current_scope",
    "encode_scope",
    "logger",
    "new_encode_id",
    # Stack
    "FRAMES_PER_LEVEL",
    "required_limit",
    "stack_headroom",
    # Serialization
    "is_value_tree",
    "serialize_to_primitives",
    # Validators
    "parse_byte_size",
    "validate_int_range",
    "validate_positive_number",
]
