"""
toonconv type definitions.

This module exports the value model and the error types shared by every
component of the encoder.
"""

# Core types
from .core import (
    Value,
    ValueKind,
    all_objects,
    all_scalars,
    is_array,
    is_integral,
    is_object,
    is_scalar,
    kind_of,
)

# Error types
from .errors import (
    CircularReferenceError,
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    InputParseError,
    InvalidNumberError,
    MaxDepthExceededError,
    RecoveryAction,
    TimeoutExceededError,
    ToonconvError,
    TooLargeError,
    UnsupportedValueError,
    ValidationFailedError,
)

__all__ = [
    # Core types
    "Value",
    "ValueKind",
    "all_objects",
    "all_scalars",
    "is_array",
    "is_integral",
    "is_object",
    "is_scalar",
    "kind_of",
    # Error types
    "ErrorCode",
    "ErrorSeverity",
    "RecoveryAction",
    "ErrorContext",
    "ToonconvError",
    "ConfigurationError",
    "TooLargeError",
    "TimeoutExceededError",
    "CircularReferenceError",
    "MaxDepthExceededError",
    "InvalidNumberError",
    "ValidationFailedError",
    "UnsupportedValueError",
    "InputParseError",
]
