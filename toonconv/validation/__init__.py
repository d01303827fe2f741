"""
Validation package.

- guard: pre-emission depth and circular reference detection
- compliance: post-emission checks of the produced TOON text
"""

from .compliance import (
    IssueSeverity,
    ToonValidator,
    ValidationIssue,
    ValidationReport,
    check_brackets,
    extract_values,
    validate_output,
)
from .guard import CycleGuard, check, child_path, has_circular_refs

__all__ = [
    # Guard
    "CycleGuard",
    "check",
    "child_path",
    "has_circular_refs",
    # Compliance
    "IssueSeverity",
    "ToonValidator",
    "ValidationIssue",
    "ValidationReport",
    "check_brackets",
    "extract_values",
    "validate_output",
]
