"""
Structured error handling system for toonconv.

Every failure an encode call can report is a subclass of ToonconvError,
carrying a categorized code, a severity, the context in which it occurred
and suggested recovery actions. Fatal errors are always raised to the
caller; nothing is silently dropped or auto-corrected.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from toonconv.constants import utcnow


class ErrorCode(IntEnum):
    """Internal error codes for categorization."""

    # Input-structure errors (1000-1999)
    CIRCULAR_REFERENCE = 1001
    MAX_DEPTH_EXCEEDED = 1002
    UNSUPPORTED_VALUE = 1003
    INPUT_PARSE_FAILED = 1004

    # Value errors (2000-2999)
    INVALID_NUMBER = 2001

    # Resource-gate errors (3000-3999)
    TOO_LARGE = 3001
    TIMEOUT_EXCEEDED = 3002

    # Post-emission validation errors (4000-4999)
    VALIDATION_FAILED = 4001

    # Configuration errors (5000-5999)
    INVALID_CONFIG = 5001


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class RecoveryAction:
    """Suggested action to recover from an error."""

    description: str
    command: str | None = None
    automated: bool = False


@dataclass
class ErrorContext:
    """Context information for an error."""

    operation: str | None = None
    path: str | None = None
    component: str | None = None
    timestamp: datetime = field(default_factory=utcnow)
    additional_info: dict[str, Any] = field(default_factory=dict)


class ToonconvError(Exception):
    """Base error class for toonconv."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        user_message: str,
        severity: str = ErrorSeverity.MEDIUM,
        context: ErrorContext | None = None,
        recovery_actions: list[RecoveryAction] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.severity = severity
        self.user_message = user_message
        self.context = context or ErrorContext()
        self.recovery_actions = recovery_actions or []
        self.original_error = original_error

        self.context.timestamp = utcnow()

    def get_formatted_message(self) -> str:
        """Get a formatted error message for display to users."""
        parts = [
            f"[Error] {self.user_message}",
            f"   Code: {self.code.value}",
        ]

        if self.context.operation:
            parts.append(f"   Operation: {self.context.operation}")
        if self.context.path:
            parts.append(f"   Path: {self.context.path}")
        if self.context.component:
            parts.append(f"   Component: {self.context.component}")

        if self.recovery_actions:
            parts.append("")
            parts.append("Suggested actions:")
            for i, action in enumerate(self.recovery_actions, 1):
                parts.append(f"   {i}. {action.description}")
                if action.command:
                    parts.append(f"      Run: {action.command}")

        return "\n".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.__class__.__name__,
            "code": self.code.value,
            "message": str(self),
            "user_message": self.user_message,
            "severity": self.severity,
            "context": {
                "operation": self.context.operation,
                "path": self.context.path,
                "component": self.context.component,
                "timestamp": self.context.timestamp.isoformat(),
                "additional_info": self.context.additional_info,
            },
            "recovery_actions": [
                {"description": a.description, "command": a.command, "automated": a.automated}
                for a in self.recovery_actions
            ],
            "original_error": str(self.original_error) if self.original_error else None,
        }


# Specialized error classes, one per failure an encode call can report
class ConfigurationError(ToonconvError):
    """Error related to invalid configuration values."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: ErrorContext | None = None,
        recovery_actions: list[RecoveryAction] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CONFIG,
            message=message,
            user_message=user_message or f"Configuration error: {message}",
            severity=ErrorSeverity.HIGH,
            context=context or ErrorContext(component="config"),
            recovery_actions=recovery_actions,
            original_error=original_error,
        )


class TooLargeError(ToonconvError):
    """Input exceeds the configured byte budget."""

    def __init__(self, size: int, limit: int, context: ErrorContext | None = None) -> None:
        self.size = size
        self.limit = limit
        super().__init__(
            code=ErrorCode.TOO_LARGE,
            message=f"Input too large: {size} bytes (limit: {limit} bytes)",
            user_message=f"Input too large: {size} bytes (limit: {limit} bytes)",
            severity=ErrorSeverity.HIGH,
            context=context or ErrorContext(operation="size_check", component="engine"),
            recovery_actions=[
                RecoveryAction(
                    description="Raise the byte limit and retry",
                    command=f"toonconv convert --byte-limit {size} ...",
                )
            ],
        )


class TimeoutExceededError(ToonconvError):
    """Encoding ran past the configured wall-clock ceiling."""

    def __init__(
        self,
        limit: float,
        elapsed: float | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        self.limit = limit
        self.elapsed = elapsed
        message = f"Timeout exceeded: {limit}s"
        if elapsed is not None:
            message += f" (elapsed: {elapsed:.3f}s)"
        super().__init__(
            code=ErrorCode.TIMEOUT_EXCEEDED,
            message=message,
            user_message=f"Conversion timeout: {limit} seconds",
            severity=ErrorSeverity.HIGH,
            context=context or ErrorContext(operation="emit", component="formatter"),
            recovery_actions=[
                RecoveryAction(
                    description="Raise the time limit and retry",
                    command="toonconv convert --timeout <seconds> ...",
                )
            ],
        )


class CircularReferenceError(ToonconvError):
    """A node refers back to one of its ancestors."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            code=ErrorCode.CIRCULAR_REFERENCE,
            message=f"Circular reference detected at path: {path or '<root>'}",
            user_message="Circular reference detected in input data",
            severity=ErrorSeverity.HIGH,
            context=ErrorContext(operation="guard", path=path, component="validation"),
        )


class MaxDepthExceededError(ToonconvError):
    """Nesting depth exceeds the configured ceiling."""

    def __init__(
        self,
        limit: int,
        depth: int | None = None,
        path: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.limit = limit
        self.depth = depth
        message = f"Maximum nesting depth ({limit}) exceeded"
        if depth is not None:
            message += f" at depth {depth}"
        super().__init__(
            code=ErrorCode.MAX_DEPTH_EXCEEDED,
            message=message,
            user_message=f"Input nesting exceeds the maximum depth of {limit}",
            severity=ErrorSeverity.HIGH,
            context=ErrorContext(operation="guard", path=path, component="validation"),
            recovery_actions=[
                RecoveryAction(
                    description="Flatten the input or raise the depth ceiling",
                    command="toonconv convert --max-depth <n> ...",
                )
            ],
            original_error=original_error,
        )


class InvalidNumberError(ToonconvError):
    """A number has no lossless decimal representation."""

    def __init__(self, value: Any, path: str | None = None) -> None:
        self.value = value
        super().__init__(
            code=ErrorCode.INVALID_NUMBER,
            message=f"Invalid number: {value!r} has no decimal representation",
            user_message="Infinity and NaN are not supported in TOON output",
            severity=ErrorSeverity.MEDIUM,
            context=ErrorContext(operation="format_number", path=path, component="formatter"),
        )


class ValidationFailedError(ToonconvError):
    """Emitted text failed the strict structural check."""

    def __init__(self, issues: list[Any]) -> None:
        self.issues = list(issues)
        summary = "; ".join(str(issue) for issue in self.issues)
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message=f"TOON validation failed: {summary}",
            user_message="Generated TOON output failed validation",
            severity=ErrorSeverity.HIGH,
            context=ErrorContext(operation="validate", component="validation"),
            recovery_actions=[
                RecoveryAction(description="Disable output validation to inspect the raw output"),
            ],
        )


class UnsupportedValueError(ToonconvError):
    """A Python object outside the JSON value model reached the encoder."""

    def __init__(self, type_name: str, path: str | None = None) -> None:
        self.type_name = type_name
        super().__init__(
            code=ErrorCode.UNSUPPORTED_VALUE,
            message=f"Unsupported value of type {type_name}",
            user_message=f"Cannot encode values of type {type_name}",
            severity=ErrorSeverity.MEDIUM,
            context=ErrorContext(operation="format", path=path, component="formatter"),
        )


class InputParseError(ToonconvError):
    """Input text is not a valid JSON document."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INPUT_PARSE_FAILED,
            message=message,
            user_message=f"JSON parse error: {message}",
            severity=ErrorSeverity.MEDIUM,
            context=ErrorContext(operation="parse", path=source, component="engine"),
            original_error=original_error,
        )
