"""TOON output compliance validation.

Checks emitted text independently of the formatter:

- structure: the text is encodable as UTF-8 (no lone surrogates);
- brackets: ``{}``/``[]`` outside quoted strings never go negative and
  end balanced;
- content: every key and scalar leaf of the original value appears
  somewhere in the text;
- encoding: no unescaped control characters besides newline, CR and tab;
- formatting: indentation is a multiple of two spaces.

Structure and bracket failures are errors. Everything else is a warning:
the content check is a substring heuristic with known false positives
and false negatives, a best-effort signal and not a correctness guarantee.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from toonconv.formatter.numbers import canonicalize_number
from toonconv.formatter.quotes import is_control_char, quote
from toonconv.types.core import is_array, is_object
from toonconv.types.errors import InvalidNumberError, ValidationFailedError


class IssueSeverity(str, Enum):
    """Severity of a validation finding."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """A single validation finding."""

    severity: IssueSeverity
    message: str

    def __str__(self) -> str:
        return f"{self.severity.value}: {self.message}"


@dataclass
class ValidationReport:
    """Outcome of validating one emitted document."""

    structure_valid: bool = False
    brackets_balanced: bool = False
    data_integrity: bool = False
    encoding_valid: bool = False
    formatting_consistent: bool = False
    missing_values: list[str] = field(default_factory=list)
    issues: list[ValidationIssue] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.issues.append(ValidationIssue(IssueSeverity.ERROR, message))

    def add_warning(self, message: str) -> None:
        self.issues.append(ValidationIssue(IssueSeverity.WARNING, message))

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is IssueSeverity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity is IssueSeverity.WARNING]

    def is_valid(self) -> bool:
        """A report is valid when it holds no errors (warnings are allowed)."""
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.is_valid(),
            "structure_valid": self.structure_valid,
            "brackets_balanced": self.brackets_balanced,
            "data_integrity": self.data_integrity,
            "encoding_valid": self.encoding_valid,
            "formatting_consistent": self.formatting_consistent,
            "errors": [i.message for i in self.errors],
            "warnings": [i.message for i in self.warnings],
        }


def check_brackets(text: str) -> list[str]:
    """Scan bracket balance outside quoted strings.

    Returns:
        One message per problem found; empty when balanced.
    """
    problems = []
    braces = 0
    brackets = 0
    in_string = False
    escape_next = False

    for i, ch in enumerate(text):
        if escape_next:
            escape_next = False
            continue
        if ch == "\\":
            escape_next = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue

        if ch == "{":
            braces += 1
        elif ch == "}":
            braces -= 1
            if braces < 0:
                problems.append(f"Unmatched closing brace at position {i}")
                braces = 0
        elif ch == "[":
            brackets += 1
        elif ch == "]":
            brackets -= 1
            if brackets < 0:
                problems.append(f"Unmatched closing bracket at position {i}")
                brackets = 0

    if braces:
        problems.append(f"{braces} unclosed braces")
    if brackets:
        problems.append(f"{brackets} unclosed brackets")
    return problems


def extract_values(value: Any) -> list[str]:
    """Collect the text of every key and scalar leaf, in document order."""
    values: list[str] = []
    pending: deque[Any] = deque([value])

    while pending:
        item = pending.popleft()
        if is_object(item):
            for key, child in item.items():
                values.append(key)
                pending.append(child)
        elif is_array(item):
            pending.extend(item)
        elif item is None:
            values.append("null")
        elif isinstance(item, bool):
            values.append("true" if item else "false")
        elif isinstance(item, str):
            values.append(item)
        else:
            try:
                values.append(canonicalize_number(item))
            except InvalidNumberError:
                values.append(str(item))

    return values


def escape_for_search(text: str) -> str:
    """Escape a string the way it would appear inside quotes."""
    return quote(text)[1:-1]


def value_present(value: str, output: str) -> bool:
    """Check if a value appears in the output bare, quoted or escaped."""
    return (
        value in output
        or quote(value) in output
        or escape_for_search(value) in output
    )


class ToonValidator:
    """TOON compliance validator.

    Attributes:
        strict: Raise ValidationFailedError when the report holds errors.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def validate(self, output: str, original: Any) -> ValidationReport:
        """Validate emitted TOON text against the value it came from.

        Raises:
            ValidationFailedError: In strict mode, if any error was found.
        """
        report = ValidationReport()

        self.validate_structure(output, report)
        self.validate_brackets(output, report)
        self.validate_content(output, original, report)
        self.validate_encoding(output, report)
        self.validate_formatting(output, report)

        if self.strict and not report.is_valid():
            raise ValidationFailedError(report.errors)

        return report

    def validate_structure(self, output: str, report: ValidationReport) -> None:
        # Empty output is valid: it is the encoding of an empty object
        try:
            output.encode("utf-8")
        except UnicodeEncodeError as e:
            report.add_error(f"Output contains invalid UTF-8 at position {e.start}")
            return
        report.structure_valid = True

    def validate_brackets(self, output: str, report: ValidationReport) -> None:
        problems = check_brackets(output)
        for problem in problems:
            report.add_error(problem)
        report.brackets_balanced = not problems

    def validate_content(self, output: str, original: Any, report: ValidationReport) -> None:
        # Repeated values need only one search
        unique = dict.fromkeys(extract_values(original))
        missing = [v for v in unique if not value_present(v, output)]
        if missing:
            report.add_warning(f"{len(missing)} values may be missing")
        report.missing_values = missing
        report.data_integrity = not missing

    def validate_encoding(self, output: str, report: ValidationReport) -> None:
        for i, ch in enumerate(output):
            if ch in "\n\r\t":
                continue
            if is_control_char(ch):
                report.add_warning(f"Unescaped control character at position {i}")
        report.encoding_valid = True

    def validate_formatting(self, output: str, report: ValidationReport) -> None:
        consistent = True
        if "\n" in output:
            for number, line in enumerate(output.split("\n"), 1):
                if not line:
                    continue
                leading = len(line) - len(line.lstrip(" "))
                if leading % 2 != 0 and leading % 4 != 0:
                    report.add_warning(
                        f"Inconsistent indentation on line {number}: {leading} spaces"
                    )
                    consistent = False

        if ":" not in output and "{" in output:
            report.add_warning("Object detected but no colons found")

        report.formatting_consistent = consistent


def validate_output(output: str, original: Any, strict: bool = False) -> ValidationReport:
    """Convenience function to validate emitted TOON text."""
    return ToonValidator(strict=strict).validate(output, original)
