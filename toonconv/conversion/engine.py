"""Conversion orchestrator.

ConversionEngine runs one encode call through its phases, each of which
must finish before the next starts:

1. guard: reject cyclic or overly deep input before any text exists
2. normalize: turn dataclasses, enums, datetimes and tuples into plain
   value-model nodes (skipped when the input already is one)
3. size gate: reject input whose compact JSON form exceeds byte_limit
4. emit: walk the tree with the formatter, under the time_limit deadline
5. validate: re-check the text in strict mode when validate_output is on
6. metadata: sizes, timings, token estimates and detected array schemas

Every failure surfaces as a ToonconvError subclass. Each call runs with
the recursion limit raised to fit max_depth levels; should the stack still
run out, that is reported as MaxDepthExceededError rather than a raw
RecursionError.
"""

import json
import time
from collections import deque
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from typing import Any

from toonconv.config import EncodeConfig
from toonconv.constants import CHARS_PER_TOKEN
from toonconv.formatter import ArrayLayout, SchemaGenerator, ToonFormatter
from toonconv.types.core import is_array, is_object
from toonconv.types.errors import (
    InputParseError,
    MaxDepthExceededError,
    TimeoutExceededError,
    TooLargeError,
)
from toonconv.utils.logger import encode_scope, logger, new_encode_id
from toonconv.utils.serialization import is_value_tree, serialize_to_primitives
from toonconv.utils.stack import stack_headroom
from toonconv.validation import ToonValidator, ValidationReport, check


@dataclass
class ArraySchemaSummary:
    """Schema of one uniform (tabular) array found in the input."""

    element_count: int
    field_count: int
    field_names: list[str]
    field_types: dict[str, str]


@dataclass
class SchemaInfo:
    """Array schemas detected during an encode call."""

    array_count: int = 0
    uniform_arrays: list[ArraySchemaSummary] = field(default_factory=list)


@dataclass
class ConversionMetadata:
    """Diagnostics attached to an encode result.

    Attributes:
        input_size: Compact JSON size of the input in bytes.
        output_size: TOON text size in bytes.
        token_reduction: Size reduction relative to JSON, in percent (>= 0).
        processing_time_ms: Wall-clock duration of the call.
        estimated_input_tokens: JSON size divided by ~4 characters per token.
        estimated_output_tokens: TOON size divided by ~4 characters per token.
        encode_id: Correlation ID shared by the call's log records.
        schema_info: Detected array schemas, when include_schema is on and
            the input holds at least one array.
        validation: Summary of the output validation, when it ran.
    """

    input_size: int
    output_size: int
    token_reduction: float
    processing_time_ms: float
    estimated_input_tokens: int
    estimated_output_tokens: int
    encode_id: str
    schema_info: SchemaInfo | None = None
    validation: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class EncodedResult:
    """TOON text plus the metadata of the call that produced it."""

    text: str
    metadata: ConversionMetadata

    def __str__(self) -> str:
        return self.text


def compact_json_size(value: Any) -> int:
    """UTF-8 byte length of the value's compact JSON serialization."""
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return len(text.encode("utf-8", errors="surrogatepass"))


def estimate_tokens(size: int) -> int:
    """Rough token count for a text of ``size`` characters."""
    return size // CHARS_PER_TOKEN


def collect_schema_info(value: Any, generator: SchemaGenerator) -> SchemaInfo | None:
    """Walk the tree and describe every array in it.

    Returns:
        None if the tree contains no arrays.
    """
    info = SchemaInfo()
    pending: deque[Any] = deque([value])

    while pending:
        node = pending.popleft()
        if is_object(node):
            pending.extend(node.values())
            continue
        if not is_array(node):
            continue

        info.array_count += 1
        pending.extend(node)

        schema = generator.generate(node)
        if schema.layout is ArrayLayout.TABULAR_OBJECTS:
            names = list(schema.fields or ())
            info.uniform_arrays.append(
                ArraySchemaSummary(
                    element_count=schema.length,
                    field_count=len(names),
                    field_names=names,
                    field_types={
                        name: str(kind)
                        for name, kind in zip(names, schema.field_types or ())
                    },
                )
            )

    return info if info.array_count else None


class ConversionEngine:
    """Runs encode calls under one configuration.

    The engine holds no per-call state, so one instance may serve
    concurrent calls on independent value trees.

    Attributes:
        config: The encode configuration.
    """

    def __init__(
        self,
        config: EncodeConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or EncodeConfig()
        self._clock = clock

    def encode(self, value: Any) -> EncodedResult:
        """Encode a value tree as TOON.

        Args:
            value: A value-model tree, or Python data serialize_to_primitives
                can convert.

        Returns:
            The TOON text and its metadata.

        Raises:
            CircularReferenceError: If the input is cyclic.
            MaxDepthExceededError: If the input nests deeper than max_depth.
            TooLargeError: If the input exceeds byte_limit.
            TimeoutExceededError: If the call runs past time_limit.
            InvalidNumberError: If a number is infinite or NaN.
            UnsupportedValueError: If a node cannot be converted.
            ValidationFailedError: If strict validation finds errors.
        """
        encode_id = new_encode_id()
        with encode_scope(encode_id, operation="encode"), stack_headroom(self.config.max_depth):
            try:
                return self._encode(value, encode_id)
            except RecursionError as e:
                logger.debug("Interpreter stack exhausted during encode")
                raise MaxDepthExceededError(self.config.max_depth, original_error=e) from e

    def encode_json(self, text: str, source: str | None = None) -> EncodedResult:
        """Parse a JSON document and encode it.

        Args:
            text: The JSON text.
            source: Where the text came from, for error messages.

        Raises:
            InputParseError: If the text is not valid JSON.
        """
        try:
            with stack_headroom(self.config.max_depth):
                value = json.loads(text)
        except json.JSONDecodeError as e:
            raise InputParseError(
                f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}",
                source=source,
                original_error=e,
            ) from e
        except RecursionError as e:
            raise MaxDepthExceededError(self.config.max_depth, original_error=e) from e
        return self.encode(value)

    def _encode(self, value: Any, encode_id: str) -> EncodedResult:
        config = self.config
        started = self._clock()
        deadline = started + config.time_limit

        check(value, config.max_depth)
        guard_done = self._clock()
        logger.debug(f"Guard passed in {(guard_done - started) * 1000:.2f}ms")

        if not is_value_tree(value):
            value = serialize_to_primitives(value)
            check(value, config.max_depth)
            logger.debug("Input normalized to value model")

        input_size = compact_json_size(value)
        if input_size > config.byte_limit:
            raise TooLargeError(input_size, config.byte_limit)

        now = self._clock()
        if now > deadline:
            raise TimeoutExceededError(config.time_limit, elapsed=now - started)

        formatter = ToonFormatter(config, deadline=deadline, clock=self._clock)
        text = formatter.format(value)
        emitted = self._clock()
        logger.debug(f"Emitted {len(text)} chars in {(emitted - now) * 1000:.2f}ms")

        validation = None
        if config.validate_output:
            report = ToonValidator(strict=True).validate(text, value)
            self._log_report(report)
            validation = report.to_dict()

        schema_info = None
        if config.include_schema:
            schema_info = collect_schema_info(value, formatter.schemas)

        output_size = len(text.encode("utf-8", errors="surrogatepass"))
        token_reduction = 0.0
        if input_size:
            token_reduction = max(0.0, (input_size - output_size) / input_size * 100)

        elapsed_ms = (self._clock() - started) * 1000
        logger.debug(
            f"Encoded {input_size} bytes to {output_size} bytes "
            f"({token_reduction:.1f}% reduction) in {elapsed_ms:.2f}ms"
        )

        return EncodedResult(
            text=text,
            metadata=ConversionMetadata(
                input_size=input_size,
                output_size=output_size,
                token_reduction=round(token_reduction, 2),
                processing_time_ms=elapsed_ms,
                estimated_input_tokens=estimate_tokens(input_size),
                estimated_output_tokens=estimate_tokens(output_size),
                encode_id=encode_id,
                schema_info=schema_info,
                validation=validation,
            ),
        )

    @staticmethod
    def _log_report(report: ValidationReport) -> None:
        for issue in report.warnings:
            logger.warning(f"Output validation: {issue.message}")


def encode(value: Any, config: EncodeConfig | None = None) -> EncodedResult:
    """Encode a value tree as TOON.

    Example:
        >>> encode({"name": "Alice", "age": 30}).text
        'name: Alice\\nage: 30'
    """
    return ConversionEngine(config).encode(value)
