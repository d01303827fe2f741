"""Statistics and token estimates for conversion runs.

ConversionStatistics accumulates sizes and timings over one or many
encode calls; the CLI prints its summary with ``--stats``.
"""

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Self

from toonconv.constants import CHARS_PER_TOKEN, utcnow


def reduction_percent(input_size: int, output_size: int) -> float:
    """Size reduction of output relative to input, floored at 0."""
    if input_size <= 0:
        return 0.0
    return max(0.0, (input_size - output_size) / input_size * 100)


@dataclass
class ConversionStatistics:
    """Accumulated statistics for conversion operations."""

    input_size_bytes: int = 0
    output_size_bytes: int = 0
    token_reduction_percent: float = 0.0
    processing_time_ms: float = 0.0
    file_count: int = 0
    operation_count: int = 0
    avg_time_per_operation_ms: float = 0.0
    throughput_bytes_per_sec: float = 0.0
    collected_at: datetime = field(default_factory=utcnow)

    @classmethod
    def for_conversion(
        cls, input_size: int, output_size: int, processing_time_ms: float
    ) -> Self:
        """Create statistics for a single conversion."""
        seconds = processing_time_ms / 1000
        return cls(
            input_size_bytes=input_size,
            output_size_bytes=output_size,
            token_reduction_percent=reduction_percent(input_size, output_size),
            processing_time_ms=processing_time_ms,
            file_count=1,
            operation_count=1,
            avg_time_per_operation_ms=processing_time_ms,
            throughput_bytes_per_sec=input_size / seconds if seconds > 0 else 0.0,
        )

    @classmethod
    def for_result(cls, result: Any) -> Self:
        """Create statistics from an EncodedResult."""
        meta = result.metadata
        return cls.for_conversion(meta.input_size, meta.output_size, meta.processing_time_ms)

    def combine(self, other: "ConversionStatistics") -> None:
        """Fold another set of statistics into this one."""
        self.input_size_bytes += other.input_size_bytes
        self.output_size_bytes += other.output_size_bytes
        self.file_count += other.file_count
        self.operation_count += other.operation_count
        self.processing_time_ms += other.processing_time_ms

        # Recalculate derived metrics
        self.token_reduction_percent = reduction_percent(
            self.input_size_bytes, self.output_size_bytes
        )
        self.avg_time_per_operation_ms = (
            self.processing_time_ms / self.operation_count if self.operation_count else 0.0
        )
        self.throughput_bytes_per_sec = (
            self.input_size_bytes / (self.processing_time_ms / 1000)
            if self.processing_time_ms > 0
            else 0.0
        )
        self.collected_at = utcnow()

    def summary(self) -> str:
        """One-line human readable summary."""
        return (
            f"Processed {self.file_count} files in {self.processing_time_ms / 1000:.1f}s - "
            f"{self.token_reduction_percent:.1f}% token reduction, "
            f"{self.throughput_bytes_per_sec / (1024 * 1024):.1f}MB/s throughput"
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["collected_at"] = self.collected_at.isoformat()
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def estimate_token_savings(json_text: str, toon_text: str) -> dict[str, Any]:
    """Estimate token savings from using TOON vs JSON.

    Args:
        json_text: The compact JSON form of a document.
        toon_text: The TOON form of the same document.

    Returns:
        Dict with json_tokens, toon_tokens, savings_percent, and recommendation.
    """
    # Rough approximation: ~4 chars per token
    json_tokens = len(json_text) // CHARS_PER_TOKEN
    toon_tokens = len(toon_text) // CHARS_PER_TOKEN

    savings_percent = (
        (json_tokens - toon_tokens) / json_tokens * 100 if json_tokens > 0 else 0
    )

    recommendation = (
        "toon" if savings_percent >= 20 else "json" if savings_percent < 10 else "either"
    )

    return {
        "json_tokens": json_tokens,
        "toon_tokens": toon_tokens,
        "savings_percent": round(savings_percent, 1),
        "recommendation": recommendation,
        "json_chars": len(json_text),
        "toon_chars": len(toon_text),
    }
