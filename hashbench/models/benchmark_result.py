"""Benchmark result data models."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

from hashbench.models.payload import TestPayload
from hashbench.util.cal_utils import orient_ratio, safe_ratio


@dataclass(frozen=True)
class BenchmarkResult:
    """
    Outcome of timing one implementation against one payload.

    Built once per (implementation, payload) run and never modified. A failed
    run has ``error`` set and no timing or memory figures at all, so it can
    never be mistaken for a zero-time measurement.
    """
    implementation_name: str
    payload_label: str
    iterations: int

    # Timing (seconds)
    total_elapsed: Optional[float] = None
    average_per_call: Optional[float] = None
    throughput: Optional[float] = None  # calls per second, None when elapsed is zero

    # Memory (bytes), None when the probe cannot measure
    memory_delta: Optional[int] = None
    peak_memory: Optional[int] = None

    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def throughput_measurable(self) -> bool:
        return not self.failed and self.throughput is not None

    @classmethod
    def failure(cls, implementation_name: str, payload_label: str, iterations: int,
                error: str) -> 'BenchmarkResult':
        """Create a result that records a failed run."""
        return cls(
            implementation_name=implementation_name,
            payload_label=payload_label,
            iterations=iterations,
            error=error,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return asdict(self)


@dataclass(frozen=True)
class ComparisonRecord:
    """Reference and candidate results for the same payload."""
    payload: TestPayload
    reference: BenchmarkResult
    candidate: BenchmarkResult

    @property
    def speedup_ratio(self) -> Optional[float]:
        """
        reference.average_per_call / candidate.average_per_call.

        Above 1 the candidate is faster. None when either run failed or either
        average is zero (below timer resolution).
        """
        if self.reference.failed or self.candidate.failed:
            return None
        return safe_ratio(self.reference.average_per_call, self.candidate.average_per_call)

    def verdict(self) -> Optional[Tuple[float, str]]:
        """(multiplier >= 1, "faster" | "slower"), or None if not measurable."""
        ratio = self.speedup_ratio
        if ratio is None:
            return None
        return orient_ratio(ratio)

    def to_dict(self) -> Dict[str, Any]:
        verdict = self.verdict()
        return {
            "payload": self.payload.label,
            "payload_size": self.payload.size,
            "reference": self.reference.to_dict(),
            "candidate": self.candidate.to_dict(),
            "speedup": self.speedup_ratio,
            "direction": verdict[1] if verdict else None,
        }
