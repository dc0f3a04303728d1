"""Models for benchmark data structures."""

from .payload import TestPayload
from .benchmark_result import BenchmarkResult, ComparisonRecord
from .implementation_spec import ImplementationSpec

__all__ = ["TestPayload", "BenchmarkResult", "ComparisonRecord", "ImplementationSpec"]
