"""
Benchmark Runner

Runs one implementation against one payload with a fixed two-phase protocol:

1. Warmup: untimed calls on the base payload to settle lazy initialisation
   and caches.
2. Measurement: forced garbage collection, memory baseline, timed loop over
   per-call payload variants, memory sample, statistics.

Everything that is not the implementation call (logging, probe access,
result construction) happens outside the timed loop.
"""
import time
from typing import Any, Callable, Optional, Tuple

from hashbench.models.benchmark_result import BenchmarkResult
from hashbench.models.payload import TestPayload
from hashbench.monitor.memory_probe import MemoryProbe
from hashbench.util.cal_utils import calls_per_second, per_call_average
from hashbench.util.log_config import setup_logger

DEFAULT_WARMUP_ITERATIONS = 100

logger = setup_logger(__name__)

HashFunction = Callable[[bytes], Any]


class BenchmarkRunner:

    def __init__(self, memory_probe: MemoryProbe,
                 warmup_iterations: int = DEFAULT_WARMUP_ITERATIONS,
                 timer: Callable[[], float] = time.perf_counter):
        """
        Args:
            memory_probe: Memory introspection collaborator
            warmup_iterations: Untimed calls before measurement (0 disables warmup)
            timer: Monotonic clock returning seconds
        """
        if warmup_iterations < 0:
            raise ValueError(f"warmup_iterations must be >= 0, got {warmup_iterations}")
        self.memory_probe = memory_probe
        self.warmup_iterations = warmup_iterations
        self.timer = timer

    def warmup(self, fn: HashFunction, payload: TestPayload) -> None:
        """Call fn on the base payload, discarding results and time."""
        data = payload.data
        for _ in range(self.warmup_iterations):
            fn(data)

    def timed_phase(self, fn: HashFunction, payload: TestPayload, iterations: int) -> Tuple[float, float]:
        """
        Call fn once per iteration on TestPayload.variant(i).

        Returns:
            (start, end) timestamps from the runner's timer
        """
        data = payload.data
        timer = self.timer
        start = timer()
        for i in range(iterations):
            # inlined TestPayload.variant(i)
            fn(data + str(i).encode("ascii"))
        end = timer()
        return start, end

    def run(self, name: str, fn: HashFunction, payload: TestPayload, iterations: int) -> BenchmarkResult:
        """
        Benchmark fn on payload for the given number of timed iterations.

        An exception from fn in either phase yields a failed BenchmarkResult
        instead of propagating; the caller moves on to the next run.
        """
        if iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {iterations}")

        logger.debug(f"{name} on '{payload.label}': warmup ({self.warmup_iterations} calls)")
        try:
            self.warmup(fn, payload)
        except Exception as e:
            return self._failed(name, payload, iterations, "warmup", e)

        probe = self.memory_probe
        probe.force_reclaim()
        probe.reset_peak()
        mem_before = probe.current_usage()

        try:
            start, end = self.timed_phase(fn, payload, iterations)
        except Exception as e:
            return self._failed(name, payload, iterations, "timed phase", e)

        mem_after = probe.current_usage()
        mem_peak = probe.peak_usage()

        total_elapsed = end - start
        result = BenchmarkResult(
            implementation_name=name,
            payload_label=payload.label,
            iterations=iterations,
            total_elapsed=total_elapsed,
            average_per_call=per_call_average(total_elapsed, iterations),
            throughput=calls_per_second(iterations, total_elapsed),
            memory_delta=_delta(mem_before, mem_after),
            peak_memory=mem_peak,
        )
        if result.throughput is None:
            logger.warning(f"⚠ {name} on '{payload.label}': elapsed time below timer resolution")
        logger.debug(f"✓ {name} on '{payload.label}': total={total_elapsed:.6f}s "
                     f"avg={result.average_per_call:.3e}s")
        return result

    def _failed(self, name: str, payload: TestPayload, iterations: int, phase: str,
                error: Exception) -> BenchmarkResult:
        message = f"{type(error).__name__}: {error} (during {phase})"
        logger.error(f"{name} failed on payload '{payload.label}': {message}")
        return BenchmarkResult.failure(name, payload.label, iterations, message)


def _delta(before: Optional[int], after: Optional[int]) -> Optional[int]:
    if before is None or after is None:
        return None
    return after - before
