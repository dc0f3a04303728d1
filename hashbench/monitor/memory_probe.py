"""
Memory Probe Module

The benchmark runner samples memory through a MemoryProbe it is given.
Three probes are provided:

- PsutilMemoryProbe: process resident set size (RSS) via psutil, with the
  OS high-water mark as peak (VmHWM on Linux, peak working set on Windows).
- TracemallocMemoryProbe: Python heap allocations via tracemalloc.
- NullMemoryProbe: for platforms without usable introspection; every figure
  is reported as unavailable rather than zero.
"""
import gc
import os
import sys
import tracemalloc
from abc import ABC, abstractmethod
from typing import Optional, Union

import psutil

from hashbench.consts.MemoryProbeType import MemoryProbeType
from hashbench.errors import ConfigError
from hashbench.util.log_config import setup_logger

logger = setup_logger(__name__)


class MemoryProbe(ABC):
    """Contract between the benchmark runner and the memory subsystem."""

    name: str = "abstract"

    @abstractmethod
    def current_usage(self) -> Optional[int]:
        """Current usage in bytes, or None if unknown."""

    @abstractmethod
    def peak_usage(self) -> Optional[int]:
        """Peak usage in bytes since the last reset_peak(), or None if unknown."""

    def force_reclaim(self) -> None:
        """Run a full garbage collection so pending frees land before sampling."""
        gc.collect()

    def reset_peak(self) -> None:
        """Start a new peak window. No-op where the backend cannot reset."""

    def close(self) -> None:
        """Release any tracing the probe started."""


class NullMemoryProbe(MemoryProbe):
    name = "none"

    def current_usage(self) -> Optional[int]:
        return None

    def peak_usage(self) -> Optional[int]:
        return None


class PsutilMemoryProbe(MemoryProbe):
    """Resident memory of this process, sampled through psutil."""

    name = "psutil"

    def __init__(self, pid: Optional[int] = None):
        self.pid = pid if pid is not None else os.getpid()
        self.process = psutil.Process(self.pid)
        self._sampled_peak = 0

    def current_usage(self) -> Optional[int]:
        rss = self.process.memory_info().rss
        self._sampled_peak = max(self._sampled_peak, rss)
        return rss

    def peak_usage(self) -> Optional[int]:
        current = self.current_usage()
        high_water = self._high_water_mark()
        if high_water is None:
            return self._sampled_peak
        return max(high_water, current)

    def reset_peak(self) -> None:
        self._sampled_peak = 0
        if sys.platform.startswith("linux"):
            # "5" resets VmHWM to the current RSS (Linux >= 4.0)
            try:
                with open(f"/proc/{self.pid}/clear_refs", "w") as f:
                    f.write("5")
            except OSError as e:
                logger.debug(f"Could not reset VmHWM for pid {self.pid}: {e}")

    def _high_water_mark(self) -> Optional[int]:
        """
        True high-water RSS from the OS, if it exposes one.

        Returns:
            Peak RSS in bytes, or None when only sampled values are available
        """
        if sys.platform.startswith("linux"):
            try:
                with open(f"/proc/{self.pid}/status", "r") as f:
                    for line in f:
                        if line.startswith("VmHWM:"):
                            parts = line.split()
                            if len(parts) >= 2 and parts[1].isdigit():
                                return int(parts[1]) * 1024
                            break
            except OSError as e:
                logger.debug(f"Could not read VmHWM for pid {self.pid}: {e}")
            return None
        if sys.platform.startswith("win"):
            full = self.process.memory_full_info()
            return getattr(full, "peak_wset", None)
        return None


class TracemallocMemoryProbe(MemoryProbe):
    """
    Python heap usage via tracemalloc.

    Tracing starts on the first reset_peak() and stays on until close().
    Allocation tracing slows every call, so timings taken with this probe
    are higher than with psutil; the ratio between implementations is
    still comparable since both run under the same probe.
    """

    name = "tracemalloc"

    def __init__(self):
        self._started_here = False

    def _ensure_tracing(self) -> None:
        if not tracemalloc.is_tracing():
            tracemalloc.start()
            self._started_here = True

    def current_usage(self) -> Optional[int]:
        if not tracemalloc.is_tracing():
            return None
        return tracemalloc.get_traced_memory()[0]

    def peak_usage(self) -> Optional[int]:
        if not tracemalloc.is_tracing():
            return None
        return tracemalloc.get_traced_memory()[1]

    def reset_peak(self) -> None:
        self._ensure_tracing()
        tracemalloc.reset_peak()

    def close(self) -> None:
        if self._started_here and tracemalloc.is_tracing():
            tracemalloc.stop()
        self._started_here = False


def create_memory_probe(probe_type: Union[MemoryProbeType, str]) -> MemoryProbe:
    """
    Build the probe for the configured type.

    Falls back to NullMemoryProbe if psutil cannot inspect this process.
    """
    try:
        probe_type = MemoryProbeType(probe_type)
    except ValueError:
        choices = ", ".join(t.value for t in MemoryProbeType)
        raise ConfigError(f"Unknown memory probe '{probe_type}' (choose from: {choices})")

    if probe_type == MemoryProbeType.PSUTIL:
        try:
            return PsutilMemoryProbe()
        except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
            logger.warning(f"⚠ psutil cannot inspect this process ({e}); memory will be reported as unavailable")
            return NullMemoryProbe()
    if probe_type == MemoryProbeType.TRACEMALLOC:
        return TracemallocMemoryProbe()
    return NullMemoryProbe()
