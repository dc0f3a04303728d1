"""Human-scaled units for byte counts, durations and rates."""
from typing import Optional

KIB = 1024
MIB = 1024 * 1024

NOT_MEASURABLE = "not measurable"
UNAVAILABLE = "unavailable"


def format_bytes(num_bytes: Optional[int]) -> str:
    """
    Format a (possibly negative) byte count as B, KB or MB.

    The unit is picked from the magnitude, the sign is kept, so a memory
    delta of -2048 renders as "-2.00 KB".
    """
    if num_bytes is None:
        return UNAVAILABLE
    magnitude = abs(num_bytes)
    if magnitude < KIB:
        return f"{num_bytes} B"
    if magnitude < MIB:
        return f"{num_bytes / KIB:.2f} KB"
    return f"{num_bytes / MIB:.2f} MB"


def format_time(seconds: Optional[float]) -> str:
    """Format a duration in seconds as ns, µs, ms or s."""
    if seconds is None:
        return UNAVAILABLE
    if seconds < 0.000001:
        return f"{seconds * 1e9:.2f} ns"
    if seconds < 0.001:
        return f"{seconds * 1e6:.2f} µs"
    if seconds < 1:
        return f"{seconds * 1e3:.2f} ms"
    return f"{seconds:.4f} s"


def format_rate(calls_per_second: Optional[float]) -> str:
    """Format an operations/sec figure with thousands separators."""
    if calls_per_second is None:
        return NOT_MEASURABLE
    return f"{calls_per_second:,.0f}"
