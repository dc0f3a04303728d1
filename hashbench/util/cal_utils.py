from typing import Optional, Tuple

FASTER = "faster"
SLOWER = "slower"


def per_call_average(total_seconds: float, calls: int) -> float:
    """Average duration of one call, in seconds."""
    if calls < 1:
        raise ValueError(f"calls must be >= 1, got {calls}")
    return total_seconds / calls


def calls_per_second(calls: int, total_seconds: float) -> Optional[float]:
    """Throughput, or None when the elapsed time is too small to divide by."""
    if total_seconds <= 0:
        return None
    return calls / total_seconds


def safe_ratio(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    """numerator / denominator, None if either side is missing or not positive."""
    if numerator is None or denominator is None:
        return None
    if numerator <= 0 or denominator <= 0:
        return None
    return numerator / denominator


def orient_ratio(ratio: float) -> Tuple[float, str]:
    """
    Express a speedup ratio as a multiplier >= 1 plus a direction.

    A ratio of 2.0 becomes (2.0, "faster"), 0.5 becomes (2.0, "slower").
    """
    if ratio <= 0:
        raise ValueError(f"ratio must be positive, got {ratio}")
    if ratio >= 1:
        return ratio, FASTER
    return 1 / ratio, SLOWER
