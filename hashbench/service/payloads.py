"""
Benchmark input generation.

The default payloads are fixed byte strings in three size classes so that
results are comparable from run to run. Random payloads are opt-in.
"""
import os
import random
from typing import Dict, Optional

from hashbench.models.payload import TestPayload

DEFAULT_RANDOM_SIZE = 4096
RANDOM_LABEL = "random"

# label -> content, in increasing size order
DEFAULT_PAYLOADS = {
    "small": b"Hello, World!",
    "medium": b"a" * 1000,
    "large": b"b" * 10000,
}


def build_payloads(random_payloads: bool = False,
                   random_size: int = DEFAULT_RANDOM_SIZE,
                   seed: Optional[int] = None) -> Dict[str, TestPayload]:
    """
    Build the ordered label -> payload mapping.

    Random mode keeps each label's size and only replaces the content, then
    adds a "random" payload of random_size bytes.

    Args:
        random_payloads: Use random bytes instead of the fixed content
        random_size: Size in bytes of the extra "random" payload
        seed: Seed for reproducible random payloads; None uses os.urandom

    Returns:
        Dict of TestPayload keyed by label, the fixed size classes first
    """
    if not random_payloads:
        return {label: TestPayload(label, data) for label, data in DEFAULT_PAYLOADS.items()}

    if random_size < 1:
        raise ValueError(f"random_size must be >= 1, got {random_size}")

    rng = random.Random(seed) if seed is not None else None

    def random_bytes(size: int) -> bytes:
        return rng.randbytes(size) if rng is not None else os.urandom(size)

    payloads = {}
    for label, content in DEFAULT_PAYLOADS.items():
        payloads[label] = TestPayload(label, random_bytes(len(content)))
    payloads[RANDOM_LABEL] = TestPayload(RANDOM_LABEL, random_bytes(random_size))
    return payloads
