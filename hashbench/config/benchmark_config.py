from typing import Optional

from hashbench.consts.MemoryProbeType import MemoryProbeType
from hashbench.models.implementation_spec import ImplementationSpec


class BenchmarkConfig:
    algorithm: str
    iterations: int
    warmup_iterations: int
    memory_probe: MemoryProbeType
    random_payloads: bool
    random_size: int
    seed: Optional[int]
    log_file: Optional[str]
    reference: ImplementationSpec
    candidate: ImplementationSpec
