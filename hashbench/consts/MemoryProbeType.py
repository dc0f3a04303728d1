from enum import Enum


class MemoryProbeType(Enum):
    PSUTIL = "psutil"
    TRACEMALLOC = "tracemalloc"
    NONE = "none"
