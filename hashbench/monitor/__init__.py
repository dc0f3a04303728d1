"""Process memory introspection used around timed phases."""

from .memory_probe import (
    MemoryProbe,
    NullMemoryProbe,
    PsutilMemoryProbe,
    TracemallocMemoryProbe,
    create_memory_probe,
)

__all__ = [
    "MemoryProbe",
    "NullMemoryProbe",
    "PsutilMemoryProbe",
    "TracemallocMemoryProbe",
    "create_memory_probe",
]
