from typing import List, Optional

import pytest

from hashbench.models.payload import TestPayload
from hashbench.monitor.memory_probe import MemoryProbe, NullMemoryProbe


class VirtualClock:
    """Clock that only moves when an implementation says it spent time."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeMemoryProbe(MemoryProbe):
    """Probe backed by a counter that implementations can bump."""

    name = "fake"

    def __init__(self):
        self.usage = 10_000
        self.peak = self.usage
        self.events: List[str] = []

    def allocate(self, num_bytes: int) -> None:
        self.usage += num_bytes
        self.peak = max(self.peak, self.usage)

    def current_usage(self) -> Optional[int]:
        self.events.append("current")
        return self.usage

    def peak_usage(self) -> Optional[int]:
        self.events.append("peak")
        return self.peak

    def force_reclaim(self) -> None:
        self.events.append("reclaim")

    def reset_peak(self) -> None:
        self.events.append("reset_peak")
        self.peak = self.usage


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def fake_probe():
    return FakeMemoryProbe()


@pytest.fixture
def null_probe():
    return NullMemoryProbe()


@pytest.fixture
def small_payload():
    return TestPayload("small", b"Hello, World!")


@pytest.fixture
def failing_extension(tmp_path):
    """A module file whose md5 raises on every call."""
    path = tmp_path / "failing_hash_ext.py"
    path.write_text(
        "def md5(data):\n"
        "    raise RuntimeError('native md5 exploded')\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def working_extension(tmp_path):
    """A module file wrapping hashlib, standing in for a compiled extension."""
    path = tmp_path / "working_hash_ext.py"
    path.write_text(
        "import hashlib\n"
        "__version__ = '1.2.3'\n"
        "def md5(data):\n"
        "    return hashlib.md5(data).hexdigest()\n",
        encoding="utf-8",
    )
    return path
