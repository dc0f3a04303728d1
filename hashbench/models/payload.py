from dataclasses import dataclass


@dataclass(frozen=True)
class TestPayload:
    """Labeled, immutable byte sequence fed to a hash implementation."""
    __test__ = False  # not a pytest test class

    label: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def variant(self, iteration: int) -> bytes:
        """
        Per-call input for the given iteration: the payload followed by the
        decimal iteration index. Keeps successive calls from hashing identical
        bytes; the payload itself is left untouched.
        """
        return self.data + str(iteration).encode("ascii")
