"""32-bit sequence numbers relative to an initial sequence number."""

from __future__ import annotations

from dataclasses import dataclass

_MASK = 0xFFFFFFFF
_MODULUS = 1 << 32
_HALF = 1 << 31


@dataclass(frozen=True)
class WrappingInt32:
    """A 32-bit integer that wraps around on overflow, as TCP seqnos do."""

    raw_value: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_value", self.raw_value & _MASK)

    def __add__(self, other: int) -> WrappingInt32:
        if isinstance(other, WrappingInt32) or not isinstance(other, int):
            return NotImplemented
        return WrappingInt32(self.raw_value + other)

    def __sub__(self, other: WrappingInt32 | int):  # type: ignore[override]
        """Signed offset to another WrappingInt32, or the point ``other`` steps before."""
        if isinstance(other, WrappingInt32):
            diff = (self.raw_value - other.raw_value) & _MASK
            return diff - _MODULUS if diff >= _HALF else diff
        if isinstance(other, int):
            return WrappingInt32(self.raw_value - other)
        return NotImplemented

    def __str__(self) -> str:
        return str(self.raw_value)


def wrap(n: int, isn: WrappingInt32) -> WrappingInt32:
    """Turn an absolute 64-bit sequence number into a relative 32-bit one."""
    return WrappingInt32(n + isn.raw_value)


def unwrap(n: WrappingInt32, isn: WrappingInt32, checkpoint: int) -> int:
    """Return the absolute sequence number that wraps to ``n`` and is closest to ``checkpoint``."""
    step = n - wrap(checkpoint, isn)
    result = checkpoint + step
    return result if result >= 0 else result + _MODULUS