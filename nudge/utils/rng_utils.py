# File: utils/rng_utils.py
"""Seeded pseudo-random helpers for reproducible slot placement.

The slot planner needs the same item on the same calendar day to propose the
same minutes after a process restart, so it cannot rely on ``hash()`` (salted
per process) or on ``random.Random`` seeding semantics. These helpers pin the
algorithms down explicitly.
"""

from __future__ import annotations

# 64-bit masks and constants
MASK_64 = (1 << 64) - 1

FNV1A_64_OFFSET_BASIS = 0xCBF29CE484222325
FNV1A_64_PRIME = 0x100000001B3

SPLITMIX64_GAMMA = 0x9E3779B97F4A7C15
SPLITMIX64_MUL_1 = 0xBF58476D1CE4E5B9
SPLITMIX64_MUL_2 = 0x94D049BB133111EB


def fnv1a_64(text: str) -> int:
    """Hash a string with 64-bit FNV-1a over its UTF-8 bytes.

    Args:
        text: String to hash (typically an item id)

    Returns:
        Unsigned 64-bit hash value

    Example:
        fnv1a_64("") → 0xCBF29CE484222325
    """
    value = FNV1A_64_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        value ^= byte
        value = (value * FNV1A_64_PRIME) & MASK_64
    return value


class SplitMix64:
    """SplitMix64 generator over an explicit 64-bit state.

    Not suitable for anything security related.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        """Initialize the generator.

        Args:
            seed: Any integer. Reduced modulo 2**64.
        """
        self._state = seed & MASK_64

    @property
    def state(self) -> int:
        """Current internal state."""
        return self._state

    def next_u64(self) -> int:
        """Advance the generator and return the next unsigned 64-bit value."""
        self._state = (self._state + SPLITMIX64_GAMMA) & MASK_64
        z = self._state
        z = ((z ^ (z >> 30)) * SPLITMIX64_MUL_1) & MASK_64
        z = ((z ^ (z >> 27)) * SPLITMIX64_MUL_2) & MASK_64
        return z ^ (z >> 31)

    def next_int(self, bound: int) -> int:
        """Return a value uniformly distributed in ``[0, bound)``.

        Uses the high bits of ``next_u64() * bound`` (multiply-shift range
        reduction), which always consumes exactly one draw.

        Raises:
            ValueError: If bound is not positive.
        """
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return (self.next_u64() * bound) >> 64
