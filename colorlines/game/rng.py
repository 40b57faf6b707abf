"""
Deterministic pseudo-random stream for spawning and rollouts.

The stream is a pure function of the seed and the number of draws, so a seed
string reproduces the same game on every run and platform. Seeds hash with the
usual 31-multiplier string hash and the state is mixed with 32-bit
xorshift-multiply steps.
"""

from collections.abc import Sequence
from typing import TypeVar

MASK_32 = 0xFFFFFFFF
TWO_POW_32 = 4294967296
ZERO_SEED_STATE = 0x9E3779B9

T = TypeVar("T")


def hash_seed(seed: str | int) -> int:
    """Hash a seed into an unsigned 32-bit state (integers hash as their decimal string)."""
    text = str(seed)
    data = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = (31 * h + code_unit) & MASK_32
    return h


class SeededRng:
    """Reproducible random stream seeded from a string or integer."""

    def __init__(self, seed: str | int):
        self.seed = seed
        # zero is a fixed point of the mixing step
        self.state = hash_seed(seed) or ZERO_SEED_STATE
        self.draws = 0

    def next(self) -> float:
        """Return the next float in [0, 1)."""
        s = self.state
        s = ((s ^ (s >> 15)) * (s | 1)) & MASK_32
        mixed = ((s ^ (s >> 7)) * (s | 61)) & MASK_32
        s = (s ^ ((s + mixed) & MASK_32)) & MASK_32
        self.state = s
        self.draws += 1
        return (s ^ (s >> 14)) / TWO_POW_32

    def next_int(self, lo: int, hi: int) -> int:
        """Return an integer in [lo, hi], both ends inclusive."""
        if hi < lo:
            raise ValueError(f"Empty range [{lo}, {hi}]")
        return int(self.next() * (hi - lo + 1)) + lo

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

    def __repr__(self) -> str:
        return f"SeededRng(seed={self.seed!r}, draws={self.draws})"
