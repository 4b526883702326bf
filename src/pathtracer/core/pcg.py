"""Permuted congruential generator (PCG32, XSH-RR variant).

A small, fast and reproducible generator. Every worker owns its own
instance; instances must not be shared between threads or processes.
"""

from __future__ import annotations

_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK32 = 0xFFFFFFFF
_MULTIPLIER = 6364136223846793005


class PCG:
    """PCG32 random number generator.

    Attributes:
        state: Current 64-bit internal state.
        inc: Odd 64-bit stream increment derived from the sequence id.

    Example:
        >>> pcg = PCG()
        >>> pcg.random()
        2707161783
    """

    __slots__ = ("state", "inc")

    def __init__(self, init_state: int = 42, init_seq: int = 54) -> None:
        self.state = 0
        self.inc = ((init_seq << 1) | 1) & _MASK64
        self.random()
        self.state = (self.state + init_state) & _MASK64
        self.random()

    def __repr__(self) -> str:
        return f"PCG(state={self.state}, inc={self.inc})"

    def random(self) -> int:
        """Advance the generator and return a 32-bit unsigned integer."""
        old_state = self.state
        self.state = (old_state * _MULTIPLIER + self.inc) & _MASK64

        xorshifted = (((old_state >> 18) ^ old_state) >> 27) & _MASK32
        rot = old_state >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & _MASK32

    def random_float(self) -> float:
        """Return a float uniformly distributed in [0, 1]."""
        return self.random() / _MASK32
