"""
Utility functions for small integer bit-vectors (sets of people encoded as bits).
"""

from typing import Hashable, Iterable


def popcount(x: int) -> int:
    """
    Count the set bits of x, taken as an unsigned 32-bit integer.

    Uses the classic SWAR reduction (see https://en.wikipedia.org/wiki/Hamming_weight).

    Args:
        x: Integer to count; only the low 32 bits are looked at

    Returns:
        Number of 1 bits
    """
    x &= 0xFFFFFFFF
    x -= (x >> 1) & 0x55555555
    x = (x & 0x33333333) + ((x >> 2) & 0x33333333)
    x = (x + (x >> 4)) & 0x0F0F0F0F
    return ((x * 0x01010101) & 0xFFFFFFFF) >> 24


def has_duplicate(values: Iterable[Hashable]) -> bool:
    """Return True if the same value appears twice in values."""
    seen = set()
    for value in values:
        if value in seen:
            return True
        seen.add(value)
    return False


def bit_is_set(bits: int, index: int) -> bool:
    return (bits >> index) & 1 != 0


def full_mask(count: int) -> int:
    """Bit-vector with the low `count` bits set."""
    return (1 << count) - 1
