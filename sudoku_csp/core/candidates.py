"""Candidate domains as 9-bit masks.

Bit ``d - 1`` of a mask is set when digit ``d`` is still possible.
"""

from __future__ import annotations
from typing import Iterable, Tuple

from .topology import DIGITS, SIZE

ALL_CANDIDATES = (1 << SIZE) - 1

_DIGITS_OF: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(d for d in DIGITS if mask & (1 << (d - 1)))
    for mask in range(1 << SIZE)
)
_COUNT_OF: Tuple[int, ...] = tuple(len(digits) for digits in _DIGITS_OF)


def digit_bit(digit: int) -> int:
    """Mask with only ``digit`` set."""
    return 1 << (digit - 1)


def mask_of(digits: Iterable[int]) -> int:
    """Mask with every digit in ``digits`` set."""
    mask = 0
    for d in digits:
        mask |= 1 << (d - 1)
    return mask


def digits_of(mask: int) -> Tuple[int, ...]:
    """Digits set in ``mask``, ascending."""
    return _DIGITS_OF[mask]


def count(mask: int) -> int:
    """Number of digits set in ``mask``."""
    return _COUNT_OF[mask]


def single_digit(mask: int) -> int:
    """The only digit in a singleton mask, else 0."""
    if _COUNT_OF[mask] == 1:
        return _DIGITS_OF[mask][0]
    return 0
