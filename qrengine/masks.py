# -*- coding: utf-8 -*-
"""
QR Data Mask Patterns

The eight mask predicates of ISO/IEC 18004 section 7.8.2, evaluated on
(row, col). A module of the encoding region is inverted wherever the selected
predicate is true. Mask selection by penalty scoring is not done here: the
engine always uses mask 0.
"""

from typing import Callable, Tuple

MASK_NONE = -1

MASK_FUNCTIONS: Tuple[Callable[[int, int], bool], ...] = (
    lambda i, j: (i + j) % 2 == 0,
    lambda i, j: i % 2 == 0,
    lambda i, j: j % 3 == 0,
    lambda i, j: (i + j) % 3 == 0,
    lambda i, j: (i // 2 + j // 3) % 2 == 0,
    lambda i, j: i * j % 2 + i * j % 3 == 0,
    lambda i, j: (i * j % 2 + i * j % 3) % 2 == 0,
    lambda i, j: (i * j % 3 + (i + j) % 2) % 2 == 0,
)


def check_mask(mask: int) -> int:
    if not MASK_NONE <= mask < len(MASK_FUNCTIONS):
        raise ValueError(f'Invalid data mask "{mask}". Must be in range 0 .. 7')
    return mask


def invert(mask: int, row: int, col: int) -> bool:
    """True if the module at (row, col) is flipped by mask; never for MASK_NONE."""
    if mask < 0:
        return False
    return MASK_FUNCTIONS[mask](row, col)
