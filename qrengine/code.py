# -*- coding: utf-8 -*-
"""
QR Code Output Module

A Code is the finished symbol: a packed bitmap, one bit per module, most
significant bit first within each byte, rows `stride` bytes apart.
Renderers only need size, stride, bitmap and is_black.
"""

from typing import List, Optional

import numpy as np

from .tables import Level


class Code:
    """
    A square module grid, 1 = black.

    Attributes:
        bitmap: bytes-like, stride * size bytes
        size (int): modules per side
        stride (int): bytes per row
        version (int): QR version the symbol was built for
        level (Level): error correction level
        mask (int): data mask applied
    """

    def __init__(self, bitmap, size: int, stride: int, version: Optional[int] = None,
                 level: Optional[Level] = None, mask: Optional[int] = None):
        self.bitmap = bitmap
        self.size = size
        self.stride = stride
        self.version = version
        self.level = level
        self.mask = mask

    def __repr__(self) -> str:
        return f'<Code version={self.version} level={self.level} size={self.size}>'

    def is_black(self, x: int, y: int) -> bool:
        """True if the module at column x, row y is black; False off the grid."""
        return (0 <= x < self.size and 0 <= y < self.size and
                self.bitmap[y * self.stride + (x >> 3)] & (0x80 >> (x & 7)) != 0)

    @property
    def matrix(self) -> List[List[bool]]:
        """Rows of booleans (True = dark), the shape renderers iterate over."""
        return [[self.is_black(x, y) for x in range(self.size)] for y in range(self.size)]

    def to_array(self) -> np.ndarray:
        """size x size uint8 array, 1 = black."""
        packed = np.frombuffer(bytes(self.bitmap), dtype=np.uint8,
                               count=self.stride * self.size)
        rows = np.unpackbits(packed.reshape(self.size, self.stride), axis=1)
        return rows[:, :self.size]
