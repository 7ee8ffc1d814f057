# -*- coding: utf-8 -*-
"""
QR Layout Plan Module

A Plan is the content-independent layout of a symbol for one
(version, level, mask): every function pattern is drawn and every data,
check and remainder module knows where its value will come from. Encoding a
payload against a Plan only fills in those bits, so one Plan serves any
number of payloads and is never modified after construction.

Classes:
    Plan: module layout for (version, level, mask)

Functions:
    get_plan: shared, lazily built Plans
    clear_plan_cache: drop all cached Plans
"""

import logging
import threading
from collections import Counter
from itertools import chain, repeat
from typing import Dict, Optional, Tuple

from .bits import Bits, interleave
from .code import Code
from .encodings import Encoding
from .errors import DataOverflowError, InternalError, UnsupportedEncodingError
from .functional_areas import (
    Pixel, Role, draw_alignment_boxes, draw_dark_module, draw_format,
    draw_position_boxes, draw_timing, draw_version_pattern, new_grid,
)
from .masks import check_mask, invert
from .tables import (
    VERSIONS, Level, blocks, check_bytes, check_version, data_bytes,
    normalize_level, size,
)

logger = logging.getLogger(__name__)

_PAYLOAD_ROLES = (Role.DATA, Role.CHECK)
_MASKED_ROLES = (Role.DATA, Role.CHECK, Role.EXTRA)


class Plan:
    """
    Module layout for a QR code of a given version, level and mask.

    Attributes:
        version (int): 1-40
        level (Level): error correction level
        mask (int): 0-7, or MASK_NONE (-1) for an unmasked layout
        size (int): modules per side
        data_bytes (int): data codewords
        check_bytes (int): error correction codewords
        blocks (int): Reed-Solomon blocks
        pixels (Tuple[Tuple[Pixel, ...], ...]): rows of modules

    Raises:
        ValueError: for a version, level or mask out of range
        InternalError: if the layout does not account for every module
    """

    def __init__(self, version: int, level, mask: int = 0):
        self.version = check_version(version)
        self.level = normalize_level(level)
        self.mask = check_mask(mask)
        self.size = size(version)
        self.data_bytes = data_bytes(version, self.level)
        self.check_bytes = check_bytes(version, self.level)
        self.blocks = blocks(version, self.level)

        grid = new_grid(self.size)
        self._vplan(grid)
        self._fplan(grid)
        self._lplan(grid)
        self._mplan(grid)
        self.pixels: Tuple[Tuple[Pixel, ...], ...] = tuple(tuple(row) for row in grid)

    def __repr__(self) -> str:
        return f'<Plan version={self.version} level={self.level} mask={self.mask}>'

    def _vplan(self, grid) -> None:
        # Function patterns depending on the version only.
        draw_position_boxes(grid)
        draw_alignment_boxes(grid, self.version)
        draw_timing(grid)
        draw_version_pattern(grid, self.version)
        draw_dark_module(grid)

    def _fplan(self, grid) -> None:
        draw_format(grid, self.level, self.mask)

    def _lplan(self, grid) -> None:
        """
        Reserve data, check and remainder modules along the zig-zag sweep.

        Offsets count bits of the interleaved codeword stream: the first
        data_bytes * 8 are data, the rest check bits. The remainder tail
        exactly fills the modules left over after the last codeword.
        """
        data_bits = self.data_bytes * 8
        total_bits = VERSIONS[self.version].words * 8
        slots = chain(
            (Pixel(Role.DATA, offset=i) for i in range(data_bits)),
            (Pixel(Role.CHECK, offset=i) for i in range(data_bits, total_bits)),
            repeat(Pixel(Role.EXTRA), VERSIONS[self.version].remainder),
        )

        # Sweep up a pair of columns, then down the next pair, right module
        # first. The vertical timing strip is skipped as if it were not there.
        siz = self.size
        upward = True
        col = siz - 1
        while col > 0:
            if col == 6:
                col -= 1
            for i in range(siz):
                r = siz - 1 - i if upward else i
                for c in (col, col - 1):
                    if grid[r][c].role == Role.EMPTY:
                        pix = next(slots, None)
                        if pix is None:
                            raise InternalError(f'qr: ran out of data slots at ({r}, {c})')
                        grid[r][c] = pix
            upward = not upward
            col -= 2

        if next(slots, None) is not None:
            raise InternalError('qr: data slots left after sweep')
        for r, row in enumerate(grid):
            for c, pix in enumerate(row):
                if pix.role == Role.EMPTY:
                    raise InternalError(f'qr: module ({r}, {c}) left unassigned')

    def _mplan(self, grid) -> None:
        for r, row in enumerate(grid):
            for c, pix in enumerate(row):
                if pix.role in _MASKED_ROLES and invert(self.mask, r, c):
                    row[c] = pix._replace(black=not pix.black, invert=not pix.invert)

    def role_counts(self) -> Dict[Role, int]:
        """Number of modules per role."""
        return dict(Counter(pix.role for row in self.pixels for pix in row))

    def encode(self, encoding: Encoding) -> Code:
        return self.encode_into(None, encoding)

    def encode_into(self, buffer: Optional[bytearray], encoding: Encoding) -> Code:
        """
        Serialize encoding and resolve every data and check module.

        Args:
            buffer: writable buffer reused for the bitmap when it holds at
                least stride * size bytes; otherwise a new bytearray is made
            encoding (Encoding): payload, already validated

        Returns:
            Code: the finished symbol

        Raises:
            UnsupportedEncodingError: if encoding rejects its text
            DataOverflowError: if the payload exceeds the data capacity
            TypeError: if a large enough buffer is read-only
        """
        if not encoding.check():
            raise UnsupportedEncodingError(encoding)

        b = Bits()
        encoding.encode(b, self.version)
        if b.bits() > self.data_bytes * 8:
            raise DataOverflowError(b.bits(), self.data_bytes * 8)
        b.add_check_bytes(self.version, self.level)
        codewords = interleave(b.bytes(), self.version, self.level)

        siz = self.size
        stride = (siz + 7) // 8
        n = stride * siz
        if buffer is not None and len(buffer) >= n:
            bitmap = memoryview(buffer)[:n]
            if bitmap.readonly:
                raise TypeError(f'buffer must be writable (e.g. a bytearray), '
                                f'got {type(buffer).__name__}')
            bitmap[:] = bytes(n)
        else:
            bitmap = bytearray(n)

        for y, row in enumerate(self.pixels):
            base = y * stride
            for x, pix in enumerate(row):
                black = pix.black
                if pix.role in _PAYLOAD_ROLES:
                    o = pix.offset
                    if codewords[o >> 3] & (0x80 >> (o & 7)):
                        black = not black
                if black:
                    bitmap[base + (x >> 3)] |= 0x80 >> (x & 7)

        return Code(bitmap, siz, stride, self.version, self.level, self.mask)


_plans: Dict[Tuple[int, Level, int], Plan] = {}
_plans_lock = threading.Lock()
_key_locks: Dict[Tuple[int, Level, int], threading.Lock] = {}


def get_plan(version: int, level, mask: int = 0) -> Plan:
    """
    Return the shared Plan for (version, level, mask), building it on first use.

    Concurrent first requests for the same key build the Plan only once;
    requests for different keys do not wait on each other.
    """
    key = (check_version(version), normalize_level(level), check_mask(mask))
    plan = _plans.get(key)
    if plan is not None:
        return plan
    with _plans_lock:
        lock = _key_locks.setdefault(key, threading.Lock())
    with lock:
        plan = _plans.get(key)
        if plan is None:
            logger.debug(f"Building plan for version {key[0]}, level {key[1]}, mask {key[2]}")
            plan = Plan(*key)
            _plans[key] = plan
    return plan


def clear_plan_cache() -> None:
    with _plans_lock:
        _plans.clear()
        _key_locks.clear()
