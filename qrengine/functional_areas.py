# -*- coding: utf-8 -*-
"""
QR Code Functional Areas Module

Draws the function patterns of a QR symbol into a module grid according to
ISO/IEC 18004: finder (position) boxes with their separators, alignment boxes,
timing strips, version information, the dark module and both copies of the
format information.

Every module of the grid is a Pixel carrying its role. A role is assigned
exactly once; the setter raises InternalError on a second assignment.

Functions:
    new_grid: Create an empty module grid
    draw_position_boxes: Finder patterns and separators at three corners
    draw_alignment_boxes: 5x5 alignment patterns (v2+)
    draw_timing: Alternating strips in row 6 and column 6
    draw_version_pattern: Two 6x3 version blocks (v7+)
    draw_dark_module: The single dark module next to the bottom-left finder
    draw_format: 15 format bits, twice
    format_bits: BCH-protected format word for (level, mask)
"""

from enum import IntEnum
from typing import List, NamedTuple, Optional

from .errors import InternalError
from .tables import VERSIONS, Level, alignment_positions


class Role(IntEnum):
    """Role of a module in the symbol. EMPTY means not yet assigned."""
    EMPTY = 0
    POSITION = 1   # position squares (large)
    ALIGNMENT = 2  # alignment squares (small)
    TIMING = 3     # timing strip between position squares
    FORMAT = 4     # format metadata
    VERSION = 5    # version pattern
    UNUSED = 6     # the fixed dark module
    DATA = 7       # data bit
    CHECK = 8      # error correction check bit
    EXTRA = 9      # remainder bit

    def __str__(self) -> str:
        return self.name.lower()


class Pixel(NamedTuple):
    """
    One module of a plan.

    offset is the bit offset into the interleaved codeword stream for DATA and
    CHECK modules and the format bit index for FORMAT modules; None otherwise.
    """
    role: Role
    black: bool = False
    invert: bool = False
    offset: Optional[int] = None

    def __str__(self) -> str:
        s = str(self.role)
        if self.black:
            s += '+black'
        if self.invert:
            s += '+invert'
        if self.offset is not None:
            s += f'+{self.offset}'
        return s


EMPTY = Pixel(Role.EMPTY)

FORMAT_POLY = 0x537
FORMAT_XOR = 0x5412

Grid = List[List[Pixel]]


def new_grid(size: int) -> Grid:
    return [[EMPTY] * size for _ in range(size)]


def set_pixel(grid: Grid, row: int, col: int, pixel: Pixel) -> None:
    """Assign a role to an empty module."""
    if grid[row][col].role != Role.EMPTY:
        raise InternalError(f'qr: module ({row}, {col}) already has role '
                            f'{grid[row][col].role}, cannot set {pixel.role}')
    grid[row][col] = pixel


def draw_position_box(grid: Grid, row: int, col: int) -> None:
    """
    Draw a 7x7 finder pattern with upper-left corner (row, col), plus the
    1-module white separator on the sides that lie inside the grid.

    Pattern: 1111111
             1000001
             1011101
             1011101
             1011101
             1000001
             1111111
    """
    size = len(grid)
    for dy in range(-1, 8):
        for dx in range(-1, 8):
            r, c = row + dy, col + dx
            if not (0 <= r < size and 0 <= c < size):
                continue
            black = (0 <= dx <= 6 and 0 <= dy <= 6 and
                     (dx in (0, 6) or dy in (0, 6) or (2 <= dx <= 4 and 2 <= dy <= 4)))
            set_pixel(grid, r, c, Pixel(Role.POSITION, black))


def draw_position_boxes(grid: Grid) -> None:
    size = len(grid)
    draw_position_box(grid, 0, 0)
    draw_position_box(grid, size - 7, 0)
    draw_position_box(grid, 0, size - 7)


def draw_alignment_box(grid: Grid, row: int, col: int) -> None:
    """
    Draw a 5x5 alignment pattern with upper-left corner (row, col).

    Pattern: 11111
             10001
             10101
             10001
             11111
    """
    for dy in range(5):
        for dx in range(5):
            black = dx in (0, 4) or dy in (0, 4) or (dx == 2 and dy == 2)
            set_pixel(grid, row + dy, col + dx, Pixel(Role.ALIGNMENT, black))


def draw_alignment_boxes(grid: Grid, version: int) -> None:
    """Place alignment boxes at every table combination not touching a finder."""
    size = len(grid)
    positions = alignment_positions(version)
    for x in positions:
        for y in positions:
            if ((x < 7 and y < 7) or (x < 7 and y + 5 >= size - 7) or
                    (x + 5 >= size - 7 and y < 7)):
                continue
            draw_alignment_box(grid, y, x)


def draw_timing(grid: Grid) -> None:
    """Row 6 and column 6 alternate dark/light, dark at even indexes."""
    ti = 6
    for i in range(len(grid)):
        pix = Pixel(Role.TIMING, i % 2 == 0)
        if grid[ti][i].role == Role.EMPTY:
            set_pixel(grid, ti, i, pix)
        if grid[i][ti].role == Role.EMPTY:
            set_pixel(grid, i, ti, pix)


def draw_version_pattern(grid: Grid, version: int) -> None:
    """
    Write the 18-bit version pattern as a 6x3 block above the bottom-left
    finder and its transpose left of the top-right finder (v7+ only).
    """
    pattern = VERSIONS[version].pattern
    if not pattern:
        return
    size = len(grid)
    v = pattern
    for x in range(6):
        for y in range(3):
            pix = Pixel(Role.VERSION, bool(v & 1))
            set_pixel(grid, size - 11 + y, x, pix)
            set_pixel(grid, x, size - 11 + y, pix)
            v >>= 1


def draw_dark_module(grid: Grid) -> None:
    size = len(grid)
    set_pixel(grid, size - 8, 8, Pixel(Role.UNUSED, True))


def format_bits(level: Level, mask: int) -> int:
    """
    15-bit format word before masking with 0x5412.

    The top five bits are the level indicator (L=01, M=00, Q=11, H=10) and
    the mask number; the low ten bits are the BCH(15,5) remainder.

    Example:
        >>> hex(format_bits(Level.M, 0) ^ FORMAT_XOR)
        '0x5412'
    """
    fb = (int(level) ^ 1) << 13 | mask << 10
    rem = fb
    for i in range(14, 9, -1):
        if rem & (1 << i):
            rem ^= FORMAT_POLY << (i - 10)
    return fb | rem


def draw_format(grid: Grid, level: Level, mask: int) -> None:
    """
    Place both copies of the format information.

    Bits 0-7 run down column 8 next to the top-left finder (skipping the
    timing row) and leftwards along row 8 under the top-right finder; bits
    8-14 run leftwards along row 8 next to the top-left finder and up column 8
    beside the bottom-left finder. With no mask chosen yet the modules are
    reserved but left light.
    """
    size = len(grid)
    fb = format_bits(level, mask) if mask >= 0 else 0
    for i in range(15):
        black = bool(fb >> i & 1)
        invert = False
        if mask >= 0 and FORMAT_XOR >> i & 1:
            black = not black
            invert = True
        pix = Pixel(Role.FORMAT, black, invert, i)

        # top left
        if i < 6:
            set_pixel(grid, i, 8, pix)
        elif i < 8:
            set_pixel(grid, i + 1, 8, pix)
        elif i < 9:
            set_pixel(grid, 8, 7, pix)
        else:
            set_pixel(grid, 8, 14 - i, pix)

        # top right and bottom left
        if i < 8:
            set_pixel(grid, 8, size - 1 - i, pix)
        else:
            set_pixel(grid, size - 15 + i, 8, pix)
