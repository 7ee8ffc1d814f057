# -*- coding: utf-8 -*-
"""
QR Capacity Tables Module

Per-version constants for QR Code versions 1-40 (ISO/IEC 18004): total
codewords, remainder bits, alignment pattern placement, version pattern and,
for every error correction level, the number of Reed-Solomon blocks and the
check codewords per block.

Everything here is read-only data computed once at import time.
"""

from enum import IntEnum
from typing import NamedTuple, Tuple, Union


MIN_VERSION = 1
MAX_VERSION = 40


class Level(IntEnum):
    """Error correction level, from least (L) to most (H) redundant."""
    L = 0
    M = 1
    Q = 2
    H = 3

    def __str__(self) -> str:
        return self.name


class VersionInfo(NamedTuple):
    apos: int        # upper-left corner of the first inner alignment box
    astride: int     # distance between alignment boxes
    words: int       # total codewords (data + check)
    remainder: int   # remainder bits after the last codeword
    pattern: int     # 18-bit version pattern (versions >= 7)
    level: Tuple[Tuple[int, int], ...]  # per level: (blocks, check per block)


# ISO/IEC 18004 Table 1, Table 9 and Annex D, one row per version.
# Index 0 is a placeholder so that VERSIONS[v] reads naturally.
VERSIONS: Tuple[VersionInfo, ...] = (
    VersionInfo(0, 0, 0, 0, 0, ((0, 0), (0, 0), (0, 0), (0, 0))),
    VersionInfo(100, 100, 26, 0, 0, ((1, 7), (1, 10), (1, 13), (1, 17))),
    VersionInfo(16, 100, 44, 7, 0, ((1, 10), (1, 16), (1, 22), (1, 28))),
    VersionInfo(20, 100, 70, 7, 0, ((1, 15), (1, 26), (2, 18), (2, 22))),
    VersionInfo(24, 100, 100, 7, 0, ((1, 20), (2, 18), (2, 26), (4, 16))),
    VersionInfo(28, 100, 134, 7, 0, ((1, 26), (2, 24), (4, 18), (4, 22))),
    VersionInfo(32, 100, 172, 7, 0, ((2, 18), (4, 16), (4, 24), (4, 28))),
    VersionInfo(20, 16, 196, 0, 0x07c94, ((2, 20), (4, 18), (6, 18), (5, 26))),
    VersionInfo(22, 18, 242, 0, 0x085bc, ((2, 24), (4, 22), (6, 22), (6, 26))),
    VersionInfo(24, 20, 292, 0, 0x09a99, ((2, 30), (5, 22), (8, 20), (8, 24))),
    VersionInfo(26, 22, 346, 0, 0x0a4d3, ((4, 18), (5, 26), (8, 24), (8, 28))),
    VersionInfo(28, 24, 404, 0, 0x0bbf6, ((4, 20), (5, 30), (8, 28), (11, 24))),
    VersionInfo(30, 26, 466, 0, 0x0c762, ((4, 24), (8, 22), (10, 26), (11, 28))),
    VersionInfo(32, 28, 532, 0, 0x0d847, ((4, 26), (9, 22), (12, 24), (16, 22))),
    VersionInfo(24, 20, 581, 3, 0x0e60d, ((4, 30), (9, 24), (16, 20), (16, 24))),
    VersionInfo(24, 22, 655, 3, 0x0f928, ((6, 22), (10, 24), (12, 30), (18, 24))),
    VersionInfo(24, 24, 733, 3, 0x10b78, ((6, 24), (10, 28), (17, 24), (16, 30))),
    VersionInfo(28, 24, 815, 3, 0x1145d, ((6, 28), (11, 28), (16, 28), (19, 28))),
    VersionInfo(28, 26, 901, 3, 0x12a17, ((6, 30), (13, 26), (18, 28), (21, 28))),
    VersionInfo(28, 28, 991, 3, 0x13532, ((7, 28), (14, 26), (21, 26), (25, 26))),
    VersionInfo(32, 28, 1085, 3, 0x149a6, ((8, 28), (16, 26), (20, 30), (25, 28))),
    VersionInfo(26, 22, 1156, 4, 0x15683, ((8, 28), (17, 26), (23, 28), (25, 30))),
    VersionInfo(24, 24, 1258, 4, 0x168c9, ((9, 28), (17, 28), (23, 30), (34, 24))),
    VersionInfo(28, 24, 1364, 4, 0x177ec, ((9, 30), (18, 28), (25, 30), (30, 30))),
    VersionInfo(26, 26, 1474, 4, 0x18ec4, ((10, 30), (20, 28), (27, 30), (32, 30))),
    VersionInfo(30, 26, 1588, 4, 0x191e1, ((12, 26), (21, 28), (29, 30), (35, 30))),
    VersionInfo(28, 28, 1706, 4, 0x1afab, ((12, 28), (23, 28), (34, 28), (37, 30))),
    VersionInfo(32, 28, 1828, 4, 0x1b08e, ((12, 30), (25, 28), (34, 30), (40, 30))),
    VersionInfo(24, 24, 1921, 3, 0x1cc1a, ((13, 30), (26, 28), (35, 30), (42, 30))),
    VersionInfo(28, 24, 2051, 3, 0x1d33f, ((14, 30), (28, 28), (38, 30), (45, 30))),
    VersionInfo(24, 26, 2185, 3, 0x1ed75, ((15, 30), (29, 28), (40, 30), (48, 30))),
    VersionInfo(28, 26, 2323, 3, 0x1f250, ((16, 30), (31, 28), (43, 30), (51, 30))),
    VersionInfo(32, 26, 2465, 3, 0x209d5, ((17, 30), (33, 28), (45, 30), (54, 30))),
    VersionInfo(28, 28, 2611, 3, 0x216f0, ((18, 30), (35, 28), (48, 30), (57, 30))),
    VersionInfo(32, 28, 2761, 3, 0x228ba, ((19, 30), (37, 28), (51, 30), (60, 30))),
    VersionInfo(28, 24, 2876, 0, 0x2379f, ((19, 30), (38, 28), (53, 30), (63, 30))),
    VersionInfo(22, 26, 3034, 0, 0x24b0b, ((20, 30), (40, 28), (56, 30), (66, 30))),
    VersionInfo(26, 26, 3196, 0, 0x2542e, ((21, 30), (43, 28), (59, 30), (70, 30))),
    VersionInfo(30, 26, 3362, 0, 0x26a64, ((22, 30), (45, 28), (62, 30), (74, 30))),
    VersionInfo(24, 28, 3532, 0, 0x27541, ((24, 30), (47, 28), (65, 30), (77, 30))),
    VersionInfo(28, 28, 3706, 0, 0x28c69, ((25, 30), (49, 28), (68, 30), (81, 30))),
)


def normalize_level(level: Union[Level, int, str]) -> Level:
    """
    Convert an error correction level given as Level, int or letter.

    Args:
        level: Level member, int 0..3 or one of 'L', 'M', 'Q', 'H'

    Returns:
        Level: the normalized level

    Raises:
        ValueError: if the value does not name a level
    """
    if isinstance(level, str):
        try:
            return Level[level.strip().upper()]
        except KeyError:
            raise ValueError(f'Illegal error correction level: "{level}". '
                             'Supported levels: L, M, Q, H') from None
    if isinstance(level, bool):
        raise ValueError(f'Illegal error correction level: {level!r}')
    try:
        return Level(level)
    except ValueError:
        raise ValueError(f'Illegal error correction level: {level!r}. '
                         'Supported levels: L, M, Q, H') from None


def check_version(version: int) -> int:
    """Return version unchanged, or raise ValueError if it is not 1..40."""
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(f'Invalid QR version {version}. '
                         f'Must be in range {MIN_VERSION} .. {MAX_VERSION}')
    return version


def size(version: int) -> int:
    """Number of modules per side: 17 + 4 * version."""
    return 17 + 4 * check_version(version)


def size_class(version: int) -> int:
    """Bucket selecting the width of character count fields."""
    if version <= 9:
        return 0
    if version <= 26:
        return 1
    return 2


def blocks(version: int, level: Level) -> int:
    return VERSIONS[check_version(version)].level[level][0]


def check_bytes(version: int, level: Level) -> int:
    """Total error correction codewords over all blocks."""
    nblock, ne = VERSIONS[check_version(version)].level[level]
    return nblock * ne


def data_bytes(version: int, level: Level) -> int:
    """Number of data codewords a symbol of version/level can hold."""
    return VERSIONS[check_version(version)].words - check_bytes(version, level)


def alignment_positions(version: int) -> Tuple[int, ...]:
    """
    Upper-left coordinates visited by the alignment box walk.

    The walk starts at 4 (the box centred on the timing strip), jumps to the
    table anchor and then advances by the stride while a 5x5 box still fits.
    Combinations touching a position box are skipped by the caller.

    Example:
        >>> alignment_positions(7)
        (4, 20, 36)
    """
    info = VERSIONS[check_version(version)]
    siz = size(version)
    out = []
    pos = 4
    while pos + 5 < siz:
        out.append(pos)
        pos = info.apos if pos == 4 else pos + info.astride
    return tuple(out)
