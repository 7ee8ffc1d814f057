# -*- coding: utf-8 -*-
"""
QR Bit Buffer Module

An append-only, MSB-first bit sequence used to serialize the mode header,
character count and payload, then padded to the data capacity and extended
with Reed-Solomon check bytes.

Classes:
    Bits: the bit buffer

Functions:
    interleave: reorder block-wise codewords into transmission order
"""

import logging
from functools import lru_cache
from typing import List

from reedsolo import RSCodec

from .errors import InternalError
from .tables import VERSIONS, Level, data_bytes

logger = logging.getLogger(__name__)

# GF(256) with x^8 + x^4 + x^3 + x^2 + 1, generator alpha = 2
QR_PRIMITIVE = 0x11d
QR_GENERATOR = 2

PAD_BYTES = (0xec, 0x11)


@lru_cache(maxsize=None)
def _rs_codec(nsym: int) -> RSCodec:
    return RSCodec(nsym, prim=QR_PRIMITIVE, generator=QR_GENERATOR, fcr=0)


def ecc(block: bytes, nsym: int) -> bytes:
    """
    Compute Reed-Solomon check bytes for one data block.

    Args:
        block (bytes): data codewords of the block
        nsym (int): number of check codewords wanted

    Returns:
        bytes: the nsym check codewords
    """
    encoded = _rs_codec(nsym).encode(bytes(block))
    return bytes(encoded[len(block):])


class Bits:
    """
    Growable bit string, most significant bit first.

    Example:
        >>> b = Bits()
        >>> b.write(1, 4)
        >>> b.write(0x3, 12)
        >>> b.bytes().hex()
        '1003'
    """

    def __init__(self):
        self._b = bytearray()
        self._nbit = 0

    def reset(self) -> None:
        self._b.clear()
        self._nbit = 0

    def bits(self) -> int:
        """Number of bits written so far."""
        return self._nbit

    def bytes(self) -> bytearray:
        if self._nbit % 8 != 0:
            raise InternalError('qr: fractional byte')
        return self._b

    def append(self, data: bytes) -> None:
        if self._nbit % 8 != 0:
            raise InternalError('qr: fractional byte')
        self._b.extend(data)
        self._nbit += 8 * len(data)

    def write(self, value: int, nbit: int) -> None:
        """
        Append the low nbit bits of value, most significant first.

        Writes may straddle byte boundaries: the first chunk fills the open
        trailing byte, the rest go into fresh bytes.
        """
        if not 0 <= nbit <= 32:
            raise InternalError(f'qr: invalid write of {nbit} bits')
        value &= (1 << nbit) - 1
        while nbit > 0:
            free = -self._nbit & 7
            if free == 0:
                self._b.append(0)
                free = 8
            n = min(nbit, free)
            nbit -= n
            chunk = value >> nbit
            value &= (1 << nbit) - 1
            self._nbit += n
            self._b[-1] |= chunk << (-self._nbit & 7)

    def pad(self, n: int) -> None:
        """
        Fill the next n bits: terminator, byte alignment, then 0xEC/0x11.
        """
        if n < 0:
            raise InternalError('qr: invalid pad size')
        if n <= 4:
            self.write(0, n)
            return
        self.write(0, 4)
        n -= 4
        align = -self._nbit & 7
        self.write(0, align)
        n -= align
        for i in range(n // 8):
            self.write(PAD_BYTES[i % 2], 8)

    def add_check_bytes(self, version: int, level: Level) -> None:
        """
        Pad to the data capacity and append the check bytes of every block.

        Data codewords are split into contiguous blocks; the last
        (data_bytes % blocks) blocks carry one extra byte. Each block's check
        bytes are computed by the Reed-Solomon codec and appended in block
        order, so the buffer ends up as all data followed by all checks.

        Raises:
            InternalError: if the buffer already holds more than the capacity,
                or the final length disagrees with the table
        """
        nd = data_bytes(version, level)
        if self._nbit < nd * 8:
            self.pad(nd * 8 - self._nbit)
        if self._nbit != nd * 8:
            raise InternalError('qr: too much data')

        info = VERSIONS[version]
        nblock, ne = info.level[level]
        dat = bytes(self.bytes())
        db = nd // nblock
        extra = nd % nblock
        start = 0
        for i in range(nblock):
            if i == nblock - extra:
                db += 1
            self.append(ecc(dat[start:start + db], ne))
            start += db

        if len(self.bytes()) != info.words:
            raise InternalError('qr: internal error: '
                                f'{len(self._b)} codewords, want {info.words}')
        logger.debug(f"Added {nblock} x {ne} check bytes for version {version}-{level}")


def split_blocks(version: int, level: Level) -> List[int]:
    """Data codewords in each block, in block order."""
    nd = data_bytes(version, level)
    nblock = VERSIONS[version].level[level][0]
    short = nd // nblock
    extra = nd % nblock
    return [short + (1 if i >= nblock - extra else 0) for i in range(nblock)]


def interleave(codewords: bytes, version: int, level: Level) -> bytes:
    """
    Reorder block-wise codewords into the transmission order.

    Args:
        codewords (bytes): all data blocks followed by all check blocks,
            as produced by Bits.add_check_bytes
        version (int): QR version (1-40)
        level (Level): error correction level

    Returns:
        bytes: byte 0 of every data block, then byte 1 of every data block
            (skipping exhausted blocks) and so on, followed by the check bytes
            interleaved the same way
    """
    sizes = split_blocks(version, level)
    ne = VERSIONS[version].level[level][1]
    data_blocks = []
    pos = 0
    for n in sizes:
        data_blocks.append(codewords[pos:pos + n])
        pos += n
    check_blocks = [codewords[pos + i * ne:pos + (i + 1) * ne] for i in range(len(sizes))]

    out = bytearray()
    for i in range(max(sizes)):
        for blk in data_blocks:
            if i < len(blk):
                out.append(blk[i])
    for i in range(ne):
        for blk in check_blocks:
            out.append(blk[i])
    if len(out) != len(codewords):
        raise InternalError('qr: interleave math')
    return bytes(out)
