# -*- coding: utf-8 -*-
import pytest

from qrengine.bits import Bits, ecc, interleave, split_blocks
from qrengine.errors import InternalError
from qrengine.tables import VERSIONS, Level

# ISO/IEC 18004 Annex I: "01234567", version 1-M
ANNEX_DATA = bytes.fromhex('10200c566180ec11ec11ec11ec11ec11')
ANNEX_CHECK = bytes.fromhex('a524d4c1ed36c7872c55')


def test_write_spans_byte_boundaries():
    b = Bits()
    b.write(0b101, 3)
    b.write(0x1ff, 9)
    assert b.bits() == 12
    b.write(0, 4)
    assert bytes(b.bytes()) == bytes([0xbf, 0xf0])


def test_write_32_bits_unaligned():
    b = Bits()
    b.write(0xa, 4)
    b.write(0xdeadbeef, 32)
    b.write(0, 4)
    assert bytes(b.bytes()) == bytes.fromhex('adeadbeef0')


def test_write_masks_high_bits():
    b = Bits()
    b.write(0x1ff, 4)
    b.write(0, 4)
    assert bytes(b.bytes()) == b'\xf0'


def test_write_zero_bits_is_noop():
    b = Bits()
    b.write(123, 0)
    assert b.bits() == 0
    assert bytes(b.bytes()) == b''


def test_fractional_byte_read_is_fatal():
    b = Bits()
    b.write(1, 3)
    with pytest.raises(InternalError):
        b.bytes()
    with pytest.raises(InternalError):
        b.append(b'\x00')


def test_reset():
    b = Bits()
    b.write(0xff, 8)
    b.reset()
    assert b.bits() == 0
    assert bytes(b.bytes()) == b''


def test_pad_terminator_then_alternating_bytes():
    b = Bits()
    b.write(1, 4)
    b.pad(28)
    assert b.bits() == 32
    assert bytes(b.bytes()) == bytes([0x10, 0xec, 0x11, 0xec])


def test_pad_short_terminator():
    b = Bits()
    b.write(0x1f, 5)
    b.pad(3)
    assert b.bits() == 8
    assert bytes(b.bytes()) == b'\xf8'


def test_pad_aligns_before_pad_bytes():
    b = Bits()
    b.write(0b1, 1)
    b.pad(23)
    assert bytes(b.bytes()) == bytes([0x80, 0xec, 0x11])


def test_pad_negative_is_fatal():
    with pytest.raises(InternalError):
        Bits().pad(-1)


def test_add_check_bytes_annex_example():
    b = Bits()
    # mode, count, 012, 345, 67
    b.write(1, 4)
    b.write(8, 10)
    b.write(12, 10)
    b.write(345, 10)
    b.write(67, 7)
    b.add_check_bytes(1, Level.M)
    out = bytes(b.bytes())
    assert len(out) == VERSIONS[1].words
    assert out[:16] == ANNEX_DATA
    assert out[16:] == ANNEX_CHECK


def test_ecc_matches_annex():
    assert ecc(ANNEX_DATA, 10) == ANNEX_CHECK


def test_add_check_bytes_rejects_overfull_buffer():
    b = Bits()
    b.append(bytes(20))
    with pytest.raises(InternalError):
        b.add_check_bytes(1, Level.M)


def test_add_check_bytes_multiple_blocks():
    b = Bits()
    b.write(4, 4)
    b.add_check_bytes(5, Level.Q)
    out = bytes(b.bytes())
    assert len(out) == 134
    sizes = split_blocks(5, Level.Q)
    start = 0
    for i, n in enumerate(sizes):
        check = out[62 + 18 * i:62 + 18 * (i + 1)]
        assert ecc(out[start:start + n], 18) == check
        start += n


def test_split_blocks_puts_longer_blocks_last():
    assert split_blocks(5, Level.Q) == [15, 15, 16, 16]
    assert split_blocks(1, Level.L) == [19]
    assert sum(split_blocks(40, Level.H)) == 1276


def test_interleave_uneven_blocks():
    codewords = bytes(range(134))
    out = interleave(codewords, 5, Level.Q)
    assert len(out) == 134
    assert list(out[:4]) == [0, 15, 30, 46]
    assert list(out[4:8]) == [1, 16, 31, 47]
    # blocks 0 and 1 are exhausted after 15 bytes
    assert list(out[60:62]) == [45, 61]
    assert list(out[62:66]) == [62, 80, 98, 116]
    assert out[-1] == 133
    assert sorted(out) == list(codewords)


def test_interleave_single_block_is_identity():
    codewords = bytes(range(26))
    assert interleave(codewords, 1, Level.L) == codewords
