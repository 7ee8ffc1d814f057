# -*- coding: utf-8 -*-
import pytest

from qrengine.bits import Bits
from qrengine.encodings import (
    ALPHABET, Alphanumeric, Byte, Numeric, choose_encoding,
)
from qrengine.errors import UnsupportedEncodingError


def bit_string(enc, version=1):
    b = Bits()
    enc.encode(b, version)
    n = b.bits()
    b.write(0, -n & 7)
    return ''.join(f'{byte:08b}' for byte in b.bytes())[:n]


def test_numeric_annex_example():
    enc = Numeric('01234567')
    b = Bits()
    enc.encode(b, 1)
    assert b.bits() == 41 == enc.bits(1)
    b.write(0, 7)
    assert bytes(b.bytes()) == bytes.fromhex('10200c566180')


@pytest.mark.parametrize('text, payload', [
    ('', ''),
    ('7', '0111'),
    ('42', '0101010'),
    ('123', '0001111011'),
    ('0012', '0000000001' '0010'),
])
def test_numeric_groups(text, payload):
    enc = Numeric(text)
    expected = '0001' + format(len(text), '010b') + payload
    assert bit_string(enc) == expected
    assert enc.bits(1) == len(expected)


def test_alphanumeric_hello_world():
    enc = Alphanumeric('HELLO WORLD')
    expected = ('0010' '000001011' '01100001011' '01111000110' '10001011100'
                '10110111000' '10011010100' '001101')
    assert enc.bits(1) == 74
    assert bit_string(enc) == expected


def test_byte_mode_stores_utf8():
    enc = Byte('é')
    assert enc.data == b'\xc3\xa9'
    assert len(enc) == 2
    assert enc.bits(1) == 4 + 8 + 16
    assert bit_string(enc) == '0100' '00000010' '11000011' '10101001'


def test_byte_mode_accepts_bytes():
    enc = Byte(b'\x00\xff')
    assert enc.check()
    assert bit_string(enc) == '0100' '00000010' '00000000' '11111111'


@pytest.mark.parametrize('version, widths', [
    (1, (10, 9, 8)), (9, (10, 9, 8)), (10, (12, 11, 16)), (26, (12, 11, 16)),
    (27, (14, 13, 16)), (40, (14, 13, 16)),
])
def test_count_field_widths(version, widths):
    for cls, width in zip((Numeric, Alphanumeric, Byte), widths):
        assert cls('').bits(version) == 4 + width


def test_count_field_width_changes_layout():
    b = Bits()
    Numeric('1').encode(b, 27)
    assert b.bits() == 4 + 14 + 4


def test_empty_numeric_at_largest_size_class():
    assert Numeric('').bits(40) == 18


@pytest.mark.parametrize('cls, good, bad', [
    (Numeric, '0123456789', '12a'),
    (Numeric, '', ' 1'),
    (Alphanumeric, ALPHABET, 'hello'),
    (Alphanumeric, 'A B', 'A_B'),
])
def test_check(cls, good, bad):
    assert cls(good).check()
    assert not cls(bad).check()


@pytest.mark.parametrize('text, expected', [
    ('', Numeric),
    ('01234567', Numeric),
    ('HELLO WORLD', Alphanumeric),
    ('12A', Alphanumeric),
    ('hello', Byte),
    ('Hello, World!', Byte),
    (b'12', Numeric),
    (b'HELLO WORLD', Alphanumeric),
    (b'hello', Byte),
    (b'\xff12', Byte),
])
def test_choose_encoding(text, expected):
    assert type(choose_encoding(text)) is expected


def test_repr():
    assert repr(Numeric('12')) == "Numeric('12')"


def test_ascii_bytes_use_the_compact_encodings():
    enc = choose_encoding(b'01234567')
    assert type(enc) is Numeric
    assert enc.text == '01234567'
    assert enc.bits(1) == 41
    assert type(choose_encoding(bytearray(b'AB-12'))) is Alphanumeric


def test_non_ascii_bytes_stay_verbatim():
    enc = choose_encoding(b'\xc3\xa9')
    assert type(enc) is Byte
    assert enc.data == b'\xc3\xa9'


def test_lone_surrogate_is_unsupported():
    with pytest.raises(UnsupportedEncodingError):
        choose_encoding('\ud800')
    with pytest.raises(UnsupportedEncodingError):
        Byte('ok\udfff')
