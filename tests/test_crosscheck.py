# -*- coding: utf-8 -*-
"""
Compare complete symbols against independent encoders.

Both are told to use the same version, level, mode and mask so that they
must produce the identical module matrix.

segno only serves for numeric and alphanumeric text: when a byte mode stream
is already byte aligned after the terminator, segno writes one extra zero
codeword before the 0xEC/0x11 padding, so its byte mode symbols differ from
ours. Byte mode is checked against the qrcode library instead.
"""

import pytest

from qrengine import Level, encode
from qrengine.encodings import choose_encoding


@pytest.mark.parametrize('text, level', [
    ('01234567', 'M'),
    ('HELLO WORLD', 'Q'),
    ('0', 'L'),
    ('A', 'M'),
    ('1234567890' * 60, 'M'),
    ('THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG 0123456789' * 4, 'Q'),
    ('HTTPS://GITHUB.COM/', 'H'),
    ('9' * 3000, 'L'),
])
def test_matrix_matches_segno(text, level):
    segno = pytest.importorskip('segno')
    code = encode(text, level)
    mode = choose_encoding(text).name
    assert mode in ('numeric', 'alphanumeric')
    ref = segno.make_qr(text, error=level.lower(), version=code.version, mode=mode,
                        mask=code.mask, boost_error=False)
    assert ref.version == code.version
    expected = [[bool(v) for v in row] for row in ref.matrix]
    assert code.matrix == expected


@pytest.mark.parametrize('text, level', [
    ('Hello, World!', 'L'),
    ('https://github.com/', 'H'),
    ('a' * 150, 'H'),
    ('x' * 1000, 'L'),
    ('Grüße aus Köln', 'Q'),
    ('lowercase text at medium', 'M'),
])
def test_byte_mode_matches_qrcode(text, level):
    qrcode = pytest.importorskip('qrcode')
    from qrcode.constants import (
        ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q,
    )
    levels = {
        Level.L: ERROR_CORRECT_L, Level.M: ERROR_CORRECT_M,
        Level.Q: ERROR_CORRECT_Q, Level.H: ERROR_CORRECT_H,
    }

    code = encode(text, level)
    assert choose_encoding(text).name == 'byte'
    ref = qrcode.QRCode(version=code.version, error_correction=levels[code.level],
                        border=0, mask_pattern=code.mask)
    # optimize=0 keeps the whole text in one byte mode segment
    ref.add_data(text, optimize=0)
    ref.make(fit=False)
    expected = [[bool(v) for v in row] for row in ref.get_matrix()]
    assert code.matrix == expected
