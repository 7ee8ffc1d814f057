# -*- coding: utf-8 -*-
"""
QR Data Encodings Module

The three payload encodings supported by the engine. The more restrictive the
character set, the fewer bits per character:

    Numeric       digits 0-9, 3 digits per 10 bits
    Alphanumeric  0-9 A-Z space $%*+-./:, 2 characters per 11 bits
    Byte          anything, 8 bits per byte (str is encoded as UTF-8)

Each encoding can check its text, predict its exact bit length for a version
and serialize itself into a Bits buffer.
"""

from typing import Union

from .bits import Bits
from .errors import UnsupportedEncodingError
from .tables import size_class

ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:'
_ALPHA_INDEX = {c: i for i, c in enumerate(ALPHABET)}

MODE_NUMERIC = 1
MODE_ALPHANUMERIC = 2
MODE_BYTE = 4


class Encoding:
    """Base class: a text plus the rules to turn it into QR bits."""

    mode = 0
    name = ''
    count_bits = (0, 0, 0)  # character count width per size class

    def __init__(self, text):
        self.text = text

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.text!r})'

    def __len__(self) -> int:
        return len(self.text)

    def check(self) -> bool:
        raise NotImplementedError

    def payload_bits(self) -> int:
        raise NotImplementedError

    def bits(self, version: int) -> int:
        """Header nibble + character count field + payload, in bits."""
        return 4 + self.count_bits[size_class(version)] + self.payload_bits()

    def encode(self, b: Bits, version: int) -> None:
        b.write(self.mode, 4)
        b.write(len(self), self.count_bits[size_class(version)])
        self.write_payload(b)

    def write_payload(self, b: Bits) -> None:
        raise NotImplementedError


class Numeric(Encoding):
    mode = MODE_NUMERIC
    name = 'numeric'
    count_bits = (10, 12, 14)

    def check(self) -> bool:
        return all('0' <= c <= '9' for c in self.text)

    def payload_bits(self) -> int:
        return (10 * len(self.text) + 2) // 3

    def write_payload(self, b: Bits) -> None:
        s = self.text
        i = 0
        while i + 3 <= len(s):
            b.write(int(s[i:i + 3]), 10)
            i += 3
        rest = len(s) - i
        if rest == 1:
            b.write(int(s[i]), 4)
        elif rest == 2:
            b.write(int(s[i:i + 2]), 7)


class Alphanumeric(Encoding):
    mode = MODE_ALPHANUMERIC
    name = 'alphanumeric'
    count_bits = (9, 11, 13)

    def check(self) -> bool:
        return all(c in _ALPHA_INDEX for c in self.text)

    def payload_bits(self) -> int:
        return (11 * len(self.text) + 1) // 2

    def write_payload(self, b: Bits) -> None:
        s = self.text
        i = 0
        while i + 2 <= len(s):
            b.write(_ALPHA_INDEX[s[i]] * 45 + _ALPHA_INDEX[s[i + 1]], 11)
            i += 2
        if i < len(s):
            b.write(_ALPHA_INDEX[s[i]], 6)


class Byte(Encoding):
    """8-bit data. A str is stored as its UTF-8 bytes; every byte is valid."""

    mode = MODE_BYTE
    name = 'byte'
    count_bits = (8, 16, 16)

    def __init__(self, text: Union[str, bytes]):
        super().__init__(text)
        if isinstance(text, str):
            try:
                self.data = text.encode('utf-8')
            except UnicodeEncodeError:
                # lone surrogates have no UTF-8 form
                raise UnsupportedEncodingError(self) from None
        else:
            self.data = bytes(text)

    def __len__(self) -> int:
        return len(self.data)

    def check(self) -> bool:
        return True

    def payload_bits(self) -> int:
        return 8 * len(self.data)

    def write_payload(self, b: Bits) -> None:
        for byte in self.data:
            b.write(byte, 8)


def choose_encoding(text: Union[str, bytes]) -> Encoding:
    """
    Pick the most compact encoding accepting text.

    Numeric is tried first, then alphanumeric, and byte mode always works.
    The empty string is numeric. Bytes get the same treatment when they are
    plain ASCII; anything else is stored verbatim in byte mode.

    Raises:
        UnsupportedEncodingError: if a str cannot be encoded as UTF-8

    Example:
        >>> choose_encoding("01234567")
        Numeric('01234567')
        >>> choose_encoding(b"HELLO WORLD")
        Alphanumeric('HELLO WORLD')
    """
    candidate = text
    if isinstance(text, (bytes, bytearray)):
        try:
            candidate = bytes(text).decode('ascii')
        except UnicodeDecodeError:
            return Byte(text)
    for cls in (Numeric, Alphanumeric):
        enc = cls(candidate)
        if enc.check():
            return enc
    return Byte(text)
