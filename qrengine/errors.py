# -*- coding: utf-8 -*-
"""
QR Engine Exceptions

Two tiers of failures:
    QRError and subclasses: the input cannot be encoded as requested.
        Retrying with the same input cannot succeed.
    InternalError: an invariant of the layout or of the tables was broken.
        This is a bug, never bad input, and it is not meant to be caught.
"""


class QRError(Exception):
    """Base class for recoverable encoding failures."""


class TooLongError(QRError):
    """The text does not fit into any version up to 40 at the chosen level."""

    def __init__(self, bits: int, capacity: int):
        super().__init__(f'text too long to encode as QR: {bits} bits needed, '
                         f'{capacity} bits available in version 40')
        self.bits = bits
        self.capacity = capacity


class UnsupportedEncodingError(QRError):
    """The encoding rejected its own text."""

    def __init__(self, encoding):
        super().__init__(f'encoding not supported: {encoding!r}')
        self.encoding = encoding


class DataOverflowError(QRError):
    """The serialized bits exceed the data capacity of the target symbol."""

    def __init__(self, bits: int, capacity: int):
        super().__init__(f'cannot encode {bits} bits into {capacity}-bit code')
        self.bits = bits
        self.capacity = capacity


class InternalError(RuntimeError):
    """A layout or table invariant does not hold."""
