# -*- coding: utf-8 -*-
"""
QR Code Generator Module

Top-level encoding operations: pick the most compact encoding for the text,
pick the smallest version it fits at the requested error correction level,
then encode it against the (cached) Plan for that version and level.

The mask is always 0; no penalty-based mask search is performed.

Functions:
    encode: Encode text into a new Code
    encode_into: Encode text reusing a caller-supplied bitmap buffer
    select_version: Smallest version that holds an encoding
"""

import logging
from typing import Optional, Union

from .code import Code
from .encodings import Encoding, choose_encoding
from .errors import TooLongError
from .plan import get_plan
from .tables import MAX_VERSION, MIN_VERSION, Level, data_bytes, normalize_level

logger = logging.getLogger(__name__)

DEFAULT_MASK = 0


def select_version(encoding: Encoding, level: Union[Level, str, int]) -> int:
    """
    Find the smallest version whose data capacity holds the encoding.

    Args:
        encoding (Encoding): validated payload
        level: error correction level ('L', 'M', 'Q', 'H' or Level)

    Returns:
        int: version 1-40

    Raises:
        TooLongError: if the payload does not fit even in version 40

    Example:
        >>> from qrengine.encodings import Alphanumeric
        >>> select_version(Alphanumeric("HELLO WORLD"), 'Q')
        1
    """
    level = normalize_level(level)
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        if encoding.bits(version) <= data_bytes(version, level) * 8:
            return version
    raise TooLongError(encoding.bits(MAX_VERSION), data_bytes(MAX_VERSION, level) * 8)


def encode(text: Union[str, bytes], level: Union[Level, str, int] = Level.M) -> Code:
    """
    Encode text as a QR code.

    Args:
        text: data to encode; str is numeric, alphanumeric or UTF-8 bytes
        level: error correction level
            - L: ~7% recovery capability
            - M: ~15% recovery capability
            - Q: ~25% recovery capability
            - H: ~30% recovery capability

    Returns:
        Code: the symbol, size 17 + 4 * version modules per side

    Raises:
        ValueError: if level is not a valid error correction level
        TooLongError: if no version up to 40 can hold the text
        UnsupportedEncodingError, DataOverflowError: see Plan.encode_into

    Example:
        >>> code = encode("HELLO WORLD", 'L')
        >>> code.size
        21
    """
    return encode_into(None, text, level)


def encode_into(buffer: Optional[bytearray], text: Union[str, bytes],
                level: Union[Level, str, int] = Level.M) -> Code:
    """
    Same as encode, but write the bitmap into buffer when it is large enough.

    The first stride * size bytes of buffer are overwritten and the returned
    Code's bitmap is a view on them. A read-only buffer of that size
    raises TypeError.
    """
    level = normalize_level(level)
    enc = choose_encoding(text)
    version = select_version(enc, level)
    logger.debug(f"Encoding {len(enc)} characters in {enc.name} mode: "
                 f"version {version}, level {level}, {enc.bits(version)} bits")
    return get_plan(version, level, DEFAULT_MASK).encode_into(buffer, enc)
