# -*- coding: utf-8 -*-
"""
QR Engine - Core Module

This package encodes text into QR Code symbols (ISO/IEC 18004, versions 1-40):
mode selection, bit packing, Reed-Solomon error correction, module layout,
masking and rendering of the finished symbol.

Modules:
    qr_generator: Main encoding functions
    plan: Content-independent module layout and the plan cache
    functional_areas: Finder, alignment, timing, version and format patterns
    encodings: Numeric, alphanumeric and byte encodings
    bits: Bit buffer, padding, check bytes and interleaving
    masks: The eight data mask patterns
    tables: Per-version capacity tables
    renderer: PNG, SVG and terminal rendering
"""

__version__ = "1.0.0"
__author__ = "QR Engine Team"

from .code import Code
from .errors import (
    DataOverflowError, InternalError, QRError, TooLongError, UnsupportedEncodingError,
)
from .plan import Plan, clear_plan_cache, get_plan
from .qr_generator import encode, encode_into, select_version
from .renderer import (
    render_ascii, render_colored_png_from_plan, render_colored_svg_from_plan,
    render_image, render_png, render_svg,
)
from .tables import Level

L, M, Q, H = Level.L, Level.M, Level.Q, Level.H

__all__ = [
    'encode',
    'encode_into',
    'select_version',
    'Code',
    'Plan',
    'get_plan',
    'clear_plan_cache',
    'Level',
    'L', 'M', 'Q', 'H',
    'QRError',
    'TooLongError',
    'UnsupportedEncodingError',
    'DataOverflowError',
    'InternalError',
    'render_image',
    'render_png',
    'render_svg',
    'render_ascii',
    'render_colored_png_from_plan',
    'render_colored_svg_from_plan',
]
