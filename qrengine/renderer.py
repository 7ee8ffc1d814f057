# -*- coding: utf-8 -*-
"""
QR Code Renderer Module

Turns a finished Code into something visible: a Pillow image or PNG bytes,
an SVG document, or an ANSI string for terminals. The colored variants take
the Plan the Code was built from and paint every module by its role, which
helps to understand the QR code structure.

Renderers only read Code.size, Code.stride, Code.bitmap and Code.is_black.

Functions:
    render_image: Black and white Pillow image
    render_png: Black and white PNG bytes
    render_svg: Black and white SVG bytes
    render_ascii: Terminal rendering with ANSI colors
    render_colored_png_from_plan: Colored PNG with role analysis
    render_colored_svg_from_plan: Colored SVG with role analysis
"""

import base64
from io import BytesIO
from typing import Any, Dict, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .code import Code
from .functional_areas import Role
from .plan import Plan

# Color palette for QR code role visualization
PALETTE = {
    'background': (255, 255, 255),    # White background
    'separator': (230, 230, 230),     # Light gray - light modules of position boxes
    Role.POSITION: (128, 0, 128),     # Purple - Finder patterns (3 corners)
    Role.TIMING: (255, 165, 0),       # Orange - Timing patterns (row/col 6)
    Role.ALIGNMENT: (0, 128, 128),    # Teal - Alignment patterns
    Role.FORMAT: (255, 0, 0),         # Red - Format information bits
    Role.VERSION: (180, 0, 0),        # Dark red - Version information (v>=7)
    Role.UNUSED: (90, 90, 90),        # Gray - The fixed dark module
    Role.DATA: (35, 35, 35),          # Dark gray - Data payload
    Role.CHECK: (20, 90, 160),        # Blue - Error correction codes
    Role.EXTRA: (0, 160, 60),         # Green - Remainder bits
}

# ANSI escapes: black or white background, then reset
ANSI_BLACK = "\033[30;40m"
ANSI_WHITE = "\033[30;47m"
ANSI_RESET = "\033[0m"


def render_image(code: Code, scale: int = 8, border: int = 4) -> Image.Image:
    """
    Render the code as a grayscale image.

    Args:
        code (Code): encoded symbol
        scale (int): pixels per module
        border (int): quiet zone size in modules (recommended: 4+)

    Returns:
        Image.Image: mode "L" image, (size + 2 * border) * scale pixels wide
    """
    modules = code.to_array()
    gray = np.where(modules == 1, 0, 255).astype(np.uint8)
    gray = np.pad(gray, border, mode='constant', constant_values=255)
    gray = np.kron(gray, np.ones((scale, scale), dtype=np.uint8))
    return Image.fromarray(gray)


def render_png(code: Code, scale: int = 8, border: int = 4) -> bytes:
    buf = BytesIO()
    render_image(code, scale=scale, border=border).save(buf, format='PNG')
    return buf.getvalue()


def render_svg(code: Code, scale: int = 10, border: int = 4,
               dark: str = "#000000", light: str = "#ffffff") -> bytes:
    """
    Render the code as an SVG with one rect per dark module.

    Example:
        >>> svg_bytes = render_svg(encode("HELLO WORLD"))
        >>> with open('qr.svg', 'wb') as f:
        ...     f.write(svg_bytes)
    """
    size_mod = code.size + 2 * border
    px = size_mod * scale
    out = []
    out.append('<?xml version="1.0" encoding="UTF-8"?>')
    out.append(f'<svg xmlns="http://www.w3.org/2000/svg" width="{px}" height="{px}" viewBox="0 0 {px} {px}">')
    out.append(f'<rect width="{px}" height="{px}" fill="{light}"/>')
    for y in range(code.size):
        for x in range(code.size):
            if code.is_black(x, y):
                out.append(f'<rect x="{(x + border) * scale}" y="{(y + border) * scale}" '
                           f'width="{scale}" height="{scale}" fill="{dark}"/>')
    out.append('</svg>')
    return "\n".join(out).encode("utf-8")


def render_ascii(code: Code, border: int = 2) -> str:
    """
    Render the code for an ANSI terminal, two characters per module.

    Every line starts and ends with a reset so the colors do not bleed into
    the rest of the terminal.
    """
    width = code.size + 2 * border
    blank = ANSI_WHITE + "  " * width + ANSI_RESET + "\n"
    lines = [ANSI_RESET]
    lines.extend(blank for _ in range(border))
    for y in range(code.size):
        row = [ANSI_WHITE + "  " * border]
        for x in range(code.size):
            row.append((ANSI_BLACK if code.is_black(x, y) else ANSI_WHITE) + "  ")
        row.append(ANSI_WHITE + "  " * border + ANSI_RESET + "\n")
        lines.append("".join(row))
    lines.extend(blank for _ in range(border))
    return "".join(lines)


def _check_plan(code: Code, plan: Plan) -> None:
    if code.size != plan.size:
        raise ValueError(f'Code of size {code.size} does not match plan of size {plan.size}')


def render_colored_png_from_plan(
    code: Code,
    plan: Plan,
    border: int = 4,
    scale: int = 6
) -> Tuple[str, Dict[str, Any]]:
    """
    Render the code as a colored PNG, one color per module role.

    Dark modules are painted with the color of their role; light modules of
    the position boxes (the white rings and separators) are painted light gray.

    Args:
        code (Code): encoded symbol
        plan (Plan): the plan the symbol was encoded with
        border (int): quiet zone size in modules
        scale (int): pixel size per module

    Returns:
        Tuple[str, Dict[str, Any]]: (base64_png, metrics_dict)
            - base64_png: Base64-encoded PNG image
            - metrics_dict: size, module counts per role, dark modules, border

    Example:
        >>> code = encode("HELLO WORLD", 'M')
        >>> b64, metrics = render_colored_png_from_plan(code, get_plan(code.version, code.level))
        >>> print(f"Generated {metrics['size']}x{metrics['size']} QR code")
    """
    _check_plan(code, plan)
    size = code.size

    img_px = (size + 2 * border) * scale
    img = Image.new('RGB', (img_px, img_px), PALETTE['background'])
    draw = ImageDraw.Draw(img)

    dark_modules = 0
    for r, row in enumerate(plan.pixels):
        for c, pix in enumerate(row):
            is_dark = code.is_black(c, r)
            x0 = (c + border) * scale
            y0 = (r + border) * scale
            x1 = x0 + scale - 1
            y1 = y0 + scale - 1

            if not is_dark:
                if pix.role == Role.POSITION:
                    draw.rectangle([x0, y0, x1, y1], fill=PALETTE['separator'])
                continue

            dark_modules += 1
            draw.rectangle([x0, y0, x1, y1], fill=PALETTE[pix.role])

    buf = BytesIO()
    img.save(buf, format='PNG')
    b64 = base64.b64encode(buf.getvalue()).decode('ascii')

    counts = plan.role_counts()
    functional = sum(n for role, n in counts.items()
                     if role not in (Role.DATA, Role.CHECK, Role.EXTRA))
    return b64, {
        'size': size,
        'modules': size * size,
        'dark_modules': dark_modules,
        'functional_modules': functional,
        'data_modules': counts.get(Role.DATA, 0),
        'check_modules': counts.get(Role.CHECK, 0),
        'extra_modules': counts.get(Role.EXTRA, 0),
        'border': border
    }


def render_colored_svg_from_plan(
    code: Code,
    plan: Plan,
    border: int = 4,
    scale: int = 10
) -> bytes:
    """
    Render the code as a colored SVG, same palette as the PNG variant.

    Returns:
        bytes: UTF-8 encoded SVG content
    """
    _check_plan(code, plan)
    size_mod = code.size + 2 * border
    px = size_mod * scale
    out = []
    out.append('<?xml version="1.0" encoding="UTF-8"?>')
    out.append(f'<svg xmlns="http://www.w3.org/2000/svg" width="{px}" height="{px}" viewBox="0 0 {px} {px}">')
    out.append(f'<rect width="{px}" height="{px}" fill="rgb{PALETTE["background"]}"/>')

    for r, row in enumerate(plan.pixels):
        for c, pix in enumerate(row):
            if code.is_black(c, r):
                fill = PALETTE[pix.role]
            elif pix.role == Role.POSITION:
                fill = PALETTE['separator']
            else:
                continue
            x = (c + border) * scale
            y = (r + border) * scale
            out.append(f'<rect x="{x}" y="{y}" width="{scale}" height="{scale}" fill="rgb{fill}"/>')

    out.append('</svg>')
    return "\n".join(out).encode("utf-8")
