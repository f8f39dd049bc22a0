# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Color math: RGB ↔ HSL, WCAG luminance and contrast, alpha compositing.

Colors are plain tuples:
- ``(r, g, b)`` with 8-bit channels, always treated as opaque
- ``(r, g, b, a)`` with an 8-bit alpha channel

HSL is a ``(h, s, l)`` float tuple:
- h: Hue in degrees [0, 360)
- s: Saturation [0, 1]
- l: Lightness [0, 1]

References:
- Relative luminance: http://www.w3.org/TR/2008/REC-WCAG20-20081211/#relativeluminancedef
- Contrast ratio: http://www.w3.org/TR/2008/REC-WCAG20-20081211/#contrast-ratiodef
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray


RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]
HSL = tuple[float, float, float]

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)

_MIN_ALPHA_SEARCH_MAX_ITERATIONS = 10
_MIN_ALPHA_SEARCH_PRECISION = 10


# =============================================================================
# Channel helpers
# =============================================================================


def alpha_of(color: Sequence[int]) -> int:
    """Alpha channel of a color tuple (255 for 3-tuples)."""
    return int(color[3]) if len(color) > 3 else 255


def set_alpha(color: Sequence[int], alpha: int) -> RGBA:
    """Return ``color`` with its alpha channel replaced by ``alpha``."""
    if not 0 <= alpha <= 255:
        raise ValueError(f"Alpha must be 0-255, got {alpha}")
    return (int(color[0]), int(color[1]), int(color[2]), int(alpha))


def to_hex(color: Sequence[int], include_alpha: bool = False) -> str:
    """
    Format a color as a hex string.

    Returns ``#RRGGBB``, or ``#AARRGGBB`` when ``include_alpha`` is set.
    """
    r, g, b = int(color[0]), int(color[1]), int(color[2])
    if include_alpha:
        return f"#{alpha_of(color):02X}{r:02X}{g:02X}{b:02X}"
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_color: str) -> RGB:
    """Parse ``#RRGGBB`` (or ``RRGGBB``) into an RGB tuple."""
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        raise ValueError(f"Expected 6 hex digits, got {hex_color!r}")
    return (
        int(hex_color[0:2], 16),
        int(hex_color[2:4], 16),
        int(hex_color[4:6], 16),
    )


# =============================================================================
# RGB ↔ HSL
# =============================================================================


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """
    Convert 8-bit RGB components to HSL.

    Monochromatic colors (max == min) have hue and saturation of 0.
    """
    rf = r / 255.0
    gf = g / 255.0
    bf = b / 255.0

    max_c = max(rf, gf, bf)
    min_c = min(rf, gf, bf)
    delta = max_c - min_c
    lightness = (max_c + min_c) / 2.0

    if max_c == min_c:
        return 0.0, 0.0, lightness

    if max_c == rf:
        hue = ((gf - bf) / delta) % 6.0
    elif max_c == gf:
        hue = (bf - rf) / delta + 2.0
    else:
        hue = (rf - gf) / delta + 4.0

    # Rounding can push fully saturated colors just past 1
    saturation = min(1.0, delta / (1.0 - abs(2.0 * lightness - 1.0)))
    return (hue * 60.0) % 360.0, saturation, lightness


def color_to_hsl(color: Sequence[int]) -> HSL:
    """Convert an RGB(A) tuple to HSL. Alpha is ignored."""
    return rgb_to_hsl(int(color[0]), int(color[1]), int(color[2]))


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """
    Convert HSL to an 8-bit RGB tuple.

    Channels are rounded to the nearest integer and pinned to [0, 255].
    """
    c = (1.0 - abs(2.0 * l - 1.0)) * s
    m = l - 0.5 * c
    x = c * (1.0 - abs((h / 60.0) % 2.0 - 1.0))

    segment = int(h) // 60
    if segment == 0:
        rgb = (c + m, x + m, m)
    elif segment == 1:
        rgb = (x + m, c + m, m)
    elif segment == 2:
        rgb = (m, c + m, x + m)
    elif segment == 3:
        rgb = (m, x + m, c + m)
    elif segment == 4:
        rgb = (x + m, m, c + m)
    elif segment in (5, 6):
        rgb = (c + m, m, x + m)
    else:
        rgb = (0.0, 0.0, 0.0)

    r, g, b = (max(0, min(255, round(255 * v))) for v in rgb)
    return r, g, b


def rgb_to_hsl_batch(pixels: NDArray[np.uint8]) -> NDArray[np.float64]:
    """
    Vectorized RGB → HSL for arrays of shape (..., 3).

    Same formula as :func:`rgb_to_hsl`.
    """
    rgb = np.asarray(pixels, dtype=np.float64) / 255.0
    rf, gf, bf = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    max_c = rgb.max(axis=-1)
    min_c = rgb.min(axis=-1)
    delta = max_c - min_c
    lightness = (max_c + min_c) / 2.0

    chromatic = delta > 0
    safe_delta = np.where(chromatic, delta, 1.0)

    hue = np.where(
        max_c == rf,
        ((gf - bf) / safe_delta) % 6.0,
        np.where(
            max_c == gf,
            (bf - rf) / safe_delta + 2.0,
            (rf - gf) / safe_delta + 4.0,
        ),
    )
    hue = np.where(chromatic, (hue * 60.0) % 360.0, 0.0)

    denom = 1.0 - np.abs(2.0 * lightness - 1.0)
    saturation = np.where(chromatic, delta / np.where(chromatic, denom, 1.0), 0.0)
    saturation = np.minimum(saturation, 1.0)

    return np.stack([hue, saturation, lightness], axis=-1)


# =============================================================================
# Luminance / Contrast
# =============================================================================


def _linearize(channel: int) -> float:
    value = channel / 255.0
    if value < 0.03928:
        return value / 12.92
    return ((value + 0.055) / 1.055) ** 2.4


def luminance(color: Sequence[int]) -> float:
    """Relative luminance of a color, 0.0 for black up to 1.0 for white."""
    return (
        0.2126 * _linearize(int(color[0]))
        + 0.7152 * _linearize(int(color[1]))
        + 0.0722 * _linearize(int(color[2]))
    )


def composite_colors(foreground: Sequence[int], background: Sequence[int]) -> RGBA:
    """Composite ``foreground`` over ``background`` with the "over" operator."""
    fg_a = alpha_of(foreground)
    bg_a = alpha_of(background)
    a = 0xFF - (0xFF - bg_a) * (0xFF - fg_a) // 0xFF

    def component(fg_c: int, bg_c: int) -> int:
        if a == 0:
            return 0
        return (0xFF * fg_c * fg_a + bg_c * bg_a * (0xFF - fg_a)) // (a * 0xFF)

    return (
        component(int(foreground[0]), int(background[0])),
        component(int(foreground[1]), int(background[1])),
        component(int(foreground[2]), int(background[2])),
        a,
    )


def contrast(foreground: Sequence[int], background: Sequence[int]) -> float:
    """
    WCAG contrast ratio between two colors, from 1.0 up to 21.0.

    ``background`` must be opaque. A translucent ``foreground`` is composited
    over the background first.
    """
    if alpha_of(background) != 255:
        raise ValueError("Background can not be translucent")
    if alpha_of(foreground) < 255:
        foreground = composite_colors(foreground, background)

    l1 = luminance(foreground) + 0.05
    l2 = luminance(background) + 0.05
    return max(l1, l2) / min(l1, l2)


def minimum_alpha(
    foreground: Sequence[int],
    background: Sequence[int],
    min_contrast_ratio: float,
) -> Optional[int]:
    """
    Smallest alpha for ``foreground`` that reaches ``min_contrast_ratio``.

    Binary search over [0, 255], stopping after 10 iterations or once the
    window is 10 wide. The upper bound of the window (known to pass) is
    returned.

    Args:
        foreground: Text color; its own alpha is ignored.
        background: Opaque background color.
        min_contrast_ratio: Required WCAG contrast ratio.

    Returns:
        Alpha in [0, 255], or None if even an opaque foreground falls short.
    """
    if alpha_of(background) != 255:
        raise ValueError("Background can not be translucent")

    if contrast(set_alpha(foreground, 255), background) < min_contrast_ratio:
        return None

    iterations = 0
    min_alpha, max_alpha = 0, 255
    while (
        iterations <= _MIN_ALPHA_SEARCH_MAX_ITERATIONS
        and max_alpha - min_alpha > _MIN_ALPHA_SEARCH_PRECISION
    ):
        test_alpha = (min_alpha + max_alpha) // 2
        ratio = contrast(set_alpha(foreground, test_alpha), background)
        if ratio < min_contrast_ratio:
            min_alpha = test_alpha
        else:
            max_alpha = test_alpha
        iterations += 1

    return max_alpha
