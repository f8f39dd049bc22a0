# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Median-cut color quantization.

Reduces an image's pixels to at most ``max_colors`` representative swatches:

1. Quantize every pixel to ``word_width`` bits per channel and build a
   histogram over the quantized code space.
2. Drop codes rejected by the filters; collect the remaining codes into a
   "distinct colors" array in ascending code order.
3. If there are few enough distinct colors, emit them directly.
4. Otherwise repeatedly split the box with the largest color-space volume
   at the population median of its longest channel.
5. Emit each box's population-weighted average color, filtered again.

Boxes do not own their colors: each :class:`Vbox` is an inclusive index
range into the quantizer's shared distinct-colors array, which splitting
reorders in place. Sibling boxes always hold disjoint ranges.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from chromacut.measure.colorspace import RGB, rgb_to_hsl_batch
from chromacut.measure.filters import Filter, is_allowed
from chromacut.schema.swatch import Swatch

logger = logging.getLogger(__name__)

COMPONENT_RED = -3
COMPONENT_GREEN = -2
COMPONENT_BLUE = -1

DEFAULT_WORD_WIDTH = 5


# =============================================================================
# Word width helpers
# =============================================================================


def modify_word_width(value, current_width: int, target_width: int):
    """
    Change the bit width of a channel value (int or integer array).

    Widening shifts left; narrowing shifts right and keeps the most
    significant bits. The result is masked to ``target_width`` bits.
    """
    if target_width > current_width:
        new_value = value << (target_width - current_width)
    else:
        new_value = value >> (current_width - target_width)
    return new_value & ((1 << target_width) - 1)


def quantize_from_rgb888(
    pixels: NDArray[np.int64], word_width: int = DEFAULT_WORD_WIDTH
) -> NDArray[np.int64]:
    """Quantize packed ``0x(AA)RRGGBB`` pixels to packed ``word_width``-bit codes."""
    r = modify_word_width((pixels >> 16) & 0xFF, 8, word_width)
    g = modify_word_width((pixels >> 8) & 0xFF, 8, word_width)
    b = modify_word_width(pixels & 0xFF, 8, word_width)
    return (r << (2 * word_width)) | (g << word_width) | b


class ColorCutQuantizer:
    """
    Quantizes an image's pixels into a bounded list of swatches.

    Args:
        pixels: Flat, row-major sequence of packed ``0x(AA)RRGGBB`` pixels.
            A list, or a writable numpy integer array whose dtype can hold
            every code, is overwritten in place with the quantized codes.
        max_colors: Maximum number of swatches to produce.
        filters: Filters a color must pass to be included.
        word_width: Bits kept per channel (1-8).

    Example:
        >>> q = ColorCutQuantizer(np.full(100, 0xFF3366CC, dtype=np.uint32), 16)
        >>> q.quantized_colors
        [Swatch(rgb=#3060C8, population=100)]
    """

    def __init__(
        self,
        pixels,
        max_colors: int,
        filters: Optional[Sequence[Filter]] = None,
        word_width: int = DEFAULT_WORD_WIDTH,
    ) -> None:
        if max_colors < 1:
            raise ValueError(f"max_colors must be >= 1, got {max_colors}")
        if not 1 <= word_width <= 8:
            raise ValueError(f"word_width must be 1-8, got {word_width}")

        self.word_width = word_width
        self.word_mask = (1 << word_width) - 1
        self.filters: tuple[Filter, ...] = tuple(filters) if filters else ()

        codes = self._quantize_pixels(pixels)

        hist = np.bincount(codes, minlength=1 << (3 * word_width)).astype(np.int64)
        self.histogram: NDArray[np.int64] = hist

        # Zero out filtered colors before counting distinct colors
        present = np.flatnonzero(hist)
        if self.filters and len(present) > 0:
            rgb = self.approximate_to_rgb888(present)
            hsl = rgb_to_hsl_batch(rgb)
            for code, color, color_hsl in zip(present, rgb, hsl):
                if not is_allowed(self.filters, tuple(int(c) for c in color), tuple(color_hsl)):
                    hist[code] = 0

        self.colors: NDArray[np.int64] = np.flatnonzero(hist).astype(np.int64)
        distinct = len(self.colors)
        logger.debug(
            "Histogram built: %d pixels, %d distinct colors after filtering",
            len(codes),
            distinct,
        )

        if distinct <= max_colors:
            rgb = self.approximate_to_rgb888(self.colors)
            self.quantized_colors: list[Swatch] = [
                Swatch(tuple(color), int(hist[code])) for code, color in zip(self.colors, rgb)
            ]
        else:
            self.quantized_colors = self._quantize(max_colors)

    def _quantize_pixels(self, pixels) -> NDArray[np.int64]:
        """Quantize the pixel buffer, writing codes back into it where possible."""
        if isinstance(pixels, np.ndarray):
            if pixels.ndim != 1:
                raise ValueError(f"Expected flat pixel array, got shape {pixels.shape}")
            if not np.issubdtype(pixels.dtype, np.integer):
                raise ValueError(f"Expected integer pixel array, got {pixels.dtype}")

        packed = np.asarray(pixels, dtype=np.int64).reshape(-1)
        codes = quantize_from_rgb888(packed, self.word_width)

        if isinstance(pixels, np.ndarray):
            # Only write back when every code fits the caller's dtype
            max_code = (1 << (3 * self.word_width)) - 1
            if pixels.flags.writeable and np.iinfo(pixels.dtype).max >= max_code:
                pixels[...] = codes
        elif isinstance(pixels, list):
            pixels[:] = codes.tolist()
        return codes

    # -------------------------------------------------------------------------
    # Quantized code helpers
    # -------------------------------------------------------------------------

    def quantized_red(self, color):
        return (color >> (2 * self.word_width)) & self.word_mask

    def quantized_green(self, color):
        return (color >> self.word_width) & self.word_mask

    def quantized_blue(self, color):
        return color & self.word_mask

    def approximate_to_rgb888(self, codes: NDArray[np.int64]) -> NDArray[np.int64]:
        """Expand quantized codes of shape (N,) back to 8-bit RGB of shape (N, 3)."""
        codes = np.asarray(codes, dtype=np.int64)
        return np.stack(
            [
                modify_word_width(self.quantized_red(codes), self.word_width, 8),
                modify_word_width(self.quantized_green(codes), self.word_width, 8),
                modify_word_width(self.quantized_blue(codes), self.word_width, 8),
            ],
            axis=-1,
        )

    def modify_significant_octet(self, dimension: int, lower: int, upper: int) -> None:
        """
        Repack colors[lower:upper+1] so ``dimension`` is the most significant
        channel. Swapping is its own inverse, so calling twice restores RGB.
        """
        if dimension == COMPONENT_RED:
            return

        segment = self.colors[lower:upper + 1]
        r = self.quantized_red(segment)
        g = self.quantized_green(segment)
        b = self.quantized_blue(segment)
        w = self.word_width
        if dimension == COMPONENT_GREEN:
            segment[...] = (g << (2 * w)) | (r << w) | b
        elif dimension == COMPONENT_BLUE:
            segment[...] = (b << (2 * w)) | (g << w) | r

    # -------------------------------------------------------------------------
    # Median cut
    # -------------------------------------------------------------------------

    def _quantize(self, max_colors: int) -> list[Swatch]:
        # Max-heap on volume; the counter keeps boxes out of comparisons
        counter = itertools.count()
        heap: list[tuple[int, int, Vbox]] = []

        def offer(box: Vbox) -> None:
            heapq.heappush(heap, (-box.volume, next(counter), box))

        offer(Vbox(self, 0, len(self.colors) - 1))
        self._split_boxes(heap, offer, max_colors)
        logger.debug("Median cut produced %d boxes (max %d)", len(heap), max_colors)
        return self._generate_average_colors(heap)

    @staticmethod
    def _split_boxes(heap, offer, max_size: int) -> None:
        """Split the largest box until ``max_size`` boxes exist or none can split."""
        while len(heap) < max_size:
            _, _, vbox = heapq.heappop(heap)
            if not vbox.can_split():
                # Largest box is a single color, so every box is
                offer(vbox)
                return
            offer(vbox.split_box())
            offer(vbox)

    def _generate_average_colors(self, heap) -> list[Swatch]:
        swatches = []
        while heap:
            _, _, vbox = heapq.heappop(heap)
            swatch = vbox.average_color()
            # Averaging can produce a color the filters reject
            if is_allowed(self.filters, swatch.rgb, swatch.hsl):
                swatches.append(swatch)
            else:
                logger.debug("Dropping filtered average color %s", swatch)
        return swatches


class Vbox:
    """
    A tightly fitting box around a range of the quantizer's distinct colors.

    ``lower_index`` and ``upper_index`` are inclusive.
    """

    def __init__(self, quantizer: ColorCutQuantizer, lower_index: int, upper_index: int) -> None:
        self.quantizer = quantizer
        self.lower_index = lower_index
        self.upper_index = upper_index
        self.fit_box()

    @property
    def color_count(self) -> int:
        return 1 + self.upper_index - self.lower_index

    @property
    def volume(self) -> int:
        return (
            (self.max_red - self.min_red + 1)
            * (self.max_green - self.min_green + 1)
            * (self.max_blue - self.min_blue + 1)
        )

    def can_split(self) -> bool:
        return self.color_count > 1

    def _segment(self) -> NDArray[np.int64]:
        return self.quantizer.colors[self.lower_index:self.upper_index + 1]

    def fit_box(self) -> None:
        """Recompute channel bounds and population to tightly fit the range."""
        q = self.quantizer
        colors = self._segment()
        r = q.quantized_red(colors)
        g = q.quantized_green(colors)
        b = q.quantized_blue(colors)

        self.min_red, self.max_red = int(r.min()), int(r.max())
        self.min_green, self.max_green = int(g.min()), int(g.max())
        self.min_blue, self.max_blue = int(b.min()), int(b.max())
        self.population = int(q.histogram[colors].sum())

    def split_box(self) -> Vbox:
        """
        Split this box at the population median of its longest dimension.

        This box keeps the lower part; the upper part is returned as a new box.
        """
        if not self.can_split():
            raise RuntimeError("Can not split a box with only 1 color")

        split_point = self.find_split_point()
        new_box = Vbox(self.quantizer, split_point + 1, self.upper_index)

        self.upper_index = split_point
        self.fit_box()
        return new_box

    def longest_color_dimension(self) -> int:
        """Channel with the widest span. Ties prefer red, then green."""
        red_length = self.max_red - self.min_red
        green_length = self.max_green - self.min_green
        blue_length = self.max_blue - self.min_blue

        if red_length >= green_length and red_length >= blue_length:
            return COMPONENT_RED
        elif green_length >= red_length and green_length >= blue_length:
            return COMPONENT_GREEN
        else:
            return COMPONENT_BLUE

    def find_split_point(self) -> int:
        """
        Index in the colors array to split at.

        Sorts the box's colors along the longest dimension, then walks them
        until the cumulative population reaches half of the box's population.
        """
        q = self.quantizer
        dimension = self.longest_color_dimension()

        # Sort by the chosen channel by making it the most significant bits
        q.modify_significant_octet(dimension, self.lower_index, self.upper_index)
        self._segment().sort()
        q.modify_significant_octet(dimension, self.lower_index, self.upper_index)

        mid_point = self.population // 2
        cumulative = np.cumsum(q.histogram[self._segment()])
        offset = int(np.searchsorted(cumulative, mid_point, side="left"))

        # Never split on the upper index, which would leave an empty box
        return min(self.lower_index + offset, self.upper_index - 1)

    def average_color(self) -> Swatch:
        """Population-weighted average color of the box."""
        q = self.quantizer
        colors = self._segment()
        populations = q.histogram[colors]
        total = int(populations.sum())

        red_mean = round(int((populations * q.quantized_red(colors)).sum()) / total)
        green_mean = round(int((populations * q.quantized_green(colors)).sum()) / total)
        blue_mean = round(int((populations * q.quantized_blue(colors)).sum()) / total)

        rgb: RGB = (
            modify_word_width(red_mean, q.word_width, 8),
            modify_word_width(green_mean, q.word_width, 8),
            modify_word_width(blue_mean, q.word_width, 8),
        )
        return Swatch(rgb, total)

    def __repr__(self) -> str:
        return (
            f"Vbox(lower={self.lower_index}, upper={self.upper_index}, "
            f"population={self.population}, volume={self.volume})"
        )
