# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""Tests for median-cut quantization."""

import numpy as np
import pytest

from chromacut.measure.filters import DEFAULT_FILTER
from chromacut.measure.quantizer import (
    COMPONENT_BLUE,
    COMPONENT_GREEN,
    COMPONENT_RED,
    ColorCutQuantizer,
    Vbox,
    modify_word_width,
    quantize_from_rgb888,
)


def _pack(rgb):
    r, g, b = rgb
    return 0xFF000000 | (r << 16) | (g << 8) | b


def _pixels(*colors_and_counts):
    """Build a flat uint32 pixel buffer from (rgb, count) pairs."""
    out = []
    for rgb, count in colors_and_counts:
        out.extend([_pack(rgb)] * count)
    return np.array(out, dtype=np.uint32)


def _random_pixels(n=4000, seed=0):
    rng = np.random.RandomState(seed)
    rgb = rng.randint(0, 256, size=(n, 3)).astype(np.uint32)
    return (0xFF << 24) | (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]


class TestWordWidth:

    def test_narrow_keeps_msb(self):
        assert modify_word_width(255, 8, 5) == 31
        assert modify_word_width(0b10101111, 8, 5) == 0b10101

    def test_widen_shifts_left(self):
        assert modify_word_width(31, 5, 8) == 248
        assert modify_word_width(1, 5, 8) == 8

    def test_quantize_packed(self):
        codes = quantize_from_rgb888(np.array([0xFFFF0000, 0x000000FF], dtype=np.int64))
        assert codes[0] == 31 << 10
        assert codes[1] == 31

    def test_quantize_ignores_alpha(self):
        a = quantize_from_rgb888(np.array([0x00336699], dtype=np.int64))
        b = quantize_from_rgb888(np.array([0xFF336699], dtype=np.int64))
        assert a[0] == b[0]


class TestHistogram:

    def test_population_conserved_without_filters(self):
        pixels = _random_pixels()
        q = ColorCutQuantizer(pixels.copy(), 16)
        assert q.histogram.sum() == len(pixels)

    def test_population_after_filtering(self):
        pixels = _pixels(((255, 255, 255), 30), ((0, 0, 0), 20), ((0, 0, 255), 50))
        q = ColorCutQuantizer(pixels, 16, [DEFAULT_FILTER])
        assert q.histogram.sum() == 50

    def test_pixels_overwritten_with_codes(self):
        pixels = _pixels(((255, 0, 0), 3))
        ColorCutQuantizer(pixels, 16)
        assert list(pixels) == [31 << 10] * 3

    def test_narrow_dtype_written_when_codes_fit(self):
        # 15-bit codes fit in int16
        pixels = np.array([0x7FFF], dtype=np.int16)
        ColorCutQuantizer(pixels, 16)
        assert pixels[0] == (15 << 5) | 31

    def test_narrow_dtype_left_alone_when_codes_overflow(self):
        # 18-bit codes do not fit in int16
        pixels = np.array([0x7FFF, 0x1234], dtype=np.int16)
        q = ColorCutQuantizer(pixels, 16, word_width=6)
        assert list(pixels) == [0x7FFF, 0x1234]
        assert q.histogram.sum() == 2

    def test_wide_dtype_written_for_wide_codes(self):
        pixels = np.array([0xFFFFFFFF], dtype=np.uint32)
        ColorCutQuantizer(pixels, 16, word_width=8)
        assert pixels[0] == 0xFFFFFF

    def test_list_input_overwritten(self):
        pixels = [_pack((0, 0, 255))] * 4
        ColorCutQuantizer(pixels, 16)
        assert pixels == [31] * 4

    def test_distinct_colors_ascending(self):
        pixels = _random_pixels(500)
        q = ColorCutQuantizer(pixels, 1000)
        assert np.all(np.diff(q.colors) > 0)


class TestNoSplitPath:

    def test_two_colors(self):
        pixels = _pixels(((255, 0, 0), 100), ((0, 0, 255), 100))
        swatches = ColorCutQuantizer(pixels, 16, [DEFAULT_FILTER]).quantized_colors
        assert len(swatches) == 2
        # Ascending code order: blue (0, 0, 31) sorts before red (31, 0, 0)
        assert swatches[0].rgb == (0, 0, 248)
        assert swatches[1].rgb == (248, 0, 0)
        assert all(s.population == 100 for s in swatches)

    def test_count_equals_distinct_when_under_max(self):
        colors = [((i * 40, 100, 200 - i * 20), 5 + i) for i in range(6)]
        q = ColorCutQuantizer(_pixels(*colors), 16)
        assert len(q.quantized_colors) == len(q.colors) == 6

    def test_expanded_color_keeps_msb(self):
        q = ColorCutQuantizer(_pixels(((0x33, 0x66, 0xCC), 10)), 16)
        assert q.quantized_colors[0].rgb == (0x30, 0x60, 0xC8)


class TestDegenerateInputs:

    def test_empty_pixels(self):
        q = ColorCutQuantizer(np.array([], dtype=np.uint32), 16)
        assert q.quantized_colors == []

    def test_all_filtered(self):
        pixels = _pixels(((0, 0, 0), 10), ((255, 255, 255), 10))
        q = ColorCutQuantizer(pixels, 16, [DEFAULT_FILTER])
        assert q.quantized_colors == []

    def test_invalid_max_colors(self):
        with pytest.raises(ValueError):
            ColorCutQuantizer(_pixels(((1, 2, 3), 1)), 0)

    def test_invalid_word_width(self):
        with pytest.raises(ValueError):
            ColorCutQuantizer(_pixels(((1, 2, 3), 1)), 4, word_width=9)

    def test_rejects_2d_array(self):
        with pytest.raises(ValueError):
            ColorCutQuantizer(np.zeros((4, 4), dtype=np.uint32), 4)


class TestMedianCut:

    @pytest.mark.parametrize("max_colors", [1, 2, 5, 16, 64])
    def test_count_bounded(self, max_colors):
        q = ColorCutQuantizer(_random_pixels(), max_colors)
        assert len(q.quantized_colors) <= max_colors

    @pytest.mark.parametrize("max_colors", [1, 3, 16, 50])
    def test_population_conserved(self, max_colors):
        """Without filters, every pixel lands in exactly one swatch."""
        pixels = _random_pixels(seed=max_colors)
        q = ColorCutQuantizer(pixels.copy(), max_colors)
        assert sum(s.population for s in q.quantized_colors) == len(pixels)

    def test_reaches_max_colors(self):
        q = ColorCutQuantizer(_random_pixels(), 16)
        assert len(q.quantized_colors) == 16

    def test_colors_array_is_permutation(self):
        pixels = _random_pixels(2000, seed=9)
        before = np.flatnonzero(np.bincount(
            quantize_from_rgb888(pixels.astype(np.int64)), minlength=1 << 15
        ))
        q = ColorCutQuantizer(pixels, 8)
        np.testing.assert_array_equal(np.sort(q.colors), before)

    def test_deterministic(self):
        a = ColorCutQuantizer(_random_pixels(seed=4), 12).quantized_colors
        b = ColorCutQuantizer(_random_pixels(seed=4), 12).quantized_colors
        assert a == b

    def test_single_box_is_weighted_average(self):
        # Two reds; a single box averages them by population
        pixels = _pixels(((80, 0, 0), 30), ((160, 0, 0), 10))
        q = ColorCutQuantizer(pixels, 1)
        (swatch,) = q.quantized_colors
        assert swatch.population == 40
        # (10 * 30 + 20 * 10) / 40 = 12.5 -> 12 (round half to even) -> 96
        assert swatch.rgb == (96, 0, 0)

    def test_average_color_refiltered(self):
        # Pure blue and pure red average into a purple the filter rejects
        pixels = _pixels(((0, 0, 24), 10), ((24, 0, 0), 10))

        class _OnlyPure:
            def is_allowed(self, rgb, hsl):
                return rgb.count(0) == 2

        q = ColorCutQuantizer(pixels, 1, [_OnlyPure()])
        assert q.quantized_colors == []


class TestVbox:

    def _quantizer(self, *colors_and_counts):
        # max_colors large enough to skip splitting; boxes are built by hand
        return ColorCutQuantizer(_pixels(*colors_and_counts), 1 << 15)

    def test_fit_box_bounds(self):
        q = self._quantizer(((8, 16, 24), 1), ((80, 40, 200), 2))
        box = Vbox(q, 0, len(q.colors) - 1)
        assert (box.min_red, box.max_red) == (1, 10)
        assert (box.min_green, box.max_green) == (2, 5)
        assert (box.min_blue, box.max_blue) == (3, 25)
        assert box.population == 3
        assert box.volume == 10 * 4 * 23

    def test_longest_dimension(self):
        q = self._quantizer(((0, 0, 0), 1), ((0, 0, 240), 1))
        assert Vbox(q, 0, 1).longest_color_dimension() == COMPONENT_BLUE

        q = self._quantizer(((0, 0, 0), 1), ((0, 240, 0), 1))
        assert Vbox(q, 0, 1).longest_color_dimension() == COMPONENT_GREEN

    def test_longest_dimension_ties_prefer_red(self):
        q = self._quantizer(((0, 0, 0), 1), ((240, 240, 240), 1))
        assert Vbox(q, 0, 1).longest_color_dimension() == COMPONENT_RED

    def test_longest_dimension_green_beats_blue_on_tie(self):
        q = self._quantizer(((0, 0, 0), 1), ((0, 240, 240), 1))
        assert Vbox(q, 0, 1).longest_color_dimension() == COMPONENT_GREEN

    def test_split_single_color_raises(self):
        q = self._quantizer(((100, 100, 100), 5))
        box = Vbox(q, 0, 0)
        assert not box.can_split()
        with pytest.raises(RuntimeError):
            box.split_box()

    def test_split_produces_disjoint_ranges(self):
        colors = [((i * 8, 0, 0), 1) for i in range(10)]
        q = self._quantizer(*colors)
        box = Vbox(q, 0, len(q.colors) - 1)
        new_box = box.split_box()
        assert box.lower_index == 0
        assert box.upper_index + 1 == new_box.lower_index
        assert new_box.upper_index == 9
        assert box.population + new_box.population == 10

    def test_split_at_population_median(self):
        # Population 1, 1, 1, 1: midpoint 2 is reached at the second color
        colors = [((i * 64, 0, 0), 1) for i in range(4)]
        q = self._quantizer(*colors)
        box = Vbox(q, 0, 3)
        new_box = box.split_box()
        assert box.upper_index == 1
        assert new_box.lower_index == 2

    def test_split_never_leaves_empty_box(self):
        # Nearly all population in the last color
        q = self._quantizer(((0, 0, 0), 1), ((248, 0, 0), 100))
        box = Vbox(q, 0, 1)
        new_box = box.split_box()
        assert new_box.color_count == 1
        assert box.color_count == 1

    def test_split_sorts_by_longest_channel(self):
        # Blue has the widest span; ascending code order is by red first
        colors = [((80, 0, 200), 1), ((0, 0, 40), 1), ((40, 0, 120), 1), ((8, 0, 0), 1)]
        q = self._quantizer(*colors)
        box = Vbox(q, 0, 3)
        assert box.longest_color_dimension() == COMPONENT_BLUE
        box.split_box()
        blues = [int(q.quantized_blue(c)) for c in q.colors]
        assert blues == sorted(blues)

    def test_modify_significant_octet_roundtrip(self):
        q = ColorCutQuantizer(_random_pixels(300, seed=2), 1 << 15)
        original = q.colors.copy()
        for dim in (COMPONENT_RED, COMPONENT_GREEN, COMPONENT_BLUE):
            q.modify_significant_octet(dim, 0, len(q.colors) - 1)
            q.modify_significant_octet(dim, 0, len(q.colors) - 1)
            np.testing.assert_array_equal(q.colors, original)
