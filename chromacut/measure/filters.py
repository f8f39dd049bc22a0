# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Color eligibility filters.

A filter decides whether a color may appear in a palette. Filters are
combined as a conjunction: a color is allowed only if every filter allows
it, and an empty filter set allows everything.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from chromacut.measure.colorspace import HSL, RGB


@runtime_checkable
class Filter(Protocol):
    """Hook to control which colors are valid within a resulting palette."""

    def is_allowed(self, rgb: RGB, hsl: HSL) -> bool:
        """Return True if the color is allowed, False if not."""
        ...


class DefaultFilter:
    """
    Rejects colors that make poor representative swatches.

    - near black: lightness <= 0.05
    - near white: lightness >= 0.95
    - near the red side of the I line: hue in [10, 37] with saturation <= 0.82
    """

    BLACK_MAX_LIGHTNESS = 0.05
    WHITE_MIN_LIGHTNESS = 0.95

    RED_I_LINE_MIN_HUE = 10.0
    RED_I_LINE_MAX_HUE = 37.0
    RED_I_LINE_MAX_SATURATION = 0.82

    def is_allowed(self, rgb: RGB, hsl: HSL) -> bool:
        return not (self.is_white(hsl) or self.is_black(hsl) or self.is_near_red_i_line(hsl))

    def is_black(self, hsl: HSL) -> bool:
        return hsl[2] <= self.BLACK_MAX_LIGHTNESS

    def is_white(self, hsl: HSL) -> bool:
        return hsl[2] >= self.WHITE_MIN_LIGHTNESS

    def is_near_red_i_line(self, hsl: HSL) -> bool:
        return (
            self.RED_I_LINE_MIN_HUE <= hsl[0] <= self.RED_I_LINE_MAX_HUE
            and hsl[1] <= self.RED_I_LINE_MAX_SATURATION
        )

    def __repr__(self) -> str:
        return "DefaultFilter()"


DEFAULT_FILTER = DefaultFilter()


def is_allowed(filters: Iterable[Filter], rgb: RGB, hsl: HSL) -> bool:
    """True if every filter in ``filters`` allows the color."""
    return all(f.is_allowed(rgb, hsl) for f in filters)
