# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Swatch: a representative color and the number of pixels it stands for.

Swatches are immutable. Derived values (HSL, text colors) are computed on
first access and cached on the instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import NamedTuple, Sequence

from chromacut.measure.colorspace import (
    BLACK,
    HSL,
    RGB,
    RGBA,
    WHITE,
    color_to_hsl,
    hsl_to_rgb,
    minimum_alpha,
    set_alpha,
    to_hex,
)

# WCAG minimum contrast ratios for text drawn over a swatch
MIN_CONTRAST_TITLE_TEXT = 3.0
MIN_CONTRAST_BODY_TEXT = 4.5


class TextColors(NamedTuple):
    """Title and body text colors (RGBA) for use over a swatch."""

    title: RGBA
    body: RGBA


def generate_text_colors(background: RGB) -> TextColors:
    """
    Pick translucent white or black text colors with sufficient contrast.

    White is tried first since most swatches are dark. If neither white nor
    black works for both title and body, the colors may be mismatched
    (e.g. white title, black body).
    """
    light_body = minimum_alpha(WHITE, background, MIN_CONTRAST_BODY_TEXT)
    light_title = minimum_alpha(WHITE, background, MIN_CONTRAST_TITLE_TEXT)
    if light_body is not None and light_title is not None:
        return TextColors(
            title=set_alpha(WHITE, light_title),
            body=set_alpha(WHITE, light_body),
        )

    dark_body = minimum_alpha(BLACK, background, MIN_CONTRAST_BODY_TEXT)
    dark_title = minimum_alpha(BLACK, background, MIN_CONTRAST_TITLE_TEXT)
    if dark_body is not None and dark_title is not None:
        return TextColors(
            title=set_alpha(BLACK, dark_title),
            body=set_alpha(BLACK, dark_body),
        )

    # An opaque background always reaches 4.5:1 against white or black
    body = set_alpha(WHITE, light_body) if light_body is not None else set_alpha(BLACK, dark_body)
    title = set_alpha(WHITE, light_title) if light_title is not None else set_alpha(BLACK, dark_title)
    return TextColors(title=title, body=body)


@dataclass(frozen=True)
class Swatch:
    """
    A color swatch generated from an image's palette.

    Attributes:
        rgb: Opaque 8-bit color (r, g, b)
        population: Number of pixels represented by this swatch
    """

    rgb: RGB
    population: int

    def __post_init__(self) -> None:
        """Normalize channels to plain ints and validate ranges."""
        if len(self.rgb) != 3:
            raise ValueError(f"Expected (r, g, b), got {self.rgb!r}")
        rgb = tuple(int(c) for c in self.rgb)
        if any(not 0 <= c <= 255 for c in rgb):
            raise ValueError(f"RGB channels must be 0-255, got {rgb}")
        if self.population < 0:
            raise ValueError(f"Population must be >= 0, got {self.population}")
        object.__setattr__(self, "rgb", rgb)
        object.__setattr__(self, "population", int(self.population))

    @classmethod
    def from_hsl(cls, hsl: Sequence[float], population: int) -> Swatch:
        """Create a swatch from (h, s, l) values."""
        return cls(hsl_to_rgb(hsl[0], hsl[1], hsl[2]), population)

    @cached_property
    def hsl(self) -> HSL:
        """(hue [0, 360), saturation [0, 1], lightness [0, 1])."""
        return color_to_hsl(self.rgb)

    @property
    def hex(self) -> str:
        """Hex string like "#3941C8"."""
        return to_hex(self.rgb)

    @cached_property
    def text_colors(self) -> TextColors:
        """Title/body text colors, generated once per swatch."""
        return generate_text_colors(self.rgb)

    @property
    def title_text_color(self) -> RGBA:
        """Color for 'title' text over this swatch (contrast >= 3.0)."""
        return self.text_colors.title

    @property
    def body_text_color(self) -> RGBA:
        """Color for 'body' text over this swatch (contrast >= 4.5)."""
        return self.text_colors.body

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        h, s, l = self.hsl
        return {
            "hex": self.hex,
            "rgb": list(self.rgb),
            "hsl": [round(h, 2), round(s, 4), round(l, 4)],
            "population": self.population,
            "title_text": to_hex(self.title_text_color, include_alpha=True),
            "body_text": to_hex(self.body_text_color, include_alpha=True),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Swatch:
        """Deserialize from dictionary."""
        return cls(rgb=tuple(data["rgb"]), population=data["population"])

    def __repr__(self) -> str:
        return f"Swatch(rgb={self.hex}, population={self.population})"
