# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Chromacut -- Representative color extraction for UI theming.

Quantizes an image down to a handful of swatches with median cut, then picks
the best swatch for each semantic target (vibrant, muted, light, dark).

Quick start::

    from chromacut import Palette

    palette = Palette.from_image("cover.jpg").generate()
    palette.vibrant_swatch          # Swatch or None
    palette.dominant_swatch.hex     # "#3060C8"
    palette.to_json()
"""

from __future__ import annotations

__version__ = "1.0.0"

from chromacut.config import PaletteConfig, setup_logging
from chromacut.measure.filters import DEFAULT_FILTER, DefaultFilter, Filter
from chromacut.palette import Palette, PaletteBuilder
from chromacut.schema import (
    DARK_MUTED,
    DARK_VIBRANT,
    DEFAULT_TARGETS,
    LIGHT_MUTED,
    LIGHT_VIBRANT,
    MUTED,
    VIBRANT,
    Swatch,
    Target,
    TargetBuilder,
)

__all__ = [
    # Core API
    "Palette",
    "PaletteBuilder",
    "PaletteConfig",
    # Types
    "Swatch",
    "Target",
    "TargetBuilder",
    "Filter",
    "DefaultFilter",
    "DEFAULT_FILTER",
    # Built-in targets
    "LIGHT_VIBRANT",
    "VIBRANT",
    "DARK_VIBRANT",
    "LIGHT_MUTED",
    "MUTED",
    "DARK_MUTED",
    "DEFAULT_TARGETS",
    # Logging
    "setup_logging",
    # Version
    "__version__",
]
