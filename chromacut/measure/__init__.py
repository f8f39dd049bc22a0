# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Measurement core for chromacut.

Color math, filters, median-cut quantization and target scoring. All
operations are synchronous and deterministic.

The quantizer and scoring modules are imported from their own modules
(``chromacut.measure.quantizer``, ``chromacut.measure.scoring``) since they
depend on the schema types.
"""

from chromacut.measure.colorspace import (
    contrast,
    hsl_to_rgb,
    luminance,
    minimum_alpha,
    rgb_to_hsl,
)
from chromacut.measure.filters import DEFAULT_FILTER, DefaultFilter, Filter

__all__ = [
    "rgb_to_hsl",
    "hsl_to_rgb",
    "luminance",
    "contrast",
    "minimum_alpha",
    "Filter",
    "DefaultFilter",
    "DEFAULT_FILTER",
]
