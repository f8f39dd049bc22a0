# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Schema definitions for palettes.

Swatches and targets are immutable (frozen dataclasses). Built-in targets
are shared constants; derive variants with TargetBuilder.
"""

from chromacut.schema.swatch import (
    MIN_CONTRAST_BODY_TEXT,
    MIN_CONTRAST_TITLE_TEXT,
    Swatch,
    TextColors,
)
from chromacut.schema.target import (
    DARK_MUTED,
    DARK_VIBRANT,
    DEFAULT_TARGETS,
    LIGHT_MUTED,
    LIGHT_VIBRANT,
    MUTED,
    VIBRANT,
    Target,
    TargetBuilder,
    normalize_weights,
)

__all__ = [
    # Swatch
    "Swatch",
    "TextColors",
    "MIN_CONTRAST_TITLE_TEXT",
    "MIN_CONTRAST_BODY_TEXT",
    # Targets
    "Target",
    "TargetBuilder",
    "normalize_weights",
    "LIGHT_VIBRANT",
    "VIBRANT",
    "DARK_VIBRANT",
    "LIGHT_MUTED",
    "MUTED",
    "DARK_MUTED",
    "DEFAULT_TARGETS",
]
