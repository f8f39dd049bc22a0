# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
CSS custom properties serializer for UI theming.

Each swatch becomes three properties: the color itself as hex, plus
``-title`` and ``-body`` text colors as ``rgba()``. Targets without a
swatch are omitted.
"""

from __future__ import annotations

from typing import Sequence

from chromacut.palette import Palette
from chromacut.schema.swatch import Swatch


def _rgba(color: Sequence[int]) -> str:
    alpha = color[3] / 255.0 if len(color) > 3 else 1.0
    return f"rgba({color[0]}, {color[1]}, {color[2]}, {alpha:.2f})"


def _swatch_lines(name: str, swatch: Swatch) -> list[str]:
    return [
        f"  --{name}: {swatch.hex};",
        f"  --{name}-title: {_rgba(swatch.title_text_color)};",
        f"  --{name}-body: {_rgba(swatch.body_text_color)};",
    ]


def to_css_variables(
    palette: Palette,
    *,
    prefix: str = "palette",
    selector: str = ":root",
) -> str:
    """Serialize a palette as a block of CSS custom properties.

    Args:
        palette: Generated palette.
        prefix: Prefix for every property name.
        selector: CSS selector for the rule.

    Returns:
        CSS rule string.
    """
    lines = [f"{selector} {{"]

    if palette.dominant_swatch is not None:
        lines.extend(_swatch_lines(f"{prefix}-dominant", palette.dominant_swatch))

    names = palette.target_names()
    for target in palette.targets:
        swatch = palette.get_swatch_for_target(target)
        if swatch is None:
            continue
        slug = names[target].replace("_", "-")
        lines.extend(_swatch_lines(f"{prefix}-{slug}", swatch))

    lines.append("}")
    return "\n".join(lines)
