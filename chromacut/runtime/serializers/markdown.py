# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""Markdown table serializer."""

from __future__ import annotations

from typing import Optional

from chromacut.measure.colorspace import to_hex
from chromacut.palette import Palette
from chromacut.schema.swatch import Swatch


def _row(label: str, swatch: Optional[Swatch]) -> str:
    if swatch is None:
        return f"| {label} | - | - | - | - |"
    return (
        f"| {label} | {swatch.hex} | {swatch.population} | "
        f"{to_hex(swatch.title_text_color, include_alpha=True)} | "
        f"{to_hex(swatch.body_text_color, include_alpha=True)} |"
    )


def to_markdown(palette: Palette, *, title: Optional[str] = "Palette") -> str:
    """Serialize a palette as a Markdown table.

    One row for the dominant swatch, then one per target in processing
    order. Targets without a swatch show ``-`` in every column.
    """
    lines = []
    if title:
        lines.extend([f"## {title}", ""])

    lines.append("| Target | Color | Population | Title text | Body text |")
    lines.append("|---|---|---|---|---|")
    lines.append(_row("dominant", palette.dominant_swatch))

    names = palette.target_names()
    for target in palette.targets:
        lines.append(_row(names[target], palette.get_swatch_for_target(target)))

    return "\n".join(lines)
