# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""Plain text listing for consoles."""

from __future__ import annotations

from typing import Optional

from chromacut.measure.colorspace import to_hex
from chromacut.palette import Palette
from chromacut.schema.swatch import Swatch


def _describe(label: str, swatch: Optional[Swatch]) -> list[str]:
    if swatch is None:
        return [f"{label} has no swatch"]
    return [
        f"{label}: {swatch.hex} - population: {swatch.population}",
        f"\ttext colors - title: {to_hex(swatch.title_text_color)}"
        f" - body: {to_hex(swatch.body_text_color)}",
    ]


def to_text(palette: Palette) -> str:
    """List the dominant swatch and each target's swatch."""
    lines = ["swatches:"]
    lines.extend(_describe("dominant", palette.dominant_swatch))
    lines.append("")

    names = palette.target_names()
    for target in palette.targets:
        lines.extend(_describe(names[target], palette.get_swatch_for_target(target)))

    return "\n".join(lines)
