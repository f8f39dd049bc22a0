# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Target scoring: pick the best swatch for each target.

Targets are processed in order. For each one, every eligible swatch is
scored on how close its saturation and lightness are to the target's ideal
values and how populous it is relative to the dominant swatch. The highest
score wins; on equal scores the earlier swatch is kept.

A swatch picked by an exclusive target is marked as used and skipped by
later targets in the same pass.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Optional, Sequence

from chromacut.measure.colorspace import RGB
from chromacut.schema.swatch import Swatch
from chromacut.schema.target import Target

logger = logging.getLogger(__name__)


def find_dominant_swatch(swatches: Iterable[Swatch]) -> Optional[Swatch]:
    """Swatch with the greatest population; the first one wins ties."""
    dominant: Optional[Swatch] = None
    for swatch in swatches:
        if dominant is None or swatch.population > dominant.population:
            dominant = swatch
    return dominant


def should_score(swatch: Swatch, target: Target, used_colors: AbstractSet[RGB]) -> bool:
    """True if the swatch is within the target's ranges and not already used."""
    _, s, l = swatch.hsl
    return (
        target.minimum_saturation <= s <= target.maximum_saturation
        and target.minimum_lightness <= l <= target.maximum_lightness
        and swatch.rgb not in used_colors
    )


def generate_score(swatch: Swatch, target: Target, max_population: int) -> float:
    """
    Weighted score of ``swatch`` against ``target``.

    Uses the target's normalized weights; a term is only added when its
    weight is positive.
    """
    _, s, l = swatch.hsl
    sat_weight, luma_weight, pop_weight = target.normalized_weights

    score = 0.0
    if sat_weight > 0:
        score += sat_weight * (1.0 - abs(s - target.target_saturation))
    if luma_weight > 0:
        score += luma_weight * (1.0 - abs(l - target.target_lightness))
    if pop_weight > 0:
        score += pop_weight * (swatch.population / max_population)
    return score


def max_scored_swatch(
    swatches: Sequence[Swatch],
    target: Target,
    used_colors: AbstractSet[RGB] = frozenset(),
    dominant: Optional[Swatch] = None,
) -> Optional[Swatch]:
    """Best eligible swatch for ``target``, or None if none is eligible."""
    max_population = dominant.population if dominant is not None else 1
    if max_population <= 0:
        max_population = 1

    best: Optional[Swatch] = None
    best_score = 0.0
    for swatch in swatches:
        if not should_score(swatch, target, used_colors):
            continue
        score = generate_score(swatch, target, max_population)
        if best is None or score > best_score:
            best, best_score = swatch, score
    return best


def select_swatches(
    swatches: Sequence[Swatch],
    targets: Sequence[Target],
    dominant: Optional[Swatch] = None,
) -> dict[Target, Optional[Swatch]]:
    """
    Assign each target its best swatch.

    Args:
        swatches: Candidate swatches, in priority order for ties
        targets: Targets, processed in order
        dominant: Most populous swatch (found from ``swatches`` if omitted)

    Returns:
        Mapping of every target to its swatch, or None when no swatch was
        eligible.
    """
    if dominant is None:
        dominant = find_dominant_swatch(swatches)

    # Scratch state for this pass only
    used_colors: set[RGB] = set()
    selected: dict[Target, Optional[Swatch]] = {}

    for target in targets:
        swatch = max_scored_swatch(swatches, target, used_colors, dominant)
        if swatch is not None and target.exclusive:
            used_colors.add(swatch.rgb)
        selected[target] = swatch
        logger.debug("Target %s -> %s", target.name or "custom", swatch)

    return selected
