# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Targets: the semantic color categories a palette selects swatches for.

A Target holds acceptable saturation and lightness ranges, the ideal value
within each range, and the weights used when scoring swatches against it.

The six built-in targets are module-level constants. Targets are frozen;
use :class:`TargetBuilder` to derive a variant from an existing target.

Targets compare by identity, so two custom targets with the same values are
still distinct keys in a palette's selection.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Optional


Triple = tuple[float, float, float]

# Indices into the (min, target, max) triples
INDEX_MIN = 0
INDEX_TARGET = 1
INDEX_MAX = 2

# Indices into the weight triple
INDEX_WEIGHT_SAT = 0
INDEX_WEIGHT_LUMA = 1
INDEX_WEIGHT_POP = 2

# Preset values
TARGET_DARK_LUMA = 0.26
MAX_DARK_LUMA = 0.45

MIN_LIGHT_LUMA = 0.55
TARGET_LIGHT_LUMA = 0.74

MIN_NORMAL_LUMA = 0.3
TARGET_NORMAL_LUMA = 0.5
MAX_NORMAL_LUMA = 0.7

TARGET_MUTED_SATURATION = 0.3
MAX_MUTED_SATURATION = 0.4

TARGET_VIBRANT_SATURATION = 1.0
MIN_VIBRANT_SATURATION = 0.35

WEIGHT_SATURATION = 0.24
WEIGHT_LUMA = 0.52
WEIGHT_POPULATION = 0.24

_DEFAULT_RANGE: Triple = (0.0, 0.5, 1.0)
_DEFAULT_WEIGHTS: Triple = (WEIGHT_SATURATION, WEIGHT_LUMA, WEIGHT_POPULATION)


def normalize_weights(weights: Triple) -> Triple:
    """
    Rescale the positive weights so they sum to 1.

    Zero and negative weights are left untouched. If no weight is positive
    the vector is returned unchanged. Idempotent.
    """
    total = sum(w for w in weights if w > 0)
    if total == 0:
        return tuple(weights)
    return tuple(w / total if w > 0 else w for w in weights)


@dataclass(frozen=True, eq=False)
class Target:
    """
    A target profile for palette selection.

    Attributes:
        saturation: (minimum, target, maximum) saturation, each in [0, 1]
        lightness: (minimum, target, maximum) lightness, each in [0, 1]
        weights: (saturation, lightness, population) importance weights
        exclusive: If True, a swatch selected for this target can not be
            selected by targets processed after it
        name: Optional label used by serializers
    """

    saturation: Triple = _DEFAULT_RANGE
    lightness: Triple = _DEFAULT_RANGE
    weights: Triple = _DEFAULT_WEIGHTS
    exclusive: bool = True
    name: Optional[str] = None

    def __post_init__(self) -> None:
        for attr in ("saturation", "lightness", "weights"):
            values = getattr(self, attr)
            if len(values) != 3:
                raise ValueError(f"{attr} must have 3 values, got {values!r}")
            object.__setattr__(self, attr, tuple(float(v) for v in values))

    @property
    def minimum_saturation(self) -> float:
        return self.saturation[INDEX_MIN]

    @property
    def target_saturation(self) -> float:
        return self.saturation[INDEX_TARGET]

    @property
    def maximum_saturation(self) -> float:
        return self.saturation[INDEX_MAX]

    @property
    def minimum_lightness(self) -> float:
        return self.lightness[INDEX_MIN]

    @property
    def target_lightness(self) -> float:
        return self.lightness[INDEX_TARGET]

    @property
    def maximum_lightness(self) -> float:
        return self.lightness[INDEX_MAX]

    @property
    def saturation_weight(self) -> float:
        """
        Importance of a color's saturation being close to the target value.

        Only meaningful relative to the other weights.
        """
        return self.weights[INDEX_WEIGHT_SAT]

    @property
    def lightness_weight(self) -> float:
        """Importance of a color's lightness being close to the target value."""
        return self.weights[INDEX_WEIGHT_LUMA]

    @property
    def population_weight(self) -> float:
        """Importance of a color's population being close to the most populous."""
        return self.weights[INDEX_WEIGHT_POP]

    @cached_property
    def normalized_weights(self) -> Triple:
        """Weights rescaled to sum to 1, computed once."""
        return normalize_weights(self.weights)

    def __repr__(self) -> str:
        label = self.name or "custom"
        return (
            f"Target({label}, saturation={self.saturation}, "
            f"lightness={self.lightness}, weights={self.weights}, "
            f"exclusive={self.exclusive})"
        )


class TargetBuilder:
    """
    Builder for custom :class:`Target` instances.

    Starts from default values, or from a copy of an existing target::

        target = (
            TargetBuilder(VIBRANT)
            .set_minimum_lightness(0.4)
            .set_population_weight(0.0)
            .build()
        )

    Values are not clamped; callers keep them in range.
    """

    def __init__(self, target: Optional[Target] = None) -> None:
        source = target if target is not None else Target()
        self._saturation = list(source.saturation)
        self._lightness = list(source.lightness)
        self._weights = list(source.weights)
        self._exclusive = source.exclusive
        self._name: Optional[str] = None

    def set_minimum_saturation(self, value: float) -> TargetBuilder:
        self._saturation[INDEX_MIN] = value
        return self

    def set_target_saturation(self, value: float) -> TargetBuilder:
        self._saturation[INDEX_TARGET] = value
        return self

    def set_maximum_saturation(self, value: float) -> TargetBuilder:
        self._saturation[INDEX_MAX] = value
        return self

    def set_minimum_lightness(self, value: float) -> TargetBuilder:
        self._lightness[INDEX_MIN] = value
        return self

    def set_target_lightness(self, value: float) -> TargetBuilder:
        self._lightness[INDEX_TARGET] = value
        return self

    def set_maximum_lightness(self, value: float) -> TargetBuilder:
        self._lightness[INDEX_MAX] = value
        return self

    def set_saturation_weight(self, weight: float) -> TargetBuilder:
        """A weight of 0 means saturation has no bearing on selection."""
        self._weights[INDEX_WEIGHT_SAT] = weight
        return self

    def set_lightness_weight(self, weight: float) -> TargetBuilder:
        """A weight of 0 means lightness has no bearing on selection."""
        self._weights[INDEX_WEIGHT_LUMA] = weight
        return self

    def set_population_weight(self, weight: float) -> TargetBuilder:
        """A weight of 0 means population has no bearing on selection."""
        self._weights[INDEX_WEIGHT_POP] = weight
        return self

    def set_exclusive(self, exclusive: bool) -> TargetBuilder:
        """Whether a selected color is exclusive to this target. Defaults to True."""
        self._exclusive = exclusive
        return self

    def set_name(self, name: Optional[str]) -> TargetBuilder:
        self._name = name
        return self

    def normalize_weights(self) -> TargetBuilder:
        """Rescale the weights set so far to sum to 1."""
        self._weights = list(normalize_weights(tuple(self._weights)))
        return self

    def build(self) -> Target:
        """Build a new :class:`Target` from the current values."""
        return Target(
            saturation=tuple(self._saturation),
            lightness=tuple(self._lightness),
            weights=tuple(self._weights),
            exclusive=self._exclusive,
            name=self._name,
        )


# =============================================================================
# Built-in targets
# =============================================================================

_VIBRANT_SATURATION: Triple = (MIN_VIBRANT_SATURATION, TARGET_VIBRANT_SATURATION, 1.0)
_MUTED_SATURATION: Triple = (0.0, TARGET_MUTED_SATURATION, MAX_MUTED_SATURATION)

_LIGHT_LIGHTNESS: Triple = (MIN_LIGHT_LUMA, TARGET_LIGHT_LUMA, 1.0)
_NORMAL_LIGHTNESS: Triple = (MIN_NORMAL_LUMA, TARGET_NORMAL_LUMA, MAX_NORMAL_LUMA)
_DARK_LIGHTNESS: Triple = (0.0, TARGET_DARK_LUMA, MAX_DARK_LUMA)

# A vibrant color which is light in luminance
LIGHT_VIBRANT = Target(_VIBRANT_SATURATION, _LIGHT_LIGHTNESS, name="light_vibrant")
# A vibrant color which is neither light nor dark
VIBRANT = Target(_VIBRANT_SATURATION, _NORMAL_LIGHTNESS, name="vibrant")
# A vibrant color which is dark in luminance
DARK_VIBRANT = Target(_VIBRANT_SATURATION, _DARK_LIGHTNESS, name="dark_vibrant")
# A muted color which is light in luminance
LIGHT_MUTED = Target(_MUTED_SATURATION, _LIGHT_LIGHTNESS, name="light_muted")
# A muted color which is neither light nor dark
MUTED = Target(_MUTED_SATURATION, _NORMAL_LIGHTNESS, name="muted")
# A muted color which is dark in luminance
DARK_MUTED = Target(_MUTED_SATURATION, _DARK_LIGHTNESS, name="dark_muted")

DEFAULT_TARGETS: tuple[Target, ...] = (
    LIGHT_VIBRANT,
    VIBRANT,
    DARK_VIBRANT,
    LIGHT_MUTED,
    MUTED,
    DARK_MUTED,
)
