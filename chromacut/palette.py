# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Palette: the swatches extracted from an image and the swatch chosen for
each target.

Typical use::

    from chromacut import Palette

    palette = Palette.from_image("cover.jpg").maximum_color_count(24).generate()
    palette.vibrant_swatch        # Swatch or None
    palette.dominant_swatch       # most populous swatch
    palette.get_swatch_for_target(my_target)
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, Optional, Sequence

from chromacut.config import PaletteConfig
from chromacut.measure.colorspace import RGB
from chromacut.measure.filters import DEFAULT_FILTER, Filter
from chromacut.measure.image import (
    ImageSource,
    Region,
    intersect_region,
    load_image,
    pack_pixels,
    scale_down,
    scale_ratio,
    scale_region,
)
from chromacut.measure.quantizer import ColorCutQuantizer
from chromacut.measure.scoring import find_dominant_swatch, select_swatches
from chromacut.schema.swatch import Swatch
from chromacut.schema.target import (
    DARK_MUTED,
    DARK_VIBRANT,
    DEFAULT_TARGETS,
    LIGHT_MUTED,
    LIGHT_VIBRANT,
    MUTED,
    VIBRANT,
    Target,
)

logger = logging.getLogger(__name__)


class Palette:
    """
    Swatches and the swatch selected for each target.

    Build one with :meth:`from_image` or :meth:`from_swatches`. After
    :meth:`generate` has run the palette does not change.
    """

    def __init__(self, swatches: Sequence[Swatch], targets: Sequence[Target]) -> None:
        self._swatches: tuple[Swatch, ...] = tuple(swatches)
        self._targets: tuple[Target, ...] = tuple(targets)
        self._selected_swatches: dict[Target, Optional[Swatch]] = {}
        self._dominant_swatch = find_dominant_swatch(self._swatches)

    @staticmethod
    def from_image(image: ImageSource, config: Optional[PaletteConfig] = None) -> PaletteBuilder:
        """Start generating a palette from an image."""
        return PaletteBuilder(image, config=config)

    @staticmethod
    def from_swatches(swatches: Sequence[Swatch]) -> Palette:
        """
        Generate a palette from pre-generated swatches, using the default
        targets. Useful for tests or for restoring a saved palette.
        """
        return PaletteBuilder.from_swatches(swatches).generate()

    def generate(self) -> None:
        """Select a swatch for every target. Safe to call again."""
        self._selected_swatches = select_swatches(
            self._swatches, self._targets, self._dominant_swatch
        )

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def swatches(self) -> tuple[Swatch, ...]:
        """All of the swatches which make up the palette."""
        return self._swatches

    @property
    def targets(self) -> tuple[Target, ...]:
        """The targets used to generate this palette."""
        return self._targets

    @property
    def selected_swatches(self) -> dict[Target, Optional[Swatch]]:
        return dict(self._selected_swatches)

    def get_swatch_for_target(self, target: Target) -> Optional[Swatch]:
        """Selected swatch for ``target``, or None if none could be found."""
        return self._selected_swatches.get(target)

    def get_color_for_target(self, target: Target, default: Optional[RGB] = None) -> Optional[RGB]:
        """Selected color for ``target``, or ``default`` if there is none."""
        swatch = self.get_swatch_for_target(target)
        return swatch.rgb if swatch is not None else default

    @property
    def dominant_swatch(self) -> Optional[Swatch]:
        """The swatch with the greatest population, or None for an empty palette."""
        return self._dominant_swatch

    def get_dominant_color(self, default: Optional[RGB] = None) -> Optional[RGB]:
        return self._dominant_swatch.rgb if self._dominant_swatch is not None else default

    @property
    def vibrant_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(VIBRANT)

    @property
    def light_vibrant_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(LIGHT_VIBRANT)

    @property
    def dark_vibrant_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(DARK_VIBRANT)

    @property
    def muted_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(MUTED)

    @property
    def light_muted_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(LIGHT_MUTED)

    @property
    def dark_muted_swatch(self) -> Optional[Swatch]:
        return self.get_swatch_for_target(DARK_MUTED)

    def vibrant_color(self, default: Optional[RGB] = None) -> Optional[RGB]:
        return self.get_color_for_target(VIBRANT, default)

    def light_vibrant_color(self, default: Optional[RGB] = None) -> Optional[RGB]:
        return self.get_color_for_target(LIGHT_VIBRANT, default)

    def dark_vibrant_color(self, default: Optional[RGB] = None) -> Optional[RGB]:
        return self.get_color_for_target(DARK_VIBRANT, default)

    def muted_color(self, default: Optional[RGB] = None) -> Optional[RGB]:
        return self.get_color_for_target(MUTED, default)

    def light_muted_color(self, default: Optional[RGB] = None) -> Optional[RGB]:
        return self.get_color_for_target(LIGHT_MUTED, default)

    def dark_muted_color(self, default: Optional[RGB] = None) -> Optional[RGB]:
        return self.get_color_for_target(DARK_MUTED, default)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def target_names(self) -> dict[Target, str]:
        """
        Unique label per target: its name, or ``target_<index>`` for unnamed
        ones. A label already taken by an earlier target gets ``_<index>``
        appended.
        """
        names: dict[Target, str] = {}
        used: set[str] = set()
        for i, target in enumerate(self._targets):
            label = target.name or f"target_{i}"
            while label in used:
                label = f"{label}_{i}"
            used.add(label)
            names[target] = label
        return names

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        names = self.target_names()
        return {
            "dominant": self._dominant_swatch.to_dict() if self._dominant_swatch else None,
            "swatches": [s.to_dict() for s in self._swatches],
            "targets": {
                names[target]: swatch.to_dict() if swatch is not None else None
                for target, swatch in self._selected_swatches.items()
            },
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return (
            f"Palette(swatches={len(self._swatches)}, targets={len(self._targets)}, "
            f"dominant={self._dominant_swatch!r})"
        )


class PaletteBuilder:
    """
    Configures and runs palette generation.

    Construct from an image, or use :meth:`from_swatches` to skip
    quantization. Setters return the builder so calls can be chained.
    """

    def __init__(
        self,
        image: Optional[ImageSource] = None,
        *,
        swatches: Optional[Sequence[Swatch]] = None,
        config: Optional[PaletteConfig] = None,
    ) -> None:
        if (image is None) == (swatches is None):
            raise ValueError("Provide exactly one of image or swatches")
        if swatches is not None and len(swatches) == 0:
            raise ValueError("List of swatches is not valid: it is empty")

        cfg = config or PaletteConfig()
        self._pixels = load_image(image) if image is not None else None
        self._swatches = tuple(swatches) if swatches is not None else None
        self._max_colors = cfg.max_colors
        self._resize_area: Optional[int] = cfg.resize_area
        self._resize_max_dimension = cfg.resize_max_dimension
        self._word_width = cfg.word_width
        self._filters: list[Filter] = [DEFAULT_FILTER]
        self._targets: list[Target] = list(DEFAULT_TARGETS)
        self._region: Optional[Region] = None

    @classmethod
    def from_swatches(cls, swatches: Sequence[Swatch]) -> PaletteBuilder:
        """Builder that uses ``swatches`` directly instead of an image."""
        return cls(swatches=swatches)

    def maximum_color_count(self, colors: int) -> PaletteBuilder:
        """Maximum number of colors produced by quantizing the image."""
        if colors < 1:
            raise ValueError(f"Maximum color count must be >= 1, got {colors}")
        self._max_colors = colors
        return self

    def resize_image_area(self, area: int) -> PaletteBuilder:
        """
        Scale images with a larger area down to ``area`` pixels before
        quantizing. Larger values are slower but keep more detail; a value
        <= 0 disables resizing. Replaces any max-dimension setting.
        """
        self._resize_area = area
        self._resize_max_dimension = None
        return self

    def resize_max_dimension(self, dimension: int) -> PaletteBuilder:
        """Scale images whose longest side exceeds ``dimension``. Replaces any area setting."""
        self._resize_max_dimension = dimension
        self._resize_area = None
        return self

    def clear_filters(self) -> PaletteBuilder:
        """Remove all filters, including the default filter."""
        self._filters.clear()
        return self

    def add_filter(self, color_filter: Filter) -> PaletteBuilder:
        """Add a filter controlling which colors may appear in the palette."""
        if color_filter is not None:
            self._filters.append(color_filter)
        return self

    def set_region(self, left: int, top: int, right: int, bottom: int) -> PaletteBuilder:
        """
        Only use pixels inside this region of the image.

        Ignored when building from swatches.

        Raises:
            ValueError: if the region does not intersect the image
        """
        if self._pixels is not None:
            height, width = self._pixels.shape[:2]
            self._region = intersect_region((left, top, right, bottom), width, height)
        return self

    def clear_region(self) -> PaletteBuilder:
        self._region = None
        return self

    def add_target(self, target: Target) -> PaletteBuilder:
        """Add a target; retrieve its result with Palette.get_swatch_for_target."""
        if not any(t is target for t in self._targets):
            self._targets.append(target)
        return self

    def add_targets(self, targets: Iterable[Target]) -> PaletteBuilder:
        for target in targets:
            self.add_target(target)
        return self

    def clear_targets(self) -> PaletteBuilder:
        """Remove all targets, including the defaults."""
        self._targets.clear()
        return self

    def generate(self) -> Palette:
        """Generate and return the palette."""
        if self._pixels is not None:
            swatches = self._quantize_image()
        else:
            swatches = list(self._swatches)

        palette = Palette(swatches, self._targets)
        palette.generate()
        logger.debug("Generated %r", palette)
        return palette

    def _quantize_image(self) -> list[Swatch]:
        pixels = self._pixels
        region = self._region
        height, width = pixels.shape[:2]

        ratio = scale_ratio(width, height, self._resize_area, self._resize_max_dimension)
        if ratio is not None:
            pixels = scale_down(pixels, ratio)
            if region is not None:
                scaled_height, scaled_width = pixels.shape[:2]
                region = scale_region(region, width, height, scaled_width, scaled_height)

        quantizer = ColorCutQuantizer(
            pack_pixels(pixels, region),
            self._max_colors,
            self._filters,
            word_width=self._word_width,
        )
        return quantizer.quantized_colors
