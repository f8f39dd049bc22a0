# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""Default settings and logging setup for chromacut."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

# The number of colors used when quantizing an image
DEFAULT_CALCULATE_NUMBER_COLORS = 16

# Images larger than this area (in pixels) are scaled down before quantizing
DEFAULT_RESIZE_IMAGE_AREA = 112 * 112

ENV_MAX_COLORS = "CHROMACUT_MAX_COLORS"
ENV_RESIZE_AREA = "CHROMACUT_RESIZE_AREA"
ENV_RESIZE_MAX_DIMENSION = "CHROMACUT_RESIZE_MAX_DIMENSION"


@dataclass(frozen=True)
class PaletteConfig:
    """Settings for generating a palette from an image."""

    # Maximum number of swatches produced by quantization.
    # Landscapes do well with 10-16; images mostly of faces need ~24.
    max_colors: int = DEFAULT_CALCULATE_NUMBER_COLORS

    # Scale images down to roughly this many pixels (<= 0 disables)
    resize_area: int = DEFAULT_RESIZE_IMAGE_AREA

    # Alternative to resize_area: cap the longest side instead.
    # Only used when resize_area is disabled.
    resize_max_dimension: Optional[int] = None

    # Bits kept per channel when quantizing
    word_width: int = 5

    def __post_init__(self) -> None:
        if self.max_colors < 1:
            raise ValueError(f"max_colors must be >= 1, got {self.max_colors}")
        if not 1 <= self.word_width <= 8:
            raise ValueError(f"word_width must be 1-8, got {self.word_width}")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional[PaletteConfig] = None,
    ) -> PaletteConfig:
        """
        Apply ``CHROMACUT_*`` environment overrides on top of ``base``.

        Setting ``CHROMACUT_RESIZE_MAX_DIMENSION`` disables area resizing
        unless ``CHROMACUT_RESIZE_AREA`` is also set.
        """
        env = os.environ if environ is None else environ
        config = base or cls()

        max_colors = _env_int(env, ENV_MAX_COLORS)
        if max_colors is not None:
            config = replace(config, max_colors=max_colors)

        max_dimension = _env_int(env, ENV_RESIZE_MAX_DIMENSION)
        if max_dimension is not None:
            config = replace(config, resize_area=0, resize_max_dimension=max_dimension)

        area = _env_int(env, ENV_RESIZE_AREA)
        if area is not None:
            config = replace(config, resize_area=area)

        return config


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def setup_logging(verbose: bool = False) -> None:
    """
    Attach a console handler to the ``chromacut`` logger.

    Child loggers (e.g. ``chromacut.measure.quantizer``) inherit it.
    Repeated calls only adjust the level.

    Args:
        verbose: If True, log at DEBUG; otherwise INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO

    root = logging.getLogger("chromacut")
    root.setLevel(level)

    if root.handlers:
        return

    console = logging.StreamHandler()
    console.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(console)
