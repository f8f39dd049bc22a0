# Copyright (c) 2026 Chromacut
# SPDX-License-Identifier: MIT

"""
Pixel source: load an image and turn it into a flat pixel buffer.

Loading applies ICC profile conversion to sRGB so extracted colors match
what color pickers show. Scaling down is done with Pillow before quantizing.
"""

from __future__ import annotations

import io
import logging
import math
from pathlib import Path
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image, ImageCms

logger = logging.getLogger(__name__)

Region = tuple[int, int, int, int]
ImageSource = Union[str, Path, Image.Image, NDArray[np.uint8]]


def load_image(image: ImageSource) -> NDArray[np.uint8]:
    """
    Load an image as an (H, W, 3) uint8 sRGB array.

    Args:
        image: One of:
            - Path to image file (str or Path)
            - PIL image
            - NumPy array of shape (H, W, 3) or (H, W, 4) with uint8 values;
              an alpha channel is dropped

    Returns:
        Array of shape (H, W, 3)
    """
    if isinstance(image, (str, Path)):
        with Image.open(image) as img:
            return _pil_to_array(img)

    if isinstance(image, Image.Image):
        return _pil_to_array(image)

    if isinstance(image, np.ndarray):
        if image.ndim != 3 or image.shape[2] not in (3, 4):
            raise ValueError(
                f"Expected (H, W, 3) or (H, W, 4) array, got shape {image.shape}"
            )
        if image.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {image.dtype}")
        return image[:, :, :3]

    raise TypeError(f"Expected file path, PIL image or numpy array, got {type(image)}")


def _pil_to_array(img: Image.Image) -> NDArray[np.uint8]:
    """Convert a PIL image to RGB, applying its embedded ICC profile if any."""
    icc_profile = img.info.get("icc_profile")
    if img.mode != "RGB":
        img = img.convert("RGB")

    if icc_profile:
        try:
            embedded = ImageCms.ImageCmsProfile(io.BytesIO(icc_profile))
            img = ImageCms.profileToProfile(img, embedded, ImageCms.createProfile("sRGB"))
        except (OSError, ImageCms.PyCMSError) as e:
            logger.warning("ICC profile conversion failed, using raw RGB: %s", e)

    return np.array(img, dtype=np.uint8)


def scale_ratio(
    width: int,
    height: int,
    resize_area: Optional[int] = None,
    resize_max_dimension: Optional[int] = None,
) -> Optional[float]:
    """
    Down-scaling ratio for an image, or None if no scaling is needed.

    ``resize_area`` takes precedence; a value <= 0 (or None) disables it.
    """
    if resize_area is not None and resize_area > 0:
        area = width * height
        if area > resize_area:
            return math.sqrt(resize_area / area)
    elif resize_max_dimension is not None and resize_max_dimension > 0:
        max_dimension = max(width, height)
        if max_dimension > resize_max_dimension:
            return resize_max_dimension / max_dimension
    return None


def scale_down(pixels: NDArray[np.uint8], ratio: float) -> NDArray[np.uint8]:
    """Resize an (H, W, 3) array by ``ratio`` (dimensions rounded up)."""
    height, width = pixels.shape[:2]
    new_width = max(1, math.ceil(width * ratio))
    new_height = max(1, math.ceil(height * ratio))
    logger.debug("Scaling image %dx%d -> %dx%d", width, height, new_width, new_height)

    img = Image.fromarray(np.ascontiguousarray(pixels))
    img = img.resize((new_width, new_height), Image.Resampling.NEAREST)
    return np.array(img, dtype=np.uint8)


def intersect_region(region: Region, width: int, height: int) -> Region:
    """
    Clip ``(left, top, right, bottom)`` to the image bounds.

    Raises:
        ValueError: if the region does not intersect the image
    """
    left, top, right, bottom = region
    clipped = (max(0, left), max(0, top), min(width, right), min(height, bottom))
    if clipped[0] >= clipped[2] or clipped[1] >= clipped[3]:
        raise ValueError("The given region must intersect with the image's dimensions")
    return clipped


def scale_region(
    region: Region, width: int, height: int, scaled_width: int, scaled_height: int
) -> Region:
    """
    Map a region of a ``width`` x ``height`` image onto its resized
    ``scaled_width`` x ``scaled_height`` version.

    Each axis uses its own ratio, since resized dimensions are rounded up.
    """
    left, top, right, bottom = region
    x_ratio = scaled_width / width
    y_ratio = scaled_height / height
    return (
        math.floor(left * x_ratio),
        math.floor(top * y_ratio),
        min(math.ceil(right * x_ratio), scaled_width),
        min(math.ceil(bottom * y_ratio), scaled_height),
    )


def pack_pixels(
    pixels: NDArray[np.uint8], region: Optional[Region] = None
) -> NDArray[np.uint32]:
    """
    Flatten an (H, W, 3) array into row-major packed ``0xFFRRGGBB`` pixels.

    If ``region`` is given, only pixels inside it are included.
    """
    if region is not None:
        left, top, right, bottom = region
        pixels = pixels[top:bottom, left:right]

    rgb = pixels.reshape(-1, 3).astype(np.uint32)
    return (0xFF << 24) | (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]
