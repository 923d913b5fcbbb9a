"""
Raster data model for Image Studio.

A raster is a Pillow image in RGBA mode: 8 bits per channel, row-major,
origin at the top-left corner. Operations never modify a raster in place;
they always hand back a new image (or the untouched input for no-ops).

Functions:
    new_raster: Create a raster filled with one color
    to_raster: Convert any Pillow image into an independent RGBA raster
    copy_raster: Deep copy of a raster
    rasters_equal: Pixel-for-pixel comparison
    raster_to_array: View raster pixels as a (height, width, 4) uint8 array
    array_to_raster: Build a raster from a (height, width, 4) array

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from typing import Any, Tuple

import numpy as np
from PIL import Image

from IS_Libs.constants import RASTER_MODE, TRANSPARENT

RgbaColor = Tuple[int, int, int, int]


def _require_image(image: Any) -> None:
    if not isinstance(image, Image.Image):
        raise TypeError(f"Expected PIL Image, got {type(image)}")


def new_raster(width: int, height: int, color: RgbaColor = TRANSPARENT) -> Any:
    """
    Create a raster of the given size filled with a single color.

    Args:
        width: Raster width in pixels (> 0)
        height: Raster height in pixels (> 0)
        color: Fill color as an RGBA tuple

    Returns:
        New RGBA PIL Image

    Raises:
        ValueError: If width or height is not positive
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Raster size must be positive, got {width}x{height}")
    return Image.new(RASTER_MODE, (width, height), tuple(color))


def to_raster(image: Any) -> Any:
    """
    Return an independent RGBA copy of a Pillow image.

    Images in other modes (RGB, L, P, ...) are converted; RGBA images are
    copied so the result never shares a pixel buffer with the input.

    Raises:
        TypeError: If image is not a PIL Image
    """
    _require_image(image)
    if image.mode != RASTER_MODE:
        return image.convert(RASTER_MODE)
    return image.copy()


def copy_raster(raster: Any) -> Any:
    """Deep copy of a raster."""
    _require_image(raster)
    return raster.copy()


def rasters_equal(first: Any, second: Any) -> bool:
    """
    Compare two rasters pixel for pixel.

    Returns:
        True when both have the same mode, size and pixel bytes
    """
    return (
        first.mode == second.mode
        and first.size == second.size
        and first.tobytes() == second.tobytes()
    )


def raster_to_array(raster: Any) -> np.ndarray:
    """
    Copy raster pixels into a writable numpy array.

    Returns:
        Array of shape (height, width, 4), dtype uint8
    """
    if raster.mode != RASTER_MODE:
        raster = raster.convert(RASTER_MODE)
    return np.array(raster, dtype=np.uint8)


def array_to_raster(pixels: np.ndarray) -> Any:
    """
    Build a raster from a (height, width, 4) array.

    Values are expected to already lie in [0, 255].
    """
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"Expected array of shape (h, w, 4), got {pixels.shape}")
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
