"""
Per-pixel color remap operations.

Every remap works on the red, green and blue channels only and passes the
alpha channel through untouched. There is no dependency between pixels, so
each function is a single vectorized pass over the pixel array.

Fixed-matrix remaps (grayscale, sepia) are evaluated in integer fixed point
(weights in thousandths) and truncated, so results are exact for every input.

Example:
    >>> from PIL import Image
    >>> img = Image.new("RGBA", (4, 4), (255, 0, 0, 255))
    >>> apply_invert(img).getpixel((0, 0))
    (0, 255, 255, 255)
"""

from typing import Any, Dict

import numpy as np
from PIL import Image

from IS_Libs.constants import (
    CHANNEL_MAX,
    FIXED_POINT_SCALE,
    LUMA_WEIGHTS,
    RASTER_MODE,
    SEPIA_MATRIX,
)
from IS_Libs.OperationsLib.raster import array_to_raster, raster_to_array


def _weighted_sum(rgb: np.ndarray, weights) -> np.ndarray:
    red_w, green_w, blue_w = weights
    total = rgb[..., 0] * red_w + rgb[..., 1] * green_w + rgb[..., 2] * blue_w
    return np.clip(total // FIXED_POINT_SCALE, 0, CHANNEL_MAX)


def apply_grayscale(image: Any) -> Any:
    """
    Replace red, green and blue with the pixel luminance.

    Luminance is 0.299R + 0.587G + 0.114B, truncated to an integer.

    Args:
        image: RGBA PIL Image

    Returns:
        New RGBA PIL Image with identical alpha
    """
    pixels = raster_to_array(image)
    rgb = pixels[..., :3].astype(np.int64)
    gray = _weighted_sum(rgb, LUMA_WEIGHTS)

    result = pixels.copy()
    for channel in range(3):
        result[..., channel] = gray
    return array_to_raster(result)


def apply_invert(image: Any) -> Any:
    """Replace each color channel c with 255 - c, keeping alpha."""
    if image.mode != RASTER_MODE:
        image = image.convert(RASTER_MODE)
    inverted = [CHANNEL_MAX - value for value in range(256)]
    identity = list(range(256))
    return image.point(inverted * 3 + identity)


def apply_sepia(image: Any) -> Any:
    """
    Apply the classic sepia tone matrix.

    Output channels:
        R = 0.393R + 0.769G + 0.189B
        G = 0.349R + 0.686G + 0.168B
        B = 0.272R + 0.534G + 0.131B
    each truncated and clamped to [0, 255].
    """
    pixels = raster_to_array(image)
    rgb = pixels[..., :3].astype(np.int64)

    result = pixels.copy()
    for channel, weights in enumerate(SEPIA_MATRIX):
        result[..., channel] = _weighted_sum(rgb, weights)
    return array_to_raster(result)


def apply_funk(image: Any) -> Any:
    """Rotate color channels: R takes G, G takes B, B takes R."""
    if image.mode != RASTER_MODE:
        image = image.convert(RASTER_MODE)
    red, green, blue, alpha = image.split()
    return Image.merge(RASTER_MODE, (green, blue, red, alpha))


# ============================================================================
# Registry executors
# ============================================================================

def execute_none(params: Dict[str, Any], raster: Any) -> Any:
    """Identity: hand the input back untouched."""
    return raster


def execute_grayscale(params: Dict[str, Any], raster: Any) -> Any:
    return apply_grayscale(raster)


def execute_invert(params: Dict[str, Any], raster: Any) -> Any:
    return apply_invert(raster)


def execute_sepia(params: Dict[str, Any], raster: Any) -> Any:
    return apply_sepia(raster)


def execute_funk(params: Dict[str, Any], raster: Any) -> Any:
    return apply_funk(raster)
