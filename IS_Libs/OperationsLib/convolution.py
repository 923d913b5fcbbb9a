"""
Convolution Operations.

Provides kernel-based filters:
- Gaussian blur: separable, applied as a horizontal pass then a vertical pass
- Sharpen: fixed 3x3 kernel, single pass

Each pass follows the same rules:
- Color is convolved in alpha-premultiplied space, then un-premultiplied.
- Output pixels whose kernel footprint would reach outside the raster are
  copied unchanged from the pass input (no wrapping, no edge extension).
- Results are rounded half up and clamped to [0, 255], so the intermediate
  image between the two blur passes is quantized to 8 bits.

Example:
    >>> from PIL import Image
    >>> img = Image.new("RGBA", (64, 64), (200, 40, 10, 255))
    >>> blurred = apply_gaussian_blur(img, radius=3)
    >>> sharpened = apply_sharpen(img)
"""

from typing import Any, Dict

import numpy as np

from IS_Libs.constants import CHANNEL_MAX, SHARPEN_KERNEL
from IS_Libs.OperationsLib.raster import array_to_raster, raster_to_array


# ============================================================================
# Kernels
# ============================================================================

def gaussian_kernel(radius: int) -> np.ndarray:
    """
    Build a normalized 1-D Gaussian kernel.

    Args:
        radius: Kernel radius (>= 1); the kernel has 2 * radius + 1 taps

    Returns:
        float32 array summing to 1 with standard deviation radius / 2 + 0.5

    Raises:
        ValueError: If radius < 1
    """
    if radius < 1:
        raise ValueError(f"radius must be >= 1, got {radius}")

    sigma = np.float32(radius / 2.0 + 0.5)
    offsets = np.arange(-radius, radius + 1, dtype=np.float32)
    weights = np.exp(-(offsets * offsets) / (2.0 * sigma * sigma)).astype(np.float32)
    return weights / weights.sum(dtype=np.float32)


def sharpen_kernel() -> np.ndarray:
    """Return the fixed 3x3 sharpen kernel as a float32 array."""
    return np.array(SHARPEN_KERNEL, dtype=np.float32)


# ============================================================================
# Core pass
# ============================================================================

def _premultiply(pixels: np.ndarray) -> np.ndarray:
    values = pixels.astype(np.float32)
    values[..., :3] *= values[..., 3:4] / np.float32(CHANNEL_MAX)
    return values


def _unpremultiply(values: np.ndarray) -> np.ndarray:
    alpha = np.clip(np.floor(values[..., 3] + 0.5), 0, CHANNEL_MAX)
    scale = np.divide(
        np.float32(CHANNEL_MAX),
        alpha,
        out=np.zeros_like(alpha),
        where=alpha > 0,
    )
    color = np.clip(np.floor(values[..., :3] * scale[..., None] + 0.5), 0, CHANNEL_MAX)

    result = np.empty(values.shape, dtype=np.uint8)
    result[..., :3] = color
    result[..., 3] = alpha
    return result


def convolve_pixels(pixels: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Run one convolution pass over a (height, width, 4) uint8 array.

    The kernel is a 2-D array with odd dimensions; a row vector convolves
    horizontally and a column vector vertically. Pixels closer to the border
    than the kernel radius keep their input value.

    Returns:
        New uint8 array with the same shape as pixels
    """
    kernel_height, kernel_width = kernel.shape
    radius_y, radius_x = kernel_height // 2, kernel_width // 2
    height, width = pixels.shape[:2]

    result = pixels.copy()
    inner_height = height - 2 * radius_y
    inner_width = width - 2 * radius_x
    if inner_height <= 0 or inner_width <= 0:
        return result

    source = _premultiply(pixels)
    accumulator = np.zeros((inner_height, inner_width, 4), dtype=np.float32)

    # True convolution: the kernel is mirrored before sliding over the source
    flipped = kernel[::-1, ::-1]
    for dy in range(kernel_height):
        for dx in range(kernel_width):
            weight = flipped[dy, dx]
            if weight == 0:
                continue
            accumulator += weight * source[dy:dy + inner_height, dx:dx + inner_width]

    result[radius_y:radius_y + inner_height, radius_x:radius_x + inner_width] = (
        _unpremultiply(accumulator)
    )
    return result


# ============================================================================
# Filters
# ============================================================================

def apply_separable_convolution(image: Any, horizontal: np.ndarray, vertical: np.ndarray) -> Any:
    """
    Convolve with a horizontal 1-D kernel, then with a vertical 1-D kernel.

    Args:
        image: RGBA PIL Image
        horizontal: 1-D kernel for the row pass
        vertical: 1-D kernel for the column pass

    Returns:
        New RGBA PIL Image
    """
    pixels = raster_to_array(image)
    pixels = convolve_pixels(pixels, np.asarray(horizontal, dtype=np.float32).reshape(1, -1))
    pixels = convolve_pixels(pixels, np.asarray(vertical, dtype=np.float32).reshape(-1, 1))
    return array_to_raster(pixels)


def apply_gaussian_blur(image: Any, radius: int) -> Any:
    """
    Apply a separable Gaussian blur.

    Args:
        image: RGBA PIL Image
        radius: Integer kernel radius; 0 or less returns the image unchanged

    Returns:
        Blurred RGBA PIL Image (same size as input)
    """
    if radius <= 0:
        return image
    kernel = gaussian_kernel(radius)
    return apply_separable_convolution(image, kernel, kernel)


def apply_sharpen(image: Any) -> Any:
    """Apply the 3x3 sharpen kernel in a single pass."""
    pixels = raster_to_array(image)
    return array_to_raster(convolve_pixels(pixels, sharpen_kernel()))


def execute_gaussian_blur(params: Dict[str, Any], raster: Any) -> Any:
    return apply_gaussian_blur(raster, int(params.get("radius", 0)))


def execute_sharpen(params: Dict[str, Any], raster: Any) -> Any:
    return apply_sharpen(raster)
