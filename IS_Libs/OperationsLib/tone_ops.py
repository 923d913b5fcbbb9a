"""
Tone adjustment operations (brightness and contrast).

Both adjustments are linear per-channel transforms of red, green and blue
(alpha is left untouched), so they are evaluated once per possible channel
value into a 256-entry lookup table and applied with Image.point.

Rounding rule: linear transform, round half up, then clamp to [0, 255].
"""

import math
from typing import Any, Dict, List

from IS_Libs.constants import CHANNEL_MAX, RASTER_MODE, TONE_PIVOT


def _clamp_channel(value: float) -> int:
    rounded = math.floor(value + 0.5)
    return max(0, min(CHANNEL_MAX, rounded))


def build_linear_table(gain: float, offset: float) -> List[int]:
    """
    Build a lookup table for out = clamp(gain * channel + offset).

    Args:
        gain: Multiplier applied to each channel value
        offset: Value added after scaling

    Returns:
        List of 256 output values, one per input channel value
    """
    return [_clamp_channel(gain * value + offset) for value in range(256)]


def _apply_rgb_table(image: Any, table: List[int]) -> Any:
    if image.mode != RASTER_MODE:
        image = image.convert(RASTER_MODE)
    identity = list(range(256))
    return image.point(table * 3 + identity)


def apply_brightness(image: Any, delta: float) -> Any:
    """
    Shift red, green and blue by 255 * delta.

    Args:
        image: RGBA PIL Image
        delta: Brightness change in [-1, 1]; -1 turns colors black, 1 white

    Returns:
        New RGBA PIL Image with identical alpha
    """
    table = build_linear_table(1.0, CHANNEL_MAX * delta)
    return _apply_rgb_table(image, table)


def apply_contrast(image: Any, amount: float) -> Any:
    """
    Stretch or compress red, green and blue around mid-gray.

    The gain is c = 1 + amount and the bias t = 128 * (1 - c), so
    amount = 0 is identity and amount = -1 flattens every channel to 128.

    Args:
        image: RGBA PIL Image
        amount: Contrast change in [-1, 1]

    Returns:
        New RGBA PIL Image with identical alpha
    """
    gain = 1.0 + amount
    bias = TONE_PIVOT * (1.0 - gain)
    table = build_linear_table(gain, bias)
    return _apply_rgb_table(image, table)


def execute_brightness(params: Dict[str, Any], raster: Any) -> Any:
    return apply_brightness(raster, float(params.get("delta", 0.0)))


def execute_contrast(params: Dict[str, Any], raster: Any) -> Any:
    return apply_contrast(raster, float(params.get("amount", 0.0)))
