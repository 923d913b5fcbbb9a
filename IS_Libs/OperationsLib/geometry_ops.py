"""
Geometric transforms: rotate, flip and crop.

Rotation resamples with bicubic interpolation onto a canvas grown to the
bounding box of the rotated source; flips and crops copy pixels exactly.

Classes:
    CropRect: Crop rectangle in raster pixel coordinates

Functions:
    rotated_canvas_size: Canvas size needed for a rotation
    apply_rotate: Rotate about the image center
    apply_flip_horizontal: Mirror left-right
    apply_flip_vertical: Mirror top-bottom
    clip_crop_rect: Clip a crop rectangle to raster bounds
    apply_crop: Crop to a rectangle (no-op when the clipped area is empty)
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from PIL import Image

from IS_Libs.constants import RASTER_MODE, TRANSPARENT


@dataclass(frozen=True)
class CropRect:
    """Crop rectangle in raster pixel coordinates.

    Attributes:
        x: Left edge
        y: Top edge
        width: Rectangle width
        height: Rectangle height
    """
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        for name in ("x", "y", "width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"CropRect.{name} must be an int, got {type(value)}")

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CropRect":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)


# ============================================================================
# Rotation
# ============================================================================

def normalize_degrees(degrees: float) -> float:
    """Map any angle into [0, 360)."""
    angle = float(degrees) % 360
    # Tiny negative angles round up to exactly 360
    return 0.0 if angle >= 360 else angle


def rotated_canvas_size(width: int, height: int, degrees: float) -> Tuple[int, int]:
    """
    Size of the axis-aligned bounding box of a rotated width x height rectangle.

    Returns:
        (floor(w*|cos| + h*|sin|), floor(h*|cos| + w*|sin|))
    """
    theta = math.radians(normalize_degrees(degrees))
    # Rounded like PIL.Image.rotate so quarter turns are exact
    sin = abs(round(math.sin(theta), 15))
    cos = abs(round(math.cos(theta), 15))
    new_width = int(math.floor(width * cos + height * sin))
    new_height = int(math.floor(height * cos + width * sin))
    return new_width, new_height


def apply_rotate(image: Any, degrees: float) -> Any:
    """
    Rotate clockwise (in screen coordinates) about the image center.

    The canvas grows to fit the rotated source, which is centered within it.
    Pixels not covered by the source become fully transparent. A normalized
    angle of 0 returns the input unchanged.

    Args:
        image: RGBA PIL Image
        degrees: Rotation angle; any value, normalized into [0, 360)

    Returns:
        Rotated RGBA PIL Image
    """
    angle = normalize_degrees(degrees)
    if angle == 0:
        return image

    if image.mode != RASTER_MODE:
        image = image.convert(RASTER_MODE)

    width, height = image.size
    new_width, new_height = rotated_canvas_size(width, height, angle)

    theta = math.radians(angle)
    cos = round(math.cos(theta), 15)
    sin = round(math.sin(theta), 15)

    # Inverse map: output point -> source point, both about their centers
    out_cx, out_cy = new_width / 2.0, new_height / 2.0
    src_cx, src_cy = width / 2.0, height / 2.0
    matrix = (
        cos, sin, src_cx - cos * out_cx - sin * out_cy,
        -sin, cos, src_cy + sin * out_cx - cos * out_cy,
    )

    return image.transform(
        (new_width, new_height),
        Image.Transform.AFFINE,
        matrix,
        resample=Image.Resampling.BICUBIC,
        fillcolor=TRANSPARENT,
    )


# ============================================================================
# Flips
# ============================================================================

def apply_flip_horizontal(image: Any) -> Any:
    """Mirror the image about its vertical center axis."""
    return image.transpose(Image.Transpose.FLIP_LEFT_RIGHT)


def apply_flip_vertical(image: Any) -> Any:
    """Mirror the image about its horizontal center axis."""
    return image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)


# ============================================================================
# Crop
# ============================================================================

def clip_crop_rect(rect: CropRect, width: int, height: int) -> Optional[CropRect]:
    """
    Clip a crop rectangle to raster bounds.

    Returns:
        The clipped rectangle, or None when it has no area left
    """
    x = max(0, rect.x)
    y = max(0, rect.y)
    clipped_width = min(width - x, rect.width)
    clipped_height = min(height - y, rect.height)

    if clipped_width <= 0 or clipped_height <= 0:
        return None
    return CropRect(x, y, clipped_width, clipped_height)


def apply_crop(image: Any, rect: CropRect) -> Any:
    """
    Crop the image to rect, clipped to the image bounds.

    If nothing of the rectangle lies inside the image the input is
    returned unchanged.
    """
    clipped = clip_crop_rect(rect, image.width, image.height)
    if clipped is None:
        return image
    box = (clipped.x, clipped.y, clipped.x + clipped.width, clipped.y + clipped.height)
    return image.crop(box)


# ============================================================================
# Registry executors
# ============================================================================

def execute_rotate(params: Dict[str, Any], raster: Any) -> Any:
    return apply_rotate(raster, float(params.get("degrees", 0.0)))


def execute_flip_horizontal(params: Dict[str, Any], raster: Any) -> Any:
    return apply_flip_horizontal(raster)


def execute_flip_vertical(params: Dict[str, Any], raster: Any) -> Any:
    return apply_flip_vertical(raster)


def execute_crop(params: Dict[str, Any], raster: Any) -> Any:
    return apply_crop(raster, CropRect.from_dict(params))
