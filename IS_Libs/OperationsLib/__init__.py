"""
OperationsLib - Raster operation engine

This module provides pure raster transforms (color remap, tone, convolution,
geometry), the Operation and Pipeline value types built on top of them, and
the registry that maps operation kinds to their executors.
"""

from IS_Libs.OperationsLib.raster import (
    RgbaColor,
    new_raster,
    to_raster,
    copy_raster,
    rasters_equal,
)
from IS_Libs.OperationsLib.geometry_ops import CropRect
from IS_Libs.OperationsLib.operation_registry import (
    OperationRegistry,
    get_default_registry,
)
from IS_Libs.OperationsLib.operations import (
    Operation,
    Pipeline,
    none,
    grayscale,
    invert,
    sepia,
    funk,
    brightness,
    contrast,
    gaussian_blur,
    sharpen,
    rotate,
    rotate_left,
    rotate_right,
    flip_horizontal,
    flip_vertical,
    crop,
    compose,
    builtin_names,
    named,
    adjustment_pipeline,
    operation_from_dict,
)

__all__ = [
    "RgbaColor",
    "new_raster",
    "to_raster",
    "copy_raster",
    "rasters_equal",
    "CropRect",
    "OperationRegistry",
    "get_default_registry",
    "Operation",
    "Pipeline",
    "none",
    "grayscale",
    "invert",
    "sepia",
    "funk",
    "brightness",
    "contrast",
    "gaussian_blur",
    "sharpen",
    "rotate",
    "rotate_left",
    "rotate_right",
    "flip_horizontal",
    "flip_vertical",
    "crop",
    "compose",
    "builtin_names",
    "named",
    "adjustment_pipeline",
    "operation_from_dict",
]
