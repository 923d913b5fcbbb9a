"""
ImageIOLib - Raster file input/output

This module reads image files into rasters and writes rasters back out
as PNG or JPEG.
"""

from IS_Libs.ImageIOLib.raster_io import (
    ensure_extension,
    read_raster,
    write_png,
    write_jpeg,
    write_auto,
    parse_jpeg_quality,
)

__all__ = [
    "ensure_extension",
    "read_raster",
    "write_png",
    "write_jpeg",
    "write_auto",
    "parse_jpeg_quality",
]
