"""
Raster input/output for Image Studio.

Thin layer over Pillow's codecs. Readers hand the document model either a
complete RGBA raster or nothing; writers report success as a boolean. Codec
and file-system failures are logged here and never raised to the caller.

Functions:
    read_raster: Decode an image file into an RGBA raster
    write_png: Save a raster as PNG
    write_jpeg: Save a raster as JPEG with a quality in [0.1, 1.0]
    write_auto: Pick PNG or JPEG from the file extension
    ensure_extension: Append an extension when missing
    parse_jpeg_quality: Validate a user-entered JPEG quality
"""

from pathlib import Path
from typing import Any, Optional, Union
import logging

from PIL import Image

from IS_Libs.constants import (
    DEFAULT_JPEG_QUALITY,
    JPEG_EXTENSION,
    JPEG_EXTENSIONS,
    MAX_JPEG_QUALITY,
    MIN_JPEG_QUALITY,
    PNG_EXTENSION,
    RASTER_MODE,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def ensure_extension(path: PathLike, extension: str) -> Path:
    """
    Append extension unless the file name already ends with it (case-insensitive).

    Example:
        >>> ensure_extension("out", ".png")
        PosixPath('out.png')
    """
    path = Path(path)
    if path.name.lower().endswith(extension.lower()):
        return path
    return path.with_name(path.name + extension)


def read_raster(path: PathLike) -> Optional[Any]:
    """
    Decode an image file into an RGBA raster.

    Args:
        path: File to read (PNG, JPEG, or any format Pillow decodes)

    Returns:
        RGBA PIL Image, or None when the file is missing or cannot be decoded
    """
    path = Path(path)
    try:
        with Image.open(path) as image:
            image.load()
            raster = image.convert(RASTER_MODE)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.warning(f"Failed to read image {path}: {e}")
        return None

    logger.debug(f"Read {raster.size[0]}x{raster.size[1]} image from {path}")
    return raster


def write_png(raster: Any, path: PathLike) -> bool:
    """
    Save a raster as PNG (".png" is appended if missing).

    Returns:
        True on success, False if the file could not be written
    """
    output_file = ensure_extension(path, PNG_EXTENSION)
    try:
        raster.save(output_file, format="PNG")
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to save PNG to {output_file}: {e}")
        return False
    return True


def write_jpeg(raster: Any, path: PathLike, quality: float = DEFAULT_JPEG_QUALITY) -> bool:
    """
    Save a raster as JPEG (".jpg" is appended if missing).

    JPEG has no alpha channel, so the raster is flattened to RGB.

    Args:
        raster: RGBA PIL Image
        path: Output file
        quality: Compression quality in [0.1, 1.0]

    Returns:
        True on success, False if the file could not be written

    Raises:
        ValueError: If quality is outside [0.1, 1.0]
    """
    if not (MIN_JPEG_QUALITY <= quality <= MAX_JPEG_QUALITY):
        raise ValueError(
            f"quality must be in [{MIN_JPEG_QUALITY}, {MAX_JPEG_QUALITY}], got {quality}"
        )

    output_file = path if Path(path).suffix.lower() in JPEG_EXTENSIONS else ensure_extension(path, JPEG_EXTENSION)
    try:
        image = raster.convert("RGB") if raster.mode != "RGB" else raster
        image.save(output_file, format="JPEG", quality=int(round(quality * 100)))
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to save JPEG to {output_file}: {e}")
        return False
    return True


def write_auto(raster: Any, path: PathLike) -> bool:
    """
    Save using the format implied by the file extension.

    ".png" saves PNG, ".jpg"/".jpeg" saves JPEG at the default quality,
    anything else saves PNG with ".png" appended.
    """
    suffix = Path(path).suffix.lower()
    if suffix in JPEG_EXTENSIONS:
        return write_jpeg(raster, path, DEFAULT_JPEG_QUALITY)
    return write_png(raster, path)


def parse_jpeg_quality(text: Optional[str]) -> Optional[float]:
    """
    Parse a JPEG quality typed by the user.

    Returns:
        The quality as a float, or None for empty, non-numeric or
        out-of-range input
    """
    if text is None:
        return None
    try:
        value = float(str(text).strip())
    except ValueError:
        return None
    if not (MIN_JPEG_QUALITY <= value <= MAX_JPEG_QUALITY):
        return None
    return value
