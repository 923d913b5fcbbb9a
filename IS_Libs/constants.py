"""
Constants and configuration values for Image Studio.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Application
APP_TITLE = "Image Studio"
UNTITLED_LABEL = "Untitled"

# History
HISTORY_CAPACITY = 20

# Raster format
RASTER_MODE = "RGBA"
TRANSPARENT = (0, 0, 0, 0)
CHANNEL_MAX = 255

# Built-in color remap catalog (presentation order)
BUILTIN_FILTER_NAMES = ("None", "Grayscale", "Invert", "Sepia", "Funk")

# Operation kinds
KIND_NONE = "None"
KIND_GRAYSCALE = "Grayscale"
KIND_INVERT = "Invert"
KIND_SEPIA = "Sepia"
KIND_FUNK = "Funk"
KIND_BRIGHTNESS = "Brightness"
KIND_CONTRAST = "Contrast"
KIND_GAUSSIAN_BLUR = "Gaussian Blur"
KIND_SHARPEN = "Sharpen"
KIND_ROTATE = "Rotate"
KIND_FLIP_HORIZONTAL = "Flip Horizontal"
KIND_FLIP_VERTICAL = "Flip Vertical"
KIND_CROP = "Crop"
KIND_PIPELINE = "Pipeline"

# Serialized operation field names
FIELD_KIND = "kind"
FIELD_PARAMS = "params"
FIELD_STAGES = "stages"

# Color remap weights (fixed point, per mille)
LUMA_WEIGHTS = (299, 587, 114)
SEPIA_MATRIX = (
    (393, 769, 189),
    (349, 686, 168),
    (272, 534, 131),
)
FIXED_POINT_SCALE = 1000

# Tone
TONE_PIVOT = 128.0

# Convolution
SHARPEN_KERNEL = (
    (0, -1, 0),
    (-1, 5, -1),
    (0, -1, 0),
)

# File output
PNG_EXTENSION = ".png"
JPEG_EXTENSION = ".jpg"
JPEG_EXTENSIONS = {".jpg", ".jpeg"}
DEFAULT_JPEG_QUALITY = 0.92
MIN_JPEG_QUALITY = 0.1
MAX_JPEG_QUALITY = 1.0
