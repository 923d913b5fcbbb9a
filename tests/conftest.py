"""
Pytest configuration and shared fixtures for Image Studio tests.

This module provides shared rasters used across multiple test modules.
"""

import pytest
from PIL import Image


@pytest.fixture
def red_raster():
    """
    Provide a 2x2 opaque red raster.

    Returns:
        RGBA PIL Image filled with (255, 0, 0, 255)
    """
    return Image.new("RGBA", (2, 2), (255, 0, 0, 255))


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA color tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 128),    # Green, half transparent
        (0, 0, 255, 0),      # Blue, fully transparent
        (255, 255, 255, 255),  # White
        (0, 0, 0, 255),      # Black
        (128, 64, 32, 200),  # Brown
    ]


@pytest.fixture
def patterned_raster(sample_rgba_colors):
    """
    Provide a 6x4 raster where every pixel differs from its neighbours.

    Returns:
        RGBA PIL Image cycling through sample_rgba_colors with varied values
    """
    image = Image.new("RGBA", (6, 4))
    pixels = image.load()
    for y in range(4):
        for x in range(6):
            r, g, b, a = sample_rgba_colors[(x + y) % len(sample_rgba_colors)]
            pixels[x, y] = ((r + 7 * x) % 256, (g + 11 * y) % 256, (b + 3 * x * y) % 256, a)
    return image
