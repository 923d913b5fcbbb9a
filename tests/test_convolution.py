"""
Tests for Convolution Operations.

Tests cover:
- Gaussian kernel construction
- Gaussian blur (identity radius, uniform images, edge policy, symmetry)
- Sharpen kernel
- Transparent pixels
"""

import unittest

import numpy as np
from PIL import Image

from IS_Libs.OperationsLib.convolution import (
    apply_gaussian_blur,
    apply_separable_convolution,
    apply_sharpen,
    convolve_pixels,
    gaussian_kernel,
)
from IS_Libs.OperationsLib.raster import rasters_equal


class TestGaussianKernel(unittest.TestCase):
    """Test kernel construction."""

    def test_length(self):
        self.assertEqual(len(gaussian_kernel(3)), 7)

    def test_normalized(self):
        self.assertAlmostEqual(float(gaussian_kernel(4).sum()), 1.0, places=5)

    def test_symmetric_and_peaked(self):
        kernel = gaussian_kernel(2)
        np.testing.assert_allclose(kernel, kernel[::-1])
        self.assertEqual(int(np.argmax(kernel)), 2)

    def test_radius_one_weights(self):
        # sigma = 1.0: weights exp(-0.5), 1, exp(-0.5)
        kernel = gaussian_kernel(1)
        side = np.exp(-0.5)
        np.testing.assert_allclose(
            kernel, np.array([side, 1.0, side]) / (1.0 + 2 * side), rtol=1e-6
        )

    def test_invalid_radius(self):
        with self.assertRaises(ValueError):
            gaussian_kernel(0)


class TestGaussianBlur(unittest.TestCase):
    """Test Gaussian blur."""

    def setUp(self):
        self.uniform = Image.new("RGBA", (20, 15), (200, 40, 10, 255))

    def test_radius_zero_returns_input(self):
        self.assertIs(apply_gaussian_blur(self.uniform, 0), self.uniform)

    def test_uniform_image_unchanged(self):
        result = apply_gaussian_blur(self.uniform, 3)
        self.assertEqual(result.size, self.uniform.size)
        self.assertTrue(rasters_equal(result, self.uniform))

    def test_radius_larger_than_image_is_no_op(self):
        small = Image.new("RGBA", (4, 4), (0, 0, 0, 255))
        small.putpixel((1, 1), (255, 255, 255, 255))
        self.assertTrue(rasters_equal(apply_gaussian_blur(small, 5), small))

    def test_impulse_spreads_symmetrically(self):
        image = Image.new("RGBA", (7, 7), (0, 0, 0, 255))
        image.putpixel((3, 3), (255, 255, 255, 255))

        result = apply_gaussian_blur(image, 1)

        center = result.getpixel((3, 3))[0]
        left, right = result.getpixel((2, 3))[0], result.getpixel((4, 3))[0]
        top, bottom = result.getpixel((3, 2))[0], result.getpixel((3, 4))[0]
        self.assertEqual(left, right)
        self.assertEqual(top, bottom)
        # Each pass is quantized, so row and column neighbours may differ by 1
        self.assertLessEqual(abs(left - top), 1)
        self.assertLess(center, 255)
        self.assertGreater(center, max(left, top))
        self.assertEqual(result.getpixel((3, 3))[3], 255)
        self.assertEqual(result.getpixel((0, 0)), (0, 0, 0, 255))

    def test_border_pixels_are_not_mixed_across_the_edge(self):
        # Left column red, rest blue: a radius 1 blur never touches column 0
        # horizontally, and vertically it only mixes red with red.
        image = Image.new("RGBA", (5, 5), (0, 0, 255, 255))
        for y in range(5):
            image.putpixel((0, y), (255, 0, 0, 255))

        result = apply_gaussian_blur(image, 1)

        for y in range(5):
            self.assertEqual(result.getpixel((0, y)), (255, 0, 0, 255))
        self.assertNotEqual(result.getpixel((1, 2)), (0, 0, 255, 255))

    def test_deterministic(self):
        image = Image.new("RGBA", (9, 9), (0, 0, 0, 255))
        image.putpixel((4, 4), (255, 128, 0, 255))
        self.assertTrue(rasters_equal(apply_gaussian_blur(image, 2), apply_gaussian_blur(image, 2)))

    def test_transparent_neighbours_do_not_darken_color(self):
        # Premultiplied convolution: a transparent black neighbour lowers
        # alpha but leaves the color of the remaining coverage intact.
        image = Image.new("RGBA", (3, 3), (0, 0, 0, 0))
        image.putpixel((1, 1), (255, 0, 0, 255))

        r, g, b, a = apply_separable_convolution(image, [0.4, 0.6, 0.0], [1.0]).getpixel((1, 1))

        self.assertEqual((r, g, b), (255, 0, 0))
        self.assertEqual(a, 153)


class TestSharpen(unittest.TestCase):
    """Test sharpen kernel."""

    def test_uniform_image_unchanged(self):
        image = Image.new("RGBA", (6, 6), (90, 90, 90, 255))
        self.assertTrue(rasters_equal(apply_sharpen(image), image))

    def test_center_pixel_sharpened_and_edges_copied(self):
        image = Image.new("RGBA", (3, 3), (50, 50, 50, 255))
        image.putpixel((1, 1), (100, 60, 10, 255))

        result = apply_sharpen(image)

        # 5 * 100 - 4 * 50 = 300 -> 255; 5 * 60 - 200 = 100; 5 * 10 - 200 -> 0
        self.assertEqual(result.getpixel((1, 1)), (255, 100, 0, 255))
        for x, y in [(0, 0), (1, 0), (2, 0), (0, 1), (2, 1), (0, 2), (1, 2), (2, 2)]:
            self.assertEqual(result.getpixel((x, y)), (50, 50, 50, 255))


class TestConvolvePixels(unittest.TestCase):
    """Test the single-pass primitive directly."""

    def test_identity_kernel(self):
        pixels = np.random.default_rng(7).integers(0, 256, size=(5, 6, 4), dtype=np.uint8)
        pixels[..., 3] = 255
        kernel = np.zeros((3, 3), dtype=np.float32)
        kernel[1, 1] = 1.0

        np.testing.assert_array_equal(convolve_pixels(pixels, kernel), pixels)

    def test_kernel_is_mirrored(self):
        # Weight on the last tap reads the left neighbour after mirroring,
        # so content moves one pixel to the right.
        pixels = np.zeros((1, 5, 4), dtype=np.uint8)
        pixels[..., 3] = 255
        pixels[0, 1, 0] = 200
        kernel = np.array([[0.0, 0.0, 1.0]], dtype=np.float32)

        result = convolve_pixels(pixels, kernel)

        self.assertEqual(int(result[0, 1, 0]), 0)
        self.assertEqual(int(result[0, 2, 0]), 200)
        self.assertEqual(int(result[0, 0, 0]), 0)
