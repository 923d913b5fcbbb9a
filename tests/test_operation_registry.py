"""
Tests for the Operation Executors Registry.

Tests cover:
- Registry creation and basic operations
- Executor registration and lookup
- Executor execution
- Error handling
- Default registry contents
- Caller-registered kinds used through Operation values
"""

import unittest
from unittest import mock

from PIL import Image

from IS_Libs.OperationsLib import operation_registry
from IS_Libs.OperationsLib.operation_registry import (
    OperationRegistry,
    get_default_registry,
    register_default_executors,
)
from IS_Libs.OperationsLib.operations import Operation, operation_from_dict


def _halve_alpha(params, raster):
    factor = params.get("factor", 0.5)
    red, green, blue, alpha = raster.split()
    alpha = alpha.point(lambda value: int(value * factor))
    return Image.merge("RGBA", (red, green, blue, alpha))


class TestOperationRegistry(unittest.TestCase):
    """Test OperationRegistry basic functionality."""

    def setUp(self):
        """Create a fresh registry for each test."""
        self.registry = OperationRegistry()

    def test_registry_creation(self):
        self.assertEqual(self.registry.list_kinds(), [])

    def test_register_executor(self):
        self.registry.register("Halve Alpha", _halve_alpha)

        self.assertTrue(self.registry.has_executor("Halve Alpha"))
        self.assertTrue(self.registry.has_executor("  Halve Alpha "))
        self.assertIn("Halve Alpha", self.registry.list_kinds())

    def test_register_empty_kind_raises_error(self):
        with self.assertRaises(ValueError):
            self.registry.register("  ", _halve_alpha)

    def test_register_non_callable_raises_error(self):
        with self.assertRaises(ValueError):
            self.registry.register("Broken", "not callable")

    def test_register_duplicate_raises_error(self):
        self.registry.register("Halve Alpha", _halve_alpha)
        with self.assertRaises(RuntimeError):
            self.registry.register("Halve Alpha", _halve_alpha)

    def test_get_executor_unknown_raises_key_error(self):
        with self.assertRaises(KeyError):
            self.registry.get_executor("Missing")

    def test_execute(self):
        self.registry.register("Halve Alpha", _halve_alpha)
        image = Image.new("RGBA", (2, 2), (10, 20, 30, 200))

        result = self.registry.execute("Halve Alpha", {"factor": 0.5}, image)

        self.assertEqual(result.getpixel((1, 1)), (10, 20, 30, 100))

    def test_list_kinds_sorted(self):
        self.registry.register("B", _halve_alpha)
        self.registry.register("A", _halve_alpha)
        self.assertEqual(self.registry.list_kinds(), ["A", "B"])


class TestDefaultRegistry(unittest.TestCase):
    """Test the global default registry."""

    def test_singleton(self):
        self.assertIs(get_default_registry(), get_default_registry())

    def test_builtin_kinds_registered(self):
        self.assertEqual(
            get_default_registry().list_kinds(),
            sorted([
                "None", "Grayscale", "Invert", "Sepia", "Funk", "Brightness",
                "Contrast", "Gaussian Blur", "Sharpen", "Rotate",
                "Flip Horizontal", "Flip Vertical", "Crop",
            ]),
        )

    def test_custom_kind_usable_as_operation(self):
        registry = OperationRegistry()
        register_default_executors(registry)
        registry.register("Halve Alpha", _halve_alpha)

        with mock.patch.object(operation_registry, "_default_registry", registry):
            image = Image.new("RGBA", (1, 1), (1, 2, 3, 100))
            result = Operation("Halve Alpha", {"factor": 0.5})(image)
            restored = operation_from_dict({"kind": "Halve Alpha", "params": {"factor": 0.5}})

        self.assertEqual(result.getpixel((0, 0)), (1, 2, 3, 50))
        self.assertEqual(restored, Operation("Halve Alpha", {"factor": 0.5}))
        self.assertFalse(get_default_registry().has_executor("Halve Alpha"))
