"""
Operation Executors Registry.

Maps each operation kind (e.g. "Gaussian Blur") to a pure function that takes
the operation parameters and a raster and returns a new raster. Operation
values dispatch through the global default registry, and operation_from_dict
consults it to accept kinds registered by callers.

Classes:
    OperationRegistry: Registry for operation executors

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_executors: Register all built-in operation executors
"""

from typing import Any, Callable, Dict, List, Mapping, Optional
import logging

from IS_Libs import constants

logger = logging.getLogger(__name__)

# Type alias for executor function
ExecutorFunction = Callable[[Mapping[str, Any], Any], Any]


class OperationRegistry:
    """
    Registry for operation executors.

    Example:
        >>> registry = OperationRegistry()
        >>> registry.register("Invert", execute_invert)
        >>> result = registry.execute("Invert", {}, raster)
    """

    def __init__(self):
        self._executors: Dict[str, ExecutorFunction] = {}

    def register(self, kind: str, executor: ExecutorFunction) -> None:
        """
        Register an operation executor.

        Args:
            kind: Unique operation kind (e.g., "Sepia")
            executor: Callable accepting (params, raster) and returning a raster

        Raises:
            ValueError: If kind is empty or executor is not callable
            RuntimeError: If kind is already registered
        """
        kind = str(kind).strip()

        if not kind:
            raise ValueError("kind cannot be empty")

        if not callable(executor):
            raise ValueError(f"executor must be callable, got {type(executor)}")

        if kind in self._executors:
            raise RuntimeError(f"Operation kind '{kind}' is already registered")

        self._executors[kind] = executor
        logger.debug(f"Registered executor for operation kind: {kind}")

    def get_executor(self, kind: str) -> ExecutorFunction:
        """
        Get the executor for an operation kind.

        Raises:
            KeyError: If kind is not registered
        """
        kind = str(kind).strip()

        if kind not in self._executors:
            available = ", ".join(self.list_kinds())
            raise KeyError(
                f"No executor registered for operation kind '{kind}'. "
                f"Available kinds: {available}"
            )

        return self._executors[kind]

    def has_executor(self, kind: str) -> bool:
        """Check if an executor is registered for an operation kind."""
        return str(kind).strip() in self._executors

    def execute(self, kind: str, params: Mapping[str, Any], raster: Any) -> Any:
        """
        Execute an operation by looking up its executor.

        Args:
            kind: The operation kind to execute
            params: Operation parameters
            raster: Input raster

        Returns:
            Result raster from the executor

        Raises:
            KeyError: If kind is not registered
        """
        executor = self.get_executor(kind)
        return executor(params, raster)

    def list_kinds(self) -> List[str]:
        """Sorted list of all registered operation kinds."""
        return sorted(self._executors.keys())


# Global singleton registry
_default_registry: Optional[OperationRegistry] = None


def get_default_registry() -> OperationRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in executors.
    """
    global _default_registry

    if _default_registry is None:
        registry = OperationRegistry()
        register_default_executors(registry)
        _default_registry = registry

    return _default_registry


def register_default_executors(registry: OperationRegistry) -> None:
    """
    Register all built-in operation executors.

    Args:
        registry: The registry to register executors with
    """
    from IS_Libs.OperationsLib.color_ops import (
        execute_funk,
        execute_grayscale,
        execute_invert,
        execute_none,
        execute_sepia,
    )
    from IS_Libs.OperationsLib.tone_ops import execute_brightness, execute_contrast
    from IS_Libs.OperationsLib.convolution import execute_gaussian_blur, execute_sharpen
    from IS_Libs.OperationsLib.geometry_ops import (
        execute_crop,
        execute_flip_horizontal,
        execute_flip_vertical,
        execute_rotate,
    )

    builtins = [
        (constants.KIND_NONE, execute_none),
        (constants.KIND_GRAYSCALE, execute_grayscale),
        (constants.KIND_INVERT, execute_invert),
        (constants.KIND_SEPIA, execute_sepia),
        (constants.KIND_FUNK, execute_funk),
        (constants.KIND_BRIGHTNESS, execute_brightness),
        (constants.KIND_CONTRAST, execute_contrast),
        (constants.KIND_GAUSSIAN_BLUR, execute_gaussian_blur),
        (constants.KIND_SHARPEN, execute_sharpen),
        (constants.KIND_ROTATE, execute_rotate),
        (constants.KIND_FLIP_HORIZONTAL, execute_flip_horizontal),
        (constants.KIND_FLIP_VERTICAL, execute_flip_vertical),
        (constants.KIND_CROP, execute_crop),
    ]

    for kind, executor in builtins:
        registry.register(kind, executor)

    logger.info(f"Registered {len(builtins)} default operation executors")
