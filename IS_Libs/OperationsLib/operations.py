"""
Operations and pipelines for Image Studio.

An Operation is a small immutable value: a kind (the registry key of the
function that does the work) plus the parameters captured when it was
constructed. Calling an Operation with a raster runs the registered executor
and returns a new raster. A Pipeline is an Operation whose stages are applied
left to right, so pipelines nest freely.

Operations are plain data, which makes them easy to compare, log and
serialize (see Operation.to_dict and operation_from_dict).

Example:
    >>> from IS_Libs.OperationsLib.operations import compose, named, brightness, gaussian_blur
    >>> pipeline = compose(named("Sepia"), brightness(0.1), gaussian_blur(2))
    >>> edited = pipeline(raster)
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from IS_Libs import constants
from IS_Libs.OperationsLib.geometry_ops import CropRect
from IS_Libs.OperationsLib.operation_registry import get_default_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operation:
    """A configured raster transform.

    Attributes:
        kind: Registry key of the executor (e.g. "Sepia", "Rotate")
        params: Read-only parameters passed to the executor
    """
    kind: str
    params: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __call__(self, raster: Any) -> Any:
        return get_default_registry().execute(self.kind, self.params, raster)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            constants.FIELD_KIND: self.kind,
            constants.FIELD_PARAMS: dict(self.params),
        }


@dataclass(frozen=True)
class Pipeline(Operation):
    """An ordered sequence of operations, itself an operation.

    Attributes:
        stages: Operations applied left to right; empty means identity
    """
    kind: str = constants.KIND_PIPELINE
    stages: Tuple[Operation, ...] = ()

    def __call__(self, raster: Any) -> Any:
        current = raster
        for stage in self.stages:
            logger.debug(f"Running pipeline stage: {stage.kind}")
            current = stage(current)
        return current

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, stages included."""
        return {
            constants.FIELD_KIND: self.kind,
            constants.FIELD_STAGES: [stage.to_dict() for stage in self.stages],
        }


# ============================================================================
# Parameter validation
# ============================================================================

def _require_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number, got {type(value)}")
    return float(value)


def _require_unit_range(name: str, value: Any) -> float:
    number = _require_number(name, value)
    if not (-1.0 <= number <= 1.0):
        raise ValueError(f"{name} must be in [-1, 1], got {value}")
    return number


# ============================================================================
# Color remap
# ============================================================================

def none() -> Operation:
    """Identity operation."""
    return Operation(constants.KIND_NONE)


def grayscale() -> Operation:
    return Operation(constants.KIND_GRAYSCALE)


def invert() -> Operation:
    return Operation(constants.KIND_INVERT)


def sepia() -> Operation:
    return Operation(constants.KIND_SEPIA)


def funk() -> Operation:
    """Channel swizzle: R takes G, G takes B, B takes R."""
    return Operation(constants.KIND_FUNK)


# ============================================================================
# Tone
# ============================================================================

def brightness(delta: float) -> Operation:
    """
    Brightness adjustment.

    Args:
        delta: Amount in [-1, 1]; 255 * delta is added to red, green and blue

    Raises:
        TypeError: If delta is not a number
        ValueError: If delta is outside [-1, 1]
    """
    return Operation(constants.KIND_BRIGHTNESS, {"delta": _require_unit_range("delta", delta)})


def contrast(amount: float) -> Operation:
    """
    Contrast adjustment around mid-gray.

    Args:
        amount: Amount in [-1, 1]; 0 is identity

    Raises:
        TypeError: If amount is not a number
        ValueError: If amount is outside [-1, 1]
    """
    return Operation(constants.KIND_CONTRAST, {"amount": _require_unit_range("amount", amount)})


# ============================================================================
# Convolution
# ============================================================================

def gaussian_blur(radius: int) -> Operation:
    """
    Separable Gaussian blur.

    Args:
        radius: Integer kernel radius; 0 or negative gives the identity operation

    Raises:
        TypeError: If radius is not an int
    """
    if isinstance(radius, bool) or not isinstance(radius, int):
        raise TypeError(f"radius must be an int, got {type(radius)}")
    if radius <= 0:
        return none()
    return Operation(constants.KIND_GAUSSIAN_BLUR, {"radius": radius})


def sharpen() -> Operation:
    return Operation(constants.KIND_SHARPEN)


# ============================================================================
# Geometry
# ============================================================================

def rotate(degrees: float) -> Operation:
    """
    Rotation about the image center, expanding the canvas to fit.

    Raises:
        TypeError: If degrees is not a number
        ValueError: If degrees is not finite
    """
    angle = _require_number("degrees", degrees)
    if not math.isfinite(angle):
        raise ValueError(f"degrees must be finite, got {degrees}")
    return Operation(constants.KIND_ROTATE, {"degrees": angle})


def rotate_left() -> Operation:
    """Quarter turn counter-clockwise."""
    return rotate(-90)


def rotate_right() -> Operation:
    """Quarter turn clockwise."""
    return rotate(90)


def flip_horizontal() -> Operation:
    return Operation(constants.KIND_FLIP_HORIZONTAL)


def flip_vertical() -> Operation:
    return Operation(constants.KIND_FLIP_VERTICAL)


def crop(rect: Union[CropRect, Sequence[int]]) -> Operation:
    """
    Crop to a rectangle given in raster pixel coordinates.

    Args:
        rect: CropRect or (x, y, width, height)

    Raises:
        TypeError: If rect is neither a CropRect nor a 4-item sequence of ints
    """
    if not isinstance(rect, CropRect):
        if isinstance(rect, (str, bytes)) or not isinstance(rect, Sequence) or len(rect) != 4:
            raise TypeError(f"rect must be a CropRect or (x, y, width, height), got {rect!r}")
        rect = CropRect(*rect)
    return Operation(constants.KIND_CROP, rect.to_dict())


# ============================================================================
# Composition and catalog
# ============================================================================

def compose(*operations: Optional[Operation]) -> Pipeline:
    """
    Build a pipeline from operations, skipping None entries.

    Raises:
        TypeError: If an entry is neither an Operation nor None
    """
    stages = []
    for operation in operations:
        if operation is None:
            continue
        if not isinstance(operation, Operation):
            raise TypeError(f"Expected Operation, got {type(operation)}")
        stages.append(operation)
    return Pipeline(stages=tuple(stages))


_NAMED_FILTERS: Dict[str, Callable[[], Operation]] = {
    constants.KIND_NONE: none,
    constants.KIND_GRAYSCALE: grayscale,
    constants.KIND_INVERT: invert,
    constants.KIND_SEPIA: sepia,
    constants.KIND_FUNK: funk,
}


def builtin_names() -> List[str]:
    """Names of the built-in color remaps, in presentation order."""
    return list(constants.BUILTIN_FILTER_NAMES)


def named(name: str) -> Operation:
    """
    Look up a built-in color remap by exact, case-sensitive name.

    Unknown names resolve to the identity operation.
    """
    factory = _NAMED_FILTERS.get(name) if isinstance(name, str) else None
    if factory is None:
        logger.debug(f"Unknown filter name {name!r}, using identity")
        return none()
    return factory()


def adjustment_pipeline(
    filter_name: str = constants.KIND_NONE,
    brightness_delta: float = 0.0,
    contrast_amount: float = 0.0,
    blur_radius: int = 0,
) -> Pipeline:
    """
    Pipeline for the editor's apply controls.

    Runs the named color remap, then brightness, then contrast, then a
    Gaussian blur (identity when blur_radius <= 0).
    """
    return compose(
        named(filter_name),
        brightness(brightness_delta),
        contrast(contrast_amount),
        gaussian_blur(blur_radius),
    )


# ============================================================================
# Serialization
# ============================================================================

_FACTORIES: Dict[str, Callable[[Dict[str, Any]], Operation]] = {
    constants.KIND_NONE: lambda params: none(),
    constants.KIND_GRAYSCALE: lambda params: grayscale(),
    constants.KIND_INVERT: lambda params: invert(),
    constants.KIND_SEPIA: lambda params: sepia(),
    constants.KIND_FUNK: lambda params: funk(),
    constants.KIND_BRIGHTNESS: lambda params: brightness(params.get("delta", 0.0)),
    constants.KIND_CONTRAST: lambda params: contrast(params.get("amount", 0.0)),
    constants.KIND_GAUSSIAN_BLUR: lambda params: gaussian_blur(params.get("radius", 0)),
    constants.KIND_SHARPEN: lambda params: sharpen(),
    constants.KIND_ROTATE: lambda params: rotate(params.get("degrees", 0.0)),
    constants.KIND_FLIP_HORIZONTAL: lambda params: flip_horizontal(),
    constants.KIND_FLIP_VERTICAL: lambda params: flip_vertical(),
    constants.KIND_CROP: lambda params: crop(CropRect.from_dict(params)),
}


def operation_from_dict(data: Dict[str, Any]) -> Operation:
    """
    Rebuild an operation or pipeline from Operation.to_dict output.

    Built-in kinds go through their constructors, so parameters are
    validated again. Kinds registered by callers are rebuilt as plain
    Operations.

    Raises:
        ValueError: If the kind is missing or not registered
    """
    kind = str(data.get(constants.FIELD_KIND, "")).strip()

    if kind == constants.KIND_PIPELINE:
        stages = data.get(constants.FIELD_STAGES, [])
        return Pipeline(stages=tuple(operation_from_dict(stage) for stage in stages))

    params = dict(data.get(constants.FIELD_PARAMS) or {})
    factory = _FACTORIES.get(kind)
    if factory is not None:
        return factory(params)

    if not kind or not get_default_registry().has_executor(kind):
        raise ValueError(f"Unknown operation kind: {kind!r}")
    return Operation(kind, params)
