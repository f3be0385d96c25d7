"""Plane indexing bridge between N-dimensional arrays and 2-D plane stacks."""

from planebridge.adapter import PlaneAccessAdapter
from planebridge.axes import AxisRole, ShapeVector
from planebridge.buffers import PlaneBuffer, SampleType, make_buffer
from planebridge.config import DEFAULT_CONFIG, BridgeConfig
from planebridge.errors import (
    BufferShapeMismatchError,
    CoordinateOutOfRangeError,
    InvalidShapeError,
    PlaneBridgeError,
    PlaneOutOfRangeError,
    UnsupportedStorageError,
)
from planebridge.shape_math import (
    compose_raster_index,
    compute_plane_count,
    decompose_plane_number,
    extra_axis_lengths,
)
from planebridge.storage import DenseArray, PlanarArray, PlanarStorage, SampledArray

__all__ = [
    "__version__",
    "AxisRole",
    "ShapeVector",
    "PlaneBuffer",
    "SampleType",
    "make_buffer",
    "BridgeConfig",
    "DEFAULT_CONFIG",
    "PlaneBridgeError",
    "InvalidShapeError",
    "PlaneOutOfRangeError",
    "CoordinateOutOfRangeError",
    "UnsupportedStorageError",
    "BufferShapeMismatchError",
    "compute_plane_count",
    "extra_axis_lengths",
    "decompose_plane_number",
    "compose_raster_index",
    "PlanarStorage",
    "SampledArray",
    "PlanarArray",
    "DenseArray",
    "PlaneAccessAdapter",
]

__version__ = "0.1.0"
