"""Error taxonomy for plane indexing and buffer exchange.

Every error derives from ``PlaneBridgeError`` and from the closest builtin,
so callers that only know ``ValueError``/``IndexError``/``TypeError`` still
catch them. Plane labels, insertion and deletion raise the builtin
``NotImplementedError`` directly.
"""

from __future__ import annotations

__all__ = [
    "PlaneBridgeError",
    "InvalidShapeError",
    "PlaneOutOfRangeError",
    "CoordinateOutOfRangeError",
    "UnsupportedStorageError",
    "BufferShapeMismatchError",
]


class PlaneBridgeError(Exception):
    """Base class for all planebridge errors."""


class InvalidShapeError(PlaneBridgeError, ValueError):
    """Shape vector is too short, has non-positive lengths or misordered axes."""


class PlaneOutOfRangeError(PlaneBridgeError, IndexError):
    """Plane number outside ``[0, plane_count)``."""


class CoordinateOutOfRangeError(PlaneBridgeError, IndexError):
    """Coordinate or raster index exceeds an axis length."""


class UnsupportedStorageError(PlaneBridgeError, TypeError):
    """The bridged array exposes no planar (contiguous-per-plane) storage."""


class BufferShapeMismatchError(PlaneBridgeError, ValueError):
    """Buffer element count or sample type does not match the plane."""
