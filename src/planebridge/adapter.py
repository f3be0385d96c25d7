"""Plane-number addressed access to an N-dimensional planar array.

``PlaneAccessAdapter`` serves a consumer that only understands a flat
sequence of 2-D planes. Each request for plane ``k`` is translated into a
coordinate over the extra axes and then into the raster index of the
storage buffer that holds the plane.

Notes
-----
- The adapter does no locking; the owning array serialises concurrent
  ``get_plane``/``set_plane`` calls.
- ``set_plane`` validates everything before touching storage, so a failed
  call leaves the plane unchanged.
- Buffers are exchanged by reference; no plane data is copied.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from planebridge.axes import AxisRole, ShapeVector, as_index
from planebridge.buffers import PlaneBuffer, make_buffer
from planebridge.config import DEFAULT_CONFIG, BridgeConfig
from planebridge.errors import (
    BufferShapeMismatchError,
    InvalidShapeError,
    PlaneOutOfRangeError,
    UnsupportedStorageError,
)
from planebridge.logger import get_logger
from planebridge.shape_math import (
    compose_raster_index,
    compute_plane_count,
    decompose_plane_number,
    extra_axis_lengths,
)
from planebridge.storage import PlanarStorage, SampledArray

__all__ = ["PlaneAccessAdapter"]

LOGGER = get_logger(__name__)


class PlaneAccessAdapter:
    """Expose an N-dimensional array as a flat stack of 2-D planes.

    Parameters
    ----------
    array : SampledArray
        The bridged array. Its shape and planar capability are read once.
    config : BridgeConfig
        Plane count policy and extra-axis limit.

    Raises
    ------
    InvalidShapeError
        The array's shape has more extra axes than ``config.max_extra_axes``.
    """

    def __init__(self, array: SampledArray, config: BridgeConfig = DEFAULT_CONFIG) -> None:
        shape = array.shape
        if not isinstance(shape, ShapeVector):
            shape = ShapeVector(tuple(shape))
        if len(shape.extra_lengths) > config.max_extra_axes:
            raise InvalidShapeError(
                f"Shape {shape.axes} has {len(shape.extra_lengths)} extra axes; "
                f"at most {config.max_extra_axes} are supported"
            )
        self._array = array
        self._shape = shape
        self._config = config
        self._extra_lengths = extra_axis_lengths(shape)
        self._storage: Optional[PlanarStorage] = array.planar_storage()
        LOGGER.info(
            "Bridging %s array with shape %s (%s)",
            array.sample_type.value,
            list(shape.lengths),
            shape.axes,
        )
        if self._storage is None:
            LOGGER.info("Array %s has no planar storage; plane buffers are unavailable", type(array).__name__)

    @property
    def shape(self) -> ShapeVector:
        return self._shape

    @property
    def config(self) -> BridgeConfig:
        return self._config

    @property
    def supports_planar_access(self) -> bool:
        return self._storage is not None

    def plane_count(self) -> int:
        return compute_plane_count(
            self._shape, self._array.total_sample_count(), policy=self._config.plane_count_policy
        )

    def plane_width(self) -> int:
        return self._shape.width

    def plane_height(self) -> int:
        return self._shape.height

    def _check_plane_number(self, plane_number: int) -> int:
        plane_number = as_index(plane_number, PlaneOutOfRangeError, "Plane number")
        count = self.plane_count()
        if plane_number < 0 or plane_number >= count:
            raise PlaneOutOfRangeError(f"Plane number {plane_number} out of range [0, {count})")
        return plane_number

    def _require_storage(self) -> PlanarStorage:
        if self._storage is None:
            raise UnsupportedStorageError(
                f"{type(self._array).__name__} exposes no planar storage; "
                "non-planar plane access is not supported"
            )
        return self._storage

    def plane_position(self, plane_number: int) -> Tuple[int, ...]:
        """Return the extra-axis coordinate of a plane."""
        plane_number = self._check_plane_number(plane_number)
        return decompose_plane_number(self._extra_lengths, plane_number)

    def plane_position_by_role(self, plane_number: int) -> Dict[AxisRole, int]:
        """Return the extra-axis coordinate of a plane keyed by axis role."""
        return dict(zip(self._shape.extra_roles, self.plane_position(plane_number)))

    def raster_index(self, plane_number: int) -> int:
        """Return the storage raster index holding a plane."""
        return compose_raster_index(self._extra_lengths, self.plane_position(plane_number))

    def get_plane(self, plane_number: int) -> PlaneBuffer:
        """Return the stored buffer for a plane (not a copy)."""
        storage = self._require_storage()
        raster = self.raster_index(plane_number)
        LOGGER.debug("get plane -> raster %d", raster, extra={"plane": plane_number})
        return storage.get_buffer_at(raster)

    def set_plane(self, plane_number: int, buffer) -> None:
        """Replace a plane's backing buffer with ``buffer``.

        ``buffer`` may be a ``PlaneBuffer`` or a numpy array; contiguous
        arrays are taken over without copying.

        Raises
        ------
        UnsupportedStorageError
            The array has no planar storage.
        PlaneOutOfRangeError
            ``plane_number`` is outside ``[0, plane_count())``.
        BufferShapeMismatchError
            Element count differs from ``width * height`` or the sample type
            differs from the array's.
        """
        storage = self._require_storage()
        raster = self.raster_index(plane_number)
        plane_buffer = self._checked_buffer(plane_number, buffer)
        storage.set_buffer_at(raster, plane_buffer)
        LOGGER.debug("set plane -> raster %d", raster, extra={"plane": plane_number})

    def _checked_buffer(self, plane_number: int, buffer) -> PlaneBuffer:
        expected_type = self._array.sample_type
        try:
            plane_buffer = make_buffer(buffer, expected_type)
        except BufferShapeMismatchError:
            LOGGER.warning(
                "Rejected buffer for plane: sample type is not %s",
                expected_type.value,
                extra={"plane": plane_number},
            )
            raise
        expected_size = self._shape.plane_size
        if plane_buffer.size != expected_size:
            LOGGER.warning(
                "Rejected buffer for plane: %d samples, expected %d",
                plane_buffer.size,
                expected_size,
                extra={"plane": plane_number},
            )
            raise BufferShapeMismatchError(
                f"Buffer has {plane_buffer.size} samples, expected "
                f"{self._shape.width}x{self._shape.height}={expected_size}"
            )
        return plane_buffer

    def get_plane_label(self, plane_number: int) -> str:
        raise NotImplementedError("Plane labels are not supported")

    def set_plane_label(self, plane_number: int, label: str) -> None:
        raise NotImplementedError("Plane labels are not supported")

    def insert_plane_at(self, plane_number: int, buffer) -> None:
        raise NotImplementedError("Plane insertion is not supported")

    def delete_plane_at(self, plane_number: int) -> None:
        raise NotImplementedError("Plane deletion is not supported")

    def __len__(self) -> int:
        return self.plane_count()

    def __iter__(self) -> Iterator[PlaneBuffer]:
        for plane_number in range(self.plane_count()):
            yield self.get_plane(plane_number)
