"""Array capabilities consumed by the plane access adapter.

``SampledArray`` is what every bridged array provides. ``PlanarStorage`` is
an optional capability: an array returns it from ``planar_storage()`` when
each plane lives in its own contiguous buffer, and ``None`` otherwise.

Two in-memory implementations are provided:

- ``PlanarArray`` keeps one ``PlaneBuffer`` per plane, indexed by raster
  index (first extra axis fastest).
- ``DenseArray`` wraps a single numpy array and has no planar capability.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Sequence, runtime_checkable

import numpy as np

from planebridge.axes import ShapeVector, as_index
from planebridge.buffers import PlaneBuffer, SampleType, make_buffer, zeros_buffer
from planebridge.errors import BufferShapeMismatchError, CoordinateOutOfRangeError
from planebridge.shape_math import plane_count_for_lengths

__all__ = [
    "PlanarStorage",
    "SampledArray",
    "PlanarArray",
    "DenseArray",
]


@runtime_checkable
class PlanarStorage(Protocol):
    """Per-plane buffer access addressed by raster index."""

    def get_buffer_at(self, raster_index: int) -> PlaneBuffer:
        ...

    def set_buffer_at(self, raster_index: int, buffer: PlaneBuffer) -> None:
        ...


@runtime_checkable
class SampledArray(Protocol):
    """N-dimensional sampled array as seen by the adapter."""

    @property
    def shape(self) -> ShapeVector:
        ...

    @property
    def sample_type(self) -> SampleType:
        ...

    def total_sample_count(self) -> int:
        ...

    def planar_storage(self) -> Optional[PlanarStorage]:
        ...


class PlanarArray:
    """In-memory array stored as one contiguous buffer per plane.

    The array is its own ``PlanarStorage``. Buffers are held by reference:
    ``get_buffer_at`` returns the stored object and ``set_buffer_at`` keeps
    the one it is given.
    """

    def __init__(
        self,
        shape: ShapeVector,
        sample_type: SampleType,
        buffers: Optional[Iterable[PlaneBuffer]] = None,
    ) -> None:
        if not isinstance(shape, ShapeVector):
            shape = ShapeVector(tuple(shape))
        self._shape = shape
        self._sample_type = sample_type
        n_planes = plane_count_for_lengths(shape.extra_lengths)
        if buffers is None:
            self._planes: List[PlaneBuffer] = [
                zeros_buffer(sample_type, shape.plane_size) for _ in range(n_planes)
            ]
        else:
            self._planes = [make_buffer(b, sample_type) for b in buffers]
            if len(self._planes) != n_planes:
                raise BufferShapeMismatchError(
                    f"Expected {n_planes} plane buffers for shape {shape.lengths}, got {len(self._planes)}"
                )
            for raster, buf in enumerate(self._planes):
                if buf.size != shape.plane_size:
                    raise BufferShapeMismatchError(
                        f"Plane {raster} has {buf.size} samples, expected {shape.plane_size}"
                    )

    @classmethod
    def from_buffers(cls, shape: ShapeVector, buffers: Sequence) -> "PlanarArray":
        """Build from existing per-plane buffers in raster order."""
        if len(buffers) == 0:
            raise BufferShapeMismatchError("At least one plane buffer is required")
        first = make_buffer(buffers[0])
        return cls(shape, first.sample_type, [first, *buffers[1:]])

    @classmethod
    def from_ndarray(cls, arr: np.ndarray, axes: Optional[str] = None) -> "PlanarArray":
        """Split a numpy array (C order, X last) into per-plane copies.

        Parameters
        ----------
        arr : numpy.ndarray
            Array with shape ``(..., Y, X)``.
        axes : str, optional
            Numpy axis names, e.g. ``"TZCYX"``; defaults to the reverse of the
            hyperstack order.
        """
        shape = ShapeVector.from_numpy_shape(arr.shape, axes)
        sample_type = SampleType.from_dtype(arr.dtype)
        # The numpy axis just before Y is the first extra axis, so C-order
        # flattening of the leading axes already yields raster order.
        planes = arr.reshape(-1, shape.height, shape.width)
        buffers = [PlaneBuffer(sample_type, p.astype(sample_type.dtype).reshape(-1)) for p in planes]
        return cls(shape, sample_type, buffers)

    @property
    def shape(self) -> ShapeVector:
        return self._shape

    @property
    def sample_type(self) -> SampleType:
        return self._sample_type

    @property
    def n_planes(self) -> int:
        return len(self._planes)

    def total_sample_count(self) -> int:
        return self._shape.total_samples

    def planar_storage(self) -> Optional[PlanarStorage]:
        return self

    def _check_raster(self, raster_index: int) -> int:
        raster_index = as_index(raster_index, CoordinateOutOfRangeError, "Raster index")
        if raster_index < 0 or raster_index >= len(self._planes):
            raise CoordinateOutOfRangeError(
                f"Raster index {raster_index} out of range [0, {len(self._planes)})"
            )
        return raster_index

    def get_buffer_at(self, raster_index: int) -> PlaneBuffer:
        return self._planes[self._check_raster(raster_index)]

    def set_buffer_at(self, raster_index: int, buffer: PlaneBuffer) -> None:
        self._planes[self._check_raster(raster_index)] = buffer

    def to_ndarray(self) -> np.ndarray:
        """Reassemble a numpy array shaped ``(..., Y, X)`` (slowest axis first)."""
        shape = self._shape
        stacked = np.stack([b.data for b in self._planes])
        return stacked.reshape(tuple(shape.extra_lengths[::-1]) + (shape.height, shape.width))


class DenseArray:
    """Single-block numpy array without per-plane storage.

    Stands in for sparse, virtual or otherwise non-planar arrays: the plane
    access adapter reports ``UnsupportedStorageError`` for it.
    """

    def __init__(self, arr: np.ndarray, axes: Optional[str] = None) -> None:
        self._array = arr
        self._shape = ShapeVector.from_numpy_shape(arr.shape, axes)
        self._sample_type = SampleType.from_dtype(arr.dtype)

    @property
    def shape(self) -> ShapeVector:
        return self._shape

    @property
    def sample_type(self) -> SampleType:
        return self._sample_type

    @property
    def array(self) -> np.ndarray:
        return self._array

    def total_sample_count(self) -> int:
        return int(self._array.size)

    def planar_storage(self) -> Optional[PlanarStorage]:
        return None
