"""Type-erased plane buffers.

A ``PlaneBuffer`` pairs a sample type tag with a flat, contiguous numpy
array holding one plane's samples. Wrapping never copies an array that is
already contiguous with a supported dtype, so handing a buffer to planar
storage transfers the caller's memory rather than duplicating it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

import numpy as np

from planebridge.errors import BufferShapeMismatchError

__all__ = ["SampleType", "PlaneBuffer", "make_buffer", "zeros_buffer"]


class SampleType(enum.Enum):
    """Primitive element kinds a plane buffer may hold."""

    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.value)

    @property
    def itemsize(self) -> int:
        return self.dtype.itemsize

    @classmethod
    def from_dtype(cls, dtype) -> "SampleType":
        """Return the sample type for a numpy dtype (byte order is ignored)."""
        dt = np.dtype(dtype)
        try:
            return cls(dt.newbyteorder("=").name)
        except ValueError:
            raise BufferShapeMismatchError(f"Unsupported sample dtype: {dt}") from None


@dataclass(frozen=True, eq=False)
class PlaneBuffer:
    """One plane's samples with their element type tag.

    Parameters
    ----------
    sample_type : SampleType
        Element kind of ``data``.
    data : numpy.ndarray
        Flat (1-D), C-contiguous array whose dtype matches ``sample_type``.
    """

    sample_type: SampleType
    data: np.ndarray

    def __post_init__(self) -> None:
        if not isinstance(self.data, np.ndarray):
            raise BufferShapeMismatchError(
                f"Plane buffer data must be a numpy array, got {type(self.data).__name__}"
            )
        if self.data.ndim != 1 or not self.data.flags.c_contiguous:
            raise BufferShapeMismatchError(
                f"Plane buffer data must be flat and contiguous, got shape {self.data.shape}"
            )
        if SampleType.from_dtype(self.data.dtype) is not self.sample_type:
            raise BufferShapeMismatchError(
                f"Buffer dtype {self.data.dtype} does not match sample type {self.sample_type.value}"
            )

    @property
    def size(self) -> int:
        return int(self.data.size)

    @property
    def nbytes(self) -> int:
        return int(self.data.nbytes)

    def as_plane(self, width: int, height: int) -> np.ndarray:
        """Return a (height, width) view of the samples."""
        if width * height != self.size:
            raise BufferShapeMismatchError(
                f"Cannot view {self.size} samples as a {width}x{height} plane"
            )
        return self.data.reshape(height, width)


def make_buffer(data, sample_type: Optional[SampleType] = None) -> PlaneBuffer:
    """Wrap array-like plane data in a ``PlaneBuffer``.

    A ``PlaneBuffer`` is returned unchanged. Numpy arrays that are already
    C-contiguous are flattened as views; other inputs are converted (which
    copies). When ``sample_type`` is given the data must already have that
    type; no casting is done.

    Raises
    ------
    BufferShapeMismatchError
        Unsupported dtype, or dtype differs from ``sample_type``.
    """
    if isinstance(data, PlaneBuffer):
        if sample_type is not None and data.sample_type is not sample_type:
            raise BufferShapeMismatchError(
                f"Buffer sample type {data.sample_type.value} does not match {sample_type.value}"
            )
        return data
    if isinstance(data, np.ndarray):
        arr = data
    elif isinstance(data, (bytes, bytearray, memoryview)):
        if sample_type is None:
            raise BufferShapeMismatchError("Raw byte buffers need an explicit sample type")
        arr = np.frombuffer(data, dtype=sample_type.dtype)
    else:
        arr = np.asarray(data)
    if not arr.dtype.isnative:
        arr = arr.astype(arr.dtype.newbyteorder("="))
    kind = SampleType.from_dtype(arr.dtype)
    if sample_type is not None and kind is not sample_type:
        raise BufferShapeMismatchError(
            f"Buffer dtype {arr.dtype} does not match sample type {sample_type.value}"
        )
    if arr.ndim == 1 and arr.flags.c_contiguous:
        flat = arr
    else:
        flat = np.ravel(arr, order="C")
    return PlaneBuffer(sample_type=kind, data=flat)


def zeros_buffer(sample_type: SampleType, size: int) -> PlaneBuffer:
    """Return a zero-filled buffer of ``size`` samples."""
    return PlaneBuffer(sample_type=sample_type, data=np.zeros(int(size), dtype=sample_type.dtype))
