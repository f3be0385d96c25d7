"""Pure index arithmetic between plane numbers, coordinates and raster indices.

Conventions
-----------
- Shapes are X-first: ``shape[0]`` is width, ``shape[1]`` is height.
- Extra axes are ``shape[2:]``; a 2-D shape has exactly one plane, number 0.
- Mixed-radix decomposition and composition both vary the first extra axis
  fastest, so ``compose_raster_index(L, decompose_plane_number(L, k)) == k``.

All functions are stateless and safe to call from any thread.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from planebridge.axes import as_index, as_lengths
from planebridge.errors import (
    CoordinateOutOfRangeError,
    InvalidShapeError,
    PlaneOutOfRangeError,
)
from planebridge.logger import get_logger

__all__ = [
    "compute_plane_count",
    "extra_axis_lengths",
    "plane_count_for_lengths",
    "decompose_plane_number",
    "compose_raster_index",
    "plane_index_table",
]

LOGGER = get_logger(__name__)


def compute_plane_count(shape, total_sample_count: int, policy: str = "floor") -> int:
    """Return how many ``width * height`` planes ``total_sample_count`` holds.

    Parameters
    ----------
    shape : ShapeVector or sequence of int
        Axis lengths, X first. Only the two plane axes are used.
    total_sample_count : int
        Total element count of the array.
    policy : {"floor", "strict"}
        ``"floor"`` truncates an inexact division (legacy behaviour);
        ``"strict"`` raises ``InvalidShapeError`` instead.

    Returns
    -------
    int
        ``total_sample_count // (shape[0] * shape[1])``.

    Notes
    -----
    Under ``"floor"`` a sample count that is not a multiple of the plane size
    loses its trailing partial plane without any error. Callers that build
    the count from an untrusted source should use ``"strict"``.
    """
    if policy not in ("floor", "strict"):
        raise ValueError(f"Invalid plane count policy: {policy!r}")
    lengths = as_lengths(shape)
    if len(lengths) < 2:
        raise InvalidShapeError(f"Shape needs at least 2 axes, got {lengths}")
    plane_size = lengths[0] * lengths[1]
    total = as_index(total_sample_count, InvalidShapeError, "Sample count")
    if total < 0:
        raise InvalidShapeError(f"Sample count must be non-negative, got {total}")
    count, remainder = divmod(total, plane_size)
    if remainder:
        if policy == "strict":
            raise InvalidShapeError(
                f"{total} samples is not a whole number of {lengths[0]}x{lengths[1]} planes"
            )
        LOGGER.debug(
            "Truncating %d trailing samples: %d is not a multiple of plane size %d",
            remainder,
            total,
            plane_size,
        )
    return count


def extra_axis_lengths(shape) -> Tuple[int, ...]:
    """Return the lengths of the axes beyond the two plane axes."""
    lengths = as_lengths(shape)
    if len(lengths) < 2:
        raise InvalidShapeError(f"Shape needs at least 2 axes, got {lengths}")
    return lengths[2:]


def _extra_lengths(extra_lengths: Sequence[int]) -> Tuple[int, ...]:
    lengths = tuple(
        as_index(n, InvalidShapeError, f"Extra axis {axis} length") for axis, n in enumerate(extra_lengths)
    )
    for axis, n in enumerate(lengths):
        if n <= 0:
            raise InvalidShapeError(f"Extra axis {axis} length must be positive, got {n}")
    return lengths


def plane_count_for_lengths(extra_lengths: Sequence[int]) -> int:
    """Return the product of the extra axis lengths (1 for a 2-D shape)."""
    count = 1
    for n in _extra_lengths(extra_lengths):
        count *= n
    return count


def decompose_plane_number(extra_lengths: Sequence[int], plane_number: int) -> Tuple[int, ...]:
    """Convert a plane number into one coordinate per extra axis.

    Parameters
    ----------
    extra_lengths : sequence of int
        Lengths of the extra axes, fastest-varying first.
    plane_number : int
        Flattened plane number in ``[0, prod(extra_lengths))``.

    Returns
    -------
    tuple[int, ...]
        Coordinate with ``len(extra_lengths)`` entries.

    Examples
    --------
    >>> decompose_plane_number([5, 2], 7)
    (2, 1)
    """
    lengths = _extra_lengths(extra_lengths)
    n_planes = plane_count_for_lengths(lengths)
    plane_number = as_index(plane_number, PlaneOutOfRangeError, "Plane number")
    if plane_number < 0 or plane_number >= n_planes:
        raise PlaneOutOfRangeError(
            f"Plane number {plane_number} out of range [0, {n_planes}) for lengths {list(lengths)}"
        )
    coordinate = []
    remaining = plane_number
    for n in lengths:
        coordinate.append(remaining % n)
        remaining //= n
    return tuple(coordinate)


def compose_raster_index(axis_lengths: Sequence[int], coordinate: Sequence[int]) -> int:
    """Convert a coordinate over ``axis_lengths`` into a linear raster index.

    ``axis_lengths`` is usually the same vector passed to
    ``decompose_plane_number``; it is a separate argument so that storage
    grouping its axes differently can supply its own lengths.

    Raises
    ------
    CoordinateOutOfRangeError
        Coordinate length differs from ``axis_lengths`` or an entry is
        negative or not below its axis length.
    """
    lengths = _extra_lengths(axis_lengths)
    coords = tuple(as_index(c, CoordinateOutOfRangeError, "Coordinate") for c in coordinate)
    if len(coords) != len(lengths):
        raise CoordinateOutOfRangeError(
            f"Coordinate {list(coords)} has {len(coords)} entries, expected {len(lengths)}"
        )
    index = 0
    multiplier = 1
    for axis, (c, n) in enumerate(zip(coords, lengths)):
        if c < 0 or c >= n:
            raise CoordinateOutOfRangeError(
                f"Coordinate {c} on extra axis {axis} out of range [0, {n})"
            )
        index += c * multiplier
        multiplier *= n
    return index


def plane_index_table(extra_lengths: Sequence[int]) -> np.ndarray:
    """Return every plane's coordinate as a ``(n_planes, n_extra)`` array.

    Row ``k`` equals ``decompose_plane_number(extra_lengths, k)``.
    """
    lengths = _extra_lengths(extra_lengths)
    n_planes = plane_count_for_lengths(lengths)
    if not lengths:
        return np.zeros((1, 0), dtype=np.int64)
    coords = np.unravel_index(np.arange(n_planes, dtype=np.int64), lengths, order="F")
    return np.stack(coords, axis=1).astype(np.int64, copy=False)
