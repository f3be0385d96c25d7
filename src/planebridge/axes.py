"""Axis roles and validated shape vectors.

Conventions
-----------
- Axis 0 is X (width) and axis 1 is Y (height); both are plane axes.
- Axes at index >= 2 are extra axes drawn from Z, C and T, each at most once.
- Lengths are listed X-first, the reverse of a numpy C-order ``shape``.
- Without explicit roles, extra axes follow the ImageJ hyperstack order
  C, Z, T.
"""

from __future__ import annotations

import enum
import operator
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Type

from planebridge.errors import InvalidShapeError

__all__ = [
    "AxisRole",
    "ShapeVector",
    "DEFAULT_AXIS_ORDER",
    "as_lengths",
    "as_index",
]


class AxisRole(enum.Enum):
    """Role of one axis in a shape vector."""

    X = "X"
    Y = "Y"
    Z = "Z"
    C = "C"
    T = "T"

    @classmethod
    def parse(cls, code: str) -> "AxisRole":
        try:
            return cls(code.upper())
        except ValueError:
            raise InvalidShapeError(f"Unknown axis code {code!r}; expected one of XYZCT") from None


DEFAULT_AXIS_ORDER: Tuple[AxisRole, ...] = (
    AxisRole.X,
    AxisRole.Y,
    AxisRole.C,
    AxisRole.Z,
    AxisRole.T,
)

_EXTRA_ROLES = frozenset({AxisRole.Z, AxisRole.C, AxisRole.T})


def as_index(value, error: Type[Exception], what: str) -> int:
    """Return ``value`` as an exact int, raising ``error`` for bools and non-integers.

    Floats are rejected rather than truncated, so 2.9 never addresses plane 2.
    """
    if isinstance(value, bool):
        raise error(f"{what} must be an int, got {value!r}")
    try:
        return operator.index(value)
    except TypeError:
        raise error(f"{what} must be an int, got {value!r}") from None


def _checked_length(axis: int, n) -> int:
    value = as_index(n, InvalidShapeError, f"Axis {axis} length")
    if value <= 0:
        raise InvalidShapeError(f"Axis {axis} length must be a positive int, got {n!r}")
    return value


def as_lengths(shape) -> Tuple[int, ...]:
    """Return axis lengths from a ``ShapeVector`` or a plain integer sequence.

    Every length must be a positive int.
    """
    if isinstance(shape, ShapeVector):
        return shape.lengths
    return tuple(_checked_length(axis, n) for axis, n in enumerate(shape))


@dataclass(frozen=True)
class ShapeVector:
    """Axis lengths with a role tag per axis.

    Parameters
    ----------
    lengths : tuple[int, ...]
        Axis lengths, X first.
    roles : tuple[AxisRole, ...], optional
        One role per axis. Defaults to ``DEFAULT_AXIS_ORDER`` truncated to
        ``len(lengths)``.

    Raises
    ------
    InvalidShapeError
        Fewer than two axes, a non-positive length, plane axes that are not
        X/Y, or an extra axis role that is unknown or repeated.
    """

    lengths: Tuple[int, ...]
    roles: Optional[Tuple[AxisRole, ...]] = None

    def __post_init__(self) -> None:
        lengths = tuple(_checked_length(axis, n) for axis, n in enumerate(self.lengths))
        if len(lengths) < 2:
            raise InvalidShapeError(f"Shape needs at least 2 axes, got {lengths}")

        if self.roles is None:
            if len(lengths) > len(DEFAULT_AXIS_ORDER):
                raise InvalidShapeError(
                    f"Shape has {len(lengths)} axes; at most {len(DEFAULT_AXIS_ORDER)} are supported"
                )
            roles = DEFAULT_AXIS_ORDER[: len(lengths)]
        else:
            roles = tuple(r if isinstance(r, AxisRole) else AxisRole.parse(r) for r in self.roles)
        if len(roles) != len(lengths):
            raise InvalidShapeError(f"Got {len(roles)} axis roles for {len(lengths)} axes")
        if roles[0] is not AxisRole.X or roles[1] is not AxisRole.Y:
            raise InvalidShapeError(
                f"Plane axes must be X then Y, got {roles[0].value}{roles[1].value}"
            )
        extra = roles[2:]
        for role in extra:
            if role not in _EXTRA_ROLES:
                raise InvalidShapeError(f"Axis {role.value} cannot be an extra axis")
        if len(set(extra)) != len(extra):
            raise InvalidShapeError(
                "Repeated extra axis in " + "".join(r.value for r in roles)
            )

        object.__setattr__(self, "lengths", lengths)
        object.__setattr__(self, "roles", roles)

    @classmethod
    def from_axes(cls, axes: str, lengths: Sequence[int]) -> "ShapeVector":
        """Build from an axis string such as ``"XYCZT"`` and X-first lengths."""
        if len(axes) != len(lengths):
            raise InvalidShapeError(f"Axis string {axes!r} does not match {len(lengths)} lengths")
        return cls(tuple(lengths), tuple(AxisRole.parse(a) for a in axes))

    @classmethod
    def from_numpy_shape(cls, shape: Sequence[int], axes: Optional[str] = None) -> "ShapeVector":
        """Build from a numpy C-order shape (slowest axis first, X last).

        ``axes`` names the numpy axes in the same order, e.g. ``"TZCYX"``.
        Without it the shape is read as the reverse of ``DEFAULT_AXIS_ORDER``.
        """
        lengths = tuple(reversed(tuple(shape)))
        if axes is None:
            return cls(lengths)
        return cls.from_axes(axes[::-1], lengths)

    @property
    def ndim(self) -> int:
        return len(self.lengths)

    @property
    def width(self) -> int:
        return self.lengths[0]

    @property
    def height(self) -> int:
        return self.lengths[1]

    @property
    def plane_size(self) -> int:
        return self.lengths[0] * self.lengths[1]

    @property
    def extra_lengths(self) -> Tuple[int, ...]:
        return self.lengths[2:]

    @property
    def extra_roles(self) -> Tuple[AxisRole, ...]:
        return self.roles[2:]

    @property
    def total_samples(self) -> int:
        total = 1
        for n in self.lengths:
            total *= n
        return total

    @property
    def axes(self) -> str:
        """Axis string, X first."""
        return "".join(r.value for r in self.roles)

    def __len__(self) -> int:
        return len(self.lengths)

    def __getitem__(self, index):
        return self.lengths[index]

    def __iter__(self):
        return iter(self.lengths)
