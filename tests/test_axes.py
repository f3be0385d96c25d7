"""Unit tests for axis roles and shape vectors."""

import numpy as np
import pytest

from planebridge.axes import AxisRole, ShapeVector, as_index, as_lengths
from planebridge.errors import InvalidShapeError, PlaneOutOfRangeError


class TestShapeVector:
    """Test shape vector validation and properties."""

    def test_default_roles_follow_hyperstack_order(self):
        """Test extra axes default to C, Z, T."""
        shape = ShapeVector((4, 3, 5, 2, 7))
        assert shape.axes == "XYCZT"
        assert shape.extra_roles == (AxisRole.C, AxisRole.Z, AxisRole.T)

    def test_properties(self):
        """Test derived shape properties."""
        shape = ShapeVector((4, 3, 5, 2))
        assert shape.width == 4
        assert shape.height == 3
        assert shape.plane_size == 12
        assert shape.extra_lengths == (5, 2)
        assert shape.total_samples == 120
        assert shape.ndim == 4
        assert len(shape) == 4
        assert shape[2] == 5
        assert list(shape) == [4, 3, 5, 2]

    def test_accepts_numpy_integers(self):
        """Test numpy integer lengths become plain ints."""
        shape = ShapeVector((np.int64(4), np.int32(3)))
        assert shape.lengths == (4, 3)
        assert all(type(n) is int for n in shape.lengths)

    def test_role_codes_as_strings(self):
        """Test roles given as axis codes."""
        shape = ShapeVector((4, 3, 2), ("X", "Y", "t"))
        assert shape.extra_roles == (AxisRole.T,)

    def test_too_few_axes(self):
        """Test a 1-D shape."""
        with pytest.raises(InvalidShapeError):
            ShapeVector((4,))

    @pytest.mark.parametrize("bad", [0, -1, 2.5, True, "4"])
    def test_bad_length(self, bad):
        """Test zero, negative and non-integer lengths."""
        with pytest.raises(InvalidShapeError):
            ShapeVector((4, bad))

    def test_too_many_default_axes(self):
        """Test more axes than the default order holds."""
        with pytest.raises(InvalidShapeError):
            ShapeVector((4, 3, 2, 2, 2, 2))

    def test_plane_axes_must_be_xy(self):
        """Test plane axes other than X, Y."""
        with pytest.raises(InvalidShapeError):
            ShapeVector.from_axes("YXZ", (3, 4, 2))

    def test_extra_axis_cannot_be_x(self):
        """Test X used as an extra axis."""
        with pytest.raises(InvalidShapeError):
            ShapeVector.from_axes("XYX", (3, 4, 2))

    def test_repeated_extra_axis(self):
        """Test a repeated extra axis."""
        with pytest.raises(InvalidShapeError):
            ShapeVector.from_axes("XYZZ", (3, 4, 2, 2))

    def test_unknown_axis_code(self):
        """Test an unknown axis code."""
        with pytest.raises(InvalidShapeError):
            ShapeVector.from_axes("XYQ", (3, 4, 2))

    def test_role_count_mismatch(self):
        """Test fewer roles than lengths."""
        with pytest.raises(InvalidShapeError):
            ShapeVector((4, 3, 2), (AxisRole.X, AxisRole.Y))

    def test_axis_string_length_mismatch(self):
        """Test an axis string longer than the lengths."""
        with pytest.raises(InvalidShapeError):
            ShapeVector.from_axes("XYZ", (3, 4))

    def test_invalid_shape_is_value_error(self):
        """Test the error is also a ValueError."""
        with pytest.raises(ValueError):
            ShapeVector((4,))

    def test_from_numpy_shape_reverses_axes(self):
        """Test numpy shape order is reversed."""
        shape = ShapeVector.from_numpy_shape((7, 2, 3, 5), axes="TZYX")
        assert shape.lengths == (5, 3, 2, 7)
        assert shape.axes == "XYZT"

    def test_from_numpy_shape_default_roles(self):
        """Test numpy shape without axis names."""
        shape = ShapeVector.from_numpy_shape((2, 5, 3, 4))
        assert shape.lengths == (4, 3, 5, 2)
        assert shape.axes == "XYCZ"

    def test_equality_and_hash(self):
        """Test equal shapes hash equally."""
        a = ShapeVector((4, 3, 5))
        b = ShapeVector.from_axes("XYC", [4, 3, 5])
        assert a == b
        assert hash(a) == hash(b)

    def test_as_lengths(self):
        """Test lengths from a ShapeVector and a list."""
        assert as_lengths(ShapeVector((4, 3))) == (4, 3)
        assert as_lengths([4, 3, 2]) == (4, 3, 2)

    def test_as_lengths_rejects_negative_pair(self):
        """Test negative lengths are rejected one by one."""
        with pytest.raises(InvalidShapeError):
            as_lengths([-4, -3])


class TestAsIndex:
    """Test exact integer conversion of indices."""

    def test_plain_and_numpy_ints(self):
        """Test ints pass through unchanged."""
        assert as_index(3, PlaneOutOfRangeError, "Plane number") == 3
        assert as_index(np.uint16(3), PlaneOutOfRangeError, "Plane number") == 3

    @pytest.mark.parametrize("value", [2.9, 2.0, True, False, "2", None])
    def test_rejects_non_integers(self, value):
        """Test floats, bools and other types raise the given error."""
        with pytest.raises(PlaneOutOfRangeError, match="Plane number"):
            as_index(value, PlaneOutOfRangeError, "Plane number")
