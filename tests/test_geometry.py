"""Tests for the NeonDrive geometry module."""

import pytest
import numpy as np

from neondrive.errors import MalformedTrackError
from neondrive.geometry.curve import CatmullRomCurve
from neondrive.geometry.frame import FrameSolver, solve_frame
from neondrive.geometry.vectors import matrix_to_quaternion, rotate_about_axis


STRAIGHT_POINTS = [
    [0.0, 0.0, 0.0],
    [0.0, 0.0, -10.0],
    [0.0, 0.0, -20.0],
    [0.0, 0.0, -30.0],
]

WIGGLY_POINTS = [
    [0.0, 0.0, 0.0],
    [5.0, 1.0, -20.0],
    [-3.0, 2.0, -40.0],
    [8.0, 0.0, -60.0],
    [2.0, 0.5, -80.0],
]


class TestCatmullRomCurve:
    """Test the curve model."""

    def test_boundary_exactness(self):
        """Test the curve starts and ends on the control points."""
        curve = CatmullRomCurve(WIGGLY_POINTS)

        assert np.allclose(curve.position(0.0), WIGGLY_POINTS[0])
        assert np.allclose(curve.position(1.0), WIGGLY_POINTS[-1])

    def test_passes_through_interior_points(self):
        """Test t = i / (n - 1) lands on control point i."""
        curve = CatmullRomCurve(WIGGLY_POINTS)
        n = len(WIGGLY_POINTS)

        for i, point in enumerate(WIGGLY_POINTS):
            assert np.allclose(curve.position(i / (n - 1)), point)

    def test_straight_line(self):
        """Test a straight polyline interpolates linearly."""
        curve = CatmullRomCurve(STRAIGHT_POINTS)

        assert np.allclose(curve.position(0.5), [0.0, 0.0, -15.0])
        assert np.allclose(curve.tangent(0.3), [0.0, 0.0, -1.0])
        assert abs(curve.length() - 30.0) < 1e-6

    def test_tangent_is_unit(self):
        """Test tangents are normalized."""
        curve = CatmullRomCurve(WIGGLY_POINTS)

        for t in np.linspace(0.0, 1.0, 17):
            assert abs(np.linalg.norm(curve.tangent(t)) - 1.0) < 1e-9

    def test_out_of_range_parameter_is_clamped(self):
        """Test t outside [0, 1] is clamped rather than raising."""
        curve = CatmullRomCurve(WIGGLY_POINTS)

        assert np.allclose(curve.position(-0.5), curve.position(0.0))
        assert np.allclose(curve.position(1.5), curve.position(1.0))

    def test_points_are_immutable(self):
        """Test the control points cannot be changed after construction."""
        source = np.array(WIGGLY_POINTS)
        curve = CatmullRomCurve(source)
        source[0, 0] = 100.0

        assert curve.points[0, 0] == 0.0
        with pytest.raises(ValueError):
            curve.points[0, 0] = 1.0

    def test_malformed_curve(self):
        """Test curves with fewer than two points reject queries."""
        curve = CatmullRomCurve([[0.0, 0.0, 0.0]])

        assert not curve.is_valid
        assert curve.length() == 0.0
        with pytest.raises(MalformedTrackError):
            curve.position(0.5)

    def test_zero_length_curve(self):
        """Test coincident points make an invalid curve."""
        curve = CatmullRomCurve([[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]])

        assert not curve.is_valid
        with pytest.raises(MalformedTrackError):
            curve.tangent(0.0)

    def test_arc_length_parameterization(self):
        """Test arc-length fractions map onto the curve ends and middle."""
        curve = CatmullRomCurve(WIGGLY_POINTS)

        assert np.allclose(curve.position_at(0.0), WIGGLY_POINTS[0])
        assert np.allclose(curve.position_at(1.0), WIGGLY_POINTS[-1])

        # Parameter increases with arc length
        params = [curve.parameter_at(s) for s in np.linspace(0.0, 1.0, 11)]
        assert all(b > a for a, b in zip(params, params[1:]))

    def test_sample_shapes(self):
        """Test uniform sampling returns count + 1 rows."""
        curve = CatmullRomCurve(WIGGLY_POINTS)
        positions, tangents = curve.sample(10)

        assert positions.shape == (11, 3)
        assert tangents.shape == (11, 3)


class TestFrameSolver:
    """Test frame derivation."""

    def test_generic_tangent(self):
        """Test a diagonal tangent yields an orthonormal frame."""
        frame = solve_frame(np.array([0.3, 0.2, -1.0]))

        assert abs(np.linalg.norm(frame.right) - 1.0) < 1e-9
        assert abs(np.linalg.norm(frame.up) - 1.0) < 1e-9
        assert abs(np.dot(frame.right, frame.up)) < 1e-9
        assert abs(np.dot(frame.right, frame.forward)) < 1e-9

    def test_forward_down_negative_z(self):
        """Test the default heading gives +X right and +Y up."""
        frame = solve_frame(np.array([0.0, 0.0, -1.0]))

        assert np.allclose(frame.right, [1.0, 0.0, 0.0])
        assert np.allclose(frame.up, [0.0, 1.0, 0.0])

    @pytest.mark.parametrize("tangent", [
        [0.0, 1.0, 0.0],
        [0.0, -1.0, 0.0],
        [1e-9, 1.0, 0.0],
    ])
    def test_degenerate_tangent(self, tangent):
        """Test tangents parallel to up still produce a valid frame."""
        frame = solve_frame(np.array(tangent))

        assert not np.any(np.isnan(frame.right))
        assert not np.any(np.isnan(frame.up))
        assert abs(np.linalg.norm(frame.right) - 1.0) < 1e-9
        assert abs(np.linalg.norm(frame.up) - 1.0) < 1e-9
        assert abs(np.dot(frame.right, frame.up)) < 1e-9

    def test_tangent_parallel_to_z_reference(self):
        """Test a Z-up solver handles a tangent along Z via the X fallback."""
        solver = FrameSolver(reference_up=np.array([0.0, 0.0, 1.0]))
        frame = solver.frame(np.array([0.0, 0.0, 1.0]))

        assert np.allclose(frame.right, [1.0, 0.0, 0.0])
        assert abs(np.dot(frame.up, frame.forward)) < 1e-9
        assert abs(np.linalg.norm(frame.up) - 1.0) < 1e-9

    def test_zero_tangent(self):
        """Test a zero tangent falls back to the default heading."""
        frame = FrameSolver().frame(np.zeros(3))

        assert np.allclose(frame.forward, [0.0, 0.0, -1.0])
        assert np.allclose(frame.right, [1.0, 0.0, 0.0])

    def test_matrix_is_rotation(self):
        """Test the frame matrix is orthonormal with unit determinant."""
        frame = solve_frame(np.array([0.5, -0.1, -0.8]))
        matrix = frame.matrix

        assert np.allclose(matrix.T @ matrix, np.eye(3))
        assert abs(np.linalg.det(matrix) - 1.0) < 1e-9


class TestVectors:
    """Test vector helpers."""

    def test_identity_quaternion(self):
        """Test the identity matrix maps to the identity quaternion."""
        assert np.allclose(matrix_to_quaternion(np.eye(3)), [0.0, 0.0, 0.0, 1.0])

    def test_rotation_about_axis(self):
        """Test a quarter turn about Y."""
        rotated = rotate_about_axis(np.array([1.0, 0.0, 0.0]), np.array([0.0, 1.0, 0.0]), np.pi / 2)

        assert np.allclose(rotated, [0.0, 0.0, -1.0])
