"""
Curve model - Open Catmull-Rom spline through the track control points.

Parameterization:
- position(t)/tangent(t) are uniform in point index: t = i / (n - 1)
  lands exactly on control point i. Equal forward spacing of the
  generated points keeps this close to uniform speed on straights, but
  the vehicle moves faster through sections with large lateral offsets.
- position_at(s)/tangent_at(s) are reparameterized by arc length for
  callers that need constant visual speed.
"""

import logging
from typing import Tuple

import numpy as np

from neondrive.errors import MalformedTrackError

logger = logging.getLogger(__name__)


class CatmullRomCurve:
    """Immutable open Catmull-Rom curve.

    The first and last segments use reflected phantom points, so the
    curve passes through every control point including both ends.

    Usage:
        curve = CatmullRomCurve(points)
        pos = curve.position(0.25)
        direction = curve.tangent(0.25)
    """

    def __init__(
        self,
        points,
        length_samples: int = 1000,
        min_length: float = 1e-6,
    ):
        """Initialize curve.

        Args:
            points: Sequence of 3D control points, shape (N, 3)
            length_samples: Samples used to estimate the length
            min_length: Lengths at or below this mark the curve invalid
        """
        pts = np.array(points, dtype=float).reshape(-1, 3)
        pts.setflags(write=False)
        self._points = pts

        self._length_samples = max(int(length_samples), 1)
        self._min_length = min_length

        # Cached values
        self._length: float | None = None
        self._arc_params: np.ndarray | None = None
        self._arc_lengths: np.ndarray | None = None

    @property
    def points(self) -> np.ndarray:
        """Control points (read-only array)."""
        return self._points

    @property
    def num_points(self) -> int:
        """Number of control points."""
        return len(self._points)

    @property
    def is_valid(self) -> bool:
        """Check whether the curve can answer queries."""
        if self.num_points < 2:
            return False
        return self._compute_length() > self._min_length

    def _require_valid(self) -> None:
        if not self.is_valid:
            raise MalformedTrackError(
                f"Curve with {self.num_points} points and length "
                f"{self._length or 0.0:.6f} cannot be sampled"
            )

    @staticmethod
    def _clamp_parameter(t: float) -> float:
        if t < 0.0 or t > 1.0:
            logger.debug("Curve parameter %.6f outside [0, 1], clamping", t)
            return float(np.clip(t, 0.0, 1.0))
        return float(t)

    def _control_window(self, t: float) -> Tuple[np.ndarray, float]:
        """Get the four points around parameter t and the local fraction.

        Args:
            t: Curve parameter in [0, 1]

        Returns:
            Tuple of (4x3 point window, local parameter in [0, 1])
        """
        pts = self._points
        n = len(pts)
        u = t * (n - 1)
        index = int(np.floor(u))
        if index >= n - 1:
            index = n - 2
        local = u - index

        p1 = pts[index]
        p2 = pts[index + 1]
        p0 = pts[index - 1] if index > 0 else 2.0 * p1 - p2
        p3 = pts[index + 2] if index + 2 < n else 2.0 * p2 - p1

        return np.stack([p0, p1, p2, p3]), local

    def _raw_position(self, t: float) -> np.ndarray:
        window, u = self._control_window(t)
        p0, p1, p2, p3 = window
        u2 = u * u
        u3 = u2 * u
        return 0.5 * (
            2.0 * p1
            + (-p0 + p2) * u
            + (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * u2
            + (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * u3
        )

    def _raw_derivative(self, t: float) -> np.ndarray:
        window, u = self._control_window(t)
        p0, p1, p2, p3 = window
        u2 = u * u
        return 0.5 * (
            (-p0 + p2)
            + 2.0 * (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * u
            + 3.0 * (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * u2
        )

    def position(self, t: float) -> np.ndarray:
        """Get world position at parameter t.

        Args:
            t: Curve parameter in [0, 1] (clamped if outside)

        Returns:
            Position array [x, y, z]
        """
        self._require_valid()
        return self._raw_position(self._clamp_parameter(t))

    def tangent(self, t: float) -> np.ndarray:
        """Get unit tangent at parameter t.

        Args:
            t: Curve parameter in [0, 1] (clamped if outside)

        Returns:
            Unit direction of travel
        """
        self._require_valid()
        derivative = self._raw_derivative(self._clamp_parameter(t))
        length = np.linalg.norm(derivative)
        if length < 1e-12:
            # Coincident control points; step back to the chord direction
            window, _ = self._control_window(self._clamp_parameter(t))
            derivative = window[2] - window[1]
            length = np.linalg.norm(derivative)
            if length < 1e-12:
                return np.array([0.0, 0.0, -1.0])
        return derivative / length

    def _compute_length(self) -> float:
        if self._length is not None:
            return self._length

        if self.num_points < 2:
            self._length = 0.0
            return self._length

        params = np.linspace(0.0, 1.0, self._length_samples + 1)
        samples = np.array([self._raw_position(t) for t in params])
        steps = np.linalg.norm(np.diff(samples, axis=0), axis=1)

        self._arc_params = params
        self._arc_lengths = np.concatenate([[0.0], np.cumsum(steps)])
        self._length = float(self._arc_lengths[-1])
        return self._length

    def length(self) -> float:
        """Get total curve length from dense sampling.

        Returns:
            Length in world units (0.0 for a malformed curve)
        """
        return self._compute_length()

    def parameter_at(self, s: float) -> float:
        """Convert an arc-length fraction into a curve parameter.

        Args:
            s: Fraction of total length in [0, 1] (clamped if outside)

        Returns:
            Uniform curve parameter t
        """
        self._require_valid()
        s = self._clamp_parameter(s)
        target = s * self._length
        return float(np.interp(target, self._arc_lengths, self._arc_params))

    def position_at(self, s: float) -> np.ndarray:
        """Get position at an arc-length fraction."""
        return self.position(self.parameter_at(s))

    def tangent_at(self, s: float) -> np.ndarray:
        """Get unit tangent at an arc-length fraction."""
        return self.tangent(self.parameter_at(s))

    def sample(self, count: int) -> Tuple[np.ndarray, np.ndarray]:
        """Sample the curve at count + 1 uniform parameter steps.

        Args:
            count: Number of intervals

        Returns:
            Tuple of (positions, tangents), each of shape (count + 1, 3)
        """
        self._require_valid()
        params = np.linspace(0.0, 1.0, count + 1)
        positions = np.array([self._raw_position(t) for t in params])
        tangents = np.array([self.tangent(t) for t in params])
        return positions, tangents

    def control_polygon_length(self) -> float:
        """Get the summed length of the straight lines between points."""
        if self.num_points < 2:
            return 0.0
        return float(np.sum(np.linalg.norm(np.diff(self._points, axis=0), axis=1)))

    def get_state(self) -> dict:
        """Get curve summary for inspection.

        Returns:
            Dictionary with curve data
        """
        return {
            "num_points": self.num_points,
            "valid": self.is_valid,
            "length": self.length(),
            "control_polygon_length": self.control_polygon_length(),
            "start": self._points[0].tolist() if self.num_points else None,
            "end": self._points[-1].tolist() if self.num_points else None,
        }
