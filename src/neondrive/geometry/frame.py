"""
Frame solver - Orthonormal right/up/forward basis along a curve.

The same frame orients road cross-sections and the vehicle, so it must
never produce NaNs. When the tangent is (nearly) parallel to the
reference up vector the cross product vanishes and a fallback axis is
used instead.
"""

from dataclasses import dataclass
import logging

import numpy as np

from neondrive.geometry.vectors import (
    DEFAULT_FORWARD,
    WORLD_UP,
    WORLD_X,
    WORLD_Z,
    basis_matrix,
    normalize,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """Orthonormal basis at a point on the curve."""
    right: np.ndarray
    up: np.ndarray
    forward: np.ndarray

    @property
    def matrix(self) -> np.ndarray:
        """Rotation matrix with columns (right, up, -forward).

        The local -Z axis of an object using this matrix points along
        the curve, matching the usual camera/model convention.
        """
        return basis_matrix(self.right, self.up, -self.forward)


class FrameSolver:
    """Derives stable frames from curve tangents.

    Usage:
        solver = FrameSolver()
        frame = solver.frame(curve.tangent(0.5))
        left_edge = center - frame.right * half_width
    """

    def __init__(
        self,
        reference_up: np.ndarray = WORLD_UP,
        degenerate_threshold: float = 1e-6,
    ):
        """Initialize solver.

        Args:
            reference_up: Default world-up reference
            degenerate_threshold: Cross product length below which the
                tangent is treated as parallel to the reference up
        """
        self.reference_up = normalize(reference_up, fallback=WORLD_UP)
        self.degenerate_threshold = degenerate_threshold

    def frame(
        self,
        tangent: np.ndarray,
        reference_up: np.ndarray | None = None,
    ) -> Frame:
        """Compute the frame for a tangent.

        Args:
            tangent: Curve tangent (need not be normalized)
            reference_up: Up reference, defaults to the solver's

        Returns:
            Frame with unit, mutually orthogonal vectors
        """
        up_ref = self.reference_up if reference_up is None else normalize(
            reference_up, fallback=self.reference_up
        )
        forward = normalize(tangent, fallback=DEFAULT_FORWARD)

        right = np.cross(forward, up_ref)
        if np.linalg.norm(right) < self.degenerate_threshold:
            right = self._fallback_right(forward)
        else:
            right = normalize(right)

        up = normalize(np.cross(right, forward))
        return Frame(right=right, up=up, forward=forward)

    def _fallback_right(self, forward: np.ndarray) -> np.ndarray:
        """Right vector for a tangent parallel to the up reference."""
        logger.debug("Degenerate frame for tangent %s, using fallback axis", forward)

        if abs(forward[1]) > 0.9:
            # World X, projected off the tangent so the basis stays orthogonal
            right = WORLD_X - forward * np.dot(WORLD_X, forward)
        else:
            right = np.cross(forward, WORLD_Z)

        return normalize(right, fallback=WORLD_X)


_DEFAULT_SOLVER = FrameSolver()


def solve_frame(tangent: np.ndarray, reference_up: np.ndarray | None = None) -> Frame:
    """Compute a frame with the default solver."""
    return _DEFAULT_SOLVER.frame(tangent, reference_up)
