"""
Follow camera - Chase camera trailing the vehicle.

The camera eases toward a target placed in the vehicle's local frame.
Smoothing is a fixed fraction per tick, so it assumes a steady tick
rate.
"""

from dataclasses import dataclass, field

import numpy as np

from neondrive.camera.state import CameraState
from neondrive.geometry.vectors import as_vec3, lerp


@dataclass
class CameraConfig:
    """Follow camera configuration."""
    # Vehicle-local offsets (+X right, +Y up, -Z forward)
    offset: np.ndarray = field(default_factory=lambda: np.array([0.0, 3.0, 6.0]))
    look_ahead: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.5, -10.0]))

    lerp_factor: float = 0.1


class FollowCamera:
    """Chase camera.

    Usage:
        camera = FollowCamera()
        state = None
        state = camera.update(state, pose.position, pose.orientation)
    """

    def __init__(self, config: CameraConfig | None = None):
        """Initialize camera.

        Args:
            config: Camera configuration. Uses defaults if None.
        """
        self.config = config or CameraConfig()

    def target(
        self,
        vehicle_position: np.ndarray,
        vehicle_orientation: np.ndarray,
    ) -> CameraState:
        """Get the unsmoothed camera placement for a vehicle pose.

        Args:
            vehicle_position: Vehicle world position
            vehicle_orientation: Vehicle 3x3 orientation matrix

        Returns:
            Target camera state
        """
        position = as_vec3(vehicle_position)
        rotation = np.asarray(vehicle_orientation, dtype=float)
        return CameraState(
            position=position + rotation @ self.config.offset,
            look_at=position + rotation @ self.config.look_ahead,
        )

    def update(
        self,
        camera_state: CameraState | None,
        vehicle_position: np.ndarray,
        vehicle_orientation: np.ndarray,
        lerp_factor: float | None = None,
    ) -> CameraState:
        """Move the camera toward its target.

        Args:
            camera_state: Previous camera state, None before the first tick
            vehicle_position: Vehicle world position
            vehicle_orientation: Vehicle 3x3 orientation matrix
            lerp_factor: Fraction of the remaining gap closed this tick,
                defaults to the configured factor

        Returns:
            New camera state
        """
        target = self.target(vehicle_position, vehicle_orientation)
        if camera_state is None:
            return target

        factor = self.config.lerp_factor if lerp_factor is None else lerp_factor
        factor = float(np.clip(factor, 0.0, 1.0))
        return CameraState(
            position=lerp(camera_state.position, target.position, factor),
            look_at=lerp(camera_state.look_at, target.look_at, factor),
        )
