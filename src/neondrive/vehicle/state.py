"""
Vehicle state - Track-relative state and world pose of the player.
"""

from dataclasses import dataclass, field

import numpy as np

from neondrive.geometry.vectors import matrix_to_quaternion


@dataclass
class VehicleState:
    """Track-relative vehicle state, advanced once per tick."""
    t: float = 0.0             # Forward parameter along the curve, [0, 1)
    lateral: float = 0.0       # Offset from centreline, fraction of half-width
    steering: float = 0.0      # Steering accumulator
    distance: float = 0.0      # Distance covered this lap
    lap: int = 0               # Completed laps
    lap_time: float = 0.0      # Seconds since the lap started

    def copy(self) -> "VehicleState":
        """Return an independent copy."""
        return VehicleState(
            t=self.t,
            lateral=self.lateral,
            steering=self.steering,
            distance=self.distance,
            lap=self.lap,
            lap_time=self.lap_time,
        )

    def get_state(self) -> dict:
        """Get state for inspection."""
        return {
            "t": self.t,
            "lateral": self.lateral,
            "steering": self.steering,
            "distance": self.distance,
            "lap": self.lap,
            "lap_time": self.lap_time,
        }


@dataclass
class Pose:
    """World position and orientation handed to the renderer."""
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: np.ndarray = field(default_factory=lambda: np.eye(3))

    @property
    def quaternion(self) -> np.ndarray:
        """Orientation as an (x, y, z, w) quaternion."""
        return matrix_to_quaternion(self.orientation)

    @property
    def forward(self) -> np.ndarray:
        """Direction the vehicle faces."""
        return -self.orientation[:, 2]

    def transform_point(self, local: np.ndarray) -> np.ndarray:
        """Map a point from vehicle-local to world space."""
        return self.position + self.orientation @ np.asarray(local, dtype=float)

    def copy(self) -> "Pose":
        """Return an independent copy."""
        return Pose(self.position.copy(), self.orientation.copy())
