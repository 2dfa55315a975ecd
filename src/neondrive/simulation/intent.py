"""
Control intent - Resolved player input for one tick.

The input layer turns raw key state into one of these; the core never
sees key events.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ControlIntent:
    """Player intent for a single tick."""
    left: bool = False
    right: bool = False
    accelerate: bool = False
    decelerate: bool = False
    regenerate_track: bool = False
    toggle_camera_mode: bool = False

    # Free camera translation, ignored in follow mode
    camera_dx: float = 0.0
    camera_dy: float = 0.0
    camera_dz: float = 0.0

    @property
    def steering(self) -> int:
        """Steering direction: -1 left, +1 right, 0 for none or both."""
        return int(self.right) - int(self.left)

    @property
    def throttle(self) -> int:
        """Speed change direction: -1, 0 or +1."""
        return int(self.accelerate) - int(self.decelerate)

    @property
    def camera_delta(self) -> np.ndarray:
        """Free camera translation vector."""
        return np.array([self.camera_dx, self.camera_dy, self.camera_dz])


NO_INPUT = ControlIntent()
