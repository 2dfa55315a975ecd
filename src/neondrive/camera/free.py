"""
Free camera - Manually translated camera, detached from the vehicle.
"""

import numpy as np

from neondrive.camera.state import CameraState
from neondrive.geometry.vectors import as_vec3


class FreeCamera:
    """Camera moved by direct additive deltas.

    The look-at target moves with the camera, keeping the view direction
    fixed while translating.
    """

    def __init__(self, move_speed: float = 0.5):
        """Initialize free camera.

        Args:
            move_speed: Scale applied to each translation delta
        """
        self.move_speed = move_speed

    def update(self, camera_state: CameraState | None, delta) -> CameraState:
        """Translate the camera.

        Args:
            camera_state: Current camera state, None if never placed
            delta: Translation (dx, dy, dz) in world units before scaling

        Returns:
            New camera state
        """
        if camera_state is None:
            camera_state = CameraState(
                position=np.array([0.0, 5.0, 10.0]),
                look_at=np.zeros(3),
            )

        step = as_vec3(delta) * self.move_speed
        return CameraState(
            position=camera_state.position + step,
            look_at=camera_state.look_at + step,
        )
