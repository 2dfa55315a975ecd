"""
Camera module - Follow and free camera controllers.

This module contains:
- FollowCamera: Smoothed chase camera
- FreeCamera: Manually translated camera
- CameraState: Camera position and look-at
- CameraMode: Which controller drives the camera
"""

from neondrive.camera.state import CameraState, CameraMode
from neondrive.camera.follow import FollowCamera, CameraConfig
from neondrive.camera.free import FreeCamera

__all__ = [
    "CameraState",
    "CameraMode",
    "FollowCamera",
    "CameraConfig",
    "FreeCamera",
]
