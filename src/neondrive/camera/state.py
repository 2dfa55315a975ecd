"""
Camera state - Smoothed camera placement shared by both camera modes.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np


class CameraMode(Enum):
    """Active camera controller."""
    FOLLOW = "follow"
    FREE = "free"

    def toggled(self) -> "CameraMode":
        """Get the other mode."""
        return CameraMode.FREE if self is CameraMode.FOLLOW else CameraMode.FOLLOW


@dataclass
class CameraState:
    """Camera position and look-at target."""
    position: np.ndarray
    look_at: np.ndarray

    def copy(self) -> "CameraState":
        """Return an independent copy."""
        return CameraState(self.position.copy(), self.look_at.copy())

    def get_state(self) -> dict:
        """Get camera state for inspection."""
        return {
            "position": self.position.tolist(),
            "look_at": self.look_at.tolist(),
        }
