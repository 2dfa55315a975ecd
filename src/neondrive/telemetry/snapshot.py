"""
Telemetry snapshot - Read-only values published for the HUD each tick.
"""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from neondrive.camera.state import CameraMode

# |lateral| at or below this counts as centred
LANE_DEADBAND = 0.2


class LanePosition(Enum):
    """Coarse lateral position on the road."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def classify_lane(lateral: float, deadband: float = LANE_DEADBAND) -> LanePosition:
    """Classify a lateral offset.

    Args:
        lateral: Offset as a fraction of half-width (negative = left)
        deadband: Half-width of the centre band

    Returns:
        Lane position
    """
    if lateral < -deadband:
        return LanePosition.LEFT
    if lateral > deadband:
        return LanePosition.RIGHT
    return LanePosition.CENTER


@dataclass(frozen=True)
class TelemetrySnapshot:
    """Values exposed to the HUD after a tick."""
    tick: int = 0
    time: float = 0.0
    distance: float = 0.0
    speed_multiplier: float = 1.0
    lateral: float = 0.0
    lane: LanePosition = LanePosition.CENTER
    lap: int = 0
    track_version: int = 1
    camera_mode: CameraMode = CameraMode.FOLLOW
    camera_position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    valid: bool = True

    def as_dict(self) -> dict:
        """Get snapshot as plain values."""
        return {
            "tick": self.tick,
            "time": self.time,
            "distance": self.distance,
            "speed_multiplier": self.speed_multiplier,
            "lateral": self.lateral,
            "lane": self.lane.value,
            "lap": self.lap,
            "track_version": self.track_version,
            "camera_mode": self.camera_mode.value,
            "camera_position": np.asarray(self.camera_position).tolist(),
            "valid": self.valid,
        }
