"""
Vehicle module - Player state, locomotion and body model.

This module contains:
- Locomotion: Per-tick steering, lateral and forward integration
- VehicleState: Track-relative vehicle state
- Pose: World position and orientation
- VehicleBody: Box parts for rendering
"""

from neondrive.vehicle.state import VehicleState, Pose
from neondrive.vehicle.locomotion import Locomotion, LocomotionConfig, TickResult
from neondrive.vehicle.body import VehicleBody, BodyPart, PlacedPart

__all__ = [
    "VehicleState",
    "Pose",
    "Locomotion",
    "LocomotionConfig",
    "TickResult",
    "VehicleBody",
    "BodyPart",
    "PlacedPart",
]
