"""
Vehicle body - Box parts making up the player's model.

The body owns its parts; the renderer receives them already placed in
world space for the current pose.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from neondrive.vehicle.state import Pose


@dataclass(frozen=True)
class BodyPart:
    """Box-shaped body part in vehicle-local coordinates.

    Local axes: +X right, +Y up, -Z forward.
    """
    name: str
    center: tuple
    size: tuple                # Full (width, height, length)
    color: str = "#00FFFF"

    @property
    def half_extents(self) -> np.ndarray:
        """Half of the part size."""
        return np.asarray(self.size, dtype=float) / 2.0


@dataclass(frozen=True)
class PlacedPart:
    """Body part transformed into world space."""
    name: str
    center: np.ndarray
    half_extents: np.ndarray
    rotation: np.ndarray
    color: str


def default_parts() -> List[BodyPart]:
    """Standard player vehicle: a cyan wedge with tail lights."""
    return [
        BodyPart("chassis", (0.0, 0.0, 0.0), (1.0, 0.5, 2.0), "#00FFFF"),
        BodyPart("cockpit", (0.0, 0.35, 0.2), (0.6, 0.2, 0.8), "#004455"),
        BodyPart("tail_light_left", (-0.35, 0.05, 1.01), (0.2, 0.1, 0.02), "#FF00FF"),
        BodyPart("tail_light_right", (0.35, 0.05, 1.01), (0.2, 0.1, 0.02), "#FF00FF"),
    ]


@dataclass
class VehicleBody:
    """Player vehicle model."""
    parts: List[BodyPart] = field(default_factory=default_parts)

    def get_part(self, name: str) -> BodyPart | None:
        """Find a part by name."""
        for part in self.parts:
            if part.name == name:
                return part
        return None

    def world_parts(self, pose: Pose) -> List[PlacedPart]:
        """Place every part at the given pose.

        Args:
            pose: Vehicle pose from locomotion

        Returns:
            Parts with world-space centres and rotations
        """
        return [
            PlacedPart(
                name=part.name,
                center=pose.transform_point(part.center),
                half_extents=part.half_extents,
                rotation=pose.orientation.copy(),
                color=part.color,
            )
            for part in self.parts
        ]
