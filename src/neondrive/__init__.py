"""
NeonDrive - Procedural track driving core.

This package provides the engine behind a neon track runner:
- Randomized, bounded track paths and a Catmull-Rom centreline
- Road surface, lane marking and barrier geometry along the curve
- Vehicle locomotion with damped steering, banking and lap wrap
- Smoothed follow camera and a free camera
- Telemetry values for a HUD

Rendering, input capture and frame scheduling live outside this package.
"""

__version__ = "0.1.0"

from neondrive.simulation.session import Session
from neondrive.track.track import Track
from neondrive.vehicle.locomotion import Locomotion

__all__ = ["Session", "Track", "Locomotion", "__version__"]
