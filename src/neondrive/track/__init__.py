"""
Track module - Procedural track generation and road geometry.

This module contains:
- Track: Track aggregate owning the curve and road mesh
- PathGenerator: Randomized, bounded control-point generation
- RoadMeshBuilder: Road surface, lane markings and side barriers
"""

from neondrive.track.track import Track, TrackConfig
from neondrive.track.generator import PathGenerator, PathBounds
from neondrive.track.mesh import RoadMeshBuilder, RoadMesh, MeshConfig, Quad, BarrierBox

__all__ = [
    "Track",
    "TrackConfig",
    "PathGenerator",
    "PathBounds",
    "RoadMeshBuilder",
    "RoadMesh",
    "MeshConfig",
    "Quad",
    "BarrierBox",
]
