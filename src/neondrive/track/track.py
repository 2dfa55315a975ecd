"""
Track - Complete procedurally generated track.

Contains:
- Track configuration (segments, width, mesh resolution)
- The centreline curve
- The road mesh built from it
"""

from dataclasses import dataclass, field
import logging

import numpy as np

from neondrive.geometry.curve import CatmullRomCurve
from neondrive.track.generator import PathBounds, PathGenerator
from neondrive.track.mesh import MeshConfig, RoadMesh, RoadMeshBuilder

logger = logging.getLogger(__name__)


@dataclass
class TrackConfig:
    """Track configuration."""
    # Path
    segment_count: int = 20
    segment_length: float = 20.0
    bounds: PathBounds = field(default_factory=PathBounds)

    # Road
    width: float = 7.0
    sample_count: int = 200            # Surface quads along the curve
    mesh: MeshConfig = field(default_factory=MeshConfig)


class Track:
    """Track aggregate.

    Owns the curve and the road mesh derived from it. Both are built
    together and never change; a new layout means a new Track.

    Usage:
        track = Track.create(TrackConfig(), seed=7)
        pos = track.curve.position(0.5)
        vertices, normals, uvs, indices = track.mesh.to_arrays("surface")
    """

    def __init__(
        self,
        curve: CatmullRomCurve,
        mesh: RoadMesh,
        config: TrackConfig | None = None,
        seed: int | None = None,
    ):
        """Initialize track from prebuilt parts.

        Args:
            curve: Centreline curve
            mesh: Road mesh built from the curve
            config: Configuration the track was built with
            seed: Seed used for generation, if known
        """
        self.config = config or TrackConfig()
        self._curve = curve
        self._mesh = mesh
        self._seed = seed

    @classmethod
    def create(
        cls,
        config: TrackConfig | None = None,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> "Track":
        """Generate a new track.

        Args:
            config: Track configuration. Uses defaults if None.
            seed: Random seed (ignored if rng given)
            rng: Random generator to draw from

        Returns:
            Fully built Track
        """
        config = config or TrackConfig()
        generator = PathGenerator(config.bounds, seed=seed, rng=rng)
        points = generator.generate(config.segment_count, config.segment_length)

        curve = CatmullRomCurve(points)
        mesh = RoadMeshBuilder(config.mesh).build(curve, config.width, config.sample_count)

        logger.info(
            "Created track: %d control points, length %.1f, seed %s",
            curve.num_points,
            curve.length(),
            seed,
        )
        return cls(curve, mesh, config, seed)

    @classmethod
    def from_points(cls, points, config: TrackConfig | None = None) -> "Track":
        """Build a track around fixed control points.

        Args:
            points: Control points, shape (N, 3)
            config: Track configuration (path settings are ignored)

        Returns:
            Track; its mesh is empty if the points are malformed
        """
        config = config or TrackConfig()
        curve = CatmullRomCurve(points)
        mesh = RoadMeshBuilder(config.mesh).build(curve, config.width, config.sample_count)
        return cls(curve, mesh, config)

    @property
    def curve(self) -> CatmullRomCurve:
        """Centreline curve."""
        return self._curve

    @property
    def mesh(self) -> RoadMesh:
        """Road mesh."""
        return self._mesh

    @property
    def seed(self) -> int | None:
        """Seed used for generation."""
        return self._seed

    @property
    def width(self) -> float:
        """Road width."""
        return self.config.width

    @property
    def length(self) -> float:
        """Total centreline length."""
        return self._curve.length()

    @property
    def is_valid(self) -> bool:
        """Check if the curve can be driven."""
        return self._curve.is_valid

    def get_state(self) -> dict:
        """Get track summary.

        Returns:
            Dictionary containing track data
        """
        return {
            "seed": self._seed,
            "valid": self.is_valid,
            "width": self.config.width,
            "length": self.length,
            "num_points": self._curve.num_points,
            "mesh": self._mesh.get_state(),
        }
