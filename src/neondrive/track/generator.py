"""
Path generator - Procedural control points for the track centreline.

Generates:
- A strictly forward-moving sequence of 3D control points
- Random lateral turns and elevation changes within bounds
- A re-centred tail so the track ends near the start line
"""

from dataclasses import dataclass
import logging

import numpy as np

logger = logging.getLogger(__name__)

# Lateral scale applied to the last three points, in order
RECENTER_FACTORS = (0.75, 0.5, 0.25)


@dataclass
class PathBounds:
    """Random perturbation limits for path generation."""
    # Lateral (x)
    lateral_bound: float = 30.0        # Running |x| never exceeds this
    max_lateral: float = 8.0           # Largest single turn offset
    turn_probability: float = 0.35

    # Elevation (y)
    max_elevation: float = 6.0         # Running y stays in [0, max_elevation]
    max_elevation_step: float = 2.0    # Largest single elevation change
    elevation_probability: float = 0.25

    def __post_init__(self):
        """Validate bounds."""
        if self.lateral_bound < 0 or self.max_elevation < 0:
            raise ValueError("Path bounds must be non-negative")
        if not 0.0 <= self.turn_probability <= 1.0:
            raise ValueError("turn_probability must be in [0, 1]")
        if not 0.0 <= self.elevation_probability <= 1.0:
            raise ValueError("elevation_probability must be in [0, 1]")


class PathGenerator:
    """Procedural track path generator.

    The path starts at the origin heading down -Z. Each segment advances
    exactly ``segment_length`` forward, so the curve built on top of it
    samples at a uniform forward spacing.

    Randomness comes only from the injected numpy Generator; two
    generators with the same seed produce identical paths.

    Usage:
        generator = PathGenerator(seed=42)
        points = generator.generate(20, 20.0)
    """

    def __init__(
        self,
        bounds: PathBounds | None = None,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ):
        """Initialize generator.

        Args:
            bounds: Perturbation limits. Uses defaults if None.
            seed: Seed for a new random generator (ignored if rng given)
            rng: Random generator to draw from
        """
        self.bounds = bounds or PathBounds()
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    @property
    def rng(self) -> np.random.Generator:
        """Random source used for generation."""
        return self._rng

    def generate(
        self,
        segment_count: int,
        segment_length: float,
        bounds: PathBounds | None = None,
    ) -> np.ndarray:
        """Generate a control-point sequence.

        Args:
            segment_count: Number of segments (points after the origin)
            segment_length: Forward distance between consecutive points
            bounds: Overrides the generator's bounds for this call

        Returns:
            Array of shape (segment_count + 1, 3); row 0 is the origin
        """
        if segment_count < 1:
            raise ValueError(f"segment_count must be >= 1, got {segment_count}")
        if segment_length <= 0:
            raise ValueError(f"segment_length must be > 0, got {segment_length}")

        bounds = bounds or self.bounds

        points = np.zeros((segment_count + 1, 3))
        x = 0.0
        y = 0.0

        for i in range(1, segment_count + 1):
            if self._rng.random() < bounds.turn_probability:
                delta = self._rng.uniform(-bounds.max_lateral, bounds.max_lateral)
                x = float(np.clip(x + delta, -bounds.lateral_bound, bounds.lateral_bound))

            if self._rng.random() < bounds.elevation_probability:
                delta = self._rng.uniform(
                    -bounds.max_elevation_step,
                    bounds.max_elevation_step,
                )
                y = float(np.clip(y + delta, 0.0, bounds.max_elevation))

            points[i] = (x, y, -i * segment_length)

        self._recenter_tail(points)

        logger.debug(
            "Generated path: %d points, final lateral %.2f",
            len(points),
            points[-1, 0],
        )
        return points

    @staticmethod
    def _recenter_tail(points: np.ndarray) -> None:
        """Pull the last three points toward the centreline.

        Args:
            points: Control points, modified in place
        """
        final_x = points[-1, 0]
        # Never touch the origin row
        tail = min(len(RECENTER_FACTORS), len(points) - 1)
        factors = RECENTER_FACTORS[len(RECENTER_FACTORS) - tail:]

        for offset, factor in enumerate(factors):
            index = len(points) - tail + offset
            points[index, 0] = final_x * factor

    def generate_with_seed(
        self,
        seed: int,
        segment_count: int,
        segment_length: float,
    ) -> np.ndarray:
        """Generate a path from a fresh generator with a specific seed.

        Args:
            seed: Random seed
            segment_count: Number of segments
            segment_length: Forward distance between points

        Returns:
            Control points
        """
        self._rng = np.random.default_rng(seed)
        return self.generate(segment_count, segment_length)
