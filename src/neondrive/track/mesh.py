"""
Road mesh - Renderable geometry extruded along the track curve.

Defines:
- Quad: one road-surface or lane-marking patch
- BarrierBox: oriented side barrier
- RoadMesh: grouped output handed to the renderer
- RoadMeshBuilder: samples the curve and emits the groups
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple
import logging

import numpy as np

from neondrive.errors import MalformedTrackError
from neondrive.geometry.curve import CatmullRomCurve
from neondrive.geometry.frame import Frame, FrameSolver

logger = logging.getLogger(__name__)

# Two counter-clockwise triangles per quad, seen from the frame's up side
QUAD_INDICES = np.array([[0, 1, 2], [0, 2, 3]], dtype=np.int32)
QUAD_UVS = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


@dataclass
class MeshConfig:
    """Configuration for road mesh generation."""
    # Lane markings
    marking_interval: int = 5          # Emit a dash every N samples
    marking_width: float = 0.2
    marking_bias: float = 0.01         # Lift along up to avoid z-fighting
    edge_inset: float = 0.3            # Edge lines sit this far inside the road

    # Side barriers
    barrier_interval: int = 10         # One barrier box per N samples
    barrier_thickness: float = 0.3
    barrier_height: float = 0.5

    def __post_init__(self):
        """Validate intervals."""
        if self.marking_interval < 1 or self.barrier_interval < 1:
            raise ValueError("Mesh intervals must be >= 1")


@dataclass(frozen=True)
class Quad:
    """Four-vertex patch between two curve samples.

    Vertex order is (left start, right start, right end, left end).
    """
    vertices: np.ndarray   # (4, 3)
    normals: np.ndarray    # (4, 3)
    uvs: np.ndarray        # (4, 2)
    kind: str = "surface"

    @property
    def center(self) -> np.ndarray:
        """Average of the four vertices."""
        return self.vertices.mean(axis=0)


@dataclass(frozen=True)
class BarrierBox:
    """Oriented box standing at the road edge."""
    center: np.ndarray        # (3,)
    half_extents: np.ndarray  # (3,) along the box's local right/up/back axes
    rotation: np.ndarray      # (3, 3), columns are local axes in world space
    side: str = "left"        # "left" or "right"

    @property
    def length(self) -> float:
        """Box length along the road."""
        return float(self.half_extents[2] * 2.0)

    def corners(self) -> np.ndarray:
        """World-space corners of the box.

        Returns:
            Array of shape (8, 3)
        """
        signs = np.array([
            [sx, sy, sz]
            for sx in (-1.0, 1.0)
            for sy in (-1.0, 1.0)
            for sz in (-1.0, 1.0)
        ])
        local = signs * self.half_extents
        return self.center + local @ self.rotation.T


@dataclass
class RoadMesh:
    """Grouped road geometry.

    Built once per track and never mutated afterwards.
    """
    surface: List[Quad] = field(default_factory=list)
    markings: List[Quad] = field(default_factory=list)
    barriers: List[BarrierBox] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Check if no geometry was emitted."""
        return not (self.surface or self.markings or self.barriers)

    def to_arrays(self, group: str = "surface") -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Flatten a quad group into renderer buffers.

        Args:
            group: "surface" or "markings"

        Returns:
            Tuple of (vertices (N*4, 3), normals (N*4, 3), uvs (N*4, 2),
            triangle indices (N*2, 3))
        """
        if group not in ("surface", "markings"):
            raise ValueError(f"Unknown quad group: {group}")

        quads = getattr(self, group)
        if not quads:
            return (
                np.zeros((0, 3)),
                np.zeros((0, 3)),
                np.zeros((0, 2)),
                np.zeros((0, 3), dtype=np.int32),
            )

        vertices = np.concatenate([q.vertices for q in quads])
        normals = np.concatenate([q.normals for q in quads])
        uvs = np.concatenate([q.uvs for q in quads])
        indices = np.concatenate([QUAD_INDICES + 4 * i for i in range(len(quads))])
        return vertices, normals, uvs, indices

    def get_state(self) -> Dict[str, int]:
        """Get mesh summary.

        Returns:
            Dictionary with element counts
        """
        return {
            "surface_quads": len(self.surface),
            "marking_quads": len(self.markings),
            "barriers": len(self.barriers),
        }


class RoadMeshBuilder:
    """Builds road geometry from a curve.

    Each surface quad spans two adjacent samples and uses a single frame
    taken at the parameter midpoint, so a quad never twists along its
    length. Markings and barriers are emitted on coarser intervals.

    Usage:
        builder = RoadMeshBuilder()
        mesh = builder.build(curve, width=7.0, sample_count=200)
    """

    def __init__(
        self,
        config: MeshConfig | None = None,
        solver: FrameSolver | None = None,
    ):
        """Initialize builder.

        Args:
            config: Mesh configuration. Uses defaults if None.
            solver: Frame solver. Uses a world-up solver if None.
        """
        self.config = config or MeshConfig()
        self.solver = solver or FrameSolver()

    def build(
        self,
        curve: CatmullRomCurve,
        width: float,
        sample_count: int,
    ) -> RoadMesh:
        """Build the road mesh.

        Args:
            curve: Track centreline
            width: Road width
            sample_count: Number of surface quads along the curve

        Returns:
            RoadMesh, empty when the curve is malformed
        """
        if width <= 0:
            raise ValueError(f"Road width must be > 0, got {width}")
        if sample_count < 1:
            raise ValueError(f"sample_count must be >= 1, got {sample_count}")

        try:
            positions, _ = curve.sample(sample_count)
            params = np.linspace(0.0, 1.0, sample_count + 1)
            frames = [
                self.solver.frame(curve.tangent(0.5 * (params[i] + params[i + 1])))
                for i in range(sample_count)
            ]
        except MalformedTrackError as exc:
            logger.warning("Skipping road mesh for malformed track: %s", exc)
            return RoadMesh()

        half_width = width / 2.0

        mesh = RoadMesh(
            surface=self._build_surface(positions, frames, half_width),
            markings=self._build_markings(positions, frames, half_width),
            barriers=self._build_barriers(positions, half_width),
        )

        logger.debug("Built road mesh: %s", mesh.get_state())
        return mesh

    @staticmethod
    def _make_quad(
        start: np.ndarray,
        end: np.ndarray,
        frame: Frame,
        half_width: float,
        kind: str,
    ) -> Quad:
        offset = frame.right * half_width
        vertices = np.array([
            start - offset,
            start + offset,
            end + offset,
            end - offset,
        ])
        normals = np.tile(frame.up, (4, 1))
        return Quad(vertices=vertices, normals=normals, uvs=QUAD_UVS.copy(), kind=kind)

    def _build_surface(
        self,
        positions: np.ndarray,
        frames: List[Frame],
        half_width: float,
    ) -> List[Quad]:
        return [
            self._make_quad(positions[i], positions[i + 1], frames[i], half_width, "surface")
            for i in range(len(frames))
        ]

    def _build_markings(
        self,
        positions: np.ndarray,
        frames: List[Frame],
        half_width: float,
    ) -> List[Quad]:
        """Emit dashed centre and edge lines.

        Args:
            positions: Curve samples
            frames: Per-segment frames
            half_width: Half the road width

        Returns:
            Marking quads, three per dash position
        """
        cfg = self.config
        edge = max(half_width - cfg.edge_inset, 0.0)
        offsets = (-edge, 0.0, edge)
        markings = []

        for i in range(0, len(frames), cfg.marking_interval):
            frame = frames[i]
            lift = frame.up * cfg.marking_bias
            for lateral in offsets:
                shift = frame.right * lateral + lift
                markings.append(self._make_quad(
                    positions[i] + shift,
                    positions[i + 1] + shift,
                    frame,
                    cfg.marking_width / 2.0,
                    "marking",
                ))

        return markings

    def _build_barriers(
        self,
        positions: np.ndarray,
        half_width: float,
    ) -> List[BarrierBox]:
        """Emit barrier boxes along both road edges.

        Args:
            positions: Curve samples
            half_width: Half the road width

        Returns:
            Barrier boxes, a left/right pair per coarse segment
        """
        cfg = self.config
        last = len(positions) - 1
        barriers = []

        for start in range(0, last, cfg.barrier_interval):
            end = min(start + cfg.barrier_interval, last)
            chord = positions[end] - positions[start]
            length = float(np.linalg.norm(chord))
            if length < 1e-9:
                continue

            frame = self.solver.frame(chord)
            midpoint = 0.5 * (positions[start] + positions[end])
            half_extents = np.array([
                cfg.barrier_thickness / 2.0,
                cfg.barrier_height / 2.0,
                length / 2.0,
            ])
            lateral = half_width + cfg.barrier_thickness / 2.0
            lift = frame.up * (cfg.barrier_height / 2.0)

            for side, sign in (("left", -1.0), ("right", 1.0)):
                barriers.append(BarrierBox(
                    center=midpoint + frame.right * (sign * lateral) + lift,
                    half_extents=half_extents,
                    rotation=frame.matrix,
                    side=side,
                ))

        return barriers
