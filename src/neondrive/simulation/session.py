"""
Session - Per-tick driving pipeline.

Provides:
- Track creation and atomic regeneration
- Input resolution, locomotion and camera update in a fixed order
- Speed and pause control
- Telemetry snapshots for the HUD
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List
import logging

import numpy as np

from neondrive.camera.follow import CameraConfig, FollowCamera
from neondrive.camera.free import FreeCamera
from neondrive.camera.state import CameraMode, CameraState
from neondrive.simulation.intent import NO_INPUT, ControlIntent
from neondrive.telemetry.snapshot import TelemetrySnapshot, classify_lane
from neondrive.track.track import Track, TrackConfig
from neondrive.vehicle.body import PlacedPart, VehicleBody
from neondrive.vehicle.locomotion import Locomotion, LocomotionConfig
from neondrive.vehicle.state import Pose, VehicleState

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    """Session configuration."""
    track: TrackConfig = field(default_factory=TrackConfig)
    locomotion: LocomotionConfig = field(default_factory=LocomotionConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)

    # Time stepping
    fixed_dt: float = 1.0 / 60.0

    # Speed control
    initial_speed: float = 1.0
    speed_step: float = 0.1
    min_speed: float = 0.2
    max_speed: float = 3.0

    # Free camera
    free_camera_speed: float = 0.5


class Session:
    """Drives one player along a generated track.

    Each call to ``step`` runs, in order: track regeneration (if asked),
    camera mode toggle, speed change, locomotion, camera update and the
    telemetry snapshot. Nothing is scheduled here; the caller's render
    loop calls ``step`` once per frame.

    Usage:
        session = Session(seed=3)
        while rendering:
            snapshot = session.step(intent)
            draw(session.track.mesh, session.pose, session.camera_state)
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        seed: int | None = None,
    ):
        """Initialize session and build the first track.

        Args:
            config: Session configuration. Uses defaults if None.
            seed: Seed for all track generation in this session
        """
        self.config = config or SessionConfig()
        self._rng = np.random.default_rng(seed)

        self._track = Track.create(self.config.track, rng=self._rng)
        self._track_version = 1

        self.locomotion = Locomotion(
            self._track.curve,
            self._track.width,
            self.config.locomotion,
        )
        self.follow_camera = FollowCamera(self.config.camera)
        self.free_camera = FreeCamera(self.config.free_camera_speed)
        self.body = VehicleBody()

        self._respawn()
        self._camera_state: CameraState | None = None
        self._camera_mode = CameraMode.FOLLOW
        self._speed = self.config.initial_speed

        self._paused = False
        self._tick = 0
        self._time = 0.0
        self._valid = self._track.is_valid
        self._last_snapshot: TelemetrySnapshot | None = None

        self._post_step_callbacks: List[Callable] = []

    @property
    def track(self) -> Track:
        """Current track."""
        return self._track

    @property
    def track_version(self) -> int:
        """Incremented on every regeneration, for scene rebuilds."""
        return self._track_version

    @property
    def vehicle(self) -> VehicleState:
        """Current vehicle state (copy)."""
        return self._vehicle.copy()

    @property
    def pose(self) -> Pose:
        """Current vehicle pose (copy)."""
        return self._pose.copy()

    @property
    def camera_state(self) -> CameraState | None:
        """Current camera state, None before the first tick."""
        return None if self._camera_state is None else self._camera_state.copy()

    @property
    def camera_mode(self) -> CameraMode:
        """Active camera controller."""
        return self._camera_mode

    @property
    def speed_multiplier(self) -> float:
        """Current forward speed scale."""
        return self._speed

    @property
    def is_paused(self) -> bool:
        """Check if the session is paused."""
        return self._paused

    @property
    def tick_count(self) -> int:
        """Ticks processed so far."""
        return self._tick

    @property
    def time(self) -> float:
        """Accumulated session time in seconds."""
        return self._time

    @property
    def last_snapshot(self) -> TelemetrySnapshot | None:
        """Telemetry from the most recent tick."""
        return self._last_snapshot

    def add_post_step_callback(self, callback: Callable) -> None:
        """Add a callback run after each step.

        Args:
            callback: Function taking (session, snapshot) arguments
        """
        self._post_step_callbacks.append(callback)

    def pause(self) -> None:
        """Freeze vehicle movement and speed changes."""
        self._paused = True

    def resume(self) -> None:
        """Resume vehicle movement."""
        self._paused = False

    def set_speed(self, speed: float) -> float:
        """Set the speed multiplier within the configured range.

        Args:
            speed: Requested multiplier

        Returns:
            Applied multiplier
        """
        self._speed = float(np.clip(speed, self.config.min_speed, self.config.max_speed))
        return self._speed

    def regenerate(self, seed: int | None = None) -> Track:
        """Replace the track and respawn the vehicle.

        The new track is fully built before anything is swapped, so no
        tick ever sees a new curve with an old mesh or vice versa. The
        camera keeps its state and eases over to the new spawn point.

        Args:
            seed: Seed for this track only; draws from the session
                generator if None

        Returns:
            The new track
        """
        rng = np.random.default_rng(seed) if seed is not None else self._rng
        track = Track.create(self.config.track, seed=seed, rng=rng)

        self._track = track
        self.locomotion.set_track(track.curve, track.width)
        self._respawn()
        self._valid = track.is_valid
        self._track_version += 1

        logger.info("Regenerated track (version %d)", self._track_version)
        return track

    def step(
        self,
        intent: ControlIntent | None = None,
        dt: float | None = None,
    ) -> TelemetrySnapshot:
        """Advance the session by one tick.

        Args:
            intent: Resolved player input, no input if None
            dt: Tick duration (uses fixed_dt if None)

        Returns:
            Telemetry snapshot after the tick
        """
        intent = intent or NO_INPUT
        dt = self.config.fixed_dt if dt is None else dt

        if intent.regenerate_track:
            self.regenerate()

        if intent.toggle_camera_mode:
            self._camera_mode = self._camera_mode.toggled()
            logger.debug("Camera mode: %s", self._camera_mode.value)

        if intent.throttle and not self._paused:
            self.set_speed(self._speed + intent.throttle * self.config.speed_step)

        result = self.locomotion.tick(
            self._vehicle,
            intent.steering,
            self._speed,
            dt,
            paused=self._paused,
        )
        self._vehicle = result.state
        self._pose = result.pose
        self._valid = result.valid

        if self._camera_mode is CameraMode.FOLLOW:
            self._camera_state = self.follow_camera.update(
                self._camera_state,
                result.position,
                result.orientation,
            )
        else:
            self._camera_state = self.free_camera.update(
                self._camera_state,
                intent.camera_delta,
            )

        self._tick += 1
        if not self._paused:
            self._time += dt

        snapshot = TelemetrySnapshot(
            tick=self._tick,
            time=self._time,
            distance=result.distance,
            speed_multiplier=self._speed,
            lateral=self._vehicle.lateral,
            lane=classify_lane(self._vehicle.lateral),
            lap=self._vehicle.lap,
            track_version=self._track_version,
            camera_mode=self._camera_mode,
            camera_position=self._camera_state.position.copy(),
            valid=result.valid,
        )
        self._last_snapshot = snapshot

        for callback in self._post_step_callbacks:
            callback(self, snapshot)

        return snapshot

    def _respawn(self) -> None:
        self._vehicle = self.locomotion.respawn()
        self._pose = self.locomotion.last_pose

    def body_parts(self) -> List[PlacedPart]:
        """Vehicle body parts at the current pose."""
        return self.body.world_parts(self._pose)

    def reset(self) -> None:
        """Respawn the vehicle on the current track and clear timing.

        The camera is left in place.
        """
        self._respawn()
        self._speed = self.config.initial_speed
        self._paused = False
        self._tick = 0
        self._time = 0.0
        self._last_snapshot = None

    def get_state(self) -> Dict[str, Any]:
        """Get complete session state.

        Returns:
            Dictionary containing session state
        """
        return {
            "tick": self._tick,
            "time": self._time,
            "paused": self._paused,
            "speed_multiplier": self._speed,
            "camera_mode": self._camera_mode.value,
            "camera": self._camera_state.get_state() if self._camera_state else None,
            "vehicle": self._vehicle.get_state(),
            "valid": self._valid,
            "track_version": self._track_version,
            "track": self._track.get_state(),
        }
