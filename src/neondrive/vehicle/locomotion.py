"""
Locomotion - Per-tick vehicle movement along the track curve.

Integrates:
- Steering accumulator with exponential centring
- Lateral offset across the road
- Forward progress with lap wrap
- World pose from the curve frame, with banking and ride bounce
"""

from dataclasses import dataclass
import logging

import numpy as np

from neondrive.errors import MalformedTrackError
from neondrive.geometry.curve import CatmullRomCurve
from neondrive.geometry.frame import FrameSolver
from neondrive.geometry.vectors import basis_matrix, clamp, rotate_about_axis
from neondrive.vehicle.state import Pose, VehicleState

logger = logging.getLogger(__name__)


@dataclass
class LocomotionConfig:
    """Locomotion tuning."""
    # Steering
    turn_rate: float = 0.1             # Accumulator change per tick while held
    max_steering: float = 1.0
    damping: float = 0.85              # Accumulator decay per tick when released
    steering_epsilon: float = 1e-3     # Below this the accumulator snaps to 0

    # Lateral
    lateral_gain: float = 0.04         # Lateral change per unit steering per tick
    max_lateral: float = 0.85          # Fraction of half-width

    # Forward
    forward_gain: float = 0.001        # Curve parameter per tick at speed 1.0
    arc_length: bool = False           # Drive by arc length instead of point index

    # Cosmetics
    ride_height: float = 0.25
    bounce_amplitude: float = 0.03
    bounce_frequency: float = 2.0      # Radians per unit of distance
    bank_angle: float = 0.25           # Roll in radians at full steering


@dataclass
class TickResult:
    """Outcome of one locomotion tick."""
    state: VehicleState
    pose: Pose
    distance: float
    valid: bool = True

    @property
    def position(self) -> np.ndarray:
        """World position."""
        return self.pose.position

    @property
    def orientation(self) -> np.ndarray:
        """World orientation matrix."""
        return self.pose.orientation


class Locomotion:
    """Moves the vehicle along a track curve.

    The vehicle never leaves the curve: its world pose is always the
    curve point at ``t`` pushed sideways by the lateral offset. A
    malformed curve does not raise; the last valid pose is held.

    Usage:
        locomotion = Locomotion(track.curve, track.width)
        state = locomotion.spawn()
        result = locomotion.tick(state, steering_intent=1, speed_multiplier=1.0, dt=1 / 60)
        state = result.state
    """

    def __init__(
        self,
        curve: CatmullRomCurve,
        width: float,
        config: LocomotionConfig | None = None,
        solver: FrameSolver | None = None,
    ):
        """Initialize locomotion.

        Args:
            curve: Track centreline
            width: Road width
            config: Locomotion configuration. Uses defaults if None.
            solver: Frame solver. Uses a world-up solver if None.
        """
        self.config = config or LocomotionConfig()
        self.solver = solver or FrameSolver()

        self._curve = curve
        self._width = width
        self._last_pose = Pose(position=np.array([0.0, self.config.ride_height, 0.0]))
        self._warned_invalid = False

    @property
    def curve(self) -> CatmullRomCurve:
        """Curve being driven."""
        return self._curve

    @property
    def width(self) -> float:
        """Road width."""
        return self._width

    @property
    def last_pose(self) -> Pose:
        """Most recent valid pose."""
        return self._last_pose.copy()

    def set_track(self, curve: CatmullRomCurve, width: float) -> None:
        """Switch to a new curve.

        The last valid pose is kept until the new curve yields one.

        Args:
            curve: New centreline
            width: New road width
        """
        self._curve = curve
        self._width = width
        self._warned_invalid = False

    def spawn(self) -> VehicleState:
        """Create a vehicle state at the start line."""
        return VehicleState()

    def respawn(self) -> VehicleState:
        """Spawn at the start line and make that the held pose.

        Paused ticks after a respawn hold the start pose on the current
        curve. On a malformed curve the previous pose is kept.

        Returns:
            Fresh vehicle state
        """
        state = self.spawn()
        if self._curve.is_valid:
            self._last_pose = self.pose_at(state)
        return state

    def steer(self, steering: float, intent: int) -> float:
        """Advance the steering accumulator.

        Args:
            steering: Current accumulator value
            intent: -1 (left), 0 (release) or +1 (right)

        Returns:
            New accumulator value
        """
        cfg = self.config
        if intent < 0:
            return max(-cfg.max_steering, steering - cfg.turn_rate)
        if intent > 0:
            return min(cfg.max_steering, steering + cfg.turn_rate)

        steering *= cfg.damping
        if abs(steering) < cfg.steering_epsilon:
            return 0.0
        return steering

    def pose_at(self, state: VehicleState) -> Pose:
        """Compute the world pose for a state.

        Args:
            state: Vehicle state

        Returns:
            Pose on the curve

        Raises:
            MalformedTrackError: If the curve cannot be sampled
        """
        cfg = self.config
        param = self._curve.parameter_at(state.t) if cfg.arc_length else state.t

        center = self._curve.position(param)
        frame = self.solver.frame(self._curve.tangent(param))

        bounce = cfg.bounce_amplitude * np.sin(state.distance * cfg.bounce_frequency)
        position = (
            center
            + frame.right * (state.lateral * self._width / 2.0)
            + frame.up * (cfg.ride_height + bounce)
        )

        roll = state.steering * cfg.bank_angle
        right = rotate_about_axis(frame.right, frame.forward, roll)
        up = rotate_about_axis(frame.up, frame.forward, roll)

        return Pose(position=position, orientation=basis_matrix(right, up, -frame.forward))

    def tick(
        self,
        state: VehicleState,
        steering_intent: int,
        speed_multiplier: float,
        dt: float,
        paused: bool = False,
    ) -> TickResult:
        """Advance the vehicle by one tick.

        Args:
            state: Current vehicle state (not modified)
            steering_intent: -1 (left), 0 (none) or +1 (right)
            speed_multiplier: Forward speed scale, negative values count as 0
            dt: Tick duration in seconds (only feeds lap time)
            paused: Hold position without integrating

        Returns:
            TickResult with the new state and pose
        """
        if steering_intent not in (-1, 0, 1):
            raise ValueError(f"steering_intent must be -1, 0 or 1, got {steering_intent}")

        if paused:
            return self._hold(state, valid=self._curve.is_valid)

        try:
            length = self._curve.length()
            if not self._curve.is_valid:
                raise MalformedTrackError("Curve has no drivable length")

            cfg = self.config
            new_state = state.copy()

            new_state.steering = self.steer(state.steering, steering_intent)
            new_state.lateral = clamp(
                state.lateral + new_state.steering * cfg.lateral_gain,
                -cfg.max_lateral,
                cfg.max_lateral,
            )

            advance = cfg.forward_gain * max(speed_multiplier, 0.0)
            new_state.t = state.t + advance
            new_state.lap_time = state.lap_time + dt

            if new_state.t >= 1.0:
                # Lap boundary: restart at the first control point
                new_state.t = 0.0
                new_state.distance = 0.0
                new_state.lap_time = 0.0
                new_state.lap += 1
                logger.debug("Lap %d complete", new_state.lap)
            else:
                new_state.distance = state.distance + advance * length

            pose = self.pose_at(new_state)
        except MalformedTrackError as exc:
            if not self._warned_invalid:
                logger.warning("Holding vehicle pose on malformed track: %s", exc)
                self._warned_invalid = True
            return self._hold(state, valid=False)

        self._last_pose = pose
        return TickResult(
            state=new_state,
            pose=pose.copy(),
            distance=new_state.t * length,
            valid=True,
        )

    def _hold(self, state: VehicleState, valid: bool = True) -> TickResult:
        distance = state.distance
        if valid:
            distance = state.t * self._curve.length()
        return TickResult(
            state=state.copy(),
            pose=self._last_pose.copy(),
            distance=distance,
            valid=valid,
        )
