"""
Telemetry recorder - Collects session snapshots into channels.

Provides:
- Standard drive channels
- Lap boundaries for per-lap queries
- In-memory statistics for the HUD
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from neondrive.telemetry.channel import ChannelConfig, TelemetryChannel
from neondrive.telemetry.snapshot import TelemetrySnapshot

LANE_CODES = {"left": -1.0, "center": 0.0, "right": 1.0}


def standard_channels() -> Dict[str, ChannelConfig]:
    """Channel definitions recorded from each snapshot."""
    return {
        "distance": ChannelConfig("distance", "units", 0.0, float('inf'), 2),
        "speed_multiplier": ChannelConfig("speed_multiplier", "x", 0.0, 10.0, 2),
        "lateral": ChannelConfig("lateral", "half-width", -1.0, 1.0, 3),
        "lane": ChannelConfig("lane", "", -1.0, 1.0, 0),
        "camera_height": ChannelConfig("camera_height", "units", precision=2),
    }


@dataclass
class RecorderConfig:
    """Recorder configuration."""
    every_n_ticks: int = 1             # Sample decimation
    channels: List[str] | None = None  # Channels to record (None = all)
    history: int = 100000              # Per-channel retained samples


class TelemetryRecorder:
    """Records telemetry snapshots.

    Usage:
        recorder = TelemetryRecorder()
        session.add_post_step_callback(lambda s, snap: recorder.record(snap))
    """

    def __init__(self, config: RecorderConfig | None = None):
        """Initialize recorder.

        Args:
            config: Recorder configuration. Uses defaults if None.
        """
        self.config = config or RecorderConfig()

        definitions = standard_channels()
        names = self.config.channels or list(definitions)

        self._channels: Dict[str, TelemetryChannel] = {}
        for name in names:
            cfg = definitions.get(name, ChannelConfig(name=name))
            cfg.history = self.config.history
            self._channels[name] = TelemetryChannel(cfg)

        self._current_lap = 0
        self._lap_start_times: List[float] = [0.0]
        self._last_key: Tuple[int, int] | None = None

    @property
    def channels(self) -> Dict[str, TelemetryChannel]:
        """All channels."""
        return self._channels

    @property
    def current_lap(self) -> int:
        """Index of the lap being recorded, counted across regenerations."""
        return self._current_lap

    def get_channel(self, name: str) -> Optional[TelemetryChannel]:
        """Get a channel by name."""
        return self._channels.get(name)

    def record(self, snapshot: TelemetrySnapshot) -> bool:
        """Record a snapshot.

        Args:
            snapshot: Telemetry after a tick

        Returns:
            True if the snapshot was sampled
        """
        key = (snapshot.track_version, snapshot.lap)
        if self._last_key is not None and key != self._last_key:
            # New lap, or a fresh track restarting the lap count
            self._current_lap += 1
            self._lap_start_times.append(snapshot.time)
        self._last_key = key

        if snapshot.tick % self.config.every_n_ticks:
            return False

        values = {
            "distance": snapshot.distance,
            "speed_multiplier": snapshot.speed_multiplier,
            "lateral": snapshot.lateral,
            "lane": LANE_CODES[snapshot.lane.value],
            "camera_height": float(snapshot.camera_position[1]),
        }
        for name, value in values.items():
            if name in self._channels:
                self._channels[name].record(snapshot.time, value)
        return True

    def get_lap_data(self, lap: int, channel: str) -> Tuple[np.ndarray, np.ndarray]:
        """Get one channel's samples for a lap.

        Args:
            lap: Lap number (0 = first lap)
            channel: Channel name

        Returns:
            Tuple of (times, values); empty for unknown laps or channels
        """
        if channel not in self._channels or not 0 <= lap < len(self._lap_start_times):
            return np.array([]), np.array([])

        start = self._lap_start_times[lap]
        if lap + 1 < len(self._lap_start_times):
            # Exclude the first sample of the next lap
            end = np.nextafter(self._lap_start_times[lap + 1], -np.inf)
        else:
            end = float('inf')
        return self._channels[channel].get_range(start, end)

    def get_current_values(self) -> Dict[str, float]:
        """Most recent value of each channel."""
        return {name: ch.last_value for name, ch in self._channels.items()}

    def get_statistics(self) -> Dict[str, dict]:
        """Summary of each channel."""
        return {name: ch.get_state() for name, ch in self._channels.items()}

    def clear(self) -> None:
        """Drop all recorded data."""
        for channel in self._channels.values():
            channel.clear()
        self._current_lap = 0
        self._lap_start_times = [0.0]
        self._last_key = None

    def get_state(self) -> dict:
        """Get recorder summary."""
        return {
            "current_lap": self._current_lap,
            "total_samples": sum(ch.count for ch in self._channels.values()),
            "channels": self.get_statistics(),
        }
