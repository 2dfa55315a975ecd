"""
Telemetry channel - One recorded series of per-tick values.

Provides:
- Bounded in-memory history
- Running statistics
- Range queries by session time
"""

from collections import deque
from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass
class ChannelConfig:
    """Configuration for a telemetry channel."""
    name: str = "unnamed"
    unit: str = ""
    min_value: float = float('-inf')
    max_value: float = float('inf')
    precision: int = 3
    history: int = 10000


class TelemetryChannel:
    """Single telemetry series.

    Values outside the configured range are clipped before recording.
    Statistics cover every sample ever recorded, not only the retained
    history.
    """

    def __init__(self, config: ChannelConfig | None = None, name: str = "channel"):
        """Initialize channel.

        Args:
            config: Channel configuration
            name: Channel name (used if config not provided)
        """
        self.config = config or ChannelConfig(name=name)

        self._times: deque = deque(maxlen=self.config.history)
        self._values: deque = deque(maxlen=self.config.history)

        self._min = float('inf')
        self._max = float('-inf')
        self._sum = 0.0
        self._count = 0

    @property
    def name(self) -> str:
        """Channel name."""
        return self.config.name

    @property
    def count(self) -> int:
        """Number of samples recorded."""
        return self._count

    @property
    def mean(self) -> float:
        """Mean over all samples."""
        return self._sum / self._count if self._count else 0.0

    @property
    def min_value(self) -> float:
        """Smallest value recorded."""
        return self._min if self._count else 0.0

    @property
    def max_value(self) -> float:
        """Largest value recorded."""
        return self._max if self._count else 0.0

    @property
    def last_value(self) -> float:
        """Most recent value."""
        return self._values[-1] if self._values else 0.0

    def record(self, time: float, value: float) -> None:
        """Record a sample.

        Args:
            time: Session time
            value: Sample value
        """
        value = float(np.clip(value, self.config.min_value, self.config.max_value))

        self._times.append(time)
        self._values.append(value)

        self._min = min(self._min, value)
        self._max = max(self._max, value)
        self._sum += value
        self._count += 1

    def get_values(self) -> np.ndarray:
        """Get retained values."""
        return np.array(self._values)

    def get_times(self) -> np.ndarray:
        """Get retained timestamps."""
        return np.array(self._times)

    def get_range(self, start_time: float, end_time: float) -> Tuple[np.ndarray, np.ndarray]:
        """Get retained samples inside a time window.

        Args:
            start_time: Window start (inclusive)
            end_time: Window end (inclusive)

        Returns:
            Tuple of (times, values)
        """
        times = self.get_times()
        values = self.get_values()
        if not len(times):
            return times, values
        mask = (times >= start_time) & (times <= end_time)
        return times[mask], values[mask]

    def clear(self) -> None:
        """Drop all samples and statistics."""
        self._times.clear()
        self._values.clear()
        self._min = float('inf')
        self._max = float('-inf')
        self._sum = 0.0
        self._count = 0

    def get_state(self) -> dict:
        """Get channel summary."""
        if not self._count:
            return {"name": self.name, "unit": self.config.unit, "count": 0}

        digits = self.config.precision
        return {
            "name": self.name,
            "unit": self.config.unit,
            "count": self._count,
            "min": round(self._min, digits),
            "max": round(self._max, digits),
            "mean": round(self.mean, digits),
            "last": round(self.last_value, digits),
        }
