"""
Telemetry module - Read-only drive data for the HUD.

This module contains:
- TelemetrySnapshot: Values published after each tick
- TelemetryRecorder: Collects snapshots into channels
- TelemetryChannel: Individual data series
"""

from neondrive.telemetry.snapshot import TelemetrySnapshot, LanePosition, classify_lane
from neondrive.telemetry.channel import TelemetryChannel, ChannelConfig
from neondrive.telemetry.recorder import TelemetryRecorder, RecorderConfig

__all__ = [
    "TelemetrySnapshot",
    "LanePosition",
    "classify_lane",
    "TelemetryChannel",
    "ChannelConfig",
    "TelemetryRecorder",
    "RecorderConfig",
]
