"""
Simulation module - Per-tick pipeline driven by the render loop.

This module contains:
- Session: Track, vehicle and camera driven once per tick
- ControlIntent: Resolved player input
"""

from neondrive.simulation.session import Session, SessionConfig
from neondrive.simulation.intent import ControlIntent, NO_INPUT

__all__ = [
    "Session",
    "SessionConfig",
    "ControlIntent",
    "NO_INPUT",
]
