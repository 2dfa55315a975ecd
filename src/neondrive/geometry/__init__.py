"""
Geometry module - Curve interpolation and frame derivation.

This module contains:
- CatmullRomCurve: Open spline through the track control points
- FrameSolver: Stable right/up/forward basis from a tangent
- Frame: Orthonormal basis value
"""

from neondrive.geometry.curve import CatmullRomCurve
from neondrive.geometry.frame import Frame, FrameSolver, solve_frame

__all__ = [
    "CatmullRomCurve",
    "Frame",
    "FrameSolver",
    "solve_frame",
]
