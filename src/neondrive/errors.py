"""
Errors - Exception types raised by the NeonDrive core.

Recoverable faults (degenerate frames, out-of-range parameters) never
surface as exceptions; only a malformed track does, and the components
that consume a curve catch it and degrade gracefully.
"""


class NeonDriveError(Exception):
    """Base class for NeonDrive errors."""


class MalformedTrackError(NeonDriveError):
    """Raised when a curve cannot answer queries.

    A curve is malformed when it has fewer than two control points or
    when its total length is zero.
    """
