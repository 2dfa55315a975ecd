"""
Vector helpers - Small numpy utilities shared by the geometry code.

Provides:
- Canonical world axes
- Safe normalization
- Linear interpolation and clamping
- Axis-angle rotation and matrix/quaternion conversion
"""

import numpy as np

WORLD_X = np.array([1.0, 0.0, 0.0])
WORLD_UP = np.array([0.0, 1.0, 0.0])
WORLD_Z = np.array([0.0, 0.0, 1.0])
DEFAULT_FORWARD = np.array([0.0, 0.0, -1.0])

EPSILON = 1e-9


def as_vec3(value) -> np.ndarray:
    """Coerce a sequence into a float 3-vector.

    Args:
        value: Any sequence of three numbers

    Returns:
        New array of shape (3,)
    """
    arr = np.asarray(value, dtype=float).reshape(3)
    return arr.copy()


def normalize(vector: np.ndarray, fallback: np.ndarray | None = None) -> np.ndarray:
    """Return a unit-length copy of a vector.

    Args:
        vector: Vector to normalize
        fallback: Returned (copied) when the vector has no length.
            Defaults to a zero vector.

    Returns:
        Unit vector, or the fallback for zero-length input
    """
    length = np.linalg.norm(vector)
    if length < EPSILON:
        if fallback is None:
            return np.zeros_like(vector, dtype=float)
        return np.array(fallback, dtype=float)
    return np.asarray(vector, dtype=float) / length


def lerp(start: np.ndarray, end: np.ndarray, factor: float) -> np.ndarray:
    """Linearly interpolate between two vectors."""
    return start + (end - start) * factor


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a scalar into [low, high]."""
    return float(min(max(value, low), high))


def rotate_about_axis(vector: np.ndarray, axis: np.ndarray, angle: float) -> np.ndarray:
    """Rotate a vector about a unit axis (Rodrigues' formula).

    Args:
        vector: Vector to rotate
        axis: Rotation axis (normalized internally)
        angle: Rotation angle in radians, right-handed

    Returns:
        Rotated vector
    """
    k = normalize(axis)
    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    return (
        vector * cos_a
        + np.cross(k, vector) * sin_a
        + k * np.dot(k, vector) * (1.0 - cos_a)
    )


def basis_matrix(right: np.ndarray, up: np.ndarray, back: np.ndarray) -> np.ndarray:
    """Assemble a 3x3 rotation matrix from its column vectors."""
    return np.column_stack([right, up, back])


def matrix_to_quaternion(matrix: np.ndarray) -> np.ndarray:
    """Convert a 3x3 rotation matrix into an (x, y, z, w) quaternion.

    Args:
        matrix: Orthonormal rotation matrix

    Returns:
        Unit quaternion as array [x, y, z, w]
    """
    m = np.asarray(matrix, dtype=float)
    trace = m[0, 0] + m[1, 1] + m[2, 2]

    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        w = 0.25 / s
        x = (m[2, 1] - m[1, 2]) * s
        y = (m[0, 2] - m[2, 0]) * s
        z = (m[1, 0] - m[0, 1]) * s
    elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
        s = 2.0 * np.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2])
        w = (m[2, 1] - m[1, 2]) / s
        x = 0.25 * s
        y = (m[0, 1] + m[1, 0]) / s
        z = (m[0, 2] + m[2, 0]) / s
    elif m[1, 1] > m[2, 2]:
        s = 2.0 * np.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2])
        w = (m[0, 2] - m[2, 0]) / s
        x = (m[0, 1] + m[1, 0]) / s
        y = 0.25 * s
        z = (m[1, 2] + m[2, 1]) / s
    else:
        s = 2.0 * np.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1])
        w = (m[1, 0] - m[0, 1]) / s
        x = (m[0, 2] + m[2, 0]) / s
        y = (m[1, 2] + m[2, 1]) / s
        z = 0.25 * s

    quat = np.array([x, y, z, w])
    return quat / np.linalg.norm(quat)
