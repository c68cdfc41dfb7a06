"""2D point and vector helpers.

Points and vectors travel through the public API as ``(x, y)`` tuples;
numpy arrays are used internally for the arithmetic.
"""

import math
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from ..config import CURVE_TOLERANCES

Point = Tuple[float, float]
Vector = Tuple[float, float]
PointLike = Union[Sequence[float], np.ndarray]

TWO_PI = 2.0 * math.pi


def as_array(p: PointLike) -> np.ndarray:
    """Convert a point-like value to a float numpy array of shape (2,)."""
    arr = np.asarray(p, dtype=float)
    if arr.shape != (2,):
        raise ValueError(f"Expected a 2D point, got shape {arr.shape}")
    return arr


def to_point(arr: PointLike) -> Point:
    """Convert a point-like value to an ``(x, y)`` tuple of floats."""
    return (float(arr[0]), float(arr[1]))


def distance(p: PointLike, q: PointLike) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(as_array(q) - as_array(p)))


def cross(u: PointLike, v: PointLike) -> float:
    """Z component of the cross product ``u x v``."""
    return float(u[0] * v[1] - u[1] * v[0])


def dot(u: PointLike, v: PointLike) -> float:
    """Dot product."""
    return float(u[0] * v[0] + u[1] * v[1])


def unit_vector(angle: float) -> Vector:
    """Unit vector rotated ``angle`` radians from the X axis."""
    return (math.cos(angle), math.sin(angle))


def perp_left(v: PointLike) -> Vector:
    """Vector rotated 90 degrees counter-clockwise."""
    return (-float(v[1]), float(v[0]))


def angle_to(u: PointLike, v: PointLike) -> float:
    """Signed angle in ``(-pi, pi]`` that rotates ``u`` onto ``v``."""
    return math.atan2(cross(u, v), dot(u, v))


def rotation_matrix(angle: float) -> np.ndarray:
    """2x2 counter-clockwise rotation matrix."""
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([[c, -s], [s, c]])


def ensure_0_to_2pi(angle: float) -> float:
    """Wrap an angle to ``[0, 2*pi)``."""
    wrapped = angle % TWO_PI
    # fmod rounding can land exactly on 2*pi for tiny negative inputs
    if wrapped >= TWO_PI:
        wrapped -= TWO_PI
    return wrapped


def epsilon_equals(
    a: Union[float, PointLike],
    b: Union[float, PointLike],
    tolerance: Optional[float] = None,
) -> bool:
    """Compare scalars or points within an absolute tolerance."""
    if tolerance is None:
        tolerance = CURVE_TOLERANCES["epsilon"]

    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        if math.isinf(a) or math.isinf(b):
            return a == b
        return abs(a - b) <= tolerance

    pa = as_array(a)  # type: ignore[arg-type]
    pb = as_array(b)  # type: ignore[arg-type]
    return bool(np.all(np.abs(pa - pb) <= tolerance))
