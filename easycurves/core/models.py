"""Core curve models: the shared curve contract, lines and circular arcs."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

import numpy as np

from ..config import CURVE_TOLERANCES
from .exceptions import DegenerateGeometryError, RangeError
from .vectors import (
    TWO_PI,
    Point,
    Vector,
    as_array,
    cross,
    ensure_0_to_2pi,
    perp_left,
    to_point,
)


class ArcDirection(str, Enum):
    """Rotation sense of a circular arc."""

    CLOCKWISE = "CW"
    COUNTER_CLOCKWISE = "CCW"


class Curve(ABC):
    """Abstract base class for planar parametric curves.

    A curve is traversed from ``t_min`` to ``t_max``. ``t_min`` may be
    greater than ``t_max`` (e.g. clockwise arcs parameterized by angle), in
    which case the curve runs towards decreasing parameters.
    """

    @property
    @abstractmethod
    def t_min(self) -> float:
        """Parameter at the start of the curve."""

    @property
    @abstractmethod
    def t_max(self) -> float:
        """Parameter at the end of the curve."""

    @abstractmethod
    def get_position(self, t: float) -> Point:
        """Get the position at parameter t."""

    @abstractmethod
    def get_first_derivative(self, t: float) -> Vector:
        """Get the derivative of the position with respect to t."""

    @abstractmethod
    def get_second_derivative(self, t: float) -> Vector:
        """Get the second derivative of the position with respect to t."""

    @abstractmethod
    def get_length(self, t0: float, t1: float) -> float:
        """Get the arc length travelled from t0 to t1.

        Positive when t1 is further along the curve than t0.
        """

    @abstractmethod
    def get_t(self, length: float) -> float:
        """Get the parameter at the given arc length from the start."""

    @property
    def orientation(self) -> float:
        """+1 when the parameter grows along the curve, -1 otherwise."""
        return 1.0 if self.t_max >= self.t_min else -1.0

    @property
    def total_length(self) -> float:
        """Arc length of the whole curve."""
        return self.get_length(self.t_min, self.t_max)

    @property
    def point0(self) -> Point:
        """Start point."""
        return self.get_position(self.t_min)

    @property
    def point1(self) -> Point:
        """End point."""
        return self.get_position(self.t_max)

    def get_tangent(self, t: float) -> Vector:
        """Unit tangent in the direction of travel."""
        d1 = as_array(self.get_first_derivative(t))
        speed = float(np.linalg.norm(d1))
        if speed < CURVE_TOLERANCES["epsilon"]:
            raise DegenerateGeometryError(f"Tangent is undefined at t={t}")
        return to_point(self.orientation * d1 / speed)

    def get_left_normal(self, t: float) -> Vector:
        """Unit normal pointing to the left of the direction of travel."""
        return perp_left(self.get_tangent(t))

    def get_curvature(self, t: float) -> float:
        """Signed curvature (positive when turning left)."""
        d1 = self.get_first_derivative(t)
        speed2 = d1[0] * d1[0] + d1[1] * d1[1]

        if speed2 < CURVE_TOLERANCES["epsilon"]:
            # Curvature is indeterminate, just return 0.
            return 0.0

        d2 = self.get_second_derivative(t)
        return self.orientation * cross(d1, d2) / math.pow(speed2, 1.5)

    def get_frame(self, t: float) -> Tuple[Point, Vector, Vector]:
        """Get position, unit tangent and left normal at t."""
        tangent = self.get_tangent(t)
        return self.get_position(t), tangent, perp_left(tangent)

    def sample(self, count: int) -> List[Point]:
        """Sample positions at ``count`` evenly spaced parameters."""
        if count < 2:
            raise ValueError("At least 2 samples are required")
        return [self.get_position(float(t)) for t in np.linspace(self.t_min, self.t_max, count)]

    def sample_by_length(self, step: float) -> List[Point]:
        """Sample positions every ``step`` units of arc length, end included."""
        if step <= 0:
            raise ValueError("Sampling step must be positive")

        total = self.total_length
        lengths = list(np.arange(0.0, total, step)) + [total]
        return [self.get_position(self.get_t(float(length))) for length in lengths]

    def clamp_parameter(self, t: float) -> float:
        """Clamp t to the parameter domain, failing if it is clearly outside."""
        lo, hi = sorted((self.t_min, self.t_max))
        return _clamp(t, lo, hi, (self.t_min, self.t_max))

    def clamp_length(self, length: float) -> float:
        """Clamp an arc length to ``[0, total_length]``."""
        total = self.total_length
        return _clamp(length, 0.0, total, (0.0, total))


def _clamp(value: float, lo: float, hi: float, domain: Tuple[float, float]) -> float:
    slack = CURVE_TOLERANCES["parameter"]
    if math.isnan(value) or value < lo - slack or value > hi + slack:
        raise RangeError(value, domain[0], domain[1])
    return min(max(value, lo), hi)


@dataclass(frozen=True)
class Line(Curve):
    """Straight segment parameterized by arc length on ``[0, length]``."""

    start_point: Point
    end_point: Point

    def __post_init__(self) -> None:
        """Validate line segment."""
        if self.length < CURVE_TOLERANCES["epsilon"]:
            raise DegenerateGeometryError("Line end points coincide")

    @property
    def length(self) -> float:
        """Length of the segment."""
        dx = self.end_point[0] - self.start_point[0]
        dy = self.end_point[1] - self.start_point[1]
        return math.sqrt(dx**2 + dy**2)

    @property
    def direction(self) -> Vector:
        """Unit direction from start to end."""
        length = self.length
        return (
            (self.end_point[0] - self.start_point[0]) / length,
            (self.end_point[1] - self.start_point[1]) / length,
        )

    def project(self, point: Point) -> float:
        """Arc length of the orthogonal projection of a point (unclamped)."""
        d = self.direction
        return (point[0] - self.start_point[0]) * d[0] + (point[1] - self.start_point[1]) * d[1]

    @property
    def t_min(self) -> float:
        return 0.0

    @property
    def t_max(self) -> float:
        return self.length

    def get_position(self, t: float) -> Point:
        t = self.clamp_parameter(t)
        if t == self.t_max:
            return (float(self.end_point[0]), float(self.end_point[1]))
        d = self.direction
        return (self.start_point[0] + d[0] * t, self.start_point[1] + d[1] * t)

    def get_first_derivative(self, t: float) -> Vector:
        return self.direction

    def get_second_derivative(self, t: float) -> Vector:
        return (0.0, 0.0)

    def get_length(self, t0: float, t1: float) -> float:
        return self.clamp_parameter(t1) - self.clamp_parameter(t0)

    def get_t(self, length: float) -> float:
        return self.clamp_length(length)


@dataclass(frozen=True)
class CircleArc(Curve):
    """Circular arc whose parameter is the polar angle around the center.

    ``angle2 > angle1`` gives a counter-clockwise arc, ``angle2 < angle1`` a
    clockwise one. Angles are unwrapped: the sweep ``angle2 - angle1`` is
    limited to one full turn.
    """

    center: Point
    radius: float
    angle1: float
    angle2: float

    def __post_init__(self) -> None:
        """Validate arc."""
        if not self.radius > 0:
            raise DegenerateGeometryError("Arc radius must be positive")
        if abs(self.angle2 - self.angle1) > TWO_PI + CURVE_TOLERANCES["epsilon"]:
            raise DegenerateGeometryError("Arc sweep cannot exceed one full turn")

    @property
    def adv_angle(self) -> float:
        """Signed sweep angle (advance) of the arc in radians."""
        return self.angle2 - self.angle1

    @property
    def direction(self) -> ArcDirection:
        """Rotation sense of the arc."""
        if self.adv_angle < 0:
            return ArcDirection.CLOCKWISE
        return ArcDirection.COUNTER_CLOCKWISE

    @property
    def t_min(self) -> float:
        return self.angle1

    @property
    def t_max(self) -> float:
        return self.angle2

    def get_angle(self, t: float) -> float:
        """Polar angle at parameter t (the parameter itself, clamped)."""
        return self.clamp_parameter(t)

    def get_position(self, t: float) -> Point:
        angle = self.get_angle(t)
        return (
            self.center[0] + self.radius * math.cos(angle),
            self.center[1] + self.radius * math.sin(angle),
        )

    def get_first_derivative(self, t: float) -> Vector:
        angle = self.get_angle(t)
        return (-self.radius * math.sin(angle), self.radius * math.cos(angle))

    def get_second_derivative(self, t: float) -> Vector:
        angle = self.get_angle(t)
        return (-self.radius * math.cos(angle), -self.radius * math.sin(angle))

    def get_length(self, t0: float, t1: float) -> float:
        a0 = self.get_angle(t0)
        a1 = self.get_angle(t1)
        return self.orientation * (a1 - a0) * self.radius

    def get_t(self, length: float) -> float:
        length = self.clamp_length(length)
        return self.angle1 + self.orientation * length / self.radius

    def project(self, point: Point) -> float:
        """Normalized station (0 at angle1, 1 at angle2) of the closest point.

        The closest point is searched on the whole circle, so the result can
        fall outside ``[0, 1]`` for points facing the missing part of the arc.
        """
        if self.adv_angle == 0:
            raise DegenerateGeometryError("Cannot project onto a zero sweep arc")

        ca = ensure_0_to_2pi(math.atan2(point[1] - self.center[1], point[0] - self.center[0]))
        ai = ensure_0_to_2pi(self.angle1)
        aa = self.adv_angle

        if aa >= 0:
            if ca < ai:
                ca += TWO_PI
        else:
            if ca > ai:
                ca -= TWO_PI

        return (ca - ai) / aa
