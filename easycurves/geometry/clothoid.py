"""Clothoid (Euler spiral) evaluation, inversion and arc reconstruction.

The canonical spiral of scale ``a`` starts at the origin heading along +X.
At arc length ``l`` its tangent angle is ``l**2 / (2 a**2)`` and its radius
of curvature is ``a**2 / l``. With ``invert_y`` the spiral is mirrored about
the X axis so it bends the other way.
"""

import logging
import math
from typing import Tuple, Union

import numpy as np
from scipy.optimize import brentq
from scipy.special import fresnel as _scipy_fresnel

from ..config import CURVE_TOLERANCES, MAX_L, MAX_RADIUS
from ..core.exceptions import DegenerateGeometryError, NumericDomainError
from ..core.models import Curve
from ..core.vectors import (
    Point,
    PointLike,
    Vector,
    angle_to,
    as_array,
    ensure_0_to_2pi,
    rotation_matrix,
    to_point,
)

logger = logging.getLogger(__name__)

SQRT_PI = math.sqrt(math.pi)


def fresnel(z: float) -> Tuple[float, float]:
    """Normalized Fresnel integrals.

    Returns:
        (C(z), S(z)) with ``C(z) = integral cos(pi t^2 / 2)`` from 0 to z
    """
    s, c = _scipy_fresnel(z)
    return float(c), float(s)


def clotho(l: float, invert_y: bool, a: float) -> Point:
    """Position on the canonical spiral at arc length l."""
    scale = a * SQRT_PI
    c, s = fresnel(l / scale)
    y = scale * s
    return (scale * c, -y if invert_y else y)


def clotho_tangent(l: float, invert_y: bool, a: float) -> float:
    """Tangent angle of the canonical spiral at arc length l."""
    angle = l * l / (2.0 * a * a)
    return -angle if invert_y else angle


def dclotho(l: float, invert_y: bool, a: float) -> Vector:
    """First derivative (unit tangent) of the canonical spiral."""
    angle = l * l / (2.0 * a * a)
    dy = math.sin(angle)
    return (math.cos(angle), -dy if invert_y else dy)


def dclotho2(l: float, invert_y: bool, a: float) -> Vector:
    """Second derivative of the canonical spiral."""
    a2 = a * a
    angle = l * l / (2.0 * a2)
    ddy = math.cos(angle) * l / a2
    return (-math.sin(angle) * l / a2, -ddy if invert_y else ddy)


def clotho_radius(l: float, invert_y: bool, a: float) -> float:
    """Signed radius of curvature at arc length l.

    The radius is infinite at the inflection point and keeps the sign of l
    there, so ``-0.0`` maps to ``-inf``.
    """
    if abs(l) < CURVE_TOLERANCES["epsilon"]:
        radius = math.copysign(math.inf, l)
    else:
        radius = a * a / l
        if abs(radius) >= MAX_RADIUS:
            radius = math.copysign(math.inf, radius)
    return -radius if invert_y else radius


def clotho_l(radius: float, invert_y: bool, a: float) -> float:
    """Arc length of the canonical spiral point with the given radius."""
    if abs(radius) >= MAX_RADIUS:
        l = math.copysign(0.0, radius)
    else:
        l = a * a / radius
    return -l if invert_y else l


def get_max_l(a: float) -> float:
    """Longest arc length for which the spiral is evaluated."""
    return MAX_L * a


def get_min_radius(a: float) -> float:
    """Tightest radius reachable within ``get_max_l``."""
    return a / MAX_L


def find_tangent(invert_y: bool, a: float, target: Union[float, PointLike]) -> float:
    """Arc length where the spiral tangent is parallel to a direction.

    Parallel includes opposite: a target of ``pi`` or ``(-1, 0)`` is met at
    ``l = 0``. The result can lie past ``get_max_l(a)``.

    Args:
        invert_y: Spiral branch
        a: Spiral scale
        target: Tangent angle in radians or a direction vector

    Returns:
        Non-negative arc length l; the tangents at l and -l are both
        parallel to the target

    Raises:
        NumericDomainError: If the angle is not finite or the vector is zero
    """
    if isinstance(target, (int, float)):
        angle = float(target)
    else:
        v = as_array(target)
        if not np.all(np.isfinite(v)) or float(np.linalg.norm(v)) == 0.0:
            raise NumericDomainError("Target tangent direction is undefined")
        angle = math.atan2(v[1], v[0])

    if not math.isfinite(angle):
        raise NumericDomainError(f"Target tangent angle {angle} is not finite")

    if invert_y:
        angle = -angle
    # Tangent directions repeat every half turn
    angle = ensure_0_to_2pi(angle) % math.pi

    return math.sqrt(2.0 * a * a * angle)


def solve_clotho_param(chord: float, r0: float, r1: float) -> float:
    """Recover the spiral scale from a chord length and two boundary radii.

    Brent's method finds ``a`` such that the canonical points at
    ``a**2 / r0`` and ``a**2 / r1`` are ``chord`` apart. The chord is not
    monotonic in ``a`` once the spiral curls back, so the bracket is the
    first sign change found by sampling ``[0, min(|r0|, |r1|) * MAX_L]``.

    Raises:
        DegenerateGeometryError: If both radii are infinite or the chord is empty
        NumericDomainError: If no scale within the sampled range fits
    """
    if chord <= CURVE_TOLERANCES["epsilon"]:
        raise DegenerateGeometryError("Clothoid end points coincide")

    upper = min(abs(r0), abs(r1)) * MAX_L
    if math.isinf(upper):
        raise DegenerateGeometryError("Both radii are infinite: the segment is a straight line")

    def chord_error(a: float) -> float:
        c0, s0 = fresnel(a / (r0 * SQRT_PI))
        c1, s1 = fresnel(a / (r1 * SQRT_PI))
        return a * a * math.pi * ((c1 - c0) ** 2 + (s1 - s0) ** 2) - chord * chord

    lower = 0.0
    for sample in np.linspace(0.0, upper, CURVE_TOLERANCES["solver_samples"] + 1)[1:]:
        if chord_error(float(sample)) > 0:
            upper = float(sample)
            break
        lower = float(sample)
    else:
        raise NumericDomainError(
            f"No clothoid with radii {r0:.6g} -> {r1:.6g} spans a chord of {chord:.6g}"
        )

    a = brentq(
        chord_error,
        lower,
        upper,
        xtol=CURVE_TOLERANCES["solver_xtol"],
        maxiter=CURVE_TOLERANCES["solver_maxiter"],
    )
    logger.debug(f"Solved clothoid scale a={a:.12g} (chord={chord:.6g}, r0={r0:.6g}, r1={r1:.6g})")
    return float(a)


def _correct_radii(r0: float, r1: float) -> Tuple[float, float]:
    """Give infinite radii the sign of the finite one."""
    if math.isinf(r0) and not math.isinf(r1):
        r0 = math.copysign(math.inf, r1)
    elif math.isinf(r1) and not math.isinf(r0):
        r1 = math.copysign(math.inf, r0)
    elif (r0 > 0) != (r1 > 0):
        raise DegenerateGeometryError(
            f"Radii {r0:.6g} and {r1:.6g} bend opposite ways: a single clothoid cannot join them"
        )
    return r0, r1


class ClothoidArc(Curve):
    """Piece of a clothoid placed in the plane, parameterized by arc length.

    The parameter domain is ``[l0, l0 + (l_end - l_start)]`` where
    ``l_start``/``l_end`` are the arc lengths on the canonical spiral.
    """

    def __init__(self, l0: float, p0: PointLike, p1: PointLike, r0: float, r1: float):
        """Reconstruct the arc joining two points with the given end radii.

        Args:
            l0: Parameter assigned to the start point
            p0: Start point
            p1: End point
            r0: Signed radius at p0 (``inf`` for a straight end)
            r1: Signed radius at p1

        Raises:
            DegenerateGeometryError: For coincident points, two straight ends
                or radii bending opposite ways
            NumericDomainError: If no clothoid fits the data
        """
        if r0 == 0 or r1 == 0 or math.isnan(r0) or math.isnan(r1):
            raise DegenerateGeometryError("Clothoid radii must be non-zero")
        r0, r1 = _correct_radii(r0, r1)

        if abs(r0) > abs(r1):
            invert_y = r1 < 0
        else:
            invert_y = r1 > 0

        a0 = as_array(p0)
        a1 = as_array(p1)
        a = solve_clotho_param(float(np.linalg.norm(a1 - a0)), r0, r1)

        l_start = clotho_l(r0, invert_y, a)
        l_end = clotho_l(r1, invert_y, a)

        pn0 = as_array(clotho(l_start, invert_y, a))
        pn1 = as_array(clotho(l_end, invert_y, a))

        # Rotate the canonical chord onto p0 -> p1 about the canonical end point
        rotation = angle_to(pn1 - pn0, a1 - a0)
        translation = a1 - rotation_matrix(rotation) @ pn1

        self._setup(l0, l_start, l_end, invert_y, a, rotation, translation)

    @classmethod
    def from_canonical(
        cls,
        l_start: float,
        l_end: float,
        invert_y: bool,
        a: float,
        rotation: float = 0.0,
        translation: PointLike = (0.0, 0.0),
        t_min: float = 0.0,
    ) -> "ClothoidArc":
        """Build an arc directly from canonical spiral data.

        World coordinates are ``R(rotation) @ canonical + translation``.
        """
        if not a > 0:
            raise NumericDomainError("Clothoid scale must be positive")
        if l_start == l_end:
            raise DegenerateGeometryError("Clothoid arc has no length")

        arc = cls.__new__(cls)
        arc._setup(t_min, l_start, l_end, invert_y, a, rotation, as_array(translation))
        return arc

    def _setup(
        self,
        t_min: float,
        l_start: float,
        l_end: float,
        invert_y: bool,
        a: float,
        rotation: float,
        translation: np.ndarray,
    ) -> None:
        self._t_min = float(t_min)
        self._t_max = float(t_min) + (l_end - l_start)
        self._l_start = l_start
        self._l_end = l_end
        self._invert_y = bool(invert_y)
        self._a = a
        self._rotation = rotation
        self._matrix = rotation_matrix(rotation)
        self._translation = translation

        max_l = get_max_l(a)
        if max(abs(l_start), abs(l_end)) > max_l * (1.0 + CURVE_TOLERANCES["parameter"]):
            raise NumericDomainError(
                f"Clothoid lengths [{l_start:.6g}, {l_end:.6g}] exceed the usable "
                f"range of scale {a:.6g} (max {max_l:.6g})"
            )

    @property
    def a(self) -> float:
        """Spiral scale."""
        return self._a

    @property
    def invert_y(self) -> bool:
        return self._invert_y

    @property
    def l_start(self) -> float:
        """Canonical arc length at the start point."""
        return self._l_start

    @property
    def l_end(self) -> float:
        """Canonical arc length at the end point."""
        return self._l_end

    @property
    def rotation(self) -> float:
        return self._rotation

    @property
    def translation(self) -> Point:
        return to_point(self._translation)

    @property
    def t_min(self) -> float:
        return self._t_min

    @property
    def t_max(self) -> float:
        return self._t_max

    def get_l(self, t: float) -> float:
        """Canonical arc length at parameter t."""
        t = self.clamp_parameter(t)
        # Exact end values keep the sign of a zero length at the inflection point
        if t == self._t_max:
            return self._l_end
        if t == self._t_min:
            return self._l_start
        return self._l_start + (t - self._t_min)

    def _to_world(self, p: PointLike) -> Point:
        return to_point(self._matrix @ as_array(p) + self._translation)

    def _rotate(self, v: PointLike) -> Vector:
        return to_point(self._matrix @ as_array(v))

    def get_position(self, t: float) -> Point:
        return self._to_world(clotho(self.get_l(t), self._invert_y, self._a))

    def get_first_derivative(self, t: float) -> Vector:
        return self._rotate(dclotho(self.get_l(t), self._invert_y, self._a))

    def get_second_derivative(self, t: float) -> Vector:
        return self._rotate(dclotho2(self.get_l(t), self._invert_y, self._a))

    def get_radius(self, t: float) -> float:
        """Signed radius of curvature at parameter t."""
        return clotho_radius(self.get_l(t), self._invert_y, self._a)

    def get_tangent_angle(self, t: float) -> float:
        """World angle of the derivative at parameter t."""
        return clotho_tangent(self.get_l(t), self._invert_y, self._a) + self._rotation

    def get_length(self, t0: float, t1: float) -> float:
        return self.orientation * (self.clamp_parameter(t1) - self.clamp_parameter(t0))

    def get_t(self, length: float) -> float:
        return self._t_min + self.orientation * self.clamp_length(length)

    def __repr__(self) -> str:
        return (
            f"ClothoidArc(a={self._a:.6g}, invert_y={self._invert_y}, "
            f"l=[{self._l_start:.6g}, {self._l_end:.6g}], t=[{self._t_min:.6g}, {self._t_max:.6g}])"
        )
