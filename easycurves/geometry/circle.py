"""Circle and circular arc reconstruction from boundary data."""

import logging
import math
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.optimize import least_squares

from ..config import CURVE_TOLERANCES
from ..core.exceptions import DegenerateGeometryError
from ..core.models import ArcDirection, CircleArc
from ..core.vectors import (
    TWO_PI,
    Point,
    PointLike,
    as_array,
    cross,
    distance,
    ensure_0_to_2pi,
    perp_left,
    to_point,
)

logger = logging.getLogger(__name__)


def are_aligned(
    p1: PointLike, p2: PointLike, p3: PointLike, tolerance: Optional[float] = None
) -> bool:
    """Check whether three points are collinear (zero triangle area)."""
    if tolerance is None:
        tolerance = CURVE_TOLERANCES["epsilon"]
    a, b, c = as_array(p1), as_array(p2), as_array(p3)
    area = cross(c - a, b - a) / 2.0
    return abs(area) <= tolerance


def get_center(p1: PointLike, p2: PointLike, p3: PointLike) -> Point:
    """Circumcenter of three points.

    The perpendicular bisectors of the two longest chords are intersected,
    which keeps the 2x2 system as well conditioned as the input allows.

    Raises:
        DegenerateGeometryError: If two points coincide or all three are collinear
    """
    pts = [as_array(p1), as_array(p2), as_array(p3)]
    eps = CURVE_TOLERANCES["epsilon"]

    chords = []
    for i, j in ((0, 1), (1, 2), (2, 0)):
        d = pts[j] - pts[i]
        length2 = float(np.dot(d, d))
        if length2 <= eps * eps:
            raise DegenerateGeometryError("Cannot compute a circle center from coincident points")
        chords.append((length2, (pts[i] + pts[j]) / 2.0, as_array(perp_left(d))))

    chords.sort(key=lambda chord: chord[0])
    _, pm_a, d_a = chords[2]
    _, pm_b, d_b = chords[1]

    # pm_a + t1 * d_a == pm_b + t2 * d_b
    det = cross(d_a, d_b)
    if abs(det) <= eps * float(np.linalg.norm(d_a) * np.linalg.norm(d_b)):
        raise DegenerateGeometryError("Cannot compute a circle center from collinear points")

    t1 = cross(pm_b - pm_a, d_b) / det
    return to_point(pm_a + d_a * t1)


def arc_from_three_points(p1: PointLike, pp: PointLike, p2: PointLike) -> CircleArc:
    """Build the arc that starts at p1, passes through pp and ends at p2.

    The returned arc has ``angle1`` in ``[0, 2*pi)`` and an unwrapped
    ``angle2`` whose sweep sign gives the rotation sense that visits pp.
    """
    center = as_array(get_center(p1, pp, p2))
    radius = distance(center, p1)

    def polar(p: PointLike) -> float:
        v = as_array(p) - center
        return math.atan2(v[1], v[0])

    a1 = polar(p1)
    ap = polar(pp)
    a2 = polar(p2)

    # Counter-clockwise: a1 <= ap <= a2
    ccw_p, ccw_2 = ap, a2
    while ccw_p < a1:
        ccw_p += TWO_PI
    while ccw_2 < ccw_p:
        ccw_2 += TWO_PI

    if ccw_2 - a1 <= TWO_PI:
        advance = ccw_2 - a1
    else:
        # Clockwise: a1 >= ap >= a2
        cw_p, cw_2 = ap, a2
        while cw_p > a1:
            cw_p -= TWO_PI
        while cw_2 > cw_p:
            cw_2 -= TWO_PI

        if a1 - cw_2 > TWO_PI:
            raise DegenerateGeometryError("No arc passes through the three points")
        advance = cw_2 - a1

    angle1 = ensure_0_to_2pi(a1)
    return CircleArc(center=to_point(center), radius=radius, angle1=angle1, angle2=angle1 + advance)


def arc_with_advance(center: PointLike, radius: float, angle1: float, adv_angle: float) -> CircleArc:
    """Build an arc from its start angle and signed sweep."""
    if abs(adv_angle) > TWO_PI + CURVE_TOLERANCES["epsilon"]:
        raise DegenerateGeometryError("Arc sweep cannot exceed one full turn")
    return CircleArc(
        center=to_point(center), radius=radius, angle1=angle1, angle2=angle1 + adv_angle
    )


def arc_from_center(
    p1: PointLike,
    p2: PointLike,
    center: PointLike,
    radius: float,
    direction: ArcDirection,
) -> CircleArc:
    """Build the arc from p1 to p2 around a known center.

    Args:
        p1: Start point
        p2: End point
        center: Arc center
        radius: Arc radius
        direction: Rotation sense from p1 to p2

    Returns:
        CircleArc with ``angle1`` in ``[0, 2*pi)``
    """
    c = as_array(center)
    v1 = as_array(p1) - c
    v2 = as_array(p2) - c

    angle1 = ensure_0_to_2pi(math.atan2(v1[1], v1[0]))
    angle2 = ensure_0_to_2pi(math.atan2(v2[1], v2[0]))

    if ArcDirection(direction) == ArcDirection.CLOCKWISE:
        if angle2 > angle1:
            angle2 -= TWO_PI
    else:
        if angle2 < angle1:
            angle2 += TWO_PI

    return CircleArc(center=to_point(c), radius=radius, angle1=angle1, angle2=angle2)


def evaluate_center(p0: PointLike, p1: PointLike, radius: float, left_rule: bool = True) -> Point:
    """Center of the circle of the given radius through two points.

    With the left rule a positive radius puts the center on the left of the
    chord p0 -> p1 (counter-clockwise arc); with the right rule a positive
    radius puts it on the right (clockwise arc). Negative radii select the
    other side.

    Raises:
        DegenerateGeometryError: If the points coincide or the radius is
            shorter than half the chord
    """
    a = as_array(p0)
    b = as_array(p1)
    chord = b - a
    chord_length = float(np.linalg.norm(chord))
    if chord_length <= CURVE_TOLERANCES["epsilon"]:
        raise DegenerateGeometryError("Cannot compute a circle center from coincident points")

    pm = (a + b) / 2.0
    v = radius * radius - chord_length * chord_length / 4.0
    if abs(v) <= CURVE_TOLERANCES["epsilon"]:
        return to_point(pm)
    if v < 0:
        raise DegenerateGeometryError(
            f"Radius {abs(radius)} is shorter than half the chord ({chord_length / 2:.6g})"
        )

    normal = as_array(perp_left(chord / chord_length))
    if not left_rule:
        normal = -normal
    offset = math.copysign(math.sqrt(v), radius)
    return to_point(pm + normal * offset)


def arc_from_two_points_radius(
    p0: PointLike, p1: PointLike, radius: float, left_rule: bool = True
) -> CircleArc:
    """Shortest arc of the given signed radius between two points."""
    center = evaluate_center(p0, p1, radius, left_rule)

    turns_left = (radius > 0) == left_rule
    direction = ArcDirection.COUNTER_CLOCKWISE if turns_left else ArcDirection.CLOCKWISE
    return arc_from_center(p0, p1, center, abs(radius), direction)


def fit_circle(points: Sequence[PointLike]) -> Tuple[Point, float]:
    """Least squares circle through a set of points.

    Returns:
        Center and radius of the best fit circle
    """
    pts = np.array([as_array(p) for p in points])
    if len(pts) < 3:
        raise DegenerateGeometryError("At least 3 points are required to fit a circle")

    # Exact circle through first, middle and last point as initial guess
    try:
        guess = as_array(get_center(pts[0], pts[len(pts) // 2], pts[-1]))
    except DegenerateGeometryError:
        guess = pts.mean(axis=0)
    r_init = float(np.mean(np.linalg.norm(pts - guess, axis=1)))

    def residuals(params: np.ndarray) -> np.ndarray:
        cx, cy, r = params
        return np.sqrt((pts[:, 0] - cx) ** 2 + (pts[:, 1] - cy) ** 2) - r

    result = least_squares(residuals, [guess[0], guess[1], r_init])
    if not result.success:
        raise DegenerateGeometryError(f"Circle fit did not converge: {result.message}")

    cx, cy, r = result.x
    logger.debug(f"Fitted circle center=({cx:.6g}, {cy:.6g}) radius={abs(r):.6g}")
    return (float(cx), float(cy)), float(abs(r))


def fit_arc(points: Sequence[PointLike]) -> CircleArc:
    """Least squares arc running through an ordered sequence of points."""
    center, radius = fit_circle(points)
    c = as_array(center)

    angles: List[float] = []
    for p in points:
        v = as_array(p) - c
        angles.append(math.atan2(v[1], v[0]))

    # Accumulate wrapped steps so sweeps beyond pi are kept
    advance = 0.0
    for prev, curr in zip(angles, angles[1:]):
        step = curr - prev
        if step > math.pi:
            step -= TWO_PI
        elif step < -math.pi:
            step += TWO_PI
        advance += step

    angle1 = ensure_0_to_2pi(angles[0])
    return arc_with_advance(center, radius, angle1, advance)
