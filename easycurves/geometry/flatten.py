"""Polyline approximation of curves."""

import math
from typing import List, Optional, Tuple

from shapely.geometry import LineString, Point

from ..config import DEFAULT_SAMPLE_COUNT, FLATTEN_TOLERANCES
from ..core.models import Curve


def flatten_curve(
    curve: Curve,
    tolerance: Optional[float] = None,
    step: Optional[float] = None,
) -> List[Tuple[float, float]]:
    """Approximate a curve with a polyline.

    The curve is sampled densely by arc length and then simplified with
    Douglas-Peucker so the polyline stays within ``tolerance`` of the samples.

    Args:
        curve: Curve to flatten
        tolerance: Maximum deviation of the simplified polyline (uses default
            if None, 0 keeps every sample)
        step: Sampling step along the curve (defaults to total_length / DEFAULT_SAMPLE_COUNT)

    Returns:
        List of (x, y) points, end points included

    Raises:
        ValueError: If the tolerance is negative
    """
    if tolerance is None:
        tolerance = FLATTEN_TOLERANCES["chord_tolerance"]
    if tolerance < 0:
        raise ValueError(f"Flatten tolerance must not be negative, got {tolerance}")
    total = curve.total_length
    if step is None:
        step = max(total / DEFAULT_SAMPLE_COUNT, FLATTEN_TOLERANCES["min_step"])

    points = curve.sample_by_length(step)
    if len(points) < 3 or tolerance == 0:
        return points

    simplified = LineString(points).simplify(tolerance, preserve_topology=True)
    return [(float(x), float(y)) for x, y in simplified.coords]


def approximate_station(curve: Curve, point: Tuple[float, float], step: Optional[float] = None) -> float:
    """Arc length of the point on the curve closest to ``point``.

    The search runs on a dense polyline, so the result is accurate to the
    sampling step.
    """
    total = curve.total_length
    if step is None:
        step = max(total / (DEFAULT_SAMPLE_COUNT * 4), FLATTEN_TOLERANCES["min_step"])

    line = LineString(curve.sample_by_length(step))
    station = float(line.project(Point(point)))
    # Polyline length is slightly shorter than the true arc length
    return min(station * total / line.length, total) if line.length > 0 else 0.0


def distance_to_curve(curve: Curve, point: Tuple[float, float], step: Optional[float] = None) -> float:
    """Approximate distance from a point to the curve."""
    total = curve.total_length
    if step is None:
        step = max(total / (DEFAULT_SAMPLE_COUNT * 4), FLATTEN_TOLERANCES["min_step"])

    line = LineString(curve.sample_by_length(step))
    distance = float(line.distance(Point(point)))
    return distance if math.isfinite(distance) else math.inf
