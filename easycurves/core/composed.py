"""Composed curves: continuous chains of curve segments."""

import bisect
from typing import Iterable, List, Optional, Tuple

from ..config import CURVE_TOLERANCES
from .exceptions import DegenerateGeometryError, DiscontinuityError
from .models import Curve
from .vectors import Point, Vector, distance


class ComposedCurve(Curve):
    """Ordered chain of curves sharing one arc-length parameter.

    The global parameter runs over ``[0, total_length]``. A length that lands
    exactly on a junction belongs to the following segment, except
    ``total_length`` itself which belongs to the last segment.
    """

    def __init__(self, segments: Iterable[Curve], tolerance: Optional[float] = None):
        """Build the chain and validate end-to-start continuity.

        Args:
            segments: Curves in travel order
            tolerance: Maximum allowed gap between consecutive segments

        Raises:
            DegenerateGeometryError: If there are no segments or one has no length
            DiscontinuityError: If a segment does not start where the previous ends
        """
        self._segments: Tuple[Curve, ...] = tuple(segments)
        if not self._segments:
            raise DegenerateGeometryError("A composed curve needs at least one segment")

        if tolerance is None:
            tolerance = CURVE_TOLERANCES["continuity"]
        self._tolerance = tolerance

        for i in range(1, len(self._segments)):
            gap = distance(self._segments[i - 1].point1, self._segments[i].point0)
            if gap > tolerance:
                raise DiscontinuityError(i, gap)

        lengths: List[float] = []
        for i, segment in enumerate(self._segments):
            length = segment.total_length
            if length < CURVE_TOLERANCES["epsilon"]:
                raise DegenerateGeometryError(f"Segment {i} has no length")
            lengths.append(length)
        self._lengths = tuple(lengths)

        # Prefix table: accum[i] is the global length where segment i starts
        accum = [0.0]
        for length in self._lengths:
            accum.append(accum[-1] + length)
        self._accum = tuple(accum)

    @property
    def segments(self) -> Tuple[Curve, ...]:
        """Segments in travel order."""
        return self._segments

    @property
    def segment_count(self) -> int:
        return len(self._segments)

    @property
    def t_min(self) -> float:
        return 0.0

    @property
    def t_max(self) -> float:
        return self._accum[-1]

    @property
    def total_length(self) -> float:
        return self._accum[-1]

    @property
    def point0(self) -> Point:
        return self._segments[0].point0

    @property
    def point1(self) -> Point:
        return self._segments[-1].point1

    @property
    def is_closed(self) -> bool:
        """True when the chain ends where it starts."""
        return distance(self.point1, self.point0) <= self._tolerance

    def get_segment_range(self, index: int) -> Tuple[float, float]:
        """Global length interval covered by a segment."""
        if not 0 <= index < len(self._segments):
            raise IndexError(f"Segment index {index} out of range")
        return self._accum[index], self._accum[index + 1]

    def find_segment(self, length: float) -> Tuple[int, float]:
        """Locate the segment owning a global length.

        Returns:
            Segment index and the local parameter of that segment
        """
        length = self.clamp_length(length)

        if length >= self.total_length:
            index = len(self._segments) - 1
        else:
            index = bisect.bisect_right(self._accum, length) - 1

        segment = self._segments[index]
        local_length = min(length - self._accum[index], self._lengths[index])
        return index, segment.get_t(local_length)

    def get_position(self, t: float) -> Point:
        index, local_t = self.find_segment(t)
        return self._segments[index].get_position(local_t)

    def get_first_derivative(self, t: float) -> Vector:
        # Arc-length parameterization: the derivative is the unit tangent
        index, local_t = self.find_segment(t)
        return self._segments[index].get_tangent(local_t)

    def get_second_derivative(self, t: float) -> Vector:
        index, local_t = self.find_segment(t)
        segment = self._segments[index]
        curvature = segment.get_curvature(local_t)
        normal = segment.get_left_normal(local_t)
        return (curvature * normal[0], curvature * normal[1])

    def get_length(self, t0: float, t1: float) -> float:
        sign = 1.0
        if t1 < t0:
            t0, t1 = t1, t0
            sign = -1.0

        i0, local0 = self.find_segment(t0)
        i1, local1 = self.find_segment(t1)

        first = self._segments[i0]
        if i0 == i1:
            return sign * first.get_length(local0, local1)

        last = self._segments[i1]
        length = first.get_length(local0, first.t_max)
        length += sum(self._lengths[i0 + 1 : i1])
        length += last.get_length(last.t_min, local1)
        return sign * length

    def get_t(self, length: float) -> float:
        index, local_t = self.find_segment(length)
        segment = self._segments[index]
        return self._accum[index] + segment.get_length(segment.t_min, local_t)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self):
        return iter(self._segments)

    def __repr__(self) -> str:
        return f"ComposedCurve(segments={len(self._segments)}, total_length={self.total_length:.6g})"
