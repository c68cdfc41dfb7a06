"""Easy Curves - planar lines, circle arcs, clothoids and composed curves."""

__version__ = "0.1.0"

from .core.composed import ComposedCurve
from .core.exceptions import (
    DegenerateGeometryError,
    DiscontinuityError,
    EasyCurvesError,
    NumericDomainError,
    RangeError,
)
from .core.models import ArcDirection, CircleArc, Curve, Line
from .geometry.circle import arc_from_three_points, get_center
from .geometry.clothoid import ClothoidArc, find_tangent

__all__ = [
    "Curve",
    "Line",
    "CircleArc",
    "ArcDirection",
    "ClothoidArc",
    "ComposedCurve",
    "get_center",
    "arc_from_three_points",
    "find_tangent",
    "EasyCurvesError",
    "DegenerateGeometryError",
    "NumericDomainError",
    "DiscontinuityError",
    "RangeError",
]
