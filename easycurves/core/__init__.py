"""Core module for planar curves."""

from .composed import ComposedCurve
from .exceptions import (
    DegenerateGeometryError,
    DiscontinuityError,
    EasyCurvesError,
    NumericDomainError,
    RangeError,
)
from .models import ArcDirection, CircleArc, Curve, Line

__all__ = [
    "Curve",
    "Line",
    "CircleArc",
    "ArcDirection",
    "ComposedCurve",
    "EasyCurvesError",
    "DegenerateGeometryError",
    "NumericDomainError",
    "DiscontinuityError",
    "RangeError",
]
