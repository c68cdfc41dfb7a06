"""Alignment definition loading from JSON files."""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.composed import ComposedCurve
from ..core.models import CircleArc, Curve, Line
from ..geometry.circle import arc_from_three_points
from ..geometry.clothoid import ClothoidArc

logger = logging.getLogger(__name__)


def _point(data: Dict[str, Any], key: str) -> tuple:
    try:
        x, y = data[key]
        return (float(x), float(y))
    except KeyError:
        raise ValueError(f"Segment is missing '{key}'")
    except (TypeError, ValueError):
        raise ValueError(f"Segment field '{key}' must be an [x, y] pair")


def _radius(value: Any) -> float:
    """Radius from JSON: null, "inf" and "-inf" mean straight."""
    if value is None:
        return math.inf
    return float(value)


def _line(data: Dict[str, Any]) -> Curve:
    return Line(_point(data, "start"), _point(data, "end"))


def _arc(data: Dict[str, Any]) -> Curve:
    angle1 = float(data["angle1"])
    angle2 = float(data["angle2"])
    if data.get("degrees", False):
        angle1, angle2 = math.radians(angle1), math.radians(angle2)
    return CircleArc(_point(data, "center"), float(data["radius"]), angle1, angle2)


def _arc3(data: Dict[str, Any]) -> Curve:
    return arc_from_three_points(_point(data, "start"), _point(data, "through"), _point(data, "end"))


def _clothoid(data: Dict[str, Any]) -> Curve:
    return ClothoidArc(
        float(data.get("l0", 0.0)),
        _point(data, "start"),
        _point(data, "end"),
        _radius(data.get("start_radius")),
        _radius(data.get("end_radius")),
    )


SEGMENT_BUILDERS = {
    "line": _line,
    "arc": _arc,
    "arc3": _arc3,
    "clothoid": _clothoid,
}


def build_segment(data: Dict[str, Any]) -> Curve:
    """Build a single curve from its JSON description."""
    if not isinstance(data, dict):
        raise ValueError(f"Segment must be an object, got {type(data).__name__}")

    segment_type = data.get("type")
    builder = SEGMENT_BUILDERS.get(segment_type) if isinstance(segment_type, str) else None
    if builder is None:
        raise ValueError(
            f"Unknown segment type {segment_type!r} "
            f"(expected one of {', '.join(sorted(SEGMENT_BUILDERS))})"
        )
    try:
        return builder(data)
    except KeyError as e:
        raise ValueError(f"Segment of type {segment_type!r} is missing {e}")
    except TypeError as e:
        raise ValueError(f"Segment of type {segment_type!r} has a malformed field: {e}")


def build_curve(definition: Dict[str, Any]) -> ComposedCurve:
    """Build a composed curve from an alignment definition.

    Args:
        definition: Mapping with a ``segments`` list and optional ``tolerance``

    Returns:
        ComposedCurve chaining the segments in order

    Raises:
        ValueError: If the definition or one of its segments is malformed
    """
    if not isinstance(definition, dict):
        raise ValueError(f"Alignment definition must be an object, got {type(definition).__name__}")

    segments_data: List[Dict[str, Any]] = definition.get("segments") or []
    if not isinstance(segments_data, list):
        raise ValueError("Alignment 'segments' must be a list")
    if not segments_data:
        raise ValueError("Alignment definition has no segments")

    segments = []
    for i, data in enumerate(segments_data):
        try:
            segments.append(build_segment(data))
        except ValueError as e:
            raise ValueError(f"Segment {i}: {e}") from e

    tolerance: Optional[float] = definition.get("tolerance")
    if tolerance is not None:
        try:
            tolerance = float(tolerance)
        except (TypeError, ValueError):
            raise ValueError(f"Alignment tolerance must be a number, got {tolerance!r}")
    return ComposedCurve(segments, tolerance=tolerance)


def load_alignment(file_path: Union[str, Path]) -> ComposedCurve:
    """Load an alignment JSON file into a composed curve.

    Args:
        file_path: Path to the JSON file

    Returns:
        ComposedCurve described by the file
    """
    file_path = Path(file_path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            definition = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to load alignment file {file_path}: {e}")

    curve = build_curve(definition)
    name = definition.get("name", file_path.stem)
    logger.info(
        f"Loaded alignment '{name}' from {file_path}: "
        f"{curve.segment_count} segments, length {curve.total_length:.3f}"
    )
    return curve
