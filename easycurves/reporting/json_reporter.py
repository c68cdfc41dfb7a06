"""JSON summaries of curves."""

import json
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .. import __version__
from ..core.composed import ComposedCurve
from ..core.models import CircleArc, Curve, Line
from ..geometry.clothoid import ClothoidArc


def _number(value: float, digits: int = 6) -> Optional[float]:
    """Round for JSON; infinities become None."""
    if math.isinf(value) or math.isnan(value):
        return None
    return round(value, digits)


def _point(p: tuple) -> Dict[str, Optional[float]]:
    return {"x": _number(p[0]), "y": _number(p[1])}


class JSONReporter:
    """Generate structured JSON descriptions of curves."""

    def __init__(self, indent: int = 2) -> None:
        """Initialize JSON reporter.

        Args:
            indent: JSON indentation for readable output
        """
        self.indent = indent

    def segment_data(self, segment: Curve) -> Dict[str, Any]:
        """Describe one leaf curve."""
        data: Dict[str, Any] = {
            "type": type(segment).__name__,
            "length": _number(segment.total_length),
            "start_point": _point(segment.point0),
            "end_point": _point(segment.point1),
        }

        if isinstance(segment, CircleArc):
            data.update(
                {
                    "center": _point(segment.center),
                    "radius": _number(segment.radius),
                    "angle1": _number(segment.angle1),
                    "angle2": _number(segment.angle2),
                    "adv_angle": _number(segment.adv_angle),
                    "direction": segment.direction.value,
                }
            )
        elif isinstance(segment, ClothoidArc):
            data.update(
                {
                    "a": _number(segment.a),
                    "invert_y": segment.invert_y,
                    "t_min": _number(segment.t_min),
                    "t_max": _number(segment.t_max),
                    "start_radius": _number(segment.get_radius(segment.t_min)),
                    "end_radius": _number(segment.get_radius(segment.t_max)),
                }
            )
        elif isinstance(segment, Line):
            direction = segment.direction
            data["bearing_deg"] = _number(math.degrees(math.atan2(direction[1], direction[0])), 3)

        return data

    def curve_summary(self, curve: Curve, name: str = "curve") -> Dict[str, Any]:
        """Summary of a curve with per-segment details."""
        if isinstance(curve, ComposedCurve):
            segments: List[Curve] = list(curve.segments)
            closed = curve.is_closed
        else:
            segments = [curve]
            closed = False

        return {
            "metadata": {
                "name": name,
                "generated": datetime.now().isoformat(),
                "generator": "easycurves",
                "version": __version__,
            },
            "summary": {
                "total_length": _number(curve.total_length),
                "segment_count": len(segments),
                "closed": closed,
                "start_point": _point(curve.point0),
                "end_point": _point(curve.point1),
            },
            "segments": [self.segment_data(segment) for segment in segments],
        }

    def write_summary(self, curve: Curve, output_path: Union[str, Path], name: str = "curve") -> None:
        """Write the curve summary to a JSON file."""
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(self.curve_summary(curve, name), f, indent=self.indent, ensure_ascii=False)


def generate_json_report(curve: Curve, output_path: Union[str, Path], name: str = "curve") -> Path:
    """Convenience function to write a JSON summary of a curve."""
    output_path = Path(output_path)
    JSONReporter().write_summary(curve, output_path, name)
    return output_path
