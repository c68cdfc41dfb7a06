"""CSV report generation for curves."""

import csv
import math
from pathlib import Path
from typing import Dict, List, TextIO, Union

from ..config import DEFAULT_STATION_STEP
from ..core.composed import ComposedCurve
from ..core.models import CircleArc, Curve, Line
from ..geometry.clothoid import ClothoidArc


def _radius_from_curvature(curvature: float) -> float:
    if curvature == 0:
        return math.inf
    return 1.0 / curvature


class CSVReporter:
    """Generate CSV tables describing curves."""

    def __init__(self, precision: int = 6) -> None:
        """Initialize CSV reporter.

        Args:
            precision: Decimal places for coordinates and lengths
        """
        self.precision = precision
        self.headers = {
            "station_table": [
                "Station",
                "X",
                "Y",
                "Tangent Angle (deg)",
                "Curvature",
                "Radius",
            ],
            "segment_table": [
                "Segment",
                "Type",
                "Start Station",
                "End Station",
                "Length",
                "Start X",
                "Start Y",
                "End X",
                "End Y",
                "Details",
            ],
        }

    def _fmt(self, value: float) -> str:
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        return f"{value:.{self.precision}f}"

    def station_rows(self, curve: Curve, step: float = DEFAULT_STATION_STEP) -> List[List[str]]:
        """Rows of the station table, one every ``step`` units plus the end."""
        if step <= 0:
            raise ValueError("Station step must be positive")

        total = curve.total_length
        count = int(total // step)
        stations = [i * step for i in range(count + 1)]
        if total - stations[-1] > 1e-9:
            stations.append(total)

        rows = []
        for station in stations:
            t = curve.get_t(station)
            x, y = curve.get_position(t)
            tangent = curve.get_tangent(t)
            curvature = curve.get_curvature(t)
            rows.append(
                [
                    self._fmt(station),
                    self._fmt(x),
                    self._fmt(y),
                    self._fmt(math.degrees(math.atan2(tangent[1], tangent[0]))),
                    self._fmt(curvature),
                    self._fmt(_radius_from_curvature(curvature)),
                ]
            )
        return rows

    def write_station_table(self, curve: Curve, stream: TextIO, step: float = DEFAULT_STATION_STEP) -> int:
        """Write the station table to a text stream.

        Returns:
            Number of data rows written
        """
        writer = csv.writer(stream)
        writer.writerow(self.headers["station_table"])
        rows = self.station_rows(curve, step)
        writer.writerows(rows)
        return len(rows)

    def segment_rows(self, curve: Curve) -> List[List[str]]:
        """Rows of the segment table for a composed or single curve."""
        if isinstance(curve, ComposedCurve):
            segments = list(curve.segments)
            ranges = [curve.get_segment_range(i) for i in range(curve.segment_count)]
        else:
            segments = [curve]
            ranges = [(0.0, curve.total_length)]

        rows = []
        for i, (segment, (start, end)) in enumerate(zip(segments, ranges)):
            p0 = segment.point0
            p1 = segment.point1
            rows.append(
                [
                    str(i),
                    type(segment).__name__,
                    self._fmt(start),
                    self._fmt(end),
                    self._fmt(end - start),
                    self._fmt(p0[0]),
                    self._fmt(p0[1]),
                    self._fmt(p1[0]),
                    self._fmt(p1[1]),
                    self._details(segment),
                ]
            )
        return rows

    def _details(self, segment: Curve) -> str:
        if isinstance(segment, CircleArc):
            return (
                f"R={self._fmt(segment.radius)} "
                f"sweep={math.degrees(segment.adv_angle):.3f}deg {segment.direction.value}"
            )
        if isinstance(segment, ClothoidArc):
            r0 = segment.get_radius(segment.t_min)
            r1 = segment.get_radius(segment.t_max)
            return f"A={self._fmt(segment.a)} R0={self._fmt(r0)} R1={self._fmt(r1)}"
        if isinstance(segment, Line):
            return ""
        return f"{type(segment).__name__}"

    def write_segment_table(self, curve: Curve, stream: TextIO) -> int:
        """Write the segment table to a text stream."""
        writer = csv.writer(stream)
        writer.writerow(self.headers["segment_table"])
        rows = self.segment_rows(curve)
        writer.writerows(rows)
        return len(rows)


def generate_csv_report(
    curve: Curve,
    output_dir: Union[str, Path],
    name: str = "curve",
    step: float = DEFAULT_STATION_STEP,
) -> Dict[str, Path]:
    """Write station and segment tables for a curve.

    Args:
        curve: Curve to report
        output_dir: Directory for the CSV files
        name: File name prefix
        step: Station spacing

    Returns:
        Dictionary mapping report type to file path
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    reporter = CSVReporter()
    paths = {
        "stations": output_dir / f"{name}_stations.csv",
        "segments": output_dir / f"{name}_segments.csv",
    }

    with open(paths["stations"], "w", newline="", encoding="utf-8") as f:
        reporter.write_station_table(curve, f, step)
    with open(paths["segments"], "w", newline="", encoding="utf-8") as f:
        reporter.write_segment_table(curve, f)

    return paths
