"""DXF file writing functionality."""

import logging
import math
from pathlib import Path
from typing import Iterable, Optional, Union

import ezdxf
from ezdxf.layouts import Modelspace

from ..config import DXF_LAYERS
from ..core.composed import ComposedCurve
from ..core.models import CircleArc, Curve, Line
from ..geometry.flatten import flatten_curve

logger = logging.getLogger(__name__)


class DXFWriter:
    """DXF file writer for curves and alignments."""

    def __init__(self, dxf_version: str = "R2010", chord_tolerance: Optional[float] = None) -> None:
        """Initialize DXF writer.

        Args:
            dxf_version: DXF version to use (default R2010 for compatibility)
            chord_tolerance: Max deviation when curves are written as polylines
        """
        self.doc = ezdxf.new(dxf_version)
        self.msp: Modelspace = self.doc.modelspace()
        self.chord_tolerance = chord_tolerance
        self.entity_count = 0
        self._setup_layers()

    def _setup_layers(self) -> None:
        """Setup standard layers for curve output."""
        for layer_name, properties in DXF_LAYERS.items():
            layer = self.doc.layers.add(layer_name)
            layer.color = properties["color"]
            layer.linetype = properties["linetype"]

        logger.info(f"Created {len(DXF_LAYERS)} standard layers")

    def write_curve(self, curve: Curve) -> None:
        """Write a curve using the closest native DXF entity.

        Lines become LINE, circle arcs ARC, anything else a polyline.
        """
        if isinstance(curve, ComposedCurve):
            for segment in curve.segments:
                self.write_curve(segment)
        elif isinstance(curve, Line):
            self.msp.add_line(curve.start_point, curve.end_point, dxfattribs={"layer": "CURVE_LINES"})
            self.entity_count += 1
        elif isinstance(curve, CircleArc):
            self.write_arc(curve)
        else:
            self.write_polyline(curve, layer_name="CURVE_CLOTHOIDS")

    def write_arc(self, arc: CircleArc, layer_name: str = "CURVE_ARCS") -> None:
        """Write a circle arc.

        DXF arcs always run counter-clockwise, so clockwise arcs are written
        from their end angle.
        """
        start, end = sorted((arc.angle1, arc.angle2))
        if math.isclose(end - start, 2 * math.pi):
            self.msp.add_circle(center=arc.center, radius=arc.radius, dxfattribs={"layer": layer_name})
        else:
            self.msp.add_arc(
                center=arc.center,
                radius=arc.radius,
                start_angle=math.degrees(start),
                end_angle=math.degrees(end),
                dxfattribs={"layer": layer_name},
            )
        self.entity_count += 1

    def write_polyline(self, curve: Curve, layer_name: str = "CURVE_CLOTHOIDS") -> None:
        """Write any curve as a flattened lightweight polyline."""
        points = flatten_curve(curve, tolerance=self.chord_tolerance)
        lwpolyline = self.msp.add_lwpolyline(points)
        lwpolyline.dxf.layer = layer_name
        self.entity_count += 1

    def write_junction_markers(
        self, curve: ComposedCurve, layer_name: str = "JUNCTIONS", marker_size: float = 0.5
    ) -> None:
        """Write circle markers at segment junctions and curve ends.

        Args:
            curve: Composed curve
            layer_name: Layer name for junction markers
            marker_size: Radius of the markers
        """
        points = [curve.point0] + [segment.point1 for segment in curve.segments]
        for x, y in points:
            self.msp.add_circle(center=(x, y), radius=marker_size, dxfattribs={"layer": layer_name})

        logger.info(f"Added {len(points)} junction markers")

    def write_station_labels(
        self,
        curve: Curve,
        stations: Iterable[float],
        layer_name: str = "ANNOTATIONS",
        text_height: float = 1.0,
    ) -> None:
        """Write station values as text along the curve.

        Args:
            curve: Curve to annotate
            stations: Arc lengths to label
            layer_name: Layer name for annotations
            text_height: Text height in drawing units
        """
        count = 0
        for station in stations:
            position = curve.get_position(curve.get_t(station))
            text = self.msp.add_text(
                f"{station:.2f}", height=text_height, dxfattribs={"layer": layer_name}
            )
            text.set_placement(position)
            count += 1

        logger.info(f"Added {count} station labels")

    def save(self, file_path: Union[str, Path]) -> None:
        """Save DXF file to disk.

        Args:
            file_path: Output file path
        """
        try:
            self.doc.saveas(str(file_path))
            logger.info(f"Saved DXF file: {file_path} ({self.entity_count} curve entities)")
        except OSError as e:
            raise ValueError(f"Failed to save DXF file {file_path}: {e}")


def export_curve_to_dxf(
    curve: Curve,
    file_path: Union[str, Path],
    include_junctions: bool = True,
    station_step: Optional[float] = None,
) -> None:
    """Convenience function to export a curve to a DXF file.

    Args:
        curve: Curve to export
        file_path: Output file path
        include_junctions: Whether to mark segment junctions of composed curves
        station_step: Spacing of station labels (None for no labels)
    """
    writer = DXFWriter()
    writer.write_curve(curve)

    if include_junctions and isinstance(curve, ComposedCurve):
        writer.write_junction_markers(curve)

    if station_step:
        total = curve.total_length
        count = int(total // station_step)
        writer.write_station_labels(curve, [i * station_step for i in range(count + 1)])

    writer.save(file_path)
