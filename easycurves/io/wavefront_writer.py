"""Wavefront OBJ/MTL debug export of curves.

Geometry is written to caller supplied text streams, so debug output can go
to files, buffers or anything else with a ``write`` method.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence, TextIO, Tuple

from ..config import DEFAULT_SAMPLE_COUNT, WAVEFRONT_MATERIALS
from ..core.composed import ComposedCurve
from ..core.models import CircleArc, Curve, Line
from ..geometry.clothoid import ClothoidArc

logger = logging.getLogger(__name__)


def material_for(curve: Curve) -> str:
    """Material name used for a curve kind."""
    if isinstance(curve, Line):
        return "line"
    if isinstance(curve, CircleArc):
        return "arc"
    if isinstance(curve, ClothoidArc):
        return "clothoid"
    return "composed"


class WavefrontWriter:
    """Write curves as OBJ polylines (``l`` elements) with materials."""

    def __init__(
        self,
        obj_stream: TextIO,
        mtl_stream: Optional[TextIO] = None,
        mtl_name: str = "curves.mtl",
        sample_count: int = DEFAULT_SAMPLE_COUNT,
    ) -> None:
        """Initialize writer.

        Args:
            obj_stream: Destination for OBJ geometry
            mtl_stream: Destination for the material library (None to skip materials)
            mtl_name: Library name referenced by ``mtllib`` in the OBJ stream
            sample_count: Samples per curve segment
        """
        self.obj = obj_stream
        self.mtl = mtl_stream
        self.sample_count = sample_count
        self.vertex_count = 0
        self.object_count = 0
        self._current_material: Optional[str] = None

        self.obj.write("# easycurves debug export\n")
        if self.mtl is not None:
            self.obj.write(f"mtllib {mtl_name}\n")
            self._write_materials(WAVEFRONT_MATERIALS)

    def _write_materials(self, materials: Dict[str, Tuple[float, float, float]]) -> None:
        if self.mtl is None:
            return
        for name, (r, g, b) in materials.items():
            self.mtl.write(f"newmtl {name}\n")
            self.mtl.write(f"Kd {r:.3f} {g:.3f} {b:.3f}\n")
            self.mtl.write("d 1.0\n\n")

    def _use_material(self, material: str) -> None:
        if self.mtl is None or material == self._current_material:
            return
        self.obj.write(f"usemtl {material}\n")
        self._current_material = material

    def write_polyline(
        self, points: Sequence[Tuple[float, float]], name: Optional[str] = None, z: float = 0.0
    ) -> None:
        """Write a polyline as one OBJ object."""
        if len(points) < 2:
            return

        self.object_count += 1
        self.obj.write(f"o {name or f'polyline_{self.object_count}'}\n")

        first = self.vertex_count + 1
        for x, y in points:
            self.obj.write(f"v {x:.9g} {y:.9g} {z:.9g}\n")
        self.vertex_count += len(points)

        indices = " ".join(str(i) for i in range(first, self.vertex_count + 1))
        self.obj.write(f"l {indices}\n")

    def write_curve(self, curve: Curve, name: Optional[str] = None) -> None:
        """Write a sampled curve; composed curves are written per segment."""
        if isinstance(curve, ComposedCurve):
            base = name or "composed"
            for i, segment in enumerate(curve.segments):
                self.write_curve(segment, name=f"{base}_{i}")
            return

        self._use_material(material_for(curve))
        self.write_polyline(curve.sample(self.sample_count), name=name)

    def write_line(self, p0: Tuple[float, float], p1: Tuple[float, float], name: Optional[str] = None) -> None:
        self._use_material("line")
        self.write_polyline([p0, p1], name=name)

    def write_cross(self, center: Tuple[float, float], size: float = 0.5, name: Optional[str] = None) -> None:
        """Write an X shaped marker."""
        self._use_material("marker")
        cx, cy = center
        base = name or f"cross_{self.object_count + 1}"
        self.write_polyline([(cx - size, cy - size), (cx + size, cy + size)], name=f"{base}_a")
        self.write_polyline([(cx - size, cy + size), (cx + size, cy - size)], name=f"{base}_b")

    def write_circle(
        self, center: Tuple[float, float], radius: float, segments: int = 32, name: Optional[str] = None
    ) -> None:
        """Write a closed circle marker."""
        self._use_material("marker")
        cx, cy = center
        points: List[Tuple[float, float]] = [
            (cx + radius * math.cos(2 * math.pi * i / segments), cy + radius * math.sin(2 * math.pi * i / segments))
            for i in range(segments)
        ]
        points.append(points[0])
        self.write_polyline(points, name=name)

    def write_frames(self, curve: Curve, count: int = 8, size: float = 1.0) -> None:
        """Write tangent (and normal) ticks at evenly spaced stations."""
        total = curve.total_length
        for i in range(count):
            length = total * i / (count - 1) if count > 1 else 0.0
            position, tangent, normal = curve.get_frame(curve.get_t(length))
            x, y = position
            self.write_line((x, y), (x + tangent[0] * size, y + tangent[1] * size), name=f"tangent_{i}")
            self.write_line((x, y), (x + normal[0] * size / 2, y + normal[1] * size / 2), name=f"normal_{i}")

    def close(self) -> None:
        """Log a summary; streams are owned by the caller."""
        logger.info(f"Wrote {self.object_count} OBJ objects with {self.vertex_count} vertices")
