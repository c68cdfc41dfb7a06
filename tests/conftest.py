"""Pytest configuration and fixtures."""

import json
import math
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

from easycurves.core.composed import ComposedCurve  # noqa: E402
from easycurves.core.models import CircleArc, Line  # noqa: E402
from easycurves.geometry.clothoid import ClothoidArc  # noqa: E402


@pytest.fixture
def unit_square() -> ComposedCurve:
    """Return a closed square of four length-10 lines."""
    corners = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0), (0.0, 0.0)]
    return ComposedCurve([Line(a, b) for a, b in zip(corners, corners[1:])])


@pytest.fixture
def quarter_arc() -> CircleArc:
    """Return a counter-clockwise quarter circle of radius 10 around (10, 10)."""
    return CircleArc(center=(10.0, 10.0), radius=10.0, angle1=0.0, angle2=math.pi / 2)


@pytest.fixture
def transition_alignment() -> ComposedCurve:
    """Return line -> clothoid -> arc, tangent and curvature continuous."""
    radius = 50.0
    a = 20.0
    l_end = a * a / radius

    spiral = ClothoidArc.from_canonical(0.0, l_end, False, a, rotation=0.0, translation=(100.0, 0.0))

    # Arc continues the spiral with the same tangent and radius
    end = spiral.point1
    heading = l_end * l_end / (2 * a * a)
    center = (end[0] - radius * math.sin(heading), end[1] + radius * math.cos(heading))
    start_angle = heading - math.pi / 2
    arc = CircleArc(center=center, radius=radius, angle1=start_angle, angle2=start_angle + math.pi / 4)

    return ComposedCurve([Line((0.0, 0.0), (100.0, 0.0)), spiral, arc])


@pytest.fixture
def alignment_definition() -> dict:
    """Return an alignment definition using every segment type."""
    return {
        "name": "demo",
        "segments": [
            {"type": "line", "start": [0, 0], "end": [100, 0]},
            {
                "type": "arc",
                "center": [100, 50],
                "radius": 50,
                "angle1": -90,
                "angle2": 0,
                "degrees": True,
            },
            {"type": "arc3", "start": [150, 50], "through": [150 - 50 * (1 - math.cos(math.pi / 4)), 50 + 50 * math.sin(math.pi / 4)], "end": [100, 100]},
            {"type": "line", "start": [100, 100], "end": [50, 100]},
        ],
    }


@pytest.fixture
def alignment_file(tmp_path: Path, alignment_definition: dict) -> Path:
    """Write the alignment definition to a JSON file."""
    path = tmp_path / "demo.json"
    path.write_text(json.dumps(alignment_definition), encoding="utf-8")
    return path
