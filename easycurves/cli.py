"""Command-line interface for easycurves."""

import json
import logging
import math
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import DEFAULT_STATION_STEP
from .core.models import Curve
from .geometry.circle import arc_from_three_points
from .geometry.clothoid import ClothoidArc
from .io.alignment_reader import load_alignment
from .io.dxf_writer import export_curve_to_dxf
from .io.wavefront_writer import WavefrontWriter
from .reporting.csv_reporter import CSVReporter
from .reporting.json_reporter import JSONReporter


def _load(alignment_file: str) -> Curve:
    try:
        return load_alignment(Path(alignment_file))
    except ValueError as e:
        click.echo(f"✗ Failed to load alignment: {e}", err=True)
        raise click.ClickException("Invalid alignment file")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Verbose (debug) logging")
def main(verbose: bool) -> None:
    """Easy Curves - lines, circle arcs, clothoids and composed alignments."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("points", nargs=6, type=float)
@click.option(
    "--format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def arc3(points: tuple, format: str) -> None:
    """Fit the arc through START, THROUGH and END points (x1 y1 xp yp x2 y2)."""
    x1, y1, xp, yp, x2, y2 = points
    try:
        arc = arc_from_three_points((x1, y1), (xp, yp), (x2, y2))
    except ValueError as e:
        click.echo(f"✗ {e}", err=True)
        raise click.ClickException("Cannot fit an arc through the points")

    if format == "json":
        click.echo(json.dumps(JSONReporter().segment_data(arc), indent=2))
        return

    click.echo(f"Center: ({arc.center[0]:.6f}, {arc.center[1]:.6f})")
    click.echo(f"Radius: {arc.radius:.6f}")
    click.echo(f"Angle1: {arc.angle1:.6f} rad ({math.degrees(arc.angle1):.3f} deg)")
    click.echo(f"Angle2: {arc.angle2:.6f} rad ({math.degrees(arc.angle2):.3f} deg)")
    click.echo(f"Sweep: {math.degrees(arc.adv_angle):.3f} deg {arc.direction.value}")
    click.echo(f"Length: {arc.total_length:.6f}")


@main.command()
@click.argument("x0", type=float)
@click.argument("y0", type=float)
@click.argument("x1", type=float)
@click.argument("y1", type=float)
@click.argument("r0", type=float)
@click.argument("r1", type=float)
@click.option("--l0", type=float, default=0.0, help="Parameter at the start point")
def clothoid(x0: float, y0: float, x1: float, y1: float, r0: float, r1: float, l0: float) -> None:
    """Reconstruct the clothoid joining two points with end radii R0 and R1.

    Use 'inf' for a straight end (pass '--' before negative values).
    """
    try:
        arc = ClothoidArc(l0, (x0, y0), (x1, y1), r0, r1)
    except ValueError as e:
        click.echo(f"✗ {e}", err=True)
        raise click.ClickException("Cannot reconstruct the clothoid")

    click.echo(f"A: {arc.a:.9f}")
    click.echo(f"Invert Y: {arc.invert_y}")
    click.echo(f"Domain: [{arc.t_min:.6f}, {arc.t_max:.6f}]")
    click.echo(f"Length: {arc.total_length:.6f}")
    click.echo(f"Start radius: {arc.get_radius(arc.t_min):.6f}")
    click.echo(f"End radius: {arc.get_radius(arc.t_max):.6f}")
    click.echo(f"Rotation: {math.degrees(arc.rotation):.6f} deg")


@main.command()
@click.argument("alignment_file", type=click.Path(exists=True))
@click.option(
    "--format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def info(alignment_file: str, format: str) -> None:
    """Summarize an alignment JSON file."""
    curve = _load(alignment_file)
    summary = JSONReporter().curve_summary(curve, name=Path(alignment_file).stem)

    if format == "json":
        click.echo(json.dumps(summary, indent=2))
        return

    click.echo(f"✓ Alignment: {summary['metadata']['name']}")
    click.echo(f"  Segments: {summary['summary']['segment_count']}")
    click.echo(f"  Total length: {curve.total_length:.3f}")
    click.echo(f"  Closed: {summary['summary']['closed']}")
    for i, segment in enumerate(summary["segments"]):
        click.echo(f"    {i}: {segment['type']} length={segment['length']}")


@main.command()
@click.argument("alignment_file", type=click.Path(exists=True))
@click.option("--step", type=float, default=DEFAULT_STATION_STEP, help="Station spacing")
@click.option("--output", "-o", type=click.Path(), help="Output CSV file (stdout if omitted)")
def stations(alignment_file: str, step: float, output: Optional[str]) -> None:
    """Write a station table (station, x, y, tangent, curvature, radius)."""
    curve = _load(alignment_file)
    reporter = CSVReporter()

    try:
        if output:
            output_path = Path(output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", newline="", encoding="utf-8") as f:
                count = reporter.write_station_table(curve, f, step)
            click.echo(f"✓ {count} stations saved to: {output_path}")
        else:
            reporter.write_station_table(curve, sys.stdout, step)
    except ValueError as e:
        raise click.ClickException(str(e))


@main.command()
@click.argument("alignment_file", type=click.Path(exists=True))
@click.option(
    "--format",
    type=click.Choice(["dxf", "obj", "json", "csv"]),
    default="dxf",
    help="Export format",
)
@click.option("--output", "-o", type=click.Path(), help="Output file")
@click.option("--station-step", type=float, default=None, help="Station labels spacing (DXF only)")
def export(alignment_file: str, format: str, output: Optional[str], station_step: Optional[float]) -> None:
    """Export an alignment to DXF, Wavefront OBJ, JSON or CSV."""
    curve = _load(alignment_file)
    input_path = Path(alignment_file)

    output_path = Path(output) if output else input_path.with_name(f"{input_path.stem}_export.{format}")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        if format == "dxf":
            export_curve_to_dxf(curve, output_path, station_step=station_step)
        elif format == "obj":
            mtl_path = output_path.with_suffix(".mtl")
            with open(output_path, "w", encoding="utf-8") as obj, open(mtl_path, "w", encoding="utf-8") as mtl:
                writer = WavefrontWriter(obj, mtl, mtl_name=mtl_path.name)
                writer.write_curve(curve, name=input_path.stem)
                writer.close()
        elif format == "json":
            JSONReporter().write_summary(curve, output_path, name=input_path.stem)
        else:
            with open(output_path, "w", newline="", encoding="utf-8") as f:
                CSVReporter().write_segment_table(curve, f)
    except (OSError, ValueError) as e:
        click.echo(f"✗ Export failed: {e}", err=True)
        raise click.ClickException("Failed to export alignment")

    click.echo(f"✓ Exported {format.upper()} to: {output_path}")


@main.command()
@click.argument("alignment_file", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), help="Output image (.png) or interactive plot (.html)")
@click.option("--title", type=str, default=None, help="Plot title")
@click.option("--curvature", is_flag=True, help="Add a curvature diagram")
def plot(alignment_file: str, output: Optional[str], title: Optional[str], curvature: bool) -> None:
    """Plot an alignment to PNG (matplotlib) or HTML (plotly)."""
    curve = _load(alignment_file)
    input_path = Path(alignment_file)
    output_path = Path(output) if output else input_path.with_suffix(".png")
    title = title or input_path.stem

    if output_path.suffix.lower() == ".html":
        from .visualization.interactive_plotter import plot_curve_html

        plot_curve_html(curve, output_path, title=title)
    else:
        from .visualization.curve_plotter import plot_curve

        plot_curve(curve, output_path, title=title, show_curvature=curvature)

    click.echo(f"✓ Plot saved to: {output_path}")


if __name__ == "__main__":
    main()
