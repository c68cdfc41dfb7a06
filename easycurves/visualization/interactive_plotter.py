"""Interactive HTML plots of curves with plotly."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import plotly.graph_objects as go

from ..config import DEFAULT_SAMPLE_COUNT
from ..core.composed import ComposedCurve
from ..core.models import CircleArc, Curve
from ..geometry.clothoid import ClothoidArc


class InteractivePlotter:
    """Plotly figures of curves with per-segment hover information."""

    def __init__(self) -> None:
        """Initialize plotter styling."""
        self.colors = {
            "Line": "#2e8b57",  # Sea green
            "CircleArc": "#dc143c",  # Crimson
            "ClothoidArc": "#4169e1",  # Royal blue
            "junctions": "#4a4a4a",  # Dark gray
        }

        self.layout_config = {
            "font": {"family": "Arial, sans-serif", "size": 12, "color": "#2f2f2f"},
            "plot_bgcolor": "white",
            "paper_bgcolor": "white",
            "showlegend": True,
            "margin": {"l": 60, "r": 20, "t": 80, "b": 60},
        }

        self.grid_config = {
            "showgrid": True,
            "gridwidth": 0.5,
            "gridcolor": "#e0e0e0",
            "zeroline": True,
            "zerolinecolor": "#c0c0c0",
        }

    def create_base_layout(self, title: str, width: int = 1200, height: int = 800) -> Dict[str, Any]:
        """Create base layout configuration with equal axis scaling."""
        layout = self.layout_config.copy()
        layout.update(
            {
                "title": {"text": title, "x": 0.5, "xanchor": "center"},
                "xaxis": {"title": {"text": "X"}, "scaleanchor": "y", "scaleratio": 1, **self.grid_config},
                "yaxis": {"title": {"text": "Y"}, **self.grid_config},
                "width": width,
                "height": height,
            }
        )
        return layout

    def _hover(self, index: int, segment: Curve, start: float) -> str:
        lines = [f"<b>Segment {index}: {type(segment).__name__}</b>"]
        lines.append(f"Start station: {start:.3f}")
        lines.append(f"Length: {segment.total_length:.3f}")
        if isinstance(segment, CircleArc):
            lines.append(f"Radius: {segment.radius:.3f} ({segment.direction.value})")
        elif isinstance(segment, ClothoidArc):
            lines.append(f"A: {segment.a:.4f}")
        return "<br>".join(lines) + "<extra></extra>"

    def plot_curve(
        self,
        curve: Curve,
        title: Optional[str] = None,
        sample_count: int = DEFAULT_SAMPLE_COUNT,
    ) -> go.Figure:
        """Create an interactive plan view of a curve.

        Args:
            curve: Curve to visualize
            title: Plot title
            sample_count: Samples per leaf curve

        Returns:
            Plotly figure object
        """
        if isinstance(curve, ComposedCurve):
            segments: List[Curve] = list(curve.segments)
            starts = [curve.get_segment_range(i)[0] for i in range(curve.segment_count)]
        else:
            segments = [curve]
            starts = [0.0]

        fig = go.Figure()
        shown = set()

        for i, (segment, start) in enumerate(zip(segments, starts)):
            kind = type(segment).__name__
            points = segment.sample(sample_count)
            fig.add_trace(
                go.Scatter(
                    x=[p[0] for p in points],
                    y=[p[1] for p in points],
                    mode="lines",
                    name=kind,
                    legendgroup=kind,
                    showlegend=kind not in shown,
                    line=dict(color=self.colors.get(kind, "#333333"), width=3),
                    hovertemplate=self._hover(i, segment, start),
                )
            )
            shown.add(kind)

        junctions = [curve.point0] + [segment.point1 for segment in segments]
        fig.add_trace(
            go.Scatter(
                x=[p[0] for p in junctions],
                y=[p[1] for p in junctions],
                mode="markers",
                name="Junctions",
                marker=dict(size=9, color="white", line=dict(color=self.colors["junctions"], width=2)),
                hovertemplate="X: %{x:.3f}<br>Y: %{y:.3f}<extra></extra>",
            )
        )

        fig.update_layout(**self.create_base_layout(title or "Curve"))
        return fig

    def save_html(self, fig: go.Figure, output_path: Union[str, Path]) -> None:
        """Save figure as standalone interactive HTML."""
        config = {"displayModeBar": True, "displaylogo": False}
        fig.write_html(str(output_path), config=config)


def plot_curve_html(curve: Curve, output_path: Union[str, Path], title: Optional[str] = None) -> None:
    """Convenience function to write an interactive HTML plot of a curve."""
    plotter = InteractivePlotter()
    plotter.save_html(plotter.plot_curve(curve, title=title), output_path)