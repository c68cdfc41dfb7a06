"""Curve visualization and plotting functionality."""

from pathlib import Path
from typing import List, Optional, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from ..config import DEFAULT_SAMPLE_COUNT
from ..core.composed import ComposedCurve
from ..core.models import CircleArc, Curve, Line
from ..geometry.clothoid import ClothoidArc


class CurvePlotter:
    """Plotter for curves and composed alignments."""

    def __init__(self, figsize: Tuple[float, float] = (11.69, 8.27)):
        """Initialize plotter.

        Args:
            figsize: Figure size in inches (width, height)
                     Default is A4 landscape (11.69" x 8.27")
        """
        self.figsize = figsize
        self.colors = {
            "line": "#F18F01",  # Orange
            "arc": "#C73E1D",  # Red
            "clothoid": "#2E86AB",  # Blue
            "junctions": "#592E83",  # Dark purple
            "annotations": "#333333",  # Dark gray
            "curvature": "#A23B72",  # Purple
        }

    def create_figure(self) -> Tuple[Figure, Axes]:
        """Create matplotlib figure and axes."""
        plt.rcParams["figure.dpi"] = 100  # Display DPI
        plt.rcParams["savefig.dpi"] = 300  # Save DPI

        fig, ax = plt.subplots(figsize=self.figsize)
        ax.set_aspect("equal")
        ax.grid(True, alpha=0.3)
        ax.set_xlabel("X", fontsize=12)
        ax.set_ylabel("Y", fontsize=12)
        return fig, ax

    def plot_polyline(
        self,
        ax: Axes,
        points: List[Tuple[float, float]],
        color: str = "blue",
        linestyle: str = "-",
        linewidth: float = 2.0,
        label: Optional[str] = None,
        alpha: float = 1.0,
    ) -> None:
        """Plot a polyline on the axes.

        Args:
            ax: Matplotlib axes
            points: List of (x, y) coordinate tuples
            color: Line color
            linestyle: Line style
            linewidth: Line width
            label: Legend label
            alpha: Transparency
        """
        if len(points) < 2:
            return

        x_coords = [p[0] for p in points]
        y_coords = [p[1] for p in points]

        ax.plot(
            x_coords,
            y_coords,
            color=color,
            linestyle=linestyle,
            linewidth=linewidth,
            label=label,
            alpha=alpha,
        )

    def color_for(self, curve: Curve) -> str:
        if isinstance(curve, Line):
            return self.colors["line"]
        if isinstance(curve, CircleArc):
            return self.colors["arc"]
        if isinstance(curve, ClothoidArc):
            return self.colors["clothoid"]
        return self.colors["annotations"]

    def plot_curve(
        self,
        ax: Axes,
        curve: Curve,
        sample_count: int = DEFAULT_SAMPLE_COUNT,
        show_junctions: bool = True,
    ) -> None:
        """Plot a curve, coloring the segments of composed curves by kind.

        Args:
            ax: Matplotlib axes
            curve: Curve to plot
            sample_count: Samples per leaf curve
            show_junctions: Mark the segment junctions of composed curves
        """
        segments = list(curve.segments) if isinstance(curve, ComposedCurve) else [curve]
        labelled = set()

        for segment in segments:
            kind = type(segment).__name__
            self.plot_polyline(
                ax,
                segment.sample(sample_count),
                color=self.color_for(segment),
                label=kind if kind not in labelled else None,
            )
            labelled.add(kind)

        if show_junctions and isinstance(curve, ComposedCurve):
            points = [curve.point0] + [segment.point1 for segment in segments]
            ax.scatter(
                [p[0] for p in points],
                [p[1] for p in points],
                s=30,
                c=self.colors["junctions"],
                zorder=5,
                label="Junctions",
            )

    def plot_curvature(self, ax: Axes, curve: Curve, sample_count: int = 4 * DEFAULT_SAMPLE_COUNT) -> None:
        """Plot the curvature diagram (curvature against station)."""
        total = curve.total_length
        stations = [total * i / (sample_count - 1) for i in range(sample_count)]
        curvatures = [curve.get_curvature(curve.get_t(s)) for s in stations]

        ax.plot(stations, curvatures, color=self.colors["curvature"], linewidth=1.5)
        ax.axhline(0.0, color="#999999", linewidth=0.8)
        ax.grid(True, alpha=0.3)
        ax.set_xlabel("Station", fontsize=12)
        ax.set_ylabel("Curvature (1/R)", fontsize=12)

    def plot_alignment(
        self,
        curve: Curve,
        title: Optional[str] = None,
        show_curvature: bool = False,
    ) -> Tuple[Figure, Axes]:
        """Plot a curve with a statistics box and optional curvature diagram.

        Args:
            curve: Curve to plot
            title: Plot title
            show_curvature: Add a curvature diagram below the plan view

        Returns:
            Matplotlib figure and plan view axes
        """
        if show_curvature:
            plt.rcParams["figure.dpi"] = 100
            plt.rcParams["savefig.dpi"] = 300
            fig, (ax, ax_k) = plt.subplots(
                2, 1, figsize=self.figsize, gridspec_kw={"height_ratios": [3, 1]}
            )
            ax.set_aspect("equal")
            ax.grid(True, alpha=0.3)
            self.plot_curvature(ax_k, curve)
        else:
            fig, ax = self.create_figure()

        self.plot_curve(ax, curve)

        if title:
            ax.set_title(title, fontsize=14, fontweight="bold")

        handles, _ = ax.get_legend_handles_labels()
        if handles:
            ax.legend(loc="upper right", fontsize=10)

        segment_count = curve.segment_count if isinstance(curve, ComposedCurve) else 1
        stats_text = f"Segments: {segment_count}\nTotal Length: {curve.total_length:.3f}"
        ax.text(
            0.02,
            0.98,
            stats_text,
            transform=ax.transAxes,
            fontsize=10,
            verticalalignment="top",
            bbox=dict(boxstyle="round,pad=0.3", facecolor="lightyellow", alpha=0.8),
        )

        plt.tight_layout()
        return fig, ax

    def save_plot(self, fig: Figure, output_path: Union[str, Path]) -> None:
        """Save figure to file and release it."""
        fig.savefig(str(output_path), bbox_inches="tight")
        plt.close(fig)


def plot_curve(
    curve: Curve,
    output_path: Union[str, Path],
    title: Optional[str] = None,
    show_curvature: bool = False,
) -> None:
    """Convenience function to plot a curve to an image file."""
    plotter = CurvePlotter()
    fig, _ = plotter.plot_alignment(curve, title=title, show_curvature=show_curvature)
    plotter.save_plot(fig, output_path)