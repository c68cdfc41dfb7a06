"""Visualization functionality for curves."""

from .curve_plotter import CurvePlotter, plot_curve
from .interactive_plotter import InteractivePlotter, plot_curve_html

__all__ = [
    "CurvePlotter",
    "InteractivePlotter",
    "plot_curve",
    "plot_curve_html",
]
