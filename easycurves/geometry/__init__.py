"""Geometry construction for circle arcs and clothoids."""

from .circle import (
    arc_from_center,
    arc_from_three_points,
    arc_from_two_points_radius,
    arc_with_advance,
    are_aligned,
    evaluate_center,
    fit_arc,
    fit_circle,
    get_center,
)
from .clothoid import (
    ClothoidArc,
    clotho,
    clotho_l,
    clotho_radius,
    clotho_tangent,
    dclotho,
    dclotho2,
    find_tangent,
    fresnel,
    get_max_l,
    get_min_radius,
    solve_clotho_param,
)

__all__ = [
    "get_center",
    "arc_from_three_points",
    "arc_with_advance",
    "arc_from_center",
    "arc_from_two_points_radius",
    "evaluate_center",
    "are_aligned",
    "fit_circle",
    "fit_arc",
    "ClothoidArc",
    "fresnel",
    "clotho",
    "clotho_tangent",
    "dclotho",
    "dclotho2",
    "clotho_radius",
    "clotho_l",
    "find_tangent",
    "get_max_l",
    "get_min_radius",
    "solve_clotho_param",
]
