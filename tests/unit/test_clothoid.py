"""Unit tests for clothoid evaluation, inversion and reconstruction."""

import math

import pytest

from easycurves.core.exceptions import DegenerateGeometryError, NumericDomainError
from easycurves.core.vectors import cross
from easycurves.geometry.clothoid import (
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

ERROR = 1e-5
PI = math.pi


def _build_test_arc(a, invert_y, neg_x, tg0, tg1, p0=(5.0, 5.0), direction=(0.0, 1.0)):
    """Boundary data taken from the canonical spiral between two tangents."""
    sign = -1.0 if neg_x else 1.0
    l0 = sign * find_tangent(invert_y, a, tg0)
    l1 = sign * find_tangent(invert_y, a, tg1)

    r0 = clotho_radius(l0, invert_y, a)
    r1 = clotho_radius(l1, invert_y, a)

    pp0 = clotho(l0, invert_y, a)
    pp1 = clotho(l1, invert_y, a)
    chord = math.hypot(pp1[0] - pp0[0], pp1[1] - pp0[1])
    p1 = (p0[0] + direction[0] * chord, p0[1] + direction[1] * chord)

    return l0, p0, p1, r0, r1


class TestClothoFunctions:
    """Test canonical spiral functions."""

    def test_fresnel_values(self) -> None:
        """Test known Fresnel integral values."""
        assert fresnel(0.0) == (0.0, 0.0)
        c, s = fresnel(1.0)
        assert c == pytest.approx(0.7798934, abs=1e-6)
        assert s == pytest.approx(0.4382591, abs=1e-6)

    def test_clotho_near_origin_is_straight(self) -> None:
        """Test the spiral starts along +X."""
        x, y = clotho(0.01, False, 10.0)
        assert x == pytest.approx(0.01, abs=1e-9)
        assert abs(y) < 1e-8

    def test_invert_y_mirrors(self) -> None:
        """Test the inverted branch is the mirror image."""
        x, y = clotho(7.0, False, 5.0)
        xi, yi = clotho(7.0, True, 5.0)
        assert xi == pytest.approx(x)
        assert yi == pytest.approx(-y)
        assert y > 0

    def test_derivative_matches_finite_difference(self) -> None:
        """Test dclotho against a central difference of clotho."""
        a, l, h = 4.0, 3.0, 1e-5
        for invert_y in (False, True):
            p_plus = clotho(l + h, invert_y, a)
            p_minus = clotho(l - h, invert_y, a)
            d = dclotho(l, invert_y, a)
            assert d[0] == pytest.approx((p_plus[0] - p_minus[0]) / (2 * h), abs=1e-6)
            assert d[1] == pytest.approx((p_plus[1] - p_minus[1]) / (2 * h), abs=1e-6)

    def test_second_derivative_matches_finite_difference(self) -> None:
        """Test dclotho2 against a central difference of dclotho."""
        a, l, h = 4.0, 3.0, 1e-5
        for invert_y in (False, True):
            d_plus = dclotho(l + h, invert_y, a)
            d_minus = dclotho(l - h, invert_y, a)
            dd = dclotho2(l, invert_y, a)
            assert dd[0] == pytest.approx((d_plus[0] - d_minus[0]) / (2 * h), abs=1e-6)
            assert dd[1] == pytest.approx((d_plus[1] - d_minus[1]) / (2 * h), abs=1e-6)

    def test_tangent_angle(self) -> None:
        """Test tangent angle is l^2 / (2 a^2)."""
        assert clotho_tangent(4.0, False, 2.0) == pytest.approx(2.0)
        assert clotho_tangent(4.0, True, 2.0) == pytest.approx(-2.0)
        assert clotho_tangent(-4.0, False, 2.0) == pytest.approx(2.0)

    def test_radius_and_length_are_inverse(self) -> None:
        """Test clotho_l inverts clotho_radius."""
        a = 3.0
        for invert_y in (False, True):
            for l in (-5.0, -0.5, 0.5, 5.0):
                r = clotho_radius(l, invert_y, a)
                assert clotho_l(r, invert_y, a) == pytest.approx(l)

    def test_radius_at_inflection_point(self) -> None:
        """Test the radius is infinite at l = 0 and keeps the sign of zero."""
        assert clotho_radius(0.0, False, 2.0) == math.inf
        assert clotho_radius(-0.0, False, 2.0) == -math.inf
        assert clotho_radius(0.0, True, 2.0) == -math.inf

    def test_straight_radius_maps_to_zero_length(self) -> None:
        """Test an infinite radius maps back to the inflection point."""
        assert clotho_l(math.inf, False, 2.0) == 0.0
        assert math.copysign(1.0, clotho_l(-math.inf, False, 2.0)) == -1.0
        assert clotho_l(1e21, False, 2.0) == 0.0

    def test_limits(self) -> None:
        """Test max length and min radius."""
        assert get_max_l(10.0) == pytest.approx(22.3)
        assert get_min_radius(22.3) == pytest.approx(10.0)


class TestFindTangent:
    """Test tangent inversion."""

    def test_vector_and_angle_agree(self) -> None:
        """Test both target forms give the same length and a parallel tangent."""
        for i in range(1, 20):
            a = 0.5 * i
            for invert_y in (False, True):
                ysign = -1.0 if invert_y else 1.0
                for angle in (0.0, PI / 4, PI / 2, 3 * PI / 4):
                    angle = ysign * angle
                    v = (math.cos(angle), math.sin(angle))

                    l = find_tangent(invert_y, a, v)
                    assert l == pytest.approx(find_tangent(invert_y, a, angle), abs=ERROR)

                    assert cross(dclotho(l, invert_y, a), v) == pytest.approx(0.0, abs=ERROR)
                    assert cross(dclotho(-l, invert_y, a), v) == pytest.approx(0.0, abs=ERROR)

    def test_closed_form(self) -> None:
        """Test l = sqrt(2 a^2 angle)."""
        assert find_tangent(False, 2.0, 0.5) == pytest.approx(2.0)

    def test_opposite_direction_is_parallel(self) -> None:
        """Test a half turn or a reversed vector is met at the spiral start."""
        for invert_y in (False, True):
            assert find_tangent(invert_y, 1.0, PI) == pytest.approx(0.0, abs=ERROR)
            assert find_tangent(invert_y, 1.0, (-1.0, 0.0)) == pytest.approx(0.0, abs=ERROR)

    def test_negative_angle_wraps_by_half_turn(self) -> None:
        """Test -pi/4 is solved as the parallel direction 3pi/4."""
        a = 1.0
        target = -PI / 4
        l = find_tangent(False, a, target)

        assert l == pytest.approx(math.sqrt(2.0 * a * a * 3 * PI / 4), abs=ERROR)
        v = (math.cos(target), math.sin(target))
        assert cross(dclotho(l, False, a), v) == pytest.approx(0.0, abs=ERROR)

    def test_mirrored_branch(self) -> None:
        """Test the inverted branch solves the mirrored target."""
        for angle in (0.3, 2.0, 3.0, -0.1):
            assert find_tangent(True, 1.5, -angle) == pytest.approx(
                find_tangent(False, 1.5, angle), abs=ERROR
            )

    def test_past_max_length(self) -> None:
        """Test tangents beyond the usable spiral are still solved."""
        l = find_tangent(False, 1.0, 3.0)
        assert l == pytest.approx(math.sqrt(6.0))
        assert l > get_max_l(1.0)

    def test_undefined_targets(self) -> None:
        """Test zero vectors and non-finite angles raise."""
        with pytest.raises(NumericDomainError):
            find_tangent(False, 1.0, (0.0, 0.0))
        with pytest.raises(NumericDomainError):
            find_tangent(False, 1.0, math.nan)


class TestSolveClothoParam:
    """Test scale recovery."""

    def test_recovers_scale(self) -> None:
        """Test a known spiral piece gives back its scale."""
        a = 7.0
        l0, l1 = 2.0, 9.0
        p0 = clotho(l0, False, a)
        p1 = clotho(l1, False, a)
        chord = math.hypot(p1[0] - p0[0], p1[1] - p0[1])

        assert solve_clotho_param(chord, a * a / l0, a * a / l1) == pytest.approx(a, abs=1e-9)

    def test_recovers_scale_near_max_length(self) -> None:
        """Test a piece ending close to the usable spiral limit."""
        a = 1.0
        l0, l1 = 0.5, 2.2
        p0 = clotho(l0, False, a)
        p1 = clotho(l1, False, a)
        chord = math.hypot(p1[0] - p0[0], p1[1] - p0[1])

        assert solve_clotho_param(chord, a * a / l0, a * a / l1) == pytest.approx(a, abs=1e-9)

    def test_reversed_radii_give_same_scale(self) -> None:
        """Test the solver does not depend on which end is tighter."""
        a = 3.0
        l0, l1 = 1.0, 6.0
        p0 = clotho(l0, False, a)
        p1 = clotho(l1, False, a)
        chord = math.hypot(p1[0] - p0[0], p1[1] - p0[1])

        forward = solve_clotho_param(chord, a * a / l0, a * a / l1)
        backward = solve_clotho_param(chord, a * a / l1, a * a / l0)
        assert forward == pytest.approx(backward, abs=1e-9)
        assert forward == pytest.approx(a, abs=1e-9)

    def test_two_straight_ends(self) -> None:
        """Test two infinite radii are rejected."""
        with pytest.raises(DegenerateGeometryError):
            solve_clotho_param(10.0, math.inf, math.inf)

    def test_chord_too_long(self) -> None:
        """Test a chord that no clothoid can span."""
        with pytest.raises(NumericDomainError):
            solve_clotho_param(1000.0, 5.0, 10.0)


class TestClothoidArc:
    """Test clothoid reconstruction from boundary data."""

    @pytest.mark.parametrize(
        "invert_y,neg_x,tg0,tg1",
        [
            (False, False, PI / 10, 4 * PI / 10),
            (True, False, -PI / 10, -4 * PI / 10),
            (False, True, 4 * PI / 10, PI / 10),
            (True, True, -4 * PI / 10, -PI / 10),
            (False, False, 0.0, 4 * PI / 10),
            (True, False, 0.0, -4 * PI / 10),
            (False, True, 4 * PI / 10, 0.0),
            (True, True, -4 * PI / 10, 0.0),
        ],
    )
    def test_reconstruction(self, invert_y: bool, neg_x: bool, tg0: float, tg1: float) -> None:
        """Test end points, end radii, branch and scale are reproduced."""
        a = 5.0
        l0, p0, p1, r0, r1 = _build_test_arc(a, invert_y, neg_x, tg0, tg1)

        arc = ClothoidArc(l0, p0, p1, r0, r1)

        assert arc.point0 == pytest.approx(p0, abs=ERROR)
        assert arc.point1 == pytest.approx(p1, abs=ERROR)
        assert arc.get_radius(arc.t_min) == pytest.approx(r0, abs=ERROR)
        assert arc.get_radius(arc.t_max) == pytest.approx(r1, abs=ERROR)
        assert arc.invert_y == invert_y
        assert arc.a == pytest.approx(a, abs=ERROR)

    def test_domain_and_length(self) -> None:
        """Test the parameter is arc length starting at l0."""
        l0, p0, p1, r0, r1 = _build_test_arc(5.0, False, False, PI / 10, 4 * PI / 10)
        arc = ClothoidArc(12.0, p0, p1, r0, r1)

        expected = find_tangent(False, 5.0, 4 * PI / 10) - find_tangent(False, 5.0, PI / 10)
        assert arc.t_min == 12.0
        assert arc.t_max == pytest.approx(12.0 + expected)
        assert arc.total_length == pytest.approx(expected)
        assert arc.get_t(arc.total_length / 2) == pytest.approx(12.0 + expected / 2)

    def test_curvature_is_linear(self) -> None:
        """Test curvature grows linearly with arc length."""
        arc = ClothoidArc.from_canonical(1.0, 6.0, False, 4.0)
        k = [arc.get_curvature(arc.get_t(s)) for s in (0.0, 1.0, 2.0, 5.0)]
        assert k[0] == pytest.approx(1.0 / 16.0)
        assert k[1] - k[0] == pytest.approx(1.0 / 16.0)
        assert k[3] == pytest.approx(6.0 / 16.0)

    def test_from_canonical_placement(self) -> None:
        """Test rotation and translation of canonical data."""
        arc = ClothoidArc.from_canonical(0.0, 3.0, False, 2.0, rotation=PI / 2, translation=(1.0, 1.0))
        assert arc.point0 == pytest.approx((1.0, 1.0))
        assert arc.get_tangent(arc.t_min) == pytest.approx((0.0, 1.0), abs=1e-12)
        assert arc.get_tangent_angle(arc.t_max) == pytest.approx(PI / 2 + 9.0 / 8.0)

    def test_radius_and_curvature_agree(self) -> None:
        """Test the signed radius matches the curvature sign."""
        arc = ClothoidArc.from_canonical(-4.0, -1.0, True, 3.0)
        for s in (0.0, 1.5, 3.0):
            t = arc.get_t(s)
            assert arc.get_curvature(t) == pytest.approx(1.0 / arc.get_radius(t))

    def test_opposite_radii_rejected(self) -> None:
        """Test radii bending opposite ways raise."""
        with pytest.raises(DegenerateGeometryError):
            ClothoidArc(0.0, (0, 0), (10, 0), 20.0, -30.0)

    def test_coincident_points_rejected(self) -> None:
        """Test a zero chord raises."""
        with pytest.raises(DegenerateGeometryError):
            ClothoidArc(0.0, (1, 1), (1, 1), math.inf, 30.0)

    def test_beyond_max_length_rejected(self) -> None:
        """Test canonical lengths past get_max_l raise."""
        with pytest.raises(NumericDomainError):
            ClothoidArc.from_canonical(0.0, 30.0, False, 2.0)
