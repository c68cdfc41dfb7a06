"""Unit tests for vector helpers."""

import math

import numpy as np
import pytest

from easycurves.core.vectors import (
    TWO_PI,
    angle_to,
    as_array,
    cross,
    distance,
    dot,
    ensure_0_to_2pi,
    epsilon_equals,
    perp_left,
    rotation_matrix,
    to_point,
    unit_vector,
)


class TestVectorHelpers:
    """Test basic vector arithmetic."""

    def test_conversions(self):
        """Test array and tuple conversions."""
        arr = as_array((1, 2))
        assert arr.dtype == float
        assert to_point(arr) == (1.0, 2.0)
        with pytest.raises(ValueError):
            as_array((1.0, 2.0, 3.0))

    def test_products(self):
        """Test cross and dot products."""
        assert cross((1, 0), (0, 1)) == 1.0
        assert cross((0, 1), (1, 0)) == -1.0
        assert dot((1, 2), (3, 4)) == 11.0
        assert distance((0, 0), (3, 4)) == pytest.approx(5.0)

    def test_rotation(self):
        """Test perpendicular and rotation matrix agree."""
        v = (2.0, 1.0)
        rotated = rotation_matrix(math.pi / 2) @ np.array(v)
        assert to_point(rotated) == pytest.approx(perp_left(v))
        assert unit_vector(math.pi) == pytest.approx((-1.0, 0.0))

    def test_angle_to(self):
        """Test signed angle between vectors."""
        assert angle_to((1, 0), (0, 1)) == pytest.approx(math.pi / 2)
        assert angle_to((1, 0), (0, -1)) == pytest.approx(-math.pi / 2)
        assert angle_to((1, 0), (-1, 0)) == pytest.approx(math.pi)


class TestAngles:
    """Test angle normalization."""

    @pytest.mark.parametrize(
        "angle,expected",
        [(0.0, 0.0), (-math.pi / 2, 3 * math.pi / 2), (5 * math.pi / 2, math.pi / 2), (TWO_PI, 0.0)],
    )
    def test_ensure_0_to_2pi(self, angle, expected):
        """Test wrapping into [0, 2*pi)."""
        assert ensure_0_to_2pi(angle) == pytest.approx(expected)

    def test_tiny_negative_angle(self):
        """Test rounding never returns 2*pi."""
        wrapped = ensure_0_to_2pi(-1e-20)
        assert 0.0 <= wrapped < TWO_PI


class TestEpsilonEquals:
    """Test tolerance comparisons."""

    def test_scalars(self):
        """Test scalar comparisons with default and custom tolerance."""
        assert epsilon_equals(1.0, 1.0 + 1e-12)
        assert not epsilon_equals(1.0, 1.001)
        assert epsilon_equals(1.0, 1.001, tolerance=0.01)

    def test_infinities(self):
        """Test infinities only equal themselves."""
        assert epsilon_equals(math.inf, math.inf)
        assert not epsilon_equals(math.inf, -math.inf)
        assert not epsilon_equals(math.inf, 1e30)

    def test_points(self):
        """Test component-wise point comparison."""
        assert epsilon_equals((1.0, 2.0), (1.0, 2.0 + 1e-12))
        assert not epsilon_equals((1.0, 2.0), (1.0, 2.1))
