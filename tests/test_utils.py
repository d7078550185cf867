"""Tests for scalar helpers."""

import math

import pytest

from vecmat import deg_to_rad, euclidean_modulo, inverse_lerp, lerp, rad_to_deg
from vecmat.utils import format_float


class TestAngles:
    """Test angle conversions."""

    def test_deg_to_rad(self):
        """Test degrees to radians."""
        assert deg_to_rad(180.0) == pytest.approx(math.pi)
        assert deg_to_rad(-90.0) == pytest.approx(-math.pi / 2)

    def test_rad_to_deg(self):
        """Test radians to degrees."""
        assert rad_to_deg(math.pi / 4) == pytest.approx(45.0)


class TestInterpolation:
    """Test lerp and inverse_lerp."""

    def test_lerp(self):
        """Test endpoints and extrapolation."""
        assert lerp(2.0, 6.0, 0.0) == 2.0
        assert lerp(2.0, 6.0, 1.0) == 6.0
        assert lerp(2.0, 6.0, 1.5) == 8.0

    def test_inverse_lerp(self):
        """Test inverse_lerp undoes lerp."""
        assert inverse_lerp(2.0, 6.0, 3.0) == 0.25
        assert inverse_lerp(2.0, 6.0, lerp(2.0, 6.0, 0.7)) == pytest.approx(0.7)

    def test_inverse_lerp_degenerate(self):
        """Test a range shorter than EPSILON returns a."""
        assert inverse_lerp(1.0, 1.0, 2.0) == 1.0
        assert inverse_lerp(3.0, 3.0 + 1e-7, 0.0) == 3.0
        assert math.isfinite(inverse_lerp(-2.0, -2.0, -2.0))

    def test_inverse_lerp_short_range(self):
        """Test a range just above EPSILON still divides."""
        assert inverse_lerp(0.0, 1e-5, 5e-6) == pytest.approx(0.5)


class TestModulo:
    """Test euclidean_modulo."""

    @pytest.mark.parametrize(
        "n,m,expected",
        [(-1, 3, 2), (7, 3, 1), (-7.5, 2.0, 0.5), (4, -3, -2)],
    )
    def test_sign_follows_divisor(self, n, m, expected):
        """Test the result takes the sign of the divisor."""
        assert euclidean_modulo(n, m) == expected


class TestFormatFloat:
    """Test display formatting."""

    @pytest.mark.parametrize(
        "value,text",
        [(1.0, "1"), (0.5, "0.5"), (-0.0, "0"), (1e-9, "0"), (-2.25, "-2.25"), (1 / 3, "0.333333")],
    )
    def test_format(self, value, text):
        """Test trailing zeros are stripped."""
        assert format_float(value) == text
