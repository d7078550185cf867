"""Scalar helpers shared across the library."""

from __future__ import annotations

import math

from vecmat.config import EPSILON


def deg_to_rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180.0


def rad_to_deg(radians: float) -> float:
    """Convert radians to degrees."""
    return radians * 180.0 / math.pi


def lerp(a: float, b: float, t: float) -> float:
    """Linearly interpolate between ``a`` and ``b``.

    :param a: Start value (returned at t=0)
    :param b: End value (returned at t=1)
    :param t: Interpolation factor, not clamped
    :returns: ``a + (b - a) * t``
    """
    return a + (b - a) * t


def inverse_lerp(a: float, b: float, v: float) -> float:
    """Compute the interpolation factor of ``v`` between ``a`` and ``b``.

    A degenerate range (``|b - a| < EPSILON``) returns ``a`` itself instead
    of dividing by (nearly) zero.

    :param a: Start value
    :param b: End value
    :param v: Value between a and b
    :returns: ``t`` such that ``lerp(a, b, t) == v``
    """
    d = b - a
    if abs(d) < EPSILON:
        return a
    return (v - a) / d


def euclidean_modulo(n: float, m: float) -> float:
    """Modulo whose result takes the sign of the divisor.

    ``euclidean_modulo(-1, 3) == 2``.
    """
    return n % m


def format_float(value: float) -> str:
    """Format a float for display: six decimals, trailing zeros stripped."""
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text
