"""Operations shared by Vec2, Vec3 and Vec4."""

from __future__ import annotations

import math
from typing import Self

import numpy as np

from vecmat.base import FloatBuffer
from vecmat.config import EPSILON


class Vector(FloatBuffer):
    """Fixed-size float32 vector.

    Component-wise operations accept another vector of the same type; the
    ``*`` and ``/`` operators also accept a scalar.
    """

    __slots__ = ()

    @classmethod
    def zero(cls, dst: Self | None = None) -> Self:
        dst = cls._target(dst)
        dst.array[:] = 0.0
        return dst

    def set_zero(self) -> Self:
        self.array[:] = 0.0
        return self

    @property
    def x(self) -> float:
        return float(self.array[0])

    @x.setter
    def x(self, value: float) -> None:
        self.array[0] = value

    @property
    def y(self) -> float:
        return float(self.array[1])

    @y.setter
    def y(self, value: float) -> None:
        self.array[1] = value

    # Component-wise

    def multiply(self, other: Self, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        np.multiply(self.array, other.array, out=dst.array)
        return dst

    mul = multiply

    def divide(self, other: Self, dst: Self | None = None) -> Self:
        """Component-wise division. Zero components follow IEEE-754."""
        dst = self._target(dst)
        with np.errstate(divide="ignore", invalid="ignore"):
            np.divide(self.array, other.array, out=dst.array)
        return dst

    div = divide

    scale = FloatBuffer.mul_scalar

    def add_scaled(self, other: Self, scale: float, dst: Self | None = None) -> Self:
        """Compute ``self + other * scale``."""
        dst = self._target(dst)
        scaled = other.array * np.float32(scale)
        np.add(self.array, scaled, out=dst.array)
        return dst

    def inverse(self, dst: Self | None = None) -> Self:
        """Component-wise reciprocal ``1 / x``."""
        dst = self._target(dst)
        with np.errstate(divide="ignore"):
            np.reciprocal(self.array, out=dst.array)
        return dst

    invert = inverse

    def abs(self, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        np.abs(self.array, out=dst.array)
        return dst

    def ceil(self, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        np.ceil(self.array, out=dst.array)
        return dst

    def floor(self, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        np.floor(self.array, out=dst.array)
        return dst

    def round(self, dst: Self | None = None) -> Self:
        """Round to the nearest integer, ties to even."""
        dst = self._target(dst)
        np.round(self.array, out=dst.array)
        return dst

    def min(self, other: Self, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        np.minimum(self.array, other.array, out=dst.array)
        return dst

    def max(self, other: Self, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        np.maximum(self.array, other.array, out=dst.array)
        return dst

    def clamp(self, min_value: float = 0.0, max_value: float = 1.0, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        np.clip(self.array, min_value, max_value, out=dst.array)
        return dst

    def lerp(self, other: Self, t: float, dst: Self | None = None) -> Self:
        """Linear interpolation ``self + t * (other - self)``."""
        dst = self._target(dst)
        delta = other.array - self.array
        delta *= np.float32(t)
        np.add(self.array, delta, out=dst.array)
        return dst

    def lerp_v(self, other: Self, t: Self, dst: Self | None = None) -> Self:
        """Linear interpolation with a per-component factor vector ``t``."""
        dst = self._target(dst)
        delta = other.array - self.array
        delta *= t.array
        np.add(self.array, delta, out=dst.array)
        return dst

    # Geometry

    def dot(self, other: Self) -> float:
        return float(np.dot(self.array, other.array))

    @property
    def length_sq(self) -> float:
        return float(np.dot(self.array, self.array))

    @property
    def length(self) -> float:
        return math.sqrt(self.length_sq)

    def distance_sq(self, other: Self) -> float:
        d = self.array - other.array
        return float(np.dot(d, d))

    def distance(self, other: Self) -> float:
        return math.sqrt(self.distance_sq(other))

    dist = distance
    dist_sq = distance_sq

    def is_zero(self) -> bool:
        return not bool(np.any(self.array))

    def normalize(self, dst: Self | None = None) -> Self:
        """Scale to unit length.

        A vector whose length is at most ``EPSILON`` normalizes to the zero
        vector instead of producing NaN.
        """
        dst = self._target(dst)
        length = self.length
        if length > EPSILON:
            np.divide(self.array, np.float32(length), out=dst.array)
        else:
            dst.array[:] = 0.0
        return dst

    def set_length(self, length: float, dst: Self | None = None) -> Self:
        """Rescale to ``length`` keeping direction (zero stays zero)."""
        dst = self.normalize(dst)
        dst.array *= np.float32(length)
        return dst

    def truncate(self, max_length: float, dst: Self | None = None) -> Self:
        """Clamp the length to ``max_length``, preserving direction."""
        if self.length > max_length:
            return self.set_length(max_length, dst)
        return self.copy(dst)

    def midpoint(self, other: Self, dst: Self | None = None) -> Self:
        return self.lerp(other, 0.5, dst)

    def angle(self, other: Self) -> float:
        """Angle between two vectors in radians, in ``[0, pi]``.

        When either vector has zero length the cosine is taken as 0, so the
        result is ``pi / 2``.
        """
        mag = self.length * other.length
        cosine = self.dot(other) / mag if mag != 0.0 else 0.0
        return math.acos(max(-1.0, min(1.0, cosine)))

    # Operators

    def __mul__(self, other):
        if isinstance(other, type(self)):
            return self.multiply(other)
        if isinstance(other, int | float | np.floating):
            return self.mul_scalar(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, int | float | np.floating):
            return self.mul_scalar(other)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, type(self)):
            return self.divide(other)
        return self.div_scalar(other)
