"""Two-component float32 vector."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Self

import numpy as np

from vecmat.vector.common import Vector
from vecmat.vector.kernels import (
    vec2_rotate_about_numba,
    vec2_transform_mat3_numba,
    vec2_transform_mat4_numba,
)
from vecmat.vector.vec3 import Vec3

if TYPE_CHECKING:
    from vecmat.matrix.mat3 import Mat3
    from vecmat.matrix.mat4 import Mat4


class Vec2(Vector):
    """2D vector stored as ``float32[2]``."""

    __slots__ = ()

    SIZE = 2

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.array = np.array((x, y), dtype=np.float32)

    @classmethod
    def create(cls, x: float = 0.0, y: float = 0.0) -> Vec2:
        return cls(x, y)

    @classmethod
    def random(
        cls, scale: float = 1.0, rng: np.random.Generator | None = None, dst: Vec2 | None = None
    ) -> Vec2:
        """Random point on the circle of radius ``scale``."""
        rng = np.random.default_rng() if rng is None else rng
        angle = rng.random() * 2.0 * math.pi
        dst = cls._target(dst)
        dst.array[0] = math.cos(angle) * scale
        dst.array[1] = math.sin(angle) * scale
        return dst

    def set(self, x: float, y: float) -> Self:
        self.array[0] = x
        self.array[1] = y
        return self

    def cross(self, other: Vec2, dst: Vec3 | None = None) -> Vec3:
        """2D cross product as the z component of a Vec3 ``(0, 0, z)``."""
        z = float(self.array[0] * other.array[1] - self.array[1] * other.array[0])
        dst = Vec3._target(dst)
        dst.array[0] = 0.0
        dst.array[1] = 0.0
        dst.array[2] = z
        return dst

    def transform_mat3(self, m: Mat3, dst: Vec2 | None = None) -> Vec2:
        """Transform as a 2D point, applying the Mat3 translation."""
        dst = self._target(dst)
        vec2_transform_mat3_numba(self.array, m.array, dst.array)
        return dst

    def transform_mat4(self, m: Mat4, dst: Vec2 | None = None) -> Vec2:
        """Transform as a point on the z=0 plane, applying the Mat4 translation."""
        dst = self._target(dst)
        vec2_transform_mat4_numba(self.array, m.array, dst.array)
        return dst

    def rotate(self, origin: Vec2, angle: float, dst: Vec2 | None = None) -> Vec2:
        """Rotate counter-clockwise around ``origin`` by ``angle`` radians."""
        dst = self._target(dst)
        vec2_rotate_about_numba(self.array, origin.array, angle, dst.array)
        return dst
