"""Three-component float32 vector."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Self

import numpy as np

from vecmat.vector.common import Vector
from vecmat.vector.kernels import (
    cross3_numba,
    vec3_rotate_about_numba,
    vec3_transform_linear_numba,
    vec3_transform_mat4_numba,
    vec3_transform_quat_numba,
)

if TYPE_CHECKING:
    from vecmat.matrix.mat3 import Mat3
    from vecmat.matrix.mat4 import Mat4
    from vecmat.quat.quat import Quat
    from vecmat.vector.vec4 import Vec4


class Vec3(Vector):
    """3D vector stored as ``float32[3]``."""

    __slots__ = ()

    SIZE = 3

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.array = np.array((x, y, z), dtype=np.float32)

    @classmethod
    def create(cls, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vec3:
        return cls(x, y, z)

    @classmethod
    def random(
        cls, scale: float = 1.0, rng: np.random.Generator | None = None, dst: Vec3 | None = None
    ) -> Vec3:
        """Random point on the sphere of radius ``scale``.

        :param scale: Sphere radius
        :param rng: Random generator (default: a fresh ``numpy.random.default_rng()``)
        :param dst: Optional destination
        """
        rng = np.random.default_rng() if rng is None else rng
        angle = rng.random() * 2.0 * math.pi
        z = rng.random() * 2.0 - 1.0
        z_scale = math.sqrt(1.0 - z * z) * scale
        dst = cls._target(dst)
        dst.array[0] = math.cos(angle) * z_scale
        dst.array[1] = math.sin(angle) * z_scale
        dst.array[2] = z * scale
        return dst

    @classmethod
    def from_homogeneous(cls, v: Vec4, dst: Vec3 | None = None) -> Vec3:
        """Project a homogeneous point back to 3D by dividing by ``w``."""
        x, y, z, w = v.array.tolist()
        dst = cls._target(dst)
        with np.errstate(divide="ignore", invalid="ignore"):
            dst.array[:] = np.array((x, y, z), dtype=np.float32) / np.float32(w)
        return dst

    def set(self, x: float, y: float, z: float) -> Self:
        self.array[0] = x
        self.array[1] = y
        self.array[2] = z
        return self

    @property
    def z(self) -> float:
        return float(self.array[2])

    @z.setter
    def z(self, value: float) -> None:
        self.array[2] = value

    def cross(self, other: Vec3, dst: Vec3 | None = None) -> Vec3:
        dst = self._target(dst)
        cross3_numba(self.array, other.array, dst.array)
        return dst

    # Transforms

    def transform_mat4(self, m: Mat4, dst: Vec3 | None = None) -> Vec3:
        """Transform as a point (w=1) and divide by the resulting w.

        A resulting w of zero is treated as 1.
        """
        dst = self._target(dst)
        vec3_transform_mat4_numba(self.array, m.array, dst.array)
        return dst

    def transform_mat4_upper3x3(self, m: Mat4, dst: Vec3 | None = None) -> Vec3:
        """Transform as a direction: the translation column is ignored."""
        dst = self._target(dst)
        vec3_transform_linear_numba(self.array, m.array, dst.array)
        return dst

    def transform_mat3(self, m: Mat3, dst: Vec3 | None = None) -> Vec3:
        """Multiply by a Mat3 used as a 3D linear transform."""
        dst = self._target(dst)
        vec3_transform_linear_numba(self.array, m.array, dst.array)
        return dst

    def transform_quat(self, q: Quat, dst: Vec3 | None = None) -> Vec3:
        """Rotate by a unit quaternion."""
        dst = self._target(dst)
        vec3_transform_quat_numba(self.array, q.array, dst.array)
        return dst

    def rotate_x(self, origin: Vec3, angle: float, dst: Vec3 | None = None) -> Vec3:
        """Rotate around the x axis passing through ``origin``."""
        dst = self._target(dst)
        vec3_rotate_about_numba(self.array, origin.array, angle, 0, dst.array)
        return dst

    def rotate_y(self, origin: Vec3, angle: float, dst: Vec3 | None = None) -> Vec3:
        """Rotate around the y axis passing through ``origin``."""
        dst = self._target(dst)
        vec3_rotate_about_numba(self.array, origin.array, angle, 1, dst.array)
        return dst

    def rotate_z(self, origin: Vec3, angle: float, dst: Vec3 | None = None) -> Vec3:
        """Rotate around the z axis passing through ``origin``."""
        dst = self._target(dst)
        vec3_rotate_about_numba(self.array, origin.array, angle, 2, dst.array)
        return dst
