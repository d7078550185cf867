"""Unit quaternion rotations.

Components are stored as ``[x, y, z, w]`` with ``w`` the scalar part. ``q`` and
``-q`` describe the same rotation; slerp and :meth:`Quat.angle` account for
this, component-wise equality does not.
"""

from __future__ import annotations

import logging
import math
from typing import Self

import numpy as np

from vecmat.base import FloatBuffer
from vecmat.config import CONFIG
from vecmat.protocols import RotationMatrix
from vecmat.quat.kernels import (
    quat_from_euler_numba,
    quat_from_mat_numba,
    quat_inverse_numba,
    quat_multiply_numba,
    quat_normalize_numba,
    quat_rotate_axis_numba,
    quat_rotation_to_numba,
    quat_slerp_numba,
    quat_to_axis_angle_numba,
)
from vecmat.types import ROTATION_ORDERS, RotationOrder
from vecmat.validators import validate_choices, validate_type
from vecmat.vector import Vec3

logger = logging.getLogger(__name__)


@validate_choices(ROTATION_ORDERS, "order", param_index=0)
def _order_code(order: str) -> int:
    return ROTATION_ORDERS.index(order)


class Quat(FloatBuffer):
    """Quaternion stored as ``float32[4]`` in ``(x, y, z, w)`` order.

    Example:
        >>> q = Quat.from_axis_angle(Vec3(0, 0, 1), math.pi / 2)
        >>> Vec3(1, 0, 0).transform_quat(q)
        Vec3(0, 1, 0)
    """

    __slots__ = ()

    SIZE = 4

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 1.0) -> None:
        self.array = np.array((x, y, z, w), dtype=np.float32)

    # Factories

    @classmethod
    def create(cls, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 1.0) -> Quat:
        return cls(x, y, z, w)

    @classmethod
    def identity(cls, dst: Quat | None = None) -> Quat:
        dst = cls._target(dst)
        dst.array[:] = (0.0, 0.0, 0.0, 1.0)
        return dst

    @classmethod
    def from_axis_angle(cls, axis: Vec3, angle: float, dst: Quat | None = None) -> Quat:
        """Rotation of ``angle`` radians about ``axis``.

        The axis must already be unit length; it is not normalized.
        """
        half = angle * 0.5
        s = math.sin(half)
        x, y, z = axis.array.tolist()
        dst = cls._target(dst)
        dst.array[:] = (x * s, y * s, z * s, math.cos(half))
        return dst

    @classmethod
    def from_euler(
        cls,
        x: float,
        y: float,
        z: float,
        order: RotationOrder = "xyz",
        dst: Quat | None = None,
    ) -> Quat:
        """Rotation from Euler angles in radians.

        ``order`` names the product order of the per-axis rotations, so
        ``"xyz"`` is ``qx * qy * qz`` and applies the z rotation first. The
        order is case-insensitive.

        :raises ValueError: If ``order`` is not one of the six axis orders
        """
        code = _order_code(order.lower() if isinstance(order, str) else order)
        dst = cls._target(dst)
        quat_from_euler_numba(x, y, z, code, dst.array)
        return dst

    @classmethod
    @validate_type(RotationMatrix, "m")
    def from_mat(cls, m: RotationMatrix, dst: Quat | None = None) -> Quat:
        """Rotation from the 3x3 linear block of a Mat3 or Mat4.

        The result is only unit length when the block is a pure rotation;
        normalize it when the matrix carries scale.

        :raises TypeError: If ``m`` does not expose a linear block
        """
        dst = cls._target(dst)
        quat_from_mat_numba(m.array, dst.array)
        return dst

    @classmethod
    def rotation_to(cls, a: Vec3, b: Vec3, dst: Quat | None = None) -> Quat:
        """Shortest rotation taking unit vector ``a`` onto unit vector ``b``."""
        tol = CONFIG.tolerance
        dst = cls._target(dst)
        quat_rotation_to_numba(
            a.array,
            b.array,
            tol.rotation_to_parallel.value,
            tol.rotation_to_axis.value,
            dst.array,
        )
        return dst

    @classmethod
    def sqlerp(
        cls, a: Quat, b: Quat, c: Quat, d: Quat, t: float, dst: Quat | None = None
    ) -> Quat:
        """Spherical quadrangle interpolation between ``a`` and ``d`` with control points ``b``, ``c``."""
        outer = a.slerp(d, t)
        inner = b.slerp(c, t)
        return outer.slerp(inner, 2.0 * t * (1.0 - t), dst)

    # Components

    def set(self, x: float, y: float, z: float, w: float) -> Self:
        self.array[:] = (x, y, z, w)
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

    @property
    def z(self) -> float:
        return float(self.array[2])

    @z.setter
    def z(self, value: float) -> None:
        self.array[2] = value

    @property
    def w(self) -> float:
        return float(self.array[3])

    @w.setter
    def w(self, value: float) -> None:
        self.array[3] = value

    # Composition

    def multiply(self, other: Quat, dst: Quat | None = None) -> Quat:
        """Hamilton product ``self * other``: ``other`` is applied first."""
        dst = self._target(dst)
        quat_multiply_numba(self.array, other.array, dst.array)
        return dst

    mul = multiply

    def rotate_x(self, angle: float, dst: Quat | None = None) -> Quat:
        """``self * R_x(angle)``."""
        dst = self._target(dst)
        quat_rotate_axis_numba(self.array, angle, 0, dst.array)
        return dst

    def rotate_y(self, angle: float, dst: Quat | None = None) -> Quat:
        """``self * R_y(angle)``."""
        dst = self._target(dst)
        quat_rotate_axis_numba(self.array, angle, 1, dst.array)
        return dst

    def rotate_z(self, angle: float, dst: Quat | None = None) -> Quat:
        """``self * R_z(angle)``."""
        dst = self._target(dst)
        quat_rotate_axis_numba(self.array, angle, 2, dst.array)
        return dst

    def conjugate(self, dst: Quat | None = None) -> Quat:
        x, y, z, w = self.array.tolist()
        dst = self._target(dst)
        dst.array[:] = (-x, -y, -z, w)
        return dst

    def inverse(self, dst: Quat | None = None) -> Quat:
        """Multiplicative inverse. The zero quaternion yields zero."""
        dst = self._target(dst)
        quat_inverse_numba(self.array, dst.array)
        return dst

    invert = inverse

    def normalize(self, dst: Quat | None = None) -> Quat:
        """Scale to unit length; a length at or below 1e-5 yields the identity."""
        dst = self._target(dst)
        if not quat_normalize_numba(self.array, CONFIG.tolerance.quat_normalize.value, dst.array):
            logger.debug("[Quat] Zero-length quaternion, normalize falls back to identity")
        return dst

    scale = FloatBuffer.mul_scalar

    # Metrics

    def dot(self, other: Quat) -> float:
        return float(np.dot(self.array, other.array))

    @property
    def length_sq(self) -> float:
        return float(np.dot(self.array, self.array))

    @property
    def length(self) -> float:
        return math.sqrt(self.length_sq)

    def angle(self, other: Quat) -> float:
        """Angle in radians between the rotations of two unit quaternions.

        Uses ``acos(2 d^2 - 1)``, which gives the same result for ``other``
        and ``-other``.
        """
        d = max(-1.0, min(1.0, self.dot(other)))
        return math.acos(max(-1.0, min(1.0, 2.0 * d * d - 1.0)))

    def to_axis_angle(self, dst: Vec3 | None = None) -> tuple[float, Vec3]:
        """Split into ``(angle, axis)``.

        Near the identity the axis is undefined and ``(1, 0, 0)`` is returned.
        """
        axis = Vec3._target(dst)
        angle = quat_to_axis_angle_numba(self.array, CONFIG.tolerance.epsilon.value, axis.array)
        return float(angle), axis

    # Interpolation

    def lerp(self, other: Quat, t: float, dst: Quat | None = None) -> Quat:
        """Component-wise linear interpolation; the result is not normalized."""
        dst = self._target(dst)
        delta = other.array - self.array
        delta *= np.float32(t)
        np.add(self.array, delta, out=dst.array)
        return dst

    def slerp(self, other: Quat, t: float, dst: Quat | None = None) -> Quat:
        """Spherical linear interpolation along the shorter arc."""
        dst = self._target(dst)
        quat_slerp_numba(self.array, other.array, t, CONFIG.tolerance.epsilon.value, dst.array)
        return dst

    # Application

    def rotate(self, v: Vec3, dst: Vec3 | None = None) -> Vec3:
        """Rotate ``v`` by this (unit) quaternion."""
        return v.transform_quat(self, dst)

    def __mul__(self, other):
        if isinstance(other, Quat):
            return self.multiply(other)
        if isinstance(other, int | float | np.floating):
            return self.mul_scalar(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, int | float | np.floating):
            return self.mul_scalar(other)
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, Quat):
            return self.multiply(other)
        if isinstance(other, Vec3):
            return self.rotate(other)
        return NotImplemented
