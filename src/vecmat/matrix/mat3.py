"""3x3 float32 matrix for 2D affine and 3D linear transforms.

A Mat3 is stored as 12 floats: three columns of four slots, with the fourth
slot of each column (indices 3, 7 and 11) unused and kept at zero so the
column stride matches Mat4.

The same type carries two meanings, chosen by the factory that built it:

- **2D affine**: the first two columns hold the linear part and column 2
  holds the translation ``(tx, ty, 1)`` (``translation``, ``rotation``,
  ``scaling``, ``from_mat4_2d``).
- **3D linear**: all three columns are a rotation/scale with no translation
  (``rotation_x/y/z``, ``scaling_3d``, ``from_quat``, ``from_mat4``).

Callers are responsible for tracking which meaning applies.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from vecmat.config import CONFIG
from vecmat.matrix.common import Matrix
from vecmat.matrix.kernels import (
    mat3_determinant_numba,
    mat3_inverse_numba,
    mat3_multiply_numba,
    mat3_pre_translate_numba,
    mat3_transpose_numba,
    mat3_translate_numba,
    post_rotate_axis_numba,
    post_rotate_numba,
    pre_rotate_numba,
    quat_to_linear_numba,
)
from vecmat.validators import check_length, validate_range
from vecmat.vector import Vec2, Vec3

if TYPE_CHECKING:
    from vecmat.matrix.mat4 import Mat4
    from vecmat.quat.quat import Quat

logger = logging.getLogger(__name__)

_PADDING = [3, 7, 11]


class Mat3(Matrix):
    """3x3 matrix stored column-major in ``float32[12]``."""

    __slots__ = ()

    SIZE = 12
    DIM = 3

    def __init__(self, *values: float) -> None:
        """Create a matrix from nine column-major values (all zero if omitted).

        :raises ValueError: If a number of values other than 0 or 9 is given
        """
        self.array = np.zeros(12, dtype=np.float32)
        if values:
            check_length(values, 9, "values")
            self.array.reshape(3, 4)[:, :3] = np.asarray(values, dtype=np.float32).reshape(3, 3)

    # Factories

    @classmethod
    def create(cls, *values: float) -> Mat3:
        return cls(*values)

    @classmethod
    def row_major(cls, *values: float) -> Mat3:
        """Create a matrix from nine values listed row by row.

        :raises ValueError: If a number of values other than 9 is given
        """
        check_length(values, 9, "values")
        return cls._from_rows(values)

    @classmethod
    def from_float_array(cls, values, dst: Mat3 | None = None) -> Mat3:
        """Create a matrix from 12 floats in padded storage order.

        Whatever the input holds in slots 3, 7 and 11 is replaced by zero.

        :raises ValueError: If values is not 1-D or does not hold 12 floats
        """
        dst = super().from_float_array(values, dst)
        dst.array[_PADDING] = 0.0
        return dst

    def __setitem__(self, index, value: float) -> None:
        super().__setitem__(index, value)
        if self.array[_PADDING].any():
            self.array[_PADDING] = 0.0
            raise IndexError("Mat3 padding slots 3, 7 and 11 cannot be written")

    @classmethod
    def identity(cls, dst: Mat3 | None = None) -> Mat3:
        dst = cls._target(dst)
        dst.array[:] = 0.0
        dst.array[0] = dst.array[5] = dst.array[10] = 1.0
        return dst

    def set_identity(self) -> Mat3:
        return Mat3.identity(self)

    @classmethod
    def from_mat4(cls, m4: Mat4, dst: Mat3 | None = None) -> Mat3:
        """Copy the upper-left 3x3 linear block of ``m4``.

        The Mat4 translation is dropped. Use :meth:`from_mat4_2d` to keep the
        xy translation as a 2D affine transform.
        """
        src = m4.array
        dst = cls._target(dst)
        dst.array[:] = src[:12]
        dst.array[_PADDING] = 0.0
        return dst

    @classmethod
    def from_mat4_2d(cls, m4: Mat4, dst: Mat3 | None = None) -> Mat3:
        """Embed the xy part of ``m4`` as a 2D affine Mat3.

        Keeps the 2x2 xy linear block and moves the xy translation
        (``m4[12]``, ``m4[13]``) into column 2; everything involving z is
        discarded.
        """
        a = m4.array
        m00, m01, m10, m11, tx, ty = a[0], a[1], a[4], a[5], a[12], a[13]
        dst = cls._target(dst)
        dst.array[:] = 0.0
        dst.array[0] = m00
        dst.array[1] = m01
        dst.array[4] = m10
        dst.array[5] = m11
        dst.array[8] = tx
        dst.array[9] = ty
        dst.array[10] = 1.0
        return dst

    @classmethod
    def from_quat(cls, q: Quat, dst: Mat3 | None = None) -> Mat3:
        """3D rotation matrix of a unit quaternion."""
        dst = cls._target(dst)
        quat_to_linear_numba(q.array, dst.array)
        return dst

    @classmethod
    def translation(cls, v: Vec2, dst: Mat3 | None = None) -> Mat3:
        """2D translation by ``v``."""
        dst = cls.identity(dst)
        dst.array[8] = v.array[0]
        dst.array[9] = v.array[1]
        return dst

    @classmethod
    def rotation(cls, angle: float, dst: Mat3 | None = None) -> Mat3:
        """2D counter-clockwise rotation by ``angle`` radians."""
        return cls.rotation_z(angle, dst)

    @classmethod
    def rotation_x(cls, angle: float, dst: Mat3 | None = None) -> Mat3:
        dst = cls.identity(dst)
        post_rotate_numba(dst.array, angle, 0, dst.array)
        return dst

    @classmethod
    def rotation_y(cls, angle: float, dst: Mat3 | None = None) -> Mat3:
        dst = cls.identity(dst)
        post_rotate_numba(dst.array, angle, 1, dst.array)
        return dst

    @classmethod
    def rotation_z(cls, angle: float, dst: Mat3 | None = None) -> Mat3:
        dst = cls.identity(dst)
        post_rotate_numba(dst.array, angle, 2, dst.array)
        return dst

    @classmethod
    def scaling(cls, v: Vec2, dst: Mat3 | None = None) -> Mat3:
        """2D scaling by ``v``."""
        dst = cls.identity(dst)
        dst.array[0] = v.array[0]
        dst.array[5] = v.array[1]
        return dst

    @classmethod
    def scaling_3d(cls, v: Vec3, dst: Mat3 | None = None) -> Mat3:
        """3D linear scaling by ``v``."""
        dst = cls.identity(dst)
        dst.array[0] = v.array[0]
        dst.array[5] = v.array[1]
        dst.array[10] = v.array[2]
        return dst

    @classmethod
    def uniform_scaling(cls, s: float, dst: Mat3 | None = None) -> Mat3:
        dst = cls.identity(dst)
        dst.array[0] = dst.array[5] = s
        return dst

    @classmethod
    def uniform_scaling_3d(cls, s: float, dst: Mat3 | None = None) -> Mat3:
        dst = cls.identity(dst)
        dst.array[0] = dst.array[5] = dst.array[10] = s
        return dst

    # Algebra

    def mul_scalar(self, k: float, dst: Mat3 | None = None) -> Mat3:
        dst = super().mul_scalar(k, dst)
        dst.array[_PADDING] = 0.0
        return dst

    multiply_scalar = mul_scalar

    def div_scalar(self, k: float, dst: Mat3 | None = None) -> Mat3:
        dst = super().div_scalar(k, dst)
        dst.array[_PADDING] = 0.0
        return dst

    def determinant(self) -> float:
        return float(mat3_determinant_numba(self.array))

    def inverse(self, dst: Mat3 | None = None) -> Mat3:
        """Inverse via the adjugate.

        A singular matrix yields the **identity matrix**. Singular means
        ``|det|`` is at most ``CONFIG.tolerance.singular`` times the product of
        the column lengths, which also catches proportional columns whose
        float32 determinant is tiny but not exactly zero. This is a
        non-failure fallback, not a mathematical inverse; check
        :meth:`determinant` first when the distinction matters.
        """
        dst = self._target(dst)
        if not mat3_inverse_numba(self.array, CONFIG.tolerance.singular.value, dst.array):
            logger.debug("[Mat3] Singular matrix, inverse falls back to identity")
        return dst

    invert = inverse

    def transpose(self, dst: Mat3 | None = None) -> Mat3:
        dst = self._target(dst)
        mat3_transpose_numba(self.array, dst.array)
        return dst

    def multiply(self, other: Mat3, dst: Mat3 | None = None) -> Mat3:
        """Matrix product ``self * other``: ``other`` is applied first."""
        dst = self._target(dst)
        mat3_multiply_numba(self.array, other.array, dst.array)
        return dst

    mul = multiply

    def __matmul__(self, other):
        if isinstance(other, Vec3):
            return other.transform_mat3(self)
        if isinstance(other, Vec2):
            return other.transform_mat3(self)
        return super().__matmul__(other)

    # Accessors

    def get_translation(self, dst: Vec2 | None = None) -> Vec2:
        dst = Vec2._target(dst)
        dst.array[:] = self.array[8:10]
        return dst

    def set_translation(self, v: Vec2, dst: Mat3 | None = None) -> Mat3:
        """Copy with the 2D translation column replaced by ``(v.x, v.y, 1)``."""
        x, y = v.array.tolist()
        dst = self.copy(dst)
        dst.array[8] = x
        dst.array[9] = y
        dst.array[10] = 1.0
        return dst

    @validate_range(0, 1, "axis", integer=True)
    def get_axis(self, axis: int, dst: Vec2 | None = None) -> Vec2:
        """Column ``axis`` (0=x, 1=y) of the 2D linear part.

        :raises ValueError: If axis is not 0 or 1
        :raises TypeError: If axis is not an integer
        """
        off = int(axis) * 4
        dst = Vec2._target(dst)
        dst.array[:] = self.array[off : off + 2]
        return dst

    @validate_range(0, 1, "axis", param_index=2, integer=True)
    def set_axis(self, v: Vec2, axis: int, dst: Mat3 | None = None) -> Mat3:
        """Copy with column ``axis`` (0=x, 1=y) of the 2D linear part replaced by ``v``.

        :raises ValueError: If axis is not 0 or 1
        :raises TypeError: If axis is not an integer
        """
        x, y = v.array.tolist()
        off = int(axis) * 4
        dst = self.copy(dst)
        dst.array[off] = x
        dst.array[off + 1] = y
        return dst

    def get_scaling(self, dst: Vec2 | None = None) -> Vec2:
        """Lengths of the two 2D basis columns.

        Always non-negative: the sign of a mirrored axis cannot be recovered.
        """
        cols = self.array.reshape(3, 4)[:2, :2]
        dst = Vec2._target(dst)
        dst.array[:] = np.sqrt(np.sum(cols * cols, axis=1))
        return dst

    def get_3d_scaling(self, dst: Vec3 | None = None) -> Vec3:
        """Lengths of the three 3D basis columns (non-negative)."""
        cols = self.array.reshape(3, 4)[:, :3]
        dst = Vec3._target(dst)
        dst.array[:] = np.sqrt(np.sum(cols * cols, axis=1))
        return dst

    # Post-multiply helpers: self * T

    def translate(self, v: Vec2, dst: Mat3 | None = None) -> Mat3:
        """``self * translation(v)``: translate in local space."""
        x, y = v.array.tolist()
        dst = self._target(dst)
        mat3_translate_numba(self.array, x, y, dst.array)
        return dst

    def rotate(self, angle: float, dst: Mat3 | None = None) -> Mat3:
        """``self * rotation(angle)``: 2D rotation in local space."""
        return self.rotate_z(angle, dst)

    def rotate_x(self, angle: float, dst: Mat3 | None = None) -> Mat3:
        dst = self._target(dst)
        post_rotate_numba(self.array, angle, 0, dst.array)
        return dst

    def rotate_y(self, angle: float, dst: Mat3 | None = None) -> Mat3:
        dst = self._target(dst)
        post_rotate_numba(self.array, angle, 1, dst.array)
        return dst

    def rotate_z(self, angle: float, dst: Mat3 | None = None) -> Mat3:
        dst = self._target(dst)
        post_rotate_numba(self.array, angle, 2, dst.array)
        return dst

    def axis_rotate(self, axis: Vec3, angle: float, dst: Mat3 | None = None) -> Mat3:
        """``self * R(axis, angle)`` for the 3D linear meaning."""
        x, y, z = axis.array.tolist()
        dst = self._target(dst)
        post_rotate_axis_numba(
            self.array, x, y, z, angle, CONFIG.tolerance.epsilon.value, dst.array
        )
        return dst

    def scale(self, v: Vec2, dst: Mat3 | None = None) -> Mat3:
        """``self * scaling(v)``."""
        x, y = v.array.tolist()
        factors = np.array((x, x, x, 0.0, y, y, y, 0.0, 1.0, 1.0, 1.0, 0.0), dtype=np.float32)
        dst = self._target(dst)
        np.multiply(self.array, factors, out=dst.array)
        return dst

    def scale_3d(self, v: Vec3, dst: Mat3 | None = None) -> Mat3:
        """``self * scaling_3d(v)``."""
        x, y, z = v.array.tolist()
        factors = np.array((x, x, x, 0.0, y, y, y, 0.0, z, z, z, 0.0), dtype=np.float32)
        dst = self._target(dst)
        np.multiply(self.array, factors, out=dst.array)
        return dst

    def uniform_scale(self, s: float, dst: Mat3 | None = None) -> Mat3:
        """``self * uniform_scaling(s)``: scales the 2D linear columns."""
        factors = np.array((s, s, s, 0.0, s, s, s, 0.0, 1.0, 1.0, 1.0, 0.0), dtype=np.float32)
        dst = self._target(dst)
        np.multiply(self.array, factors, out=dst.array)
        return dst

    def uniform_scale_3d(self, s: float, dst: Mat3 | None = None) -> Mat3:
        """``self * uniform_scaling_3d(s)``: scales all three columns."""
        factors = np.array((s, s, s, 0.0) * 3, dtype=np.float32)
        dst = self._target(dst)
        np.multiply(self.array, factors, out=dst.array)
        return dst

    # Pre-multiply helpers: T * self

    def pre_translate(self, v: Vec2, dst: Mat3 | None = None) -> Mat3:
        """``translation(v) * self``: translate in parent space."""
        x, y = v.array.tolist()
        dst = self._target(dst)
        mat3_pre_translate_numba(self.array, x, y, dst.array)
        return dst

    def pre_rotate(self, angle: float, dst: Mat3 | None = None) -> Mat3:
        """``rotation(angle) * self``: 2D rotation in parent space."""
        dst = self._target(dst)
        pre_rotate_numba(self.array, angle, 2, dst.array)
        return dst

    def pre_scale(self, v: Vec2, dst: Mat3 | None = None) -> Mat3:
        """``scaling(v) * self``: scales rows 0 and 1."""
        x, y = v.array.tolist()
        factors = np.array((x, y, 1.0, 0.0) * 3, dtype=np.float32)
        dst = self._target(dst)
        np.multiply(self.array, factors, out=dst.array)
        return dst

    def pre_uniform_scale(self, s: float, dst: Mat3 | None = None) -> Mat3:
        """``uniform_scaling(s) * self``."""
        factors = np.array((s, s, 1.0, 0.0) * 3, dtype=np.float32)
        dst = self._target(dst)
        np.multiply(self.array, factors, out=dst.array)
        return dst
