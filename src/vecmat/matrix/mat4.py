"""4x4 float32 matrix for 3D affine and projective transforms."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from vecmat.config import CONFIG
from vecmat.matrix.camera import (
    build_aim,
    build_camera_aim,
    build_frustum,
    build_frustum_reverse_z,
    build_look_at,
    build_ortho,
    build_perspective,
    build_perspective_reverse_z,
)
from vecmat.matrix.common import Matrix
from vecmat.matrix.kernels import (
    axis_rotation_numba,
    mat4_compose_numba,
    mat4_determinant_numba,
    mat4_inverse_numba,
    mat4_multiply_numba,
    mat4_pre_translate_numba,
    mat4_translate_numba,
    mat4_transpose_numba,
    post_rotate_axis_numba,
    post_rotate_numba,
    pre_rotate_axis_numba,
    pre_rotate_numba,
    quat_to_linear_numba,
)
from vecmat.validators import check_length, validate_range
from vecmat.vector import Vec3, Vec4

if TYPE_CHECKING:
    from vecmat.matrix.mat3 import Mat3
    from vecmat.quat.quat import Quat
    from vecmat.transform.values import TransformValues

logger = logging.getLogger(__name__)


class Mat4(Matrix):
    """4x4 matrix stored column-major in ``float32[16]``.

    Columns 0-2 hold the linear part and column 3 holds the translation, so
    ``m[12], m[13], m[14]`` are tx, ty, tz.

    Example:
        >>> m = Mat4.translation(Vec3(1, 2, 3)).rotate_y(math.pi / 2)
        >>> Vec3(1, 0, 0).transform_mat4(m)
        Vec3(1, 2, 2)
    """

    __slots__ = ()

    SIZE = 16
    DIM = 4

    def __init__(self, *values: float) -> None:
        self.array = np.zeros(16, dtype=np.float32)
        if values:
            check_length(values, 16, "values")
            self.array[:] = values

    # Factories

    @classmethod
    def create(cls, *values: float) -> Mat4:
        return cls(*values)

    @classmethod
    def row_major(cls, *values: float) -> Mat4:
        """Create a matrix from 16 values listed row by row.

        :raises ValueError: If a number of values other than 16 is given
        """
        check_length(values, 16, "values")
        return cls._from_rows(values)

    @classmethod
    def identity(cls, dst: Mat4 | None = None) -> Mat4:
        dst = cls._target(dst)
        dst.array[:] = 0.0
        dst.array[0] = dst.array[5] = dst.array[10] = dst.array[15] = 1.0
        return dst

    def set_identity(self) -> Mat4:
        return Mat4.identity(self)

    @classmethod
    def from_mat3(cls, m3: Mat3, dst: Mat4 | None = None) -> Mat4:
        """Embed a 3D linear Mat3 in the upper-left block with no translation."""
        linear = m3.array[:12].copy()
        dst = cls._target(dst)
        dst.array[:12] = linear
        dst.array[[3, 7, 11]] = 0.0
        dst.array[12:15] = 0.0
        dst.array[15] = 1.0
        return dst

    @classmethod
    def from_quat(cls, q: Quat, dst: Mat4 | None = None) -> Mat4:
        dst = cls._target(dst)
        quat_to_linear_numba(q.array, dst.array)
        dst.array[12:15] = 0.0
        dst.array[15] = 1.0
        return dst

    @classmethod
    def translation(cls, v: Vec3, dst: Mat4 | None = None) -> Mat4:
        x, y, z = v.array.tolist()
        dst = cls.identity(dst)
        dst.array[12:15] = (x, y, z)
        return dst

    @classmethod
    def rotation_x(cls, angle: float, dst: Mat4 | None = None) -> Mat4:
        dst = cls.identity(dst)
        post_rotate_numba(dst.array, angle, 0, dst.array)
        return dst

    @classmethod
    def rotation_y(cls, angle: float, dst: Mat4 | None = None) -> Mat4:
        dst = cls.identity(dst)
        post_rotate_numba(dst.array, angle, 1, dst.array)
        return dst

    @classmethod
    def rotation_z(cls, angle: float, dst: Mat4 | None = None) -> Mat4:
        dst = cls.identity(dst)
        post_rotate_numba(dst.array, angle, 2, dst.array)
        return dst

    @classmethod
    def axis_rotation(cls, axis: Vec3, angle: float, dst: Mat4 | None = None) -> Mat4:
        """Rotation of ``angle`` radians about ``axis`` (normalized internally).

        An axis shorter than ``EPSILON`` gives the identity matrix.
        """
        x, y, z = axis.array.tolist()
        dst = cls.identity(dst)
        if not axis_rotation_numba(x, y, z, angle, CONFIG.tolerance.epsilon.value, dst.array):
            logger.debug("[Mat4] Zero-length rotation axis, using identity")
        return dst

    rotation = axis_rotation

    @classmethod
    def scaling(cls, v: Vec3, dst: Mat4 | None = None) -> Mat4:
        x, y, z = v.array.tolist()
        dst = cls.identity(dst)
        dst.array[0] = x
        dst.array[5] = y
        dst.array[10] = z
        return dst

    @classmethod
    def uniform_scaling(cls, s: float, dst: Mat4 | None = None) -> Mat4:
        dst = cls.identity(dst)
        dst.array[0] = dst.array[5] = dst.array[10] = s
        return dst

    @classmethod
    def compose(cls, translation: Vec3, rotation: Quat, scale: Vec3, dst: Mat4 | None = None) -> Mat4:
        """Build ``T(translation) * R(rotation) * S(scale)`` in a single pass.

        Points are scaled first, then rotated, then translated.

        :param translation: Translation vector
        :param rotation: Unit quaternion
        :param scale: Per-axis scale
        :param dst: Optional destination
        """
        t = translation.array.copy()
        q = rotation.array.copy()
        s = scale.array.copy()
        dst = cls._target(dst)
        mat4_compose_numba(t, q, s, dst.array)
        return dst

    # Projections

    @classmethod
    def perspective(
        cls, fovy: float, aspect: float, near: float, far: float, dst: Mat4 | None = None
    ) -> Mat4:
        """Perspective projection mapping view depth to ``[0, 1]``.

        :param fovy: Vertical field of view in radians
        :param aspect: Viewport width / height
        :param near: Near plane distance (> 0)
        :param far: Far plane distance, or ``math.inf`` for an infinite far plane
        """
        dst = cls._target(dst)
        build_perspective(dst.array, fovy, aspect, near, far)
        return dst

    @classmethod
    def perspective_reverse_z(
        cls,
        fovy: float,
        aspect: float,
        near: float,
        far: float = math.inf,
        dst: Mat4 | None = None,
    ) -> Mat4:
        """Perspective projection mapping near to depth 1 and far to depth 0."""
        dst = cls._target(dst)
        build_perspective_reverse_z(dst.array, fovy, aspect, near, far)
        return dst

    @classmethod
    def ortho(
        cls,
        left: float,
        right: float,
        bottom: float,
        top: float,
        near: float,
        far: float,
        dst: Mat4 | None = None,
    ) -> Mat4:
        dst = cls._target(dst)
        build_ortho(dst.array, left, right, bottom, top, near, far)
        return dst

    orthographic = ortho

    @classmethod
    def frustum(
        cls,
        left: float,
        right: float,
        bottom: float,
        top: float,
        near: float,
        far: float,
        dst: Mat4 | None = None,
    ) -> Mat4:
        dst = cls._target(dst)
        build_frustum(dst.array, left, right, bottom, top, near, far)
        return dst

    @classmethod
    def frustum_reverse_z(
        cls,
        left: float,
        right: float,
        bottom: float,
        top: float,
        near: float,
        far: float = math.inf,
        dst: Mat4 | None = None,
    ) -> Mat4:
        dst = cls._target(dst)
        build_frustum_reverse_z(dst.array, left, right, bottom, top, near, far)
        return dst

    # Camera matrices

    @classmethod
    def look_at(cls, eye: Vec3, target: Vec3, up: Vec3, dst: Mat4 | None = None) -> Mat4:
        """View matrix for a camera at ``eye`` looking at ``target``."""
        dst = cls._target(dst)
        build_look_at(dst.array, eye.array, target.array, up.array)
        return dst

    @classmethod
    def camera_aim(cls, eye: Vec3, target: Vec3, up: Vec3, dst: Mat4 | None = None) -> Mat4:
        """World matrix of a camera at ``eye`` looking at ``target`` (inverse of look_at)."""
        dst = cls._target(dst)
        build_camera_aim(dst.array, eye.array, target.array, up.array)
        return dst

    @classmethod
    def aim(cls, position: Vec3, target: Vec3, up: Vec3, dst: Mat4 | None = None) -> Mat4:
        """World matrix of an object at ``position`` whose +z axis points at ``target``."""
        dst = cls._target(dst)
        build_aim(dst.array, position.array, target.array, up.array)
        return dst

    # Algebra

    def determinant(self) -> float:
        return float(mat4_determinant_numba(self.array))

    def inverse(self, dst: Mat4 | None = None) -> Mat4:
        """General 4x4 inverse.

        A singular matrix yields the **identity matrix** rather than raising
        or producing huge entries. The test is relative: ``|det|`` at or below
        ``CONFIG.tolerance.singular`` times the product of the column lengths.
        """
        dst = self._target(dst)
        if not mat4_inverse_numba(self.array, CONFIG.tolerance.singular.value, dst.array):
            logger.debug("[Mat4] Singular matrix, inverse falls back to identity")
        return dst

    invert = inverse

    def transpose(self, dst: Mat4 | None = None) -> Mat4:
        dst = self._target(dst)
        mat4_transpose_numba(self.array, dst.array)
        return dst

    def multiply(self, other: Mat4, dst: Mat4 | None = None) -> Mat4:
        """Matrix product ``self * other``: ``other`` is applied first."""
        dst = self._target(dst)
        mat4_multiply_numba(self.array, other.array, dst.array)
        return dst

    mul = multiply

    def multiply_vector(self, v: Vec4, dst: Vec4 | None = None) -> Vec4:
        """Homogeneous product ``self * v``."""
        return v.transform_mat4(self, dst)

    def __matmul__(self, other):
        if isinstance(other, (Vec3, Vec4)):
            return other.transform_mat4(self)
        return super().__matmul__(other)

    # Accessors

    def get_translation(self, dst: Vec3 | None = None) -> Vec3:
        dst = Vec3._target(dst)
        dst.array[:] = self.array[12:15]
        return dst

    def set_translation(self, v: Vec3, dst: Mat4 | None = None) -> Mat4:
        """Copy with the translation column replaced by ``v``."""
        x, y, z = v.array.tolist()
        dst = self.copy(dst)
        dst.array[12:15] = (x, y, z)
        return dst

    @validate_range(0, 2, "axis", integer=True)
    def get_axis(self, axis: int, dst: Vec3 | None = None) -> Vec3:
        """Basis column ``axis`` (0=x, 1=y, 2=z).

        :raises ValueError: If axis is outside ``[0, 2]``
        :raises TypeError: If axis is not an integer
        """
        off = int(axis) * 4
        dst = Vec3._target(dst)
        dst.array[:] = self.array[off : off + 3]
        return dst

    @validate_range(0, 2, "axis", param_index=2, integer=True)
    def set_axis(self, v: Vec3, axis: int, dst: Mat4 | None = None) -> Mat4:
        """Copy with basis column ``axis`` replaced by ``v``.

        :raises ValueError: If axis is outside ``[0, 2]``
        :raises TypeError: If axis is not an integer
        """
        x, y, z = v.array.tolist()
        off = int(axis) * 4
        dst = self.copy(dst)
        dst.array[off : off + 3] = (x, y, z)
        return dst

    def get_scaling(self, dst: Vec3 | None = None) -> Vec3:
        """Lengths of the three basis columns (always non-negative)."""
        cols = self.array.reshape(4, 4)[:3, :3]
        dst = Vec3._target(dst)
        dst.array[:] = np.sqrt(np.sum(cols * cols, axis=1))
        return dst

    def decompose(self) -> TransformValues:
        """Split an affine matrix into translation, rotation and scale.

        See :meth:`vecmat.transform.TransformValues.from_mat4`.
        """
        from vecmat.transform.values import TransformValues

        return TransformValues.from_mat4(self)

    # Post-multiply helpers: self * T

    def translate(self, v: Vec3, dst: Mat4 | None = None) -> Mat4:
        """``self * translation(v)``: translate in local space."""
        x, y, z = v.array.tolist()
        dst = self._target(dst)
        mat4_translate_numba(self.array, x, y, z, dst.array)
        return dst

    def _post_rotate(self, angle: float, axis: int, dst: Mat4 | None) -> Mat4:
        dst = self._target(dst)
        if dst is not self:
            dst.array[12:16] = self.array[12:16]
        post_rotate_numba(self.array, angle, axis, dst.array)
        return dst

    def rotate_x(self, angle: float, dst: Mat4 | None = None) -> Mat4:
        """``self * rotation_x(angle)``."""
        return self._post_rotate(angle, 0, dst)

    def rotate_y(self, angle: float, dst: Mat4 | None = None) -> Mat4:
        """``self * rotation_y(angle)``."""
        return self._post_rotate(angle, 1, dst)

    def rotate_z(self, angle: float, dst: Mat4 | None = None) -> Mat4:
        """``self * rotation_z(angle)``."""
        return self._post_rotate(angle, 2, dst)

    def axis_rotate(self, axis: Vec3, angle: float, dst: Mat4 | None = None) -> Mat4:
        """``self * axis_rotation(axis, angle)``; a zero axis leaves the matrix unchanged."""
        x, y, z = axis.array.tolist()
        dst = self._target(dst)
        if dst is not self:
            dst.array[12:16] = self.array[12:16]
        post_rotate_axis_numba(
            self.array, x, y, z, angle, CONFIG.tolerance.epsilon.value, dst.array
        )
        return dst

    rotate = axis_rotate

    def scale(self, v: Vec3, dst: Mat4 | None = None) -> Mat4:
        """``self * scaling(v)``: scales the basis columns."""
        x, y, z = v.array.tolist()
        factors = np.repeat(np.array((x, y, z, 1.0), dtype=np.float32), 4)
        dst = self._target(dst)
        np.multiply(self.array, factors, out=dst.array)
        return dst

    def uniform_scale(self, s: float, dst: Mat4 | None = None) -> Mat4:
        factors = np.repeat(np.array((s, s, s, 1.0), dtype=np.float32), 4)
        dst = self._target(dst)
        np.multiply(self.array, factors, out=dst.array)
        return dst

    # Pre-multiply helpers: T * self

    def pre_translate(self, v: Vec3, dst: Mat4 | None = None) -> Mat4:
        """``translation(v) * self``: translate in parent space."""
        x, y, z = v.array.tolist()
        dst = self._target(dst)
        mat4_pre_translate_numba(self.array, x, y, z, dst.array)
        return dst

    def pre_rotate_x(self, angle: float, dst: Mat4 | None = None) -> Mat4:
        dst = self._target(dst)
        pre_rotate_numba(self.array, angle, 0, dst.array)
        return dst

    def pre_rotate_y(self, angle: float, dst: Mat4 | None = None) -> Mat4:
        dst = self._target(dst)
        pre_rotate_numba(self.array, angle, 1, dst.array)
        return dst

    def pre_rotate_z(self, angle: float, dst: Mat4 | None = None) -> Mat4:
        dst = self._target(dst)
        pre_rotate_numba(self.array, angle, 2, dst.array)
        return dst

    def pre_rotate(self, axis: Vec3, angle: float, dst: Mat4 | None = None) -> Mat4:
        """``axis_rotation(axis, angle) * self``: rotate in parent space."""
        x, y, z = axis.array.tolist()
        dst = self._target(dst)
        pre_rotate_axis_numba(
            self.array, x, y, z, angle, CONFIG.tolerance.epsilon.value, dst.array
        )
        return dst

    def pre_scale(self, v: Vec3, dst: Mat4 | None = None) -> Mat4:
        """``scaling(v) * self``: scales rows 0-2."""
        x, y, z = v.array.tolist()
        factors = np.tile(np.array((x, y, z, 1.0), dtype=np.float32), 4)
        dst = self._target(dst)
        np.multiply(self.array, factors, out=dst.array)
        return dst

    def pre_uniform_scale(self, s: float, dst: Mat4 | None = None) -> Mat4:
        factors = np.tile(np.array((s, s, s, 1.0), dtype=np.float32), 4)
        dst = self._target(dst)
        np.multiply(self.array, factors, out=dst.array)
        return dst
