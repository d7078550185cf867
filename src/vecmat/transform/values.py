"""Translation / rotation / scale values with matrix composition support."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from vecmat.config import EPSILON
from vecmat.matrix import Mat3, Mat4
from vecmat.quat import Quat
from vecmat.types import RotationOrder, Vector3Like
from vecmat.vector import Vec3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformValues:
    """Affine transform split into translation, rotation and per-axis scale.

    The matrix form is ``T * R * S``: points are scaled, then rotated, then
    translated.

    Convention: ``a + b`` applies ``a`` FIRST, then ``b``.

    Example:
        >>> move = TransformValues.from_translation(1, 0, 0)
        >>> turn = TransformValues.from_rotation_axis_angle((0, 0, 1), math.pi / 2)
        >>> combined = move + turn  # move, then turn about the origin
        >>> combined.translation  # approximately (0, 1, 0)
    """

    translation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)  # xyzw
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)

    def to_mat4(self, dst: Mat4 | None = None) -> Mat4:
        """Build the ``T * R * S`` matrix.

        :param dst: Optional destination
        :returns: Composed Mat4
        """
        return Mat4.compose(Vec3(*self.translation), Quat(*self.rotation), Vec3(*self.scale), dst)

    @classmethod
    def from_mat4(cls, m: Mat4) -> TransformValues:
        """Decompose an affine Mat4 into translation, rotation and scale.

        Scale is the length of each basis column. A negative determinant is
        folded into the x scale. When a scale component is (near) zero the
        rotation cannot be recovered and the identity rotation is returned.
        Shear is not representable and is lost.

        :param m: Affine matrix (last row ``0, 0, 0, 1``)
        :returns: TransformValues instance
        """
        translation = tuple(m.get_translation().array.tolist())
        sx, sy, sz = m.get_scaling().array.tolist()
        if m.determinant() < 0.0:
            sx = -sx

        if min(abs(sx), abs(sy), abs(sz)) <= EPSILON:
            logger.debug(
                "[TransformValues] Degenerate scale (%g, %g, %g), rotation set to identity", sx, sy, sz
            )
            rotation = (0.0, 0.0, 0.0, 1.0)
        else:
            linear = Mat3.from_mat4(m).scale_3d(Vec3(1.0 / sx, 1.0 / sy, 1.0 / sz))
            q = Quat.from_mat(linear).normalize()
            rotation = tuple(q.array.tolist())

        return cls(translation=translation, rotation=rotation, scale=(sx, sy, sz))

    def __add__(self, other: TransformValues) -> TransformValues:
        """Compose transforms: self applied FIRST, then other.

        Exact when the combined linear part is still rotation times axis scale
        (uniform scales, or scales aligned with the rotation).

        :param other: Transform to apply after self
        :returns: Composed transform
        """
        if not isinstance(other, TransformValues):
            return NotImplemented

        combined = other.to_mat4().multiply(self.to_mat4())
        return TransformValues.from_mat4(combined)

    def __radd__(self, other):
        """Support sum() with initial value 0."""
        if other == 0:
            return self
        return other.__add__(self)

    def is_neutral(self) -> bool:
        """Check if identity transform.

        ``q`` and ``-q`` are the same rotation, so a rotation of
        ``(0, 0, 0, -1)`` is also neutral.

        :returns: True if this is the identity transform
        """
        rot = np.asarray(self.rotation, dtype=np.float32)
        return (
            np.allclose(self.translation, 0.0)
            and np.allclose(np.abs(rot), (0.0, 0.0, 0.0, 1.0))
            and np.allclose(self.scale, 1.0)
        )

    # Factory methods

    @classmethod
    def from_translation(cls, x: float, y: float, z: float) -> TransformValues:
        """Create translation transform.

        :param x: X translation
        :param y: Y translation
        :param z: Z translation
        :returns: TransformValues with only translation set
        """
        return cls(translation=(x, y, z))

    @classmethod
    def from_scale(cls, x: float, y: float | None = None, z: float | None = None) -> TransformValues:
        """Create scale transform; a single factor scales uniformly.

        :param x: X scale, or the uniform factor when y and z are omitted
        :param y: Y scale
        :param z: Z scale
        :returns: TransformValues with only scale set
        """
        y = x if y is None else y
        z = x if z is None else z
        return cls(scale=(x, y, z))

    @classmethod
    def from_rotation_axis_angle(cls, axis: Vector3Like, angle: float) -> TransformValues:
        """Create rotation transform from axis-angle.

        :param axis: Rotation axis [x, y, z], normalized here; a zero axis gives no rotation
        :param angle: Rotation angle in radians
        :returns: TransformValues with only rotation set
        """
        unit = Vec3(*axis).normalize()
        if unit.is_zero():
            return cls()
        q = Quat.from_axis_angle(unit, angle)
        return cls(rotation=tuple(q.array.tolist()))

    @classmethod
    def from_rotation_euler(
        cls, x: float, y: float, z: float, order: RotationOrder = "xyz"
    ) -> TransformValues:
        """Create rotation transform from Euler angles.

        :param x: X rotation in radians
        :param y: Y rotation in radians
        :param z: Z rotation in radians
        :param order: Axis order, see :meth:`vecmat.Quat.from_euler`
        :returns: TransformValues with only rotation set
        """
        q = Quat.from_euler(x, y, z, order)
        return cls(rotation=tuple(q.array.tolist()))
