"""
vecmat - Vector, Matrix and Quaternion Algebra

Fixed-size float32 math types for real-time 3D graphics, backed by NumPy
storage and Numba-compiled kernels.

Features:
- Vec2, Vec3, Vec4, Mat3, Mat4 and Quat value types
- Column-major storage ready for GPU upload (Mat3 padded to 12 floats)
- Optional ``dst=`` destination on every operation; ``dst`` may alias any input
- Projection and camera matrices (perspective, reverse-Z, ortho, frustum, look-at)
- Quaternion slerp along the shorter arc, Euler/axis-angle/matrix conversions
- Batch transforms for (N, 3) point arrays

Example - Composing transforms:
    >>> from vecmat import Mat4, Quat, Vec3
    >>>
    >>> model = Mat4.translation(Vec3(0, 0, -5)).rotate_y(math.pi / 4)
    >>> view = Mat4.look_at(Vec3(0, 2, 3), Vec3(0, 0, 0), Vec3(0, 1, 0))
    >>> proj = Mat4.perspective(math.radians(60), 16 / 9, 0.1, math.inf)
    >>> mvp = proj @ view @ model

Example - In-place updates:
    >>> m = Mat4.identity()
    >>> m.rotate_x(0.1, dst=m)  # m is updated and returned
    >>> m.inverse(dst=m)

Example - Quaternions:
    >>> q = Quat.from_euler(0.0, math.pi / 2, 0.0, "xyz")
    >>> halfway = Quat.identity().slerp(q, 0.5)
    >>> Vec3(1, 0, 0).transform_quat(halfway)
"""

__version__ = "0.1.0"

from vecmat.config import CONFIG, EPSILON
from vecmat.matrix import Mat3, Mat4
from vecmat.protocols import RotationMatrix
from vecmat.quat import Quat
from vecmat.transform import (
    TransformValues,
    apply_transform_values,
    rotate_points,
    transform_directions,
    transform_points,
    transform_points_projective,
)
from vecmat.utils import deg_to_rad, euclidean_modulo, inverse_lerp, lerp, rad_to_deg
from vecmat.vector import Vec2, Vec3, Vec4
from vecmat.verification import TransformVerifier

__all__ = [
    "CONFIG",
    "EPSILON",
    "Mat3",
    "Mat4",
    "Quat",
    "RotationMatrix",
    "TransformValues",
    "TransformVerifier",
    "Vec2",
    "Vec3",
    "Vec4",
    "__version__",
    "apply_transform_values",
    "deg_to_rad",
    "euclidean_modulo",
    "inverse_lerp",
    "lerp",
    "rad_to_deg",
    "rotate_points",
    "transform_directions",
    "transform_points",
    "transform_points_projective",
]
