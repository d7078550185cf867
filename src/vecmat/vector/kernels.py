"""
Numba-compiled kernels for vector transforms.

Every kernel reads its vector operand into locals before writing ``out``, so
``out`` may be the input vector itself. Matrix operands use column-major flat
storage with a column stride of four (Mat3 and Mat4 alike).
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit
from numpy.typing import NDArray


@njit(cache=True, nogil=True)
def cross3_numba(
    a: NDArray[np.float32], b: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """
    Cross product ``a x b``.

    Args:
        a: Left operand [3]
        b: Right operand [3]
        out: Output [3] (may alias a or b)
    """
    ax, ay, az = a[0], a[1], a[2]
    bx, by, bz = b[0], b[1], b[2]
    out[0] = ay * bz - az * by
    out[1] = az * bx - ax * bz
    out[2] = ax * by - ay * bx


@njit(cache=True, nogil=True)
def vec2_transform_mat3_numba(
    v: NDArray[np.float32], m: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """Transform a 2D point by a Mat3, applying the translation column."""
    x = v[0]
    y = v[1]
    out[0] = m[0] * x + m[4] * y + m[8]
    out[1] = m[1] * x + m[5] * y + m[9]


@njit(cache=True, nogil=True)
def vec2_transform_mat4_numba(
    v: NDArray[np.float32], m: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """Transform a 2D point (z=0, w=1) by a Mat4, keeping x and y."""
    x = v[0]
    y = v[1]
    out[0] = x * m[0] + y * m[4] + m[12]
    out[1] = x * m[1] + y * m[5] + m[13]


@njit(cache=True, nogil=True)
def vec3_transform_mat4_numba(
    v: NDArray[np.float32], m: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """
    Transform a 3D point (w=1) by a Mat4 and divide by the resulting w.

    A resulting w of exactly zero is treated as 1 so affine callers never see
    a division by zero.
    """
    x = v[0]
    y = v[1]
    z = v[2]
    w = m[3] * x + m[7] * y + m[11] * z + m[15]
    if w == 0.0:
        w = 1.0

    out[0] = (m[0] * x + m[4] * y + m[8] * z + m[12]) / w
    out[1] = (m[1] * x + m[5] * y + m[9] * z + m[13]) / w
    out[2] = (m[2] * x + m[6] * y + m[10] * z + m[14]) / w


@njit(cache=True, nogil=True)
def vec3_transform_linear_numba(
    v: NDArray[np.float32], m: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """
    Transform a 3D vector by the upper-left 3x3 block of a Mat3 or Mat4.

    No translation is applied, so this is the right transform for directions.
    """
    x = v[0]
    y = v[1]
    z = v[2]
    out[0] = x * m[0] + y * m[4] + z * m[8]
    out[1] = x * m[1] + y * m[5] + z * m[9]
    out[2] = x * m[2] + y * m[6] + z * m[10]


@njit(cache=True, nogil=True)
def vec4_transform_mat4_numba(
    v: NDArray[np.float32], m: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """Full homogeneous product ``m * v``."""
    x = v[0]
    y = v[1]
    z = v[2]
    w = v[3]
    out[0] = m[0] * x + m[4] * y + m[8] * z + m[12] * w
    out[1] = m[1] * x + m[5] * y + m[9] * z + m[13] * w
    out[2] = m[2] * x + m[6] * y + m[10] * z + m[14] * w
    out[3] = m[3] * x + m[7] * y + m[11] * z + m[15] * w


@njit(cache=True, nogil=True)
def vec3_transform_quat_numba(
    v: NDArray[np.float32], q: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """
    Rotate a 3D vector by a unit quaternion (x, y, z, w).

    Uses ``v' = v + 2w (q x v) + 2 q x (q x v)`` which avoids building the
    rotation matrix.
    """
    qx, qy, qz = q[0], q[1], q[2]
    w2 = q[3] * 2.0

    x = v[0]
    y = v[1]
    z = v[2]

    uv_x = qy * z - qz * y
    uv_y = qz * x - qx * z
    uv_z = qx * y - qy * x

    out[0] = x + uv_x * w2 + (qy * uv_z - qz * uv_y) * 2.0
    out[1] = y + uv_y * w2 + (qz * uv_x - qx * uv_z) * 2.0
    out[2] = z + uv_z * w2 + (qx * uv_y - qy * uv_x) * 2.0


@njit(cache=True, nogil=True)
def vec3_rotate_about_numba(
    v: NDArray[np.float32],
    origin: NDArray[np.float32],
    angle: float,
    axis: int,
    out: NDArray[np.float32],
) -> None:
    """
    Rotate a 3D point around ``origin`` about a principal axis.

    Args:
        v: Point [3]
        origin: Rotation centre [3]
        angle: Angle in radians
        axis: 0 for x, 1 for y, 2 for z
        out: Output [3] (may alias v or origin)
    """
    ox, oy, oz = origin[0], origin[1], origin[2]
    px = v[0] - ox
    py = v[1] - oy
    pz = v[2] - oz
    c = math.cos(angle)
    s = math.sin(angle)

    if axis == 0:
        rx = px
        ry = py * c - pz * s
        rz = py * s + pz * c
    elif axis == 1:
        rx = pz * s + px * c
        ry = py
        rz = pz * c - px * s
    else:
        rx = px * c - py * s
        ry = px * s + py * c
        rz = pz

    out[0] = rx + ox
    out[1] = ry + oy
    out[2] = rz + oz


@njit(cache=True, nogil=True)
def vec2_rotate_about_numba(
    v: NDArray[np.float32],
    origin: NDArray[np.float32],
    angle: float,
    out: NDArray[np.float32],
) -> None:
    """Rotate a 2D point around ``origin`` by ``angle`` radians (counter-clockwise)."""
    ox, oy = origin[0], origin[1]
    px = v[0] - ox
    py = v[1] - oy
    c = math.cos(angle)
    s = math.sin(angle)

    out[0] = px * c - py * s + ox
    out[1] = px * s + py * c + oy
