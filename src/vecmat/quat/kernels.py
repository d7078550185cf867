"""
Numba-compiled quaternion kernels.

Quaternions are stored as ``[x, y, z, w]`` with ``w`` the scalar part. As in
the matrix kernels, all inputs are staged into locals before ``out`` is
written, so ``out`` may alias any input.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit
from numpy.typing import NDArray

# Euler order codes, matching vecmat.types.ROTATION_ORDERS
ORDER_XYZ = 0
ORDER_XZY = 1
ORDER_YXZ = 2
ORDER_YZX = 3
ORDER_ZXY = 4
ORDER_ZYX = 5


@njit(cache=True, nogil=True)
def quat_multiply_numba(
    a: NDArray[np.float32], b: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """
    Hamilton product ``out = a * b`` (rotate by b first, then a).

    Args:
        a: Left quaternion [4]
        b: Right quaternion [4]
        out: Output [4] (may alias a or b)
    """
    ax, ay, az, aw = a[0], a[1], a[2], a[3]
    bx, by, bz, bw = b[0], b[1], b[2], b[3]

    out[0] = ax * bw + aw * bx + ay * bz - az * by
    out[1] = ay * bw + aw * by + az * bx - ax * bz
    out[2] = az * bw + aw * bz + ax * by - ay * bx
    out[3] = aw * bw - ax * bx - ay * by - az * bz


@njit(cache=True, nogil=True)
def quat_rotate_axis_numba(
    q: NDArray[np.float32], angle: float, axis: int, out: NDArray[np.float32]
) -> None:
    """
    Post-multiply by a principal-axis rotation: ``out = q * R(axis, angle)``.

    Args:
        q: Quaternion [4]
        angle: Angle in radians
        axis: 0 for x, 1 for y, 2 for z
        out: Output [4] (may alias q)
    """
    half = angle * 0.5
    s = math.sin(half)
    c = math.cos(half)
    qx, qy, qz, qw = q[0], q[1], q[2], q[3]

    if axis == 0:
        out[0] = qx * c + qw * s
        out[1] = qy * c + qz * s
        out[2] = qz * c - qy * s
        out[3] = qw * c - qx * s
    elif axis == 1:
        out[0] = qx * c - qz * s
        out[1] = qy * c + qw * s
        out[2] = qz * c + qx * s
        out[3] = qw * c - qy * s
    else:
        out[0] = qx * c + qy * s
        out[1] = qy * c - qx * s
        out[2] = qz * c + qw * s
        out[3] = qw * c - qz * s


@njit(cache=True, nogil=True)
def quat_from_euler_numba(
    x: float, y: float, z: float, order: int, out: NDArray[np.float32]
) -> None:
    """
    Quaternion from Euler angles.

    The order string names the product order of the per-axis rotations:
    ``"xyz"`` gives ``qx * qy * qz``, so the z rotation is applied first.

    Args:
        x, y, z: Angles in radians about each axis
        order: One of the ``ORDER_*`` codes
        out: Output [4]
    """
    sx = math.sin(x * 0.5)
    cx = math.cos(x * 0.5)
    sy = math.sin(y * 0.5)
    cy = math.cos(y * 0.5)
    sz = math.sin(z * 0.5)
    cz = math.cos(z * 0.5)

    # Terms shared by every order; the orders only differ in signs
    a = sx * cy * cz
    b = cx * sy * sz
    c = cx * sy * cz
    d = sx * cy * sz
    e = cx * cy * sz
    f = sx * sy * cz
    g = cx * cy * cz
    h = sx * sy * sz

    if order == ORDER_XYZ:
        out[0] = a + b
        out[1] = c - d
        out[2] = e + f
        out[3] = g - h
    elif order == ORDER_XZY:
        out[0] = a - b
        out[1] = c - d
        out[2] = e + f
        out[3] = g + h
    elif order == ORDER_YXZ:
        out[0] = a + b
        out[1] = c - d
        out[2] = e - f
        out[3] = g + h
    elif order == ORDER_YZX:
        out[0] = a + b
        out[1] = c + d
        out[2] = e - f
        out[3] = g - h
    elif order == ORDER_ZXY:
        out[0] = a - b
        out[1] = c + d
        out[2] = e + f
        out[3] = g - h
    else:
        out[0] = a - b
        out[1] = c + d
        out[2] = e - f
        out[3] = g + h


@njit(cache=True, nogil=True)
def quat_from_mat_numba(m: NDArray[np.float32], out: NDArray[np.float32]) -> None:
    """
    Quaternion from the 3x3 linear block of a Mat3 or Mat4.

    Branches on the trace, or on the largest diagonal element when the trace
    is not positive, so the divisor is never close to zero. The result is not
    normalized.

    Args:
        m: Matrix storage [12] or [16], element (r, c) at ``m[c * 4 + r]``
        out: Output [4]
    """
    m00 = m[0]
    m11 = m[5]
    m22 = m[10]
    trace = m00 + m11 + m22

    if trace > 0.0:
        root = math.sqrt(trace + 1.0)
        inv = 0.5 / root
        x = (m[6] - m[9]) * inv
        y = (m[8] - m[2]) * inv
        z = (m[1] - m[4]) * inv
        out[3] = 0.5 * root
        out[0] = x
        out[1] = y
        out[2] = z
        return

    i = 0
    if m11 > m00:
        i = 1
    if m22 > m[i * 4 + i]:
        i = 2
    j = (i + 1) % 3
    k = (i + 2) % 3

    root = math.sqrt(m[i * 4 + i] - m[j * 4 + j] - m[k * 4 + k] + 1.0)
    inv = 0.5 / root
    qi = 0.5 * root
    w = (m[j * 4 + k] - m[k * 4 + j]) * inv
    qj = (m[j * 4 + i] + m[i * 4 + j]) * inv
    qk = (m[k * 4 + i] + m[i * 4 + k]) * inv

    out[i] = qi
    out[j] = qj
    out[k] = qk
    out[3] = w


@njit(cache=True, nogil=True)
def quat_rotation_to_numba(
    a: NDArray[np.float32],
    b: NDArray[np.float32],
    parallel: float,
    axis_eps: float,
    out: NDArray[np.float32],
) -> None:
    """
    Shortest-arc rotation taking unit vector ``a`` onto unit vector ``b``.

    For anti-parallel inputs any axis perpendicular to ``a`` is valid; ``x x a``
    is used, or ``y x a`` when ``a`` is (nearly) along x. Parallel inputs give
    the identity.

    Args:
        a: Unit start direction [3]
        b: Unit end direction [3]
        parallel: ``|dot|`` threshold for the (anti-)parallel cases
        axis_eps: Squared length below which the x-axis fallback is rejected
        out: Output [4]
    """
    ax, ay, az = a[0], a[1], a[2]
    bx, by, bz = b[0], b[1], b[2]
    dot = ax * bx + ay * by + az * bz

    if dot < -parallel:
        # x_unit x a
        tx = 0.0
        ty = -az
        tz = ay
        if tx * tx + ty * ty + tz * tz < axis_eps:
            # y_unit x a
            tx = az
            ty = 0.0
            tz = -ax
        n = math.sqrt(tx * tx + ty * ty + tz * tz)
        # half angle pi / 2: sin = 1, cos = 0
        out[0] = tx / n
        out[1] = ty / n
        out[2] = tz / n
        out[3] = 0.0
        return

    if dot > parallel:
        out[0] = 0.0
        out[1] = 0.0
        out[2] = 0.0
        out[3] = 1.0
        return

    cx = ay * bz - az * by
    cy = az * bx - ax * bz
    cz = ax * by - ay * bx
    cw = 1.0 + dot
    n = math.sqrt(cx * cx + cy * cy + cz * cz + cw * cw)
    out[0] = cx / n
    out[1] = cy / n
    out[2] = cz / n
    out[3] = cw / n


@njit(cache=True, nogil=True)
def quat_slerp_numba(
    a: NDArray[np.float32],
    b: NDArray[np.float32],
    t: float,
    eps: float,
    out: NDArray[np.float32],
) -> None:
    """
    Spherical linear interpolation along the shorter arc.

    When ``a . b < 0`` the second operand is negated, so the path never spans
    more than 180 degrees. When the operands are within ``eps`` of each other
    (``1 - cos < eps``) the weights fall back to linear ones and the result is
    renormalized.

    Args:
        a: Start quaternion [4] (returned at t=0)
        b: End quaternion [4] (returned at t=1, possibly negated)
        t: Interpolation factor, not clamped
        eps: Fallback threshold on ``1 - cos``
        out: Output [4] (may alias a or b)
    """
    ax, ay, az, aw = a[0], a[1], a[2], a[3]
    bx, by, bz, bw = b[0], b[1], b[2], b[3]

    cos_omega = ax * bx + ay * by + az * bz + aw * bw
    if cos_omega < 0.0:
        cos_omega = -cos_omega
        bx = -bx
        by = -by
        bz = -bz
        bw = -bw

    if 1.0 - cos_omega > eps:
        omega = math.acos(min(cos_omega, 1.0))
        sin_omega = math.sin(omega)
        s0 = math.sin((1.0 - t) * omega) / sin_omega
        s1 = math.sin(t * omega) / sin_omega
        out[0] = s0 * ax + s1 * bx
        out[1] = s0 * ay + s1 * by
        out[2] = s0 * az + s1 * bz
        out[3] = s0 * aw + s1 * bw
        return

    s0 = 1.0 - t
    x = s0 * ax + t * bx
    y = s0 * ay + t * by
    z = s0 * az + t * bz
    w = s0 * aw + t * bw
    n = math.sqrt(x * x + y * y + z * z + w * w)
    if n > 0.0:
        x /= n
        y /= n
        z /= n
        w /= n
    out[0] = x
    out[1] = y
    out[2] = z
    out[3] = w


@njit(cache=True, nogil=True)
def quat_normalize_numba(q: NDArray[np.float32], eps: float, out: NDArray[np.float32]) -> bool:
    """
    Scale to unit length.

    Returns:
        False if the length was at most ``eps``; ``out`` is then the identity
    """
    x, y, z, w = q[0], q[1], q[2], q[3]
    n = math.sqrt(x * x + y * y + z * z + w * w)
    if n > eps:
        out[0] = x / n
        out[1] = y / n
        out[2] = z / n
        out[3] = w / n
        return True

    out[0] = 0.0
    out[1] = 0.0
    out[2] = 0.0
    out[3] = 1.0
    return False


@njit(cache=True, nogil=True)
def quat_inverse_numba(q: NDArray[np.float32], out: NDArray[np.float32]) -> None:
    """Multiplicative inverse ``conj(q) / |q|^2``; the zero quaternion maps to zero."""
    x, y, z, w = q[0], q[1], q[2], q[3]
    dot = x * x + y * y + z * z + w * w
    inv = 1.0 / dot if dot != 0.0 else 0.0
    out[0] = -x * inv
    out[1] = -y * inv
    out[2] = -z * inv
    out[3] = w * inv


@njit(cache=True, nogil=True)
def quat_to_axis_angle_numba(
    q: NDArray[np.float32], eps: float, axis_out: NDArray[np.float32]
) -> float:
    """
    Split a unit quaternion into rotation axis and angle.

    Near the identity the axis is undefined and ``(1, 0, 0)`` is written.

    Args:
        q: Unit quaternion [4]
        eps: Threshold on ``|sin(angle / 2)|``
        axis_out: Output axis [3]

    Returns:
        Angle in radians, in ``[0, 2 * pi]``
    """
    w = max(-1.0, min(1.0, q[3]))
    angle = 2.0 * math.acos(w)
    s = math.sin(angle * 0.5)
    if abs(s) > eps:
        axis_out[0] = q[0] / s
        axis_out[1] = q[1] / s
        axis_out[2] = q[2] / s
    else:
        axis_out[0] = 1.0
        axis_out[1] = 0.0
        axis_out[2] = 0.0
    return angle
