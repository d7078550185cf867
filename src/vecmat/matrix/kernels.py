"""
Numba-compiled kernels for Mat3 and Mat4.

Storage is column-major with a column stride of four floats: element (row r,
col c) lives at ``m[c * 4 + r]``. Mat3 uses 12 floats (slots 3, 7 and 11 are
padding and always zero), Mat4 uses 16.

Every kernel reads all of the inputs it still needs into locals before writing
``out``, so ``out`` may be any of the inputs. Kernels never raise; degenerate
cases are reported through return values and handled by the Python wrappers.

Kernels shared by both matrix types only touch the linear block (indices 0-11)
and derive the number of columns from the array length.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit
from numpy.typing import NDArray

# ============================================================================
# Shared linear-block kernels (Mat3 and Mat4)
# ============================================================================


@njit(cache=True, nogil=True)
def axis_rotation_numba(
    x: float, y: float, z: float, angle: float, eps: float, out: NDArray[np.float32]
) -> bool:
    """
    Write the rotation about an arbitrary axis into the linear block of ``out``.

    The axis is normalized first. Padding slots 3, 7 and 11 are zeroed.

    Args:
        x, y, z: Rotation axis (any length)
        angle: Angle in radians
        eps: Axis length below which no rotation is written
        out: Matrix storage [12] or [16] (only indices 0-11 are written)

    Returns:
        False if the axis was shorter than ``eps`` (``out`` left untouched)
    """
    n = math.sqrt(x * x + y * y + z * z)
    if n < eps:
        return False

    x /= n
    y /= n
    z /= n
    xx = x * x
    yy = y * y
    zz = z * z
    c = math.cos(angle)
    s = math.sin(angle)
    omc = 1.0 - c

    out[0] = xx + (1.0 - xx) * c
    out[1] = x * y * omc + z * s
    out[2] = x * z * omc - y * s
    out[3] = 0.0

    out[4] = x * y * omc - z * s
    out[5] = yy + (1.0 - yy) * c
    out[6] = y * z * omc + x * s
    out[7] = 0.0

    out[8] = x * z * omc + y * s
    out[9] = y * z * omc - x * s
    out[10] = zz + (1.0 - zz) * c
    out[11] = 0.0
    return True


@njit(cache=True, nogil=True)
def quat_to_linear_numba(q: NDArray[np.float32], out: NDArray[np.float32]) -> None:
    """
    Write the rotation matrix of quaternion ``q`` (x, y, z, w) into indices 0-11.

    The quaternion is assumed to be unit length; it is not normalized.
    """
    x = q[0]
    y = q[1]
    z = q[2]
    w = q[3]
    x2 = x + x
    y2 = y + y
    z2 = z + z

    xx = x * x2
    yx = y * x2
    yy = y * y2
    zx = z * x2
    zy = z * y2
    zz = z * z2
    wx = w * x2
    wy = w * y2
    wz = w * z2

    out[0] = 1.0 - yy - zz
    out[1] = yx + wz
    out[2] = zx - wy
    out[3] = 0.0

    out[4] = yx - wz
    out[5] = 1.0 - xx - zz
    out[6] = zy + wx
    out[7] = 0.0

    out[8] = zx + wy
    out[9] = zy - wx
    out[10] = 1.0 - xx - yy
    out[11] = 0.0


@njit(cache=True, nogil=True)
def post_rotate_numba(
    m: NDArray[np.float32], angle: float, axis: int, out: NDArray[np.float32]
) -> None:
    """
    Post-multiply by a principal-axis rotation: ``out = m * R(axis, angle)``.

    Only the first three columns change; indices >= 12 are neither read nor
    written, so Mat4 callers copy the translation column themselves.

    Args:
        m: Matrix storage [12] or [16]
        angle: Angle in radians
        axis: 0 for x, 1 for y, 2 for z (2 is also the 2D rotation of a Mat3)
        out: Output storage (may alias m)
    """
    c = math.cos(angle)
    s = math.sin(angle)

    for r in range(4):
        m0 = m[r]
        m1 = m[4 + r]
        m2 = m[8 + r]
        if axis == 0:
            out[r] = m0
            out[4 + r] = c * m1 + s * m2
            out[8 + r] = c * m2 - s * m1
        elif axis == 1:
            out[r] = c * m0 - s * m2
            out[4 + r] = m1
            out[8 + r] = c * m2 + s * m0
        else:
            out[r] = c * m0 + s * m1
            out[4 + r] = c * m1 - s * m0
            out[8 + r] = m2


@njit(cache=True, nogil=True)
def pre_rotate_numba(
    m: NDArray[np.float32], angle: float, axis: int, out: NDArray[np.float32]
) -> None:
    """
    Pre-multiply by a principal-axis rotation: ``out = R(axis, angle) * m``.

    Rows 0-2 of every column are rotated; row 3 (padding for Mat3) is copied.

    Args:
        m: Matrix storage [12] or [16]
        angle: Angle in radians
        axis: 0 for x, 1 for y, 2 for z
        out: Output storage (may alias m)
    """
    c = math.cos(angle)
    s = math.sin(angle)

    for j in range(m.shape[0] // 4):
        o = j * 4
        r0 = m[o]
        r1 = m[o + 1]
        r2 = m[o + 2]
        out[o + 3] = m[o + 3]
        if axis == 0:
            out[o] = r0
            out[o + 1] = c * r1 - s * r2
            out[o + 2] = s * r1 + c * r2
        elif axis == 1:
            out[o] = c * r0 + s * r2
            out[o + 1] = r1
            out[o + 2] = c * r2 - s * r0
        else:
            out[o] = c * r0 - s * r1
            out[o + 1] = s * r0 + c * r1
            out[o + 2] = r2


@njit(cache=True, nogil=True)
def post_rotate_axis_numba(
    m: NDArray[np.float32],
    x: float,
    y: float,
    z: float,
    angle: float,
    eps: float,
    out: NDArray[np.float32],
) -> None:
    """
    Post-multiply by a rotation about an arbitrary axis: ``out = m * R``.

    An axis shorter than ``eps`` is treated as the identity rotation. Only
    indices 0-11 are written.
    """
    r = np.empty(12, dtype=np.float32)
    if not axis_rotation_numba(x, y, z, angle, eps, r):
        for i in range(12):
            out[i] = m[i]
        return

    r00, r10, r20 = r[0], r[1], r[2]
    r01, r11, r21 = r[4], r[5], r[6]
    r02, r12, r22 = r[8], r[9], r[10]

    for row in range(4):
        m0 = m[row]
        m1 = m[4 + row]
        m2 = m[8 + row]
        out[row] = m0 * r00 + m1 * r10 + m2 * r20
        out[4 + row] = m0 * r01 + m1 * r11 + m2 * r21
        out[8 + row] = m0 * r02 + m1 * r12 + m2 * r22


@njit(cache=True, nogil=True)
def pre_rotate_axis_numba(
    m: NDArray[np.float32],
    x: float,
    y: float,
    z: float,
    angle: float,
    eps: float,
    out: NDArray[np.float32],
) -> None:
    """
    Pre-multiply by a rotation about an arbitrary axis: ``out = R * m``.

    An axis shorter than ``eps`` is treated as the identity rotation.
    """
    n = m.shape[0]
    r = np.empty(12, dtype=np.float32)
    if not axis_rotation_numba(x, y, z, angle, eps, r):
        for i in range(n):
            out[i] = m[i]
        return

    r00, r10, r20 = r[0], r[1], r[2]
    r01, r11, r21 = r[4], r[5], r[6]
    r02, r12, r22 = r[8], r[9], r[10]

    for j in range(n // 4):
        o = j * 4
        c0 = m[o]
        c1 = m[o + 1]
        c2 = m[o + 2]
        out[o] = r00 * c0 + r01 * c1 + r02 * c2
        out[o + 1] = r10 * c0 + r11 * c1 + r12 * c2
        out[o + 2] = r20 * c0 + r21 * c1 + r22 * c2
        out[o + 3] = m[o + 3]


# ============================================================================
# Mat3 kernels
# ============================================================================


@njit(cache=True, nogil=True)
def mat3_multiply_numba(
    a: NDArray[np.float32], b: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """
    Matrix product ``out = a * b`` (apply b first, then a).

    Args:
        a: Left Mat3 [12]
        b: Right Mat3 [12]
        out: Output Mat3 [12] (may alias a or b)
    """
    a00, a01, a02 = a[0], a[1], a[2]
    a10, a11, a12 = a[4], a[5], a[6]
    a20, a21, a22 = a[8], a[9], a[10]

    for j in range(3):
        o = j * 4
        b0 = b[o]
        b1 = b[o + 1]
        b2 = b[o + 2]
        out[o] = a00 * b0 + a10 * b1 + a20 * b2
        out[o + 1] = a01 * b0 + a11 * b1 + a21 * b2
        out[o + 2] = a02 * b0 + a12 * b1 + a22 * b2
        out[o + 3] = 0.0


@njit(cache=True, nogil=True)
def mat3_determinant_numba(m: NDArray[np.float32]) -> float:
    """Determinant by the triple-product (cofactor) formula."""
    m00, m01, m02 = m[0], m[1], m[2]
    m10, m11, m12 = m[4], m[5], m[6]
    m20, m21, m22 = m[8], m[9], m[10]

    return (
        m00 * (m11 * m22 - m21 * m12)
        - m10 * (m01 * m22 - m21 * m02)
        + m20 * (m01 * m12 - m11 * m02)
    )


@njit(cache=True, nogil=True)
def mat3_inverse_numba(m: NDArray[np.float32], eps: float, out: NDArray[np.float32]) -> bool:
    """
    Inverse via the adjugate.

    The matrix counts as singular when ``|det|`` is at most ``eps`` times the
    product of its column lengths (the Hadamard bound), so the test does not
    depend on the overall scale.

    Returns:
        False if the matrix is singular, in which case ``out`` is set to identity
    """
    m00, m01, m02 = m[0], m[1], m[2]
    m10, m11, m12 = m[4], m[5], m[6]
    m20, m21, m22 = m[8], m[9], m[10]

    b01 = m22 * m11 - m12 * m21
    b11 = -m22 * m10 + m12 * m20
    b21 = m21 * m10 - m11 * m20

    det = m00 * b01 + m01 * b11 + m02 * b21
    bound = (
        eps
        * math.sqrt(m00 * m00 + m01 * m01 + m02 * m02)
        * math.sqrt(m10 * m10 + m11 * m11 + m12 * m12)
        * math.sqrt(m20 * m20 + m21 * m21 + m22 * m22)
    )
    if abs(det) <= bound:
        for i in range(12):
            out[i] = 0.0
        out[0] = 1.0
        out[5] = 1.0
        out[10] = 1.0
        return False

    inv_det = 1.0 / det

    out[0] = b01 * inv_det
    out[1] = (-m22 * m01 + m02 * m21) * inv_det
    out[2] = (m12 * m01 - m02 * m11) * inv_det
    out[3] = 0.0
    out[4] = b11 * inv_det
    out[5] = (m22 * m00 - m02 * m20) * inv_det
    out[6] = (-m12 * m00 + m02 * m10) * inv_det
    out[7] = 0.0
    out[8] = b21 * inv_det
    out[9] = (-m21 * m00 + m01 * m20) * inv_det
    out[10] = (m11 * m00 - m01 * m10) * inv_det
    out[11] = 0.0
    return True


@njit(cache=True, nogil=True)
def mat3_transpose_numba(m: NDArray[np.float32], out: NDArray[np.float32]) -> None:
    """Transpose the 3x3 block; padding stays zero."""
    m00, m01, m02 = m[0], m[1], m[2]
    m10, m11, m12 = m[4], m[5], m[6]
    m20, m21, m22 = m[8], m[9], m[10]

    out[0] = m00
    out[1] = m10
    out[2] = m20
    out[3] = 0.0
    out[4] = m01
    out[5] = m11
    out[6] = m21
    out[7] = 0.0
    out[8] = m02
    out[9] = m12
    out[10] = m22
    out[11] = 0.0


@njit(cache=True, nogil=True)
def mat3_translate_numba(
    m: NDArray[np.float32], x: float, y: float, out: NDArray[np.float32]
) -> None:
    """Post-multiply by a 2D translation: ``out = m * T(x, y)``."""
    for r in range(4):
        m0 = m[r]
        m1 = m[4 + r]
        m2 = m[8 + r]
        out[r] = m0
        out[4 + r] = m1
        out[8 + r] = m0 * x + m1 * y + m2


@njit(cache=True, nogil=True)
def mat3_pre_translate_numba(
    m: NDArray[np.float32], x: float, y: float, out: NDArray[np.float32]
) -> None:
    """Pre-multiply by a 2D translation: ``out = T(x, y) * m``."""
    for j in range(3):
        o = j * 4
        r0 = m[o]
        r1 = m[o + 1]
        r2 = m[o + 2]
        out[o] = r0 + x * r2
        out[o + 1] = r1 + y * r2
        out[o + 2] = r2
        out[o + 3] = 0.0


# ============================================================================
# Mat4 kernels
# ============================================================================


@njit(cache=True, nogil=True)
def mat4_multiply_numba(
    a: NDArray[np.float32], b: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """
    Matrix product ``out = a * b`` (apply b first, then a).

    ``a`` is staged completely; each column of ``b`` is read before the
    matching column of ``out`` is written.

    Args:
        a: Left Mat4 [16]
        b: Right Mat4 [16]
        out: Output Mat4 [16] (may alias a or b)
    """
    a00, a01, a02, a03 = a[0], a[1], a[2], a[3]
    a10, a11, a12, a13 = a[4], a[5], a[6], a[7]
    a20, a21, a22, a23 = a[8], a[9], a[10], a[11]
    a30, a31, a32, a33 = a[12], a[13], a[14], a[15]

    for j in range(4):
        o = j * 4
        b0 = b[o]
        b1 = b[o + 1]
        b2 = b[o + 2]
        b3 = b[o + 3]
        out[o] = a00 * b0 + a10 * b1 + a20 * b2 + a30 * b3
        out[o + 1] = a01 * b0 + a11 * b1 + a21 * b2 + a31 * b3
        out[o + 2] = a02 * b0 + a12 * b1 + a22 * b2 + a32 * b3
        out[o + 3] = a03 * b0 + a13 * b1 + a23 * b2 + a33 * b3


@njit(cache=True, nogil=True)
def mat4_determinant_numba(m: NDArray[np.float32]) -> float:
    """
    Determinant via products of 2x2 sub-determinants.

    The ``tmp`` products are the 2x2 minors of the lower two rows; ``t0..t3``
    are the cofactors of the first column.
    """
    m00, m01, m02, m03 = m[0], m[1], m[2], m[3]
    m10, m11, m12, m13 = m[4], m[5], m[6], m[7]
    m20, m21, m22, m23 = m[8], m[9], m[10], m[11]
    m30, m31, m32, m33 = m[12], m[13], m[14], m[15]

    tmp0 = m22 * m33
    tmp1 = m32 * m23
    tmp2 = m12 * m33
    tmp3 = m32 * m13
    tmp4 = m12 * m23
    tmp5 = m22 * m13
    tmp6 = m02 * m33
    tmp7 = m32 * m03
    tmp8 = m02 * m23
    tmp9 = m22 * m03
    tmp10 = m02 * m13
    tmp11 = m12 * m03

    t0 = (tmp0 * m11 + tmp3 * m21 + tmp4 * m31) - (tmp1 * m11 + tmp2 * m21 + tmp5 * m31)
    t1 = (tmp1 * m01 + tmp6 * m21 + tmp9 * m31) - (tmp0 * m01 + tmp7 * m21 + tmp8 * m31)
    t2 = (tmp2 * m01 + tmp7 * m11 + tmp10 * m31) - (tmp3 * m01 + tmp6 * m11 + tmp11 * m31)
    t3 = (tmp5 * m01 + tmp8 * m11 + tmp11 * m21) - (tmp4 * m01 + tmp9 * m11 + tmp10 * m21)

    return m00 * t0 + m10 * t1 + m20 * t2 + m30 * t3


@njit(cache=True, nogil=True)
def mat4_inverse_numba(m: NDArray[np.float32], eps: float, out: NDArray[np.float32]) -> bool:
    """
    Inverse via the adjugate, reusing the 2x2 products of the determinant.

    Singular when ``|det| <= eps * prod(column lengths)``, as in
    :func:`mat3_inverse_numba`.

    Returns:
        False if the matrix is singular, in which case ``out`` is set to identity
    """
    m00, m01, m02, m03 = m[0], m[1], m[2], m[3]
    m10, m11, m12, m13 = m[4], m[5], m[6], m[7]
    m20, m21, m22, m23 = m[8], m[9], m[10], m[11]
    m30, m31, m32, m33 = m[12], m[13], m[14], m[15]

    tmp0 = m22 * m33
    tmp1 = m32 * m23
    tmp2 = m12 * m33
    tmp3 = m32 * m13
    tmp4 = m12 * m23
    tmp5 = m22 * m13
    tmp6 = m02 * m33
    tmp7 = m32 * m03
    tmp8 = m02 * m23
    tmp9 = m22 * m03
    tmp10 = m02 * m13
    tmp11 = m12 * m03
    tmp12 = m20 * m31
    tmp13 = m30 * m21
    tmp14 = m10 * m31
    tmp15 = m30 * m11
    tmp16 = m10 * m21
    tmp17 = m20 * m11
    tmp18 = m00 * m31
    tmp19 = m30 * m01
    tmp20 = m00 * m21
    tmp21 = m20 * m01
    tmp22 = m00 * m11
    tmp23 = m10 * m01

    t0 = (tmp0 * m11 + tmp3 * m21 + tmp4 * m31) - (tmp1 * m11 + tmp2 * m21 + tmp5 * m31)
    t1 = (tmp1 * m01 + tmp6 * m21 + tmp9 * m31) - (tmp0 * m01 + tmp7 * m21 + tmp8 * m31)
    t2 = (tmp2 * m01 + tmp7 * m11 + tmp10 * m31) - (tmp3 * m01 + tmp6 * m11 + tmp11 * m31)
    t3 = (tmp5 * m01 + tmp8 * m11 + tmp11 * m21) - (tmp4 * m01 + tmp9 * m11 + tmp10 * m21)

    det = m00 * t0 + m10 * t1 + m20 * t2 + m30 * t3
    bound = (
        eps
        * math.sqrt(m00 * m00 + m01 * m01 + m02 * m02 + m03 * m03)
        * math.sqrt(m10 * m10 + m11 * m11 + m12 * m12 + m13 * m13)
        * math.sqrt(m20 * m20 + m21 * m21 + m22 * m22 + m23 * m23)
        * math.sqrt(m30 * m30 + m31 * m31 + m32 * m32 + m33 * m33)
    )
    if abs(det) <= bound:
        for i in range(16):
            out[i] = 0.0
        out[0] = 1.0
        out[5] = 1.0
        out[10] = 1.0
        out[15] = 1.0
        return False

    d = 1.0 / det

    out[0] = t0 * d
    out[1] = t1 * d
    out[2] = t2 * d
    out[3] = t3 * d
    out[4] = ((tmp1 * m10 + tmp2 * m20 + tmp5 * m30) - (tmp0 * m10 + tmp3 * m20 + tmp4 * m30)) * d
    out[5] = ((tmp0 * m00 + tmp7 * m20 + tmp8 * m30) - (tmp1 * m00 + tmp6 * m20 + tmp9 * m30)) * d
    out[6] = ((tmp3 * m00 + tmp6 * m10 + tmp11 * m30) - (tmp2 * m00 + tmp7 * m10 + tmp10 * m30)) * d
    out[7] = ((tmp4 * m00 + tmp9 * m10 + tmp10 * m20) - (tmp5 * m00 + tmp8 * m10 + tmp11 * m20)) * d
    out[8] = ((tmp12 * m13 + tmp15 * m23 + tmp16 * m33) - (tmp13 * m13 + tmp14 * m23 + tmp17 * m33)) * d
    out[9] = ((tmp13 * m03 + tmp18 * m23 + tmp21 * m33) - (tmp12 * m03 + tmp19 * m23 + tmp20 * m33)) * d
    out[10] = ((tmp14 * m03 + tmp19 * m13 + tmp22 * m33) - (tmp15 * m03 + tmp18 * m13 + tmp23 * m33)) * d
    out[11] = ((tmp17 * m03 + tmp20 * m13 + tmp23 * m23) - (tmp16 * m03 + tmp21 * m13 + tmp22 * m23)) * d
    out[12] = ((tmp14 * m22 + tmp17 * m32 + tmp13 * m12) - (tmp16 * m32 + tmp12 * m12 + tmp15 * m22)) * d
    out[13] = ((tmp20 * m32 + tmp12 * m02 + tmp19 * m22) - (tmp18 * m22 + tmp21 * m32 + tmp13 * m02)) * d
    out[14] = ((tmp18 * m12 + tmp23 * m32 + tmp15 * m02) - (tmp22 * m32 + tmp14 * m02 + tmp19 * m12)) * d
    out[15] = ((tmp22 * m22 + tmp16 * m02 + tmp21 * m12) - (tmp20 * m12 + tmp23 * m22 + tmp17 * m02)) * d
    return True


@njit(cache=True, nogil=True)
def mat4_transpose_numba(m: NDArray[np.float32], out: NDArray[np.float32]) -> None:
    """Transpose; off-diagonal pairs are swapped through locals."""
    for c in range(4):
        out[c * 4 + c] = m[c * 4 + c]
        for r in range(c + 1, 4):
            lower = m[c * 4 + r]
            upper = m[r * 4 + c]
            out[c * 4 + r] = upper
            out[r * 4 + c] = lower


@njit(cache=True, nogil=True)
def mat4_translate_numba(
    m: NDArray[np.float32], x: float, y: float, z: float, out: NDArray[np.float32]
) -> None:
    """Post-multiply by a translation: ``out = m * T(x, y, z)``."""
    for r in range(4):
        m0 = m[r]
        m1 = m[4 + r]
        m2 = m[8 + r]
        m3 = m[12 + r]
        out[r] = m0
        out[4 + r] = m1
        out[8 + r] = m2
        out[12 + r] = m0 * x + m1 * y + m2 * z + m3


@njit(cache=True, nogil=True)
def mat4_pre_translate_numba(
    m: NDArray[np.float32], x: float, y: float, z: float, out: NDArray[np.float32]
) -> None:
    """Pre-multiply by a translation: ``out = T(x, y, z) * m``."""
    for j in range(4):
        o = j * 4
        r0 = m[o]
        r1 = m[o + 1]
        r2 = m[o + 2]
        r3 = m[o + 3]
        out[o] = r0 + x * r3
        out[o + 1] = r1 + y * r3
        out[o + 2] = r2 + z * r3
        out[o + 3] = r3


@njit(cache=True, nogil=True)
def mat4_compose_numba(
    t: NDArray[np.float32],
    q: NDArray[np.float32],
    s: NDArray[np.float32],
    out: NDArray[np.float32],
) -> None:
    """
    Single-pass ``T(t) * R(q) * S(s)``.

    Equivalent to multiplying the three factor matrices: the rotation columns
    are scaled by the matching scale component and the translation is written
    to the last column.

    Args:
        t: Translation [3]
        q: Unit quaternion [4] (x, y, z, w)
        s: Per-axis scale [3]
        out: Output Mat4 [16]
    """
    tx, ty, tz = t[0], t[1], t[2]
    sx, sy, sz = s[0], s[1], s[2]
    quat_to_linear_numba(q, out)

    out[0] *= sx
    out[1] *= sx
    out[2] *= sx
    out[4] *= sy
    out[5] *= sy
    out[6] *= sy
    out[8] *= sz
    out[9] *= sz
    out[10] *= sz

    out[12] = tx
    out[13] = ty
    out[14] = tz
    out[15] = 1.0
