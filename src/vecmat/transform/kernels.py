"""
Numba-optimized kernels for batch point transforms.

Each row is read into locals before its output row is written, so ``out`` may
be the input array itself.
"""

from __future__ import annotations

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray


@njit(parallel=True, cache=True, nogil=True)
def transform_points_projective_numba(
    points: NDArray[np.float32], m: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """
    Transform points by a Mat4 with perspective divide.

    A resulting w of exactly zero is treated as 1.

    Args:
        points: Input points [N, 3]
        m: Mat4 storage [16], column-major
        out: Output points [N, 3] (may alias points)
    """
    n = points.shape[0]

    for i in prange(n):
        x = points[i, 0]
        y = points[i, 1]
        z = points[i, 2]
        w = m[3] * x + m[7] * y + m[11] * z + m[15]
        if w == 0.0:
            w = 1.0
        out[i, 0] = (m[0] * x + m[4] * y + m[8] * z + m[12]) / w
        out[i, 1] = (m[1] * x + m[5] * y + m[9] * z + m[13]) / w
        out[i, 2] = (m[2] * x + m[6] * y + m[10] * z + m[14]) / w


@njit(parallel=True, fastmath=True, cache=True, nogil=True)
def rotate_points_quat_numba(
    points: NDArray[np.float32], q: NDArray[np.float32], out: NDArray[np.float32]
) -> None:
    """
    Rotate points by a unit quaternion (x, y, z, w).

    Uses ``v' = v + 2w (q x v) + 2 q x (q x v)``.

    Args:
        points: Input points [N, 3]
        q: Unit quaternion [4]
        out: Output points [N, 3] (may alias points)
    """
    n = points.shape[0]
    qx = q[0]
    qy = q[1]
    qz = q[2]
    w2 = q[3] * 2.0

    for i in prange(n):
        x = points[i, 0]
        y = points[i, 1]
        z = points[i, 2]

        uvx = qy * z - qz * y
        uvy = qz * x - qx * z
        uvz = qx * y - qy * x

        uuvx = (qy * uvz - qz * uvy) * 2.0
        uuvy = (qz * uvx - qx * uvz) * 2.0
        uuvz = (qx * uvy - qy * uvx) * 2.0

        out[i, 0] = x + uvx * w2 + uuvx
        out[i, 1] = y + uvy * w2 + uuvy
        out[i, 2] = z + uvz * w2 + uuvz
