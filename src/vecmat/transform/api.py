"""
Batch transforms for ``(N, 3)`` point arrays.

CPU-optimized using NumPy and Numba:

- ``transform_points()``: affine Mat4 via BLAS matmul
- ``transform_points_projective()``: Mat4 with perspective divide (Numba)
- ``transform_directions()``: upper 3x3 only, no translation
- ``rotate_points()``: unit quaternion rotation (Numba)
- ``apply_transform_values()``: TransformValues applied to points

Every function accepts ``out=``; passing the input array transforms in place.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from vecmat.matrix import Mat4
from vecmat.quat import Quat
from vecmat.transform.kernels import rotate_points_quat_numba, transform_points_projective_numba
from vecmat.transform.values import TransformValues

logger = logging.getLogger(__name__)


def _as_points(points: NDArray, name: str = "points") -> NDArray[np.float32]:
    arr = np.ascontiguousarray(points, dtype=np.float32)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"{name} must have shape (N, 3), got {arr.shape}")
    return arr


def _output(arr: NDArray[np.float32], out: NDArray | None) -> NDArray[np.float32]:
    if out is None:
        return np.empty_like(arr)
    if out.shape != arr.shape or out.dtype != np.float32:
        raise ValueError(f"out must be a float32 array of shape {arr.shape}, got {out.dtype} {out.shape}")
    return out


def transform_points(
    points: NDArray, m: Mat4, out: NDArray[np.float32] | None = None
) -> NDArray[np.float32]:
    """Apply an affine Mat4 to Nx3 points.

    The bottom row of ``m`` is ignored; use :func:`transform_points_projective`
    for projection matrices.

    :param points: Input points [N, 3]
    :param m: Affine transform
    :param out: Optional pre-allocated output buffer [N, 3]
    :return: Transformed points (same as ``out`` if provided)
    """
    arr = _as_points(points)
    R = m.linear_block()
    t = m.array[12:15]

    if out is not None:
        _output(arr, out)
        np.matmul(arr, R.T, out=out)
        out += t
        return out
    return arr @ R.T + t


def transform_points_projective(
    points: NDArray, m: Mat4, out: NDArray[np.float32] | None = None
) -> NDArray[np.float32]:
    """Apply a Mat4 to Nx3 points and divide by w (w == 0 is treated as 1).

    :param points: Input points [N, 3]
    :param m: Any Mat4, including projections
    :param out: Optional pre-allocated output buffer [N, 3]
    :return: Transformed points
    """
    arr = _as_points(points)
    result = _output(arr, out)
    logger.debug("[transform] Projective transform of %d points", arr.shape[0])
    transform_points_projective_numba(arr, m.array, result)
    return result


def transform_directions(
    directions: NDArray, m: Mat4, out: NDArray[np.float32] | None = None
) -> NDArray[np.float32]:
    """Apply the upper 3x3 of ``m`` to Nx3 direction vectors (no translation).

    :param directions: Input directions [N, 3]
    :param m: Transform
    :param out: Optional pre-allocated output buffer [N, 3]
    :return: Transformed directions
    """
    arr = _as_points(directions, "directions")
    R = m.linear_block()
    if out is not None:
        _output(arr, out)
        np.matmul(arr, R.T, out=out)
        return out
    return arr @ R.T


def rotate_points(
    points: NDArray, q: Quat, out: NDArray[np.float32] | None = None
) -> NDArray[np.float32]:
    """Rotate Nx3 points by a unit quaternion.

    :param points: Input points [N, 3]
    :param q: Unit quaternion
    :param out: Optional pre-allocated output buffer [N, 3]
    :return: Rotated points
    """
    arr = _as_points(points)
    result = _output(arr, out)
    logger.debug("[transform] Quaternion rotation of %d points", arr.shape[0])
    rotate_points_quat_numba(arr, q.array, result)
    return result


def apply_transform_values(
    points: NDArray, values: TransformValues, out: NDArray[np.float32] | None = None
) -> NDArray[np.float32]:
    """Apply a TransformValues (scale, then rotate, then translate) to Nx3 points.

    A neutral transform copies the points (or returns ``out`` filled with them).

    :param points: Input points [N, 3]
    :param values: Transform parameters
    :param out: Optional pre-allocated output buffer [N, 3]
    :return: Transformed points
    """
    arr = _as_points(points)
    if values.is_neutral():
        result = _output(arr, out)
        result[:] = arr
        return result
    return transform_points(arr, values.to_mat4(), out=out)
