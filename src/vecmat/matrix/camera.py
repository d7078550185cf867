"""Projection and camera matrix builders.

Each builder fills a caller-provided Mat4 storage array (16 floats, column-major)
and returns it. All projections map the view frustum to a clip volume with x
and y in ``[-1, 1]`` and z in ``[0, 1]`` (reverse-Z variants map near to 1 and
far to 0), and assume a right-handed view space looking down ``-z``.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from vecmat.config import EPSILON


def _div(a: float, b: float) -> float:
    # IEEE-754 division: degenerate planes give inf/nan instead of raising
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(a) / np.float64(b))


def build_perspective(
    out: NDArray[np.float32], fovy: float, aspect: float, near: float, far: float
) -> NDArray[np.float32]:
    """Perspective projection with ``w' = -z``.

    ``far`` may be ``math.inf``; the matrix then takes its limiting form and
    points at or behind the camera map to infinite depth.

    :param out: Mat4 storage [16]
    :param fovy: Vertical field of view in radians
    :param aspect: Width / height
    :param near: Distance to the near plane
    :param far: Distance to the far plane (``math.inf`` allowed)
    :returns: ``out``
    """
    f = math.tan(math.pi * 0.5 - 0.5 * fovy)

    out[:] = 0.0
    out[0] = _div(f, aspect)
    out[5] = f
    out[11] = -1.0

    if math.isfinite(far):
        range_inv = _div(1.0, near - far)
        out[10] = far * range_inv
        out[14] = far * near * range_inv
    else:
        out[10] = -1.0
        out[14] = -near
    return out


def build_perspective_reverse_z(
    out: NDArray[np.float32], fovy: float, aspect: float, near: float, far: float = math.inf
) -> NDArray[np.float32]:
    """Reverse-Z perspective: depth 1 at the near plane, 0 at the far plane."""
    f = _div(1.0, math.tan(fovy * 0.5))

    out[:] = 0.0
    out[0] = _div(f, aspect)
    out[5] = f
    out[11] = -1.0

    if far == math.inf:
        out[10] = 0.0
        out[14] = near
    else:
        range_inv = _div(1.0, far - near)
        out[10] = near * range_inv
        out[14] = far * near * range_inv
    return out


def build_ortho(
    out: NDArray[np.float32],
    left: float,
    right: float,
    bottom: float,
    top: float,
    near: float,
    far: float,
) -> NDArray[np.float32]:
    """Orthographic projection. ``left == right`` gives non-finite entries."""
    out[:] = 0.0
    out[0] = _div(2.0, right - left)
    out[5] = _div(2.0, top - bottom)
    out[10] = _div(1.0, near - far)
    out[12] = _div(right + left, left - right)
    out[13] = _div(top + bottom, bottom - top)
    out[14] = _div(near, near - far)
    out[15] = 1.0
    return out


def build_frustum(
    out: NDArray[np.float32],
    left: float,
    right: float,
    bottom: float,
    top: float,
    near: float,
    far: float,
) -> NDArray[np.float32]:
    """Off-axis perspective projection from the near-plane rectangle."""
    dx = right - left
    dy = top - bottom
    dz = near - far

    out[:] = 0.0
    out[0] = _div(2.0 * near, dx)
    out[5] = _div(2.0 * near, dy)
    out[8] = _div(left + right, dx)
    out[9] = _div(top + bottom, dy)
    out[10] = _div(far, dz)
    out[11] = -1.0
    out[14] = _div(near * far, dz)
    return out


def build_frustum_reverse_z(
    out: NDArray[np.float32],
    left: float,
    right: float,
    bottom: float,
    top: float,
    near: float,
    far: float = math.inf,
) -> NDArray[np.float32]:
    """Reverse-Z variant of :func:`build_frustum`; ``far`` may be infinite."""
    dx = right - left
    dy = top - bottom

    out[:] = 0.0
    out[0] = _div(2.0 * near, dx)
    out[5] = _div(2.0 * near, dy)
    out[8] = _div(left + right, dx)
    out[9] = _div(top + bottom, dy)
    out[11] = -1.0

    if far == math.inf:
        out[10] = 0.0
        out[14] = near
    else:
        range_inv = _div(1.0, far - near)
        out[10] = near * range_inv
        out[14] = far * near * range_inv
    return out


def _normalized(v: NDArray[np.float64]) -> NDArray[np.float64]:
    n = math.sqrt(float(np.dot(v, v)))
    if n > EPSILON:
        return v / n
    return np.zeros(3, dtype=np.float64)


def _basis(
    origin: NDArray[np.float32], target: NDArray[np.float32], up: NDArray[np.float32]
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    # z points from target back to origin; x = up x z; y = z x x
    z = _normalized(origin.astype(np.float64) - target.astype(np.float64))
    x = _normalized(np.cross(up.astype(np.float64), z))
    y = _normalized(np.cross(z, x))
    return x, y, z


def build_look_at(
    out: NDArray[np.float32],
    eye: NDArray[np.float32],
    target: NDArray[np.float32],
    up: NDArray[np.float32],
) -> NDArray[np.float32]:
    """View matrix: world space to the space of a camera at ``eye`` looking at ``target``.

    Forward is ``normalize(target - eye)``, side is ``normalize(forward x up)``
    and the re-orthogonalized up is ``side x forward``. This is the inverse
    of :func:`build_camera_aim`.
    """
    x, y, z = _basis(eye, target, up)
    e = eye.astype(np.float64)

    out[0:3] = (x[0], y[0], z[0])
    out[4:7] = (x[1], y[1], z[1])
    out[8:11] = (x[2], y[2], z[2])
    out[3] = out[7] = out[11] = 0.0
    out[12] = -float(np.dot(x, e))
    out[13] = -float(np.dot(y, e))
    out[14] = -float(np.dot(z, e))
    out[15] = 1.0
    return out


def build_camera_aim(
    out: NDArray[np.float32],
    eye: NDArray[np.float32],
    target: NDArray[np.float32],
    up: NDArray[np.float32],
) -> NDArray[np.float32]:
    """Camera world matrix: places an object at ``eye`` looking down ``-z`` at ``target``."""
    x, y, z = _basis(eye, target, up)
    _write_frame(out, x, y, z, eye)
    return out


def build_aim(
    out: NDArray[np.float32],
    position: NDArray[np.float32],
    target: NDArray[np.float32],
    up: NDArray[np.float32],
) -> NDArray[np.float32]:
    """Object world matrix aiming ``+z`` at ``target``. Not the inverse of look-at."""
    x, y, z = _basis(target, position, up)
    _write_frame(out, x, y, z, position)
    return out


def _write_frame(
    out: NDArray[np.float32],
    x: NDArray[np.float64],
    y: NDArray[np.float64],
    z: NDArray[np.float64],
    position: NDArray[np.float32],
) -> None:
    out[0:3] = x
    out[4:7] = y
    out[8:11] = z
    out[3] = out[7] = out[11] = 0.0
    out[12:15] = position
    out[15] = 1.0
