"""Four-component float32 vector (homogeneous coordinates)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

import numpy as np

from vecmat.vector.common import Vector
from vecmat.vector.kernels import vec4_transform_mat4_numba

if TYPE_CHECKING:
    from vecmat.matrix.mat4 import Mat4


class Vec4(Vector):
    """4D vector stored as ``float32[4]``."""

    __slots__ = ()

    SIZE = 4

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0) -> None:
        self.array = np.array((x, y, z, w), dtype=np.float32)

    @classmethod
    def create(cls, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0) -> Vec4:
        return cls(x, y, z, w)

    def set(self, x: float, y: float, z: float, w: float) -> Self:
        self.array[:] = (x, y, z, w)
        return self

    @property
    def z(self) -> float:
        return float(self.array[2])

    @z.setter
    def z(self, value: float) -> None:
        self.array[2] = value

    @property
    def w(self) -> float:
        return float(self.array[3])

    @w.setter
    def w(self, value: float) -> None:
        self.array[3] = value

    def transform_mat4(self, m: Mat4, dst: Vec4 | None = None) -> Vec4:
        """Full homogeneous product ``m * self``; no perspective divide."""
        dst = self._target(dst)
        vec4_transform_mat4_numba(self.array, m.array, dst.array)
        return dst
