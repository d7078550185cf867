"""Operations shared by Mat3 and Mat4."""

from __future__ import annotations

from typing import ClassVar, Self

import numpy as np
from numpy.typing import NDArray

from vecmat.base import FloatBuffer


class Matrix(FloatBuffer):
    """Square matrix stored column-major with a column stride of four floats.

    Element (row r, col c) lives at ``array[c * 4 + r]``. ``m[i]`` indexes the
    flat storage and ``m[r, c]`` indexes by row and column.
    """

    __slots__ = ()

    DIM: ClassVar[int] = 0

    @classmethod
    def _from_rows(cls, rows: tuple[float, ...]) -> Self:
        n = cls.DIM
        dst = cls._empty()
        grid = np.asarray(rows, dtype=np.float32).reshape(n, n)
        dst.array.reshape(-1, 4)[:n, :n] = grid.T
        return dst

    def to_ndarray(self) -> NDArray[np.float32]:
        """Return a ``(DIM, DIM)`` copy indexed ``[row, col]``."""
        n = self.DIM
        return self.array.reshape(-1, 4)[:n, :n].T.copy()

    def linear_block(self) -> NDArray[np.float32]:
        """Return the upper-left 3x3 block as a ``(3, 3)`` copy indexed ``[row, col]``."""
        return self.array.reshape(-1, 4)[:3, :3].T.copy()

    def __getitem__(self, index):
        if isinstance(index, tuple):
            row, col = index
            return float(self.array[col * 4 + row])
        return float(self.array[index])

    def __setitem__(self, index, value: float) -> None:
        if isinstance(index, tuple):
            row, col = index
            self.array[col * 4 + row] = value
        else:
            self.array[index] = value

    multiply_scalar = FloatBuffer.mul_scalar
    diff = FloatBuffer.subtract

    def __mul__(self, other):
        if isinstance(other, int | float | np.floating):
            return self.mul_scalar(other)
        if isinstance(other, type(self)):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, int | float | np.floating):
            return self.mul_scalar(other)
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, type(self)):
            return self.multiply(other)
        return NotImplemented

    def __repr__(self) -> str:
        rows = self.to_ndarray().tolist()
        body = ", ".join("[" + ", ".join(f"{v:g}" for v in row) + "]" for row in rows)
        return f"{type(self).__name__}({body})"
