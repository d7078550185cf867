"""Fixed-length float32 container shared by every value type.

All vectors, matrices and quaternions wrap a 1-D ``numpy.float32`` array in
``.array``. Every mutating operation follows the same destination contract:

- ``dst=None`` allocates a new instance, fills it and returns it.
- ``dst=<instance>`` fills that instance in place and returns the same object,
  even when ``dst`` is also one of the inputs (``m.invert(dst=m)`` is legal).
- Operations read every input they need before writing ``dst``.

Component-wise operations are numpy ufuncs writing through ``out=dst.array``,
which are alias-safe for element-aligned inputs. Operations that mix elements
are implemented in the numba kernels, which stage inputs in locals first.
"""

from __future__ import annotations

from typing import ClassVar, Self

import numpy as np
from numpy.typing import NDArray

from vecmat.config import EPSILON
from vecmat.utils import format_float
from vecmat.validators import check_length


class FloatBuffer:
    """Base class for fixed-size float32 value types."""

    __slots__ = ("array",)

    SIZE: ClassVar[int] = 0

    array: NDArray[np.float32]

    @classmethod
    def _wrap(cls, array: NDArray[np.float32]) -> Self:
        obj = cls.__new__(cls)
        obj.array = array
        return obj

    @classmethod
    def _empty(cls) -> Self:
        return cls._wrap(np.zeros(cls.SIZE, dtype=np.float32))

    @classmethod
    def _target(cls, dst: Self | None) -> Self:
        return cls._empty() if dst is None else dst

    @classmethod
    def from_float_array(cls, values, dst: Self | None = None) -> Self:
        """Create an instance from a flat float sequence in storage order.

        :param values: Sequence or 1-D array holding exactly ``SIZE`` floats
        :param dst: Optional destination
        :returns: Filled instance
        :raises ValueError: If values is not 1-D or has the wrong length
        """
        arr = np.asarray(values, dtype=np.float32)
        if arr.ndim != 1:
            raise ValueError(f"values must be a 1-D sequence, got shape {arr.shape}")
        check_length(arr, cls.SIZE, "values")
        dst = cls._target(dst)
        dst.array[:] = arr
        return dst

    def to_float_array(self) -> NDArray[np.float32]:
        """Return a copy of the flat storage, ready for upload."""
        return self.array.copy()

    def copy(self, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        dst.array[:] = self.array
        return dst

    clone = copy

    # Component-wise arithmetic

    def negate(self, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        np.negative(self.array, out=dst.array)
        return dst

    def add(self, other: Self, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        np.add(self.array, other.array, out=dst.array)
        return dst

    def subtract(self, other: Self, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        np.subtract(self.array, other.array, out=dst.array)
        return dst

    sub = subtract

    def mul_scalar(self, k: float, dst: Self | None = None) -> Self:
        dst = self._target(dst)
        np.multiply(self.array, np.float32(k), out=dst.array)
        return dst

    def div_scalar(self, k: float, dst: Self | None = None) -> Self:
        """Divide every component by ``k``. Division by zero follows IEEE-754."""
        dst = self._target(dst)
        with np.errstate(divide="ignore", invalid="ignore"):
            np.divide(self.array, np.float32(k), out=dst.array)
        return dst

    def equals_approximately(self, other: Self, tolerance: float = EPSILON) -> bool:
        """Check that every component differs from ``other`` by less than ``tolerance``."""
        return bool(np.all(np.abs(self.array - other.array) < tolerance))

    # Python protocol

    def __len__(self) -> int:
        return self.SIZE

    def __getitem__(self, index: int) -> float:
        return float(self.array[index])

    def __setitem__(self, index: int, value: float) -> None:
        self.array[index] = value

    def __iter__(self):
        return iter(self.array.tolist())

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        if dtype is None:
            return self.array.copy() if copy else self.array
        return self.array.astype(dtype)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self.array, other.array))

    __hash__ = None

    def __neg__(self) -> Self:
        return self.negate()

    def __add__(self, other: Self) -> Self:
        if type(other) is not type(self):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Self) -> Self:
        if type(other) is not type(self):
            return NotImplemented
        return self.subtract(other)

    def __truediv__(self, k: float) -> Self:
        return self.div_scalar(k)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(format_float(v) for v in self.array.tolist())})"
