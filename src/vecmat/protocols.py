"""
Protocol definitions shared by the matrix types.

``Mat3`` and ``Mat4`` both store columns with a stride of four floats, so the
upper-left 3x3 linear block sits at the same flat indices (0-2, 4-6, 8-10) in
either type. Operations that only need that block (``Quat.from_mat``) accept
anything satisfying ``RotationMatrix`` instead of switching on concrete types.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class RotationMatrix(Protocol):
    """
    Protocol for matrices exposing a column-major 3x3 linear block.

    Element (row r, col c) of the block lives at ``array[c * 4 + r]``.
    """

    array: NDArray[np.float32]

    def linear_block(self) -> NDArray[np.float32]:
        """Return the 3x3 linear block as a row-major ``(3, 3)`` copy."""
        ...
