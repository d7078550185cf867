"""Type aliases for vecmat.

Provides unified type hints for parameters shared across modules.
"""

from collections.abc import Sequence
from typing import Literal, TypeAlias

import numpy as np

# 3D vector input given as plain numbers (axis, position, scale, ...)
Vector3Like: TypeAlias = tuple[float, float, float] | Sequence[float] | np.ndarray

# Euler rotation orders accepted by Quat.from_euler
RotationOrder: TypeAlias = Literal["xyz", "xzy", "yxz", "yzx", "zxy", "zyx"]

ROTATION_ORDERS: tuple[str, ...] = ("xyz", "xzy", "yxz", "yzx", "zxy", "zyx")
