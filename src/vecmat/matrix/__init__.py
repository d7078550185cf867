"""Column-major float32 matrices."""

from vecmat.matrix.common import Matrix
from vecmat.matrix.mat3 import Mat3
from vecmat.matrix.mat4 import Mat4

__all__ = ["Mat3", "Mat4", "Matrix"]
