"""Fixed-size float32 vectors."""

from vecmat.vector.common import Vector
from vecmat.vector.vec2 import Vec2
from vecmat.vector.vec3 import Vec3
from vecmat.vector.vec4 import Vec4

__all__ = ["Vec2", "Vec3", "Vec4", "Vector"]
