"""Transform values and batch point transforms."""

from vecmat.transform.api import (
    apply_transform_values,
    rotate_points,
    transform_directions,
    transform_points,
    transform_points_projective,
)
from vecmat.transform.values import TransformValues

__all__ = [
    "TransformValues",
    "apply_transform_values",
    "rotate_points",
    "transform_directions",
    "transform_points",
    "transform_points_projective",
]
