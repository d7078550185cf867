"""Numerical tolerance configuration.

This module defines the thresholds used by the degenerate-input fallbacks
(zero-length normalize, near-identical slerp, anti-parallel rotation_to,
singular inverse) so that every kernel reads the same constants.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceSpec:
    """Specification for a single numerical threshold.

    Attributes:
        name: Threshold name (e.g., "epsilon", "quat_normalize")
        value: Threshold value
        description: Human-readable description
    """

    name: str
    value: float
    description: str = ""

    def is_within(self, a: float, b: float) -> bool:
        """Check whether two scalars differ by less than this threshold.

        :param a: First value
        :param b: Second value
        :returns: True if ``|a - b| < value``
        """
        return abs(a - b) < self.value

    def __float__(self) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"ToleranceSpec({self.name}, value={self.value})"


@dataclass(frozen=True)
class ToleranceConfig:
    """Thresholds shared by all vector, matrix and quaternion kernels.

    Note: values are stored as Python floats and passed to the numba kernels
    as plain arguments, so changing a threshold never invalidates the JIT cache.
    """

    epsilon: ToleranceSpec = ToleranceSpec(
        name="epsilon",
        value=1e-6,
        description="Default approximate-equality tolerance and zero-length floor",
    )

    quat_normalize: ToleranceSpec = ToleranceSpec(
        name="quat_normalize",
        value=1e-5,
        description="Quaternion length at or below which normalize yields identity",
    )

    rotation_to_parallel: ToleranceSpec = ToleranceSpec(
        name="rotation_to_parallel",
        value=0.999999,
        description="|dot| above which rotation_to treats vectors as (anti-)parallel",
    )

    rotation_to_axis: ToleranceSpec = ToleranceSpec(
        name="rotation_to_axis",
        value=1e-6,
        description="Squared length below which the x-axis fallback is rejected",
    )

    singular: ToleranceSpec = ToleranceSpec(
        name="singular",
        value=1e-5,
        description="|det| over the product of column lengths at or below which inverse yields identity",
    )

    def get_spec(self, name: str) -> ToleranceSpec:
        """Get tolerance spec by name.

        :param name: Tolerance name
        :return: ToleranceSpec for the threshold
        :raises AttributeError: If threshold not found
        """
        return getattr(self, name)

    def get_all_specs(self) -> dict[str, ToleranceSpec]:
        """Get all tolerance specs as a dictionary.

        :return: Dictionary mapping threshold names to specs
        """
        return {
            "epsilon": self.epsilon,
            "quat_normalize": self.quat_normalize,
            "rotation_to_parallel": self.rotation_to_parallel,
            "rotation_to_axis": self.rotation_to_axis,
            "singular": self.singular,
        }
