"""Unified vecmat configuration.

This module provides a top-level configuration dataclass that holds the
library-wide numerical settings as sub-attributes.
"""

from __future__ import annotations

from dataclasses import dataclass

from vecmat.config.tolerance import ToleranceConfig


@dataclass(frozen=True)
class VecmatConfig:
    """Top-level configuration.

    Provides hierarchical access to all settings:
        CONFIG.tolerance.epsilon.value
        CONFIG.tolerance.quat_normalize.value

    Attributes:
        tolerance: Numerical thresholds used by the kernels
    """

    tolerance: ToleranceConfig = ToleranceConfig()

    def get_all_specs(self) -> dict[str, dict[str, object]]:
        """Get all specs organized by section.

        :return: Nested dictionary of all specifications
        """
        return {
            "tolerance": self.tolerance.get_all_specs(),
        }


# Main singleton instance
CONFIG = VecmatConfig()

TOLERANCE_CONFIG = CONFIG.tolerance

# Library-wide approximate-equality tolerance
EPSILON: float = CONFIG.tolerance.epsilon.value
