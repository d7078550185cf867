"""Configuration module for vecmat.

Usage:
    from vecmat.config import CONFIG
    CONFIG.tolerance.epsilon.value  # 1e-6

    from vecmat.config import EPSILON
"""

from vecmat.config.config import CONFIG, EPSILON, TOLERANCE_CONFIG, VecmatConfig
from vecmat.config.tolerance import ToleranceConfig, ToleranceSpec

__all__ = [
    "CONFIG",
    "EPSILON",
    "TOLERANCE_CONFIG",
    "ToleranceConfig",
    "ToleranceSpec",
    "VecmatConfig",
]
