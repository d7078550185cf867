"""Quaternion rotations."""

from vecmat.quat.quat import Quat

__all__ = ["Quat"]
